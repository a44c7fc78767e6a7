"""
Pydantic 스키마 정의
엔진 입력/출력 경계 모델 (도메인 값 ↔ 직렬화 가능한 뷰)
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sajucore.models.domain import (
    CompatibilityResult,
    ElementProfile,
    FourPillars,
    LocationOffset,
    NaiveMoment,
    Pillar,
)
from sajucore.services.ganji import (
    CHEONGAN,
    CHEONGAN_HANJA,
    GAN_TO_ELEMENT,
    HIDDEN_STEMS,
    JI_TO_ELEMENT,
    JIJI,
    JIJI_HANJA,
    ganji_name,
    twelve_fortune,
)
from sajucore.services.locations import OVERSEAS


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


# ============ 입력 ============

class BirthInput(BaseModel):
    """출생 정보 입력 (현지 표준시 기준)"""
    birth_date: date = Field(..., description="출생 일자 (양력)")
    birth_hour: float = Field(..., ge=0, lt=24, description="출생 시각 (소수 허용, 10.5 = 10시 30분)")
    birth_second: int = Field(0, ge=0, le=59, description="출생 초")
    location: str = Field(OVERSEAS, description="출생지 (도도부현 이름, 해외는 海外)")
    gender: Optional[Gender] = Field(None, description="성별 (대운 방향용)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "birth_date": "1978-05-16",
                "birth_hour": 11.5,
                "birth_second": 0,
                "location": "東京都",
                "gender": "male",
            }
        }
    )

    def to_moment(self) -> NaiveMoment:
        """소수 시각 → 시/분 (분은 버림)"""
        # 부동소수 오차 제거 후 버림 (10 + 1/60 → 10:01)
        total_minutes = min(int(round(self.birth_hour * 3600, 6)) // 60, 24 * 60 - 1)
        hour, minute = divmod(total_minutes, 60)
        return NaiveMoment(
            year=self.birth_date.year,
            month=self.birth_date.month,
            day=self.birth_date.day,
            hour=hour,
            minute=minute,
            second=self.birth_second,
        )


# ============ 출력 ============

class PillarOut(BaseModel):
    """사주 기둥"""
    stem: int = Field(..., description="천간 인덱스 (0-9)")
    branch: int = Field(..., description="지지 인덱스 (0-11)")
    index: int = Field(..., description="60갑자 인덱스 (0-59)")
    ganji: str = Field(..., description="간지 한자 (예: 甲子)")
    stem_name: str = Field(..., description="천간 (한자)")
    branch_name: str = Field(..., description="지지 (한자)")
    stem_ko: str = Field(..., description="천간 (한글)")
    branch_ko: str = Field(..., description="지지 (한글)")
    stem_element: str
    branch_element: str
    hidden_stems: List[str] = Field(default_factory=list, description="지장간 (본기 먼저)")
    twelve_fortune: Optional[str] = Field(None, description="십이운성 (일간 기준)")

    @classmethod
    def from_domain(cls, pillar: Pillar, day_stem: Optional[int] = None) -> "PillarOut":
        return cls(
            stem=pillar.stem,
            branch=pillar.branch,
            index=pillar.index,
            ganji=ganji_name(pillar),
            stem_name=CHEONGAN_HANJA[pillar.stem],
            branch_name=JIJI_HANJA[pillar.branch],
            stem_ko=CHEONGAN[pillar.stem],
            branch_ko=JIJI[pillar.branch],
            stem_element=GAN_TO_ELEMENT[pillar.stem].value,
            branch_element=JI_TO_ELEMENT[pillar.branch].value,
            hidden_stems=[CHEONGAN_HANJA[s] for s in HIDDEN_STEMS[pillar.branch]],
            twelve_fortune=twelve_fortune(day_stem, pillar.branch) if day_stem is not None else None,
        )


class FourPillarsOut(BaseModel):
    """사주 원국"""
    year: PillarOut
    month: PillarOut
    day: PillarOut
    hour: PillarOut
    corrected_moment: str = Field(..., description="보정 후 시각")
    offset_minutes: int = Field(..., description="적용된 출생지 보정 (분)")
    location: Optional[str] = None
    location_resolved: bool = True
    solar_year: Optional[int] = Field(None, description="입춘 기준 연도")

    @classmethod
    def from_domain(cls, four_pillars: FourPillars) -> "FourPillarsOut":
        moment = four_pillars.source_moment
        day_stem = four_pillars.day.stem
        return cls(
            year=PillarOut.from_domain(four_pillars.year, day_stem),
            month=PillarOut.from_domain(four_pillars.month, day_stem),
            day=PillarOut.from_domain(four_pillars.day, day_stem),
            hour=PillarOut.from_domain(four_pillars.hour, day_stem),
            corrected_moment=str(moment),
            offset_minutes=moment.offset_minutes,
            location=four_pillars.location.name if four_pillars.location else None,
            location_resolved=four_pillars.location_resolved,
            solar_year=four_pillars.solar_year,
        )


class ElementProfileOut(BaseModel):
    """오행 / 음양 분포"""
    counts: Dict[str, int]
    yin: int
    yang: int
    main_element: str
    secondary_element: str
    day_master_yin_yang: str
    dominant_elements: List[str] = Field(default_factory=list)
    missing_elements: List[str] = Field(default_factory=list)
    is_strong_self: bool = False
    balance: Optional[str] = None
    traits: List[str] = Field(default_factory=list)
    ten_gods_count: Dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, profile: ElementProfile) -> "ElementProfileOut":
        return cls(
            counts={e.value: c for e, c in profile.counts().items()},
            yin=profile.yin,
            yang=profile.yang,
            main_element=profile.main_element.value,
            secondary_element=profile.secondary_element.value,
            day_master_yin_yang=profile.day_master_yin_yang.value,
            dominant_elements=[e.value for e in profile.dominant_elements],
            missing_elements=[e.value for e in profile.missing_elements],
            is_strong_self=profile.is_strong_self,
            balance=profile.character.balance if profile.character else None,
            traits=list(profile.character.traits) if profile.character else [],
            ten_gods_count=profile.ten_gods_count(),
        )


class CompatibilityOut(BaseModel):
    """궁합 결과"""
    score: float = Field(..., ge=0, le=100)
    breakdown: Dict[str, float] = Field(default_factory=dict)
    relations: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, result: CompatibilityResult) -> "CompatibilityOut":
        return cls(score=result.score, breakdown=dict(result.breakdown), relations=dict(result.relations))


class LocationOut(BaseModel):
    """출생지 목록 항목"""
    name: str
    region_group: str
    minutes: int

    @classmethod
    def from_domain(cls, location: LocationOffset) -> "LocationOut":
        return cls(name=location.name, region_group=location.region_group, minutes=location.minutes)
