"""
사주 4기둥 계산기
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
출생지 보정 → 절기력 변환 → 년/월/일/시주
- 연주: 입춘 보정 연도의 세차
- 월주: 절기 월 서수 + 연두법
- 일주: JDN 기반 일진
- 시주: 시지 서수 + 시두법
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sajucore.models.domain import FourPillars, NaiveMoment, Pillar
from sajucore.services.context import EngineContext, get_default_context
from sajucore.services.ganji import HIDDEN_STEMS, SexagenaryCycle, ganji_name, twelve_fortune
from sajucore.services.time_adjuster import LocationTimeAdjuster

logger = logging.getLogger(__name__)

MALE_TOKENS = ("male", "m", "남", "남성", "男", "男性")


@dataclass(frozen=True)
class MajorLuck:
    """대운 (월주 기준 10년 단위 간지)"""
    direction: str                  # forward | backward
    pillars: Tuple[Pillar, ...]


@dataclass(frozen=True)
class PillarDetail:
    """기둥별 지장간 + 십이운성"""
    hidden_stems: Tuple[int, ...]   # 본기 먼저
    twelve_fortune: str             # 일간 기준


def ganji_summary(four_pillars: FourPillars) -> str:
    """예: '戊午 丁巳 戊寅 丁巳' (년 월 일 시)"""
    return " ".join(ganji_name(p) for _, p in four_pillars.pillars())


class FourPillarsCalculator:
    """
    사주 계산기 (상태 없음)

    같은 입력 → 항상 같은 FourPillars
    """

    def __init__(self, context: Optional[EngineContext] = None):
        self.context = context or get_default_context()

    def compute(self, moment: NaiveMoment, location_name: str) -> FourPillars:
        locations = self.context.locations
        converter = self.context.converter

        # 1. 출생지 보정
        location = locations.resolve(location_name)
        corrected = LocationTimeAdjuster.adjust(moment, location.minutes)

        # 2. 절기력 변환
        day_count = converter.to_continuous_day_count(corrected)
        solar_year = converter.solar_year(corrected)
        month_ordinal = converter.month_branch_ordinal(corrected)
        hour_ordinal = converter.hour_branch_ordinal(corrected.hour)

        # 3. 연주
        year_pillar = SexagenaryCycle.pillar_from_index(SexagenaryCycle.year_pillar_index(solar_year))

        # 4. 월주 (연두법)
        month_pillar = Pillar(
            stem=SexagenaryCycle.month_stem(year_pillar.stem, month_ordinal),
            branch=SexagenaryCycle.month_branch(month_ordinal),
        )

        # 5. 일주
        day_pillar = SexagenaryCycle.pillar_from_index(SexagenaryCycle.day_pillar_index(day_count))

        # 6. 시주 (시두법)
        hour_pillar = Pillar(
            stem=SexagenaryCycle.hour_stem(day_pillar.stem, hour_ordinal),
            branch=hour_ordinal,
        )

        result = FourPillars(
            year=year_pillar,
            month=month_pillar,
            day=day_pillar,
            hour=hour_pillar,
            source_moment=corrected,
            location=location,
            location_resolved=locations.is_known(location_name),
            solar_year=solar_year,
        )
        logger.info(f"[FourPillars] {moment} @{location.name}({location.minutes:+d}) → {ganji_summary(result)}")
        return result

    def compute_from_input(self, birth) -> FourPillars:
        """BirthInput (pydantic) → FourPillars"""
        return self.compute(birth.to_moment(), birth.location)

    @staticmethod
    def major_luck(four_pillars: FourPillars, gender: str, count: int = 10) -> MajorLuck:
        """
        대운 간지 리스트
        - 양남음녀 순행, 음남양녀 역행
        - 월주 다음/이전 간지부터
        """
        is_yang_year = four_pillars.year.stem % 2 == 0
        # Gender(str, Enum)은 .value로 비교
        token = getattr(gender, "value", gender)
        is_male = str(token).strip().lower() in MALE_TOKENS

        if is_male == is_yang_year:
            direction = "forward"
        else:
            direction = "backward"

        pillars = SexagenaryCycle.next_pillars(four_pillars.month.index, direction, count)
        logger.debug(f"[MajorLuck] direction={direction} | first={ganji_name(pillars[0]) if pillars else None}")
        return MajorLuck(direction=direction, pillars=tuple(pillars))

    @staticmethod
    def pillar_details(four_pillars: FourPillars) -> Dict[str, PillarDetail]:
        """position → 지장간 / 십이운성 (일간 기준)"""
        day_stem = four_pillars.day.stem
        return {
            position: PillarDetail(
                hidden_stems=HIDDEN_STEMS[pillar.branch],
                twelve_fortune=twelve_fortune(day_stem, pillar.branch),
            )
            for position, pillar in four_pillars.pillars()
        }
