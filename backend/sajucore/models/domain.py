"""
엔진 내부 값 타입 (불변)
- NaiveMoment / CorrectedMoment: 타임존 없는 벽시계 시각
- Pillar / FourPillars: 간지 4기둥
- ElementProfile / CompatibilityResult: 분석 결과
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from sajucore.exceptions import InvalidCalendarInput


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 양력 (proleptic Gregorian)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """4로 나누어지고, 100은 400으로 나누어질 때만 윤년"""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


class Element(str, Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


class YinYang(str, Enum):
    YANG = "yang"
    YIN = "yin"


POSITIONS = ("year", "month", "day", "hour")


@dataclass(frozen=True)
class NaiveMoment:
    """입력 벽시계 시각 (타임존 의미 없음)"""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidCalendarInput(f"월 범위 오류: {self.month}")
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise InvalidCalendarInput(
                f"{self.year}-{self.month:02d}에 존재하지 않는 일: {self.day}"
            )
        if not 0 <= self.hour <= 23:
            raise InvalidCalendarInput(f"시 범위 오류: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise InvalidCalendarInput(f"분 범위 오류: {self.minute}")
        if not 0 <= self.second <= 59:
            raise InvalidCalendarInput(f"초 범위 오류: {self.second}")

    def fields(self) -> Tuple[int, int, int, int, int, int]:
        return (self.year, self.month, self.day, self.hour, self.minute, self.second)

    def __str__(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )


@dataclass(frozen=True)
class CorrectedMoment(NaiveMoment):
    """출생지 보정이 끝난 시각 (모든 필드가 정상 범위)"""
    offset_minutes: int = 0


@dataclass(frozen=True)
class LocationOffset:
    """출생지별 진태양시 보정값 (분)"""
    name: str
    region_group: str
    minutes: int


@dataclass(frozen=True)
class Pillar:
    """기둥 1개 (천간 인덱스 0-9, 지지 인덱스 0-11)"""
    stem: int
    branch: int

    def __post_init__(self):
        if not 0 <= self.stem <= 9 or not 0 <= self.branch <= 11:
            raise ValueError(f"간지 인덱스 범위 오류: stem={self.stem}, branch={self.branch}")
        # 양간은 양지, 음간은 음지와만 결합
        if self.stem % 2 != self.branch % 2:
            raise ValueError(f"음양이 맞지 않는 간지 조합: stem={self.stem}, branch={self.branch}")

    @property
    def index(self) -> int:
        """60갑자 인덱스 (갑자=0 ... 계해=59)"""
        return (6 * self.stem - 5 * self.branch) % 60


@dataclass(frozen=True)
class FourPillars:
    """사주 원국 (년/월/일/시)"""
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar
    source_moment: CorrectedMoment
    location: Optional[LocationOffset] = None
    location_resolved: bool = True
    solar_year: Optional[int] = None

    def pillars(self) -> Iterator[Tuple[str, Pillar]]:
        for position in POSITIONS:
            yield position, getattr(self, position)

    @property
    def day_master(self) -> int:
        """일간 (천간 인덱스)"""
        return self.day.stem


@dataclass(frozen=True)
class TenGod:
    """십성 (일간 기준)"""
    position: str           # year_stem, month_branch ...
    name: str               # 비견, 겁재, ...
    element: Element


@dataclass(frozen=True)
class CharacterType:
    """거친 성향 분류"""
    balance: str                    # balanced | leaning | concentrated
    traits: Tuple[str, ...]


@dataclass(frozen=True)
class ElementProfile:
    """오행 / 음양 분포 (8글자 기준)"""
    wood: int
    fire: int
    earth: int
    metal: int
    water: int
    yin: int
    yang: int
    main_element: Element
    secondary_element: Element
    day_master_yin_yang: YinYang
    dominant_elements: Tuple[Element, ...] = ()
    missing_elements: Tuple[Element, ...] = ()
    is_strong_self: bool = False
    character: Optional[CharacterType] = None
    ten_gods: Tuple[TenGod, ...] = ()

    def counts(self) -> Dict[Element, int]:
        return {
            Element.WOOD: self.wood,
            Element.FIRE: self.fire,
            Element.EARTH: self.earth,
            Element.METAL: self.metal,
            Element.WATER: self.water,
        }

    def ten_gods_count(self) -> Dict[str, int]:
        result: Dict[str, int] = {}
        for tg in self.ten_gods:
            result[tg.name] = result.get(tg.name, 0) + 1
        return result


@dataclass(frozen=True)
class CompatibilityResult:
    """궁합 점수 (0~100) + 기둥별 기여도"""
    score: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    relations: Dict[str, str] = field(default_factory=dict)
