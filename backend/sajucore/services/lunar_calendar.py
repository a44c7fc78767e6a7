"""
달력 변환기
- 보정 시각 → 연속 일수(JDN), 입춘 보정 연도, 절기 월 서수, 시지 서수
- 지원 연도 범위 밖은 CalendarRangeError (이 모듈의 유일한 예외)
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from sajucore.exceptions import CalendarRangeError, InvalidCalendarInput
from sajucore.models.domain import NaiveMoment
from sajucore.services.solar_terms import SOLAR_TERMS_ENTRY, TableSolarTermSource

logger = logging.getLogger(__name__)

# date.toordinal() → 율리우스 일수(JDN) 변환 상수 (0001-01-01 = 1 ↔ JDN 1721426)
JDN_ORDINAL_OFFSET = 1721425

DEFAULT_MIN_YEAR = 1900
DEFAULT_MAX_YEAR = 2100

# 시간 → 시지 서수 (2시간 단위, 자시는 23:00 시작)
HOUR_TO_BRANCH_ORDINAL = {
    23: 0, 0: 0,     # 자
    1: 1, 2: 1,      # 축
    3: 2, 4: 2,      # 인
    5: 3, 6: 3,      # 묘
    7: 4, 8: 4,      # 진
    9: 5, 10: 5,     # 사
    11: 6, 12: 6,    # 오
    13: 7, 14: 7,    # 미
    15: 8, 16: 8,    # 신
    17: 9, 18: 9,    # 유
    19: 10, 20: 10,  # 술
    21: 11, 22: 11,  # 해
}


@dataclass(frozen=True)
class SolarCalendarInfo:
    """보정 시각의 절기력 속성"""
    day_count: int
    solar_year: int
    month_ordinal: int
    term_name: str
    is_boundary: bool
    is_precise: bool


def _key(moment: NaiveMoment) -> Tuple[int, int, int, int, int]:
    return (moment.year, moment.month, moment.day, moment.hour, moment.minute)


class LunarCalendarConverter:
    """
    절기력 변환기

    절입 표(term_source)는 주입 가능 - 기본값은 고정 표
    """

    def __init__(
        self,
        term_source=None,
        min_year: int = DEFAULT_MIN_YEAR,
        max_year: int = DEFAULT_MAX_YEAR,
    ):
        self.term_source = term_source or TableSolarTermSource()
        self.min_year = min_year
        self.max_year = max_year

    def _check_range(self, moment: NaiveMoment) -> None:
        if not self.min_year <= moment.year <= self.max_year:
            raise CalendarRangeError(moment.year, self.min_year, self.max_year)

    # ===== 연속 일수 =====
    def to_continuous_day_count(self, moment: NaiveMoment) -> int:
        """율리우스 일수 (JDN, 정오 기준 정수)"""
        self._check_range(moment)
        return date(moment.year, moment.month, moment.day).toordinal() + JDN_ORDINAL_OFFSET

    # ===== 입춘 보정 연도 =====
    def solar_year(self, moment: NaiveMoment) -> int:
        """입춘 전이면 year - 1"""
        self._check_range(moment)
        ipchun = self.term_source.cutover(moment.year, 0)
        if _key(moment) < ipchun:
            return moment.year - 1
        return moment.year

    # ===== 월 서수 =====
    def month_branch_ordinal(self, moment: NaiveMoment) -> int:
        """
        절기 기준 월 서수 (0=인월 ... 11=축월)

        입춘 보정 연도의 절입 시각 중 moment 이전인 가장 늦은 절
        """
        solar_year = self.solar_year(moment)
        key = _key(moment)

        for ordinal in range(11, -1, -1):
            if self.term_source.cutover(solar_year, ordinal) <= key:
                logger.debug(f"[LunarCalendar] {moment} → {SOLAR_TERMS_ENTRY[ordinal].name} 구간")
                return ordinal

        # solar_year 정의상 입춘 이후이므로 도달하지 않음
        return 0

    # ===== 시지 서수 =====
    @staticmethod
    def hour_branch_ordinal(hour: int) -> int:
        if hour not in HOUR_TO_BRANCH_ORDINAL:
            raise InvalidCalendarInput(f"시 범위 오류: {hour}")
        return HOUR_TO_BRANCH_ORDINAL[hour]

    # ===== 경계 판정 =====
    def is_near_boundary(self, moment: NaiveMoment, threshold_hours: int = 48) -> bool:
        """절입 ±threshold_hours 이내 여부"""
        solar_year = self.solar_year(moment)
        birth_dt = datetime(*moment.fields())

        candidates = [self.term_source.cutover(solar_year, o) for o in range(12)]
        candidates.append(self.term_source.cutover(solar_year + 1, 0))

        for term in candidates:
            diff = abs((birth_dt - datetime(*term)).total_seconds())
            if diff <= threshold_hours * 3600:
                return True
        return False

    def describe(self, moment: NaiveMoment, threshold_hours: Optional[int] = 48) -> SolarCalendarInfo:
        solar_year = self.solar_year(moment)
        ordinal = self.month_branch_ordinal(moment)
        return SolarCalendarInfo(
            day_count=self.to_continuous_day_count(moment),
            solar_year=solar_year,
            month_ordinal=ordinal,
            term_name=SOLAR_TERMS_ENTRY[ordinal].name,
            is_boundary=self.is_near_boundary(moment, threshold_hours) if threshold_hours else False,
            is_precise=self.term_source.is_precise(solar_year),
        )
