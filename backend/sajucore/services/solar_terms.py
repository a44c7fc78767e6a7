"""
24절기 중 12절(節) 절입 데이터
- 월주 계산의 핵심: 어느 절기 구간인지 판단
- 입춘 기준 연주 보정
- 절입 시각은 UTC+9 벽시계 기준 (년, 월, 일, 시, 분)
"""
import math
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Tuple

import ephem

logger = logging.getLogger(__name__)

Cutover = Tuple[int, int, int, int, int]


@dataclass(frozen=True)
class SolarTermInfo:
    """절기 정보"""
    name: str            # 절기 이름 (한자)
    name_ko: str         # 절기 이름 (한글)
    month_ordinal: int   # 월 서수 (0=인월, 1=묘월, ..., 11=축월)
    longitude: int       # 태양 황경 (도)
    approx_month: int    # 대략적인 양력 월
    approx_day: int      # 대략적인 양력 일


# 월주는 "절"만 사용 (입춘, 경칩, 청명, 입하, 망종, 소서, 입추, 백로, 한로, 입동, 대설, 소한)
SOLAR_TERMS_ENTRY: Tuple[SolarTermInfo, ...] = (
    SolarTermInfo("立春", "입춘", 0, 315, 2, 4),    # 인월 시작
    SolarTermInfo("驚蟄", "경칩", 1, 345, 3, 6),    # 묘월 시작
    SolarTermInfo("清明", "청명", 2, 15, 4, 5),     # 진월 시작
    SolarTermInfo("立夏", "입하", 3, 45, 5, 6),     # 사월 시작
    SolarTermInfo("芒種", "망종", 4, 75, 6, 6),     # 오월 시작
    SolarTermInfo("小暑", "소서", 5, 105, 7, 7),    # 미월 시작
    SolarTermInfo("立秋", "입추", 6, 135, 8, 8),    # 신월 시작
    SolarTermInfo("白露", "백로", 7, 165, 9, 8),    # 유월 시작
    SolarTermInfo("寒露", "한로", 8, 195, 10, 8),   # 술월 시작
    SolarTermInfo("立冬", "입동", 9, 225, 11, 7),   # 해월 시작
    SolarTermInfo("大雪", "대설", 10, 255, 12, 7),  # 자월 시작
    SolarTermInfo("小寒", "소한", 11, 285, 1, 6),   # 축월 시작 (다음 해 1월)
)

# 정밀 절입 시각 (UTC+9)
# 키 = 입춘 기준 연도, 마지막 항목(소한)은 다음 해 1월
SOLAR_TERMS_PRECISE: Dict[int, Tuple[Cutover, ...]] = {
    1978: (
        (1978, 2, 4, 7, 27),    # 입춘
        (1978, 3, 6, 1, 23),    # 경칩
        (1978, 4, 5, 5, 59),    # 청명
        (1978, 5, 5, 23, 8),    # 입하
        (1978, 6, 6, 3, 10),    # 망종
        (1978, 7, 7, 13, 23),   # 소서
        (1978, 8, 7, 22, 55),   # 입추
        (1978, 9, 8, 1, 38),    # 백로
        (1978, 10, 8, 16, 15),  # 한로
        (1978, 11, 7, 20, 24),  # 입동
        (1978, 12, 7, 13, 17),  # 대설
        (1979, 1, 6, 0, 32),    # 소한
    ),
    1990: (
        (1990, 2, 4, 10, 15),
        (1990, 3, 6, 4, 11),
        (1990, 4, 5, 8, 43),
        (1990, 5, 6, 1, 44),
        (1990, 6, 6, 5, 47),
        (1990, 7, 7, 16, 8),
        (1990, 8, 8, 1, 55),
        (1990, 9, 8, 4, 54),
        (1990, 10, 8, 19, 36),
        (1990, 11, 7, 23, 52),
        (1990, 12, 7, 16, 47),
        (1991, 1, 6, 3, 56),
    ),
    1996: (
        (1996, 2, 4, 15, 8),
        (1996, 3, 5, 9, 2),
        (1996, 4, 4, 13, 43),
        (1996, 5, 5, 6, 53),
        (1996, 6, 5, 10, 54),
        (1996, 7, 6, 21, 7),
        (1996, 8, 7, 6, 54),
        (1996, 9, 7, 9, 55),
        (1996, 10, 8, 0, 45),
        (1996, 11, 7, 4, 59),
        (1996, 12, 6, 21, 55),
        (1997, 1, 5, 9, 8),
    ),
    2000: (
        (2000, 2, 4, 20, 14),
        (2000, 3, 5, 14, 7),
        (2000, 4, 4, 18, 32),
        (2000, 5, 5, 11, 31),
        (2000, 6, 5, 15, 29),
        (2000, 7, 7, 1, 41),
        (2000, 8, 7, 11, 29),
        (2000, 9, 7, 14, 27),
        (2000, 10, 8, 5, 12),
        (2000, 11, 7, 9, 24),
        (2000, 12, 7, 2, 14),
        (2001, 1, 5, 13, 21),
    ),
    2024: (
        (2024, 2, 4, 17, 27),
        (2024, 3, 5, 11, 23),
        (2024, 4, 4, 16, 2),
        (2024, 5, 5, 9, 10),
        (2024, 6, 5, 13, 10),
        (2024, 7, 6, 23, 20),
        (2024, 8, 7, 9, 9),
        (2024, 9, 7, 12, 11),
        (2024, 10, 8, 3, 0),
        (2024, 11, 7, 7, 20),
        (2024, 12, 7, 0, 17),
        (2025, 1, 5, 11, 33),
    ),
    2025: (
        (2025, 2, 3, 23, 10),
        (2025, 3, 5, 17, 7),
        (2025, 4, 4, 21, 48),
        (2025, 5, 5, 14, 57),
        (2025, 6, 5, 18, 56),
        (2025, 7, 7, 5, 5),
        (2025, 8, 7, 14, 51),
        (2025, 9, 7, 17, 52),
        (2025, 10, 8, 8, 41),
        (2025, 11, 7, 13, 4),
        (2025, 12, 7, 6, 5),
        (2026, 1, 5, 17, 23),
    ),
    2026: (
        (2026, 2, 4, 4, 52),
        (2026, 3, 5, 22, 59),
        (2026, 4, 5, 3, 39),
        (2026, 5, 5, 20, 49),
        (2026, 6, 6, 0, 48),
        (2026, 7, 7, 10, 57),
        (2026, 8, 7, 20, 42),
        (2026, 9, 7, 23, 41),
        (2026, 10, 8, 14, 29),
        (2026, 11, 7, 18, 52),
        (2026, 12, 7, 11, 52),
        (2027, 1, 5, 23, 10),
    ),
}


class TableSolarTermSource:
    """
    고정 절입 표
    - 정밀 데이터가 있는 연도: 분 단위 절입 시각
    - 그 외: 근사 절입일 00:00
    """
    name = "table"

    def cutover(self, solar_year: int, ordinal: int) -> Cutover:
        precise = SOLAR_TERMS_PRECISE.get(solar_year)
        if precise is not None:
            return precise[ordinal]

        info = SOLAR_TERMS_ENTRY[ordinal]
        year = solar_year + 1 if info.approx_month == 1 else solar_year
        return (year, info.approx_month, info.approx_day, 0, 0)

    def is_precise(self, solar_year: int) -> bool:
        return solar_year in SOLAR_TERMS_PRECISE


# 태양 평균 이동 속도 (도/일)
MEAN_SOLAR_MOTION = 360.0 / 365.2422
TERM_TZ_HOURS = 9


class EphemSolarTermSource:
    """
    ephem 천문 계산 절입 시각
    - 태양 시황경(of-date)이 315 + 30k 도를 지나는 순간
    - UTC+9 벽시계로 환산, 분 미만 버림
    """
    name = "ephem"
    max_iterations = 20
    tolerance_deg = 1e-6

    def _solar_longitude(self, dt_utc: datetime) -> float:
        when = ephem.Date(dt_utc)
        sun = ephem.Sun()
        sun.compute(when, epoch=when)
        ecliptic = ephem.Ecliptic(sun, epoch=when)
        return math.degrees(ecliptic.lon)

    def cutover(self, solar_year: int, ordinal: int) -> Cutover:
        info = SOLAR_TERMS_ENTRY[ordinal]
        year = solar_year + 1 if info.approx_month == 1 else solar_year

        guess = datetime(year, info.approx_month, info.approx_day) - timedelta(hours=TERM_TZ_HOURS)
        for _ in range(self.max_iterations):
            lon = self._solar_longitude(guess)
            diff = (info.longitude - lon + 180) % 360 - 180
            if abs(diff) < self.tolerance_deg:
                break
            guess += timedelta(days=diff / MEAN_SOLAR_MOTION)

        local = guess + timedelta(hours=TERM_TZ_HOURS)
        logger.debug(f"[SolarTerms] ephem {info.name} {solar_year} → {local:%Y-%m-%d %H:%M}")
        return (local.year, local.month, local.day, local.hour, local.minute)

    def is_precise(self, solar_year: int) -> bool:
        return True


def build_solar_term_source(name: str):
    """설정값(table | ephem) → 절기 소스"""
    if name == "table":
        return TableSolarTermSource()
    if name == "ephem":
        return EphemSolarTermSource()
    raise ValueError(f"알 수 없는 절기 소스: {name}")


def term_name(ordinal: int) -> str:
    return SOLAR_TERMS_ENTRY[ordinal].name
