"""
절기력 변환 테스트
- 입춘 연도 보정, 절입 월 구간, 시지 서수, 지원 범위
"""
from datetime import date, datetime, timedelta

import pytest

from sajucore.exceptions import CalendarRangeError, InvalidCalendarInput
from sajucore.models.domain import NaiveMoment
from sajucore.services.lunar_calendar import HOUR_TO_BRANCH_ORDINAL, LunarCalendarConverter
from sajucore.services.solar_terms import (
    SOLAR_TERMS_ENTRY,
    SOLAR_TERMS_PRECISE,
    EphemSolarTermSource,
    TableSolarTermSource,
    build_solar_term_source,
    term_name,
)


@pytest.fixture
def converter():
    return LunarCalendarConverter(TableSolarTermSource())


class TestRange:
    """지원 연도 범위"""

    @pytest.mark.parametrize("year", [1899, 2101])
    def test_out_of_range(self, converter, year):
        with pytest.raises(CalendarRangeError) as exc_info:
            converter.to_continuous_day_count(NaiveMoment(year, 6, 1))
        assert exc_info.value.year == year
        assert isinstance(exc_info.value, InvalidCalendarInput)

    @pytest.mark.parametrize("year", [1900, 2100])
    def test_edges_supported(self, converter, year):
        converter.to_continuous_day_count(NaiveMoment(year, 6, 1))
        converter.month_branch_ordinal(NaiveMoment(year, 6, 1))

    def test_custom_range(self):
        narrow = LunarCalendarConverter(min_year=1950, max_year=2050)
        with pytest.raises(CalendarRangeError):
            narrow.solar_year(NaiveMoment(1949, 12, 31))


class TestDayCount:
    """연속 일수"""

    def test_j2000(self, converter):
        assert converter.to_continuous_day_count(NaiveMoment(2000, 1, 1)) == 2451545

    def test_strictly_monotonic_across_month_and_year(self, converter):
        days = [
            converter.to_continuous_day_count(NaiveMoment(y, m, d))
            for y, m, d in [(2023, 12, 31), (2024, 1, 1), (2024, 2, 28), (2024, 2, 29), (2024, 3, 1)]
        ]
        assert all(a < b for a, b in zip(days, days[1:]))
        assert days[1] - days[0] == 1
        assert days[2] - days[1] == 58
        assert days[3:] == [days[2] + 1, days[2] + 2]

    def test_consecutive_over_full_year(self, converter):
        start = date(2023, 12, 30)
        days = [
            converter.to_continuous_day_count(NaiveMoment(d.year, d.month, d.day))
            for d in (start + timedelta(days=i) for i in range(400))
        ]
        assert days == list(range(days[0], days[0] + 400))

    def test_time_of_day_ignored(self, converter):
        a = converter.to_continuous_day_count(NaiveMoment(2024, 5, 5, 0, 0))
        b = converter.to_continuous_day_count(NaiveMoment(2024, 5, 5, 23, 59))
        assert a == b


class TestSolarYear:
    """입춘 기준 연도"""

    @pytest.mark.parametrize("moment,expected", [
        (NaiveMoment(2025, 2, 3, 12, 0), 2024),
        (NaiveMoment(2025, 2, 3, 23, 9), 2024),
        (NaiveMoment(2025, 2, 3, 23, 10), 2025),
        (NaiveMoment(2025, 2, 5, 12, 0), 2025),
        (NaiveMoment(2024, 2, 4, 17, 26), 2023),
        (NaiveMoment(2024, 2, 4, 17, 27), 2024),
        (NaiveMoment(2025, 1, 15), 2024),
    ])
    def test_precise_years(self, converter, moment, expected):
        assert converter.solar_year(moment) == expected

    def test_approximate_year_uses_day_start(self, converter):
        """정밀 데이터 없는 연도: 2월 4일 00:00 기준"""
        assert converter.solar_year(NaiveMoment(1985, 2, 3, 23, 59)) == 1984
        assert converter.solar_year(NaiveMoment(1985, 2, 4, 0, 0)) == 1985


class TestMonthOrdinal:
    """절기 월 서수 (0=인월 ... 11=축월)"""

    @pytest.mark.parametrize("moment,expected", [
        (NaiveMoment(1978, 5, 16, 11, 0), 3),     # 입하 이후 → 사월
        (NaiveMoment(1978, 5, 5, 23, 7), 2),      # 입하 1분 전 → 진월
        (NaiveMoment(1978, 5, 5, 23, 8), 3),
        (NaiveMoment(2025, 1, 3, 12, 0), 10),     # 소한 전 → 자월
        (NaiveMoment(2025, 1, 10, 12, 0), 11),    # 소한 후 → 축월
        (NaiveMoment(2025, 2, 3, 12, 0), 11),     # 입춘 전 → 축월
        (NaiveMoment(2025, 2, 5, 12, 0), 0),      # 입춘 후 → 인월
        (NaiveMoment(2024, 12, 31, 12, 0), 10),
    ])
    def test_precise(self, converter, moment, expected):
        assert converter.month_branch_ordinal(moment) == expected

    def test_every_month_of_approximate_year(self, converter):
        """1985년: 각 절 다음날 정오 → 해당 서수"""
        for info in SOLAR_TERMS_ENTRY:
            year = 1986 if info.approx_month == 1 else 1985
            moment = NaiveMoment(year, info.approx_month, info.approx_day + 1, 12, 0)
            assert converter.month_branch_ordinal(moment) == info.month_ordinal

    def test_term_table_is_ordered(self):
        """각 연도 정밀 절입 시각은 단조 증가"""
        for year, cutovers in SOLAR_TERMS_PRECISE.items():
            assert len(cutovers) == 12
            assert list(cutovers) == sorted(cutovers), year
            assert cutovers[0][:2] == (year, 2)
            assert cutovers[11][:2] == (year + 1, 1)


class TestHourOrdinal:
    """시지 서수"""

    @pytest.mark.parametrize("hour,expected", [
        (23, 0), (0, 0), (1, 1), (2, 1), (3, 2), (11, 6), (12, 6), (21, 11), (22, 11),
    ])
    def test_two_hour_blocks(self, hour, expected):
        assert LunarCalendarConverter.hour_branch_ordinal(hour) == expected

    def test_exhaustive(self):
        assert set(HOUR_TO_BRANCH_ORDINAL) == set(range(24))
        for ordinal in range(12):
            assert list(HOUR_TO_BRANCH_ORDINAL.values()).count(ordinal) == 2

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_invalid_hour(self, hour):
        with pytest.raises(InvalidCalendarInput):
            LunarCalendarConverter.hour_branch_ordinal(hour)


class TestBoundary:
    """절입 경계 판정 / describe"""

    def test_near_ipchun(self, converter):
        assert converter.is_near_boundary(NaiveMoment(2025, 2, 3, 12, 0)) is True

    def test_far_from_terms(self, converter):
        assert converter.is_near_boundary(NaiveMoment(2025, 5, 20, 12, 0)) is False

    def test_describe(self, converter):
        info = converter.describe(NaiveMoment(2025, 2, 5, 12, 0))
        assert info.solar_year == 2025
        assert info.month_ordinal == 0
        assert info.term_name == "立春"
        assert info.is_boundary is True
        assert info.is_precise is True

        assert converter.describe(NaiveMoment(1985, 6, 20)).is_precise is False

    def test_term_name(self):
        assert term_name(0) == "立春"
        assert term_name(11) == "小寒"


class TestSolarTermSources:
    """절기 소스 선택"""

    def test_build(self):
        assert isinstance(build_solar_term_source("table"), TableSolarTermSource)
        assert isinstance(build_solar_term_source("ephem"), EphemSolarTermSource)
        with pytest.raises(ValueError):
            build_solar_term_source("kasi")

    def test_ephem_ipchun_2024(self):
        """천문 계산 입춘 ≈ 2024-02-04 17:27 (UTC+9)"""
        cutover = EphemSolarTermSource().cutover(2024, 0)
        diff = abs((datetime(*cutover) - datetime(2024, 2, 4, 17, 27)).total_seconds())
        assert diff <= 2 * 3600

    def test_ephem_sokan_lands_in_next_january(self):
        cutover = EphemSolarTermSource().cutover(2024, 11)
        assert cutover[:3] == (2025, 1, 5)

    def test_ephem_converter(self):
        converter = LunarCalendarConverter(EphemSolarTermSource())
        assert converter.solar_year(NaiveMoment(2024, 2, 3, 12, 0)) == 2023
        assert converter.solar_year(NaiveMoment(2024, 2, 5, 12, 0)) == 2024
        assert converter.month_branch_ordinal(NaiveMoment(2024, 5, 16, 12, 0)) == 3
