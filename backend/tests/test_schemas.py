"""
경계 스키마 테스트
"""
from datetime import date

import pytest
from pydantic import ValidationError

from sajucore.models.schemas import (
    BirthInput,
    CompatibilityOut,
    ElementProfileOut,
    FourPillarsOut,
    Gender,
    LocationOut,
    PillarOut,
)
from sajucore.services.compatibility import compatibility_engine
from sajucore.services.element_analyzer import element_analyzer
from sajucore.services.locations import OVERSEAS, location_table


class TestBirthInput:
    """입력 변환"""

    def test_fractional_hour_truncated(self):
        birth = BirthInput(birth_date=date(1978, 5, 16), birth_hour=11.5, location="東京都")
        moment = birth.to_moment()
        assert (moment.year, moment.month, moment.day, moment.hour, moment.minute) == (1978, 5, 16, 11, 30)

    def test_partial_minute_truncated(self):
        moment = BirthInput(birth_date=date(2000, 1, 1), birth_hour=7.755).to_moment()
        assert (moment.hour, moment.minute) == (7, 45)

    def test_every_minute_of_day(self):
        """h + m/60 입력은 정확히 h:m으로 복원"""
        for h in range(24):
            for m in range(60):
                moment = BirthInput(birth_date=date(2000, 1, 1), birth_hour=h + m / 60).to_moment()
                assert (moment.hour, moment.minute) == (h, m), (h, m)

    def test_just_below_midnight_stays_in_day(self):
        moment = BirthInput(birth_date=date(2000, 1, 1), birth_hour=23.99999999999999).to_moment()
        assert (moment.day, moment.hour, moment.minute) == (1, 23, 59)

    def test_defaults(self):
        birth = BirthInput(birth_date=date(2000, 1, 1), birth_hour=0)
        assert birth.location == OVERSEAS
        assert birth.birth_second == 0
        assert birth.gender is None

    @pytest.mark.parametrize("hour", [-0.5, 24, 24.5])
    def test_hour_out_of_range(self, hour):
        with pytest.raises(ValidationError):
            BirthInput(birth_date=date(2000, 1, 1), birth_hour=hour)

    def test_second_out_of_range(self):
        with pytest.raises(ValidationError):
            BirthInput(birth_date=date(2000, 1, 1), birth_hour=1, birth_second=60)

    def test_from_json(self):
        birth = BirthInput.model_validate_json(
            '{"birth_date": "1978-05-16", "birth_hour": 11, "location": "沖縄県", "gender": "female"}'
        )
        assert birth.gender == Gender.FEMALE
        assert birth.to_moment().hour == 11


class TestOutputViews:
    """도메인 → 직렬화 뷰"""

    @pytest.fixture
    def chart(self, calculator):
        return calculator.compute_from_input(
            BirthInput(birth_date=date(1978, 5, 16), birth_hour=11, location="沖縄県")
        )

    def test_four_pillars_out(self, chart):
        out = FourPillarsOut.from_domain(chart)

        assert out.year.ganji == "戊午"
        assert out.day.stem_ko == "무"
        assert out.day.branch_name == "寅"
        assert out.hour.ganji == "丁巳"
        assert out.offset_minutes == -31
        assert out.corrected_moment == "1978-05-16 10:29:00"
        assert out.location == "沖縄県"
        assert out.model_dump()["month"]["index"] == 53

    def test_pillar_out_details(self, chart):
        """일간 戊: 午 제왕, 巳 건록, 寅 장생"""
        out = FourPillarsOut.from_domain(chart)

        assert out.year.hidden_stems == ["丁", "己"]
        assert out.day.hidden_stems == ["甲", "丙", "戊"]
        assert [out.year.twelve_fortune, out.month.twelve_fortune, out.day.twelve_fortune] == ["제왕", "건록", "장생"]

    def test_pillar_out_without_day_stem(self, chart):
        out = PillarOut.from_domain(chart.year)
        assert out.twelve_fortune is None
        assert out.hidden_stems == ["丁", "己"]

    def test_element_profile_out(self, chart):
        out = ElementProfileOut.from_domain(element_analyzer.analyze(chart))

        assert sum(out.counts.values()) == 8
        assert out.yin + out.yang == 8
        assert out.main_element == "earth"
        assert sum(out.ten_gods_count.values()) == 7

    def test_compatibility_out(self, chart):
        out = CompatibilityOut.from_domain(compatibility_engine.score(chart, chart))
        assert 0 <= out.score <= 100
        assert set(out.breakdown) == {"year-year", "month-month", "day-day", "hour-hour"}

    def test_location_out(self):
        out = LocationOut.from_domain(location_table.resolve("北海道"))
        assert out.model_dump() == {"name": "北海道", "region_group": "日本", "minutes": 25}
