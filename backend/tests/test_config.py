"""
설정 / 엔진 컨텍스트 테스트
"""
import logging

import pytest
from pydantic import ValidationError

from sajucore.config import Settings, configure_logging
from sajucore.exceptions import CalendarRangeError
from sajucore.models.domain import NaiveMoment
from sajucore.services.context import build_context
from sajucore.services.four_pillars import FourPillarsCalculator
from sajucore.services.solar_terms import EphemSolarTermSource, TableSolarTermSource


class TestSettings:
    """pydantic-settings"""

    def test_defaults(self, settings):
        assert settings.min_year == 1900
        assert settings.max_year == 2100
        assert settings.fallback_location == "海外"
        assert settings.solar_term_source == "table"
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SAJU_MIN_YEAR", "1950")
        monkeypatch.setenv("SAJU_SOLAR_TERM_SOURCE", "ephem")
        settings = Settings(_env_file=None)

        assert settings.min_year == 1950
        assert settings.solar_term_source == "ephem"

    def test_invalid_source(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, solar_term_source="kasi")

    def test_frozen(self, settings):
        with pytest.raises(ValidationError):
            settings.min_year = 1000


class TestEngineContext:
    """컨텍스트 구성"""

    def test_table_source(self, context):
        assert isinstance(context.converter.term_source, TableSolarTermSource)
        assert context.locations.fallback.name == "海外"

    def test_ephem_source(self):
        context = build_context(Settings(_env_file=None, solar_term_source="ephem"))
        assert isinstance(context.converter.term_source, EphemSolarTermSource)

    def test_year_range_from_settings(self):
        context = build_context(Settings(_env_file=None, min_year=1950, max_year=2050))
        calculator = FourPillarsCalculator(context)

        calculator.compute(NaiveMoment(1950, 6, 1), "東京都")
        with pytest.raises(CalendarRangeError):
            calculator.compute(NaiveMoment(1949, 6, 1), "東京都")

    def test_fallback_location_from_settings(self):
        context = build_context(Settings(_env_file=None, fallback_location="和歌山県"))
        chart = FourPillarsCalculator(context).compute(NaiveMoment(2000, 1, 1), "Atlantis")

        assert chart.location.name == "和歌山県"
        assert chart.location_resolved is False


class TestServiceAccessors:
    """services 패키지 지연 접근자"""

    def test_singletons(self):
        from sajucore import services
        from sajucore.services.compatibility import compatibility_engine
        from sajucore.services.element_analyzer import element_analyzer

        assert services.get_element_analyzer() is element_analyzer
        assert services.get_compatibility_engine() is compatibility_engine
        assert services.get_four_pillars_calculator() is services.get_four_pillars_calculator()
        assert services.get_location_table().resolve("東京都").minutes == 19

    def test_concurrent_first_access_builds_once(self, monkeypatch):
        from concurrent.futures import ThreadPoolExecutor

        from sajucore import services
        from sajucore.services import context as context_module

        monkeypatch.setattr(services, "four_pillars_calculator", None)
        monkeypatch.setattr(context_module, "_context", None)
        built = []
        original_build = context_module.build_context

        def counting_build(settings=None):
            built.append(1)
            return original_build(settings)

        monkeypatch.setattr(context_module, "build_context", counting_build)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: services.get_four_pillars_calculator(), range(16)))

        assert all(r is results[0] for r in results)
        assert len(built) == 1


class TestConfigureLogging:
    """로그 레벨 적용"""

    def test_applies_level(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        configure_logging(Settings(_env_file=None, log_level="debug"))
        assert captured == {"level": "DEBUG"}
