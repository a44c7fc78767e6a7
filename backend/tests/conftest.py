"""
공통 fixture
- 환경변수/.env 영향 없이 기본 설정(table 절기 소스)으로 엔진 구성
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from sajucore.config import Settings
from sajucore.models.domain import CorrectedMoment, FourPillars, Pillar
from sajucore.services.context import build_context
from sajucore.services.four_pillars import FourPillarsCalculator


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def context(settings):
    return build_context(settings)


@pytest.fixture
def calculator(context):
    return FourPillarsCalculator(context)


@pytest.fixture
def make_pillars():
    """(천간, 지지) 4쌍 → FourPillars (계산 없이 직접 구성)"""
    def _make(year, month, day, hour):
        return FourPillars(
            year=Pillar(*year),
            month=Pillar(*month),
            day=Pillar(*day),
            hour=Pillar(*hour),
            source_moment=CorrectedMoment(2000, 1, 1),
        )
    return _make
