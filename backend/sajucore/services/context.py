"""
엔진 컨텍스트
- 설정 + 출생지 테이블 + 달력 변환기를 묶은 불변 객체
- 프로세스당 1회 생성, 이후 읽기 전용으로 각 컴포넌트에 전달
"""
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sajucore.config import Settings, get_settings
from sajucore.services.locations import LocationOffsetTable, default_entries
from sajucore.services.lunar_calendar import LunarCalendarConverter
from sajucore.services.solar_terms import build_solar_term_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineContext:
    settings: Settings
    locations: LocationOffsetTable
    converter: LunarCalendarConverter


def build_context(settings: Optional[Settings] = None) -> EngineContext:
    settings = settings or get_settings()
    locations = LocationOffsetTable(default_entries(), fallback_name=settings.fallback_location)
    converter = LunarCalendarConverter(
        term_source=build_solar_term_source(settings.solar_term_source),
        min_year=settings.min_year,
        max_year=settings.max_year,
    )
    logger.info(
        f"EngineContext initialized - 절기: {settings.solar_term_source}, "
        f"범위: {settings.min_year}~{settings.max_year}, 지명: {len(locations.list_all())}개"
    )
    return EngineContext(settings=settings, locations=locations, converter=converter)


_context: Optional[EngineContext] = None
_context_lock = threading.Lock()


def get_default_context() -> EngineContext:
    """최초 1회만 생성 (동시 첫 호출도 같은 인스턴스)"""
    global _context
    if _context is None:
        with _context_lock:
            if _context is None:
                _context = build_context()
    return _context
