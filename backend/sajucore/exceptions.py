"""
엔진 예외 정의
- 입력 오류만 예외로 전파 (출생지 미등록은 예외 아님 → fallback)
"""


class SajuEngineError(Exception):
    """엔진 공통 예외"""
    pass


class InvalidCalendarInput(SajuEngineError, ValueError):
    """표현 불가능한 날짜/시각 입력 (월 범위, 해당 월에 없는 일 등)"""
    pass


class CalendarRangeError(InvalidCalendarInput):
    """지원 연도 범위 밖의 입력"""

    def __init__(self, year: int, min_year: int, max_year: int):
        self.year = year
        self.min_year = min_year
        self.max_year = max_year
        super().__init__(f"지원 범위 밖의 연도: {year} (지원: {min_year}~{max_year})")
