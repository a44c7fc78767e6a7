# services package - lazy accessors (엔진 컨텍스트는 첫 사용 시 1회 생성)
import threading

four_pillars_calculator = None
_calculator_lock = threading.Lock()


def get_four_pillars_calculator():
    global four_pillars_calculator
    if four_pillars_calculator is None:
        with _calculator_lock:
            if four_pillars_calculator is None:
                from sajucore.services.four_pillars import FourPillarsCalculator
                four_pillars_calculator = FourPillarsCalculator()
    return four_pillars_calculator


def get_element_analyzer():
    from sajucore.services.element_analyzer import element_analyzer
    return element_analyzer


def get_compatibility_engine():
    from sajucore.services.compatibility import compatibility_engine
    return compatibility_engine


def get_location_table():
    return get_four_pillars_calculator().context.locations
