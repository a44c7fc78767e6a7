"""
60갑자 계산 모듈
- 천간(10개) × 지지(12개) 중 음양이 맞는 60개 조합
- 일진: 연속 일수(JDN) + 기준 상수
- 연두법(월간), 시두법(시간) 고정 테이블
"""
from typing import Dict, List, Tuple

from sajucore.exceptions import InvalidCalendarInput
from sajucore.models.domain import Element, Pillar, YinYang

# 천간 (10개)
CHEONGAN = ["갑", "을", "병", "정", "무", "기", "경", "신", "임", "계"]
CHEONGAN_HANJA = ["甲", "乙", "丙", "丁", "戊", "己", "庚", "辛", "壬", "癸"]

# 지지 (12개)
JIJI = ["자", "축", "인", "묘", "진", "사", "오", "미", "신", "유", "술", "해"]
JIJI_HANJA = ["子", "丑", "寅", "卯", "辰", "巳", "午", "未", "申", "酉", "戌", "亥"]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 기준 상수
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 일진: (JDN + 49) mod 60
#   2000-01-01 (JDN 2451545) = 무오(戊午, 54)
#   1900-01-01 (JDN 2415021) = 갑술(甲戌, 10)
DAY_EPOCH_OFFSET = 49

# 세차: (입춘 보정 연도 - 4) mod 60  → 1984년 = 갑자(0)
YEAR_EPOCH = 4

# 천간 → 오행
GAN_TO_ELEMENT = {
    0: Element.WOOD, 1: Element.WOOD,
    2: Element.FIRE, 3: Element.FIRE,
    4: Element.EARTH, 5: Element.EARTH,
    6: Element.METAL, 7: Element.METAL,
    8: Element.WATER, 9: Element.WATER,
}

# 지지 → 오행 (토는 축/진/미/술 4개)
JI_TO_ELEMENT = {
    0: Element.WATER,   # 자
    1: Element.EARTH,   # 축
    2: Element.WOOD,    # 인
    3: Element.WOOD,    # 묘
    4: Element.EARTH,   # 진
    5: Element.FIRE,    # 사
    6: Element.FIRE,    # 오
    7: Element.EARTH,   # 미
    8: Element.METAL,   # 신
    9: Element.METAL,   # 유
    10: Element.EARTH,  # 술
    11: Element.WATER,  # 해
}

# 지장간 본기 (지지 → 천간)
JI_MAIN_GAN = {
    0: 9,   # 자 → 계
    1: 5,   # 축 → 기
    2: 0,   # 인 → 갑
    3: 1,   # 묘 → 을
    4: 4,   # 진 → 무
    5: 2,   # 사 → 병
    6: 3,   # 오 → 정
    7: 5,   # 미 → 기
    8: 6,   # 신 → 경
    9: 7,   # 유 → 신
    10: 4,  # 술 → 무
    11: 8,  # 해 → 임
}

# 지장간 전체 (본기 먼저, 이어서 중기/여기)
HIDDEN_STEMS: Dict[int, Tuple[int, ...]] = {
    0: (9,),         # 자: 계
    1: (5, 9, 7),    # 축: 기 계 신
    2: (0, 2, 4),    # 인: 갑 병 무
    3: (1,),         # 묘: 을
    4: (4, 1, 9),    # 진: 무 을 계
    5: (2, 6, 4),    # 사: 병 경 무
    6: (3, 5),       # 오: 정 기
    7: (5, 3, 1),    # 미: 기 정 을
    8: (6, 8, 4),    # 신: 경 임 무
    9: (7,),         # 유: 신
    10: (4, 7, 3),   # 술: 무 신 정
    11: (8, 0),      # 해: 임 갑
}

# 십이운성 (장생부터 순서대로)
TWELVE_FORTUNES = ("장생", "목욕", "관대", "건록", "제왕", "쇠", "병", "사", "묘", "절", "태", "양")

# 일간 → 장생지 (양간은 순행, 음간은 역행)
JANGSAENG_BRANCH = {
    0: 11,  # 갑 → 해
    1: 6,   # 을 → 오
    2: 2,   # 병 → 인
    3: 9,   # 정 → 유
    4: 2,   # 무 → 인
    5: 9,   # 기 → 유
    6: 5,   # 경 → 사
    7: 0,   # 신 → 자
    8: 8,   # 임 → 신
    9: 3,   # 계 → 묘
}

# 연간 → 인월(寅月) 천간 (연두법, 오호둔)
YEAR_TO_MONTH_START = {
    0: 2,  # 갑 → 병인월
    1: 4,  # 을 → 무인월
    2: 6,  # 병 → 경인월
    3: 8,  # 정 → 임인월
    4: 0,  # 무 → 갑인월
    5: 2,  # 기 → 병인월
    6: 4,  # 경 → 무인월
    7: 6,  # 신 → 경인월
    8: 8,  # 임 → 임인월
    9: 0,  # 계 → 갑인월
}

# 일간 → 자시(子時) 천간 (시두법, 오서둔)
DAY_TO_HOUR_START = {
    0: 0,  # 갑일 → 갑자시
    1: 2,  # 을일 → 병자시
    2: 4,  # 병일 → 무자시
    3: 6,  # 정일 → 경자시
    4: 8,  # 무일 → 임자시
    5: 0,  # 기일 → 갑자시
    6: 2,  # 경일 → 병자시
    7: 4,  # 신일 → 무자시
    8: 6,  # 임일 → 경자시
    9: 8,  # 계일 → 임자시
}

# 월 서수(0=인월 ... 11=축월) → 지지 인덱스
MONTH_ORDINAL_TO_BRANCH = {
    0: 2,    # 인
    1: 3,    # 묘
    2: 4,    # 진
    3: 5,    # 사
    4: 6,    # 오
    5: 7,    # 미
    6: 8,    # 신
    7: 9,    # 유
    8: 10,   # 술
    9: 11,   # 해
    10: 0,   # 자
    11: 1,   # 축
}


class SexagenaryCycle:
    """60갑자 계산기"""

    # ===== 인덱스 분해 =====
    @staticmethod
    def stem_of(sexagenary_index: int) -> int:
        return sexagenary_index % 10

    @staticmethod
    def branch_of(sexagenary_index: int) -> int:
        return sexagenary_index % 12

    @staticmethod
    def index_of(stem: int, branch: int) -> int:
        """천간/지지 → 60갑자 인덱스 (음양 불일치 조합은 존재하지 않음)"""
        if stem % 2 != branch % 2:
            raise InvalidCalendarInput(f"존재하지 않는 간지: {CHEONGAN_HANJA[stem]}{JIJI_HANJA[branch]}")
        return (6 * stem - 5 * branch) % 60

    @staticmethod
    def pillar_from_index(sexagenary_index: int) -> Pillar:
        i = sexagenary_index % 60
        return Pillar(stem=i % 10, branch=i % 12)

    # ===== 일주 =====
    @staticmethod
    def day_pillar_index(continuous_day_count: int) -> int:
        return (continuous_day_count + DAY_EPOCH_OFFSET) % 60

    # ===== 연주 =====
    @staticmethod
    def year_pillar_index(solar_year: int) -> int:
        return (solar_year - YEAR_EPOCH) % 60

    # ===== 월간 (연두법) =====
    @staticmethod
    def month_stem(year_stem: int, month_branch_ordinal: int) -> int:
        """
        Args:
            year_stem: 연간 인덱스 (0=갑 ...)
            month_branch_ordinal: 0=인월, 1=묘월, ..., 11=축월
        """
        return (YEAR_TO_MONTH_START[year_stem] + month_branch_ordinal) % 10

    @staticmethod
    def month_branch(month_branch_ordinal: int) -> int:
        return MONTH_ORDINAL_TO_BRANCH[month_branch_ordinal]

    # ===== 시간 (시두법) =====
    @staticmethod
    def hour_stem(day_stem: int, hour_branch_ordinal: int) -> int:
        """
        Args:
            day_stem: 일간 인덱스
            hour_branch_ordinal: 0=자시(23:00~00:59), 1=축시, ...
        """
        return (DAY_TO_HOUR_START[day_stem] + hour_branch_ordinal) % 10

    # ===== 대운 진행 =====
    @staticmethod
    def next_pillars(start_index: int, direction: str, count: int = 10) -> List[Pillar]:
        """
        start_index 다음(forward) / 이전(backward) 간지부터 count개
        """
        step = 1 if direction == "forward" else -1
        out = []
        cur = start_index
        for _ in range(count):
            cur = (cur + step) % 60
            out.append(SexagenaryCycle.pillar_from_index(cur))
        return out


# 유틸리티 함수
def ganji_name(pillar: Pillar) -> str:
    """간지 한자 문자열 (예: 甲子)"""
    return f"{CHEONGAN_HANJA[pillar.stem]}{JIJI_HANJA[pillar.branch]}"


def ganji_name_ko(pillar: Pillar) -> str:
    """간지 한글 문자열 (예: 갑자)"""
    return f"{CHEONGAN[pillar.stem]}{JIJI[pillar.branch]}"


def stem_yin_yang(stem: int) -> YinYang:
    return YinYang.YANG if stem % 2 == 0 else YinYang.YIN


def branch_yin_yang(branch: int) -> YinYang:
    return YinYang.YANG if branch % 2 == 0 else YinYang.YIN


def twelve_fortune(day_stem: int, branch: int) -> str:
    """일간 기준 지지의 십이운성"""
    start = JANGSAENG_BRANCH[day_stem]
    if day_stem % 2 == 0:
        step = (branch - start) % 12
    else:
        step = (start - branch) % 12
    return TWELVE_FORTUNES[step]


def get_sixty_ganji_list() -> List[str]:
    """60갑자 표준 순서 (갑자부터 1칸씩 증가)"""
    return [f"{CHEONGAN_HANJA[i % 10]}{JIJI_HANJA[i % 12]}" for i in range(60)]


SIXTY_GANJI: Tuple[str, ...] = tuple(get_sixty_ganji_list())
