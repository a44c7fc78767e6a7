"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
오행 분석기
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
FourPillars(8글자) → 오행/음양 분포, 신강 여부, 성향, 십성
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from collections import Counter
from typing import Dict, List, Tuple

from sajucore.models.domain import (
    CharacterType,
    Element,
    ElementProfile,
    FourPillars,
    TenGod,
    YinYang,
)
from sajucore.services.ganji import (
    GAN_TO_ELEMENT,
    JI_MAIN_GAN,
    JI_TO_ELEMENT,
    branch_yin_yang,
    stem_yin_yang,
)

logger = logging.getLogger(__name__)

ELEMENT_ORDER = (Element.WOOD, Element.FIRE, Element.EARTH, Element.METAL, Element.WATER)

# 오행 상생상극 관계
ELEMENT_CYCLE = {
    Element.WOOD: {"generates": Element.FIRE, "conquers": Element.EARTH,
                   "conquered_by": Element.METAL, "generated_by": Element.WATER},
    Element.FIRE: {"generates": Element.EARTH, "conquers": Element.METAL,
                   "conquered_by": Element.WATER, "generated_by": Element.WOOD},
    Element.EARTH: {"generates": Element.METAL, "conquers": Element.WATER,
                    "conquered_by": Element.WOOD, "generated_by": Element.FIRE},
    Element.METAL: {"generates": Element.WATER, "conquers": Element.WOOD,
                    "conquered_by": Element.FIRE, "generated_by": Element.EARTH},
    Element.WATER: {"generates": Element.WOOD, "conquers": Element.FIRE,
                    "conquered_by": Element.EARTH, "generated_by": Element.METAL},
}

TEN_GODS = ["비견", "겁재", "식신", "상관", "편재", "정재", "편관", "정관", "편인", "정인"]

# 주 오행별 성향 키워드
ELEMENT_TRAITS = {
    Element.WOOD: ("리더십", "창의성", "향상심"),
    Element.FIRE: ("열정", "행동력", "사교성"),
    Element.EARTH: ("안정 지향", "신뢰", "실무 능력"),
    Element.METAL: ("논리", "정의감", "완벽주의"),
    Element.WATER: ("적응력", "지성", "직관"),
}

CONCENTRATED_THRESHOLD = 4
STRONG_SELF_THRESHOLD = 3


def ten_god_name(day_stem: int, target_stem: int) -> str:
    """일간 기준 천간의 십성"""
    day_element = GAN_TO_ELEMENT[day_stem]
    target_element = GAN_TO_ELEMENT[target_stem]
    cycle = ELEMENT_CYCLE[day_element]
    same_yin_yang = day_stem % 2 == target_stem % 2

    if target_element == day_element:
        return "비견" if same_yin_yang else "겁재"
    if target_element == cycle["generates"]:
        return "식신" if same_yin_yang else "상관"
    if target_element == cycle["conquers"]:
        return "편재" if same_yin_yang else "정재"
    if target_element == cycle["conquered_by"]:
        return "편관" if same_yin_yang else "정관"
    return "편인" if same_yin_yang else "정인"


class ElementAnalyzer:
    """
    오행 분석기 (상태 없음, 실패 없음)

    - 천간 4 + 지지 4 = 8글자 → 오행 합계 8, 음양 합계 8
    - 천간 음양: 인덱스 짝수=양, 홀수=음
    - 지지 음양: 지지 인덱스 짝홀 (자=양, 축=음 ...)
    """

    def analyze(self, four_pillars: FourPillars) -> ElementProfile:
        pillars = [p for _, p in four_pillars.pillars()]

        # 1. 오행 카운트
        elements = [GAN_TO_ELEMENT[p.stem] for p in pillars] + [JI_TO_ELEMENT[p.branch] for p in pillars]
        counter = Counter(elements)
        counts = {e: counter.get(e, 0) for e in ELEMENT_ORDER}

        # 2. 음양 카운트
        yin_yang = [stem_yin_yang(p.stem) for p in pillars] + [branch_yin_yang(p.branch) for p in pillars]
        yang = sum(1 for v in yin_yang if v == YinYang.YANG)

        # 3. 일간 / 월간
        main_element = GAN_TO_ELEMENT[four_pillars.day.stem]
        secondary_element = GAN_TO_ELEMENT[four_pillars.month.stem]

        dominant, missing = self._dominant_and_missing(counts)
        is_strong_self = self._is_strong_self(main_element, counts)
        character = self._classify(counts, main_element)
        ten_gods = self._ten_gods(four_pillars)

        profile = ElementProfile(
            wood=counts[Element.WOOD],
            fire=counts[Element.FIRE],
            earth=counts[Element.EARTH],
            metal=counts[Element.METAL],
            water=counts[Element.WATER],
            yin=len(yin_yang) - yang,
            yang=yang,
            main_element=main_element,
            secondary_element=secondary_element,
            day_master_yin_yang=stem_yin_yang(four_pillars.day.stem),
            dominant_elements=dominant,
            missing_elements=missing,
            is_strong_self=is_strong_self,
            character=character,
            ten_gods=ten_gods,
        )
        logger.debug(
            f"[ElementAnalyzer] counts={dict((e.value, c) for e, c in counts.items())} | "
            f"main={main_element.value} | strong_self={is_strong_self}"
        )
        return profile

    @staticmethod
    def _dominant_and_missing(counts: Dict[Element, int]) -> Tuple[Tuple[Element, ...], Tuple[Element, ...]]:
        top = max(counts.values())
        dominant = tuple(e for e in ELEMENT_ORDER if counts[e] == top)
        missing = tuple(e for e in ELEMENT_ORDER if counts[e] == 0)
        return dominant, missing

    @staticmethod
    def _is_strong_self(main_element: Element, counts: Dict[Element, int]) -> bool:
        """같은 오행(비겁) + 나를 생하는 오행(인성) >= 3이면 신강"""
        support = ELEMENT_CYCLE[main_element]["generated_by"]
        return counts[main_element] + counts[support] >= STRONG_SELF_THRESHOLD

    @staticmethod
    def _classify(counts: Dict[Element, int], main_element: Element) -> CharacterType:
        if any(c >= CONCENTRATED_THRESHOLD for c in counts.values()):
            balance = "concentrated"
        elif any(c == 0 for c in counts.values()):
            balance = "leaning"
        else:
            balance = "balanced"
        return CharacterType(balance=balance, traits=ELEMENT_TRAITS[main_element])

    @staticmethod
    def _ten_gods(four_pillars: FourPillars) -> Tuple[TenGod, ...]:
        """일간 제외 7글자 (지지는 지장간 본기 기준)"""
        day_stem = four_pillars.day.stem
        result: List[TenGod] = []

        for position, pillar in four_pillars.pillars():
            if position != "day":
                result.append(TenGod(
                    position=f"{position}_stem",
                    name=ten_god_name(day_stem, pillar.stem),
                    element=GAN_TO_ELEMENT[pillar.stem],
                ))
            result.append(TenGod(
                position=f"{position}_branch",
                name=ten_god_name(day_stem, JI_MAIN_GAN[pillar.branch]),
                element=JI_TO_ELEMENT[pillar.branch],
            ))
        return tuple(result)


# 싱글톤
element_analyzer = ElementAnalyzer()
