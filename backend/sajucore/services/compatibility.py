"""
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
궁합 엔진
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
기둥별 천간 오행의 상생/상극 관계 → 가중합 → 0~100
- 관계는 방향성이 있으므로 score(a, b) != score(b, a) 가능
- 일주 가중치 2배 (일간 = 나)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
import math
from enum import Enum
from typing import Any, Dict

from sajucore.models.domain import POSITIONS, CompatibilityResult, Element, FourPillars
from sajucore.services.element_analyzer import ELEMENT_CYCLE, element_analyzer
from sajucore.services.ganji import GAN_TO_ELEMENT, JI_TO_ELEMENT

logger = logging.getLogger(__name__)


class Relation(str, Enum):
    GENERATES = "generates"
    GENERATED_BY = "generated_by"
    IDENTICAL = "identical"
    DESTROYS = "destroys"
    DESTROYED_BY = "destroyed_by"


# 상생: 목→화→토→금→수→목
GENERATES = {e: cycle["generates"] for e, cycle in ELEMENT_CYCLE.items()}
# 상극: 목→토→수→화→금→목
DESTROYS = {e: cycle["conquers"] for e, cycle in ELEMENT_CYCLE.items()}

RELATION_WEIGHTS = {
    Relation.GENERATES: 1.0,
    Relation.GENERATED_BY: 0.75,
    Relation.IDENTICAL: 0.5,
    Relation.DESTROYS: -0.75,
    Relation.DESTROYED_BY: -1.0,
}

POSITION_WEIGHTS = {"year": 1.0, "month": 1.0, "day": 2.0, "hour": 1.0}

_MAX_SUM = sum(POSITION_WEIGHTS.values()) * max(RELATION_WEIGHTS.values())
_MIN_SUM = sum(POSITION_WEIGHTS.values()) * min(RELATION_WEIGHTS.values())

# 일지 관계
SAMHAP_GROUPS = ({8, 0, 4}, {11, 3, 7}, {2, 6, 10}, {5, 9, 1})      # 신자진, 해묘미, 인오술, 사유축
YUKHAP_PAIRS = ({0, 1}, {2, 11}, {3, 10}, {4, 9}, {5, 8}, {6, 7})   # 자축, 인해, 묘술, 진유, 사신, 오미
# 천간합: 갑기, 을경, 병신, 정임, 무계
GANHAP_PAIRS = ({0, 5}, {1, 6}, {2, 7}, {3, 8}, {4, 9})

# 세부 궁합 종합 점수 가중치 (합 1.0)
DETAIL_WEIGHTS = {
    "yin_yang_balance": 0.2,
    "strength_balance": 0.2,
    "day_branch": 0.25,
    "useful_gods": 0.2,
    "day_stem_combination": 0.15,
}


class RelationshipType(str, Enum):
    IDEAL_PARTNER = "idealPartner"
    GOOD_COOPERATION = "goodCooperation"
    STABLE = "stableRelationship"
    STIMULATING = "stimulatingRelationship"
    CAUTION = "cautionRelationship"
    GENERAL = "generalRelationship"


RELATIONSHIP_TYPE_LABELS = {
    RelationshipType.IDEAL_PARTNER: "이상적인 파트너",
    RelationshipType.GOOD_COOPERATION: "좋은 협력 관계",
    RelationshipType.STABLE: "안정된 관계",
    RelationshipType.STIMULATING: "자극적인 관계",
    RelationshipType.CAUTION: "주의가 필요한 관계",
    RelationshipType.GENERAL: "일반적인 관계",
}


def relation_of(a: Element, b: Element) -> Relation:
    """a 기준 a→b 관계"""
    if a == b:
        return Relation.IDENTICAL
    if GENERATES[a] == b:
        return Relation.GENERATES
    if GENERATES[b] == a:
        return Relation.GENERATED_BY
    if DESTROYS[a] == b:
        return Relation.DESTROYS
    return Relation.DESTROYED_BY


def day_branch_relationship(a: int, b: int) -> Dict[str, Any]:
    if a != b and any(a in g and b in g for g in SAMHAP_GROUPS):
        return {"score": 100, "relationship": "삼합"}
    if {a, b} in YUKHAP_PAIRS:
        return {"score": 85, "relationship": "육합"}
    if abs(a - b) == 6:
        return {"score": 60, "relationship": "충"}
    return {"score": 50, "relationship": "보통"}


def detail_total_score(details: Dict[str, Any]) -> int:
    """세부 항목 가중합, .5는 올림"""
    total = (
        details["yin_yang_balance"] * DETAIL_WEIGHTS["yin_yang_balance"]
        + details["strength_balance"] * DETAIL_WEIGHTS["strength_balance"]
        + details["day_branch"]["score"] * DETAIL_WEIGHTS["day_branch"]
        + details["useful_gods"] * DETAIL_WEIGHTS["useful_gods"]
        + details["day_stem_combination"]["score"] * DETAIL_WEIGHTS["day_stem_combination"]
    )
    return math.floor(round(total, 6) + 0.5)


def relationship_type(total_score: int, details: Dict[str, Any]) -> RelationshipType:
    """위에서부터 처음 만족하는 유형"""
    yin_yang = details["yin_yang_balance"]
    strength = details["strength_balance"]
    useful = details["useful_gods"]
    branch = details["day_branch"]["relationship"]

    if total_score >= 90 and details["day_stem_combination"]["is_ganhap"] and branch == "삼합" and yin_yang >= 80:
        return RelationshipType.IDEAL_PARTNER
    if total_score >= 80 and useful >= 80 and strength >= 80:
        return RelationshipType.GOOD_COOPERATION
    if total_score >= 70 and branch == "육합" and yin_yang >= 70:
        return RelationshipType.STABLE
    if total_score >= 60 and branch == "충" and useful >= 50:
        return RelationshipType.STIMULATING
    if total_score < 60 and yin_yang < 60 and strength < 60 and useful < 50:
        return RelationshipType.CAUTION
    return RelationshipType.GENERAL


class CompatibilityEngine:
    """궁합 점수 계산기 (상태 없음)"""

    def score(self, a: FourPillars, b: FourPillars) -> CompatibilityResult:
        total = 0.0
        breakdown: Dict[str, float] = {}
        relations: Dict[str, str] = {}

        for position in POSITIONS:
            element_a = GAN_TO_ELEMENT[getattr(a, position).stem]
            element_b = GAN_TO_ELEMENT[getattr(b, position).stem]
            relation = relation_of(element_a, element_b)
            contribution = RELATION_WEIGHTS[relation] * POSITION_WEIGHTS[position]

            key = f"{position}-{position}"
            breakdown[key] = contribution
            relations[key] = relation.value
            total += contribution

        normalized = round((total - _MIN_SUM) / (_MAX_SUM - _MIN_SUM) * 100, 2)
        normalized = min(100.0, max(0.0, normalized))

        logger.info(f"[Compatibility] score={normalized} | relations={relations}")
        return CompatibilityResult(score=normalized, breakdown=breakdown, relations=relations)

    def relationship_details(self, a: FourPillars, b: FourPillars) -> Dict[str, Any]:
        """
        일간/일지 중심 세부 궁합

        Returns:
            day_branch, day_stem_combination, yin_yang_balance,
            strength_balance, element_harmony, useful_gods,
            total_score (element_harmony 제외 가중합), relationship_type, relationship_label
        """
        profile_a = element_analyzer.analyze(a)
        profile_b = element_analyzer.analyze(b)

        is_ganhap = {a.day.stem, b.day.stem} in GANHAP_PAIRS
        diff = sum(abs(profile_a.counts()[e] - profile_b.counts()[e]) for e in ELEMENT_CYCLE)

        details = {
            "day_branch": day_branch_relationship(a.day.branch, b.day.branch),
            "day_stem_combination": {"score": 100 if is_ganhap else 50, "is_ganhap": is_ganhap},
            "yin_yang_balance": 100 if a.day.stem % 2 != b.day.stem % 2 else 50,
            "strength_balance": 100 if profile_a.is_strong_self != profile_b.is_strong_self else 70,
            "element_harmony": max(0, 100 - diff * 5),
            "useful_gods": (self._useful_gods(a, b) + self._useful_gods(b, a)) / 2,
        }
        details["total_score"] = detail_total_score(details)
        kind = relationship_type(details["total_score"], details)
        details["relationship_type"] = kind.value
        details["relationship_label"] = RELATIONSHIP_TYPE_LABELS[kind]
        logger.debug(f"[Compatibility] details={details}")
        return details

    @staticmethod
    def _useful_gods(person: FourPillars, partner: FourPillars) -> float:
        """내가 생하는 오행 + 내가 극하는 오행이 상대 8글자에 몇 개 있는지"""
        day_element = GAN_TO_ELEMENT[person.day.stem]
        wanted = (GENERATES[day_element], DESTROYS[day_element])

        found = 0
        for _, pillar in partner.pillars():
            found += sum(1 for w in wanted if GAN_TO_ELEMENT[pillar.stem] == w)
            found += sum(1 for w in wanted if JI_TO_ELEMENT[pillar.branch] == w)
        return min(100.0, found / 8 * 100)


# 싱글톤
compatibility_engine = CompatibilityEngine()
