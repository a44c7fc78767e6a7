"""
출생지 보정 테이블
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- 일본 47개 도도부현 + 「海外」(해외) 1개
- 값: 법정 표준시(JST, 동경 135도) 대비 진태양시 보정 (분)
- 미등록 지명은 예외 없이 「海外」로 fallback
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging
from typing import Dict, List, Optional, Tuple

from sajucore.models.domain import LocationOffset

logger = logging.getLogger(__name__)

REGION_JAPAN = "日本"
REGION_OVERSEAS = "海外"
OVERSEAS = "海外"

# 海外 = "현지 시각을 그대로 입력" 의미의 고정값 0 (미설정 기본값 아님)
OVERSEAS_OFFSET_MINUTES = 0
OVERSEAS_DESCRIPTION = "海外の場合は現地時間をそのまま入力してください"

# (도도부현, 보정 분) - JIS 코드 순서
PREFECTURE_OFFSETS: Tuple[Tuple[str, int], ...] = (
    ("北海道", 25), ("青森県", 23), ("岩手県", 21), ("宮城県", 20),
    ("秋田県", 19), ("山形県", 19), ("福島県", 18), ("茨城県", 19),
    ("栃木県", 19), ("群馬県", 18), ("埼玉県", 19), ("千葉県", 19),
    ("東京都", 19), ("神奈川県", 19), ("新潟県", 17), ("富山県", 15),
    ("石川県", 14), ("福井県", 13), ("山梨県", 17), ("長野県", 16),
    ("岐阜県", 12), ("静岡県", 15), ("愛知県", 8), ("三重県", 6),
    ("滋賀県", 4), ("京都府", 3), ("大阪府", 2), ("兵庫県", 1),
    ("奈良県", 3), ("和歌山県", 0), ("鳥取県", -3), ("島根県", -6),
    ("岡山県", -4), ("広島県", -8), ("山口県", -12), ("徳島県", -1),
    ("香川県", -2), ("愛媛県", -7), ("高知県", -5), ("福岡県", -18),
    ("佐賀県", -20), ("長崎県", -21), ("熊本県", -19), ("大分県", -16),
    ("宮崎県", -14), ("鹿児島県", -19), ("沖縄県", -31),
)


class LocationOffsetTable:
    """
    출생지 → 보정값 조회 (읽기 전용)

    - resolve: 정확히 일치하는 이름만 인정, 없으면 fallback
    - 등록 순서 = 조회 순서
    """

    def __init__(
        self,
        entries: Optional[List[LocationOffset]] = None,
        fallback_name: str = OVERSEAS,
    ):
        if entries is None:
            entries = default_entries()

        self._entries: Tuple[LocationOffset, ...] = tuple(entries)
        self._by_name: Dict[str, LocationOffset] = {e.name: e for e in self._entries}

        if fallback_name not in self._by_name:
            raise ValueError(f"fallback 지명이 테이블에 없음: {fallback_name}")
        self._fallback = self._by_name[fallback_name]

    @property
    def fallback(self) -> LocationOffset:
        return self._fallback

    def lookup(self, name: str) -> Optional[LocationOffset]:
        """정확 일치 조회 (fallback 없음)"""
        return self._by_name.get(name)

    def is_known(self, name: str) -> bool:
        return name in self._by_name

    def resolve(self, name: str) -> LocationOffset:
        entry = self._by_name.get(name)
        if entry is None:
            logger.info(f"[LocationTable] 미등록 지명 '{name}' → '{self._fallback.name}' 적용")
            return self._fallback
        return entry

    def list_all(self) -> List[LocationOffset]:
        return list(self._entries)

    def list_by_region_group(self, group: str) -> List[LocationOffset]:
        return [e for e in self._entries if e.region_group == group]

    def region_groups(self) -> List[str]:
        groups: List[str] = []
        for e in self._entries:
            if e.region_group not in groups:
                groups.append(e.region_group)
        return groups

    def describe(self, name: str) -> str:
        """예: '東京都: +19min'"""
        entry = self.resolve(name)
        if entry.region_group == REGION_OVERSEAS:
            return OVERSEAS_DESCRIPTION
        sign = "+" if entry.minutes >= 0 else "-"
        return f"{entry.name}: {sign}{abs(entry.minutes)}min"

    def list_with_info(self) -> List[Dict]:
        return [
            {
                "name": e.name,
                "minutes": e.minutes,
                "description": self.describe(e.name),
                "is_overseas": e.region_group == REGION_OVERSEAS,
            }
            for e in self._entries
        ]

    def categories(self) -> Dict[str, List[str]]:
        return {
            "prefectures": [e.name for e in self.list_by_region_group(REGION_JAPAN)],
            "overseas": [e.name for e in self.list_by_region_group(REGION_OVERSEAS)],
        }


def default_entries() -> List[LocationOffset]:
    entries = [
        LocationOffset(name=name, region_group=REGION_JAPAN, minutes=minutes)
        for name, minutes in PREFECTURE_OFFSETS
    ]
    entries.append(
        LocationOffset(name=OVERSEAS, region_group=REGION_OVERSEAS, minutes=OVERSEAS_OFFSET_MINUTES)
    )
    return entries


# 싱글톤 (읽기 전용)
location_table = LocationOffsetTable()
