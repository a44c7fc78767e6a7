"""
출생지 시각 보정
- 분 단위 보정값을 더한 뒤 분→시→일→월→년 순서로 정규화
- 보정 폭을 가정하지 않음 (루프로 연쇄 넘김 처리)
"""
import logging

from sajucore.models.domain import CorrectedMoment, NaiveMoment, days_in_month

logger = logging.getLogger(__name__)


class LocationTimeAdjuster:
    """지방시 보정기 (상태 없음)"""

    @staticmethod
    def adjust(moment: NaiveMoment, offset_minutes: int) -> CorrectedMoment:
        year, month, day, hour, minute, second = moment.fields()

        if offset_minutes == 0:
            return CorrectedMoment(year, month, day, hour, minute, second, offset_minutes=0)

        # 1. 분
        minute += offset_minutes
        while minute >= 60:
            minute -= 60
            hour += 1
        while minute < 0:
            minute += 60
            hour -= 1

        # 2. 시
        while hour >= 24:
            hour -= 24
            day += 1
        while hour < 0:
            hour += 24
            day -= 1

        # 3. 월말 넘김 (월이 바뀔 때마다 일수 재계산)
        while day > days_in_month(year, month):
            day -= days_in_month(year, month)
            month += 1
            if month > 12:
                month = 1
                year += 1

        # 4. 월초 이전
        while day < 1:
            month -= 1
            if month < 1:
                month = 12
                year -= 1
            day += days_in_month(year, month)

        corrected = CorrectedMoment(year, month, day, hour, minute, second, offset_minutes=offset_minutes)
        logger.debug(f"[TimeAdjuster] {moment} {offset_minutes:+d}분 → {corrected}")
        return corrected
