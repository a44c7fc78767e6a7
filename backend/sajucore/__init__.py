"""
sajucore - 사주(四柱) 계산 엔진
- 출생지 보정(진태양시) → 간지 4기둥 → 오행 분석 → 궁합 점수
"""
__version__ = "1.0.0"
