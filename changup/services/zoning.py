# changup/services/zoning.py
# -----------------------------------------------------------------------------
# 용도지역명 → 영업 가능 여부/경고/등급
# - 위에서부터 첫 일치 규칙 적용, 일치 없음(또는 값 없음)은 '확인필요'
# -----------------------------------------------------------------------------
from typing import Optional

from changup.schemas.analysis import Regulation

# (포함 문자열들, 영업 가능, 경고, 등급)
ZONING_RULES: list[tuple[tuple[str, ...], bool, Optional[str], str]] = [
    (("전용주거",), False, "⚠️ 전용주거지역: 음식점·상가 영업 불가", "불가"),
    (("일반주거",), True, "주의: 일반주거지역 — 일부 업종 인허가 제한", "주의"),
    (("상업", "근린상업", "일반상업"), True, None, "최적"),
    (("준주거", "준공업"), True, "준주거/준공업지역 — 대부분 업종 가능", "양호"),
    (("공업",), False, "⚠️ 공업지역: 일반 상업시설 영업 제한", "주의"),
    (("녹지", "관리", "농림"), False, "⚠️ 녹지/관리지역: 상업시설 설치 불가", "불가"),
]


def evaluate_zoning(zone_type: Optional[str]) -> Regulation:
    if zone_type:
        zone = str(zone_type)
        for markers, can_operate, warning, grade in ZONING_RULES:
            if any(m in zone for m in markers):
                return Regulation(can_operate=can_operate, warning=warning, grade=grade)
    return Regulation(can_operate=True, warning=None, grade="확인필요")
