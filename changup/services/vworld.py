# changup/services/vworld.py
# -----------------------------------------------------------------------------
# VWorld 데이터 API: 연속지적도(LP_PA_CBND_BUBUN) 용도지역 조회
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Optional

from changup.schemas.analysis import AnalysisQuery, LandUseSnapshot
from changup.services.zoning import evaluate_zoning

ZONING_LAYER = "LP_PA_CBND_BUBUN"
BBOX_HALF_WIDTH_DEG = 0.005


def zoning_params(key: str, domain: str, q: AnalysisQuery) -> dict:
    d = BBOX_HALF_WIDTH_DEG
    lng, lat = q.longitude, q.latitude
    bbox = f"{lng - d},{lat - d},{lng + d},{lat + d}"
    return {
        "service": "data",
        "request": "GetFeature",
        "data": ZONING_LAYER,
        "key": key,
        "domain": domain,
        "geomFilter": f"BOX({bbox})",
        "format": "json",
        "size": 5,
        "page": 1,
    }


def _first_feature_properties(payload: Optional[dict]) -> dict:
    node: object = payload
    for key in ("response", "result", "featureCollection", "features"):
        if not isinstance(node, dict):
            return {}
        node = node.get(key)
    if not isinstance(node, list) or not node or not isinstance(node[0], dict):
        return {}
    props = node[0].get("properties")
    return props if isinstance(props, dict) else {}


def parse_land_use(payload: Optional[dict]) -> LandUseSnapshot:
    """첫 번째 필지의 용도지역. 규제 평가는 값이 없어도 항상 채운다."""
    props = _first_feature_properties(payload)
    zone_type = props.get("prposAreaDstrcNm") or props.get("PRPOS_AREA_DSTRC_NM") or None
    zone_code = props.get("prposAreaDstrcCd") or None
    if zone_type is not None:
        zone_type = str(zone_type)

    return LandUseSnapshot(
        zone_type=zone_type,
        zone_code=str(zone_code) if zone_code is not None else None,
        regulation=evaluate_zoning(zone_type),
    )
