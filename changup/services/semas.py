# changup/services/semas.py
# -----------------------------------------------------------------------------
# 소상공인시장진흥공단 상가(상권)정보 API
# - 요청 파라미터 구성
# - 응답(body 봉투) 방어적 파싱 → 스냅샷 모델
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from collections import Counter
from typing import Any, Optional

from changup.schemas.analysis import (
    AnalysisQuery,
    CategoryCount,
    NearbyStore,
    SalesSnapshot,
    StoreSnapshot,
    TradeAreaSnapshot,
    TrendSnapshot,
)
from changup.services.scoring import round_half_up, survival_rate, top_categories

STORE_LIST_IN_RADIUS = "storeListInRadius"
TRADE_AREA_LIST = "trdarList"
TRADE_AREA_DETAIL = "trdarSub"
STORE_LIST_IN_UPJONG = "storeListInUpjong"

NEARBY_DISPLAY_LIMIT = 15
TRADE_AREA_RADIUS_M = 300
TREND_RADIUS_M = 1000

OPENED = "01"
CLOSED = "02"


def endpoint(base_url: str, operation: str) -> str:
    return f"{base_url.rstrip('/')}/{operation}"


# ── 요청 파라미터 ─────────────────────────────────────────────────────────────
def store_search_params(key: str, q: AnalysisQuery, cat_code: Optional[str]) -> dict:
    params = {
        "serviceKey": key,
        "pageNo": 1,
        "numOfRows": 100,
        "radius": q.radius_meters,
        "cx": q.longitude,
        "cy": q.latitude,
        "type": "json",
    }
    if cat_code:
        params["indsLclsCd"] = cat_code
    return params


def trade_area_params(key: str, q: AnalysisQuery) -> dict:
    return {
        "serviceKey": key,
        "pageNo": 1,
        "numOfRows": 5,
        "cx": q.longitude,
        "cy": q.latitude,
        "radius": TRADE_AREA_RADIUS_M,
        "type": "json",
    }


def trend_params(key: str, q: AnalysisQuery, cat_code: Optional[str]) -> dict:
    params = {
        "serviceKey": key,
        "pageNo": 1,
        "numOfRows": 100,
        "lat": q.latitude,
        "lng": q.longitude,
        "radius": TREND_RADIUS_M,
        "type": "json",
    }
    if cat_code:
        params["indsLclsCd"] = cat_code
    return params


def sales_params(key: str, trade_area_code: str) -> dict:
    return {"serviceKey": key, "trdarCd": trade_area_code, "type": "json"}


# ── 응답 파싱 유틸 ───────────────────────────────────────────────────────────
def _body(payload: Optional[dict]) -> Optional[dict]:
    if not isinstance(payload, dict):
        return None
    body = payload.get("body")
    return body if isinstance(body, dict) else None


def _items(body: dict) -> list[dict]:
    node = body.get("items")
    if isinstance(node, dict):
        node = node.get("item", [])
    if isinstance(node, dict):
        node = [node]
    if not isinstance(node, list):
        return []
    return [it for it in node if isinstance(it, dict)]


def _to_float(v: Any) -> Optional[float]:
    """숫자 변환. NaN/무한대('1e999', JSON NaN 리터럴 포함)는 값 없음으로."""
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _to_int(v: Any) -> int:
    f = _to_float(v)
    return int(f) if f is not None else 0


def _str_or_none(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    return str(v)


# ── 스냅샷 변환 ──────────────────────────────────────────────────────────────
def parse_stores(payload: Optional[dict], cat_code: Optional[str]) -> StoreSnapshot:
    body = _body(payload)
    if body is None:
        return StoreSnapshot()

    items = _items(body)
    nearby = [
        NearbyStore(
            name=_str_or_none(s.get("bizesNm")),
            category=_str_or_none(s.get("uptaeNm")),
            address=_str_or_none(s.get("rdnwhlAddr")),
            lat=_to_float(s.get("lat")),
            lng=_to_float(s.get("lon")),
        )
        for s in items[:NEARBY_DISPLAY_LIMIT]
    ]
    labels = [str(s.get("uptaeNm") or "기타") for s in items]
    competition_map = dict(Counter(labels))

    same_type = 0
    if cat_code:
        same_type = sum(1 for s in items if s.get("indsLclsCd") == cat_code)

    return StoreSnapshot(
        total_count=_to_int(body.get("totalCount")),
        nearby_stores=nearby,
        competition_map=competition_map,
        top_categories=[
            CategoryCount(name=name, count=count)
            for name, count in top_categories(labels)
        ],
        same_type_count=same_type,
    )


def parse_trade_area(payload: Optional[dict]) -> TradeAreaSnapshot:
    body = _body(payload)
    items = _items(body) if body else []
    if not items:
        return TradeAreaSnapshot()
    first = items[0]
    return TradeAreaSnapshot(
        trade_area_name=_str_or_none(first.get("trdarNm")),
        trade_area_code=_str_or_none(first.get("trdarCd")),
    )


def parse_sales(payload: Optional[dict]) -> Optional[SalesSnapshot]:
    """상권 매출 상세. 항목이 없으면 None (0으로 채우지 않음)."""
    body = _body(payload)
    items = _items(body) if body else []
    if not items:
        return None
    si = items[0]
    amount = _to_float(si.get("mnthSaleAmt"))
    return SalesSnapshot(
        avg_monthly_sales=round_half_up(amount / 10_000) if amount else None,
        avg_business_age_years=_to_float(si.get("strtupYcnt")) or None,
        close_rate_percent=_to_float(si.get("clsbizRt")) or None,
    )


def parse_trend(payload: Optional[dict]) -> TrendSnapshot:
    body = _body(payload)
    if body is None:
        return TrendSnapshot()
    items = _items(body)
    status = [str(s.get("opnSfteamDecodeId") or "") for s in items]
    opened = status.count(OPENED)
    closed = status.count(CLOSED)
    return TrendSnapshot(
        total_in_category=_to_int(body.get("totalCount")),
        open_count=opened,
        close_count=closed,
        survival_rate_percent=survival_rate(opened, closed),
    )
