# changup/services/analyzer.py
# -----------------------------------------------------------------------------
# 통합 상권 분석
# - 업종 분류 → 업스트림 4건 병렬 호출(실패 허용) → 상권 매출 순차 호출
# - 스냅샷 병합 + 경쟁 강도/규제 등급/폐업 위험 가산점 산출
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

import httpx
from loguru import logger

from changup.core.config import Settings
from changup.core.errors import ValidationError
from changup.schemas.analysis import (
    AnalysisQuery,
    AnalysisResult,
    AnalysisSummary,
    Location,
    SalesSnapshot,
    TrendSnapshot,
)
from changup.services import semas, vworld
from changup.services.classifier import classify
from changup.services.scoring import close_risk_bonus, competition_level
from changup.services.upstream import fetch_json, gather_soft

DEFAULT_RADIUS_M = 500


def _parse_coordinate(raw: Optional[str], name: str) -> float:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{name} 값이 올바른 숫자가 아닙니다") from None
    if not math.isfinite(value):
        raise ValidationError(f"{name} 값이 올바른 숫자가 아닙니다")
    return value


def build_query(
    lat: Optional[str],
    lng: Optional[str],
    biz_type: Optional[str] = None,
    radius: Optional[str] = None,
) -> AnalysisQuery:
    """쿼리스트링 → AnalysisQuery. 위/경도 누락·오류는 ValidationError."""
    if not lat or not lng:
        raise ValidationError("위치 정보(lat, lng)가 필요합니다")
    latitude = _parse_coordinate(lat, "lat")
    longitude = _parse_coordinate(lng, "lng")

    radius_m = DEFAULT_RADIUS_M
    if radius not in (None, ""):
        try:
            radius_m = int(radius)
        except ValueError:
            raise ValidationError("radius 값이 올바른 정수가 아닙니다") from None
        if radius_m <= 0:
            raise ValidationError("radius 값은 0보다 커야 합니다")

    return AnalysisQuery(
        latitude=latitude,
        longitude=longitude,
        business_type=biz_type or None,
        radius_meters=radius_m,
    )


async def analyze(
    query: AnalysisQuery, *, client: httpx.AsyncClient, settings: Settings
) -> AnalysisResult:
    cat_code = classify(query.business_type)
    key = settings.DATA_GO_KR_KEY or ""
    timeout = settings.UPSTREAM_TIMEOUT_S
    with_dynamics = settings.ANALYZE_MARKET_DYNAMICS
    base = settings.SEMAS_API_URL

    # 1) 병렬 호출: 상가 / 용도지역 / 상권 / (개폐업 추세)
    calls = [
        fetch_json(
            client,
            "store",
            semas.endpoint(base, semas.STORE_LIST_IN_RADIUS),
            params=semas.store_search_params(key, query, cat_code),
            timeout=timeout,
        ),
        fetch_json(
            client,
            "landuse",
            settings.VWORLD_API_URL,
            params=vworld.zoning_params(
                settings.VWORLD_KEY or "", settings.vworld_domain, query
            ),
            timeout=timeout,
        ),
        fetch_json(
            client,
            "trade_area",
            semas.endpoint(base, semas.TRADE_AREA_LIST),
            params=semas.trade_area_params(key, query),
            timeout=timeout,
        ),
    ]
    if with_dynamics:
        calls.append(
            fetch_json(
                client,
                "trend",
                semas.endpoint(base, semas.STORE_LIST_IN_UPJONG),
                params=semas.trend_params(key, query, cat_code),
                timeout=timeout,
            )
        )
    results = await gather_soft(*calls)
    store_raw, land_raw, trade_raw = results[:3]

    stores = semas.parse_stores(store_raw, cat_code)
    landuse = vworld.parse_land_use(land_raw)
    trade_area = semas.parse_trade_area(trade_raw)

    # 2) 상권 매출: 상권 코드가 있어야 호출 가능하므로 순차
    sales: Optional[SalesSnapshot] = None
    trend: Optional[TrendSnapshot] = None
    if with_dynamics:
        trend = semas.parse_trend(results[3])
        if trade_area.trade_area_code and settings.DATA_GO_KR_KEY:
            (sales_raw,) = await gather_soft(
                fetch_json(
                    client,
                    "trade_area_sales",
                    semas.endpoint(base, semas.TRADE_AREA_DETAIL),
                    params=semas.sales_params(key, trade_area.trade_area_code),
                    timeout=timeout,
                )
            )
            sales = semas.parse_sales(sales_raw)

    # 3) 파생 점수
    level, score = competition_level(stores.total_count)
    regulation = landuse.regulation
    summary = AnalysisSummary(
        total_stores_nearby=stores.total_count,
        competition_level=level,
        competition_score=score,
        regulation_grade=regulation.grade,
        can_operate=regulation.can_operate,
        regulation_warning=regulation.warning,
        close_risk_bonus=close_risk_bonus(sales.close_rate_percent if sales else None),
    )

    logger.info(
        f"[analyze] ({query.latitude:.5f},{query.longitude:.5f}) "
        f"biz={query.business_type!r} code={cat_code} stores={stores.total_count} "
        f"zone={landuse.zone_type} trdar={trade_area.trade_area_code} "
        f"competition={level}/{score}"
    )

    return AnalysisResult(
        location=Location(lat=query.latitude, lng=query.longitude),
        biz_type=query.business_type,
        stores=stores,
        landuse=landuse,
        trade_area=trade_area,
        sales=sales,
        trend=trend,
        analysis=summary,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
