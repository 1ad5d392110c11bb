# changup/routers/analysis.py
# -----------------------------------------------------------------------------
# GET /api/analyze : 통합 상권 분석
# - lat/lng 누락·오류는 ValidationError → 400 (업스트림 호출 전에 거절)
# -----------------------------------------------------------------------------
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Query

from changup.core.config import Settings, get_settings
from changup.core.http import get_http_client
from changup.schemas.analysis import AnalysisResult
from changup.services.analyzer import analyze, build_query

router = APIRouter(prefix="/api", tags=["analysis"])


@router.get("/analyze", response_model=AnalysisResult)
async def analyze_area(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    biz_type: Optional[str] = Query(None, alias="bizType"),
    radius: Optional[str] = "500",
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    query = build_query(lat, lng, biz_type, radius)
    return await analyze(query, client=client, settings=settings)
