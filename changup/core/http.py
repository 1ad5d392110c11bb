# changup/core/http.py
# -----------------------------------------------------------------------------
# 요청 스코프 httpx.AsyncClient
# - FastAPI Depends(get_http_client)로 주입 (테스트에서는 MockTransport로 교체)
# - 호출별 전체 데드라인은 services.upstream.fetch_json이 담당
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator

import httpx

from changup.core.config import settings

LIMITS = httpx.Limits(max_keepalive_connections=10, max_connections=20)


def _timeout() -> httpx.Timeout:
    t = settings.UPSTREAM_TIMEOUT_S
    return httpx.Timeout(connect=t, read=t, write=t, pool=t)


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """요청 스코프 클라이언트 제공"""
    async with httpx.AsyncClient(timeout=_timeout(), limits=LIMITS) as client:
        yield client
