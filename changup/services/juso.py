# changup/services/juso.py
# 행정안전부 도로명주소 검색 API 프록시. 실패 시 빈 결과 형태 반환.
import copy

import httpx

from changup.core.config import Settings
from changup.services.upstream import fetch_json

EMPTY_RESULT = {"results": {"juso": []}}


async def search_address(
    keyword: str, *, client: httpx.AsyncClient, settings: Settings
) -> dict:
    params = {
        "confmKey": settings.JUSO_KEY or "",
        "currentPage": 1,
        "countPerPage": 5,
        "keyword": keyword,
        "resultType": "json",
    }
    data = await fetch_json(
        client,
        "juso",
        settings.JUSO_API_URL,
        params=params,
        timeout=settings.UPSTREAM_TIMEOUT_S,
    )
    return data or copy.deepcopy(EMPTY_RESULT)
