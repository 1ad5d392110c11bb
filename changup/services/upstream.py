# changup/services/upstream.py
# -----------------------------------------------------------------------------
# 업스트림 JSON 호출 헬퍼
# - 호출 1건당 데드라인(asyncio.wait_for): 초과 시 해당 호출만 취소
# - 전송 실패/비정상 상태코드/파싱 실패/타임아웃 → None (요청 전체는 계속 진행)
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Mapping, Optional

import httpx
from loguru import logger

from changup.core.errors import UpstreamUnavailable


async def _get_json(
    client: httpx.AsyncClient, name: str, url: str, params: Mapping[str, Any] | None
) -> dict:
    try:
        r = await client.get(url, params=params)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPStatusError as e:
        raise UpstreamUnavailable(name, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        # 메시지에 serviceKey가 포함된 URL이 들어가므로 예외 타입만 남긴다
        raise UpstreamUnavailable(name, type(e).__name__) from e
    except ValueError as e:
        raise UpstreamUnavailable(name, "JSON 파싱 실패") from e
    if not isinstance(data, dict):
        raise UpstreamUnavailable(name, "예상하지 못한 응답 형식")
    return data


async def fetch_json(
    client: httpx.AsyncClient,
    name: str,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout: float = 8.0,
) -> Optional[dict]:
    """GET 한 번. 성공 시 dict, 실패 시 None. 재시도 없음."""
    try:
        return await asyncio.wait_for(_get_json(client, name, url, params), timeout)
    except asyncio.TimeoutError:
        logger.warning(f"[{name}] timeout {timeout:.1f}s")
    except UpstreamUnavailable as e:
        logger.warning(f"[{name}] 업스트림 실패: {e.reason}")
    return None


async def gather_soft(*calls: Awaitable[Optional[dict]]) -> list[Optional[dict]]:
    """
    모든 호출 완료까지 대기. 개별 실패는 None으로 치환하고
    형제 호출은 취소하지 않는다.
    """
    results = await asyncio.gather(*calls, return_exceptions=True)
    out: list[Optional[dict]] = []
    for res in results:
        if isinstance(res, BaseException):
            logger.error(f"[upstream] 예기치 못한 오류: {res!r}")
            out.append(None)
        else:
            out.append(res)
    return out
