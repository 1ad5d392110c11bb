# changup/services/toss.py
# -----------------------------------------------------------------------------
# 토스페이먼츠 결제 승인(confirm), 서버 간 호출
# - 시크릿 키는 Basic 인증 (키 + ':')
# - 승인 거절은 PaymentRejected(400), 전송 오류는 PaymentServerError(500)
# -----------------------------------------------------------------------------
from __future__ import annotations

import httpx
from loguru import logger

from changup.core.config import Settings
from changup.core.errors import (
    ConfigurationMissing,
    PaymentRejected,
    PaymentServerError,
)
from changup.schemas.payment import PaymentConfirmRequest, PaymentConfirmResult

DONE = "DONE"


async def confirm_payment(
    req: PaymentConfirmRequest, *, client: httpx.AsyncClient, settings: Settings
) -> PaymentConfirmResult:
    if not req.payment_key or not req.order_id or not req.amount:
        raise PaymentRejected("필수 파라미터 누락")
    if not settings.TOSS_SECRET_KEY:
        logger.error("[toss] TOSS_SECRET_KEY 미설정")
        raise ConfigurationMissing("결제 서비스가 설정되지 않았습니다.")

    try:
        r = await client.post(
            settings.TOSS_CONFIRM_URL,
            auth=(settings.TOSS_SECRET_KEY, ""),
            json={
                "paymentKey": req.payment_key,
                "orderId": req.order_id,
                "amount": req.amount,
            },
            timeout=settings.UPSTREAM_TIMEOUT_S,
        )
    except httpx.HTTPError as e:
        logger.error(f"[toss] confirm 호출 실패: {type(e).__name__}")
        raise PaymentServerError("결제 검증 서버 오류가 발생했습니다.") from e
    try:
        data = r.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if r.is_success and data.get("status") == DONE:
        logger.info(f"[toss] 승인 완료 orderId={data.get('orderId')}")
        return PaymentConfirmResult(
            payment_key=data.get("paymentKey"),
            order_id=data.get("orderId"),
            amount=data.get("totalAmount"),
            approved_at=data.get("approvedAt"),
            method=data.get("method"),
        )

    logger.warning(f"[toss] 승인 실패 status={r.status_code} code={data.get('code')}")
    raise PaymentRejected(
        data.get("message") or "결제 승인에 실패했습니다.", code=data.get("code")
    )
