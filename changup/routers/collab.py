# changup/routers/collab.py
# -----------------------------------------------------------------------------
# 단일 업스트림 프록시들
# - GET  /api/address         : 도로명주소 검색
# - POST /api/payment-verify  : 토스페이먼츠 결제 승인
# - POST /api/send-email      : 분석 결과 메일 발송
# - POST /api/ai-summary      : AI 요약 (미설정 시 템플릿)
# -----------------------------------------------------------------------------
from typing import Optional

import httpx
from fastapi import APIRouter, Depends

from changup.core.config import Settings, get_settings
from changup.core.errors import ValidationError
from changup.core.http import get_http_client
from changup.schemas.mail import ReportEmailRequest, ReportEmailResult
from changup.schemas.payment import (
    PaymentConfirmRequest,
    PaymentConfirmResult,
    PaymentFailure,
)
from changup.schemas.summary import SummaryRequest, SummaryResult
from changup.services.juso import search_address
from changup.services.mailer import send_report
from changup.services.summary import summarize
from changup.services.toss import confirm_payment

router = APIRouter(prefix="/api", tags=["collaborators"])


@router.get("/address")
async def address(
    keyword: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    if not keyword:
        raise ValidationError("검색어가 필요합니다")
    return await search_address(keyword, client=client, settings=settings)


@router.post(
    "/payment-verify",
    response_model=PaymentConfirmResult,
    responses={400: {"model": PaymentFailure}, 500: {"model": PaymentFailure}},
)
async def payment_verify(
    req: PaymentConfirmRequest,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await confirm_payment(req, client=client, settings=settings)


@router.post("/send-email", response_model=ReportEmailResult)
async def send_email(
    req: ReportEmailRequest,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await send_report(req, client=client, settings=settings)


@router.post("/ai-summary", response_model=SummaryResult)
async def ai_summary(req: SummaryRequest, settings: Settings = Depends(get_settings)):
    return await summarize(req, settings=settings)
