# changup/schemas/payment.py
# -----------------------------------------------------------------------------
# 결제 승인(토스페이먼츠 confirm) 스키마
# - 요청 필드는 모두 선택: 누락 판단은 서비스에서 하고 고정 메시지로 응답
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel

from changup.schemas.analysis import CamelModel


class PaymentConfirmRequest(CamelModel):
    payment_key: Optional[str] = None
    order_id: Optional[str] = None
    amount: Optional[int] = None


class PaymentConfirmResult(CamelModel):
    success: bool = True
    payment_key: Optional[str] = None
    order_id: Optional[str] = None
    amount: Optional[int] = None
    approved_at: Optional[str] = None
    method: Optional[str] = None


class PaymentFailure(BaseModel):
    success: bool = False
    message: str
    code: Optional[str] = None
