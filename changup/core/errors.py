# changup/core/errors.py
# -----------------------------------------------------------------------------
# 에러 분류
# - ValidationError       : 클라이언트 입력 오류 (400)
# - ConfigurationMissing  : 필수 키 미설정 (503)
# - PaymentRejected       : 결제 승인 거절 (400, 결제 응답 형식)
# - UpstreamUnavailable   : 업스트림 실패. fetch 경계에서 None으로 변환되며 응답까지 전파되지 않음
# -----------------------------------------------------------------------------
from typing import Any


class ChangupError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(ChangupError):
    status_code = 400


class ConfigurationMissing(ChangupError):
    status_code = 503


class PaymentRejected(ChangupError):
    status_code = 400

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code

    def payload(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "code": self.code}


class UpstreamUnavailable(Exception):
    """전송 실패/비정상 상태코드/타임아웃/파싱 실패."""

    def __init__(self, upstream: str, reason: str):
        super().__init__(f"{upstream}: {reason}")
        self.upstream = upstream
        self.reason = reason


class PaymentServerError(PaymentRejected):
    status_code = 500


class UpstreamRejected(ChangupError):
    """업스트림이 요청을 명시적으로 거절 (메일 발송 등)."""

    status_code = 400
