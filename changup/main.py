# changup/main.py
# -----------------------------------------------------------------------------
# FastAPI 엔트리포인트
# - CORS 전체 허용, OPTIONS 프리플라이트는 본문 없이 응답
# - 도메인 에러 → 정해진 상태코드/본문, 그 외 예외 → 500 고정 메시지
# -----------------------------------------------------------------------------
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from changup.core.config import settings
from changup.core.errors import ChangupError
from changup.core.logging import setup_logging
from changup.routers import analysis, collab, simulate
from changup.schemas.payment import PaymentFailure

PAYMENT_VERIFY_PATH = "/api/payment-verify"

setup_logging()

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(ChangupError)
async def handle_changup_error(request: Request, exc: ChangupError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} → {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


@app.exception_handler(RequestValidationError)
async def handle_bad_request(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} 잘못된 요청: {exc.errors()}")
    if request.url.path == PAYMENT_VERIFY_PATH:
        # 결제 클라이언트는 success/message 형식만 읽는다
        body = PaymentFailure(message="잘못된 요청입니다.").model_dump()
        return JSONResponse(status_code=400, content=body)
    return JSONResponse(status_code=400, content={"error": "잘못된 요청 형식입니다."})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} 처리 중 오류")
    return JSONResponse(status_code=500, content={"error": "서버 오류가 발생했습니다."})


# 필요한 라우터만 include
app.include_router(analysis.router)
app.include_router(collab.router)
app.include_router(simulate.router)


@app.options("/api/{rest:path}", include_in_schema=False)
async def preflight(rest: str):
    return Response(status_code=204)


@app.get("/health")
async def health():
    return {"status": "ok"}
