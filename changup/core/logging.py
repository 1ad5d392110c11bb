# changup/core/logging.py
# -----------------------------------------------------------------------------
# Loguru 기반 로깅 설정
# - 파일 회전/백트레이스 + stderr 동시 출력
# - 레벨은 Settings.LOG_LEVEL
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from changup.core.config import settings


def setup_logging(level: str | None = None, log_dir: str | None = None) -> None:
    level = (level or settings.LOG_LEVEL).upper()
    path = Path(log_dir or settings.LOG_DIR)
    path.mkdir(exist_ok=True, parents=True)

    logger.remove()  # 기본 핸들러 제거
    logger.add(sys.stderr, level=level)
    logger.add(
        path / "app.log",
        rotation="10 MB",
        retention=10,  # 최근 10개 파일 유지
        enqueue=True,  # 멀티프로세스 안전
        backtrace=True,
        diagnose=False,  # 요청값(키 포함) 노출 방지
        level=level,
    )
