# tests/conftest.py
# -----------------------------------------------------------------------------
# 공용 픽스처
# - settings: .env 무시, 테스트용 키만 채운 Settings
# - upstream: 라우트를 테스트마다 채우는 FakeUpstream
# - api: 설정/HTTP 클라이언트 의존성을 교체한 TestClient
# -----------------------------------------------------------------------------
import pytest
from fastapi.testclient import TestClient

from changup.core.config import Settings, get_settings
from changup.core.http import get_http_client
from changup.main import app

from fakes import FakeUpstream


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        DATA_GO_KR_KEY="test-data-key",
        VWORLD_KEY="test-vworld-key",
        VWORLD_DOMAIN=None,
        VERCEL_URL=None,
        JUSO_KEY="test-juso-key",
        TOSS_SECRET_KEY=None,
        RESEND_API_KEY=None,
        ANTHROPIC_KEY=None,
        UPSTREAM_TIMEOUT_S=0.5,
        ANALYZE_MARKET_DYNAMICS=True,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def api(settings, upstream):
    async def _client():
        async with upstream.client() as c:
            yield c

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _client
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()
