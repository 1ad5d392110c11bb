# changup/core/config.py
# -----------------------------------------------------------------------------
# 전역 설정 관리 (pydantic-settings v2)
# - .env 파일과 OS 환경변수를 읽어 Settings 객체로 제공
# - 프로세스 기동 시 한 번 생성, 이후 읽기 전용 (Depends(get_settings)로 주입)
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DEPLOY_DOMAIN = "https://changup-map.netlify.app"


class Settings(BaseSettings):
    # 기본
    APP_NAME: str = "changup-map"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # 소상공인시장진흥공단 상가(상권)정보, 공공데이터포털 (Decoding 키)
    DATA_GO_KR_KEY: str | None = None
    SEMAS_API_URL: str = "https://apis.data.go.kr/B553077/api/open/sdsc2"

    # VWorld 토지이용 (용도지역)
    VWORLD_KEY: str | None = None
    VWORLD_DOMAIN: str | None = None
    VERCEL_URL: str | None = None  # 배포 환경이 넘겨주는 호스트명
    VWORLD_API_URL: str = "https://api.vworld.kr/req/data"

    # 도로명주소
    JUSO_KEY: str | None = None
    JUSO_API_URL: str = "https://business.juso.go.kr/addrlink/addrLinkApi.do"

    # 토스페이먼츠
    TOSS_SECRET_KEY: str | None = None
    TOSS_CONFIRM_URL: str = "https://api.tosspayments.com/v1/payments/confirm"

    # Resend (리포트 메일)
    RESEND_API_KEY: str | None = None
    RESEND_API_URL: str = "https://api.resend.com/emails"
    SEND_FROM_EMAIL: str = "onboarding@resend.dev"

    # AI 요약 (미설정 시 템플릿 모드)
    ANTHROPIC_KEY: str | None = None
    ANTHROPIC_MODEL: str = "claude-haiku-4-5-20251001"
    LLM_TIMEOUT_S: float = 15.0

    # 업스트림 호출 1건당 타임아웃(초)
    UPSTREAM_TIMEOUT_S: float = 8.0

    # 개업/폐업 추세 + 상권 매출(trdarSub) 포함 여부
    ANALYZE_MARKET_DYNAMICS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # .env에 추가 필드 무시
    )

    @property
    def vworld_domain(self) -> str:
        """VWorld에 등록된 호출 도메인. 명시값 → 배포 호스트 → 기본 도메인 순."""
        if self.VWORLD_DOMAIN:
            return self.VWORLD_DOMAIN
        if self.VERCEL_URL:
            return f"https://{self.VERCEL_URL}"
        return DEFAULT_DEPLOY_DOMAIN


settings = Settings()


def get_settings() -> Settings:
    return settings
