"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Remote KV is selected iff both KV URL and token are set; e-mail is enabled iff
      SMTP host, user and password are all set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: the service runs out-of-the-box
      on the file backend with e-mail skipped
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVERLESS_DATA_DIR = "/tmp/valiant-garage-doors"
LOCAL_DATA_DIR = "data"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Runtime
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    vercel: str | None = None
    aws_lambda_function_name: str | None = None

    # Storage
    data_dir: str | None = None
    max_requests: int = Field(5000, ge=1)
    max_reviews: int = Field(1000, ge=1)
    kv_rest_api_url: str | None = None
    kv_rest_api_token: str | None = None
    kv_prefix: str = "prod"
    kv_timeout_seconds: float = 10.0

    # Notifications
    requests_to: str = "vm@valiantdoor.com"
    requests_from: str | None = None
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_timeout_seconds: float = 15.0
    business_name: str = "Valiant Garage Door"

    # Shared secrets
    test_email_key: str | None = None
    # ADR: unset keeps the admin listing open (legacy behavior), logged at startup
    admin_key: str | None = None

    # Admission control
    api_rate_limit: int = Field(100, ge=1)
    api_rate_window_seconds: float = Field(15 * 60, gt=0)
    test_email_rate_limit: int = Field(5, ge=1)
    test_email_rate_window_seconds: float = Field(60 * 60, gt=0)

    # HTTP
    public_dir: str = "public"
    cors_origins: list[str] = []

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_serverless(self) -> bool:
        return bool(self.vercel or self.aws_lambda_function_name)

    @property
    def resolved_data_dir(self) -> str:
        if self.data_dir:
            return self.data_dir
        return SERVERLESS_DATA_DIR if self.is_serverless else LOCAL_DATA_DIR

    @property
    def kv_enabled(self) -> bool:
        return bool(self.kv_rest_api_url and self.kv_rest_api_token)

    @property
    def email_enabled(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_pass)

    @property
    def email_from(self) -> str:
        return self.requests_from or self.requests_to


@lru_cache
def get_settings() -> Settings:
    return Settings()
