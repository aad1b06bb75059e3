from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "billing-webhooks"
    api_version: str = "1.0.0"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "postgres"
    db_use_nullpool: bool = (
        False  # True for serverless/one-shot runners, False for the API
    )
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Rate limiting (health probes only, webhooks are never throttled)
    rate_limit_storage_uri: str = "memory://"

    # OpenTelemetry
    otel_service_name: str = "billing-webhooks"
    otel_service_version: str = "1.0.0"

    # Axiom (traces are only exported when a token is configured)
    axiom_token: Optional[str] = None
    axiom_dataset: Optional[str] = None

    # Billing - Stripe (payments)
    stripe_secret_key: str
    stripe_webhook_secret: str
    stripe_api_version: str = "2025-06-30.basil"
    stripe_webhook_tolerance: int = 300  # seconds, same as Stripe's default


settings = Settings()
