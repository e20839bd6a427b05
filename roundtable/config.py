from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from .errors import ConfigError

# Load .env from repo root for local development and scripts.
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)
    firebase_db_url: str | None = Field(default=None, alias="FIREBASE_DB_URL")
    competition_start: str = Field(default="2026-03-01", alias="COMPETITION_START")
    competition_end: str = Field(default="2027-02-28", alias="COMPETITION_END")
    price_providers: str = Field(default="chart,yfinance", alias="PRICE_PROVIDERS")
    yahoo_chart_url: str = Field(default="https://query1.finance.yahoo.com/v8/finance/chart", alias="YAHOO_CHART_URL")
    price_range: str = Field(default="1y", alias="PRICE_RANGE")
    price_interval: str = Field(default="1d", alias="PRICE_INTERVAL")
    market_rate_limit_seconds: float = Field(default=0.3, alias="MARKET_RATE_LIMIT_SECONDS")
    market_retry_attempts: int = Field(default=2, alias="MARKET_RETRY_ATTEMPTS")
    http_timeout_seconds: float = Field(default=30.0, alias="HTTP_TIMEOUT_SECONDS")
    http_retry_attempts: int = Field(default=3, alias="HTTP_RETRY_ATTEMPTS")
    http_retry_backoff_seconds: float = Field(default=1.0, alias="HTTP_RETRY_BACKOFF_SECONDS")

    def provider_names(self) -> list[str]:
        return [name.strip() for name in self.price_providers.split(",") if name.strip()]

    def require_store_url(self) -> str:
        url = (self.firebase_db_url or "").strip()
        if not url:
            raise ConfigError("missing FIREBASE_DB_URL environment variable")
        return url.rstrip("/")

settings = Settings()
