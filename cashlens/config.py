"""
Application Configuration
Loads settings from environment variables with validation.

Settings are only read here. Everything downstream receives an explicit
config object so adapters and clients can be built from synthetic values.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


QUICKBOOKS_SANDBOX_URL = "https://sandbox-quickbooks.api.intuit.com"
QUICKBOOKS_PRODUCTION_URL = "https://quickbooks.api.intuit.com"
XERO_API_URL = "https://api.xero.com/api.xro/2.0"


class RetryConfig(BaseModel):
    """Retry policy for report fetch clients."""

    max_retries: int = 3
    backoff_base: float = 1.0
    max_backoff: float = 16.0


class QuickBooksConfig(BaseModel):
    """Connection settings for the QuickBooks Online reports API."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    environment: Literal["sandbox", "production"] = "sandbox"
    timeout_seconds: float = 30.0
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @property
    def base_url(self) -> str:
        if self.environment == "sandbox":
            return QUICKBOOKS_SANDBOX_URL
        return QUICKBOOKS_PRODUCTION_URL


class XeroConfig(BaseModel):
    """Connection settings for the Xero accounting API."""

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    base_url: str = XERO_API_URL
    timeout_seconds: float = 30.0
    retry: RetryConfig = Field(default_factory=RetryConfig)


class NarrativeConfig(BaseModel):
    """OpenAI settings for narrative generation."""

    api_key: str = ""
    model: str = "gpt-4o"
    temperature: float = 0.7
    max_tokens: int = 300
    extended_max_tokens: int = 400


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = "Cashlens"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # ============================================
    # Server Settings
    # ============================================
    host: str = "0.0.0.0"
    port: int = 8000

    # ============================================
    # QuickBooks API
    # ============================================
    quickbooks_client_id: str = ""
    quickbooks_client_secret: str = ""
    quickbooks_redirect_uri: str = ""
    quickbooks_environment: Literal["sandbox", "production"] = "sandbox"

    # ============================================
    # Xero API
    # ============================================
    xero_client_id: str = ""
    xero_client_secret: str = ""
    xero_redirect_uri: str = ""

    # ============================================
    # OpenAI
    # ============================================
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.7

    # ============================================
    # Report Fetching
    # ============================================
    http_timeout_seconds: float = 30.0
    fetch_max_retries: int = 3
    fetch_backoff_base: float = 1.0
    fetch_max_backoff: float = 16.0

    # ============================================
    # CORS Settings
    # ============================================
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_retries=self.fetch_max_retries,
            backoff_base=self.fetch_backoff_base,
            max_backoff=self.fetch_max_backoff,
        )

    def quickbooks_config(self) -> QuickBooksConfig:
        return QuickBooksConfig(
            client_id=self.quickbooks_client_id,
            client_secret=self.quickbooks_client_secret,
            redirect_uri=self.quickbooks_redirect_uri,
            environment=self.quickbooks_environment,
            timeout_seconds=self.http_timeout_seconds,
            retry=self.retry_config(),
        )

    def xero_config(self) -> XeroConfig:
        return XeroConfig(
            client_id=self.xero_client_id,
            client_secret=self.xero_client_secret,
            redirect_uri=self.xero_redirect_uri,
            timeout_seconds=self.http_timeout_seconds,
            retry=self.retry_config(),
        )

    def narrative_config(self) -> NarrativeConfig:
        return NarrativeConfig(
            api_key=self.openai_api_key,
            model=self.openai_model,
            temperature=self.openai_temperature,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid loading .env file on every call.
    """
    return Settings()
