from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from llmunify.providers.models import ClientConfig
from llmunify.providers.registry import Provider


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="llmunify")

    # Observability
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    otel_exporter_otlp_endpoint: str | None = Field(default=None)
    otel_service_name: str = Field(default="llmunify")

    # LLM provider API keys, kept as SecretStr so they never reach logs
    openai_api_key: SecretStr | None = Field(default=None)
    anthropic_api_key: SecretStr | None = Field(default=None)
    gemini_api_key: SecretStr | None = Field(default=None)
    mistral_api_key: SecretStr | None = Field(default=None)

    # Base URL overrides; None keeps each vendor's default
    openai_base_url: str | None = Field(default=None)
    anthropic_base_url: str | None = Field(default=None)
    gemini_base_url: str | None = Field(default=None)
    mistral_base_url: str | None = Field(default=None)
    openai_managed_deployment: bool = Field(default=False)

    # LLM call behaviour
    llm_timeout: float = Field(default=30.0)

    # Gate for tests that talk to real vendors
    integration_tests: bool = Field(default=False)

    def api_key_for(self, provider: Provider) -> str | None:
        secret: SecretStr | None = getattr(self, f"{provider.id}_api_key")
        return secret.get_secret_value() if secret is not None else None

    def base_url_for(self, provider: Provider) -> str | None:
        return getattr(self, f"{provider.id}_base_url") or None

    def client_config(self, provider: Provider) -> ClientConfig:
        """Build an explicit :class:`ClientConfig` for *provider* from these settings."""
        return ClientConfig(
            api_key=self.api_key_for(provider),
            base_url=self.base_url_for(provider),
            timeout=self.llm_timeout,
            managed_deployment=provider is Provider.OPENAI and self.openai_managed_deployment,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
