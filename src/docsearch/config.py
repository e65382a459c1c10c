"""Application settings, read from the environment and an optional ``.env``."""
from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    AZURE_SEARCH_ENDPOINT: str | None = None
    AZURE_SEARCH_API_KEY: SecretStr | None = None
    AZURE_SEARCH_INDEX_NAME: str | None = None
    AZURE_SEARCH_SEMANTIC_CONFIG: str | None = None

    LOG_LEVEL: str = "INFO"

    # Used by the Streamlit UI to reach the FastAPI backend.
    API_BASE_URL: str = "http://127.0.0.1:8000"
    API_TIMEOUT_SECONDS: float = 30.0

    def missing_search_settings(self) -> list[str]:
        """Names of the required search settings that are unset or blank."""
        missing: list[str] = []
        if not (self.AZURE_SEARCH_ENDPOINT or "").strip():
            missing.append("AZURE_SEARCH_ENDPOINT")
        if self.AZURE_SEARCH_API_KEY is None or not self.AZURE_SEARCH_API_KEY.get_secret_value():
            missing.append("AZURE_SEARCH_API_KEY")
        if not (self.AZURE_SEARCH_INDEX_NAME or "").strip():
            missing.append("AZURE_SEARCH_INDEX_NAME")
        return missing

    @property
    def search_configured(self) -> bool:
        return not self.missing_search_settings()

    @property
    def semantic_configuration_name(self) -> str | None:
        name = (self.AZURE_SEARCH_SEMANTIC_CONFIG or "").strip()
        return name or None


settings = Settings()
