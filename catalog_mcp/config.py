from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class CatalogClientConfig(BaseModel):
    """Connection settings handed to the catalog API client.

    Attributes:
        api_key: Key sent as ``Authorization: ApiKey <key>``.
        api_domain: Scheme and host of the catalog service.
        api_base_path: Path prefix of the catalog API.
        session_id: Optional streaming channel forwarded as a header.
        timeout: Optional request timeout in seconds; ``None`` disables it.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    api_domain: str = "https://studio.igot.ai"
    api_base_path: str = "/v1/catalog"
    session_id: str | None = None
    timeout: float | None = None

    @property
    def base_url(self) -> str:
        path = self.api_base_path if self.api_base_path.startswith("/") else f"/{self.api_base_path}"
        return f"{self.api_domain.rstrip('/')}{path}"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


class Settings(BaseSettings):
    # App
    APP_NAME: str = "catalog-server"

    # Catalog API
    DATALOG_API_KEY: str = ""
    DATALOG_API: str = "https://studio.igot.ai"
    DATALOG_URI: str = "/v1/catalog"
    SESSION_ID: str | None = None
    HTTP_TIMEOUT_SECONDS: float | None = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["text", "json"] = "text"

    # MCP
    MCP_TRANSPORT: Literal["stdio", "http"] = "stdio"
    HTTP_HOST: str = "127.0.0.1"
    HTTP_PORT: int = 8000

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def client_config(self) -> CatalogClientConfig:
        return CatalogClientConfig(
            api_key=self.DATALOG_API_KEY,
            api_domain=self.DATALOG_API,
            api_base_path=self.DATALOG_URI,
            session_id=self.SESSION_ID or None,
            timeout=self.HTTP_TIMEOUT_SECONDS,
        )


@lru_cache()
def get_settings() -> Settings:
    """Load settings from the environment and `.env`, once per process.

    Raises:
        ConfigurationError: If a variable holds a value of the wrong type.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
