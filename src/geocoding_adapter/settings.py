from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidCredentials
from .base import HttpClient
from .providers import ProviderAdapter
from .transport import DEFAULT_USER_AGENT, RequestsHttpClient


class Settings(BaseSettings):
    geoapify_api_key: Optional[SecretStr] = None
    provider: str = "geoapify"
    timeout: float = 10.0
    locale: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT

    model_config = SettingsConfigDict(
        env_prefix="GEOCODING_",
        env_file=".env",
        extra="ignore",
    )

    def api_key_for(self, provider: str) -> Optional[str]:
        secret = getattr(self, f"{provider.lower()}_api_key", None)
        return secret.get_secret_value() if secret is not None else None


settings = Settings()


def build_adapter(
    config: Optional[Settings] = None,
    transport: Optional[HttpClient] = None,
) -> ProviderAdapter:
    """
    Assemble an adapter for the configured provider.

    Args:
        config: Settings to read from (defaults to the module-level settings)
        transport: HttpClient to use (defaults to a RequestsHttpClient)

    Raises:
        InvalidCredentials: No API key is configured for the provider
    """
    config = config or settings
    api_key = config.api_key_for(config.provider)
    if not api_key:
        raise InvalidCredentials(
            f"No API key configured for '{config.provider}'. "
            f"Set GEOCODING_{config.provider.upper()}_API_KEY."
        )
    if transport is None:
        transport = RequestsHttpClient(timeout=config.timeout, user_agent=config.user_agent)
    return ProviderAdapter.from_name(config.provider, transport, api_key)
