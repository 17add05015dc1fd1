"""
fluxrpc - Client Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix FLUX_ for the Flux client
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings can be overridden via environment variables with FLUX_ prefix.
    Example: FLUX_URL=https://flux.example.com/api/flux, FLUX_TOKEN=abc123
    """

    # Service endpoint
    url: str = "http://localhost:3030/api/flux"
    token: str = ""

    # Transport configuration (the client adds no timeout of its own)
    timeout: float = 30.0

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = False
    tracing_console_export: bool = False

    model_config = SettingsConfigDict(
        env_prefix="FLUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get client settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
