from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Greeter settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, frozen=True)

    # Service
    service_name: str = "greeter"
    log_level: str = "INFO"

    # Invocation
    default_alias: str = "default"  # Used when the function ARN is unqualified
    timeout_margin_ms: int = 500  # Reserved for signalling a timeout before the runtime kills us


settings = Settings()
