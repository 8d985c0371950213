"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "emergency-sos"
    debug: bool = False
    database_url: str = "sqlite:///./emergency_sos.db"
    api_prefix: str = "/api"
    api_host: str = "127.0.0.1"
    api_port: int = 5000
    cors_origins: list[str] = ["*"]

    # Twilio (all three required, otherwise SMS is simulated)
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    twilio_timeout_seconds: float = 10.0

    # Client
    api_base_url: str = "http://localhost:5000/api"
    contacts_cache_path: str = "~/.emergency_sos/contacts.json"
    location_timeout_ms: int = 10_000

    @property
    def twilio_configured(self) -> bool:
        """True when every Twilio credential is present and not a template placeholder."""
        if not (self.twilio_account_sid and self.twilio_auth_token and self.twilio_phone_number):
            return False
        return not self.twilio_account_sid.startswith("your_")


settings = Settings()
