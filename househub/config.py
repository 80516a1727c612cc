"""Application configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of househub/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "HouseHub"
    app_env: str = "development"
    debug: bool = False

    # Required: the service refuses to start without a data store and a signing key
    database_url: str
    jwt_secret_key: str

    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    @field_validator("database_url", "jwt_secret_key")
    @classmethod
    def required_non_empty(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("must be set (see .env.example)")
        return v

    mailgun_api_key: str = ""
    mailgun_domain: str = ""
    mailgun_base_url: str = "https://api.mailgun.net"
    mailgun_from_email: str = "noreply@househub.local"
    mailgun_from_name: str = "HouseHub"

    @field_validator("mailgun_api_key", "mailgun_domain", "mailgun_base_url", "mailgun_from_email", mode="before")
    @classmethod
    def strip_mailgun(cls, v: str) -> str:
        return (v or "").strip()

    public_app_url: str = "http://localhost:3000"

    # Outbound call policy: timeout per attempt, attempts, linear backoff base
    request_timeout_seconds: float = 10.0
    retry_attempts: int = 3
    retry_delay_seconds: float = 1.0

    invite_max_workers: int = 4
    invite_simulate_when_unconfigured: bool = True

    upcoming_reservation_days: int = 30

    class Config:
        env_file = str(_env_path)
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
