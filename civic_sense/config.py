from os import environ
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

NEWS_API_URL = "https://newsapi.org/v2/top-headlines"


def _env_bool(name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime configuration gathered from environment variables.

    Attributes:
        data_dir: Directory holding the JSON collection files
        jwt_secret: Secret used to sign and verify access tokens
        jwt_algorithm: Algorithm used for access tokens
        access_token_expire_minutes: Lifetime of issued access tokens
        lock_timeout: Seconds to wait for exclusive access to a collection
        lock_stale_after: Age in seconds after which a lock marker is abandoned
        news_api_url: Upstream top-headlines endpoint
        news_api_key: API key for the upstream news provider
        news_country: Country code passed to the upstream news provider
        news_timeout: Timeout in seconds for upstream news requests
        rate_limit: Default per-client rate limit in slowapi notation
        rate_limit_enabled: Whether rate limiting is applied at all
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root logging level
    """

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(default=Path("data"))
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60 * 24, gt=0)
    lock_timeout: float = Field(default=5.0, ge=0)
    lock_stale_after: float = Field(default=10.0, gt=0)
    news_api_url: str = NEWS_API_URL
    news_api_key: str = "demo-key"
    news_country: str = "us"
    news_timeout: float = Field(default=10.0, gt=0)
    rate_limit: str = "100/15minutes"
    rate_limit_enabled: bool = True
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build the settings from the current environment.

    The environment is read on every call so that tests can point the
    service at a temporary data directory with ``monkeypatch.setenv``.

    Returns:
        The current settings
    """
    return Settings(
        data_dir=Path(environ.get("DATA_DIR", "data")),
        jwt_secret=environ.get("JWT_SECRET", "change-me"),
        jwt_algorithm=environ.get("JWT_ALGORITHM", "HS256"),
        access_token_expire_minutes=int(
            environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24)
        ),
        lock_timeout=float(environ.get("LOCK_TIMEOUT", 5.0)),
        lock_stale_after=float(environ.get("LOCK_STALE_AFTER", 10.0)),
        news_api_url=environ.get("NEWS_API_URL", NEWS_API_URL),
        news_api_key=environ.get("NEWS_API_KEY", "demo-key"),
        news_country=environ.get("NEWS_COUNTRY", "us"),
        news_timeout=float(environ.get("NEWS_TIMEOUT", 10.0)),
        rate_limit=environ.get("RATE_LIMIT", "100/15minutes"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
        cors_origins=[
            origin.strip()
            for origin in environ.get("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ],
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
