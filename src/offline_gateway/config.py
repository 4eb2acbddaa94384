import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from urllib.parse import urlparse

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

DEFAULT_STATIC_RESOURCES = (
    "/",
    "/index.html",
    "/stylesheet.css",
    "/manifest.json",
    "https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap",
    "https://fonts.gstatic.com/s/inter/v12/UcCO3FwrK3iLTeHuS_fvQtMwCp50KnMw2boKoduKmMEVuLyfAZ9hiA.woff2",
)

# Checked in order against the full request URL.
NETWORK_FIRST_PATTERNS = (
    r"/api/",
    r"supabase",
    r"\.json$",
)

CACHE_FIRST_PATTERNS = (
    r"\.(?:png|jpg|jpeg|svg|gif|webp)$",
    r"\.(?:css|js)$",
    r"fonts\.googleapis\.com",
    r"fonts\.gstatic\.com",
)

STORAGE_BACKENDS = ("memory", "redis")


def _split_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Gateway settings loaded from environment variables."""

    # Application
    app_name: str = os.getenv("GATEWAY_APP_NAME", "The Language of Wearing")
    app_version: str = os.getenv("GATEWAY_APP_VERSION", "1.0.0")

    # Cache stores
    cache_prefix: str = os.getenv("GATEWAY_CACHE_PREFIX", "language-of-wearing-")
    cache_version: str = os.getenv("GATEWAY_CACHE_VERSION", "v1")
    static_resources: tuple[str, ...] = field(
        default_factory=lambda: _split_list(os.getenv("GATEWAY_STATIC_RESOURCES"), DEFAULT_STATIC_RESOURCES)
    )
    storage_backend: str = os.getenv("GATEWAY_STORAGE_BACKEND", "memory")

    # Upstream
    origin_url: str = os.getenv("GATEWAY_ORIGIN_URL", "http://localhost:3000")
    fetch_timeout: float = float(os.getenv("GATEWAY_FETCH_TIMEOUT", "30.0"))

    # Redis (only used by the redis backend)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Background sync / push
    sync_tag: str = os.getenv("GATEWAY_SYNC_TAG", "background-sync-form-data")
    notification_title: str = os.getenv("GATEWAY_NOTIFICATION_TITLE", "Language of Wearing")
    notification_icon: str = os.getenv("GATEWAY_NOTIFICATION_ICON", "/icon-192x192.png")
    notification_badge: str = os.getenv("GATEWAY_NOTIFICATION_BADGE", "/badge-72x72.png")

    # Logging
    log_level: str = os.getenv("GATEWAY_LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def static_cache_name(self) -> str:
        """Name of the current static (pre-cached) store."""
        return f"{self.cache_prefix}static-{self.cache_version}"

    @property
    def dynamic_cache_name(self) -> str:
        """Name of the current dynamic (runtime) store."""
        return f"{self.cache_prefix}dynamic-{self.cache_version}"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.cache_prefix:
            raise ValueError("GATEWAY_CACHE_PREFIX must not be empty")

        if not self.cache_version:
            raise ValueError("GATEWAY_CACHE_VERSION must not be empty")

        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"GATEWAY_STORAGE_BACKEND must be one of {list(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )

        if self.fetch_timeout <= 0:
            raise ValueError("GATEWAY_FETCH_TIMEOUT must be positive")

        if urlparse(self.origin_url).scheme not in ("http", "https"):
            raise ValueError(f"GATEWAY_ORIGIN_URL must be an http(s) URL, got {self.origin_url!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=False,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure logging for the gateway process."""
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
