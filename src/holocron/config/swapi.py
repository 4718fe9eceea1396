"""SWAPI source and bootstrap configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_bool, env_float, env_int, env_str
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SWAPI_BASE_URL: Final[str] = "https://swapi.dev/api/"
DEFAULT_SNAPSHOT_DIR: Final[str] = "data/swapi_snapshot"
SWAPI_TIMEOUT_SECONDS: Final[float] = 30.0
SWAPI_CACHE_TTL_SECONDS: Final[float] = 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class SwapiConfig:
    """Selects and parameterises the catalog source used for bootstrap.

    The HTTP cache is off unless ``cache`` is set; with it on, a ``sync`` may
    see pages up to ``cache_ttl_seconds`` old.
    """

    use_snapshot: bool = False
    base_url: str = DEFAULT_SWAPI_BASE_URL
    snapshot_dir: Path = Path(DEFAULT_SNAPSHOT_DIR)
    timeout_seconds: float = SWAPI_TIMEOUT_SECONDS
    retries: int = 0
    cache: bool = False
    cache_ttl_seconds: float = SWAPI_CACHE_TTL_SECONDS

    def resilience(self) -> ResilienceConfig:
        return ResilienceConfig(
            name="swapi",
            base_url=_with_trailing_slash(self.base_url),
            timeout_seconds=self.timeout_seconds,
            retry=RetryPolicy(total=self.retries),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=CacheConfig(default_ttl_seconds=self.cache_ttl_seconds) if self.cache else None,
            default_headers={"Accept": "application/json"},
        )


@dataclass(frozen=True, slots=True)
class BootstrapConfig:
    auto_bootstrap: bool = True


def _with_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


def get_swapi_config() -> SwapiConfig:
    return SwapiConfig(
        use_snapshot=env_bool("HOLOCRON_SWAPI_USE_SNAPSHOT", default=False),
        base_url=_with_trailing_slash(env_str("HOLOCRON_SWAPI_BASE_URL", DEFAULT_SWAPI_BASE_URL)),
        snapshot_dir=Path(env_str("HOLOCRON_SWAPI_SNAPSHOT_DIR", DEFAULT_SNAPSHOT_DIR)),
        timeout_seconds=env_float("HOLOCRON_SWAPI_TIMEOUT_SECONDS", default=SWAPI_TIMEOUT_SECONDS),
        retries=env_int("HOLOCRON_SWAPI_RETRIES", default=0, minimum=0),
        cache=env_bool("HOLOCRON_SWAPI_CACHE", default=False),
        cache_ttl_seconds=env_float(
            "HOLOCRON_SWAPI_CACHE_TTL_SECONDS", default=SWAPI_CACHE_TTL_SECONDS
        ),
    )


def get_bootstrap_config() -> BootstrapConfig:
    return BootstrapConfig(auto_bootstrap=env_bool("HOLOCRON_AUTO_BOOTSTRAP", default=True))
