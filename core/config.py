import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.errors import ConfigError

TRANSPORTS = ("stdio", "http")


@dataclass(frozen=True)
class Settings:
    """
    Process configuration.
    Read once at startup, never mutated afterwards.
    """
    tmdb_token: str
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str = "https://image.tmdb.org/t/p"
    tmdb_image_size: str = "w92"
    tmdb_language: str = "en-US"
    tmdb_timeout_seconds: float = 10.0
    transport: str = "stdio"
    http_host: str = "127.0.0.1"
    http_port: int = 8000
    log_level: str = "INFO"


def _number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    When no mapping is given, a .env file in the working directory is loaded
    first and os.environ is used.

    Raises:
        ConfigError: TMDB_TOKEN is missing or a value is malformed.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    token = env.get("TMDB_TOKEN", "").strip()
    if not token:
        raise ConfigError("TMDB_TOKEN environment variable must be set")

    transport = env.get("MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in TRANSPORTS:
        raise ConfigError(
            f"MCP_TRANSPORT must be one of {', '.join(TRANSPORTS)}, got {transport!r}"
        )

    return Settings(
        tmdb_token=token,
        tmdb_base_url=env.get("TMDB_BASE_URL", Settings.tmdb_base_url).rstrip("/"),
        tmdb_image_base_url=env.get(
            "TMDB_IMAGE_BASE_URL", Settings.tmdb_image_base_url
        ).rstrip("/"),
        tmdb_image_size=env.get("TMDB_IMAGE_SIZE", Settings.tmdb_image_size),
        tmdb_language=env.get("TMDB_LANGUAGE", Settings.tmdb_language),
        tmdb_timeout_seconds=_number(
            env, "TMDB_TIMEOUT_SECONDS", Settings.tmdb_timeout_seconds, float
        ),
        transport=transport,
        http_host=env.get("MCP_HTTP_HOST", Settings.http_host),
        http_port=_number(env, "MCP_HTTP_PORT", Settings.http_port, int),
        log_level=env.get("LOG_LEVEL", Settings.log_level).upper(),
    )
