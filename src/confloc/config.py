from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


def _clean_env(value: str | None) -> str | None:
    if value is None:
        return None
    if "${" in value:
        return None
    value = value.strip()
    return value or None


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    value = _clean_env(os.getenv(name))
    if value is None:
        out = default
    else:
        try:
            out = int(value)
        except ValueError:
            out = default
    if minimum is not None:
        out = max(minimum, out)
    return out


def _env_log_level(name: str, default: int) -> int:
    value = _clean_env(os.getenv(name))
    if value is None:
        return default
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    home_dir: Path
    resource_path: tuple[Path, ...]
    http_timeout_seconds: int
    log_level: int
    log_file: Path | None


def resolve_home_dir() -> Path:
    raw_home = _clean_env(os.getenv("CONFLOC_HOME"))
    if raw_home:
        return Path(raw_home).expanduser()
    return Path.home()


def resolve_resource_path() -> tuple[Path, ...]:
    raw_path = _clean_env(os.getenv("CONFLOC_RESOURCE_PATH"))
    if not raw_path:
        return ()
    entries = (entry.strip() for entry in raw_path.split(os.pathsep))
    return tuple(Path(entry).expanduser() for entry in entries if entry)


def resolve_http_timeout() -> int:
    return _env_int("CONFLOC_HTTP_TIMEOUT", default=10, minimum=1)


def resolve_log_file() -> Path | None:
    raw_file = _clean_env(os.getenv("CONFLOC_LOG_FILE"))
    if not raw_file:
        return None
    return Path(raw_file).expanduser()


def load_settings() -> Settings:
    return Settings(
        home_dir=resolve_home_dir(),
        resource_path=resolve_resource_path(),
        http_timeout_seconds=resolve_http_timeout(),
        log_level=_env_log_level("CONFLOC_LOG_LEVEL", default=logging.INFO),
        log_file=resolve_log_file(),
    )
