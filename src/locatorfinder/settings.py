from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_TIMEOUT_MS = 15000
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class Settings:
    log_dir: Path
    log_level: int
    headless: bool
    timeout_ms: int


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    raw_log_dir = env.get("LOCATORFINDER_LOG_DIR", "").strip()
    log_dir = Path(raw_log_dir).expanduser() if raw_log_dir else Path.home() / ".locatorfinder"
    return Settings(
        log_dir=log_dir,
        log_level=_parse_log_level(env.get("LOCATORFINDER_LOG_LEVEL", "")),
        headless=env.get("LOCATORFINDER_HEADLESS", "").strip().lower() not in _FALSE_VALUES,
        timeout_ms=parse_timeout_ms(env.get("LOCATORFINDER_TIMEOUT_MS", "")),
    )


def parse_timeout_ms(raw: str | None, default: int = DEFAULT_TIMEOUT_MS) -> int:
    value = (raw or "").strip()
    if not value.isdigit() or int(value) <= 0:
        return default
    return int(value)


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper() or "INFO")
    return level if isinstance(level, int) else logging.INFO
