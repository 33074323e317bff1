"""Configuration management for cal2."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get("CAL2_CONFIG_DIR", Path.home() / ".config"))
CONFIG_FILE = CONFIG_DIR / "cal2.conf"

DISPLAY_MODES = ("q", "month", "year")
LIST_FORMATS = ("table", "json", "markdown")


@dataclass
class Config:
    """cal2 configuration."""

    country: str | None = None
    display_mode: str = "q"
    list_format: str = "table"
    cache_dir: str = ""
    http_timeout: float | None = None

    @property
    def cache_path(self) -> Path:
        """Directory holding the hm-* cache files."""
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return CONFIG_DIR


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from cal2.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "country":
                config.country = value or None
            case "display_mode":
                if value.lower() in DISPLAY_MODES:
                    config.display_mode = value.lower()
                else:
                    logger.warning(f"Ignoring unknown DISPLAY_MODE: {value!r}")
            case "list_format":
                if value.lower() in LIST_FORMATS:
                    config.list_format = value.lower()
                else:
                    logger.warning(f"Ignoring unknown LIST_FORMAT: {value!r}")
            case "cache_dir":
                config.cache_dir = value
            case "http_timeout":
                try:
                    config.http_timeout = float(value) if value else None
                except ValueError:
                    logger.warning(f"Failed to parse HTTP_TIMEOUT: {value!r}")

    return config
