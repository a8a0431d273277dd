"""Configuration loading from environment variables."""

import os
from dataclasses import dataclass

from .registry import FORMATS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExchangeConfig:
    log_level: str = "WARNING"
    csv_bom: bool = True
    default_format: str = "csv"
    catalog_path: str = "catalog.json"


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config() -> ExchangeConfig:
    default_format = os.getenv("LYRICSHEET_DEFAULT_FORMAT", "csv").strip().lower()
    if default_format not in FORMATS:
        default_format = "csv"
    log_level = os.getenv("LYRICSHEET_LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = "WARNING"
    return ExchangeConfig(
        log_level=log_level,
        csv_bom=_env_flag("LYRICSHEET_CSV_BOM"),
        default_format=default_format,
        catalog_path=os.getenv("LYRICSHEET_CATALOG", "catalog.json"),
    )
