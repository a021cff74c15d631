"""
Centralized configuration with environment variable overrides.

Default work window, calendar view, platform list, and range limits are
configurable here. Nothing is hardcoded in scheduling or tool logic.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime

from dotenv import load_dotenv

from vtc_planner.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)

VALID_VIEWS = ("week", "month")


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    """Parse a boolean flag (true/false, yes/no, 1/0) from an env var."""
    raw = os.getenv(env_var, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean for {env_var}: {raw!r}")


def _csv_tuple(env_var: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(env_var, default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class PlanningConfig:
    """Defaults applied to days with no stored schedule."""

    default_work_start: str = os.getenv("DEFAULT_WORK_START", "08:00")
    default_work_end: str = os.getenv("DEFAULT_WORK_END", "20:00")
    default_view: str = os.getenv("DEFAULT_CALENDAR_VIEW", "week")
    summary_default_days: int = _safe_int("SUMMARY_DEFAULT_DAYS", "7")
    max_range_days: int = _safe_int("MAX_RANGE_DAYS", "366")


@dataclass(frozen=True)
class PlatformConfig:
    """External ride-sourcing platforms tracked by the sync flags."""

    known_platforms: tuple[str, ...] = _csv_tuple(
        "KNOWN_PLATFORMS", "uber,bolt,heetch,marcel"
    )
    restrict_to_known: bool = _safe_bool("RESTRICT_PLATFORMS", "true")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    planning: PlanningConfig = field(default_factory=PlanningConfig)
    platforms: PlatformConfig = field(default_factory=PlatformConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "vtc-planner")


def _parse_hhmm(env_var: str, value: str) -> datetime:
    try:
        return datetime.strptime(value.strip(), "%H:%M")
    except ValueError:
        raise ValueError(f"{env_var} must be HH:MM, got {value!r}") from None


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    start = _parse_hhmm("DEFAULT_WORK_START", config.planning.default_work_start)
    end = _parse_hhmm("DEFAULT_WORK_END", config.planning.default_work_end)
    if start >= end:
        raise ValueError(
            "DEFAULT_WORK_START must be before DEFAULT_WORK_END, "
            f"got {config.planning.default_work_start}-{config.planning.default_work_end}"
        )
    if config.planning.default_view not in VALID_VIEWS:
        raise ValueError(
            f"DEFAULT_CALENDAR_VIEW must be one of {VALID_VIEWS}, "
            f"got {config.planning.default_view!r}"
        )
    if config.planning.summary_default_days < 1:
        raise ValueError(
            f"SUMMARY_DEFAULT_DAYS must be >= 1, got {config.planning.summary_default_days}"
        )
    if config.planning.max_range_days < 1:
        raise ValueError(
            f"MAX_RANGE_DAYS must be >= 1, got {config.planning.max_range_days}"
        )
    if config.platforms.restrict_to_known and not config.platforms.known_platforms:
        raise ValueError("KNOWN_PLATFORMS must not be empty when RESTRICT_PLATFORMS is on")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    logger.info("Configuration loaded for '%s'", config.app_name)
    return config


# Singleton instance
settings = load_config()
