"""Per-day online/offline flags for external ride-sourcing platforms.

Platform names are open identifiers: they are normalised but carry no
schema of their own. When ``RESTRICT_PLATFORMS`` is on, only names from
``KNOWN_PLATFORMS`` are accepted.
"""

from datetime import datetime, timezone
from typing import Mapping, Optional

from vtc_planner.config import settings
from vtc_planner.errors import UnsupportedPlatformError
from vtc_planner.schemas.planning_schema import PlatformSyncState


def normalize_platform(name: str) -> str:
    """Strip and lower-case a platform name.

    Examples:
        >>> normalize_platform("  Uber ")
        'uber'
    """
    return name.strip().lower()


def validate_platform(name: str) -> str:
    """Return the normalised name, or raise if it is empty or not allowed."""
    normalized = normalize_platform(name)
    if not normalized:
        raise UnsupportedPlatformError("Platform name must not be empty")
    config = settings.platforms
    if config.restrict_to_known and normalized not in config.known_platforms:
        raise UnsupportedPlatformError(
            f"Unsupported platform {name!r}. Known platforms: {list(config.known_platforms)}"
        )
    return normalized


def toggle(
    platform: str, is_online: bool, at: Optional[datetime] = None
) -> tuple[str, PlatformSyncState]:
    """Build the new sync state for ``platform``, stamped with ``at`` (default now, UTC)."""
    name = validate_platform(platform)
    return name, PlatformSyncState(
        is_online=is_online,
        last_sync=at or datetime.now(timezone.utc),
    )


def online_platforms(sync: Mapping[str, PlatformSyncState]) -> list[str]:
    """Names of platforms currently flagged online, sorted."""
    return sorted(name for name, state in sync.items() if state.is_online)
