"""
SKYQUEUE Custom Exceptions

Domain-specific exception hierarchy for the queue-observing simulator.

Most refusals in the simulator are not exceptions: adding to a full queue,
starting an empty night or mutating a running queue are silent no-ops that
callers confirm by re-inspecting state. Exceptions are reserved for bad
input at load time and for external I/O.

Exception Hierarchy:
    SkyQueueError (base)
    ├── ConfigurationError
    ├── CatalogError
    │   ├── InvalidTierError
    │   └── DuplicateObservationError
    └── LeaderboardError
"""

from typing import Any, Optional


class SkyQueueError(Exception):
    """Base exception for all SKYQUEUE errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SkyQueueError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
    ) -> None:
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


# =============================================================================
# Catalog Errors
# =============================================================================

class CatalogError(SkyQueueError):
    """Base class for catalog load and validation errors."""
    pass


class InvalidTierError(CatalogError):
    """A requirement label is not one of the known IQ/CC/WV tiers.

    Raised when a catalog is loaded, never during scoring.
    """

    def __init__(self, label: Any, kind: str) -> None:
        super().__init__(
            f"Unknown {kind} requirement tier: {label!r}",
            {"kind": kind, "label": label},
        )
        self.label = label
        self.kind = kind


class DuplicateObservationError(CatalogError):
    """Two catalog entries share the same identifier."""

    def __init__(self, obs_id: int) -> None:
        super().__init__(f"Duplicate observation id: {obs_id}", {"obs_id": obs_id})
        self.obs_id = obs_id


# =============================================================================
# Leaderboard Errors
# =============================================================================

class LeaderboardError(SkyQueueError):
    """Leaderboard service could not be reached or returned bad data."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        details: dict[str, Any] = {}
        if url:
            details["url"] = url
        if status is not None:
            details["status"] = status
        super().__init__(message, details)
        self.url = url
        self.status = status
