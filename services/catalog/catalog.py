"""
SKYQUEUE Catalog Service
Observation catalog and weekly availability

This module provides:
- Observation: an immutable catalog entry with IQ/CC/WV requirements
- Sexagesimal RA/Dec parsing and formatting (display only)
- CatalogStore: the master catalog plus the subset still available this week
- Catalog loading from Python data or YAML files, validated at load time
"""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from skyqueue.exceptions import CatalogError, DuplicateObservationError
from skyqueue.logging_config import get_logger
from services.catalog.tiers import CCTier, IQTier, WVTier

logger = get_logger(__name__)

__all__ = [
    "ObservationType",
    "Observation",
    "CatalogStore",
    "parse_ra",
    "parse_dec",
    "format_ra",
    "format_dec",
    "observations_from_dicts",
    "load_catalog_file",
    "load_default_catalog",
]


class ObservationType(Enum):
    """Target categories, used by renderers to pick an icon."""
    NEBULA = "nebula"
    GALAXY = "galaxy"
    STAR = "star"
    CLUSTER = "cluster"
    COMET = "comet"
    ASTEROID = "asteroid"
    EXOPLANET = "exoplanet"


# =============================================================================
# Coordinates
# =============================================================================

_DEC_PATTERN = re.compile(r"([+-]?\d+)°(\d+)'(\d+)\"")


def parse_ra(ra: str) -> float:
    """Parse ``HH:MM:SS`` into decimal hours.

    Malformed strings return 0.0; coordinates are display-only and must
    never stop a night from being scored.
    """
    try:
        hours, minutes, seconds = (float(part) for part in ra.split(":"))
    except (AttributeError, ValueError):
        logger.debug(f"Unparseable RA {ra!r}, using 0.0")
        return 0.0
    return hours + minutes / 60 + seconds / 3600


def parse_dec(dec: str) -> float:
    """Parse ``±DD°MM'SS"`` into decimal degrees (0.0 when malformed)."""
    match = _DEC_PATTERN.search(dec) if isinstance(dec, str) else None
    if not match:
        logger.debug(f"Unparseable Dec {dec!r}, using 0.0")
        return 0.0
    sign = -1 if match.group(1).startswith("-") else 1
    degrees = abs(int(match.group(1)))
    return sign * (degrees + int(match.group(2)) / 60 + int(match.group(3)) / 3600)


def format_ra(ra_hours: float) -> str:
    """Decimal hours to ``HH:MM:SS`` (truncating)."""
    hours = int(ra_hours)
    minutes = int((ra_hours - hours) * 60)
    seconds = int(((ra_hours - hours) * 60 - minutes) * 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_dec(dec_degrees: float) -> str:
    """Decimal degrees to ``±DD°MM'SS"`` (truncating)."""
    sign = "+" if dec_degrees >= 0 else "-"
    d = abs(dec_degrees)
    degrees = int(d)
    minutes = int((d - degrees) * 60)
    seconds = int(((d - degrees) * 60 - minutes) * 60)
    return f"{sign}{degrees:02d}°{minutes:02d}'{seconds:02d}\""


# =============================================================================
# Observation
# =============================================================================


@dataclass(frozen=True)
class Observation:
    """A catalog target and the conditions it needs."""
    obs_id: int
    name: str
    obs_type: ObservationType
    ra: str                   # Sexagesimal, e.g. "05:35:17"
    dec: str                  # Sexagesimal, e.g. "-05°23'28\""
    iq: IQTier
    cc: CCTier
    wv: WVTier
    duration_minutes: float   # Simulated minutes on target
    description: str = ""
    non_sidereal: bool = False

    @property
    def base_points(self) -> int:
        """Maximum points before weather multipliers."""
        return self.iq.points + self.cc.points + self.wv.points

    @property
    def ra_hours(self) -> float:
        return parse_ra(self.ra)

    @property
    def dec_degrees(self) -> float:
        return parse_dec(self.dec)

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise CatalogError(
                "Observation duration must be positive",
                {"obs_id": self.obs_id, "duration": self.duration_minutes},
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Observation":
        """Build and validate an entry.

        Raises:
            CatalogError: On missing fields, unknown type or bad duration
            InvalidTierError: On an unknown IQ/CC/WV label
        """
        try:
            obs_id = int(data["id"])
            name = str(data["name"])
            ra = str(data["ra"])
            dec = str(data["dec"])
            iq_label, cc_label, wv_label = data["iq"], data["cc"], data["wv"]
            duration = float(data["duration"])
        except KeyError as e:
            raise CatalogError(f"Catalog entry missing field {e}", {"entry": data}) from e
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Malformed catalog entry: {e}", {"entry": data}) from e

        try:
            obs_type = ObservationType(data.get("type", "star"))
        except ValueError:
            raise CatalogError(
                f"Unknown observation type: {data.get('type')!r}", {"obs_id": obs_id}
            ) from None

        return cls(
            obs_id=obs_id,
            name=name,
            obs_type=obs_type,
            ra=ra,
            dec=dec,
            iq=IQTier.from_label(iq_label),
            cc=CCTier.from_label(cc_label),
            wv=WVTier.from_label(wv_label),
            duration_minutes=duration,
            description=str(data.get("description", "")),
            non_sidereal=bool(data.get("non_sidereal", data.get("nonSidereal", False))),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.obs_id,
            "name": self.name,
            "type": self.obs_type.value,
            "ra": self.ra,
            "dec": self.dec,
            "iq": self.iq.label,
            "cc": self.cc.label,
            "wv": self.wv.label,
            "duration": self.duration_minutes,
            "description": self.description,
            "non_sidereal": self.non_sidereal,
            "base_points": self.base_points,
        }


# =============================================================================
# Catalog Store
# =============================================================================


class CatalogStore:
    """
    Master catalog plus the targets still available this week.

    Targets completed on any night are removed from the available set and
    only come back when the week is reset.
    """

    def __init__(self, observations: Iterable[Observation]):
        entries = list(observations)
        seen = set()
        for obs in entries:
            if obs.obs_id in seen:
                raise DuplicateObservationError(obs.obs_id)
            seen.add(obs.obs_id)

        self._catalog: tuple[Observation, ...] = tuple(entries)
        self._available: Dict[int, Observation] = {}
        self.reset()

    @property
    def catalog(self) -> tuple[Observation, ...]:
        """Every target, available or not."""
        return self._catalog

    @property
    def available(self) -> List[Observation]:
        return list(self._available.values())

    @property
    def max_possible_score(self) -> int:
        """Sum of base points over the full catalog."""
        return sum(obs.base_points for obs in self._catalog)

    def __len__(self) -> int:
        return len(self._available)

    def __contains__(self, obs_id: object) -> bool:
        return obs_id in self._available

    def get(self, obs_id: int) -> Optional[Observation]:
        """Return an available target, or None."""
        return self._available.get(obs_id)

    def reset(self) -> None:
        """Make the full catalog available again."""
        self._available = {obs.obs_id: obs for obs in self._catalog}

    def remove(self, obs_ids: Iterable[int]) -> int:
        """Permanently remove targets for the rest of the week.

        Returns:
            Number of targets actually removed
        """
        removed = 0
        for obs_id in obs_ids:
            if self._available.pop(obs_id, None) is not None:
                removed += 1
        if removed:
            logger.debug(f"Removed {removed} target(s), {len(self._available)} remaining")
        return removed


# =============================================================================
# Loading
# =============================================================================


def observations_from_dicts(entries: Iterable[Dict[str, Any]]) -> List[Observation]:
    """Validate raw entries into Observations, rejecting duplicate ids."""
    observations = [Observation.from_dict(entry) for entry in entries]
    seen = set()
    for obs in observations:
        if obs.obs_id in seen:
            raise DuplicateObservationError(obs.obs_id)
        seen.add(obs.obs_id)
    return observations


def load_catalog_file(path: str | Path) -> List[Observation]:
    """Load a YAML catalog: a list of entries, or a mapping with ``observations``.

    Raises:
        CatalogError: If the file cannot be read or any entry is invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("observations")
    if not isinstance(data, list) or not data:
        raise CatalogError(f"Catalog file has no observations: {path}")

    observations = observations_from_dicts(data)
    logger.info(f"Loaded {len(observations)} observations from {path}")
    return observations


def load_default_catalog() -> List[Observation]:
    """The built-in 30-target training catalog."""
    from services.catalog.default_catalog import DEFAULT_OBSERVATIONS

    return observations_from_dicts(DEFAULT_OBSERVATIONS)
