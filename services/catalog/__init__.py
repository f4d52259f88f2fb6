"""
SKYQUEUE Catalog Service

Observation catalog, requirement tiers, weekly availability and the
nightly queue.
"""

from .tiers import (
    IQTier,
    CCTier,
    WVTier,
)

from .catalog import (
    ObservationType,
    Observation,
    CatalogStore,
    parse_ra,
    parse_dec,
    format_ra,
    format_dec,
    observations_from_dicts,
    load_catalog_file,
    load_default_catalog,
)

from .queue import QueueManager

__all__ = [
    "IQTier",
    "CCTier",
    "WVTier",
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
    "QueueManager",
]
