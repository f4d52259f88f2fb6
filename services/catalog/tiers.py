"""
SKYQUEUE Requirement Tiers

Closed enumerations of the Image Quality, Cloud Cover and Water Vapor
percentile tiers a target may require. Each tier carries its point weight
and the worst acceptable value of the matching weather quantity. Labels are
resolved once, when a catalog is loaded; unknown labels raise
InvalidTierError there rather than surfacing during scoring.
"""

from enum import Enum

from skyqueue.constants import (
    CC_POINTS,
    CC_REQUIREMENTS,
    IQ_POINTS,
    IQ_REQUIREMENTS,
    WV_POINTS,
    WV_REQUIREMENTS,
)
from skyqueue.exceptions import InvalidTierError

__all__ = ["IQTier", "CCTier", "WVTier"]


class _Tier(Enum):
    """Shared behaviour for requirement tiers."""

    @classmethod
    def from_label(cls, label):
        """Resolve a label such as "IQ20" (or an existing member)."""
        if isinstance(label, cls):
            return label
        try:
            return cls(label)
        except ValueError:
            raise InvalidTierError(label, cls.__name__[:2]) from None

    @property
    def label(self) -> str:
        return self.value


class IQTier(_Tier):
    """Image Quality: percentile of seeing conditions."""

    IQ20 = "IQ20"    # Best 20% seeing
    IQ70 = "IQ70"
    IQ85 = "IQ85"
    IQ_ANY = "IQAny"

    @property
    def points(self) -> int:
        return IQ_POINTS[self.value]

    @property
    def max_seeing(self) -> float:
        """Worst acceptable seeing in arcseconds."""
        return IQ_REQUIREMENTS[self.value]


class CCTier(_Tier):
    """Cloud Cover: percentile of cloud conditions."""

    CC50 = "CC50"    # Best 50% cloud conditions
    CC70 = "CC70"
    CC80 = "CC80"
    CC_ANY = "CCAny"

    @property
    def points(self) -> int:
        return CC_POINTS[self.value]

    @property
    def max_clouds(self) -> float:
        """Worst acceptable cloud cover in percent."""
        return CC_REQUIREMENTS[self.value]


class WVTier(_Tier):
    """Water Vapor: percentile of humidity conditions."""

    WV20 = "WV20"    # Best 20% water vapor
    WV50 = "WV50"
    WV80 = "WV80"
    WV_ANY = "WVAny"

    @property
    def points(self) -> int:
        return WV_POINTS[self.value]

    @property
    def max_humidity(self) -> float:
        """Worst acceptable humidity in percent."""
        return WV_REQUIREMENTS[self.value]
