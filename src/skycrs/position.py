"""
skycrs.position — Sky Position Value
======================================

A (longitude, latitude) pair tagged with the coordinate reference system
it is expressed in.  Positions are immutable; converting one produces a
new position in the target CRS.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .crs import CoordinateReferenceSystem
from .utils import longlat_to_xyz


@dataclass(frozen=True)
class SkyPosition:
    """Position on the celestial sphere.

    Parameters
    ----------
    longitude : float — [deg], in [0, 360)
    latitude : float — [deg], in [−90, 90]
    crs : CoordinateReferenceSystem — system the angles are expressed in
    """
    longitude: float
    latitude: float
    crs: CoordinateReferenceSystem

    @property
    def cartesian(self) -> NDArray:
        """Unit vector (3,)."""
        return longlat_to_xyz(self.longitude, self.latitude)

    def as_array(self) -> NDArray:
        """[longitude, latitude]"""
        return np.array([self.longitude, self.latitude])

    def convert_to(self, target: CoordinateReferenceSystem) -> "SkyPosition":
        from .conversion import convert
        return convert(self.crs, target, self.longitude, self.latitude)

    def separation(self, other: "SkyPosition") -> float:
        """Angular distance to ``other`` [deg]."""
        from .conversion import separation
        return separation(self, other)
