"""
skycrs.conversion — Sky Coordinate Conversion
===============================================

Unified entry points for moving positions between coordinate reference
systems.

Pipeline
--------
For a source CRS S and target CRS T::

    (lon, lat) ─► xyz ─► [remove E-terms of S] ─► M·xyz ─► [add E-terms of T] ─► (lon', lat')

where ``M = get_rotation_matrix(S, T)``.  E-terms are only involved when a
CRS is expressed in the FK4 frame.  The matrix and E-term vectors depend on
the two CRS alone, so a batch builds them once and transforms every point
as a single (N,3) array.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .crs import CoordinateReferenceSystem
from .errors import OutOfRangeError, UnsupportedCrsError
from .eterms import add_eterms, remove_eterms
from .position import SkyPosition
from .utils import (
    DOUBLE_TOLERANCE, apply_matrix, longlat_to_xyz, safe_acos, xyz_to_longlat,
)

logger = logging.getLogger(__name__)


# ════════════════════════════════════════════════════════════════════════════
#  Internal Helpers
# ════════════════════════════════════════════════════════════════════════════

def _within(values, lo: float, hi: float) -> bool:
    values = np.asarray(values, dtype=np.float64)
    return bool(np.all((values >= lo - DOUBLE_TOLERANCE)
                       & (values <= hi + DOUBLE_TOLERANCE)))


def _check_range(longitude, latitude) -> None:
    lon_ok = _within(longitude, 0.0, 360.0)
    lat_ok = _within(latitude, -90.0, 90.0)
    if not lon_ok and not lat_ok:
        raise OutOfRangeError(
            "longitude must be in [0,360] and latitude in [-90,90]")
    if not lon_ok:
        raise OutOfRangeError("longitude must be in [0,360]")
    if not lat_ok:
        raise OutOfRangeError("latitude must be in [-90,90]")


def _check_crs(*systems) -> None:
    for crs in systems:
        if not isinstance(crs, CoordinateReferenceSystem):
            raise UnsupportedCrsError(f"not a coordinate reference system: {crs!r}")


def _transform(xyz: NDArray, R: NDArray,
               eterms_in: NDArray | None,
               eterms_out: NDArray | None) -> NDArray:
    """E-terms removal, rotation, E-terms insertion on (3,) or (N,3)."""
    if eterms_in is not None:
        xyz = remove_eterms(xyz, eterms_in)
        logger.debug("E-terms removed: %s", xyz)
    xyz = apply_matrix(R, xyz)
    logger.debug("rotated: %s", xyz)
    if eterms_out is not None:
        xyz = add_eterms(xyz, eterms_out)
        logger.debug("E-terms added: %s", xyz)
    return xyz


# ════════════════════════════════════════════════════════════════════════════
#  Matrices & E-terms
# ════════════════════════════════════════════════════════════════════════════

def get_rotation_matrix(source: CoordinateReferenceSystem,
                        target: CoordinateReferenceSystem) -> NDArray:
    """Get the 3×3 rotation matrix for any supported CRS pair.

    Returns
    -------
    M : (3,3) ndarray — xyz_target = M @ xyz_source (E-terms excluded)
    """
    _check_crs(source, target)
    M = source.rotation_matrix_to(target)
    logger.debug("rotation %s → %s:\n%s", source, target, M)
    return M


def eterms_for(crs: CoordinateReferenceSystem) -> NDArray | None:
    """E-term vector of ``crs`` at its equinox, or ``None`` unless FK4."""
    _check_crs(crs)
    return crs.eterms()


# ════════════════════════════════════════════════════════════════════════════
#  Conversions
# ════════════════════════════════════════════════════════════════════════════

def convert(source: CoordinateReferenceSystem,
            target: CoordinateReferenceSystem,
            longitude: float, latitude: float) -> SkyPosition:
    """Convert one position from ``source`` to ``target``.

    Parameters
    ----------
    source, target : CoordinateReferenceSystem
    longitude : float — [deg] in [0, 360]
    latitude : float — [deg] in [−90, 90]

    Returns
    -------
    SkyPosition in ``target`` (longitude wrapped into [0, 360))

    Raises
    ------
    OutOfRangeError
        longitude and/or latitude outside its domain.
    """
    _check_range(longitude, latitude)
    R = get_rotation_matrix(source, target)
    eterms_in = eterms_for(source)
    eterms_out = eterms_for(target)
    logger.debug("E-terms in=%s out=%s", eterms_in, eterms_out)

    xyz = _transform(longlat_to_xyz(longitude, latitude), R, eterms_in, eterms_out)
    lon, lat = xyz_to_longlat(xyz)

    logger.debug("(%.10f, %.10f) %s → (%.10f, %.10f) %s",
                 longitude, latitude, source, lon, lat, target)
    return SkyPosition(lon, lat, target)


def convert_batch(source: CoordinateReferenceSystem,
                  target: CoordinateReferenceSystem,
                  coords) -> list[SkyPosition]:
    """Convert many positions from ``source`` to ``target``.

    Parameters
    ----------
    coords : flat sequence ``[lon0, lat0, lon1, lat1, ...]`` or (N,2) array

    Returns
    -------
    list of SkyPosition, in input order

    Raises
    ------
    OutOfRangeError
        odd-length input, or any coordinate outside its domain.
    """
    arr = np.asarray(coords, dtype=np.float64)
    if arr.ndim == 1 and arr.size % 2 == 0:
        arr = arr.reshape(-1, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise OutOfRangeError(
            "coordinates should be an array containing a set of "
            "[longitude, latitude]")
    if arr.shape[0] == 0:
        return []

    longitude, latitude = arr[:, 0], arr[:, 1]
    _check_range(longitude, latitude)

    R = get_rotation_matrix(source, target)
    eterms_in = eterms_for(source)
    eterms_out = eterms_for(target)

    xyz = _transform(longlat_to_xyz(longitude, latitude), R, eterms_in, eterms_out)
    lon, lat = xyz_to_longlat(xyz)

    logger.debug("converted %d positions %s → %s", len(lon), source, target)
    return [SkyPosition(float(lo), float(la), target) for lo, la in zip(lon, lat)]


def convert_positions(target: CoordinateReferenceSystem,
                      positions) -> list[SkyPosition]:
    """Convert existing positions, each from its own CRS, into ``target``."""
    return [convert(p.crs, target, p.longitude, p.latitude) for p in positions]


def separation(pos1: SkyPosition, pos2: SkyPosition) -> float:
    """Angular separation [deg] between two positions in any CRS.

    ``pos1`` is first expressed in the CRS of ``pos2``.
    """
    p1 = convert(pos1.crs, pos2.crs, pos1.longitude, pos1.latitude)
    cos_angle = float(np.dot(p1.cartesian, pos2.cartesian))
    return float(np.rad2deg(safe_acos(cos_angle)))
