"""
skycrs.utils — Foundational Utilities
=======================================

Tolerance-aware trigonometry, interval tests, axis-rotation matrices and
spherical ↔ Cartesian conversions on the unit celestial sphere.
All functions are pure NumPy.
"""

import numpy as np
from numpy.typing import NDArray

# ── Numeric Constants ───────────────────────────────────────────────────────
DOUBLE_TOLERANCE = 1e-12        # absolute tolerance for boundary tests
HALF_PI = 0.5 * np.pi
TWO_PI = 2.0 * np.pi
MAS_TO_DEG = 1.0 / 3_600_000.0  # milli-arcsecond → degree
ARCSEC_TO_DEG = 1.0 / 3600.0

# ── Epoch Constants ─────────────────────────────────────────────────────────
JD_J2000 = 2_451_545.0          # Julian Date of J2000.0 (2000-01-01 12h TT)
JD_B1900 = 2_415_020.31352      # Julian Date of B1900.0
JD_B1950 = 2_433_282.423        # Julian Date of B1950.0 (Murray 1989)
JULIAN_YEAR = 365.25            # days
TROPICAL_YEAR = 365.242198781   # days (Besselian year at B1900)
JULIAN_CENTURY = 36_525.0       # days
MJD_OFFSET = 2_400_000.5        # JD − MJD
RJD_OFFSET = 2_400_000.0        # JD − reduced JD


# ── Tolerant Comparisons ────────────────────────────────────────────────────

def equal(a: float, b: float, tol: float = DOUBLE_TOLERANCE) -> bool:
    """True when |a − b| ≤ tol."""
    return abs(b - a) <= tol


def is_in_interval(x: float, lo: float, hi: float,
                   tol: float = DOUBLE_TOLERANCE) -> bool:
    """Closed-interval membership that accepts values within ``tol`` of the
    bounds (e.g. 360.0000000000001 is in [0, 360])."""
    if equal(x, lo, tol) or equal(x, hi, tol):
        return True
    return lo < x < hi


# ── Safe Trigonometry ───────────────────────────────────────────────────────
#
#  Scalars in → Python floats out; arrays in → arrays out.
# ════════════════════════════════════════════════════════════════════════════

def _unwrap(result):
    return float(result) if np.ndim(result) == 0 else result


def safe_atan2(n, d, default: float = 0.0):
    """atan2(n, d), or ``default`` when both arguments vanish (origin)."""
    n = np.asarray(n, dtype=np.float64)
    d = np.asarray(d, dtype=np.float64)
    origin = (np.abs(n) < DOUBLE_TOLERANCE) & (np.abs(d) < DOUBLE_TOLERANCE)
    return _unwrap(np.where(origin, default, np.arctan2(n, d)))


def safe_asin(v):
    """asin(v) with |v| snapped to 1 inside the tolerance."""
    v = np.asarray(v, dtype=np.float64)
    clipped = np.clip(v, -1.0, 1.0)
    result = np.arcsin(clipped)
    result = np.where(np.abs(v - 1.0) <= DOUBLE_TOLERANCE, HALF_PI, result)
    result = np.where(np.abs(v + 1.0) <= DOUBLE_TOLERANCE, -HALF_PI, result)
    return _unwrap(result)


def safe_acos(v):
    """acos(v); returns π or 0 for inputs beyond −1 / +1."""
    v = np.asarray(v, dtype=np.float64)
    return _unwrap(np.arccos(np.clip(v, -1.0, 1.0)))


# ── Vector Helpers ──────────────────────────────────────────────────────────

def normalize(v: NDArray) -> NDArray:
    """Return unit vector.  Works on single vectors or (N,3) arrays."""
    v = np.asarray(v, dtype=np.float64)
    if v.ndim == 1:
        mag = np.linalg.norm(v)
        if mag < 1e-15:
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    elif v.ndim == 2:
        mag = np.linalg.norm(v, axis=1, keepdims=True)
        if np.any(mag < 1e-15):
            raise ValueError("Cannot normalize a near-zero vector.")
        return v / mag
    else:
        raise ValueError(f"Expected 1-D or 2-D array, got {v.ndim}-D.")


def apply_matrix(R: NDArray, vec: NDArray) -> NDArray:
    """Apply a 3×3 matrix to a single (3,) or batch (N,3) of vectors."""
    vec = np.asarray(vec, dtype=np.float64)
    if vec.ndim == 1:
        return R @ vec
    return (R @ vec.T).T


def rotation_matrix_axis_angle(axis: NDArray, angle: float) -> NDArray:
    """Rotation matrix via Rodrigues' formula (right-hand, active rotation).

    Parameters
    ----------
    axis : (3,) array — rotation axis (will be normalized internally)
    angle : float — rotation angle [rad]

    Returns
    -------
    R : (3,3) ndarray — rotation matrix
    """
    k = normalize(np.asarray(axis, dtype=np.float64))
    c, s = np.cos(angle), np.sin(angle)
    K = np.array([
        [0, -k[2], k[1]],
        [k[2], 0, -k[0]],
        [-k[1], k[0], 0],
    ])
    return np.eye(3) * c + (1.0 - c) * np.outer(k, k) + s * K


# ── Axis Rotations (passive, degrees) ───────────────────────────────────────
#
#  The coordinate-frame rotations of the FITS WCS papers rotate the axes,
#  not the vector:  x_new = R · x  with
#
#      rot_z(a) = [[ cos a,  sin a, 0],
#                  [-sin a,  cos a, 0],
#                  [     0,      0, 1]]
#
#  i.e. the Rodrigues (active) rotation by −a about the same axis.
# ════════════════════════════════════════════════════════════════════════════

_X_AXIS = np.array([1.0, 0.0, 0.0])
_Y_AXIS = np.array([0.0, 1.0, 0.0])
_Z_AXIS = np.array([0.0, 0.0, 1.0])


def rot_x(angle: float) -> NDArray:
    """Frame rotation about X by ``angle`` degrees."""
    return rotation_matrix_axis_angle(_X_AXIS, -np.deg2rad(angle))


def rot_y(angle: float) -> NDArray:
    """Frame rotation about Y by ``angle`` degrees."""
    return rotation_matrix_axis_angle(_Y_AXIS, -np.deg2rad(angle))


def rot_z(angle: float) -> NDArray:
    """Frame rotation about Z by ``angle`` degrees."""
    return rotation_matrix_axis_angle(_Z_AXIS, -np.deg2rad(angle))


# ── Spherical ↔ Cartesian ───────────────────────────────────────────────────

def longlat_to_xyz(longitude, latitude) -> NDArray:
    """Unit vector(s) from longitude/latitude [deg].

    Scalars give a (3,) vector; arrays of length N give an (N,3) batch.
    """
    lon = np.deg2rad(np.asarray(longitude, dtype=np.float64))
    lat = np.deg2rad(np.asarray(latitude, dtype=np.float64))
    cos_lat = np.cos(lat)
    xyz = np.stack([np.cos(lon) * cos_lat,
                    np.sin(lon) * cos_lat,
                    np.sin(lat)], axis=-1)
    return xyz


def xyz_to_longlat(xyz: NDArray):
    """Longitude in [0, 360) and latitude in [−90, 90] [deg].

    The input is normalised first, so it need not be of unit length.

    Parameters
    ----------
    xyz : (3,) or (N,3) array

    Returns
    -------
    (longitude, latitude) : floats for a (3,) input, (N,) arrays for a batch
    """
    u = normalize(xyz)
    x, y, z = u[..., 0], u[..., 1], u[..., 2]

    longitude = np.rad2deg(np.asarray(safe_atan2(y, x, 0.0)))
    longitude = np.where(longitude < 0.0, longitude + 360.0, longitude)
    longitude = np.where(longitude >= 360.0, longitude - 360.0, longitude)

    latitude = np.rad2deg(np.asarray(safe_asin(z)))
    # Poles come back as exactly ±90
    latitude = np.where(np.abs(z - 1.0) <= DOUBLE_TOLERANCE, 90.0, latitude)
    latitude = np.where(np.abs(z + 1.0) <= DOUBLE_TOLERANCE, -90.0, latitude)

    return _unwrap(longitude), _unwrap(latitude)
