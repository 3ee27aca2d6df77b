"""
skycrs.precession — Precession & Frame-Bias Matrices
======================================================

Builders for every 3×3 rotation the conversion pipeline needs.  All
matrices act on column vectors:  ``xyz_to = M @ xyz_from``.

Precession Models
-----------------
- **Lieske (IAU 1976)** — FK5, Julian epochs.
- **Newcomb** (Woolard & Clemence) — FK4 / FK4_NO_E, Besselian epochs.
- **IAU 2006** (Capitaine et al. 2003) — dynamical J2000 frame.

Frame Graph
-----------
Cross-family transitions route through ICRS as the canonical base::

    FK4 ──F45── FK5(J2000) ──B_I5── ICRS ──B_IJ── J2000(dyn)
     │             │                               │
    P_B           P_J                             P_06

Same-family transitions (FK5↔FK5, FK4↔FK4, J2000↔J2000) are a single
precession.  The bias matrices are orthogonal, so routing FK4→FK5 through
ICRS reproduces the direct composition.

Reference
---------
Lieske, J.H. et al. (1977). A&A 58, 1.
Murray, C.A. (1989). A&A 218, 325 (FK4 → FK5).
Hilton, J.L. & Hohenkerk, C.Y. (2004). A&A 413, 765 (ICRS bias).
Capitaine, N. et al. (2003). A&A 412, 567 (IAU 2006 precession).
Calabretta, M.R. & Greisen, E.W. (2002). A&A 395, 1077 (Galactic, Supergalactic).
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .datum import FrameKind
from .epochs import besselian_epoch_to_jd, julian_epoch_to_jd
from .errors import UnsupportedFrameTransitionError
from .utils import (
    ARCSEC_TO_DEG, MAS_TO_DEG, JD_B1950, JD_J2000, JULIAN_CENTURY,
    equal, rot_x, rot_y, rot_z,
)

logger = logging.getLogger(__name__)

# ── Fixed Frame Constants ───────────────────────────────────────────────────
# FK4 (B1950) → FK5 (J2000), Murray (1989), epoch of observation B1950
_FK4_TO_FK5 = np.array([
    [0.9999256794956877, -0.0111814832204662, -0.0048590038153592],
    [0.0111814832391717, 0.9999374848933135, -0.0000271625947142],
    [0.0048590037723143, -0.0000271702937440, 0.9999881946023742],
])

# Rate of change of _FK4_TO_FK5 per Julian century [1e-6]
_FK4_TO_FK5_RATE = np.array([
    [-0.0026455262, -1.1539918689, +2.1111346190],
    [+1.1540628161, -0.0129042997, +0.0236021478],
    [-2.1112979048, -0.0056024448, +0.0102587734],
])

# Frame bias angles (η₀, ξ₀, Δα₀) [mas]
ICRS_FK5_BIAS = (-19.9, 9.1, -22.9)
ICRS_J2000_BIAS = (-6.8192, -16.617, -14.6)

# Galactic pole and node (B1950) and supergalactic pole/node [deg]
GALACTIC_POLE_RA_B1950 = 192.25
GALACTIC_POLE_DEC_B1950 = 27.4
GALACTIC_NODE_LON = 123.0
SUPERGALACTIC_POLE_L = 47.37
SUPERGALACTIC_POLE_B = 6.32


# ════════════════════════════════════════════════════════════════════════════
#  Precession Angles
# ════════════════════════════════════════════════════════════════════════════

def lieske_precession_angles(jd1: float, jd2: float) -> tuple[float, float, float]:
    """IAU 1976 (Lieske) precession angles from JD ``jd1`` to ``jd2``.

    Returns
    -------
    (zeta, z, theta) : degrees
    """
    # T0: start epoch in Julian centuries from J2000; T: elapsed centuries
    T0 = (jd1 - JD_J2000) / JULIAN_CENTURY
    T = (jd2 - jd1) / JULIAN_CENTURY

    w = 2306.2181 + (1.39656 - 0.000139 * T0) * T0
    zeta = (w + ((0.30188 - 0.000344 * T0) + 0.017998 * T) * T) * T
    z = (w + ((1.09468 + 0.000066 * T0) + 0.018203 * T) * T) * T
    theta = (2004.3109 + (-0.85330 - 0.000217 * T0) * T0
             + ((-0.42665 - 0.000217 * T0) - 0.041833 * T) * T) * T

    return zeta * ARCSEC_TO_DEG, z * ARCSEC_TO_DEG, theta * ARCSEC_TO_DEG


def newcomb_precession_angles(epoch1: float, epoch2: float) -> tuple[float, float, float]:
    """Newcomb precession angles between two Besselian epochs.

    Time is measured in units of 1000 tropical years from B1850.0.

    Returns
    -------
    (zeta, z, theta) : degrees
    """
    t1 = (epoch1 - 1850.0) / 1000.0
    t2 = (epoch2 - 1850.0) / 1000.0
    tau = t2 - t1

    d0 = 23035.545
    d1 = 139.720
    d2 = 0.060
    a0 = d0 + t1 * (d1 + d2 * t1)

    zeta = tau * (a0 + tau * ((30.240 - 0.27 * t1) + tau * 17.995))
    z = tau * (a0 + tau * ((109.480 + 0.39 * t1) + tau * 18.325))

    c0 = 20051.12 + t1 * (-85.29 - 0.37 * t1)
    theta = tau * (c0 + tau * ((-42.65 - 0.37 * t1) + tau * -41.80))

    return zeta * ARCSEC_TO_DEG, z * ARCSEC_TO_DEG, theta * ARCSEC_TO_DEG


def iau2006_precession_angles(epoch: float) -> tuple[float, float, float]:
    """IAU 2006 precession angles from J2000.0 to a Julian epoch.

    Returns
    -------
    (zeta, z, theta) : degrees
    """
    T = (epoch - 2000.0) / 100.0

    zeta = 2.5976176 + (2306.0809506 + (0.3019015 + (0.0179663
           + (-0.0000327 + (-0.0000002) * T) * T) * T) * T) * T
    z = -2.5976176 + (2306.0803226 + (1.0947790 + (0.0182273
        + (0.0000470 + (-0.0000003) * T) * T) * T) * T) * T
    theta = (2004.1917476 + (-0.4269353 + (-0.0418251
             + (-0.0000601 + (-0.0000001) * T) * T) * T) * T) * T

    return zeta * ARCSEC_TO_DEG, z * ARCSEC_TO_DEG, theta * ARCSEC_TO_DEG


def precession_matrix(zeta: float, z: float, theta: float) -> NDArray:
    """Rz(−z) · Ry(θ) · Rz(−ζ) for angles in degrees."""
    return rot_z(-z) @ rot_y(theta) @ rot_z(-zeta)


# ── Precession Matrices ─────────────────────────────────────────────────────

def julian_precession_matrix(epoch1: float, epoch2: float) -> NDArray:
    """FK5 precession between two Julian epochs (Lieske)."""
    jd1 = julian_epoch_to_jd(epoch1)
    jd2 = julian_epoch_to_jd(epoch2)
    return precession_matrix(*lieske_precession_angles(jd1, jd2))


def besselian_precession_matrix(epoch1: float, epoch2: float) -> NDArray:
    """FK4 precession between two Besselian epochs (Newcomb)."""
    return precession_matrix(*newcomb_precession_angles(epoch1, epoch2))


def iau2006_precession_matrix(epoch1: float, epoch2: float) -> NDArray:
    """IAU 2006 precession between two Julian epochs.

    When neither epoch is J2000.0 the rotation goes back to J2000.0 and
    forward again:  P(e2) · P(e1)ᵀ.
    """
    if equal(epoch1, epoch2):
        return np.eye(3)
    forward = precession_matrix(*iau2006_precession_angles(epoch2))
    if equal(epoch1, 2000.0):
        return forward
    backward = precession_matrix(*iau2006_precession_angles(epoch1)).T
    return forward @ backward


# ════════════════════════════════════════════════════════════════════════════
#  Frame Bias Matrices
# ════════════════════════════════════════════════════════════════════════════

def fk4_to_fk5_matrix(epoch_obs: float | None = None) -> NDArray:
    """FK4 (B1950) → FK5 (J2000) rotation.

    Parameters
    ----------
    epoch_obs : float or None — Besselian epoch of observation.  When given,
        the matrix is corrected for the fictitious FK4 proper motion
        accumulated since B1950.

    Returns
    -------
    M : (3,3) ndarray — xyz_fk5 = M @ xyz_fk4
    """
    if epoch_obs is None:
        return _FK4_TO_FK5.copy()
    # Julian centuries since B1950
    T = (besselian_epoch_to_jd(epoch_obs) - JD_B1950) / JULIAN_CENTURY
    return _FK4_TO_FK5 + _FK4_TO_FK5_RATE * T / 1e6


def fk5_to_fk4_matrix(epoch_obs: float | None = None) -> NDArray:
    """FK5 (J2000) → FK4 (B1950): numerical inverse of :func:`fk4_to_fk5_matrix`."""
    return np.linalg.inv(fk4_to_fk5_matrix(epoch_obs))


def _bias_matrix(eta0: float, xi0: float, da0: float) -> NDArray:
    return (rot_x(-eta0 * MAS_TO_DEG)
            @ rot_y(xi0 * MAS_TO_DEG)
            @ rot_z(da0 * MAS_TO_DEG))


def icrs_to_fk5_matrix() -> NDArray:
    """ICRS → FK5 (J2000) frame bias."""
    return _bias_matrix(*ICRS_FK5_BIAS)


def icrs_to_dynamical_j2000_matrix() -> NDArray:
    """ICRS → dynamical J2000 frame bias."""
    return _bias_matrix(*ICRS_J2000_BIAS)


# ════════════════════════════════════════════════════════════════════════════
#  Ecliptic, Galactic & Supergalactic
# ════════════════════════════════════════════════════════════════════════════

def obliquity_2000(jd: float) -> float:
    """Mean obliquity of the ecliptic, IAU 2000 model [deg]."""
    T = (jd - JD_J2000) / JULIAN_CENTURY
    eps = (84381.406 + (-46.836769 + (-0.0001831 + (0.00200340
           + (-0.000000576 + (-0.0000000434) * T) * T) * T) * T) * T)
    return eps * ARCSEC_TO_DEG


def obliquity_1980(jd: float) -> float:
    """Mean obliquity of the ecliptic, IAU 1980 model [deg]."""
    T = (jd - JD_J2000) / JULIAN_CENTURY
    eps = 84381.448 + (-46.8150 + (-0.00059 + 0.001813 * T) * T) * T
    return eps * ARCSEC_TO_DEG


def equatorial_to_ecliptic_matrix(equinox: float, kind: FrameKind) -> NDArray:
    """Equator → ecliptic of the same equinox:  Rx(ε).

    The equinox is Besselian for the FK4 family and Julian otherwise.
    ICRS and J2000 use the IAU 2000 obliquity, the others IAU 1980.
    """
    if kind.is_fk4_family:
        jd = besselian_epoch_to_jd(equinox)
    else:
        jd = julian_epoch_to_jd(equinox)

    if kind in (FrameKind.ICRS, FrameKind.J2000):
        eps = obliquity_2000(jd)
    else:
        eps = obliquity_1980(jd)
    return rot_x(eps)


def equatorial_b1950_to_galactic_matrix() -> NDArray:
    """FK4 B1950 equatorial → Galactic."""
    return (rot_z(180.0 - GALACTIC_NODE_LON)
            @ rot_y(90.0 - GALACTIC_POLE_DEC_B1950)
            @ rot_z(GALACTIC_POLE_RA_B1950))


def galactic_to_supergalactic_matrix() -> NDArray:
    """Galactic → Supergalactic."""
    return (rot_z(90.0)
            @ rot_y(90.0 - SUPERGALACTIC_POLE_B)
            @ rot_z(SUPERGALACTIC_POLE_L))


# ════════════════════════════════════════════════════════════════════════════
#  Frame Transitions
# ════════════════════════════════════════════════════════════════════════════

def _to_icrs(kind: FrameKind, equinox: float,
             epoch_obs: float | None) -> NDArray:
    """Matrix taking (kind, equinox) to ICRS."""
    if kind is FrameKind.ICRS:
        return np.eye(3)
    elif kind is FrameKind.FK5:
        return icrs_to_fk5_matrix().T @ julian_precession_matrix(equinox, 2000.0)
    elif kind.is_fk4_family:
        return (icrs_to_fk5_matrix().T
                @ fk4_to_fk5_matrix(epoch_obs)
                @ besselian_precession_matrix(equinox, 1950.0))
    elif kind is FrameKind.J2000:
        return (icrs_to_dynamical_j2000_matrix().T
                @ iau2006_precession_matrix(equinox, 2000.0))
    raise UnsupportedFrameTransitionError(f"no transition from {kind!r}")


def _from_icrs(kind: FrameKind, equinox: float,
               epoch_obs: float | None) -> NDArray:
    """Matrix taking ICRS to (kind, equinox)."""
    if kind is FrameKind.ICRS:
        return np.eye(3)
    elif kind is FrameKind.FK5:
        return julian_precession_matrix(2000.0, equinox) @ icrs_to_fk5_matrix()
    elif kind.is_fk4_family:
        return (besselian_precession_matrix(1950.0, equinox)
                @ fk5_to_fk4_matrix(epoch_obs)
                @ icrs_to_fk5_matrix())
    elif kind is FrameKind.J2000:
        return (iau2006_precession_matrix(2000.0, equinox)
                @ icrs_to_dynamical_j2000_matrix())
    raise UnsupportedFrameTransitionError(f"no transition to {kind!r}")


def frame_transition_matrix(equinox1: float, equinox2: float,
                            kind1: FrameKind, kind2: FrameKind,
                            epoch_obs: float | None = None) -> NDArray:
    """Rotation from (kind1, equinox1) to (kind2, equinox2).

    Parameters
    ----------
    equinox1, equinox2 : float — decimal years (Besselian for the FK4
        family, Julian otherwise; ignored for ICRS)
    kind1, kind2 : FrameKind
    epoch_obs : float or None — Besselian epoch of observation for the
        FK4 ↔ FK5 bias

    Returns
    -------
    M : (3,3) ndarray — xyz_2 = M @ xyz_1

    Raises
    ------
    UnsupportedFrameTransitionError
    """
    if not isinstance(kind1, FrameKind) or not isinstance(kind2, FrameKind):
        raise UnsupportedFrameTransitionError(
            f"unsupported frame transition {kind1!r} → {kind2!r}")

    if kind1 is FrameKind.ICRS and kind2 is FrameKind.ICRS:
        M = np.eye(3)
    elif kind1 is FrameKind.FK5 and kind2 is FrameKind.FK5:
        M = julian_precession_matrix(equinox1, equinox2)
    elif kind1.is_fk4_family and kind2.is_fk4_family:
        M = besselian_precession_matrix(equinox1, equinox2)
    elif kind1 is FrameKind.J2000 and kind2 is FrameKind.J2000:
        M = iau2006_precession_matrix(equinox1, equinox2)
    else:
        M = (_from_icrs(kind2, equinox2, epoch_obs)
             @ _to_icrs(kind1, equinox1, epoch_obs))

    logger.debug("frame transition %s(%s) → %s(%s), epoch_obs=%s",
                 kind1.name, equinox1, kind2.name, equinox2, epoch_obs)
    return M
