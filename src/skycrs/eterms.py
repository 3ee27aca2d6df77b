"""
skycrs.eterms — Elliptic Terms of Aberration
==============================================

FK4 catalogue positions include the part of annual aberration caused by
the eccentricity of the Earth's orbit (the "E-terms", at most ~0.343").
They must be removed before a position is precessed or rotated out of
FK4 and added back when the result is expressed in FK4.

Reference
---------
Seidelmann, P.K. (1992). *Explanatory Supplement to the Astronomical
Almanac*, §3.531.
Calabretta, M.R. & Greisen, E.W. (2002). A&A 395, 1077, §3.1 (paper II).
"""

import numpy as np
from numpy.typing import NDArray

from .errors import MathematicalSolutionError
from .utils import ARCSEC_TO_DEG, normalize

# ── Constants ───────────────────────────────────────────────────────────────
ABERRATION_CONSTANT = 20.49522      # κ [arcsec]
TROPICAL_CENTURY_RATIO = 1.00002135903  # Besselian centuries → Julian


def compute_eterms(epoch: float) -> NDArray:
    """E-term vector for a Besselian epoch.

    Parameters
    ----------
    epoch : float — Besselian epoch (usually the FK4 equinox)

    Returns
    -------
    e : (3,) ndarray — (−ΔD, ΔC, ΔC·tan ε) in units of the unit sphere
    """
    # Julian centuries from B1950
    T = (epoch - 1950.0) * TROPICAL_CENTURY_RATIO / 100.0

    # Eccentricity of the Earth's orbit
    ecc = 0.01673011 - (0.00004193 + 0.000000126 * T) * T
    # Mean obliquity of the ecliptic
    eps = np.deg2rad(
        (84404.836 - (46.8495 + (0.00319 + 0.00181 * T) * T) * T) * ARCSEC_TO_DEG)
    # Mean longitude of perihelion of the solar orbit
    perihelion = np.deg2rad(
        (1015489.951 + (6190.67 + (1.65 + 0.012 * T) * T) * T) * ARCSEC_TO_DEG)

    e = ecc * np.deg2rad(ABERRATION_CONSTANT * ARCSEC_TO_DEG)
    cos_p = np.cos(perihelion)
    return np.array([
        e * np.sin(perihelion),
        -e * cos_p * np.cos(eps),
        -e * cos_p * np.sin(eps),
    ])


def remove_eterms(xyz: NDArray, eterms: NDArray) -> NDArray:
    """Apparent → mean place:  x − e  for a (3,) vector or (N,3) batch."""
    return np.asarray(xyz, dtype=np.float64) - eterms


def add_eterms(xyz: NDArray, eterms: NDArray) -> NDArray:
    """Mean → apparent place for a (3,) vector or (N,3) batch.

    Finds λ > 0 such that ``λ·x̂ + e`` is again a unit vector, i.e. the
    positive root of  λ² + 2(e·x̂)λ + (|e|² − 1) = 0.

    Raises
    ------
    MathematicalSolutionError
        when the quadratic has no real positive root.
    """
    x = normalize(xyz)
    eterms = np.asarray(eterms, dtype=np.float64)

    w = 2.0 * (x @ eterms)
    p = eterms @ eterms - 1.0
    disc = w * w - 4.0 * p
    if np.any(disc < 0.0):
        raise MathematicalSolutionError(
            "E-terms quadratic has no real solution (negative discriminant)")

    lam = 0.5 * (-w + np.sqrt(disc))
    if np.any(lam <= 0.0):
        raise MathematicalSolutionError(
            "E-terms quadratic has no positive solution")

    return np.asarray(lam)[..., None] * x + eterms
