"""
skycrs — Celestial Coordinate Reference System Conversions
===========================================================

A pure-NumPy library for converting sky positions between equatorial,
ecliptic, galactic and supergalactic coordinates in the ICRS, FK5, FK4,
FK4-without-E-terms and dynamical J2000 reference frames, at any equinox.

All cross-frame rotations route through ICRS as the canonical base::

    FK4 (B-equinox)  ←→  FK5 (J-equinox)  ←→  ICRS  ←→  J2000 (dynamical)

and all coordinate systems route through equatorial coordinates::

    Ecliptic  ←→  Equatorial  ←→  Galactic  ←→  Supergalactic

Quick Start
-----------
::

    from skycrs import Equatorial, Galactic, ReferenceFrame, convert

    icrs = Equatorial()
    fk4 = Equatorial(ReferenceFrame.fk4("B1950"))
    pos = convert(icrs, Galactic(), 10.68458, 41.26917)

Reference
---------
Calabretta, M.R. & Greisen, E.W. (2002). A&A 395, 1077 (FITS WCS paper II).
"""

import logging

from .conversion import (
    # ── Unified API ──
    convert, convert_batch, convert_positions, separation,
    get_rotation_matrix, eterms_for,
)

from .crs import (
    CoordinateSystemKind, CoordinateReferenceSystem,
    Equatorial, Ecliptic, Galactic, Supergalactic,
    create_crs, crs_from_name,
)

from .datum import FrameKind, ReferenceFrame

from .epochs import (
    Epoch, parse_epoch,
    besselian_epoch_to_jd, jd_to_besselian_epoch,
    julian_epoch_to_jd, jd_to_julian_epoch,
    calendar_to_jd, fits_date,
    iso_to_julian_date, iso_to_modified_julian_date,
    julian_date_to_iso, modified_julian_date_to_iso,
)

from .errors import (
    SkyCrsError, OutOfRangeError, MalformedEpochError,
    UnsupportedFrameTransitionError, UnsupportedCrsError,
    MathematicalSolutionError,
)

from .eterms import compute_eterms, add_eterms, remove_eterms

from .position import SkyPosition

from .precession import (
    lieske_precession_angles, newcomb_precession_angles,
    iau2006_precession_angles, precession_matrix,
    julian_precession_matrix, besselian_precession_matrix,
    iau2006_precession_matrix,
    fk4_to_fk5_matrix, fk5_to_fk4_matrix,
    icrs_to_fk5_matrix, icrs_to_dynamical_j2000_matrix,
    obliquity_1980, obliquity_2000, equatorial_to_ecliptic_matrix,
    equatorial_b1950_to_galactic_matrix, galactic_to_supergalactic_matrix,
    frame_transition_matrix,
)

from .utils import (
    safe_atan2, safe_asin, safe_acos,
    equal, is_in_interval,
    rot_x, rot_y, rot_z,
    longlat_to_xyz, xyz_to_longlat,
    normalize,
    DOUBLE_TOLERANCE,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    # ── Unified API (recommended entry points) ──
    "convert", "convert_batch", "convert_positions", "separation",
    "get_rotation_matrix", "eterms_for",
    # ── Coordinate reference systems ──
    "CoordinateSystemKind", "CoordinateReferenceSystem",
    "Equatorial", "Ecliptic", "Galactic", "Supergalactic",
    "create_crs", "crs_from_name",
    "SkyPosition",
    # ── Reference frames ──
    "FrameKind", "ReferenceFrame",
    # ── Epochs & dates ──
    "Epoch", "parse_epoch",
    "besselian_epoch_to_jd", "jd_to_besselian_epoch",
    "julian_epoch_to_jd", "jd_to_julian_epoch",
    "calendar_to_jd", "fits_date",
    "iso_to_julian_date", "iso_to_modified_julian_date",
    "julian_date_to_iso", "modified_julian_date_to_iso",
    # ── Precession & frame matrices ──
    "lieske_precession_angles", "newcomb_precession_angles",
    "iau2006_precession_angles", "precession_matrix",
    "julian_precession_matrix", "besselian_precession_matrix",
    "iau2006_precession_matrix",
    "fk4_to_fk5_matrix", "fk5_to_fk4_matrix",
    "icrs_to_fk5_matrix", "icrs_to_dynamical_j2000_matrix",
    "obliquity_1980", "obliquity_2000", "equatorial_to_ecliptic_matrix",
    "equatorial_b1950_to_galactic_matrix", "galactic_to_supergalactic_matrix",
    "frame_transition_matrix",
    # ── E-terms ──
    "compute_eterms", "add_eterms", "remove_eterms",
    # ── Errors ──
    "SkyCrsError", "OutOfRangeError", "MalformedEpochError",
    "UnsupportedFrameTransitionError", "UnsupportedCrsError",
    "MathematicalSolutionError",
    # ── Utilities ──
    "safe_atan2", "safe_asin", "safe_acos", "equal", "is_in_interval",
    "rot_x", "rot_y", "rot_z", "longlat_to_xyz", "xyz_to_longlat",
    "normalize", "DOUBLE_TOLERANCE",
]
