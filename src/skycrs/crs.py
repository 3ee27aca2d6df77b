"""
skycrs.crs — Celestial Coordinate Reference Systems
=====================================================

A coordinate reference system (CRS) is a coordinate system plus, for the
equatorial and ecliptic systems, the reference frame it is expressed in.

Coordinate Systems
------------------
**Equatorial** — longitude = right ascension, latitude = declination,
  referred to the mean equator/equinox of a :class:`ReferenceFrame`.

**Ecliptic** — referred to the mean ecliptic of the frame equinox,
  obtained from the equator by a rotation of ε (mean obliquity) about X.
  An FK4_NO_E frame is treated as FK4 for ecliptic coordinates.

**Galactic** — IAU 1958 system, defined in FK4 B1950 by the north
  galactic pole (192.25°, 27.4°) and the node longitude 123°.

**Supergalactic** — de Vaucouleurs system, defined in Galactic
  coordinates by its pole (l, b) = (47.37°, 6.32°).

Transform Graph
---------------
Every system routes through equatorial coordinates::

    Ecliptic ──Rx(ε)ᵀ── Equatorial(frame) ──frames── Equatorial(FK4 B1950)
                                                          │
                                                     Galactic ── Supergalactic

Each CRS answers ``rotation_matrix_to(target)`` by dispatching on the
target's :class:`CoordinateSystemKind`.
"""

import enum
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from .datum import FrameKind, ReferenceFrame
from .errors import UnsupportedCrsError
from .precession import (
    frame_transition_matrix,
    equatorial_to_ecliptic_matrix,
    equatorial_b1950_to_galactic_matrix,
    galactic_to_supergalactic_matrix,
)

# Equinox reported by the systems without a reference frame
GALACTIC_EQUINOX = 2000.0
# Galactic system is defined in FK4 at this Besselian equinox
GALACTIC_DEFINITION_EQUINOX = 1950.0


class CoordinateSystemKind(enum.Enum):
    """Coordinate-system tag:  (display name, has reference frame)."""

    EQUATORIAL = ("Equatorial", True)
    ECLIPTIC = ("Ecliptic", True)
    GALACTIC = ("Galactic", False)
    SUPER_GALACTIC = ("Super Galactic", False)

    def __init__(self, display_name: str, has_reference_frame: bool):
        self.display_name = display_name
        self.has_reference_frame = has_reference_frame

    @classmethod
    def from_name(cls, name: str) -> "CoordinateSystemKind":
        """Look up by display name or member name (case, spaces and
        underscores ignored)."""
        def squash(text):
            return text.upper().replace(" ", "").replace("_", "")

        key = squash(name.strip())
        for kind in cls:
            if key in (squash(kind.name), squash(kind.display_name)):
                return kind
        raise UnsupportedCrsError(
            f"unknown coordinate system {name!r}; "
            f"valid: {[k.display_name for k in cls]}"
        )


# ── Shared chains ───────────────────────────────────────────────────────────

def _galactic_matrix() -> NDArray:
    return equatorial_b1950_to_galactic_matrix()


def _ecliptic_matrix(frame: ReferenceFrame) -> NDArray:
    return equatorial_to_ecliptic_matrix(frame.equinox, frame.kind)


def _from_equatorial(frame: ReferenceFrame, target: "CoordinateReferenceSystem",
                     epoch_obs: float | None = None) -> NDArray:
    """Equatorial coordinates in ``frame`` → ``target``."""
    kind = target.kind
    if kind is CoordinateSystemKind.EQUATORIAL:
        tf = target.reference_frame
        return frame_transition_matrix(frame.equinox, tf.equinox,
                                       frame.kind, tf.kind, epoch_obs)
    elif kind is CoordinateSystemKind.ECLIPTIC:
        tf = target.reference_frame
        M = frame_transition_matrix(frame.equinox, tf.equinox,
                                    frame.kind, tf.kind)
        return _ecliptic_matrix(tf) @ M
    elif kind is CoordinateSystemKind.GALACTIC:
        M = frame_transition_matrix(frame.equinox, GALACTIC_DEFINITION_EQUINOX,
                                    frame.kind, FrameKind.FK4)
        return _galactic_matrix() @ M
    elif kind is CoordinateSystemKind.SUPER_GALACTIC:
        M = frame_transition_matrix(frame.equinox, GALACTIC_DEFINITION_EQUINOX,
                                    frame.kind, FrameKind.FK4)
        return galactic_to_supergalactic_matrix() @ _galactic_matrix() @ M
    raise UnsupportedCrsError(f"no rotation towards {target!r}")


def _from_galactic(target: "CoordinateReferenceSystem") -> NDArray:
    """Galactic coordinates → ``target``."""
    kind = target.kind
    if kind is CoordinateSystemKind.GALACTIC:
        return np.eye(3)
    elif kind is CoordinateSystemKind.SUPER_GALACTIC:
        return galactic_to_supergalactic_matrix()
    elif kind in (CoordinateSystemKind.EQUATORIAL, CoordinateSystemKind.ECLIPTIC):
        tf = target.reference_frame
        M = frame_transition_matrix(GALACTIC_DEFINITION_EQUINOX, tf.equinox,
                                    FrameKind.FK4, tf.kind) @ _galactic_matrix().T
        if kind is CoordinateSystemKind.ECLIPTIC:
            M = _ecliptic_matrix(tf) @ M
        return M
    raise UnsupportedCrsError(f"no rotation towards {target!r}")


# ════════════════════════════════════════════════════════════════════════════
#  CRS Values
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CoordinateReferenceSystem:
    """Base of the four coordinate reference systems.

    Instances are immutable and compare by value.
    """
    kind: ClassVar[CoordinateSystemKind]
    reference_frame: ReferenceFrame | None = None

    @property
    def equinox(self) -> float:
        """Frame equinox, or 2000.0 for systems without a frame."""
        if self.reference_frame is None:
            return GALACTIC_EQUINOX
        return self.reference_frame.equinox

    def eterms(self) -> NDArray | None:
        """E-term vector when the CRS is expressed in FK4, else ``None``."""
        if self.reference_frame is None:
            return None
        return self.reference_frame.eterms()

    def rotation_matrix_to(self, target: "CoordinateReferenceSystem") -> NDArray:
        """3×3 matrix M with  xyz_target = M @ xyz_self."""
        raise NotImplementedError

    def __str__(self) -> str:
        if self.reference_frame is None:
            return self.kind.name
        return f"{self.kind.name}({self.reference_frame})"


@dataclass(frozen=True)
class Equatorial(CoordinateReferenceSystem):
    """Equatorial coordinates (RA, Dec); ICRS unless a frame is given."""
    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.EQUATORIAL
    reference_frame: ReferenceFrame = field(default_factory=ReferenceFrame.icrs)

    def rotation_matrix_to(self, target):
        epoch_obs = None
        if target.kind is CoordinateSystemKind.EQUATORIAL:
            # FK4 ↔ FK5 bias at the epoch of observation of either side
            epoch_obs = self.reference_frame.epoch_obs
            if epoch_obs is None:
                epoch_obs = target.reference_frame.epoch_obs
        return _from_equatorial(self.reference_frame, target, epoch_obs)


@dataclass(frozen=True)
class Ecliptic(CoordinateReferenceSystem):
    """Ecliptic coordinates (λ, β); FK5 J2000 unless a frame is given."""
    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.ECLIPTIC
    reference_frame: ReferenceFrame = field(default_factory=ReferenceFrame.fk5)

    def __post_init__(self):
        frame = self.reference_frame
        if frame.kind is FrameKind.FK4_NO_E:
            object.__setattr__(self, "reference_frame",
                               ReferenceFrame(FrameKind.FK4, frame.equinox,
                                              frame.epoch_obs))

    def rotation_matrix_to(self, target):
        to_equatorial = _ecliptic_matrix(self.reference_frame).T
        return _from_equatorial(self.reference_frame, target) @ to_equatorial


@dataclass(frozen=True)
class Galactic(CoordinateReferenceSystem):
    """Galactic coordinates (l, b)."""
    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.GALACTIC
    reference_frame: None = field(default=None, init=False)

    def rotation_matrix_to(self, target):
        return _from_galactic(target)


@dataclass(frozen=True)
class Supergalactic(CoordinateReferenceSystem):
    """Supergalactic coordinates (SGL, SGB)."""
    kind: ClassVar[CoordinateSystemKind] = CoordinateSystemKind.SUPER_GALACTIC
    reference_frame: None = field(default=None, init=False)

    def rotation_matrix_to(self, target):
        if target.kind is CoordinateSystemKind.SUPER_GALACTIC:
            return np.eye(3)
        return _from_galactic(target) @ galactic_to_supergalactic_matrix().T


# ── Factories ───────────────────────────────────────────────────────────────

_CRS_CLASSES = {
    CoordinateSystemKind.EQUATORIAL: Equatorial,
    CoordinateSystemKind.ECLIPTIC: Ecliptic,
    CoordinateSystemKind.GALACTIC: Galactic,
    CoordinateSystemKind.SUPER_GALACTIC: Supergalactic,
}


def create_crs(kind: CoordinateSystemKind,
               frame: ReferenceFrame | None = None) -> CoordinateReferenceSystem:
    """Build a CRS; ``frame`` is ignored for Galactic and Supergalactic and
    defaults per system (ICRS for Equatorial, FK5 J2000 for Ecliptic)."""
    if not isinstance(kind, CoordinateSystemKind):
        raise UnsupportedCrsError(f"unsupported coordinate system {kind!r}")
    cls = _CRS_CLASSES[kind]
    if not kind.has_reference_frame or frame is None:
        return cls()
    return cls(frame)


def crs_from_name(name: str,
                  frame: ReferenceFrame | None = None) -> CoordinateReferenceSystem:
    """Build a CRS from its name, e.g. ``"Equatorial"`` or ``"SUPER_GALACTIC"``."""
    return create_crs(CoordinateSystemKind.from_name(name), frame)
