"""
skycrs.datum — Celestial Reference Frames
===========================================

The five equatorial reference frames understood by the library:

    ICRS       International Celestial Reference System (no equinox)
    FK5        Fifth Fundamental Catalogue, Julian equinox
    FK4        Fourth Fundamental Catalogue, Besselian equinox, E-terms
               included, epoch of observation for the fictitious proper motion
    FK4_NO_E   FK4 with the elliptic terms of aberration removed
    J2000      dynamical J2000 equator and equinox (IAU2006 precession)

A :class:`ReferenceFrame` is an immutable value.  Frames are built through
the class-method factories (``ReferenceFrame.fk4("B1950")`` ...), which
accept either decimal years or epoch strings (see :func:`parse_epoch`).
"""

import enum
from dataclasses import dataclass, replace

from numpy.typing import NDArray

from .epochs import parse_epoch
from .errors import UnsupportedFrameTransitionError
from .eterms import compute_eterms

EpochLike = str | float | int


class FrameKind(enum.Enum):
    """Reference-frame tag:  (display name, needs equinox, needs epoch)."""

    ICRS = ("ICRS", False, False)
    FK5 = ("FK5", True, False)
    FK4 = ("FK4", True, True)
    FK4_NO_E = ("FK4 NO E-terms", True, True)
    J2000 = ("J2000", False, False)

    def __init__(self, display_name: str, needs_equinox: bool, needs_epoch: bool):
        self.display_name = display_name
        self.needs_equinox = needs_equinox
        self.needs_epoch = needs_epoch

    @property
    def is_fk4_family(self) -> bool:
        """FK4 and FK4_NO_E use Besselian equinoxes and Newcomb precession."""
        return self in (FrameKind.FK4, FrameKind.FK4_NO_E)

    @classmethod
    def from_name(cls, name: str) -> "FrameKind":
        """Look up a frame by display name ("FK4 NO E-terms") or member name."""
        key = name.strip().upper()
        for kind in cls:
            if key in (kind.name, kind.display_name.upper()):
                return kind
        raise UnsupportedFrameTransitionError(
            f"unknown reference frame {name!r}; "
            f"valid: {[k.display_name for k in cls]}"
        )


def _equinox_value(kind: FrameKind, value: EpochLike) -> float:
    if isinstance(value, str):
        epoch = parse_epoch(value)
        return epoch.besselian if kind.is_fk4_family else epoch.julian
    return float(value)


def _epoch_obs_value(value: EpochLike | None) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        return parse_epoch(value).besselian
    return float(value)


# ════════════════════════════════════════════════════════════════════════════
#  Reference Frame Value
# ════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReferenceFrame:
    """Immutable reference frame.

    Parameters
    ----------
    kind : FrameKind
    equinox : float — decimal year; Besselian for the FK4 family,
        Julian otherwise.  Always 2000.0 for ICRS.
    epoch_obs : float or None — Besselian epoch of observation
        (FK4 family only)
    """
    kind: FrameKind
    equinox: float = 2000.0
    epoch_obs: float | None = None

    # ── Factories ──

    @classmethod
    def icrs(cls) -> "ReferenceFrame":
        return cls(FrameKind.ICRS, 2000.0, None)

    @classmethod
    def fk5(cls, equinox: EpochLike = "J2000") -> "ReferenceFrame":
        return cls(FrameKind.FK5, _equinox_value(FrameKind.FK5, equinox), None)

    @classmethod
    def j2000(cls, equinox: EpochLike = "J2000") -> "ReferenceFrame":
        return cls(FrameKind.J2000, _equinox_value(FrameKind.J2000, equinox), None)

    @classmethod
    def fk4(cls, equinox: EpochLike = "B1950",
            epoch_obs: EpochLike | None = None) -> "ReferenceFrame":
        """FK4 frame; the epoch of observation defaults to the equinox."""
        return cls._fk4_family(FrameKind.FK4, equinox, epoch_obs)

    @classmethod
    def fk4_no_e(cls, equinox: EpochLike = "B1950",
                 epoch_obs: EpochLike | None = None) -> "ReferenceFrame":
        """FK4 frame without E-terms; epoch of observation as for ``fk4``."""
        return cls._fk4_family(FrameKind.FK4_NO_E, equinox, epoch_obs)

    @classmethod
    def _fk4_family(cls, kind, equinox, epoch_obs):
        eq = _equinox_value(kind, equinox)
        obs = _epoch_obs_value(epoch_obs)
        return cls(kind, eq, eq if obs is None else obs)

    @classmethod
    def create(cls, kind: FrameKind | str,
               equinox: EpochLike | None = None,
               epoch_obs: EpochLike | None = None) -> "ReferenceFrame":
        """Build any frame; values the kind does not take are ignored.

        ``kind`` may be a :class:`FrameKind` or a name accepted by
        :meth:`FrameKind.from_name`.
        """
        if isinstance(kind, str):
            kind = FrameKind.from_name(kind)

        if kind is FrameKind.ICRS:
            return cls.icrs()
        elif kind is FrameKind.FK5:
            return cls.fk5("J2000" if equinox is None else equinox)
        elif kind is FrameKind.J2000:
            return cls.j2000("J2000" if equinox is None else equinox)
        elif kind is FrameKind.FK4:
            return cls.fk4("B1950" if equinox is None else equinox, epoch_obs)
        elif kind is FrameKind.FK4_NO_E:
            return cls.fk4_no_e("B1950" if equinox is None else equinox, epoch_obs)
        raise UnsupportedFrameTransitionError(f"unsupported frame kind {kind!r}")

    # ── Derived values ──

    def with_equinox(self, equinox: EpochLike) -> "ReferenceFrame":
        """Copy with a new equinox (unchanged for ICRS and J2000)."""
        if not self.kind.needs_equinox:
            return self
        return replace(self, equinox=_equinox_value(self.kind, equinox))

    def with_epoch_obs(self, epoch_obs: EpochLike) -> "ReferenceFrame":
        """Copy with a new epoch of observation (FK4 family only)."""
        if not self.kind.needs_epoch:
            return self
        return replace(self, epoch_obs=_epoch_obs_value(epoch_obs))

    @property
    def needs_equinox(self) -> bool:
        return self.kind.needs_equinox

    @property
    def needs_epoch(self) -> bool:
        return self.kind.needs_epoch

    def eterms(self) -> NDArray | None:
        """E-term vector at the equinox for FK4, ``None`` for every other frame."""
        if self.kind is FrameKind.FK4:
            return compute_eterms(self.equinox)
        return None

    def __str__(self) -> str:
        if self.kind in (FrameKind.ICRS, FrameKind.J2000):
            return self.kind.name
        if self.kind is FrameKind.FK5:
            return f"FK5(J{self.equinox})"
        text = f"{self.kind.name}(B{self.equinox}"
        if self.epoch_obs is not None and self.epoch_obs != self.equinox:
            text += f", B{self.epoch_obs}"
        return text + ")"
