"""
skycrs.errors — Error Taxonomy
================================

Every error raised by the library derives from :class:`SkyCrsError`.
Input-validation errors additionally derive from ``ValueError`` so callers
that already guard numeric input with ``except ValueError`` keep working.
"""


class SkyCrsError(Exception):
    """Base error."""


class OutOfRangeError(SkyCrsError, ValueError):
    """Longitude/latitude outside its domain, or a malformed coordinate array."""


class MalformedEpochError(SkyCrsError, ValueError):
    """An equinox/epoch string has no known prefix or no parsable number."""


class UnsupportedFrameTransitionError(SkyCrsError):
    """No rotation is defined between the two reference frames."""


class UnsupportedCrsError(SkyCrsError):
    """No rotation is defined towards the requested coordinate system."""


class MathematicalSolutionError(SkyCrsError, ArithmeticError):
    """A numerical solve (e.g. the E-terms quadratic) has no valid root."""
