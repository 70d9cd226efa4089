"""Error types raised by inertia_tree."""

from __future__ import annotations


class InertiaTreeError(ValueError):
    """Base class for inertia_tree errors."""


class MalformedInput(InertiaTreeError):
    """Raised when a system or assembly document is built from invalid values."""


class DegenerateMass(InertiaTreeError):
    """Raised when a center of mass is requested for a subtree with zero mass."""
