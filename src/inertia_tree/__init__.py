"""Aggregate mass properties of hierarchical rigid-body assemblies."""

from __future__ import annotations

__version__ = "0.1.0"

from .config import ValidationConfig  # noqa: E402,F401
from .core.math.tensor import parallel_axis_shift  # noqa: E402,F401
from .core.rigid_body import MassAggregate, RigidSystem, point_mass  # noqa: E402,F401
from .errors import DegenerateMass, InertiaTreeError, MalformedInput  # noqa: E402,F401
