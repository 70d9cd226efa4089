"""Rigid body namespace."""

from .mass_properties import (  # noqa: F401
    box_inertia_body,
    cylinder_inertia_body,
    mass_properties,
    point_mass,
    rod_inertia_body,
    sphere_inertia_body,
    system_from_points,
)
from .system import MassAggregate, RigidSystem  # noqa: F401
