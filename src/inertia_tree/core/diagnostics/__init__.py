"""Diagnostics namespace."""

from .assembly import (  # noqa: F401
    flattened_mass,
    inertia_about_point,
    node_count,
    principal_moments,
    summary,
    walk,
)
