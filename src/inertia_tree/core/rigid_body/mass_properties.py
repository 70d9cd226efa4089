"""Mass properties of primitive bodies, each about its own center of mass."""

from __future__ import annotations

import numpy as np

from ...config import ValidationConfig
from ...errors import DegenerateMass, MalformedInput
from ..math.tensor import ArrayF, as_vector3
from .system import RigidSystem


def mass_properties(points_body: np.ndarray, masses: np.ndarray) -> tuple[float, np.ndarray, np.ndarray]:
    """Return total mass, center of mass, and inertia tensor about CoM.

    Parameters
    ----------
    points_body : (K, 3)
        Point positions.
    masses : (K,)
        Point masses, each >= 0.
    """
    points = np.asarray(points_body, dtype=np.float64)
    masses = np.asarray(masses, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise MalformedInput("points_body must have shape (K, 3)")
    if masses.ndim != 1 or masses.shape[0] != points.shape[0]:
        raise MalformedInput("masses must have shape (K,)")
    if np.any(masses < 0.0):
        raise MalformedInput("masses must be >= 0")

    total_mass = float(np.sum(masses))
    if total_mass <= 0.0:
        raise DegenerateMass("total mass of points must be positive")

    com = np.sum(points * masses[:, np.newaxis], axis=0) / total_mass
    r = points - com
    r2 = np.sum(r * r, axis=1)
    eye = np.eye(3, dtype=np.float64)
    inertia = np.sum(
        masses[:, np.newaxis, np.newaxis] * (r2[:, None, None] * eye - r[:, :, None] * r[:, None, :]),
        axis=0,
    )
    return total_mass, com, inertia


def _mass_value(mass: float) -> float:
    mass_val = float(mass)
    if mass_val < 0.0:
        raise MalformedInput("mass must be >= 0")
    return mass_val


def _axis_index(axis: int) -> int:
    if axis not in (0, 1, 2):
        raise MalformedInput("axis must be 0, 1 or 2")
    return int(axis)


def box_inertia_body(mass: float, size: np.ndarray) -> np.ndarray:
    """Return inertia tensor for a solid box about CoM."""
    mass_val = _mass_value(mass)
    dims = np.asarray(size, dtype=np.float64)
    if dims.shape != (3,):
        raise MalformedInput("size must have shape (3,)")
    if np.any(dims <= 0.0):
        raise MalformedInput("size values must be > 0")
    sx, sy, sz = dims
    ixx = (mass_val / 12.0) * (sy * sy + sz * sz)
    iyy = (mass_val / 12.0) * (sx * sx + sz * sz)
    izz = (mass_val / 12.0) * (sx * sx + sy * sy)
    return np.diag([ixx, iyy, izz])


def sphere_inertia_body(mass: float, radius: float) -> np.ndarray:
    """Return inertia tensor for a solid sphere about CoM."""
    mass_val = _mass_value(mass)
    radius_val = float(radius)
    if radius_val <= 0.0:
        raise MalformedInput("radius must be > 0")
    i = (2.0 / 5.0) * mass_val * radius_val * radius_val
    return np.diag([i, i, i])


def rod_inertia_body(mass: float, length: float, axis: int = 2) -> np.ndarray:
    """Return inertia tensor for a thin rod lying along ``axis``."""
    mass_val = _mass_value(mass)
    length_val = float(length)
    if length_val <= 0.0:
        raise MalformedInput("length must be > 0")
    i = mass_val * length_val * length_val / 12.0
    diag = np.full(3, i, dtype=np.float64)
    diag[_axis_index(axis)] = 0.0
    return np.diag(diag)


def cylinder_inertia_body(mass: float, radius: float, length: float, axis: int = 2) -> np.ndarray:
    """Return inertia tensor for a solid cylinder with its axis along ``axis``."""
    mass_val = _mass_value(mass)
    radius_val = float(radius)
    length_val = float(length)
    if radius_val <= 0.0:
        raise MalformedInput("radius must be > 0")
    if length_val <= 0.0:
        raise MalformedInput("length must be > 0")
    transverse = mass_val * (3.0 * radius_val * radius_val + length_val * length_val) / 12.0
    diag = np.full(3, transverse, dtype=np.float64)
    diag[_axis_index(axis)] = 0.5 * mass_val * radius_val * radius_val
    return np.diag(diag)


def point_mass(mass: float, position: ArrayF, description: str = "") -> RigidSystem:
    """Return a leaf system with no local inertia."""
    return RigidSystem(
        mass,
        as_vector3(position, "position"),
        np.zeros((3, 3), dtype=np.float64),
        description=description,
    )


def system_from_points(
    points_body: np.ndarray,
    masses: np.ndarray,
    description: str = "",
    config: ValidationConfig | None = None,
) -> RigidSystem:
    """Return a leaf system lumping a point cloud at its center of mass."""
    total_mass, com, inertia = mass_properties(points_body, masses)
    return RigidSystem(total_mass, com, inertia, description=description, config=config)

