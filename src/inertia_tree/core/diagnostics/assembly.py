"""Assembly diagnostics built on the aggregate of a system tree."""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from ..math.tensor import as_vector3, parallel_axis_shift
from ..rigid_body.system import RigidSystem


def walk(system: RigidSystem) -> Iterator[tuple[int, RigidSystem]]:
    """Yield (depth, node) pairs in depth-first pre-order."""
    stack = [(0, system)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        stack.extend((depth + 1, child) for child in reversed(node.subsystems))


def node_count(system: RigidSystem) -> int:
    return sum(1 for _ in walk(system))


def flattened_mass(system: RigidSystem) -> float:
    """Sum of every node's own mass; equals ``system.total_mass()``."""
    return float(sum(node.get_mass() for _, node in walk(system)))


def inertia_about_point(system: RigidSystem, point: np.ndarray) -> np.ndarray:
    """Return the aggregate inertia tensor about an arbitrary reference point."""
    agg = system.aggregate()
    p = as_vector3(point, "point")
    return parallel_axis_shift(agg.inertia, agg.mass, agg.center - p)


def principal_moments(system: RigidSystem) -> tuple[np.ndarray, np.ndarray]:
    """Return ascending principal moments and their axes (as columns)."""
    moments, axes = np.linalg.eigh(system.total_inertia())
    return moments, axes


def summary(system: RigidSystem) -> str:
    lines = []
    for depth, node in walk(system):
        label = node.description or "<unnamed>"
        lines.append(
            f"{'  ' * depth}{label}: mass={node.get_mass():.6g} total={node.total_mass():.6g}"
        )
    return "\n".join(lines)
