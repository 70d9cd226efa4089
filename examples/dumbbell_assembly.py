"""Dumbbell built as a tree of point masses, checked against a flat point cloud."""

from __future__ import annotations

import numpy as np

from inertia_tree.core.diagnostics import principal_moments, summary
from inertia_tree.core.rigid_body import RigidSystem, mass_properties, point_mass


if __name__ == "__main__":
    a = 1.0
    m = 1.0
    left = point_mass(m, [-a, 0.0, 0.0], description="left")
    right = point_mass(m, [a, 0.0, 0.0], description="right")
    handle = RigidSystem(0.5, [0.0, 0.0, 0.0], np.diag([0.0, 0.1, 0.1]), description="handle")
    dumbbell = RigidSystem(
        0.0,
        [0.0, 0.0, 0.0],
        np.zeros((3, 3)),
        subsystems=[left, right, handle],
        description="dumbbell",
    )

    points = np.array([[-a, 0.0, 0.0], [a, 0.0, 0.0]], dtype=np.float64)
    _, _, flat_inertia = mass_properties(points, np.array([m, m]))

    print(summary(dumbbell))
    print("total mass:", dumbbell.total_mass())
    print("center of mass:", dumbbell.center_of_mass())
    print("inertia:")
    print(dumbbell.total_inertia())
    print("point-cloud inertia + handle:")
    print(flat_inertia + handle.local_inertia)
    print("principal moments:", principal_moments(dumbbell)[0])
