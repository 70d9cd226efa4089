from __future__ import annotations

import numpy as np
import pytest

from inertia_tree.core.rigid_body import (
    RigidSystem,
    box_inertia_body,
    cylinder_inertia_body,
    mass_properties,
    point_mass,
    rod_inertia_body,
    sphere_inertia_body,
    system_from_points,
)
from inertia_tree.errors import DegenerateMass, MalformedInput


def test_mass_properties_com_and_inertia() -> None:
    points = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]], dtype=np.float64)
    masses = np.array([1.0, 3.0], dtype=np.float64)

    total_mass, com, inertia = mass_properties(points, masses)
    assert total_mass == 4.0
    assert np.allclose(com, np.array([1.5, 0.0, 0.0]))
    expected_inertia = np.diag([0.0, 3.0, 3.0])
    assert np.allclose(inertia, expected_inertia)


def test_mass_properties_dumbbell() -> None:
    a = 2.0
    m = 1.5
    points = np.array([[-a, 0.0, 0.0], [a, 0.0, 0.0]], dtype=np.float64)
    masses = np.array([m, m], dtype=np.float64)

    total_mass, com, inertia = mass_properties(points, masses)
    assert total_mass == 2.0 * m
    assert np.allclose(com, np.zeros(3))
    expected = np.diag([0.0, 2.0 * m * a * a, 2.0 * m * a * a])
    assert np.allclose(inertia, expected)


def test_mass_properties_rejects_bad_input() -> None:
    with pytest.raises(MalformedInput):
        mass_properties(np.zeros((2, 2)), np.ones(2))
    with pytest.raises(MalformedInput):
        mass_properties(np.zeros((2, 3)), np.ones(3))
    with pytest.raises(MalformedInput):
        mass_properties(np.zeros((2, 3)), np.array([1.0, -1.0]))
    with pytest.raises(DegenerateMass):
        mass_properties(np.zeros((2, 3)), np.zeros(2))


def test_mass_properties_matches_tree_of_point_masses() -> None:
    points = np.array([[1.0, 2.0, 0.0], [-1.0, 0.5, 1.0], [0.0, -2.0, 3.0]])
    masses = np.array([1.0, 2.0, 0.5])
    total_mass, com, inertia = mass_properties(points, masses)

    tree = RigidSystem(
        0.0,
        [0.0, 0.0, 0.0],
        np.zeros((3, 3)),
        [point_mass(m, p) for m, p in zip(masses, points)],
    )
    assert tree.total_mass() == pytest.approx(total_mass)
    assert np.allclose(tree.center_of_mass(), com)
    assert np.allclose(tree.total_inertia(), inertia)


def test_box_inertia_body() -> None:
    inertia = box_inertia_body(2.0, np.array([2.0, 4.0, 6.0]))
    expected = np.diag(
        [
            2.0 * (4.0**2 + 6.0**2) / 12.0,
            2.0 * (2.0**2 + 6.0**2) / 12.0,
            2.0 * (2.0**2 + 4.0**2) / 12.0,
        ]
    )
    assert np.allclose(inertia, expected)
    with pytest.raises(MalformedInput):
        box_inertia_body(2.0, np.array([2.0, 0.0, 6.0]))


def test_sphere_inertia_body() -> None:
    inertia = sphere_inertia_body(3.0, 2.0)
    expected = np.diag([2.0 / 5.0 * 3.0 * 4.0] * 3)
    assert np.allclose(inertia, expected)
    with pytest.raises(MalformedInput):
        sphere_inertia_body(-1.0, 2.0)


def test_rod_inertia_body() -> None:
    assert np.allclose(rod_inertia_body(12.0, 2.0, axis=0), np.diag([0.0, 4.0, 4.0]))
    with pytest.raises(MalformedInput):
        rod_inertia_body(12.0, 2.0, axis=3)


def test_cylinder_inertia_body() -> None:
    inertia = cylinder_inertia_body(2.0, 1.0, 3.0, axis=2)
    assert np.allclose(inertia, np.diag([2.0, 2.0, 1.0]))
    with pytest.raises(MalformedInput):
        cylinder_inertia_body(2.0, 0.0, 3.0)


def test_system_from_points_lumps_at_com() -> None:
    points = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]], dtype=np.float64)
    masses = np.array([1.0, 3.0], dtype=np.float64)
    leaf = system_from_points(points, masses, description="lumped")

    assert leaf.is_leaf()
    assert leaf.description == "lumped"
    assert leaf.total_mass() == 4.0
    assert np.allclose(leaf.center_of_mass(), [1.5, 0.0, 0.0])
    assert np.allclose(leaf.total_inertia(), np.diag([0.0, 3.0, 3.0]))


def test_point_mass_has_no_local_inertia() -> None:
    leaf = point_mass(2.0, [1.0, 2.0, 3.0])
    assert np.array_equal(leaf.local_inertia, np.zeros((3, 3)))
    assert np.array_equal(leaf.center_of_mass(), np.array([1.0, 2.0, 3.0]))
