"""Vector and inertia tensor helpers for NumPy arrays.

Vectors are shaped (3,), tensors (3, 3). All helpers return float64 arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from ...errors import MalformedInput


ArrayF = NDArray[np.float64]


def as_vector3(value: Any, name: str = "vector") -> ArrayF:
    """Return ``value`` as a finite float64 vector of shape (3,)."""
    try:
        v = np.array(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{name} must be 3 numbers") from exc
    if v.shape != (3,):
        raise MalformedInput(f"{name} must have shape (3,), got {v.shape}")
    if not np.all(np.isfinite(v)):
        raise MalformedInput(f"{name} must be finite")
    return v


def as_tensor3(value: Any, name: str = "tensor") -> ArrayF:
    """Return ``value`` as a finite float64 tensor of shape (3, 3).

    Accepts three rows of three numbers or nine row-major values.
    """
    try:
        t = np.array(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"{name} must be 3 rows of 3 numbers") from exc
    if t.shape == (9,):
        t = t.reshape(3, 3)
    if t.shape != (3, 3):
        raise MalformedInput(f"{name} must have shape (3, 3), got {t.shape}")
    if not np.all(np.isfinite(t)):
        raise MalformedInput(f"{name} must be finite")
    return t


def tensor_from_rows(rows: Any, name: str = "tensor") -> ArrayF:
    """Stack three distinct row vectors into a (3, 3) tensor."""
    try:
        rows = list(rows)
    except TypeError as exc:
        raise MalformedInput(f"{name} must be 3 rows of 3 numbers") from exc
    if len(rows) != 3:
        raise MalformedInput(f"{name} must have 3 rows, got {len(rows)}")
    return np.stack([as_vector3(row, f"{name}[{i}]") for i, row in enumerate(rows)])


def check_inertia(
    inertia: ArrayF,
    name: str = "inertia",
    check_symmetry: bool = True,
    symmetry_atol: float = 1e-9,
    check_diagonal: bool = True,
) -> None:
    """Reject asymmetric tensors and negative moments; never corrects them.

    The symmetry tolerance scales with the largest entry, so tensors rotated
    with ``R @ I @ R.T`` pass despite rounding at large magnitudes.
    """
    scale = max(1.0, float(np.max(np.abs(inertia))))
    if check_symmetry and not np.allclose(inertia, inertia.T, rtol=0.0, atol=symmetry_atol * scale):
        raise MalformedInput(f"{name} must be symmetric")
    if check_diagonal and np.any(np.diag(inertia) < 0.0):
        raise MalformedInput(f"{name} diagonal entries must be >= 0")


def point_inertia(mass: float, offset: ArrayF) -> ArrayF:
    """Return m * (|d|^2 * Id - d d^T) for a point mass at offset d."""
    d = np.asarray(offset, dtype=np.float64)
    return float(mass) * (float(np.dot(d, d)) * np.eye(3, dtype=np.float64) - np.outer(d, d))


def parallel_axis_shift(inertia: ArrayF, mass: float, displacement: ArrayF) -> ArrayF:
    """Shift a tensor known about a body's CoM to a point displaced by ``displacement``."""
    return np.asarray(inertia, dtype=np.float64) + point_inertia(mass, displacement)


def frozen(a: ArrayF) -> ArrayF:
    """Return a read-only copy of ``a``."""
    out = np.array(a, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out
