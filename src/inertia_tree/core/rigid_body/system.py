"""Composite rigid body: a tree of systems folded into one mass aggregate.

Every node carries its own mass, the position of that mass (in its parent's
frame), a local inertia tensor about that position and an ordered tuple of
owned subsystems. Aggregates are computed bottom-up with the parallel-axis
theorem and memoized per node.

Conventions:
- No rotation is modeled between levels. All positions and tensors share one
  orientation; callers must pre-rotate components that are not axis-aligned.
- Input tensors are about each body's own center of mass.
- A node's own local inertia is shifted from its position to the aggregate
  center with its own mass, like every subsystem. The bare
  ``local_inertia + sum(shifted children)`` form is only correct when the
  node's own mass is zero or sits at the aggregate center; shifting it keeps
  the result independent of how bodies are grouped.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import numpy as np

from ...config import ValidationConfig, default_config
from ...errors import DegenerateMass, MalformedInput
from ..math.tensor import ArrayF, as_tensor3, as_vector3, check_inertia, frozen, parallel_axis_shift


logger = logging.getLogger(__name__)

# Guards first-time publication of snapshots; reads after that are lock-free.
_AGGREGATE_LOCK = threading.Lock()


@dataclass(frozen=True, slots=True, eq=False)
class MassAggregate:
    """Total mass, center of mass and inertia about that center.

    ``center`` is None only for subtrees with zero total mass; such snapshots
    are kept internally and never returned from ``RigidSystem.aggregate``.
    """
    mass: float
    center: ArrayF | None
    inertia: ArrayF


class RigidSystem:
    """Immutable node of a rigid-body composition tree."""

    __slots__ = (
        "_mass",
        "_position",
        "_local_inertia",
        "_subsystems",
        "_description",
        "_owned",
        "_snapshot",
    )

    def __init__(
        self,
        mass: float,
        position: Any,
        local_inertia: Any,
        subsystems: Iterable[RigidSystem] = (),
        description: str = "",
        config: ValidationConfig | None = None,
    ) -> None:
        cfg = config if config is not None else default_config()
        try:
            mass_val = float(mass)
        except (TypeError, ValueError) as exc:
            raise MalformedInput("mass must be a number") from exc
        if not np.isfinite(mass_val):
            raise MalformedInput("mass must be finite")
        if mass_val < 0.0:
            raise MalformedInput(f"mass must be >= 0, got {mass_val}")

        pos = as_vector3(position, "position")
        inertia = as_tensor3(local_inertia, "local_inertia")
        check_inertia(
            inertia,
            "local_inertia",
            check_symmetry=cfg.check_symmetry,
            symmetry_atol=cfg.symmetry_atol,
            check_diagonal=cfg.check_diagonal,
        )

        children = tuple(subsystems)
        seen: set[int] = set()
        for idx, child in enumerate(children):
            if not isinstance(child, RigidSystem):
                raise MalformedInput(
                    f"subsystems[{idx}] must be a RigidSystem, got {type(child).__name__}"
                )
            if id(child) in seen or child._owned:
                raise MalformedInput(f"subsystems[{idx}] already belongs to a system")
            seen.add(id(child))
        # Claim only after every child passed, so a failed build leaves them free.
        for child in children:
            child._owned = True

        self._mass = mass_val
        self._position = frozen(pos)
        self._local_inertia = frozen(inertia)
        self._subsystems = children
        self._description = str(description)
        self._owned = False
        self._snapshot: MassAggregate | None = None

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def position(self) -> ArrayF:
        return self._position

    @property
    def local_inertia(self) -> ArrayF:
        return self._local_inertia

    @property
    def subsystems(self) -> tuple[RigidSystem, ...]:
        return self._subsystems

    @property
    def description(self) -> str:
        return self._description

    def is_leaf(self) -> bool:
        return not self._subsystems

    def get_mass(self) -> float:
        """Return the mass attributed directly to this node."""
        return self._mass

    def get_position(self) -> ArrayF:
        """Return this node's own declared position (not the aggregate center)."""
        return self._position.copy()

    def total_mass(self) -> float:
        """Return own mass plus the total mass of every subsystem."""
        return self._aggregate().mass

    def center_of_mass(self) -> ArrayF:
        """Return the mass-weighted center of this node and its subsystems."""
        return self.aggregate().center.copy()

    def total_inertia(self) -> ArrayF:
        """Return the inertia tensor of the whole subtree about its center of mass."""
        return self.aggregate().inertia.copy()

    def aggregate(self) -> MassAggregate:
        """Return the memoized (mass, center, inertia) snapshot.

        Raises DegenerateMass when the subtree has zero total mass.
        """
        snap = self._aggregate()
        if snap.center is None:
            label = f" '{self._description}'" if self._description else ""
            raise DegenerateMass(f"system{label} has zero total mass; center of mass is undefined")
        return snap

    def _aggregate(self) -> MassAggregate:
        snap = self._snapshot
        if snap is not None:
            return snap
        with _AGGREGATE_LOCK:
            if self._snapshot is None:
                count = _aggregate_tree(self)
                logger.debug("aggregated %d node(s) under %r", count, self)
            return self._snapshot

    def __repr__(self) -> str:
        return (
            f"RigidSystem(description={self._description!r}, mass={self._mass!r}, "
            f"subsystems={len(self._subsystems)})"
        )


def _aggregate_tree(root: RigidSystem) -> int:
    """Fill snapshots for ``root`` and every unsnapshotted descendant.

    Uses an explicit post-order worklist so tree depth is not bounded by the
    interpreter recursion limit. Returns the number of nodes computed.
    """
    count = 0
    stack: list[tuple[RigidSystem, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if node._snapshot is not None:
            continue
        if expanded:
            node._snapshot = _combine(node)
            count += 1
            continue
        stack.append((node, True))
        for child in reversed(node._subsystems):
            if child._snapshot is None:
                stack.append((child, False))
    return count


def _combine(node: RigidSystem) -> MassAggregate:
    """Combine a node's own contribution with its children's snapshots."""
    children = [child._snapshot for child in node._subsystems]

    # (mass, center, inertia about center) for every contribution
    parts: list[tuple[float, ArrayF | None, ArrayF]] = [
        (node._mass, node._position, node._local_inertia)
    ]
    parts.extend((snap.mass, snap.center, snap.inertia) for snap in children)

    total = node._mass + sum(snap.mass for snap in children)
    weighted = [(m, c) for m, c, _ in parts if m > 0.0]

    if total == 0.0 or not weighted:
        center = None
    elif len(weighted) == 1:
        center = weighted[0][1]
    else:
        center = sum(m * c for m, c in weighted) / total

    inertia = np.zeros((3, 3), dtype=np.float64)
    for m, c, tensor in parts:
        if center is None or m == 0.0:
            # Zero-mass contributions carry no parallel-axis term.
            inertia = inertia + tensor
        else:
            inertia = inertia + parallel_axis_shift(tensor, m, c - center)

    return MassAggregate(
        mass=float(total),
        center=None if center is None else frozen(center),
        inertia=frozen(inertia),
    )
