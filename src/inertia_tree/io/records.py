"""Build system trees from host-side records.

A record is any object exposing ``mass``, ``position``, ``moment_of_inertia``,
``subsystems`` and ``description``, either as attributes or as mapping keys.
Records are converted children first; the core never sees the record types.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import ValidationConfig
from ..core.math.tensor import tensor_from_rows
from ..core.rigid_body.system import RigidSystem
from ..errors import MalformedInput


_MISSING = object()


def _field(record: Any, name: str, ctx: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(name, _MISSING)
    else:
        value = getattr(record, name, _MISSING)
    if value is _MISSING:
        raise MalformedInput(f"missing required field: {ctx}.{name}")
    return value


def system_from_record(
    record: Any, config: ValidationConfig | None = None, _ctx: str = "record"
) -> RigidSystem:
    """Return the RigidSystem described by ``record`` and its sub-records."""
    mass = _field(record, "mass", _ctx)
    position = _field(record, "position", _ctx)
    inertia = tensor_from_rows(
        _field(record, "moment_of_inertia", _ctx), f"{_ctx}.moment_of_inertia"
    )
    description = _field(record, "description", _ctx)
    if not isinstance(description, str):
        raise MalformedInput(f"{_ctx}.description must be a string")

    try:
        subrecords = list(_field(record, "subsystems", _ctx))
    except TypeError as exc:
        raise MalformedInput(f"{_ctx}.subsystems must be a sequence of records") from exc
    subsystems = [
        system_from_record(sub, config, f"{_ctx}.subsystems[{idx}]")
        for idx, sub in enumerate(subrecords)
    ]
    try:
        return RigidSystem(mass, position, inertia, subsystems, description, config=config)
    except MalformedInput as exc:
        raise MalformedInput(f"{_ctx}: {exc}") from exc
