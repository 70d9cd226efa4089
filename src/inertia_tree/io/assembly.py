"""Assembly documents: JSON I/O and conversion to and from system trees."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from ..config import ValidationConfig, config_from_defn, config_to_defn, default_config
from ..core.math.tensor import as_tensor3, as_vector3
from ..core.rigid_body.system import RigidSystem
from ..errors import MalformedInput


logger = logging.getLogger(__name__)

AssemblyDefinition = dict[str, Any]

NODE_KEYS = {"mass", "position", "moment_of_inertia", "subsystems", "description"}


def load_assembly(path: str | Path) -> AssemblyDefinition:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MalformedInput(f"assembly is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedInput(f"assembly is not valid UTF-8: {exc}") from exc
    defn = _validate_assembly_v1(data)
    logger.debug("loaded assembly from %s", path)
    return defn


def save_assembly(path: str | Path, defn: AssemblyDefinition) -> None:
    Path(path).write_text(
        json.dumps(defn, indent=2, sort_keys=True),
        encoding="utf-8",
    )


def assembly_to_system(defn: AssemblyDefinition) -> RigidSystem:
    """Build the system tree described by a validated document.

    Children are built before their parents with an explicit stack.
    """
    _validate_assembly_v1(defn)
    cfg = config_from_defn(defn)

    built: dict[int, RigidSystem] = {}
    stack: list[tuple[dict[str, Any], str, bool]] = [(defn["root"], "root", False)]
    count = 0
    while stack:
        node, ctx, expanded = stack.pop()
        children = node.get("subsystems", [])
        if not expanded:
            stack.append((node, ctx, True))
            for idx in reversed(range(len(children))):
                stack.append((children[idx], f"{ctx}.subsystems[{idx}]", False))
            continue
        try:
            built[id(node)] = RigidSystem(
                node["mass"],
                node["position"],
                node.get("moment_of_inertia", np.zeros((3, 3))),
                subsystems=[built.pop(id(child)) for child in children],
                description=node.get("description", ""),
                config=cfg,
            )
        except MalformedInput as exc:
            raise MalformedInput(f"{ctx}: {exc}") from exc
        count += 1

    logger.debug("built assembly with %d node(s)", count)
    return built[id(defn["root"])]


def system_to_assembly(
    system: RigidSystem, config: ValidationConfig | None = None
) -> AssemblyDefinition:
    cfg = config if config is not None else default_config()

    def _node(s: RigidSystem) -> dict[str, Any]:
        return {
            "mass": s.mass,
            "position": s.position.tolist(),
            "moment_of_inertia": s.local_inertia.tolist(),
            "subsystems": [],
            "description": s.description,
        }

    root = _node(system)
    stack = [(system, root)]
    while stack:
        s, out = stack.pop()
        for child in s.subsystems:
            child_out = _node(child)
            out["subsystems"].append(child_out)
            stack.append((child, child_out))

    return {
        "schema_version": 1,
        "validation": config_to_defn(cfg),
        "root": root,
    }


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise MalformedInput(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_validation_block(block: Any) -> None:
    if not isinstance(block, dict):
        raise MalformedInput("validation must be an object")
    for key in ("check_symmetry", "check_diagonal"):
        if key in block and not isinstance(block[key], bool):
            raise MalformedInput(f"validation.{key} must be boolean")
    if "symmetry_atol" in block:
        atol = block["symmetry_atol"]
        if isinstance(atol, bool) or not isinstance(atol, (int, float)) or atol < 0:
            raise MalformedInput("validation.symmetry_atol must be a number >= 0")
    unknown = set(block) - {"check_symmetry", "symmetry_atol", "check_diagonal"}
    if unknown:
        raise MalformedInput(f"unknown validation field(s): {sorted(unknown)}")


def _validate_node(node: Any, ctx: str) -> list[tuple[Any, str]]:
    """Check one node's fields; return its children for further checking."""
    if not isinstance(node, dict):
        raise MalformedInput(f"{ctx} must be an object")
    unknown = set(node) - NODE_KEYS
    if unknown:
        raise MalformedInput(f"{ctx} has unknown field(s): {sorted(unknown)}")

    mass = _require(node, "mass", ctx)
    if isinstance(mass, bool) or not isinstance(mass, (int, float)):
        raise MalformedInput(f"{ctx}.mass must be a number")
    if mass < 0:
        raise MalformedInput(f"{ctx}.mass must be >= 0")
    as_vector3(_require(node, "position", ctx), f"{ctx}.position")

    if "moment_of_inertia" in node:
        rows = node["moment_of_inertia"]
        if not isinstance(rows, list) or len(rows) != 3:
            raise MalformedInput(f"{ctx}.moment_of_inertia must be 3 rows of 3 numbers")
        as_tensor3(rows, f"{ctx}.moment_of_inertia")

    if "description" in node and not isinstance(node["description"], str):
        raise MalformedInput(f"{ctx}.description must be a string")

    children = node.get("subsystems", [])
    if not isinstance(children, list):
        raise MalformedInput(f"{ctx}.subsystems must be a list")
    return [(child, f"{ctx}.subsystems[{idx}]") for idx, child in enumerate(children)]


def _validate_assembly_v1(data: Any) -> AssemblyDefinition:
    if not isinstance(data, dict):
        raise MalformedInput("assembly must be a JSON object")
    if data.get("schema_version") != 1:
        raise MalformedInput("schema_version must be 1")
    if "validation" in data:
        _validate_validation_block(data["validation"])

    seen: set[int] = set()
    pending = [(_require(data, "root", "assembly"), "root")]
    while pending:
        node, ctx = pending.pop()
        if id(node) in seen:
            raise MalformedInput(f"{ctx} appears more than once in the assembly")
        seen.add(id(node))
        pending.extend(reversed(_validate_node(node, ctx)))
    return data
