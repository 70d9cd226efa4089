"""Construction-time validation settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import MalformedInput


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    check_symmetry: bool = True
    symmetry_atol: float = 1e-9
    check_diagonal: bool = True


def default_config() -> ValidationConfig:
    return ValidationConfig()


def config_from_defn(defn: dict[str, Any]) -> ValidationConfig:
    block = defn.get("validation", {})
    if not isinstance(block, dict):
        return default_config()
    base = default_config()
    atol = float(block.get("symmetry_atol", base.symmetry_atol))
    if atol < 0.0:
        raise MalformedInput("validation.symmetry_atol must be >= 0")
    return ValidationConfig(
        check_symmetry=bool(block.get("check_symmetry", base.check_symmetry)),
        symmetry_atol=atol,
        check_diagonal=bool(block.get("check_diagonal", base.check_diagonal)),
    )


def config_to_defn(cfg: ValidationConfig) -> dict[str, Any]:
    return {
        "check_symmetry": cfg.check_symmetry,
        "symmetry_atol": cfg.symmetry_atol,
        "check_diagonal": cfg.check_diagonal,
    }
