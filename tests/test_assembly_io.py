from __future__ import annotations

import copy
import json
from pathlib import Path

import numpy as np
import pytest

from inertia_tree.config import ValidationConfig
from inertia_tree.core.rigid_body import RigidSystem, point_mass
from inertia_tree.errors import MalformedInput
from inertia_tree.io import assembly_to_system, load_assembly, save_assembly, system_to_assembly


EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "assemblies" / "satellite_v1.json"


def _two_mass_defn() -> dict:
    return {
        "schema_version": 1,
        "root": {
            "mass": 0.0,
            "position": [0.0, 0.0, 0.0],
            "description": "pair",
            "subsystems": [
                {"mass": 2.0, "position": [1.0, 0.0, 0.0]},
                {"mass": 2.0, "position": [-1.0, 0.0, 0.0]},
            ],
        },
    }


def test_load_example_satellite() -> None:
    system = assembly_to_system(load_assembly(EXAMPLE))
    assert system.description == "satellite"
    assert [c.description for c in system.subsystems] == ["solar array", "antenna"]
    assert system.total_mass() == pytest.approx(550.0)
    assert np.allclose(system.center_of_mass(), [0.0, 5.0 / 550.0, 10.0 / 550.0])


def test_assembly_to_system_two_masses() -> None:
    system = assembly_to_system(_two_mass_defn())
    assert system.total_mass() == 4.0
    assert np.allclose(system.total_inertia(), np.diag([0.0, 4.0, 4.0]))
    assert np.array_equal(system.subsystems[0].local_inertia, np.zeros((3, 3)))


def test_round_trip(tmp_path: Path) -> None:
    defn = load_assembly(EXAMPLE)
    system = assembly_to_system(defn)
    out = tmp_path / "roundtrip.json"
    save_assembly(out, system_to_assembly(system))
    system2 = assembly_to_system(load_assembly(out))

    assert system2.total_mass() == pytest.approx(system.total_mass())
    assert np.allclose(system2.center_of_mass(), system.center_of_mass())
    assert np.allclose(system2.total_inertia(), system.total_inertia())
    assert json.loads(out.read_text(encoding="utf-8"))["schema_version"] == 1


def test_system_to_assembly_keeps_structure() -> None:
    inner = RigidSystem(1.0, [0.0, 1.0, 0.0], np.eye(3), [point_mass(2.0, [1.0, 0.0, 0.0], "tip")], "arm")
    root = RigidSystem(3.0, [0.0, 0.0, 0.0], np.zeros((3, 3)), [inner], "base")
    defn = system_to_assembly(root, ValidationConfig(symmetry_atol=1e-6))

    assert defn["validation"]["symmetry_atol"] == 1e-6
    assert defn["root"]["description"] == "base"
    arm = defn["root"]["subsystems"][0]
    assert arm["description"] == "arm"
    assert arm["moment_of_inertia"] == np.eye(3).tolist()
    assert arm["subsystems"][0]["description"] == "tip"


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda d: d.update(schema_version=2), "schema_version"),
        (lambda d: d.pop("root"), "assembly.root"),
        (lambda d: d["root"]["subsystems"][1].update(position=[1.0, 0.0]), r"root\.subsystems\[1\]\.position"),
        (lambda d: d["root"]["subsystems"][0].update(mass=-1.0), r"root\.subsystems\[0\]\.mass"),
        (lambda d: d["root"]["subsystems"][0].update(mass="2"), r"root\.subsystems\[0\]\.mass"),
        (lambda d: d["root"]["subsystems"][0].pop("mass"), r"root\.subsystems\[0\]\.mass"),
        (lambda d: d["root"].update(colour="red"), "unknown field"),
        (lambda d: d["root"].update(subsystems={}), r"root\.subsystems"),
        (lambda d: d["root"].update(description=3), r"root\.description"),
        (lambda d: d["root"].update(moment_of_inertia=[0.0] * 9), r"root\.moment_of_inertia"),
        (lambda d: d.update(validation={"check_symmetry": "yes"}), "validation.check_symmetry"),
        (lambda d: d.update(validation={"symmetry_atol": -1.0}), "validation.symmetry_atol"),
    ],
)
def test_invalid_documents_name_the_field(mutate, message) -> None:
    defn = copy.deepcopy(_two_mass_defn())
    mutate(defn)
    with pytest.raises(MalformedInput, match=message):
        assembly_to_system(defn)


def test_asymmetric_tensor_rejected_with_path() -> None:
    defn = _two_mass_defn()
    defn["root"]["subsystems"][0]["moment_of_inertia"] = [
        [1.0, 0.5, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
    with pytest.raises(MalformedInput, match=r"root\.subsystems\[0\].*symmetric"):
        assembly_to_system(defn)

    defn["validation"] = {"check_symmetry": False}
    system = assembly_to_system(defn)
    assert system.subsystems[0].local_inertia[0, 1] == 0.5


def test_shared_node_dict_rejected() -> None:
    defn = _two_mass_defn()
    shared = defn["root"]["subsystems"][0]
    defn["root"]["subsystems"][1] = shared
    with pytest.raises(MalformedInput, match="more than once"):
        assembly_to_system(defn)


def test_load_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(MalformedInput, match="not valid JSON"):
        load_assembly(path)


def test_load_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"schema_version": 1, "root": "\xff"}')
    with pytest.raises(MalformedInput, match="not valid UTF-8"):
        load_assembly(path)
