# ddstack/tests/test_config.py
"""
YAML config → ParameterSet.
"""
import math
from pathlib import Path

import pytest

from ddstack.errors import ConfigError, ValidationError
from ddstack.io.config import build_parameters_from_config, load_config

GOOD = """
T_K: 300
active_layer: 1
layers:
  - { name: HTL,  thickness_nm: 200, points: 100, preset: PEDOT }
  - { name: abs,  thickness_nm: 400, points: 200, preset: MAPICl, taun: 1.0e-7 }
  - { name: ETL,  thickness_cm: 5.0e-6, points: 20, EA: -4.1, IP: -7.4, E0: -4.3,
      N0: 1e19, mue: 0.09, muh: 0.09, epp: 12, krad: 1.54e-10, Et: -5.75 }
interfaces:
  - { Et: -4.0, taun: 1e-12, taup: 1e-12 }
  - { Et: -5.0, taun: 1e-9,  taup: 1e-9 }
electrodes: { PhiA: -4.8, PhiC: -4.2 }
mesh: { xmesh_type: 4, dint_nm: 2, pint: 10, dscr_nm: 30 }
controls: { Vapp: 0.5, Int: 1, tmesh_type: 2, tpoints: 50 }
"""


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "device.yaml"
    path.write_text(text)
    return path


def test_load_and_build(tmp_path):
    p = build_parameters_from_config(load_config(_write(tmp_path, GOOD)))
    assert [ly.name for ly in p.layers] == ["HTL", "abs", "ETL"]
    assert math.isclose(p.layers[0].thickness, 200e-7)
    assert math.isclose(p.layers[2].thickness, 50e-7)
    assert p.layers[1].taun == 1e-7
    assert p.layers[1].epp == 23.0          # from the preset
    assert p.layers[2].N0 == 1e19           # "1e19" is a string to YAML 1.1
    assert p.mesh_spec.xmesh_type == 4
    assert math.isclose(p.mesh_spec.dint, 2e-7)
    assert p.controls.Vapp == 0.5 and p.controls.tpoints == 50
    assert math.isclose(p.Vbi, 0.6)


def test_missing_top_level_key(tmp_path):
    with pytest.raises(ConfigError, match="electrodes"):
        load_config(_write(tmp_path, "layers: []\n"))


def test_not_a_mapping(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "- 1\n- 2\n"))


def test_missing_layer_energy(tmp_path):
    text = GOOD.replace("EA: -4.1, ", "")
    with pytest.raises(ConfigError, match="EA"):
        build_parameters_from_config(load_config(_write(tmp_path, text)))


def test_unknown_layer_key(tmp_path):
    text = GOOD.replace("taun: 1.0e-7", "tau: 1.0e-7")
    with pytest.raises(ConfigError, match="unknown keys"):
        build_parameters_from_config(load_config(_write(tmp_path, text)))


def test_unknown_preset(tmp_path):
    text = GOOD.replace("preset: PEDOT", "preset: Spiro")
    with pytest.raises(ConfigError, match="Spiro"):
        build_parameters_from_config(load_config(_write(tmp_path, text)))


def test_inconsistent_doping_surfaces_as_validation_error(tmp_path):
    text = GOOD.replace("E0: -4.3", "E0: -3.9")
    with pytest.raises(ValidationError):
        build_parameters_from_config(load_config(_write(tmp_path, text)))


def test_bad_interface_entry(tmp_path):
    text = GOOD.replace("{ Et: -4.0, taun: 1e-12, taup: 1e-12 }", "{ Et: -4.0 }")
    with pytest.raises(ConfigError, match="interfaces"):
        build_parameters_from_config(load_config(_write(tmp_path, text)))


def test_shipped_reference_config():
    path = Path(__file__).resolve().parents[2] / "configs" / "pedot_mapicl_pcbm.yaml"
    p = build_parameters_from_config(load_config(path))
    assert p.n_layers == 3
    assert p.layers[1].G0 == 2.6409e21
    assert p.electrodes.sn_l == 1e8
