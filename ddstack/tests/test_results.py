# ddstack/tests/test_results.py
"""
Export of device arrays and derived scalars.
"""
import json

import numpy as np

from ddstack.device.builder import QUANTITIES, build_device
from ddstack.geometry.regions import INTERFACE
from ddstack.io.results import device_table, load_device_npz, save_device_npz, write_summary
from ddstack.materials.library import default_parameters
from ddstack.utils.diagnostics import log_mesh_summary


def test_device_table_columns():
    dev = build_device(default_parameters())
    df = device_table(dev)
    assert len(df) == len(dev.mesh)
    assert list(df.columns[:3]) == ["x", "region", "layer"]
    assert set(QUANTITIES).issubset(df.columns)
    assert set(df["region"]) == {"bulk", "interface"}


def test_region_labels_follow_classification():
    dev = build_device(default_parameters())
    df = device_table(dev)
    iface = dev.regions.kind == INTERFACE
    assert (df["region"].to_numpy()[iface] == "interface").all()
    assert (df["region"].to_numpy()[~iface] == "bulk").all()


def test_mesh_summary_counts_interface_nodes(capsys):
    dev = build_device(default_parameters())
    log_mesh_summary(dev.mesh, dev.regions)
    n_iface = int(np.count_nonzero(dev.regions.kind == INTERFACE))
    assert f"interface nodes={n_iface}/{len(dev.mesh)}" in capsys.readouterr().out


def test_npz_roundtrip(tmp_path):
    dev = build_device(default_parameters())
    path = save_device_npz(tmp_path / "run", dev)
    data = load_device_npz(path)
    np.testing.assert_array_equal(data["x"], dev.x)
    np.testing.assert_array_equal(data["N0"], dev.arrays.N0)


def test_summary_json(tmp_path):
    p = default_parameters()
    path = write_summary(tmp_path, p)
    data = json.loads(path.read_text())
    assert data["active_layer"] == 1
    assert data["wscr_cm"] == p.wscr
