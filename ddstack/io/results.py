# -*- coding: utf-8 -*-
"""
Results IO helpers.

Write:
  * summary.json  (derived scalars of the ParameterSet)
  * device.npz    (mesh + every device array, for the solver or viewers)

and expose the device arrays as a pandas DataFrame (one row per node).
"""
from __future__ import annotations
import json
from pathlib import Path

import numpy as np
import pandas as pd

from ddstack.device.builder import QUANTITIES, Device
from ddstack.geometry.regions import BULK
from ddstack.models.parameters import ParameterSet

__all__ = ["device_table", "save_device_npz", "load_device_npz", "write_summary"]


def device_table(device: Device) -> pd.DataFrame:
    """Columns: x, region, layer, then every device quantity."""
    arrays = device.arrays.as_dict()
    data = {"x": np.asarray(device.mesh.x),
            "region": np.where(device.regions.kind == BULK, "bulk", "interface"),
            "layer": np.asarray(device.regions.layer)}
    data.update({k: np.asarray(arrays[k]) for k in QUANTITIES})
    return pd.DataFrame(data)


def write_summary(run_dir: Path, params: ParameterSet) -> Path:
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "summary.json"
    with open(out, "w") as f:
        json.dump(params.summary(), f, indent=2, sort_keys=True)
    return out


def save_device_npz(run_dir: Path, device: Device) -> Path:
    """
    Save x, dcum0 and all device arrays (keys as in DeviceArrays).
    """
    run_dir.mkdir(parents=True, exist_ok=True)
    out = run_dir / "device.npz"
    np.savez_compressed(out, x=device.mesh.x, dcum0=device.mesh.dcum0, **device.arrays.as_dict())
    return out


def load_device_npz(path: Path) -> dict[str, np.ndarray]:
    with np.load(path) as data:
        return {k: data[k] for k in data.files}
