# ddstack/io/config.py
# -*- coding: utf-8 -*-
"""
YAML → ParameterSet helpers.

Schema (minimal, example):

T_K: 300
active_layer: 1
layers:
  - { name: PEDOT,  thickness_nm: 200, points: 100, preset: PEDOT }
  - { name: MAPICl, thickness_nm: 400, points: 200, preset: MAPICl, taun: 1e-7 }
  - { name: PCBM,   thickness_nm: 50,  points: 20,  EA: -4.1, IP: -7.4, E0: -4.3,
      N0: 1e19, mue: 0.09, muh: 0.09, epp: 12, krad: 1.54e-10, Et: -5.75 }
interfaces:
  - { Et: -4.0, taun: 1e-12, taup: 1e-12 }
  - { Et: -5.0, taun: 1e-9,  taup: 1e-9 }
electrodes: { PhiA: -4.8, PhiC: -4.2 }
mesh: { xmesh_type: 3, dint_nm: 2, pint: 20 }
controls: { Vapp: 0, Int: 1, tmesh_type: 2 }

Lengths may be given as *_nm or *_cm; nm wins if both are present.
A layer with `preset` starts from materials.library and is overridden by
any explicit keys.
"""
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from ddstack.errors import ConfigError
from ddstack.geometry.mesh import MeshSpec
from ddstack.materials.library import get_layer
from ddstack.models.layer import ControlSpec, ElectrodeSpec, InterfaceSpec, LayerSpec
from ddstack.models.parameters import ParameterSet, build_parameters

NM = 1e-7  # cm per nm

_LAYER_KEYS = {f.name for f in fields(LayerSpec)} - {"name", "thickness", "points"}
_MESH_LENGTHS = ("dint", "dscr", "te", "dmin")


@dataclass
class RunConfig:
    raw: dict
    path: Path


def load_config(path: Path) -> RunConfig:
    try:
        data = yaml.safe_load(Path(path).read_text())
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError("Top-level YAML must be a mapping")
    _validate_minimum(data)
    return RunConfig(raw=data, path=Path(path))


def _length_cm(row: dict, key: str, *, where: str, default: float | None = None) -> float:
    if f"{key}_nm" in row:
        return float(row[f"{key}_nm"]) * NM
    if f"{key}_cm" in row:
        return float(row[f"{key}_cm"])
    if default is not None:
        return default
    raise ConfigError(f"{where}: missing {key}_nm or {key}_cm")


def _build_layer(row: Any, i: int) -> LayerSpec:
    if not isinstance(row, dict):
        raise ConfigError(f"layers[{i}] must be a mapping")
    where = f"layers[{i}]"
    name = str(row.get("name", row.get("preset", f"layer{i}")))
    thickness = _length_cm(row, "thickness", where=where)
    points = int(row.get("points", 100))
    unknown = set(row) - _LAYER_KEYS - {"name", "preset", "points", "thickness_nm", "thickness_cm"}
    if unknown:
        raise ConfigError(f"{where}: unknown keys {sorted(unknown)}")
    values = {k: float(row[k]) for k in _LAYER_KEYS if k in row}

    preset = row.get("preset")
    if preset:
        try:
            return get_layer(str(preset), thickness, points, name=name, **values)
        except KeyError as exc:
            raise ConfigError(f"{where}: {exc.args[0]}") from exc

    for key in ("EA", "IP", "E0", "N0"):
        if key not in values:
            raise ConfigError(f"{where}: missing required key {key!r}")
    return LayerSpec(name=name, thickness=thickness, points=points, **values)


def build_layers(cfg: RunConfig) -> tuple[LayerSpec, ...]:
    rows = cfg.raw.get("layers") or []
    if not rows:
        raise ConfigError("layers is empty")
    return tuple(_build_layer(row, i) for i, row in enumerate(rows))


def build_interfaces(cfg: RunConfig) -> tuple[InterfaceSpec, ...]:
    out = []
    for i, row in enumerate(cfg.raw.get("interfaces") or []):
        try:
            out.append(InterfaceSpec(Et=float(row["Et"]), taun=float(row["taun"]), taup=float(row["taup"])))
        except (KeyError, TypeError) as exc:
            raise ConfigError(f"interfaces[{i}] needs Et, taun, taup") from exc
    return tuple(out)


def build_electrodes(cfg: RunConfig) -> ElectrodeSpec:
    e = cfg.raw["electrodes"]
    allowed = {f.name for f in fields(ElectrodeSpec)}
    unknown = set(e) - allowed
    if unknown:
        raise ConfigError(f"electrodes: unknown keys {sorted(unknown)}")
    return ElectrodeSpec(**{k: float(v) for k, v in e.items()})


def build_mesh(cfg: RunConfig) -> MeshSpec:
    m = cfg.raw.get("mesh") or {}
    defaults = MeshSpec()
    kwargs: dict[str, Any] = {}
    for key in _MESH_LENGTHS:
        kwargs[key] = _length_cm(m, key, where="mesh", default=getattr(defaults, key))
    for key in ("xmesh_type", "pint", "pscr", "pepe"):
        if key in m:
            kwargs[key] = int(m[key])
    return MeshSpec(**kwargs)


def build_controls(cfg: RunConfig) -> ControlSpec:
    c = cfg.raw.get("controls") or {}
    kinds = {f.name: f.type for f in fields(ControlSpec)}
    unknown = set(c) - set(kinds)
    if unknown:
        raise ConfigError(f"controls: unknown keys {sorted(unknown)}")
    return ControlSpec(**{k: (int(v) if kinds[k] == "int" else float(v)) for k, v in c.items()})


def build_parameters_from_config(cfg: RunConfig) -> ParameterSet:
    active = cfg.raw.get("active_layer")
    return build_parameters(
        build_layers(cfg),
        build_interfaces(cfg),
        electrodes=build_electrodes(cfg),
        mesh=build_mesh(cfg),
        controls=build_controls(cfg),
        T=float(cfg.raw.get("T_K", 300.0)),
        active_layer=int(active) if active is not None else None,
    )


def _validate_minimum(cfg: dict) -> None:
    for key in ("layers", "electrodes"):
        if key not in cfg:
            raise ConfigError(f"Missing top-level key: {key}")
