"""
ddstack/utils/diagnostics.py

Targeted, low-noise summaries of a device build.
Called from device.builder.build_device when debug=True.
"""

from __future__ import annotations

import numpy as np

from ..geometry.regions import INTERFACE


def _fmt_range(x: np.ndarray, name: str) -> str:
    x = np.asarray(x)
    if x.size == 0:
        return f"{name}: (empty)"
    return f"{name}∈[{np.min(x):+.3e},{np.max(x):+.3e}]"


def log_parameter_summary(params, *, prefix: str = "[diag]") -> None:
    """One line of derived scalars, one line per layer."""
    print(
        f"{prefix} params | layers={params.n_layers} active={params.active_layer} "
        f"T={params.T:g} K | Vbi={params.Vbi:+.3f} V | "
        f"wp={params.wp:.3e} wn={params.wn:.3e} wscr={params.wscr:.3e} cm"
    )
    NA, ND, n0, p0 = params.NA, params.ND, params.n0, params.p0
    for i, ly in enumerate(params.layers):
        print(
            f"{prefix}   [{i}] {ly.name:<10s} d={ly.thickness:.3e} cm Eg={ly.Eg:.3f} eV "
            f"NA={NA[i]:.2e} ND={ND[i]:.2e} n0={n0[i]:.2e} p0={p0[i]:.2e}"
        )


def log_mesh_summary(mesh, regions=None, *, prefix: str = "[diag]") -> None:
    msg = [f"{prefix} mesh type={mesh.xmesh_type}", f"N={len(mesh)}", _fmt_range(mesh.dx, "dx")]
    if regions is not None:
        n_iface = int(np.count_nonzero(regions.kind == INTERFACE))
        msg.append(f"interface nodes={n_iface}/{len(regions)}")
    print(" | ".join(msg))


def log_device_summary(arrays, *, names=("EA", "IP", "N0", "n0", "p0", "Et", "nt", "pt"),
                       prefix: str = "[diag]") -> None:
    """Compact ranges for the main device arrays."""
    print(" | ".join([f"{prefix} device"] + [_fmt_range(getattr(arrays, k), k) for k in names]))
