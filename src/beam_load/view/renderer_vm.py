from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple

import numpy as np
from matplotlib.figure import Figure

from beam_load.domain.results import Diagrams
from beam_load.view.style import RenderStyle


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


def _extreme_indices(y: np.ndarray) -> List[Tuple[str, int]]:
    """Máximo y mínimo globales (sin repetir índice, sin marcar valores ~0)."""
    if len(y) == 0:
        return []
    max_abs = float(np.max(np.abs(y)))
    if max_abs <= 1e-12:
        return []

    out: List[Tuple[str, int]] = []
    i_max = int(np.argmax(y))
    i_min = int(np.argmin(y))
    if abs(float(y[i_max])) >= 0.01 * max_abs:
        out.append(("max", i_max))
    if i_min != i_max and abs(float(y[i_min])) >= 0.01 * max_abs:
        out.append(("min", i_min))
    return out


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, unit: str, style: RenderStyle, decimals: int = 2):
    x_min, x_max = ax.get_xlim()
    y_min, y_max = sorted(ax.get_ylim())
    mx = 0.03 * max(1.0, float(x_max - x_min))
    my = 0.03 * max(1e-12, float(y_max - y_min))

    for kind, i in _extreme_indices(y):
        xi = float(x[i])
        yi = float(y[i])
        ax.scatter([xi], [yi], s=18, zorder=6)

        if kind == "max":
            ty, va = yi + my, "bottom"
        else:
            ty, va = yi - my, "top"

        tx = _clamp(xi, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)
        ax.text(tx, ty, f"{_fmt_plain(yi, decimals)} {unit}", ha="center", va=va, fontsize=style.font_size, zorder=7)


def _render(ax, x: np.ndarray, y: np.ndarray, *, title: str, ylabel: str, unit: str,
            style: RenderStyle, invert: bool = False, decimals: int = 2, xlim: Optional[Tuple[float, float]] = None):
    ax.clear()

    ax.plot(x, y, linewidth=style.line_lw)
    ax.fill_between(x, y, 0.0, alpha=style.fill_alpha)
    ax.axhline(0.0, linewidth=style.zero_lw)

    if xlim is not None:
        ax.set_xlim(xlim[0], xlim[1])
    elif len(x):
        ax.set_xlim(float(x[0]), float(x[-1]) if x[-1] > x[0] else float(x[0]) + 1.0)

    ymax = float(np.max(np.abs(y))) if len(y) else 1.0
    ymax = ymax if ymax > 1e-12 else 1.0
    ax.set_ylim(-ymax * style.y_pad, ymax * style.y_pad)
    if invert:
        # flecha positiva hacia abajo
        ax.invert_yaxis()

    _annotate_extrema(ax, np.asarray(x, dtype=float), np.asarray(y, dtype=float), unit, style, decimals)

    ax.set_ylabel(ylabel)
    ax.set_xlabel("x [mm]")
    ax.set_title(title)
    ax.grid(True, alpha=style.grid_alpha)


# -------------------------
# Render
# -------------------------
def render_shear(ax, diagrams: Diagrams, style: RenderStyle = RenderStyle(), xlim=None):
    x, V = diagrams.shear_xy()
    _render(ax, x, V, title="Diagrama de Corte V(x)", ylabel="V [N]", unit="N", style=style, xlim=xlim)


def render_moment(ax, diagrams: Diagrams, style: RenderStyle = RenderStyle(), xlim=None):
    x, M = diagrams.moment_xy()
    _render(ax, x, M, title="Diagrama de Momento Flector M(x)", ylabel="M [N·m]", unit="N·m", style=style, xlim=xlim)


def render_deflection(ax, diagrams: Diagrams, style: RenderStyle = RenderStyle(), xlim=None):
    x, d = diagrams.deflection_xy()
    _render(ax, x, d, title="Deformada δ(x)", ylabel="δ [mm]", unit="mm", style=style,
            invert=True, decimals=4, xlim=xlim)


def save_diagram_images(diagrams: Diagrams, out_dir: str, style: RenderStyle = RenderStyle()) -> Dict[str, str]:
    """
    Genera PNG de V, M y δ (sin Qt / pyplot). Devuelve {"v": path, "m": path, "d": path}.
    """
    os.makedirs(out_dir, exist_ok=True)
    out: Dict[str, str] = {}
    for key, fn in (("v", render_shear), ("m", render_moment), ("d", render_deflection)):
        fig = Figure(figsize=(style.fig_w_in, style.fig_h_in), dpi=style.dpi)
        ax = fig.add_subplot(111)
        fn(ax, diagrams, style)
        fig.tight_layout()
        path = os.path.join(out_dir, f"diagram_{key}.png")
        fig.savefig(path)
        out[key] = path
    return out
