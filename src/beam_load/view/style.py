from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class RenderStyle:
    line_lw: float = 1.6
    zero_lw: float = 1.0
    fill_alpha: float = 0.15
    grid_alpha: float = 0.25

    # margen vertical relativo al máximo |y|
    y_pad: float = 1.15

    fig_w_in: float = 8.0
    fig_h_in: float = 3.2
    dpi: int = 150

    font_size: int = 8
