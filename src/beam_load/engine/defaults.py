from __future__ import annotations

from dataclasses import dataclass

DIAGRAM_POINTS = 100


@dataclass(frozen=True)
class Fallbacks:
    """
    Valores de reemplazo para entradas inválidas (NaN, inf, <= 0).
    Todas las longitudes en mm.
    """
    beam_length_mm: float = 1000.0
    frame_length_mm: float = 1000.0
    frame_width_mm: float = 1000.0

    rect_width_mm: float = 100.0
    rect_height_mm: float = 218.0
    flange_width_mm: float = 66.0
    flange_thickness_mm: float = 3.0
    web_thickness_mm: float = 44.8
    diameter_mm: float = 100.0

    # huella de distribuidas
    dist_side_mm: float = 100.0
    dist_area_m2: float = 1.0

    density_kg_m3: float = 7850.0


DEFAULT_FALLBACKS = Fallbacks()
