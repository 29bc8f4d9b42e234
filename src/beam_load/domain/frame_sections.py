from __future__ import annotations

from dataclasses import dataclass

from beam_load.domain.units import ForceUnit


@dataclass(frozen=True)
class FrameSection:
    """
    Tramo longitudinal del bastidor.
    casing_weight y primary_load se reparten uniformemente sobre la huella del tramo
    (a efectos de esquinas: una única fuerza en el centro del tramo).
    """
    id: str
    start_mm: float
    end_mm: float
    casing_weight: float = 0.0
    casing_weight_unit: ForceUnit = ForceUnit.N
    primary_load: float = 0.0
    primary_load_unit: ForceUnit = ForceUnit.N
    name: str = ""

    @property
    def length_mm(self) -> float:
        return float(self.end_mm) - float(self.start_mm)


@dataclass(frozen=True)
class NormalizedSectionLoad:
    name: str
    x1_m: float
    x2_m: float
    casing_N: float
    primary_N: float

    @property
    def total_N(self) -> float:
        return self.casing_N + self.primary_N

    @property
    def x_center_m(self) -> float:
        return 0.5 * (self.x1_m + self.x2_m)
