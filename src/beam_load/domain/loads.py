from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from beam_load.domain.units import ForceUnit


@dataclass(frozen=True)
class PointLoad:
    magnitude_N: float          # en la unidad de 'unit'
    position_mm: float
    unit: ForceUnit = ForceUnit.N
    name: str = ""


@dataclass(frozen=True)
class UniformLoad:
    magnitude_N_per_m: float    # fuerza/m en la unidad de 'unit'
    start_mm: float
    end_mm: float
    unit: ForceUnit = ForceUnit.N
    name: str = ""


@dataclass(frozen=True)
class DistributedLoad:
    """
    Carga por unidad de superficie (fuerza/m²).

    Huella:
      - length_mm + width_mm (bastidor: width se mide desde el borde lejano)
      - o bien area_m2 sola => cuadrado de lado sqrt(area_m2)
    """
    magnitude_N_per_m2: float
    start_mm: float
    length_mm: Optional[float] = None
    width_mm: Optional[float] = None
    area_m2: Optional[float] = None
    unit: ForceUnit = ForceUnit.N
    name: str = ""


Load = Union[PointLoad, UniformLoad, DistributedLoad]


# -------------------------
# Cargas normalizadas (N, m)
# -------------------------
@dataclass(frozen=True)
class NormalizedPointLoad:
    name: str
    x_m: float
    F_N: float


@dataclass(frozen=True)
class NormalizedUniformLoad:
    name: str
    x1_m: float
    x2_m: float
    w_N_per_m: float

    @property
    def total_N(self) -> float:
        return self.w_N_per_m * (self.x2_m - self.x1_m)


@dataclass(frozen=True)
class NormalizedDistributedLoad:
    """
    Huella ya resuelta en metros.
    explicit=True  => length/width ingresados por el usuario
    explicit=False => cuadrado equivalente de un área
    """
    name: str
    x1_m: float
    length_m: float
    width_m: float
    q_N_per_m2: float
    explicit: bool = True

    @property
    def area_m2(self) -> float:
        return self.length_m * self.width_m

    @property
    def total_N(self) -> float:
        return self.q_N_per_m2 * self.area_m2
