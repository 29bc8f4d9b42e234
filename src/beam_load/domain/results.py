from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class CornerReactions:
    """R1 arriba-izq (0,0), R2 arriba-der (L,0), R3 abajo-izq (0,W), R4 abajo-der (L,W). [N]"""
    R1: float = 0.0
    R2: float = 0.0
    R3: float = 0.0
    R4: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.R1, self.R2, self.R3, self.R4)

    @property
    def total(self) -> float:
        return self.R1 + self.R2 + self.R3 + self.R4


@dataclass(frozen=True)
class Results:
    max_shear_force_N: float
    max_bending_moment_Nm: float
    max_normal_stress_MPa: float
    max_shear_stress_MPa: float
    safety_factor: float
    total_beams: int
    load_per_beam_N: float
    moment_of_inertia_m4: float
    section_modulus_m3: float
    corner_reaction_force_N: float
    corner_reactions: CornerReactions
    max_deflection_m: float
    total_applied_load_N: float

    # extras (usados por diagramas y memoria)
    area_m2: float = 0.0
    elastic_modulus_Pa: float = 0.0
    self_weight_N: float = 0.0
    critical_length_m: float = 0.0
    notes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def zero(cls) -> "Results":
        return cls(
            max_shear_force_N=0.0,
            max_bending_moment_Nm=0.0,
            max_normal_stress_MPa=0.0,
            max_shear_stress_MPa=0.0,
            safety_factor=0.0,
            total_beams=0,
            load_per_beam_N=0.0,
            moment_of_inertia_m4=0.0,
            section_modulus_m3=0.0,
            corner_reaction_force_N=0.0,
            corner_reactions=CornerReactions(),
            max_deflection_m=0.0,
            total_applied_load_N=0.0,
        )


@dataclass(frozen=True)
class DiagramPoint:
    x: float   # mm
    y: float


@dataclass(frozen=True)
class Diagrams:
    """
    Diagramas muestreados (snapshots inmutables):
      - shear      V [N]
      - moment     M [N·m]
      - deflection δ [mm] (positivo hacia abajo)
    """
    shear: Tuple[DiagramPoint, ...]
    moment: Tuple[DiagramPoint, ...]
    deflection: Tuple[DiagramPoint, ...]

    @staticmethod
    def _xy(points: Tuple[DiagramPoint, ...]) -> Tuple[np.ndarray, np.ndarray]:
        x = np.asarray([p.x for p in points], dtype=float)
        y = np.asarray([p.y for p in points], dtype=float)
        return x, y

    def shear_xy(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._xy(self.shear)

    def moment_xy(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._xy(self.moment)

    def deflection_xy(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._xy(self.deflection)
