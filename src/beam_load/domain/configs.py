from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple, Union

from beam_load.domain.frame_sections import FrameSection


@dataclass(frozen=True)
class SimpleBeamConfig:
    """Viga simplemente apoyada: dos apoyos en left/right (mm desde el extremo izquierdo)."""
    length_mm: float
    left_support_mm: float = 0.0
    right_support_mm: float = 1000.0

    @property
    def label(self) -> str:
        return "Simple Beam"


@dataclass(frozen=True)
class BaseFrameConfig:
    """
    Bastidor rectangular de 4 perfiles (L x W), apoyado en las 4 esquinas.
    Origen arriba-izquierda; x a lo largo de L, y a lo ancho de W.
    """
    length_mm: float
    width_mm: float
    sections: Tuple[FrameSection, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return "Base Frame"


AnalysisConfiguration = Union[SimpleBeamConfig, BaseFrameConfig]
