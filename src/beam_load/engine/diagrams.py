from __future__ import annotations

from typing import Tuple

import numpy as np

from beam_load.domain.results import DiagramPoint, Diagrams
from beam_load.engine.defaults import DIAGRAM_POINTS
from beam_load.engine.normalize import BeamGeometry, FrameGeometry, LoadSet
from beam_load.engine.simple_beam import (
    beam_reactions, deflection_at, moment_at, sample_positions, shear_at,
)


def _points(x_mm: np.ndarray, y: np.ndarray) -> Tuple[DiagramPoint, ...]:
    return tuple(DiagramPoint(x=float(a), y=float(b)) for a, b in zip(x_mm, y))


def sample_simple_beam(
    geom: BeamGeometry,
    loads: LoadSet,
    *,
    E_Pa: float,
    I_m4: float,
    n: int = DIAGRAM_POINTS,
) -> Diagrams:
    """V [N], M [N·m] y δ [mm] en n puntos equiespaciados de 0 a L."""
    x = sample_positions(geom.length_m, n)
    R = beam_reactions(geom, loads)

    V = shear_at(x, geom, R, loads)
    M = moment_at(x, geom, R, loads)
    d = deflection_at(x, geom, loads, E_Pa, I_m4) * 1000.0

    x_mm = x * 1000.0
    return Diagrams(shear=_points(x_mm, V), moment=_points(x_mm, M), deflection=_points(x_mm, d))


def sample_base_frame(
    geom: FrameGeometry,
    total_applied_N: float,
    *,
    E_Pa: float,
    I_m4: float,
    n: int = DIAGRAM_POINTS,
) -> Diagrams:
    """
    Viga crítica equivalente (Lc = max(L, W)) con q = Ftotal/4/Lc, simplemente apoyada:
      V(x) = q·Lc/2 - q·x
      M(x) = q·x·(Lc - x)/2
      δ(x) = q·x·(Lc³ - 2·Lc·x² + x³) / (24·E·I)
    Es una representación para visualizar; las reacciones de esquina salen del método de áreas.
    """
    Lc = geom.critical_length_m
    q = total_applied_N / 4.0 / Lc
    x = sample_positions(Lc, n)

    V = q * Lc / 2.0 - q * x
    M = q * x * (Lc - x) / 2.0

    EI = E_Pa * I_m4
    if EI > 0:
        d = q * x * (Lc**3 - 2.0 * Lc * x * x + x**3) / (24.0 * EI) * 1000.0
    else:
        d = np.zeros_like(x)

    x_mm = x * 1000.0
    return Diagrams(shear=_points(x_mm, V), moment=_points(x_mm, M), deflection=_points(x_mm, d))
