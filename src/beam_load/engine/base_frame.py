from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from beam_load.domain.frame_sections import NormalizedSectionLoad
from beam_load.domain.results import CornerReactions
from beam_load.domain.units import G
from beam_load.engine.normalize import FrameGeometry, LoadSet


@dataclass(frozen=True)
class PlanForce:
    """Resultante vertical en planta: F [N] aplicada en (cx, cy) [m]."""
    name: str
    F_N: float
    cx_m: float
    cy_m: float


@dataclass(frozen=True)
class BaseFrameSolution:
    corner_reactions: CornerReactions
    total_applied_N: float
    self_weight_N: float
    critical_length_m: float
    load_per_beam_N: float
    w_N_per_m: float
    max_shear_N: float
    max_moment_Nm: float


def distribute_to_corners(F: float, cx: float, cy: float, geom: FrameGeometry) -> Tuple[float, float, float, float]:
    """
    Método de áreas (interpolación bilineal).
    Cada esquina recibe F · (área del rectángulo entre el centroide y la esquina OPUESTA) / (L·W).
    """
    L = geom.length_m
    W = geom.width_m
    A = L * W
    if A <= 0:
        return 0.0, 0.0, 0.0, 0.0
    return (
        F * (L - cx) * (W - cy) / A,   # R1 (0,0)
        F * cx * (W - cy) / A,         # R2 (L,0)
        F * (L - cx) * cy / A,         # R3 (0,W)
        F * cx * cy / A,               # R4 (L,W)
    )


def plan_forces(geom: FrameGeometry, loads: LoadSet) -> List[PlanForce]:
    """
    Centroides en planta por tipo de carga:
      - puntual:  (x, W/2)
      - uniforme: (punto medio, W/2)
      - distribuida con largo/ancho: (x0 + largo/2, W - ancho/2)  (huella desde el borde lejano)
      - distribuida solo con área: cuadrado de lado sqrt(A), (x0 + lado/2, W/2)
    """
    W = geom.width_m
    out: List[PlanForce] = []

    for p in loads.point_loads:
        out.append(PlanForce(name=p.name, F_N=p.F_N, cx_m=p.x_m, cy_m=W / 2.0))

    for u in loads.uniform_loads:
        out.append(PlanForce(name=u.name, F_N=u.total_N, cx_m=0.5 * (u.x1_m + u.x2_m), cy_m=W / 2.0))

    for d in loads.dist_loads:
        cx = d.x1_m + d.length_m / 2.0
        cy = (W - d.width_m / 2.0) if d.explicit else W / 2.0
        out.append(PlanForce(name=d.name, F_N=d.total_N, cx_m=cx, cy_m=cy))

    return out


def section_plan_forces(geom: FrameGeometry, sections: Sequence[NormalizedSectionLoad]) -> List[PlanForce]:
    """Casing + carga primaria de cada tramo: una resultante en el centro del tramo, centrada en W."""
    return [
        PlanForce(name=s.name, F_N=s.total_N, cx_m=s.x_center_m, cy_m=geom.width_m / 2.0)
        for s in sections
    ]


def frame_self_weight(geom: FrameGeometry, area_m2: float, density_kg_m3: float) -> float:
    """4 perfiles: 2 de largo L y 2 de largo W => volumen = A · 2(L+W)."""
    return area_m2 * geom.perimeter_m * density_kg_m3 * G


def solve_base_frame(
    geom: FrameGeometry,
    loads: LoadSet,
    sections: Sequence[NormalizedSectionLoad],
    *,
    area_m2: float,
    density_kg_m3: float,
) -> BaseFrameSolution:
    """
    Reacciones en esquinas por método de áreas + viga crítica equivalente.

    La viga crítica (max(L, W), simplemente apoyada, con q = (Ftotal/4)/Lc) se usa
    solo para tensiones y flecha; las reacciones de esquina NO salen de ese modelo.
    """
    R = [0.0, 0.0, 0.0, 0.0]
    total = 0.0

    for f in plan_forces(geom, loads) + section_plan_forces(geom, sections):
        r = distribute_to_corners(f.F_N, f.cx_m, f.cy_m, geom)
        for i in range(4):
            R[i] += r[i]
        total += f.F_N

    weight = frame_self_weight(geom, area_m2, density_kg_m3)
    for i in range(4):
        R[i] += weight / 4.0
    total += weight

    Lc = geom.critical_length_m
    load_per_beam = total / 4.0
    w = load_per_beam / Lc

    return BaseFrameSolution(
        corner_reactions=CornerReactions(R1=R[0], R2=R[1], R3=R[2], R4=R[3]),
        total_applied_N=total,
        self_weight_N=weight,
        critical_length_m=Lc,
        load_per_beam_N=load_per_beam,
        w_N_per_m=w,
        max_shear_N=w * Lc / 2.0,
        max_moment_Nm=w * Lc**2 / 8.0,
    )
