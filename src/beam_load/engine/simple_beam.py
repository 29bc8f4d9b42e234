from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from beam_load.domain.units import G
from beam_load.engine.defaults import DIAGRAM_POINTS
from beam_load.engine.normalize import BeamGeometry, LoadSet


@dataclass(frozen=True)
class BeamReactions:
    R1_N: float   # apoyo izquierdo
    R2_N: float   # apoyo derecho


@dataclass(frozen=True)
class SimpleBeamSolution:
    reactions: BeamReactions
    max_shear_N: float
    max_moment_Nm: float
    total_applied_N: float
    self_weight_N: float


def beam_reactions(geom: BeamGeometry, loads: LoadSet) -> BeamReactions:
    """
    Reacciones de viga simplemente apoyada (ΣM en cada apoyo).
    - Puntuales: R1 += F·b/span, R2 += F·a/span
    - Uniformes: recortadas a [left, right], resultante en el centroide del tramo recortado
    - Distribuidas (por m²): NO participan (limitación conocida del modelo de viga simple)
    span <= 0 => no se acumula nada.
    """
    left = geom.left_m
    right = geom.right_m
    span = geom.span_m

    R1 = 0.0
    R2 = 0.0
    if span <= 0:
        return BeamReactions(R1_N=R1, R2_N=R2)

    for p in loads.point_loads:
        a = p.x_m - left
        b = right - p.x_m
        R1 += p.F_N * b / span
        R2 += p.F_N * a / span

    for u in loads.uniform_loads:
        x1 = max(u.x1_m, left)
        x2 = min(u.x2_m, right)
        if x2 <= x1:
            continue
        F = u.w_N_per_m * (x2 - x1)
        xc = 0.5 * (x1 + x2)
        R1 += F * (right - xc) / span
        R2 += F * (xc - left) / span

    return BeamReactions(R1_N=R1, R2_N=R2)


def total_applied_load(loads: LoadSet) -> float:
    """Suma de resultantes (uniformes sin recortar, distribuidas por huella)."""
    total = 0.0
    total += sum(p.F_N for p in loads.point_loads)
    total += sum(u.total_N for u in loads.uniform_loads)
    total += sum(d.total_N for d in loads.dist_loads)
    return total


def sample_positions(length_m: float, n: int = DIAGRAM_POINTS) -> np.ndarray:
    return np.linspace(0.0, float(length_m), int(n), dtype=float)


# -------------------------
# Evaluadores vectorizados
# -------------------------
def shear_at(x: np.ndarray, geom: BeamGeometry, R: BeamReactions, loads: LoadSet) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    V = np.zeros_like(x, dtype=float)

    V += np.where(x >= geom.left_m, R.R1_N, 0.0)
    V -= np.where(x >= geom.right_m, R.R2_N, 0.0)

    # puntuales: V -= F * H(x - xi), con x estrictamente pasado la carga
    if loads.point_loads:
        pf_x = np.array([p.x_m for p in loads.point_loads], dtype=float)
        pf_F = np.array([p.F_N for p in loads.point_loads], dtype=float)
        H = (x[:, None] > pf_x[None, :]).astype(float)
        V -= H @ pf_F

    # uniformes: V -= w * clip(x-a, 0, b-a)
    if loads.uniform_loads:
        a = np.array([u.x1_m for u in loads.uniform_loads], dtype=float)[None, :]
        b = np.array([u.x2_m for u in loads.uniform_loads], dtype=float)[None, :]
        w = np.array([u.w_N_per_m for u in loads.uniform_loads], dtype=float)[None, :]
        lx = np.clip(x[:, None] - a, 0.0, b - a)
        V -= np.sum(w * lx, axis=1)

    # distribuidas: igual que uniformes, con w = q * ancho
    if loads.dist_loads:
        a = np.array([d.x1_m for d in loads.dist_loads], dtype=float)[None, :]
        ln = np.array([d.length_m for d in loads.dist_loads], dtype=float)[None, :]
        w = np.array([d.q_N_per_m2 * d.width_m for d in loads.dist_loads], dtype=float)[None, :]
        lx = np.clip(x[:, None] - a, 0.0, ln)
        V -= np.sum(w * lx, axis=1)

    return V


def moment_at(x: np.ndarray, geom: BeamGeometry, R: BeamReactions, loads: LoadSet) -> np.ndarray:
    x = np.asarray(x, dtype=float)
    M = np.zeros_like(x, dtype=float)

    M += np.where(x >= geom.left_m, R.R1_N * (x - geom.left_m), 0.0)
    M -= np.where(x >= geom.right_m, R.R2_N * (x - geom.right_m), 0.0)

    if loads.point_loads:
        pf_x = np.array([p.x_m for p in loads.point_loads], dtype=float)
        pf_F = np.array([p.F_N for p in loads.point_loads], dtype=float)
        dx = x[:, None] - pf_x[None, :]
        H = (dx > 0.0).astype(float)
        M -= np.sum(pf_F[None, :] * dx * H, axis=1)

    # tramo cargado hasta x: lx = clip(x-a, 0, largo), resultante en a + lx/2
    if loads.uniform_loads:
        a = np.array([u.x1_m for u in loads.uniform_loads], dtype=float)[None, :]
        b = np.array([u.x2_m for u in loads.uniform_loads], dtype=float)[None, :]
        w = np.array([u.w_N_per_m for u in loads.uniform_loads], dtype=float)[None, :]
        lx = np.clip(x[:, None] - a, 0.0, b - a)
        xc = a + 0.5 * lx
        M -= np.sum(w * lx * (x[:, None] - xc), axis=1)

    if loads.dist_loads:
        a = np.array([d.x1_m for d in loads.dist_loads], dtype=float)[None, :]
        ln = np.array([d.length_m for d in loads.dist_loads], dtype=float)[None, :]
        w = np.array([d.q_N_per_m2 * d.width_m for d in loads.dist_loads], dtype=float)[None, :]
        lx = np.clip(x[:, None] - a, 0.0, ln)
        xc = a + 0.5 * lx
        M -= np.sum(w * lx * (x[:, None] - xc), axis=1)

    return M


def deflection_at(x: np.ndarray, geom: BeamGeometry, loads: LoadSet, E_Pa: float, I_m4: float) -> np.ndarray:
    """
    Flecha por superposición [m], positiva hacia abajo.
    x se mide desde el origen de la viga.

    - Puntual P en a (desde apoyo izq), b = L - a, L = luz:
        x <= a: P·b·x·(L²-b²-x²) / (6·L·E·I)
        x >  a: P·a·(L-x)·(2·L·x-x²-a²) / (6·L·E·I)
    - Uniforme: w·x·(L³-2·L·x²+x³) / (24·E·I) SOLO si cubre toda la luz.
      Uniformes parciales no aportan (aproximación aceptada).
    - Distribuidas: no aportan.
    """
    x = np.asarray(x, dtype=float)
    delta = np.zeros_like(x, dtype=float)

    EI = float(E_Pa) * float(I_m4)
    L = geom.span_m
    if EI <= 0 or L <= 0:
        return delta

    for p in loads.point_loads:
        P = p.F_N
        a = p.x_m - geom.left_m
        b = geom.right_m - p.x_m
        left_branch = P * b * x * (L * L - b * b - x * x) / (6.0 * L * EI)
        right_branch = P * a * (L - x) * (2.0 * L * x - x * x - a * a) / (6.0 * L * EI)
        delta += np.where(x <= a, left_branch, right_branch)

    for u in loads.uniform_loads:
        x1 = max(u.x1_m, geom.left_m)
        x2 = min(u.x2_m, geom.right_m)
        full_span = (
            math.isclose(x1, geom.left_m, abs_tol=1e-12)
            and math.isclose(x2, geom.right_m, abs_tol=1e-12)
        )
        if not full_span:
            continue
        w = u.w_N_per_m
        delta += w * x * (L**3 - 2.0 * L * x * x + x**3) / (24.0 * EI)

    return delta


def breakpoints(geom: BeamGeometry, loads: LoadSet) -> np.ndarray:
    """Apoyos, cargas puntuales y extremos de cargas dentro de [0, L]."""
    xs = [geom.left_m, geom.right_m]
    xs += [p.x_m for p in loads.point_loads]
    for u in loads.uniform_loads:
        xs += [u.x1_m, u.x2_m]
    for d in loads.dist_loads:
        xs += [d.x1_m, d.x1_m + d.length_m]
    xs = [v for v in xs if 0.0 <= v <= geom.length_m]
    return np.array(sorted(set(xs)), dtype=float)


def solve_simple_beam(geom: BeamGeometry, loads: LoadSet, *, area_m2: float, density_kg_m3: float) -> SimpleBeamSolution:
    R = beam_reactions(geom, loads)

    # las distribuidas no entran en las reacciones => tampoco en el momento máximo
    # (sí se dibujan en los diagramas)
    balanced = replace(loads, dist_loads=[])

    # máximo |M| en la grilla de diagramas + quiebres (donde están los picos de puntuales)
    xs = np.concatenate([sample_positions(geom.length_m), breakpoints(geom, balanced)])
    M = moment_at(xs, geom, R, balanced)
    max_moment = float(np.max(np.abs(M))) if M.size else 0.0

    return SimpleBeamSolution(
        reactions=R,
        max_shear_N=max(abs(R.R1_N), abs(R.R2_N)),
        max_moment_Nm=max_moment,
        total_applied_N=total_applied_load(loads),
        self_weight_N=area_m2 * geom.length_m * density_kg_m3 * G,
    )
