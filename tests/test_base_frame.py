# path: tests/test_base_frame.py
import pytest

from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, PointLoad, UniformLoad
from beam_load.engine.base_frame import (
    distribute_to_corners, frame_self_weight, plan_forces, solve_base_frame,
)
from beam_load.engine.normalize import FrameGeometry, normalize_loads, normalize_sections

GEOM = FrameGeometry(length_m=2.0, width_m=1.0)


def test_centered_force_splits_evenly():
    r = distribute_to_corners(1000.0, 1.0, 0.5, GEOM)
    assert r == pytest.approx((250.0, 250.0, 250.0, 250.0))


def test_force_on_corner_goes_to_that_corner():
    r = distribute_to_corners(1000.0, 2.0, 1.0, GEOM)
    assert r == pytest.approx((0.0, 0.0, 0.0, 1000.0))


def test_distribute_conserves_force():
    r = distribute_to_corners(777.0, 0.3, 0.8, GEOM)
    assert sum(r) == pytest.approx(777.0)


def test_plan_force_centroids():
    loads = normalize_loads([
        PointLoad(magnitude_N=100, position_mm=500),
        UniformLoad(magnitude_N_per_m=100, start_mm=0, end_mm=1000),
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=1000, length_mm=600, width_mm=400),
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, area_m2=0.25),
    ])
    p, u, d_explicit, d_area = plan_forces(GEOM, loads)

    assert (p.cx_m, p.cy_m) == pytest.approx((0.5, 0.5))
    assert (u.cx_m, u.cy_m) == pytest.approx((0.5, 0.5))
    assert u.F_N == pytest.approx(100.0)
    # huella medida desde el borde lejano
    assert (d_explicit.cx_m, d_explicit.cy_m) == pytest.approx((1.3, 0.8))
    assert d_explicit.F_N == pytest.approx(240.0)
    assert (d_area.cx_m, d_area.cy_m) == pytest.approx((0.25, 0.5))


def test_self_weight_of_four_members():
    w = frame_self_weight(GEOM, area_m2=0.0218, density_kg_m3=7850.0)
    assert w == pytest.approx(0.0218 * 6.0 * 7850.0 * 9.81)


def test_solve_conserves_total_load():
    loads = normalize_loads([
        PointLoad(magnitude_N=1500, position_mm=300),
        DistributedLoad(magnitude_N_per_m2=2000, start_mm=1200, length_mm=600, width_mm=400),
    ])
    sections, _ = normalize_sections([
        FrameSection(id="s1", start_mm=0, end_mm=1000, casing_weight=2000),
        FrameSection(id="s2", start_mm=1000, end_mm=2000, primary_load=100, primary_load_unit="kgf"),
    ])
    sol = solve_base_frame(GEOM, loads, sections, area_m2=0.0218, density_kg_m3=7850.0)

    expected = 1500 + 2000 * 0.24 + 2000 + 981 + sol.self_weight_N
    assert sol.total_applied_N == pytest.approx(expected)
    assert sol.corner_reactions.total == pytest.approx(expected)


def test_critical_beam_model():
    loads = normalize_loads([PointLoad(magnitude_N=4000, position_mm=1000)])
    sol = solve_base_frame(GEOM, loads, [], area_m2=0.0, density_kg_m3=0.0)

    assert sol.critical_length_m == pytest.approx(2.0)
    assert sol.load_per_beam_N == pytest.approx(1000.0)
    assert sol.w_N_per_m == pytest.approx(500.0)
    assert sol.max_shear_N == pytest.approx(500.0)
    assert sol.max_moment_Nm == pytest.approx(500.0 * 4.0 / 8.0)
    assert sol.corner_reactions.as_tuple() == pytest.approx((1000.0,) * 4)


def test_self_weight_split_in_quarters():
    sol = solve_base_frame(GEOM, normalize_loads([]), [], area_m2=0.01, density_kg_m3=1000.0)
    q = sol.self_weight_N / 4.0
    assert sol.corner_reactions.as_tuple() == pytest.approx((q, q, q, q))
