# path: tests/test_analysis.py
import math

import pytest

from beam_load.domain.configs import BaseFrameConfig, SimpleBeamConfig
from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, PointLoad, UniformLoad
from beam_load.domain.results import Results
from beam_load.domain.units import ForceUnit
from beam_load.engine.analysis import compute_diagrams, compute_results
from beam_load.materials.material_db import MaterialDB, make_custom_material
from beam_load.sections.profiles import RectangularProfile, section_properties

A36 = MaterialDB.default().get("ASTM A36 Structural Steel")
RECT = RectangularProfile(100, 218)


def test_simple_beam_results():
    config = SimpleBeamConfig(length_mm=1000, left_support_mm=0, right_support_mm=1000)
    res = compute_results(config, [PointLoad(magnitude_N=1000, position_mm=500)], None, RECT, A36, 7850)

    props = section_properties(RECT)
    assert res.total_beams == 1
    assert res.load_per_beam_N == pytest.approx(1000.0)
    assert res.max_shear_force_N == pytest.approx(500.0)
    assert res.max_bending_moment_Nm == pytest.approx(250.0)
    assert res.moment_of_inertia_m4 == pytest.approx(props.moment_of_inertia_m4)
    assert res.max_normal_stress_MPa == pytest.approx(250.0 / props.section_modulus_m3 / 1e6)
    assert res.safety_factor == pytest.approx(250.0 / res.max_normal_stress_MPa)
    assert res.corner_reactions.as_tuple() == (0.0, 0.0, 0.0, 0.0)
    assert res.corner_reaction_force_N == 0.0
    assert res.max_deflection_m == pytest.approx(5 * 1000 * 1.0 / (384 * 200e9 * props.moment_of_inertia_m4))


def test_base_frame_results():
    config = BaseFrameConfig(
        length_mm=2000, width_mm=1000,
        sections=(FrameSection(id="s1", start_mm=0, end_mm=2000, casing_weight=1000),),
    )
    res = compute_results(config, [PointLoad(magnitude_N=150, position_mm=500, unit=ForceUnit.KGF)], None, RECT, A36, 7850)

    assert res.total_beams == 4
    assert res.self_weight_N == pytest.approx(0.0218 * 6.0 * 7850.0 * 9.81)
    assert res.total_applied_load_N == pytest.approx(150 * 9.81 + 1000 + res.self_weight_N)
    assert res.corner_reactions.total == pytest.approx(res.total_applied_load_N)
    assert res.corner_reaction_force_N == pytest.approx(max(res.corner_reactions.as_tuple()))
    assert res.load_per_beam_N == pytest.approx(res.total_applied_load_N / 4.0)
    assert res.critical_length_m == pytest.approx(2.0)


def test_explicit_sections_override_config_sections():
    config = BaseFrameConfig(
        length_mm=1000, width_mm=1000,
        sections=(FrameSection(id="s1", start_mm=0, end_mm=1000, casing_weight=1000),),
    )
    res = compute_results(config, [], [], RECT, A36, 0.0)
    assert res.total_applied_load_N == 0.0


def test_missing_material_gives_zero_safety_and_deflection():
    config = SimpleBeamConfig(length_mm=1000)
    res = compute_results(config, [PointLoad(magnitude_N=1000, position_mm=500)], None, RECT, None, 7850)
    assert res.safety_factor == 0.0
    assert res.max_deflection_m == 0.0
    assert res.max_normal_stress_MPa > 0


def test_nan_material_and_geometry_do_not_raise():
    config = SimpleBeamConfig(length_mm=float("nan"), right_support_mm=1000)
    mat = make_custom_material(float("nan"), float("nan"))
    res = compute_results(config, [UniformLoad(magnitude_N_per_m=100, start_mm=0, end_mm=1000)], None, RECT, mat, float("nan"))
    assert res.safety_factor == 0.0
    assert res.max_deflection_m == 0.0
    assert res.total_applied_load_N == pytest.approx(100.0)


def test_no_loads_gives_infinite_safety():
    res = compute_results(SimpleBeamConfig(length_mm=1000), [], None, RECT, A36, 7850)
    assert res.max_bending_moment_Nm == 0.0
    assert math.isinf(res.safety_factor)


def test_notes_are_surfaced():
    loads = [DistributedLoad(magnitude_N_per_m2=1000, start_mm=0)]
    res = compute_results(SimpleBeamConfig(length_mm=1000), loads, None, RECT, A36, 7850)
    assert len(res.notes) == 1


def test_results_zero_default():
    z = Results.zero()
    assert z.total_beams == 0
    assert z.corner_reactions.total == 0.0
    assert z.notes == ()


def test_compute_diagrams_simple_beam():
    config = SimpleBeamConfig(length_mm=1000, right_support_mm=1000)
    loads = [PointLoad(magnitude_N=1000, position_mm=500)]
    res = compute_results(config, loads, None, RECT, A36, 7850)
    d = compute_diagrams(config, loads, res)

    assert len(d.shear) == 100
    assert d.shear[0].y == pytest.approx(500.0)
    assert max(p.y for p in d.deflection) > 0


def test_compute_diagrams_base_frame():
    config = BaseFrameConfig(length_mm=2000, width_mm=1000)
    res = compute_results(config, [PointLoad(magnitude_N=4000, position_mm=1000)], None, RECT, A36, 0.0)
    d = compute_diagrams(config, [], res)

    assert len(d.moment) == 100
    assert d.shear[0].y == pytest.approx(500.0)
    assert d.moment[-1].x == pytest.approx(2000.0)


def test_simple_beam_distributed_only_has_no_moment():
    config = SimpleBeamConfig(length_mm=1000, left_support_mm=0, right_support_mm=1000)
    loads = [DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, area_m2=0.25)]
    res = compute_results(config, loads, None, RECT, A36, 7850)

    assert res.total_applied_load_N == pytest.approx(250.0)
    assert res.max_shear_force_N == 0.0
    assert res.max_bending_moment_Nm == 0.0
    assert res.max_normal_stress_MPa == 0.0

    d = compute_diagrams(config, loads, res)
    assert min(p.y for p in d.moment) < 0.0


def test_frame_ignores_length_only_distributed_load():
    config = BaseFrameConfig(length_mm=2000, width_mm=600)
    loads = [DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, length_mm=500)]
    res = compute_results(config, loads, None, RECT, A36, 0.0)

    assert res.total_applied_load_N == 0.0
    assert all(r >= 0.0 for r in res.corner_reactions.as_tuple())
    assert len(res.notes) == 1


def test_simple_beam_diagram_uses_default_width_for_length_only_load():
    config = SimpleBeamConfig(length_mm=1000, right_support_mm=1000)
    loads = [DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, length_mm=500)]
    res = compute_results(config, loads, None, RECT, A36, 7850)
    assert res.total_applied_load_N == 0.0

    d = compute_diagrams(config, loads, res)
    # 1000 N/m² · 0.5 m · 1 m de ancho
    assert d.shear[-1].y == pytest.approx(-500.0)


def test_unknown_config_returns_zero_results():
    class OtraConfig:
        pass

    res = compute_results(OtraConfig(), [PointLoad(magnitude_N=100, position_mm=0)], None, RECT, A36, 7850)
    assert res.total_applied_load_N == 0.0
    assert res.total_beams == 0
    assert len(res.notes) == 1

    d = compute_diagrams(OtraConfig(), [], res)
    assert d.shear == () and d.moment == () and d.deflection == ()
