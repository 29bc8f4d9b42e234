# path: tests/test_normalize.py
import math

import pytest

from beam_load.domain.configs import BaseFrameConfig, SimpleBeamConfig
from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, PointLoad, UniformLoad
from beam_load.domain.units import ForceUnit, from_newtons, to_newtons
from beam_load.engine.defaults import DEFAULT_FALLBACKS, Fallbacks
from beam_load.engine.normalize import (
    normalize_beam_geometry, normalize_frame_geometry, normalize_inputs, normalize_loads,
    normalize_number, normalize_positive, normalize_profile, normalize_sections,
)
from beam_load.sections.profiles import CircularProfile, IBeamProfile, RectangularProfile


def test_normalize_positive_fallbacks():
    assert normalize_positive(float("nan"), 5) == 5
    assert normalize_positive(float("inf"), 5) == 5
    assert normalize_positive(-3, 5) == 5
    assert normalize_positive(0, 5) == 5
    assert normalize_positive(None, 5) == 5
    assert normalize_positive("abc", 5) == 5
    assert normalize_positive(10, 5) == 10


def test_normalize_number_keeps_negative_and_zero():
    assert normalize_number(-250, 0.0) == -250
    assert normalize_number(0, 7.0) == 0
    assert normalize_number(float("-inf"), 7.0) == 7.0


def test_unit_conversions():
    assert to_newtons(1, ForceUnit.KGF) == pytest.approx(9.81)
    assert to_newtons(1, ForceUnit.LBF) == pytest.approx(4.44822)
    assert to_newtons(10, ForceUnit.N) == 10
    assert to_newtons(2, "kg") == pytest.approx(19.62)
    assert from_newtons(9.81, "kgf") == pytest.approx(1.0)
    assert ForceUnit.parse("lbs") is ForceUnit.LBF
    assert ForceUnit.parse("") is ForceUnit.N


def test_beam_geometry_fallback_length():
    geom = normalize_beam_geometry(SimpleBeamConfig(length_mm=float("nan"), right_support_mm=1000))
    assert geom.length_m == pytest.approx(DEFAULT_FALLBACKS.beam_length_mm / 1000.0)
    assert geom.span_m == pytest.approx(1.0)


def test_frame_geometry_critical_length():
    geom = normalize_frame_geometry(BaseFrameConfig(length_mm=2000, width_mm=-1))
    assert geom.width_m == pytest.approx(1.0)
    assert geom.critical_length_m == pytest.approx(2.0)
    assert geom.perimeter_m == pytest.approx(6.0)


def test_profile_fallbacks_per_dimension():
    p = normalize_profile(IBeamProfile(height_mm=200, flange_width_mm=0, flange_thickness_mm=float("nan"), web_thickness_mm=6))
    assert isinstance(p, IBeamProfile)
    assert p.height_mm == 200
    assert p.flange_width_mm == DEFAULT_FALLBACKS.flange_width_mm
    assert p.flange_thickness_mm == DEFAULT_FALLBACKS.flange_thickness_mm
    assert p.web_thickness_mm == 6

    assert normalize_profile(CircularProfile(diameter_mm=-5)).diameter_mm == DEFAULT_FALLBACKS.diameter_mm


def test_unknown_profile_becomes_rectangular():
    p = normalize_profile(None)
    assert isinstance(p, RectangularProfile)
    assert (p.width_mm, p.height_mm) == (100.0, 218.0)


def test_custom_fallbacks_are_used():
    fb = Fallbacks(rect_width_mm=50.0)
    p = normalize_profile(RectangularProfile(width_mm=0, height_mm=100), fb)
    assert p.width_mm == 50.0


def test_loads_are_converted_to_newtons_and_meters():
    ls = normalize_loads([
        PointLoad(magnitude_N=10, position_mm=250, unit=ForceUnit.KGF, name="P"),
        UniformLoad(magnitude_N_per_m=100, start_mm=0, end_mm=500),
    ])
    assert ls.point_loads[0].x_m == pytest.approx(0.25)
    assert ls.point_loads[0].F_N == pytest.approx(98.1)
    assert ls.uniform_loads[0].total_N == pytest.approx(50.0)
    assert ls.uniform_loads[0].name == "Carga 2"


def test_invalid_uniform_is_dropped_with_note():
    ls = normalize_loads([UniformLoad(magnitude_N_per_m=100, start_mm=500, end_mm=500)])
    assert ls.uniform_loads == []
    assert len(ls.notes) == 1


def test_nan_magnitude_becomes_zero():
    ls = normalize_loads([PointLoad(magnitude_N=float("nan"), position_mm=100)])
    assert ls.point_loads[0].F_N == 0.0


def test_distributed_footprints():
    ls = normalize_loads([
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, length_mm=500, width_mm=400),
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, area_m2=0.25),
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, length_mm=500),
        DistributedLoad(magnitude_N_per_m2=1000, start_mm=0),
    ])
    explicit, square = ls.dist_loads
    assert explicit.total_N == pytest.approx(200.0)
    assert explicit.explicit is True

    assert square.length_m == pytest.approx(0.5)
    assert square.width_m == pytest.approx(0.5)
    assert square.total_N == pytest.approx(250.0)
    assert square.explicit is False

    # solo largo, o sin huella => se descartan con nota
    assert len(ls.notes) == 2


def test_length_only_distributed_gets_default_width_for_diagrams():
    dl = DistributedLoad(magnitude_N_per_m2=1000, start_mm=0, length_mm=500)
    assert normalize_loads([dl]).dist_loads == []

    ls = normalize_loads([dl], default_dist_width=True)
    assert len(ls.dist_loads) == 1
    assert ls.dist_loads[0].width_m == pytest.approx(1.0)
    assert len(ls.notes) == 1


def test_sections_with_inverted_range_are_kept():
    secs, notes = normalize_sections([FrameSection(id="s1", start_mm=800, end_mm=200, casing_weight=100)])
    assert len(secs) == 1
    assert secs[0].total_N == pytest.approx(100.0)
    assert notes


def test_normalize_inputs_negative_density_and_beam_sections():
    data = normalize_inputs(
        SimpleBeamConfig(length_mm=1000),
        [],
        [FrameSection(id="s1", start_mm=0, end_mm=500)],
        RectangularProfile(100, 218),
        -10,
    )
    assert data.density_kg_m3 == DEFAULT_FALLBACKS.density_kg_m3
    assert data.section_loads == []
    assert len(data.notes) == 2


def test_normalize_inputs_nan_density_uses_fallback():
    data = normalize_inputs(BaseFrameConfig(1000, 1000), [], [], None, math.nan)
    assert data.density_kg_m3 == 7850.0
    assert data.notes == []
