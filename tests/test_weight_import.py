# path: tests/test_weight_import.py
import json

import pytest

from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, PointLoad, UniformLoad
from beam_load.domain.units import ForceUnit
from beam_load.services.weight_import import (
    ImportedComponent, convert_imported_components, convert_imported_sections,
    create_weight_import_template, distribute_total_weights, parse_weight_import_csv,
    parse_weight_import_json,
)


def test_template_round_trip():
    data = parse_weight_import_json(create_weight_import_template())
    assert data.frame_length_mm == 2000
    assert data.frame_width_mm == 1000
    assert len(data.sections) == 2
    assert len(data.components) == 2

    s1 = data.sections[0]
    # techo en kg => carga primaria en N
    assert s1.primary_load == pytest.approx(50 * 9.81)
    assert s1.primary_load_unit is ForceUnit.N
    assert data.components[0].weight_unit is ForceUnit.KGF


def test_json_units_and_invalid_components():
    text = json.dumps({
        "frameDimensions": {"length": 2, "width": 1, "units": "m"},
        "components": [
            {"name": "ok", "position": 100, "weight": 5},
            {"name": "sin peso", "position": 100, "weight": 0},
            {"name": "negativo", "position": -1, "weight": 5},
        ],
    })
    data = parse_weight_import_json(text)
    assert data.frame_length_mm == pytest.approx(2000.0)
    assert [c.name for c in data.components] == ["ok"]


def test_json_errors():
    with pytest.raises(ValueError):
        parse_weight_import_json("{no es json")
    with pytest.raises(ValueError):
        parse_weight_import_json("[1, 2]")


def test_csv_parse():
    text = (
        "Type,Name,Section,Position (mm),Weight,Unit,Load Type,Length (mm),Width (mm)\n"
        "Section,Section 1,1,0-1000,2000,N,Distributed,1000,1000\n"
        "Section,Section 2,2,1000-1800,3000,N,Distributed,,\n"
        "Component,Fan,1,500,150,kg,Point Load,,\n"
        "Component,Duct,Section 2,100,20,kg,Uniform,300,\n"
    )
    data = parse_weight_import_csv(text)
    assert [(s.start_mm, s.end_mm) for s in data.sections] == [(0.0, 1000.0), (1000.0, 1800.0)]
    assert data.sections[0].casing_weight == 2000

    fan, duct = data.components
    assert fan.section_index == 0
    assert duct.section_name == "Section 2"
    assert duct.length_mm == 300


def test_csv_errors():
    with pytest.raises(ValueError):
        parse_weight_import_csv("Type,Weight\n")
    with pytest.raises(ValueError):
        parse_weight_import_csv("Name,Position\nA,1\n")


def test_convert_sections_clips_to_frame():
    data = parse_weight_import_json(create_weight_import_template())
    sections = convert_imported_sections(data.sections, frame_length_mm=1500)
    assert [s.id for s in sections] == ["section-1", "section-2"]
    assert sections[1].end_mm == 1500
    assert sections[0].name == "Section 1"


def test_convert_components_relative_to_section():
    sections = [
        FrameSection(id="section-1", start_mm=0, end_mm=1000, name="A"),
        FrameSection(id="section-2", start_mm=1000, end_mm=2000, name="B"),
    ]
    comps = [
        ImportedComponent(position_mm=200, weight=10, section_index=1),
        ImportedComponent(position_mm=100, weight=50, load_type="Distributed", section_name="B"),
        ImportedComponent(position_mm=0, weight=20, load_type="Uniform", length_mm=400),
        ImportedComponent(position_mm=300, weight=20, load_type="Uniform"),
    ]
    p, d, u, fallback_point = convert_imported_components(comps, sections, frame_width_mm=800)

    assert isinstance(p, PointLoad)
    assert p.position_mm == 1200
    assert isinstance(d, DistributedLoad)
    assert (d.start_mm, d.length_mm, d.width_mm) == (1100, 500.0, 800.0)
    assert isinstance(u, UniformLoad)
    assert (u.start_mm, u.end_mm) == (0, 400)
    assert isinstance(fallback_point, PointLoad)
    assert fallback_point.name == "Component 4"


def test_distribute_total_weights():
    sections = [
        FrameSection(id="s1", start_mm=0, end_mm=1000, primary_load=10, primary_load_unit=ForceUnit.KGF),
        FrameSection(id="s2", start_mm=1000, end_mm=2000),
    ]
    out = distribute_total_weights(100, 0, 2000, sections, ForceUnit.KGF)
    assert out[0].primary_load == pytest.approx(98.1 + 490.5)
    assert out[1].primary_load == pytest.approx(490.5)
    assert all(s.primary_load_unit is ForceUnit.N for s in out)

    with pytest.raises(ValueError):
        distribute_total_weights(100, 0, 0, sections)


def test_json_wrong_shapes_raise_value_error():
    bad = [
        {"frameDimensions": [2000, 1000]},
        {"sections": {"name": "S1"}},
        {"components": [1, 2]},
        {"totalWeights": "100"},
    ]
    for raw in bad:
        with pytest.raises(ValueError):
            parse_weight_import_json(json.dumps(raw))


def test_json_non_finite_numbers_are_ignored():
    text = (
        '{"components": ['
        '{"name": "a", "position": 100, "weight": 5, "sectionIndex": Infinity},'
        '{"name": "b", "position": 100, "weight": NaN}'
        ']}'
    )
    data = parse_weight_import_json(text)
    assert [c.name for c in data.components] == ["a"]
    assert data.components[0].section_index is None
