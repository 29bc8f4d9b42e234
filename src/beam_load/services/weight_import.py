# path: src/beam_load/services/weight_import.py
from __future__ import annotations

import csv
import io
import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, Load, PointLoad, UniformLoad
from beam_load.domain.units import ForceUnit, to_newtons

logger = logging.getLogger(__name__)

# Importa pesos (JSON / CSV) y los convierte a tramos (FrameSection) y cargas.


@dataclass
class ImportedSection:
    start_mm: float = 0.0
    end_mm: Optional[float] = None
    length_mm: Optional[float] = None
    name: str = ""
    casing_weight: float = 0.0
    casing_weight_unit: ForceUnit = ForceUnit.N
    primary_load: float = 0.0
    primary_load_unit: ForceUnit = ForceUnit.N


@dataclass
class ImportedComponent:
    position_mm: float
    weight: float
    weight_unit: ForceUnit = ForceUnit.KGF
    name: str = ""
    load_type: str = "Point Load"
    section_id: Optional[str] = None
    section_name: Optional[str] = None
    section_index: Optional[int] = None   # base 0
    length_mm: Optional[float] = None
    width_mm: Optional[float] = None
    area_m2: Optional[float] = None


@dataclass
class WeightImportData:
    frame_length_mm: Optional[float] = None
    frame_width_mm: Optional[float] = None
    sections: List[ImportedSection] = field(default_factory=list)
    components: List[ImportedComponent] = field(default_factory=list)
    total_roof_weight: Optional[float] = None
    total_baseframe_weight: Optional[float] = None
    total_weight_unit: ForceUnit = ForceUnit.KGF


_DIM_TO_MM = {"mm": 1.0, "m": 1000.0, "in": 25.4}


def _try_float(s: Any) -> Optional[float]:
    if s is None:
        return None
    t = str(s).strip().replace(",", ".") if not isinstance(s, (int, float)) else s
    if t == "":
        return None
    try:
        v = float(t)
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def _as_dict(v: Any, what: str) -> Dict[str, Any]:
    if v is None:
        return {}
    if not isinstance(v, dict):
        raise ValueError(f"JSON inválido: '{what}' debe ser un objeto.")
    return v


def _as_list_of_dicts(v: Any, what: str) -> List[Dict[str, Any]]:
    if v is None:
        return []
    if not isinstance(v, list) or not all(isinstance(x, dict) for x in v):
        raise ValueError(f"JSON inválido: '{what}' debe ser una lista de objetos.")
    return v


# -------------------------
# JSON
# -------------------------
def parse_weight_import_json(text: str) -> WeightImportData:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("JSON inválido: se esperaba un objeto en la raíz.")

    data = WeightImportData()

    dims = _as_dict(raw.get("frameDimensions"), "frameDimensions")
    k = _DIM_TO_MM.get(str(dims.get("units", "mm")).strip().lower(), 1.0)
    if _try_float(dims.get("length")) is not None:
        data.frame_length_mm = _try_float(dims.get("length")) * k
    if _try_float(dims.get("width")) is not None:
        data.frame_width_mm = _try_float(dims.get("width")) * k

    for s in _as_list_of_dicts(raw.get("sections"), "sections"):
        data.sections.append(_section_from_json(s))

    for c in _as_list_of_dicts(raw.get("components"), "components"):
        pos = _try_float(c.get("position"))
        w = _try_float(c.get("weight"))
        data.components.append(ImportedComponent(
            position_mm=pos if pos is not None else 0.0,
            weight=w if w is not None else 0.0,
            weight_unit=ForceUnit.parse(c.get("weightUnit", "kg")),
            name=str(c.get("name") or ""),
            load_type=str(c.get("loadType") or "Point Load"),
            section_id=c.get("sectionId"),
            section_name=c.get("sectionName"),
            section_index=int(_try_float(c.get("sectionIndex"))) if _try_float(c.get("sectionIndex")) is not None else None,
            length_mm=_try_float(c.get("loadLength")),
            width_mm=_try_float(c.get("loadWidth")),
            area_m2=_try_float(c.get("area")),
        ))

    totals = _as_dict(raw.get("totalWeights"), "totalWeights")
    data.total_roof_weight = _try_float(totals.get("roof"))
    data.total_baseframe_weight = _try_float(totals.get("baseframe"))
    data.total_weight_unit = ForceUnit.parse(totals.get("unit", "kg"))

    return _validate(data)


def _section_from_json(s: Dict[str, Any]) -> ImportedSection:
    sec = ImportedSection(
        start_mm=_try_float(s.get("startPosition")) or 0.0,
        end_mm=_try_float(s.get("endPosition")),
        length_mm=_try_float(s.get("length")),
        name=str(s.get("name") or ""),
        casing_weight=_try_float(s.get("casingWeight")) or 0.0,
        casing_weight_unit=ForceUnit.parse(s.get("casingWeightUnit", "N")),
    )

    if _try_float(s.get("primaryLoad")) is not None:
        sec.primary_load = _try_float(s.get("primaryLoad"))
        sec.primary_load_unit = ForceUnit.parse(s.get("primaryLoadUnit", "N"))
    else:
        # techo + bastidor => carga primaria (en N, porque pueden venir en unidades distintas)
        roof = _try_float(s.get("roofWeight")) or 0.0
        frame = _try_float(s.get("baseframeWeight")) or 0.0
        if roof or frame:
            sec.primary_load = (
                to_newtons(roof, s.get("roofWeightUnit", "kg"))
                + to_newtons(frame, s.get("baseframeWeightUnit", "kg"))
            )
            sec.primary_load_unit = ForceUnit.N
    return sec


# -------------------------
# CSV
# -------------------------
def parse_weight_import_csv(text: str) -> WeightImportData:
    """
    Formato esperado:
      Type,Name,Section,Position (mm),Weight,Unit,Load Type,Length (mm),Width (mm)
      Section,Section 1,1,0-1000,2000,N,Distributed,1000,1000
      Component,Fan,1,500,150,kg,Point Load,,
    """
    lines = [ln for ln in (text or "").splitlines() if ln.strip()]
    if len(lines) < 2:
        raise ValueError("El CSV debe tener encabezado y al menos una fila de datos.")

    rows = list(csv.reader(io.StringIO("\n".join(lines))))
    headers = [h.strip().lower() for h in rows[0]]

    def find(pred) -> Optional[int]:
        for i, h in enumerate(headers):
            if pred(h):
                return i
        return None

    i_type = find(lambda h: h == "type")
    i_name = find(lambda h: h == "name")
    i_section = find(lambda h: h == "section")
    i_pos = find(lambda h: "position" in h)
    i_weight = find(lambda h: h == "weight")
    i_unit = find(lambda h: h == "unit")
    i_ltype = find(lambda h: "load" in h and "type" in h)
    i_len = find(lambda h: "length" in h)
    i_wid = find(lambda h: "width" in h)

    if i_type is None or i_weight is None:
        raise ValueError("El CSV debe tener columnas 'Type' y 'Weight'.")

    def cell(row: List[str], i: Optional[int]) -> str:
        if i is None or i >= len(row):
            return ""
        return row[i].strip()

    data = WeightImportData()
    for r in rows[1:]:
        kind = cell(r, i_type).lower()

        if kind == "section":
            sec = ImportedSection(name=cell(r, i_name))
            pos = cell(r, i_pos)
            if "-" in pos.lstrip("-"):
                a, b = pos.lstrip("-").split("-", 1)
                sec.start_mm = _try_float(a) or 0.0
                sec.end_mm = _try_float(b)
            else:
                sec.start_mm = _try_float(pos) or 0.0
            w = _try_float(cell(r, i_weight))
            if w is not None:
                sec.casing_weight = w
                sec.casing_weight_unit = ForceUnit.parse(cell(r, i_unit) or "N")
            ln = _try_float(cell(r, i_len))
            if ln:
                sec.length_mm = ln
                sec.end_mm = sec.start_mm + ln
            data.sections.append(sec)

        elif kind == "component":
            sec_ref = cell(r, i_section)
            comp = ImportedComponent(
                position_mm=_try_float(cell(r, i_pos)) or 0.0,
                weight=_try_float(cell(r, i_weight)) or 0.0,
                weight_unit=ForceUnit.parse(cell(r, i_unit) or "kg"),
                name=cell(r, i_name),
                load_type=cell(r, i_ltype) or "Point Load",
                length_mm=_try_float(cell(r, i_len)),
                width_mm=_try_float(cell(r, i_wid)),
            )
            if sec_ref:
                n = _try_float(sec_ref)
                if n is not None:
                    comp.section_index = int(n) - 1
                else:
                    comp.section_name = sec_ref
            data.components.append(comp)

    return _validate(data)


def _validate(data: WeightImportData) -> WeightImportData:
    for s in data.sections:
        if s.length_mm and s.end_mm is None:
            s.end_mm = s.start_mm + s.length_mm
        if s.end_mm is not None and s.end_mm <= s.start_mm:
            s.end_mm = s.start_mm + 1000.0

    n0 = len(data.components)
    data.components = [c for c in data.components if c.weight > 0 and c.position_mm >= 0]
    if len(data.components) < n0:
        logger.info("Importación: %d componente(s) descartado(s) (peso <= 0 o posición < 0).", n0 - len(data.components))
    return data


# -------------------------
# Conversión a dominio
# -------------------------
def convert_imported_sections(imported: Sequence[ImportedSection], frame_length_mm: float) -> List[FrameSection]:
    out: List[FrameSection] = []
    for k, s in enumerate(imported):
        start = s.start_mm or 0.0
        end = s.end_mm if s.end_mm is not None else start + (s.length_mm or 1000.0)
        end = min(end, float(frame_length_mm))
        out.append(FrameSection(
            id=f"section-{k + 1}",
            start_mm=start,
            end_mm=end,
            casing_weight=s.casing_weight,
            casing_weight_unit=s.casing_weight_unit,
            primary_load=s.primary_load,
            primary_load_unit=s.primary_load_unit,
            name=s.name or f"Section {k + 1}",
        ))
    return out


def _find_section(c: ImportedComponent, sections: Sequence[FrameSection]) -> Optional[FrameSection]:
    if c.section_id:
        return next((s for s in sections if s.id == c.section_id), None)
    if c.section_name:
        return next((s for s in sections if s.name == c.section_name), None)
    if c.section_index is not None and 0 <= c.section_index < len(sections):
        return sections[c.section_index]
    return None


def convert_imported_components(
    imported: Sequence[ImportedComponent],
    sections: Sequence[FrameSection],
    frame_width_mm: float,
) -> List[Load]:
    """Posición relativa al tramo referenciado (si hay) => posición absoluta."""
    out: List[Load] = []
    for k, c in enumerate(imported):
        target = _find_section(c, sections)
        x = c.position_mm + (target.start_mm if target is not None else 0.0)
        name = c.name or f"Component {k + 1}"
        kind = c.load_type.strip().lower()

        if kind.startswith("distributed"):
            out.append(DistributedLoad(
                magnitude_N_per_m2=c.weight,
                start_mm=x,
                length_mm=c.length_mm or 500.0,
                width_mm=c.width_mm or float(frame_width_mm),
                unit=c.weight_unit,
                name=name,
            ))
        elif kind.startswith("uniform") and c.length_mm:
            out.append(UniformLoad(
                magnitude_N_per_m=c.weight,
                start_mm=x,
                end_mm=x + c.length_mm,
                unit=c.weight_unit,
                name=name,
            ))
        else:
            out.append(PointLoad(magnitude_N=c.weight, position_mm=x, unit=c.weight_unit, name=name))
    return out


def distribute_total_weights(
    total_roof_weight: float,
    total_baseframe_weight: float,
    total_length_mm: float,
    sections: Sequence[FrameSection],
    unit: ForceUnit = ForceUnit.KGF,
) -> List[FrameSection]:
    """
    Reparte pesos totales (techo + bastidor) por metro lineal entre los tramos
    y los suma a la carga primaria de cada uno (resultado en N).
    """
    if total_length_mm <= 0:
        raise ValueError(f"Largo total inválido: {total_length_mm:g} mm.")

    per_mm_N = to_newtons(total_roof_weight + total_baseframe_weight, unit) / float(total_length_mm)
    out: List[FrameSection] = []
    for s in sections:
        primary_N = to_newtons(s.primary_load, s.primary_load_unit)
        out.append(replace(
            s,
            primary_load=primary_N + per_mm_N * s.length_mm,
            primary_load_unit=ForceUnit.N,
        ))
    return out


def create_weight_import_template() -> str:
    return json.dumps(
        {
            "frameDimensions": {"length": 2000, "width": 1000, "units": "mm"},
            "sections": [
                {
                    "name": "Section 1",
                    "startPosition": 0,
                    "endPosition": 1000,
                    "casingWeight": 2000,
                    "casingWeightUnit": "N",
                    "roofWeight": 50,
                    "roofWeightUnit": "kg",
                },
                {
                    "name": "Section 2",
                    "startPosition": 1000,
                    "endPosition": 2000,
                    "casingWeight": 3000,
                    "casingWeightUnit": "N",
                    "roofWeight": 50,
                    "roofWeightUnit": "kg",
                },
            ],
            "components": [
                {"name": "Fan", "sectionIndex": 0, "position": 500, "weight": 150, "weightUnit": "kg", "loadType": "Point Load"},
                {"name": "Filter", "sectionIndex": 0, "position": 200, "weight": 75, "weightUnit": "kg", "loadType": "Point Load"},
            ],
        },
        indent=2,
    )
