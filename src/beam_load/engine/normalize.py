from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from beam_load.domain.configs import AnalysisConfiguration, BaseFrameConfig, SimpleBeamConfig
from beam_load.domain.frame_sections import FrameSection, NormalizedSectionLoad
from beam_load.domain.loads import (
    Load, PointLoad, UniformLoad, DistributedLoad,
    NormalizedPointLoad, NormalizedUniformLoad, NormalizedDistributedLoad,
)
from beam_load.domain.units import to_newtons
from beam_load.engine.defaults import DEFAULT_FALLBACKS, Fallbacks
from beam_load.sections.profiles import (
    CrossSectionProfile, RectangularProfile, IBeamProfile, CChannelProfile, CircularProfile,
)


def normalize_number(value, fallback: float) -> float:
    """fallback si value es NaN, ±inf, None o no convertible a float."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        return float(fallback)
    if math.isnan(v) or math.isinf(v):
        return float(fallback)
    return v


def normalize_positive(value, fallback: float) -> float:
    v = normalize_number(value, fallback)
    return float(fallback) if v <= 0 else v


def _given(value) -> bool:
    """Campo opcional 'presente': no None, finito y distinto de 0."""
    return value is not None and normalize_number(value, 0.0) != 0.0


@dataclass(frozen=True)
class BeamGeometry:
    length_m: float
    left_m: float
    right_m: float

    @property
    def span_m(self) -> float:
        return self.right_m - self.left_m


@dataclass(frozen=True)
class FrameGeometry:
    length_m: float
    width_m: float

    @property
    def critical_length_m(self) -> float:
        return max(self.length_m, self.width_m)

    @property
    def area_m2(self) -> float:
        return self.length_m * self.width_m

    @property
    def perimeter_m(self) -> float:
        return 2.0 * (self.length_m + self.width_m)


@dataclass
class LoadSet:
    point_loads: List[NormalizedPointLoad] = field(default_factory=list)
    uniform_loads: List[NormalizedUniformLoad] = field(default_factory=list)
    dist_loads: List[NormalizedDistributedLoad] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


@dataclass
class NormalizedInputs:
    geometry: Union[BeamGeometry, FrameGeometry]
    loads: LoadSet
    section_loads: List[NormalizedSectionLoad]
    profile: CrossSectionProfile
    density_kg_m3: float
    notes: List[str]


# -------------------------
# Geometría
# -------------------------
def normalize_beam_geometry(config: SimpleBeamConfig, fb: Fallbacks = DEFAULT_FALLBACKS) -> BeamGeometry:
    L_mm = normalize_positive(config.length_mm, fb.beam_length_mm)
    left_mm = normalize_number(config.left_support_mm, 0.0)
    right_mm = normalize_number(config.right_support_mm, L_mm)
    return BeamGeometry(length_m=L_mm / 1000.0, left_m=left_mm / 1000.0, right_m=right_mm / 1000.0)


def normalize_frame_geometry(config: BaseFrameConfig, fb: Fallbacks = DEFAULT_FALLBACKS) -> FrameGeometry:
    return FrameGeometry(
        length_m=normalize_positive(config.length_mm, fb.frame_length_mm) / 1000.0,
        width_m=normalize_positive(config.width_mm, fb.frame_width_mm) / 1000.0,
    )


# -------------------------
# Perfil
# -------------------------
def normalize_profile(profile: Optional[CrossSectionProfile], fb: Fallbacks = DEFAULT_FALLBACKS) -> CrossSectionProfile:
    if isinstance(profile, RectangularProfile):
        return RectangularProfile(
            width_mm=normalize_positive(profile.width_mm, fb.rect_width_mm),
            height_mm=normalize_positive(profile.height_mm, fb.rect_height_mm),
        )
    if isinstance(profile, (IBeamProfile, CChannelProfile)):
        return type(profile)(
            height_mm=normalize_positive(profile.height_mm, fb.rect_height_mm),
            flange_width_mm=normalize_positive(profile.flange_width_mm, fb.flange_width_mm),
            flange_thickness_mm=normalize_positive(profile.flange_thickness_mm, fb.flange_thickness_mm),
            web_thickness_mm=normalize_positive(profile.web_thickness_mm, fb.web_thickness_mm),
        )
    if isinstance(profile, CircularProfile):
        return CircularProfile(diameter_mm=normalize_positive(profile.diameter_mm, fb.diameter_mm))

    # perfil desconocido => rectangular por defecto
    return RectangularProfile(width_mm=fb.rect_width_mm, height_mm=fb.rect_height_mm)


# -------------------------
# Cargas
# -------------------------
def _normalize_distributed(
    dl: DistributedLoad,
    label: str,
    fb: Fallbacks,
    notes: List[str],
    default_width: bool = False,
) -> Optional[NormalizedDistributedLoad]:
    q = to_newtons(normalize_number(dl.magnitude_N_per_m2, 0.0), dl.unit)
    x0_mm = normalize_number(dl.start_mm, 0.0)

    if _given(dl.length_mm) and _given(dl.width_mm):
        length_mm = normalize_positive(dl.length_mm, fb.dist_side_mm)
        width_mm = normalize_positive(dl.width_mm, fb.dist_side_mm)
        explicit = True
    elif _given(dl.area_m2):
        side_mm = math.sqrt(normalize_positive(dl.area_m2, fb.dist_area_m2)) * 1000.0
        length_mm = side_mm
        width_mm = side_mm
        explicit = False
    elif _given(dl.length_mm) and default_width:
        # solo para el corte/momento dibujado de la viga simple
        length_mm = normalize_positive(dl.length_mm, fb.dist_side_mm)
        width_mm = 1000.0
        explicit = True
        notes.append(f'Distribuida "{label}" sin ancho: en el diagrama se asume 1000 mm.')
    elif _given(dl.length_mm):
        notes.append(f'Distribuida "{label}" sin ancho ni área: se ignoró.')
        return None
    else:
        notes.append(f'Distribuida "{label}" sin huella (largo/ancho o área): se ignoró.')
        return None

    return NormalizedDistributedLoad(
        name=label,
        x1_m=x0_mm / 1000.0,
        length_m=length_mm / 1000.0,
        width_m=width_mm / 1000.0,
        q_N_per_m2=q,
        explicit=explicit,
    )


def normalize_loads(
    loads: Sequence[Load],
    fb: Fallbacks = DEFAULT_FALLBACKS,
    *,
    default_dist_width: bool = False,
) -> LoadSet:
    """
    default_dist_width=True: una distribuida con largo pero sin ancho ni área
    toma 1000 mm de ancho (diagramas de viga simple). Si no, se descarta.
    """
    out = LoadSet()

    for k, ld in enumerate(loads, start=1):
        label = (getattr(ld, "name", "") or f"Carga {k}").strip()

        if isinstance(ld, PointLoad):
            out.point_loads.append(NormalizedPointLoad(
                name=label,
                x_m=normalize_number(ld.position_mm, 0.0) / 1000.0,
                F_N=to_newtons(normalize_number(ld.magnitude_N, 0.0), ld.unit),
            ))

        elif isinstance(ld, UniformLoad):
            x1 = normalize_number(ld.start_mm, 0.0)
            x2 = normalize_number(ld.end_mm, x1)
            if x2 <= x1:
                out.notes.append(f'Uniforme "{label}" inválida: fin <= inicio ([{x1:g},{x2:g}] mm). Se ignoró.')
                continue
            out.uniform_loads.append(NormalizedUniformLoad(
                name=label,
                x1_m=x1 / 1000.0,
                x2_m=x2 / 1000.0,
                w_N_per_m=to_newtons(normalize_number(ld.magnitude_N_per_m, 0.0), ld.unit),
            ))

        elif isinstance(ld, DistributedLoad):
            nd = _normalize_distributed(ld, label, fb, out.notes, default_dist_width)
            if nd is not None:
                out.dist_loads.append(nd)

        else:
            out.notes.append(f'Carga "{label}" de tipo desconocido ({type(ld).__name__}): se ignoró.')

    return out


def normalize_sections(sections: Sequence[FrameSection]) -> tuple[List[NormalizedSectionLoad], List[str]]:
    notes: List[str] = []
    out: List[NormalizedSectionLoad] = []
    for k, s in enumerate(sections, start=1):
        label = (s.name or s.id or f"Tramo {k}").strip()
        x1 = normalize_number(s.start_mm, 0.0)
        x2 = normalize_number(s.end_mm, x1)
        if x2 <= x1:
            notes.append(f'Tramo "{label}": fin <= inicio ([{x1:g},{x2:g}] mm). Se usa el punto medio igualmente.')
        out.append(NormalizedSectionLoad(
            name=label,
            x1_m=x1 / 1000.0,
            x2_m=x2 / 1000.0,
            casing_N=to_newtons(normalize_number(s.casing_weight, 0.0), s.casing_weight_unit),
            primary_N=to_newtons(normalize_number(s.primary_load, 0.0), s.primary_load_unit),
        ))
    return out, notes


def normalize_inputs(
    config: AnalysisConfiguration,
    loads: Sequence[Load],
    sections: Sequence[FrameSection],
    profile: Optional[CrossSectionProfile],
    density_kg_m3,
    fb: Fallbacks = DEFAULT_FALLBACKS,
) -> NormalizedInputs:
    notes: List[str] = []

    if isinstance(config, BaseFrameConfig):
        geometry: Union[BeamGeometry, FrameGeometry] = normalize_frame_geometry(config, fb)
        section_loads, n_sec = normalize_sections(sections)
        notes.extend(n_sec)
    else:
        geometry = normalize_beam_geometry(config, fb)
        section_loads = []
        if sections:
            notes.append("Los tramos solo aplican al bastidor: se ignoraron en viga simple.")

    load_set = normalize_loads(loads, fb)
    notes.extend(load_set.notes)

    density = normalize_number(density_kg_m3, fb.density_kg_m3)
    if density < 0:
        notes.append(f"Densidad negativa ({density:g} kg/m³): se usa {fb.density_kg_m3:g} kg/m³.")
        density = fb.density_kg_m3

    return NormalizedInputs(
        geometry=geometry,
        loads=load_set,
        section_loads=section_loads,
        profile=normalize_profile(profile, fb),
        density_kg_m3=density,
        notes=notes,
    )
