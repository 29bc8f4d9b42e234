from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from beam_load.domain.configs import AnalysisConfiguration, BaseFrameConfig, SimpleBeamConfig
from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import Load
from beam_load.domain.results import Diagrams, Results
from beam_load.engine.base_frame import solve_base_frame
from beam_load.engine.defaults import DEFAULT_FALLBACKS, Fallbacks
from beam_load.engine.diagrams import sample_base_frame, sample_simple_beam
from beam_load.engine.normalize import (
    FrameGeometry, normalize_beam_geometry, normalize_frame_geometry, normalize_inputs,
    normalize_loads, normalize_number,
)
from beam_load.engine.simple_beam import solve_simple_beam
from beam_load.engine.stress import evaluate_stress
from beam_load.materials.material_db import Material
from beam_load.sections.profiles import CrossSectionProfile, section_properties

logger = logging.getLogger(__name__)


def compute_results(
    config: AnalysisConfiguration,
    loads: Sequence[Load],
    sections: Optional[Sequence[FrameSection]],
    cross_section: CrossSectionProfile,
    material: Optional[Material],
    density_kg_m3: float,
    fallbacks: Fallbacks = DEFAULT_FALLBACKS,
) -> Results:
    """
    Punto de entrada: configuración + cargas => Results (objeto nuevo en cada llamada).

    sections=None => se usan config.sections (solo bastidor).
    No lanza excepciones por datos inválidos: se normalizan con 'fallbacks'.
    Configuración de tipo desconocido => Results.zero() con una nota.
    """
    if not isinstance(config, (SimpleBeamConfig, BaseFrameConfig)):
        note = f"Configuración de tipo desconocido ({type(config).__name__}): no se calculó."
        logger.debug(note)
        return replace(Results.zero(), notes=(note,))

    if sections is None:
        sections = config.sections if isinstance(config, BaseFrameConfig) else ()

    data = normalize_inputs(config, loads, sections, cross_section, density_kg_m3, fallbacks)
    props = section_properties(data.profile)

    # material None o con NaN => E = 0 / fy = 0 (flecha y FS quedan en 0)
    E_Pa = normalize_number(getattr(material, "elastic_modulus_GPa", None), 0.0) * 1e9
    fy = normalize_number(getattr(material, "yield_strength_MPa", None), 0.0)

    if isinstance(data.geometry, FrameGeometry):
        sol = solve_base_frame(
            data.geometry, data.loads, data.section_loads,
            area_m2=props.area_m2, density_kg_m3=data.density_kg_m3,
        )
        total_beams = 4
        load_per_beam = sol.load_per_beam_N
        max_shear = sol.max_shear_N
        max_moment = sol.max_moment_Nm
        total = sol.total_applied_N
        self_weight = sol.self_weight_N
        critical_length = sol.critical_length_m
        corners = sol.corner_reactions
        corner_max = max(corners.as_tuple())
    else:
        sol_b = solve_simple_beam(
            data.geometry, data.loads,
            area_m2=props.area_m2, density_kg_m3=data.density_kg_m3,
        )
        total_beams = 1
        total = sol_b.total_applied_N
        load_per_beam = total
        max_shear = sol_b.max_shear_N
        max_moment = sol_b.max_moment_Nm
        self_weight = sol_b.self_weight_N
        critical_length = data.geometry.length_m
        corners = Results.zero().corner_reactions
        corner_max = 0.0

    st = evaluate_stress(
        max_moment_Nm=max_moment,
        max_shear_N=max_shear,
        props=props,
        yield_MPa=fy,
        E_Pa=E_Pa,
        total_N=total,
        critical_length_m=critical_length,
    )

    logger.debug(
        "%s: Ftotal=%.2f N, Vmax=%.2f N, Mmax=%.2f N·m, σ=%.3f MPa, FS=%.3f",
        config.label, total, max_shear, max_moment, st.max_normal_stress_MPa, st.safety_factor,
    )

    return Results(
        max_shear_force_N=max_shear,
        max_bending_moment_Nm=max_moment,
        max_normal_stress_MPa=st.max_normal_stress_MPa,
        max_shear_stress_MPa=st.max_shear_stress_MPa,
        safety_factor=st.safety_factor,
        total_beams=total_beams,
        load_per_beam_N=load_per_beam,
        moment_of_inertia_m4=props.moment_of_inertia_m4,
        section_modulus_m3=props.section_modulus_m3,
        corner_reaction_force_N=corner_max,
        corner_reactions=corners,
        max_deflection_m=st.max_deflection_m,
        total_applied_load_N=total,
        area_m2=props.area_m2,
        elastic_modulus_Pa=E_Pa,
        self_weight_N=self_weight,
        critical_length_m=critical_length,
        notes=tuple(data.notes),
    )


def compute_diagrams(
    config: AnalysisConfiguration,
    loads: Sequence[Load],
    results: Results,
    fallbacks: Fallbacks = DEFAULT_FALLBACKS,
) -> Diagrams:
    """
    Diagramas V, M y δ (100 puntos cada uno) recalculados desde las entradas.
    E e I se toman de 'results'.
    Configuración de tipo desconocido => diagramas vacíos.
    """
    E_Pa = results.elastic_modulus_Pa
    I_m4 = results.moment_of_inertia_m4

    if isinstance(config, BaseFrameConfig):
        geom = normalize_frame_geometry(config, fallbacks)
        return sample_base_frame(geom, results.total_applied_load_N, E_Pa=E_Pa, I_m4=I_m4)

    if not isinstance(config, SimpleBeamConfig):
        return Diagrams(shear=(), moment=(), deflection=())

    geom_b = normalize_beam_geometry(config, fallbacks)
    load_set = normalize_loads(loads, fallbacks, default_dist_width=True)
    return sample_simple_beam(geom_b, load_set, E_Pa=E_Pa, I_m4=I_m4)
