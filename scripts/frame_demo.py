from beam_load.domain.configs import BaseFrameConfig
from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import PointLoad, DistributedLoad
from beam_load.domain.units import ForceUnit
from beam_load.engine.analysis import compute_results
from beam_load.materials.material_db import MaterialDB
from beam_load.sections.profiles import RectangularProfile


config = BaseFrameConfig(
    length_mm=2000,
    width_mm=1000,
    sections=(
        FrameSection(id="s1", start_mm=0, end_mm=1000, casing_weight=2000, name="Tramo 1"),
        FrameSection(id="s2", start_mm=1000, end_mm=2000, casing_weight=3000,
                     primary_load=100, primary_load_unit=ForceUnit.KGF, name="Tramo 2"),
    ),
)

loads = [
    PointLoad(magnitude_N=150, position_mm=500, unit=ForceUnit.KGF, name="Ventilador"),
    DistributedLoad(magnitude_N_per_m2=2000, start_mm=1200, length_mm=600, width_mm=400, name="Equipo"),
]

material = MaterialDB.default().resolve("ASTM A36 Structural Steel")
res = compute_results(config, loads, None, RectangularProfile(100, 218), material, density_kg_m3=7850)

cr = res.corner_reactions
print("Peso propio [N] =", round(res.self_weight_N, 2))
print("F total [N]     =", round(res.total_applied_load_N, 2))
print("R1..R4 [N]      =", [round(r, 2) for r in cr.as_tuple()], "Σ =", round(cr.total, 2))
print("Carga/viga [N]  =", round(res.load_per_beam_N, 2))
print("σ [MPa]         =", round(res.max_normal_stress_MPa, 3))
print("FS              =", round(res.safety_factor, 2))
