from beam_load.domain.configs import SimpleBeamConfig
from beam_load.domain.loads import PointLoad, UniformLoad, DistributedLoad
from beam_load.domain.units import ForceUnit
from beam_load.engine.analysis import compute_results, compute_diagrams
from beam_load.materials.material_db import MaterialDB
from beam_load.sections.profiles import CChannelProfile


config = SimpleBeamConfig(length_mm=3000, left_support_mm=0, right_support_mm=3000)

loads = [
    PointLoad(magnitude_N=150, position_mm=1000, unit=ForceUnit.KGF, name="Motor"),
    UniformLoad(magnitude_N_per_m=500, start_mm=0, end_mm=3000, name="Chapa"),
    DistributedLoad(magnitude_N_per_m2=1000, start_mm=2000, area_m2=0.25, name="Filtro"),
]

profile = CChannelProfile(height_mm=218, flange_width_mm=66, flange_thickness_mm=3, web_thickness_mm=44.8)
material = MaterialDB.default().resolve("ASTM A36 Structural Steel")

res = compute_results(config, loads, None, profile, material, density_kg_m3=7850)
diag = compute_diagrams(config, loads, res)

print("F total [N]   =", round(res.total_applied_load_N, 2))
print("Vmax [N]      =", round(res.max_shear_force_N, 2))
print("Mmax [N·m]    =", round(res.max_bending_moment_Nm, 2))
print("σ [MPa]       =", round(res.max_normal_stress_MPa, 2))
print("FS            =", round(res.safety_factor, 2))
print("δ curva [mm]  =", round(max(p.y for p in diag.deflection), 4))
print("δ máx [mm]    =", round(res.max_deflection_m * 1000, 4))
print("\n".join(res.notes))
