from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional

CUSTOM_ID = "Custom"


@dataclass(frozen=True)
class Material:
    """
    Propiedades de material para verificación elástica.

    Unidades:
      - yield_strength_MPa
      - elastic_modulus_GPa
      - density_kg_m3
      - thermal_expansion [1/°C]
    """
    id: str
    yield_strength_MPa: float
    elastic_modulus_GPa: float
    density_kg_m3: float = 7850.0
    poissons_ratio: float = 0.3
    thermal_expansion: float = 12e-6

    @property
    def elastic_modulus_Pa(self) -> float:
        return float(self.elastic_modulus_GPa) * 1e9

    @property
    def is_custom(self) -> bool:
        return self.id == CUSTOM_ID


STANDARD_MATERIALS: List[Material] = [
    Material("ASTM A36 Structural Steel", 250.0, 200.0, 7850.0, 0.26, 12e-6),
    Material("ASTM A572 Grade 50 Steel", 345.0, 200.0, 7850.0, 0.26, 12e-6),
    Material("ASTM A992 Structural Steel", 345.0, 200.0, 7850.0, 0.30, 11.7e-6),
    Material("Stainless Steel 304", 215.0, 193.0, 8000.0, 0.29, 17.3e-6),
    Material("Aluminum 6061-T6", 276.0, 68.9, 2700.0, 0.33, 23.6e-6),
    Material(CUSTOM_ID, 250.0, 200.0, 7850.0, 0.30, 12e-6),
]


def make_custom_material(
    yield_strength_MPa: float,
    elastic_modulus_GPa: float,
    density_kg_m3: float = 7850.0,
    poissons_ratio: float = 0.3,
    thermal_expansion: float = 12e-6,
) -> Material:
    return Material(
        id=CUSTOM_ID,
        yield_strength_MPa=float(yield_strength_MPa),
        elastic_modulus_GPa=float(elastic_modulus_GPa),
        density_kg_m3=float(density_kg_m3),
        poissons_ratio=float(poissons_ratio),
        thermal_expansion=float(thermal_expansion),
    )


class MaterialDB:
    def __init__(self, materials: List[Material]):
        self.materials: List[Material] = list(materials)
        self.by_id: Dict[str, Material] = {m.id.strip(): m for m in self.materials if m.id.strip()}

    @classmethod
    def default(cls) -> "MaterialDB":
        return cls(STANDARD_MATERIALS)

    def ids(self) -> List[str]:
        return [m.id for m in self.materials]

    def get(self, mat_id: str) -> Optional[Material]:
        return self.by_id.get((mat_id or "").strip())

    def resolve(self, mat_id: str, custom: Optional[Material] = None) -> Optional[Material]:
        """
        "Custom" => valores del usuario (o la plantilla Custom si no hay).
        Resto => preset inmutable.
        """
        if (mat_id or "").strip() == CUSTOM_ID:
            base = self.get(CUSTOM_ID) or make_custom_material(250.0, 200.0)
            if custom is None:
                return base
            return replace(custom, id=CUSTOM_ID)
        return self.get(mat_id)

    @classmethod
    def from_txt(cls, path: str | Path) -> "MaterialDB":
        """
        Tabla separada por ';' con encabezado:
          id;yield_mpa;e_gpa;density;poisson;alpha
        Líneas vacías o que empiezan con '#' / '//' se ignoran. Acepta coma decimal.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"No existe el archivo de materiales: {p}")

        lines = p.read_text(encoding="utf-8", errors="replace").splitlines()
        rows: List[List[str]] = []
        for ln in lines:
            t = ln.strip()
            if not t:
                continue
            if t.startswith("#") or t.startswith("//"):
                continue
            rows.append([c.strip() for c in t.split(";")])

        if not rows:
            raise ValueError("Archivo de materiales vacío o sin filas válidas.")

        header = [h.strip().lower() for h in rows[0]]
        if "id" not in header:
            raise ValueError(f"Falta la columna 'id' en el encabezado: {rows[0]}")

        def idx(name: str) -> Optional[int]:
            return header.index(name) if name in header else None

        i_id = idx("id")
        i_fy = idx("yield_mpa")
        i_e = idx("e_gpa")
        i_rho = idx("density")
        i_nu = idx("poisson")
        i_alpha = idx("alpha")

        def get_cell(row: List[str], i: Optional[int]) -> str:
            if i is None:
                return ""
            return row[i] if i < len(row) else ""

        def try_float(s: str) -> Optional[float]:
            t = (s or "").strip().replace(",", ".")
            if t == "":
                return None
            try:
                return float(t)
            except ValueError:
                return None

        mats: List[Material] = []
        for r in rows[1:]:
            mid = get_cell(r, i_id).strip()
            if not mid:
                continue

            fy = try_float(get_cell(r, i_fy))
            E = try_float(get_cell(r, i_e))
            if fy is None or E is None:
                # sin fy / E el material no sirve para verificar
                continue

            rho = try_float(get_cell(r, i_rho))
            nu = try_float(get_cell(r, i_nu))
            alpha = try_float(get_cell(r, i_alpha))

            mats.append(Material(
                id=mid,
                yield_strength_MPa=fy,
                elastic_modulus_GPa=E,
                density_kg_m3=rho if rho is not None else 7850.0,
                poissons_ratio=nu if nu is not None else 0.3,
                thermal_expansion=alpha if alpha is not None else 12e-6,
            ))

        if not mats:
            raise ValueError("No se pudieron cargar materiales: faltan columnas o valores de fy / E.")

        mats.sort(key=lambda m: m.id.upper())
        return cls(mats)
