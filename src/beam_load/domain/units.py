from __future__ import annotations

from enum import Enum

G = 9.81              # 1 kgf = 9.81 N
LBF_TO_N = 4.44822    # 1 lbf = 4.44822 N


class ForceUnit(str, Enum):
    N = "N"
    KGF = "kgf"
    LBF = "lbf"

    @classmethod
    def parse(cls, label) -> "ForceUnit":
        """
        Acepta también las etiquetas del formulario / importador:
          - "kg" => kgf
          - "lbs", "lb" => lbf
        Etiqueta desconocida o vacía => N.
        """
        if isinstance(label, ForceUnit):
            return label
        t = str(label or "").strip().lower()
        if t in {"kg", "kgf"}:
            return cls.KGF
        if t in {"lb", "lbs", "lbf"}:
            return cls.LBF
        return cls.N


def to_newtons(value: float, unit) -> float:
    u = ForceUnit.parse(unit)
    if u is ForceUnit.KGF:
        return float(value) * G
    if u is ForceUnit.LBF:
        return float(value) * LBF_TO_N
    return float(value)


def from_newtons(value_N: float, unit) -> float:
    u = ForceUnit.parse(unit)
    if u is ForceUnit.KGF:
        return float(value_N) / G
    if u is ForceUnit.LBF:
        return float(value_N) / LBF_TO_N
    return float(value_N)
