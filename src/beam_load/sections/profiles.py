from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union


def _rect_Ix_about_centroid(b: float, h: float) -> float:
    """Ix de un rectángulo b (ancho) x h (alto), respecto a su centroide (eje horizontal)."""
    return (b * h**3) / 12.0


@dataclass(frozen=True)
class SectionProperties:
    area_m2: float
    moment_of_inertia_m4: float
    section_modulus_m3: float


def _flanged_props(h: float, bf: float, tf: float, tw: float) -> SectionProperties:
    """
    Doble T idealizada: 2 alas iguales + alma, flexión respecto al eje horizontal.
    Dimensiones en m.
    """
    h_web = h - 2.0 * tf
    A = 2.0 * bf * tf + h_web * tw

    # alas por teorema de ejes paralelos (simétricas)
    I_flange = _rect_Ix_about_centroid(bf, tf) + bf * tf * ((h - tf) / 2.0) ** 2
    I_web = _rect_Ix_about_centroid(tw, h_web)
    I = 2.0 * I_flange + I_web

    return SectionProperties(area_m2=A, moment_of_inertia_m4=I, section_modulus_m3=I / (h / 2.0))


@dataclass(frozen=True)
class RectangularProfile:
    width_mm: float
    height_mm: float

    kind = "Rectangular"

    def props_m(self) -> SectionProperties:
        w = self.width_mm / 1000.0
        h = self.height_mm / 1000.0
        I = _rect_Ix_about_centroid(w, h)
        return SectionProperties(area_m2=w * h, moment_of_inertia_m4=I, section_modulus_m3=I / (h / 2.0))


@dataclass(frozen=True)
class IBeamProfile:
    height_mm: float
    flange_width_mm: float
    flange_thickness_mm: float
    web_thickness_mm: float

    kind = "I Beam"

    def props_m(self) -> SectionProperties:
        return _flanged_props(
            self.height_mm / 1000.0,
            self.flange_width_mm / 1000.0,
            self.flange_thickness_mm / 1000.0,
            self.web_thickness_mm / 1000.0,
        )


@dataclass(frozen=True)
class CChannelProfile:
    """
    Canal C. Para flexión respecto al eje horizontal se usa la misma
    descomposición alas + alma que la doble T (simplificación conocida).
    """
    height_mm: float
    flange_width_mm: float
    flange_thickness_mm: float
    web_thickness_mm: float

    kind = "C Channel"

    def props_m(self) -> SectionProperties:
        return _flanged_props(
            self.height_mm / 1000.0,
            self.flange_width_mm / 1000.0,
            self.flange_thickness_mm / 1000.0,
            self.web_thickness_mm / 1000.0,
        )


@dataclass(frozen=True)
class CircularProfile:
    diameter_mm: float

    kind = "Circular"

    def props_m(self) -> SectionProperties:
        d = self.diameter_mm / 1000.0
        I = math.pi * d**4 / 64.0
        return SectionProperties(
            area_m2=math.pi * (d / 2.0) ** 2,
            moment_of_inertia_m4=I,
            section_modulus_m3=I / (d / 2.0),
        )


CrossSectionProfile = Union[RectangularProfile, IBeamProfile, CChannelProfile, CircularProfile]


def section_properties(profile: CrossSectionProfile) -> SectionProperties:
    """Las dimensiones deben venir normalizadas (> 0); acá no se revalida."""
    return profile.props_m()
