from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from beam_statics.engine.settings import DEFAULT_SETTINGS, SolverSettings
from beam_statics.sections.shapes import (
    CChannelSection,
    CircularSection,
    CrossSection,
    IBeamSection,
    RectangularSection,
)
from beam_statics.utils.conversions import mm_to_m
from beam_statics.utils.validation import validate_positive


def _rect_Ix_about_centroid(b: float, h: float) -> float:
    """Ix de un rectángulo b (ancho) x h (alto), respecto a su centroide (eje horizontal)."""
    return (b * h**3) / 12.0


@dataclass(frozen=True)
class SectionProperties:
    area_m2: float
    inertia_m4: float
    modulus_m3: float


def rectangular_props(w: float, h: float) -> SectionProperties:
    I = _rect_Ix_about_centroid(w, h)
    return SectionProperties(area_m2=w * h, inertia_m4=I, modulus_m3=I / (h / 2.0))


def i_beam_props(h: float, bf: float, tf: float, tw: float) -> SectionProperties:
    """
    Doble T / C con alas iguales (todas las dimensiones en m).

    Ix por teorema de ejes paralelos:
      - ala: bf*tf³/12 + bf*tf*d²,  d = (h - tf)/2
      - alma: tw*(h - 2tf)³/12
    """
    h_web = h - 2.0 * tf
    area = 2.0 * bf * tf + h_web * tw

    d = (h - tf) / 2.0
    I_flange = _rect_Ix_about_centroid(bf, tf) + bf * tf * d**2
    I_web = _rect_Ix_about_centroid(tw, h_web)
    I = 2.0 * I_flange + I_web

    return SectionProperties(area_m2=area, inertia_m4=I, modulus_m3=I / (h / 2.0))


def circular_props(d: float) -> SectionProperties:
    area = math.pi * (d / 2.0) ** 2
    I = math.pi * d**4 / 64.0
    return SectionProperties(area_m2=area, inertia_m4=I, modulus_m3=I / (d / 2.0))


def section_properties(section: CrossSection, settings: Optional[SolverSettings] = None) -> SectionProperties:
    """
    Propiedades de la sección a partir de sus dimensiones en mm.
    Cada dimensión pasa por validate_positive (con el valor por defecto de settings)
    y se convierte a metros antes de aplicar las fórmulas.
    """
    s = settings or DEFAULT_SETTINGS

    if isinstance(section, RectangularSection):
        w = mm_to_m(validate_positive(section.width_mm, s.width_mm))
        h = mm_to_m(validate_positive(section.height_mm, s.height_mm))
        return rectangular_props(w, h)

    if isinstance(section, (IBeamSection, CChannelSection)):
        h = mm_to_m(validate_positive(section.height_mm, s.height_mm))
        bf = mm_to_m(validate_positive(section.flange_width_mm, s.flange_width_mm))
        tf = mm_to_m(validate_positive(section.flange_thickness_mm, s.flange_thickness_mm))
        tw = mm_to_m(validate_positive(section.web_thickness_mm, s.web_thickness_mm))
        return i_beam_props(h, bf, tf, tw)

    if isinstance(section, CircularSection):
        d = mm_to_m(validate_positive(section.diameter_mm, s.diameter_mm))
        return circular_props(d)

    raise TypeError(f"Tipo de sección no soportado: {type(section).__name__}")
