from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class RectangularSection:
    """Sección rectangular maciza. Dimensiones en mm."""
    width_mm: float
    height_mm: float

    @property
    def label(self) -> str:
        return "Rectangular"


@dataclass(frozen=True)
class IBeamSection:
    """
    Doble T simétrica: dos alas iguales + alma.
    height_mm es la altura total (incluye ambas alas).
    """
    height_mm: float
    flange_width_mm: float
    flange_thickness_mm: float
    web_thickness_mm: float

    @property
    def label(self) -> str:
        return "I Beam"


@dataclass(frozen=True)
class CChannelSection:
    """
    Perfil C (U). Mismos campos que la doble T.
    Para Ix se usa la misma fórmula que IBeamSection: el eje x sigue siendo de
    simetría y el corrimiento del centro de corte no interviene en flexión pura.
    """
    height_mm: float
    flange_width_mm: float
    flange_thickness_mm: float
    web_thickness_mm: float

    @property
    def label(self) -> str:
        return "C Channel"


@dataclass(frozen=True)
class CircularSection:
    diameter_mm: float

    @property
    def label(self) -> str:
        return "Circular"


CrossSection = Union[RectangularSection, IBeamSection, CChannelSection, CircularSection]
