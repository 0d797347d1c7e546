from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from beam_statics.utils.conversions import FORCE_UNITS, UNIT_N
from beam_statics.utils.validation import validate_number

POINT_LOAD = "Point Load"
UNIFORM_LOAD = "Uniform Load"
DISTRIBUTED_LOAD = "Distributed Load"
LOAD_KINDS = (POINT_LOAD, UNIFORM_LOAD, DISTRIBUTED_LOAD)


@dataclass(frozen=True)
class Load:
    """
    Carga ingresada por el usuario. Posiciones en mm desde el origen (x=0).

    magnitude según kind:
      - Point Load:        fuerza        [unit]
      - Uniform Load:      por metro     [unit/m]   sobre [start_mm, end_mm]
      - Distributed Load:  por m²        [unit/m²]  sobre area_m2 (viga) o
                                                     load_length_mm x load_width_mm (bastidor)
    """
    kind: str
    magnitude: float
    start_mm: float = 0.0
    unit: str = UNIT_N
    end_mm: Optional[float] = None
    area_m2: Optional[float] = None
    load_length_mm: Optional[float] = None
    load_width_mm: Optional[float] = None
    name: str = ""
    section_id: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or self.kind

    def problems(self) -> List[str]:
        """Invariantes violados (lista vacía si la carga es utilizable)."""
        out: List[str] = []
        if self.kind not in LOAD_KINDS:
            out.append(f"tipo de carga desconocido: {self.kind!r}")
        if (self.unit or UNIT_N) not in FORCE_UNITS:
            out.append(f"unidad desconocida: {self.unit!r}")

        if self.kind == UNIFORM_LOAD:
            if self.end_mm is None:
                out.append("Uniform Load sin end_mm")
            elif validate_number(self.end_mm) <= validate_number(self.start_mm):
                out.append(f"Uniform Load con end_mm ({self.end_mm}) <= start_mm ({self.start_mm})")
        elif self.kind == DISTRIBUTED_LOAD:
            if not (self.has_area or self.has_patch):
                out.append("Distributed Load sin area_m2 ni load_length_mm/load_width_mm válidos (> 0)")
        return out

    @property
    def has_area(self) -> bool:
        return validate_number(self.area_m2) > 0

    @property
    def has_patch(self) -> bool:
        return validate_number(self.load_length_mm) > 0 and validate_number(self.load_width_mm) > 0


@dataclass(frozen=True)
class FrameSection:
    """
    Tramo del bastidor (solo modo Base Frame) con peso de carcasa y carga primaria.
    No se exige que los tramos sean contiguos ni que no se solapen.
    """
    id: str
    start_mm: float
    end_mm: float
    casing_weight: float = 0.0
    casing_weight_unit: str = UNIT_N
    primary_load: float = 0.0
    primary_load_unit: str = UNIT_N
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.id

    def problems(self) -> List[str]:
        out: List[str] = []
        if validate_number(self.end_mm) <= validate_number(self.start_mm):
            out.append(f"end_mm ({self.end_mm}) <= start_mm ({self.start_mm})")
        for u in (self.casing_weight_unit, self.primary_load_unit):
            if (u or UNIT_N) not in FORCE_UNITS:
                out.append(f"unidad desconocida: {u!r}")
        return out
