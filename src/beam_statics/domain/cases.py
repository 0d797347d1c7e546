from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from beam_statics.domain.loads import FrameSection, Load
from beam_statics.sections.shapes import CrossSection, RectangularSection

SIMPLE_BEAM = "Simple Beam"
BASE_FRAME = "Base Frame"
ANALYSIS_MODES = (SIMPLE_BEAM, BASE_FRAME)


@dataclass(frozen=True)
class AnalysisCase:
    """
    Instantánea completa de entradas para un cálculo.
      - Simple Beam: beam_length_mm, left/right_support_mm
      - Base Frame:  frame_length_mm x frame_width_mm, apoyos en las 4 esquinas
    """
    mode: str = SIMPLE_BEAM
    cross_section: CrossSection = RectangularSection(width_mm=100.0, height_mm=218.0)
    material_name: str = "ASTM A36 Structural Steel"

    loads: Tuple[Load, ...] = ()
    sections: Tuple[FrameSection, ...] = ()  # solo Base Frame

    # Simple Beam
    beam_length_mm: float = 1000.0
    left_support_mm: float = 0.0
    right_support_mm: float = 1000.0

    # Base Frame
    frame_length_mm: float = 1000.0
    frame_width_mm: float = 1000.0

    # Si es None se usa la densidad del material
    beam_density_kgm3: Optional[float] = None

    @property
    def is_frame(self) -> bool:
        return self.mode == BASE_FRAME
