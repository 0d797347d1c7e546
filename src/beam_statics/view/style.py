from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class DiagramStyle:
    line_lw: float = 1.6
    axis_lw: float = 1.0
    grid_alpha: float = 0.25

    shear_color: str = "tab:blue"
    moment_color: str = "tab:red"
    deflection_color: str = "tab:green"

    # Margen vertical sobre el máximo |y|
    y_pad: float = 1.15

    # Exportación PNG
    fig_w_in: float = 8.0
    fig_h_in: float = 3.2
    dpi: int = 150

    font_size: int = 8
