from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
from matplotlib.figure import Figure

from beam_statics.domain.results import DiagramSeries
from beam_statics.view.style import DiagramStyle

logger = logging.getLogger(__name__)


# -------------------------
# Helpers formato
# -------------------------
def _fmt_plain(v: float, decimals: int = 2) -> str:
    """Formato fijo (sin notación científica) y recorte de ceros."""
    s = f"{float(v):.{decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _clamp(v: float, lo: float, hi: float) -> float:
    return float(min(max(v, lo), hi))


# -------------------------
# Extremos locales
# -------------------------
def find_local_extrema(y: np.ndarray, *, tol_slope: float) -> List[Tuple[str, int]]:
    """
    Detecta extremos locales por cambios de signo en dy, ignorando mesetas (dy≈0).
    Devuelve lista de ("max"/"min", idx_en_y).
    """
    n = len(y)
    if n < 5:
        return []

    dy = np.diff(y)
    s = np.zeros_like(dy, dtype=int)
    s[dy > +tol_slope] = +1
    s[dy < -tol_slope] = -1

    nz = np.nonzero(s)[0]
    if nz.size < 2:
        return []

    s_nz = s[nz]
    out: List[Tuple[str, int]] = []

    # + a - => máximo; - a + => mínimo
    for k in range(1, len(s_nz)):
        if s_nz[k - 1] > 0 and s_nz[k] < 0:
            out.append(("max", int(nz[k - 1] + 1)))
        elif s_nz[k - 1] < 0 and s_nz[k] > 0:
            out.append(("min", int(nz[k - 1] + 1)))

    return out


def select_extrema(
    x: np.ndarray,
    y: np.ndarray,
    *,
    min_dx: float,
    rel_min: float = 0.01,
) -> List[Tuple[str, int]]:
    """
    Extremos locales + globales, sin valores ≈0 y separados al menos min_dx en x.
    Prioriza por |y| descendente; devuelve ordenado por x.
    """
    if len(x) == 0:
        return []

    max_abs = max(float(np.max(np.abs(y))), 1e-12)
    cands = find_local_extrema(y, tol_slope=1e-6 * max_abs)
    cands.extend([("max", int(np.argmax(y))), ("min", int(np.argmin(y)))])

    seen: Set[int] = set()
    uniq: List[Tuple[str, int]] = []
    for kind, i in cands:
        if i in seen:
            continue
        seen.add(i)
        uniq.append((kind, i))

    uniq = [(k, i) for (k, i) in uniq if abs(float(y[i])) >= rel_min * max_abs]
    uniq.sort(key=lambda ki: abs(float(y[ki[1]])), reverse=True)

    picked: List[Tuple[str, int]] = []
    picked_x: List[float] = []
    for kind, i in uniq:
        xi = float(x[i])
        if all(abs(xi - xj) >= min_dx for xj in picked_x):
            picked.append((kind, i))
            picked_x.append(xi)

    picked.sort(key=lambda ki: float(x[ki[1]]))
    return picked


def _annotate_extrema(ax, x: np.ndarray, y: np.ndarray, unit: str, style: DiagramStyle):
    x_min, x_max = sorted(ax.get_xlim())
    x_span = max(1.0, float(x_max - x_min))
    picked = select_extrema(x, y, min_dx=0.05 * x_span)
    if not picked:
        return

    y_min, y_max = sorted(ax.get_ylim())
    y_span = max(1e-12, float(y_max - y_min))
    mx = 0.03 * x_span
    my = 0.03 * y_span

    for kind, i in picked:
        xi = float(x[i])
        yi = float(y[i])
        ax.scatter([xi], [yi], s=14, zorder=6)

        if kind == "max":
            ty, va = yi + my, "bottom"
        else:
            ty, va = yi - my, "top"

        tx = _clamp(xi, x_min + mx, x_max - mx)
        ty = _clamp(ty, y_min + my, y_max - my)
        ax.text(tx, ty, f"{_fmt_plain(yi, 2)} {unit}", ha="center", va=va, fontsize=style.font_size, zorder=7)


# -------------------------
# Render
# -------------------------
def _render(ax, x, y, *, color: str, ylabel: str, title: str, unit: str,
            style: DiagramStyle, y_zoom: float, invert: bool = False):
    ax.clear()
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    ax.plot(x, y, color=color, linewidth=style.line_lw)
    ax.fill_between(x, 0.0, y, color=color, alpha=0.12)
    ax.axhline(0.0, linewidth=style.axis_lw, color="black")

    if x.size:
        ax.set_xlim(float(x[0]), float(x[-1]) if x[-1] > x[0] else float(x[0]) + 1.0)

    ymax = float(np.max(np.abs(y))) if y.size else 1.0
    ymax = max(ymax, 1e-9)
    ax.set_ylim(-ymax * y_zoom * style.y_pad, ymax * y_zoom * style.y_pad)
    if invert:
        # flecha + hacia abajo: se dibuja hacia abajo
        ax.invert_yaxis()

    _annotate_extrema(ax, x, y, unit, style)

    ax.set_ylabel(ylabel)
    ax.set_xlabel("x [mm]")
    ax.set_title(title)
    ax.grid(True, alpha=style.grid_alpha)


def render_shear(ax, series: DiagramSeries, style: Optional[DiagramStyle] = None, y_zoom: float = 1.0):
    st = style or DiagramStyle()
    _render(ax, series.x_mm, series.shear_n, color=st.shear_color, ylabel="V [N]",
            title="Diagrama de Corte V(x)", unit="N", style=st, y_zoom=y_zoom)


def render_moment(ax, series: DiagramSeries, style: Optional[DiagramStyle] = None, y_zoom: float = 1.0):
    st = style or DiagramStyle()
    _render(ax, series.x_mm, series.moment_nm, color=st.moment_color, ylabel="M [N·m]",
            title="Diagrama de Momento Flector M(x)", unit="N·m", style=st, y_zoom=y_zoom)


def render_deflection(ax, series: DiagramSeries, style: Optional[DiagramStyle] = None, y_zoom: float = 1.0):
    st = style or DiagramStyle()
    _render(ax, series.x_mm, series.deflection_mm, color=st.deflection_color, ylabel="δ [mm]",
            title="Elástica δ(x)", unit="mm", style=st, y_zoom=y_zoom, invert=True)


def save_diagram_images(
    series: DiagramSeries,
    out_dir: str,
    style: Optional[DiagramStyle] = None,
    prefix: str = "diagrama",
) -> Dict[str, str]:
    """
    Guarda V, M y δ como PNG (sin pyplot ni Qt).
    Devuelve {"v": path, "m": path, "d": path}, las claves que usa el reporte PDF.
    """
    st = style or DiagramStyle()
    os.makedirs(out_dir, exist_ok=True)

    out: Dict[str, str] = {}
    for key, fn in (("v", render_shear), ("m", render_moment), ("d", render_deflection)):
        fig = Figure(figsize=(st.fig_w_in, st.fig_h_in), dpi=st.dpi)
        ax = fig.add_subplot(111)
        fn(ax, series, st)
        fig.tight_layout()
        path = os.path.join(out_dir, f"{prefix}_{key}.png")
        fig.savefig(path, dpi=st.dpi)
        out[key] = path
        logger.info("Imagen guardada: %s", path)

    return out
