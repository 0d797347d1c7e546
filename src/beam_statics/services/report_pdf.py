# path: src/beam_statics/services/report_pdf.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from beam_statics.domain.cases import AnalysisCase
from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, UNIFORM_LOAD, Load
from beam_statics.domain.results import Results
from beam_statics.materials.material_db import MaterialDB
from beam_statics.sections.shapes import (
    CChannelSection,
    CircularSection,
    CrossSection,
    IBeamSection,
    RectangularSection,
)
from beam_statics.utils.conversions import GRAVITY

logger = logging.getLogger(__name__)

# Nota: este módulo no calcula nada. Recibe el caso, los Results ya calculados
# y paths a imágenes ya generadas (claves "v", "m", "d").


@dataclass(frozen=True)
class ReportHeader:
    title: str = "Memoria de cálculo estructural"
    project: str = ""
    author: str = ""
    date: Optional[datetime] = None
    revision: str = "A"


def export_report_pdf(
    out_pdf_path: str,
    header: ReportHeader,
    case: AnalysisCase,
    results: Results,
    materials: Optional[MaterialDB] = None,
    images: Optional[Dict[str, str]] = None,
    page_size=pagesizes.A4,
) -> None:
    """Genera el reporte de cálculo en PDF (A4)."""
    imgs = _normalize_images_dict(images)
    db = materials if materials is not None else MaterialDB.standard()

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))
    styles.add(ParagraphStyle(name="MonoSmall", parent=styles["BodyText"], fontName="Courier", fontSize=8, leading=10))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.title,
    )

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(escape(header.title), styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    date = header.date or datetime.now()
    meta_rows = [
        ["Proyecto:", header.project or "-"],
        ["Autor:", header.author or "-"],
        ["Fecha:", date.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
        ["Tipo de análisis:", case.mode],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    story.append(Paragraph("Método", styles["Heading2"]))
    base = [
        "Material elástico lineal, pequeñas deformaciones, barras prismáticas Euler-Bernoulli, cargas cuasiestáticas.",
        "Las cargas se convierten a newtons (kg x 9.81, lbs x 4.44822) antes del cálculo.",
        "Viga simple: reacciones por estática, V(x) y M(x) por superposición, flecha por fórmulas cerradas de la elástica.",
        "Bastidor: reacciones de esquina por la regla del rectángulo opuesto; la barra más larga toma "
        "1/4 de la carga total como uniforme equivalente.",
        "Tensiones: σ = M / S, τ = 1.5 V / A, factor de seguridad = fy / σ.",
    ]
    story.extend(_bullets(base, styles))
    story.append(Spacer(1, 3 * mm))

    # ----------------- Datos -----------------
    story.append(Paragraph("Datos de entrada", styles["Heading2"]))
    if case.is_frame:
        dims = [
            ["Largo del bastidor [mm]", _f(case.frame_length_mm, 1)],
            ["Ancho del bastidor [mm]", _f(case.frame_width_mm, 1)],
        ]
    else:
        dims = [
            ["Largo de la viga [mm]", _f(case.beam_length_mm, 1)],
            ["Apoyo izquierdo [mm]", _f(case.left_support_mm, 1)],
            ["Apoyo derecho [mm]", _f(case.right_support_mm, 1)],
            ["Vano [mm]", _f(case.right_support_mm - case.left_support_mm, 1)],
        ]
    dims.append(["Sección transversal", describe_cross_section(case.cross_section)])

    mat = db.get(case.material_name)
    dims.append(["Material", case.material_name])
    if mat is not None:
        dims += [
            ["Fluencia fy [MPa]", _f(mat.yield_strength_mpa, 1)],
            ["Módulo elástico E [GPa]", _f(mat.elastic_modulus_gpa, 1)],
            ["Densidad [kg/m³]", _f(case.beam_density_kgm3 if case.beam_density_kgm3 is not None else mat.density_kgm3, 0)],
        ]
    t = Table(dims, colWidths=[55 * mm, 125 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Cargas aplicadas", styles["Heading3"]))
    lrows = [["#", "Tipo", "Descripción"]]
    for k, ld in enumerate(case.loads, start=1):
        lrows.append([str(k), ld.kind, describe_load(ld)])
    if len(lrows) == 1:
        lrows.append(["-", "-", "Sin cargas"])
    t = Table(lrows, colWidths=[12 * mm, 38 * mm, 130 * mm], repeatRows=1)
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    if case.is_frame and case.sections:
        story.append(Paragraph("Tramos del bastidor", styles["Heading3"]))
        srows = [["Tramo", "Inicio [mm]", "Fin [mm]", "Carcasa", "Carga primaria"]]
        for sec in case.sections:
            srows.append([
                sec.label,
                _f(sec.start_mm, 1),
                _f(sec.end_mm, 1),
                f"{_f(sec.casing_weight, 2)} {sec.casing_weight_unit}",
                f"{_f(sec.primary_load, 2)} {sec.primary_load_unit}",
            ])
        t = Table(srows, repeatRows=1)
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 3 * mm))

    # ----------------- Resultados -----------------
    story.append(PageBreak())
    story.append(Paragraph("Resultados", styles["Heading2"]))
    rrows = [
        ["Parámetro", "Valor", "Unidad"],
        ["Carga total aplicada", _f(results.total_applied_load_n, 2), "N"],
        ["Carga por barra", _f(results.load_per_beam_n, 2), "N"],
        ["Corte máximo", _f(results.max_shear_force_n, 2), "N"],
        ["Momento flector máximo", _f(results.max_bending_moment_nm, 2), "N·m"],
        ["Tensión normal máxima", _f(results.max_normal_stress_mpa, 2), "MPa"],
        ["Tensión de corte máxima", _f(results.max_shear_stress_mpa, 2), "MPa"],
        ["Factor de seguridad", _f(results.safety_factor, 2), "-"],
        ["Flecha máxima", _f(results.max_deflection_m * 1000.0, 4), "mm"],
        ["Momento de inercia", f"{results.moment_of_inertia_m4:.6e}", "m^4"],
        ["Módulo resistente", f"{results.section_modulus_m3:.6e}", "m^3"],
        ["Peso propio", _f(results.frame_weight_n, 2), "N"],
    ]
    if case.is_frame:
        rrows.append(["Reacción máxima de esquina", _f(results.corner_reaction_force_n, 2), "N"])
    else:
        rrows.append(["Reacción apoyo izquierdo", _f(results.R_left_n, 2), "N"])
        rrows.append(["Reacción apoyo derecho", _f(results.R_right_n, 2), "N"])
    t = Table(rrows, colWidths=[80 * mm, 60 * mm, 40 * mm])
    t.setStyle(_grid_table_style(header_rows=1))
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    if case.is_frame:
        story.append(Paragraph("Reacciones de esquina", styles["Heading3"]))
        cr = results.corner_reactions
        crows = [
            ["R1 (0, 0)", "R2 (L, 0)", "R3 (0, W)", "R4 (L, W)"],
            [_f(cr.R1, 2), _f(cr.R2, 2), _f(cr.R3, 2), _f(cr.R4, 2)],
            [_f(cr.R1 / GRAVITY, 1) + " kgf", _f(cr.R2 / GRAVITY, 1) + " kgf",
             _f(cr.R3 / GRAVITY, 1) + " kgf", _f(cr.R4 / GRAVITY, 1) + " kgf"],
        ]
        t = Table(crows, colWidths=[45 * mm] * 4)
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 3 * mm))

    if results.notes:
        story.append(Paragraph("Notas", styles["Heading3"]))
        story.extend(_bullets(list(results.notes), styles))

    # ----------------- Figuras -----------------
    story.append(PageBreak())
    story.append(Paragraph("Diagramas", styles["Heading2"]))
    _append_figure(story, styles, "v", "Diagrama de corte V(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "m", "Diagrama de momento flector M(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "d", "Elástica δ(x)", imgs, max_w=180 * mm, max_h=80 * mm)

    doc.build(story)
    logger.info("Reporte PDF generado: %s", out_pdf_path)


def describe_cross_section(cs: CrossSection) -> str:
    if isinstance(cs, RectangularSection):
        return f"Rectangular {_f(cs.width_mm, 1)} x {_f(cs.height_mm, 1)} mm"
    if isinstance(cs, (IBeamSection, CChannelSection)):
        return (f"{cs.label}: h={_f(cs.height_mm, 1)}, bf={_f(cs.flange_width_mm, 1)}, "
                f"tf={_f(cs.flange_thickness_mm, 1)}, tw={_f(cs.web_thickness_mm, 1)} mm")
    if isinstance(cs, CircularSection):
        return f"Circular Ø{_f(cs.diameter_mm, 1)} mm"
    return type(cs).__name__


def describe_load(ld: Load) -> str:
    name = f"{ld.name}: " if ld.name else ""
    if ld.kind == POINT_LOAD:
        return f"{name}{_f(ld.magnitude, 2)} {ld.unit} en x={_f(ld.start_mm, 1)} mm"
    if ld.kind == UNIFORM_LOAD:
        end = "-" if ld.end_mm is None else _f(ld.end_mm, 1)
        return f"{name}{_f(ld.magnitude, 2)} {ld.unit}/m de {_f(ld.start_mm, 1)} a {end} mm"
    if ld.kind == DISTRIBUTED_LOAD:
        if ld.has_patch:
            patch = f"{_f(ld.load_length_mm, 1)} x {_f(ld.load_width_mm, 1)} mm"
        else:
            patch = f"{_f(ld.area_m2 or 0.0, 3)} m²"
        return f"{name}{_f(ld.magnitude, 2)} {ld.unit}/m² sobre {patch} desde x={_f(ld.start_mm, 1)} mm"
    return f"{name}{ld.kind}"


# ----------------- helpers -----------------

def _normalize_images_dict(images: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not images:
        return {}
    out: Dict[str, str] = {}
    for k, v in images.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if not kk or not vv:
            continue
        out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(Sin imagen: '{key}' no disponible o no existe en disco)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _bullets(items: List[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {escape(it)}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
