# path: scripts/run_report.py
import os
import sys
import traceback
from datetime import datetime

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import matplotlib
matplotlib.use("Agg")

from beam_statics.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from beam_statics.domain.cases import BASE_FRAME, AnalysisCase
from beam_statics.domain.loads import DISTRIBUTED_LOAD, POINT_LOAD, FrameSection, Load
from beam_statics.engine.solver import solve
from beam_statics.materials.material_db import MaterialDB, default_materials_path
from beam_statics.sections.shapes import IBeamSection
from beam_statics.services.report_pdf import ReportHeader, export_report_pdf
from beam_statics.view.renderer_diagrams import save_diagram_images


def main(out_dir: str = "out"):
    materials = MaterialDB.from_txt(default_materials_path())

    case = AnalysisCase(
        mode=BASE_FRAME,
        cross_section=IBeamSection(height_mm=218.0, flange_width_mm=66.0, flange_thickness_mm=3.0, web_thickness_mm=4.5),
        material_name="ASTM A36 Structural Steel",
        frame_length_mm=3000.0,
        frame_width_mm=1200.0,
        loads=(
            Load(POINT_LOAD, 150.0, start_mm=800.0, unit="kg", name="Motor"),
            Load(DISTRIBUTED_LOAD, 500.0, start_mm=1800.0, load_length_mm=900.0, load_width_mm=600.0, name="Tanque"),
        ),
        sections=(
            FrameSection("S1", 0.0, 1500.0, casing_weight=40.0, casing_weight_unit="kg", primary_load=2000.0),
            FrameSection("S2", 1500.0, 3000.0, casing_weight=35.0, casing_weight_unit="kg"),
        ),
    )

    results, series = solve(case, materials)
    for note in results.notes:
        logger.warning("Nota: %s", note)

    images = save_diagram_images(series, out_dir, prefix="bastidor")
    pdf_path = os.path.join(out_dir, "reporte_bastidor.pdf")
    header = ReportHeader(title="Memoria de cálculo: bastidor", project="Demo", author="-", date=datetime.now())
    export_report_pdf(pdf_path, header, case, results, materials=materials, images=images)
    return pdf_path


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "out")
