import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
SRC = os.path.abspath(os.path.join(THIS_DIR, "..", "src"))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from beam_statics.domain.cases import BASE_FRAME, AnalysisCase
from beam_statics.domain.loads import POINT_LOAD, FrameSection, Load
from beam_statics.engine.solver import solve
from beam_statics.sections.shapes import CChannelSection

case = AnalysisCase(
    mode=BASE_FRAME,
    cross_section=CChannelSection(height_mm=100.0, flange_width_mm=50.0, flange_thickness_mm=6.0, web_thickness_mm=5.0),
    frame_length_mm=2000.0,
    frame_width_mm=1000.0,
    loads=(Load(POINT_LOAD, 400.0, start_mm=500.0, unit="kg", name="Equipo"),),
    sections=(FrameSection("S1", 1000.0, 2000.0, casing_weight=100.0, primary_load=1500.0),),
)

res, series = solve(case)
R = res.corner_reactions
print("R1..R4  =", R.as_tuple(), " (suma", R.total, ")")
print("Rmax    =", res.corner_reaction_force_n)
print("total   =", res.total_applied_load_n, " peso propio =", res.frame_weight_n)
print("P/barra =", res.load_per_beam_n)
print("Mmax    =", res.max_bending_moment_nm, " FS =", res.safety_factor)
print("muestras:", len(series), " largo:", series.length_mm, "mm")
