import os
import sys

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
SRC = os.path.abspath(os.path.join(THIS_DIR, "..", "src"))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from beam_statics.domain.cases import AnalysisCase
from beam_statics.domain.loads import POINT_LOAD, UNIFORM_LOAD, Load
from beam_statics.engine.solver import solve
from beam_statics.sections.shapes import RectangularSection

case = AnalysisCase(
    cross_section=RectangularSection(width_mm=100.0, height_mm=218.0),
    beam_length_mm=2000.0,
    left_support_mm=0.0,
    right_support_mm=2000.0,
    loads=(
        Load(POINT_LOAD, 1000.0, start_mm=500.0, name="P1"),             # down+
        Load(UNIFORM_LOAD, 200.0, start_mm=1000.0, end_mm=2000.0, name="q"),  # N/m, down+
    ),
)

res, series = solve(case)
print("R_left  =", res.R_left_n)
print("R_right =", res.R_right_n)
print("Vmax    =", res.max_shear_force_n)
print("Mmax    =", res.max_bending_moment_nm)
print("σmax    =", res.max_normal_stress_mpa, "MPa")
print("FS      =", res.safety_factor)
print("δmax    =", res.max_deflection_m * 1000.0, "mm")
print("V(0) =", series.shear_n[0], " M(L) =", series.moment_nm[-1])
for n in res.notes:
    print("nota:", n)
