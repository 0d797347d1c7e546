from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from beam_statics.engine.normalize import (
    NormalizedBeamLoads,
    NormalizedPointLoad,
    NormalizedUniformLoad,
)
from beam_statics.engine.settings import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)


def _clip_to_span(a0: float, a1: float, x1: float, x2: float) -> Optional[Tuple[float, float]]:
    x1c = max(a0, min(a1, x1))
    x2c = max(a0, min(a1, x2))
    if x2c <= x1c:
        return None
    return x1c, x2c


def support_reactions(
    a0: float,
    a1: float,
    point_loads: Sequence[NormalizedPointLoad],
    uniform_loads: Sequence[NormalizedUniformLoad],
) -> Tuple[float, float]:
    """
    Reacciones (R1 en a0, R2 en a1) de una viga simplemente apoyada, + hacia arriba.

      P en x:            R1 += P*b/span,  R2 += P*a/span   (a = x - a0, b = a1 - x)
      w en [x1, x2]:     se recorta a [a0, a1] y se reemplaza por su resultante en el centroide

    Con span <= 0 no se acumula nada.
    """
    span = a1 - a0
    R1 = 0.0
    R2 = 0.0
    if span <= 0:
        return R1, R2

    for p in point_loads:
        a = p.x_m - a0
        b = a1 - p.x_m
        R1 += p.P_n * b / span
        R2 += p.P_n * a / span

    for u in uniform_loads:
        clipped = _clip_to_span(a0, a1, u.x1_m, u.x2_m)
        if clipped is None:
            continue
        x1, x2 = clipped
        F = u.w_npm * (x2 - x1)
        xc = 0.5 * (x1 + x2)
        R1 += F * (a1 - xc) / span
        R2 += F * (xc - a0) / span

    return R1, R2


@dataclass(frozen=True)
class SimpleBeamModel:
    """
    Viga simplemente apoyada en a0 y a1, evaluada por superposición.

    Convención:
    - Cargas + hacia abajo (P_n, w_npm), reacciones + hacia arriba
    - M(x) + en flexión positiva (sagging)
    - δ(x) + hacia abajo
    Unidades: m, N, N·m, Pa, m⁴.
    """
    beam_length_m: float
    a0_m: float
    a1_m: float
    R1_n: float
    R2_n: float

    pf_x: np.ndarray          # posición de puntuales
    pf_P: np.ndarray          # P [N]

    ul_a: np.ndarray          # inicio uniforme (sin recortar)
    ul_b: np.ndarray          # fin uniforme (sin recortar)
    ul_w: np.ndarray          # w [N/m]

    E_pa: float
    I_m4: float
    tol: float = 1e-9

    @property
    def span_m(self) -> float:
        return self.a1_m - self.a0_m

    @property
    def max_shear_n(self) -> float:
        return max(abs(self.R1_n), abs(self.R2_n))

    def eval_V(self, x: float) -> float:
        return float(self.eval_V_array(np.asarray([x], dtype=float))[0])

    def eval_M(self, x: float) -> float:
        return float(self.eval_M_array(np.asarray([x], dtype=float))[0])

    def eval_delta(self, x: float) -> float:
        return float(self.eval_delta_array(np.asarray([x], dtype=float))[0])

    # -------------------------
    # Evaluadores vectorizados
    # -------------------------
    def eval_V_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        V = np.zeros_like(x, dtype=float)

        V += self.R1_n * (x >= self.a0_m)
        V += self.R2_n * (x > self.a1_m)

        # puntuales: la carga actúa a la derecha de xi
        if self.pf_x.size:
            H = (x[:, None] > self.pf_x[None, :]).astype(float)
            V -= H @ self.pf_P

        # uniformes: w * largo cargado hasta x
        if self.ul_a.size:
            a = self.ul_a[None, :]
            b = self.ul_b[None, :]
            ll = np.clip(x[:, None] - a, 0.0, b - a)
            V -= np.sum(self.ul_w[None, :] * ll, axis=1)

        return V

    def eval_M_array(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        M = np.zeros_like(x, dtype=float)

        M += np.where(x >= self.a0_m, self.R1_n * (x - self.a0_m), 0.0)
        M += np.where(x >= self.a1_m, self.R2_n * (x - self.a1_m), 0.0)

        if self.pf_x.size:
            dx = x[:, None] - self.pf_x[None, :]
            M -= np.sum(self.pf_P[None, :] * dx * (dx > 0.0), axis=1)

        # uniformes: resultante del tramo cargado [a, a+ll] en su centroide
        if self.ul_a.size:
            a = self.ul_a[None, :]
            b = self.ul_b[None, :]
            xcol = x[:, None]
            ll = np.minimum(xcol - a, b - a)
            xc = a + 0.5 * ll
            M -= np.sum(self.ul_w[None, :] * ll * (xcol - xc) * (xcol > a), axis=1)

        return M

    def eval_delta_array(self, x: np.ndarray) -> np.ndarray:
        """
        Elástica por superposición de fórmulas cerradas (coordenada local xs = x - a0).
        Fuera de [a0, a1] se toma δ = 0 (voladizos no modelados).
        """
        x = np.asarray(x, dtype=float)
        d = np.zeros_like(x, dtype=float)

        L = self.span_m
        E = float(self.E_pa)
        I = float(self.I_m4)
        if E <= 0 or I <= 0 or L <= self.tol:
            return d

        xs = x - self.a0_m
        inside = (xs >= -self.tol) & (xs <= L + self.tol)
        xs = np.clip(xs, 0.0, L)
        xcol = xs[:, None]

        # puntuales dentro del vano
        if self.pf_x.size:
            a = self.pf_x - self.a0_m
            valid = (a >= -self.tol) & (a <= L + self.tol)
            a = np.clip(a, 0.0, L)[None, :]
            b = L - a
            P = self.pf_P[None, :]

            d_left = P * b * xcol * (L * L - b * b - xcol * xcol) / (6.0 * L * E * I)
            d_right = P * a * (L - xcol) * (2.0 * L * xcol - xcol * xcol - a * a) / (6.0 * L * E * I)
            d += np.sum(np.where(xcol <= a, d_left, d_right) * valid[None, :], axis=1)

        # uniformes, recortadas al vano
        if self.ul_a.size:
            s = np.clip(self.ul_a - self.a0_m, 0.0, L)
            e = np.clip(self.ul_b - self.a0_m, 0.0, L)
            valid = e > s + self.tol
            full = (s <= self.tol) & (e >= L - self.tol)

            w = self.ul_w[None, :]
            s = s[None, :]
            e = e[None, :]

            # tramo completo: w x (L³ - 2Lx² + x³) / 24EI
            d_full = w * xcol * (L**3 - 2.0 * L * xcol**2 + xcol**3) / (24.0 * E * I)

            # tramo parcial: integral de la fórmula de la puntual sobre a ∈ [s, e]
            q = np.clip(xcol, s, e)
            t_left = (L - xcol) * ((2.0 * L * xcol - xcol**2) * (q**2 - s**2) / 2.0 - (q**4 - s**4) / 4.0)
            bl = L - e
            bh = L - q
            t_right = xcol * ((L * L - xcol**2) * (bh**2 - bl**2) / 2.0 - (bh**4 - bl**4) / 4.0)
            d_part = w * (t_left + t_right) / (6.0 * L * E * I)

            d += np.sum(np.where(full, d_full, d_part) * valid[None, :], axis=1)

        return d * inside

    # -------------------------
    # Posiciones críticas
    # -------------------------
    def _breakpoints(self) -> np.ndarray:
        xs = [0.0, float(self.beam_length_m), float(self.a0_m), float(self.a1_m)]
        xs += list(self.pf_x.astype(float))
        xs += list(self.ul_a.astype(float))
        xs += list(self.ul_b.astype(float))
        xs = np.clip(np.array(xs, dtype=float), 0.0, float(self.beam_length_m))
        return np.unique(xs)

    def _zero_shear_points(self, bps: np.ndarray) -> List[float]:
        """En cada tramo entre breakpoints V es lineal: raíz por interpolación."""
        out: List[float] = []
        eps = 1e-9 * max(1.0, float(self.beam_length_m))
        for i in range(len(bps) - 1):
            p = float(bps[i]) + eps
            q = float(bps[i + 1]) - eps
            if q <= p:
                continue
            Vp, Vq = self.eval_V_array(np.array([p, q], dtype=float))
            if Vp * Vq < 0.0:
                out.append(p + (q - p) * Vp / (Vp - Vq))
        return out

    def sample_positions(self, n: int) -> np.ndarray:
        return np.linspace(0.0, float(self.beam_length_m), int(n), dtype=float)

    def critical_positions(self, n_samples: int) -> np.ndarray:
        """Muestras uniformes + apoyos, puntos de carga y puntos de corte nulo."""
        bps = self._breakpoints()
        xs = np.concatenate([self.sample_positions(n_samples), bps, np.array(self._zero_shear_points(bps), dtype=float)])
        return np.unique(xs)

    def max_abs_moment(self, n_samples: int) -> float:
        M = self.eval_M_array(self.critical_positions(n_samples))
        return float(np.max(np.abs(M))) if M.size else 0.0

    def max_abs_deflection(self, n_samples: int) -> float:
        d = self.eval_delta_array(self.critical_positions(n_samples))
        return float(np.max(np.abs(d))) if d.size else 0.0


@dataclass(frozen=True)
class SimpleBeamSolution:
    model: SimpleBeamModel
    max_shear_n: float
    max_moment_nm: float
    max_deflection_m: float
    notes: List[str]

    @property
    def R1_n(self) -> float:
        return self.model.R1_n

    @property
    def R2_n(self) -> float:
        return self.model.R2_n


def build_simple_beam(
    *,
    beam_length_m: float,
    a0_m: float,
    a1_m: float,
    point_loads: Sequence[NormalizedPointLoad],
    uniform_loads: Sequence[NormalizedUniformLoad],
    E_pa: float,
    I_m4: float,
    tol: float = 1e-9,
) -> SimpleBeamModel:
    R1, R2 = support_reactions(a0_m, a1_m, point_loads, uniform_loads)
    return SimpleBeamModel(
        beam_length_m=float(beam_length_m),
        a0_m=float(a0_m),
        a1_m=float(a1_m),
        R1_n=R1,
        R2_n=R2,
        pf_x=np.array([p.x_m for p in point_loads], dtype=float),
        pf_P=np.array([p.P_n for p in point_loads], dtype=float),
        ul_a=np.array([u.x1_m for u in uniform_loads], dtype=float),
        ul_b=np.array([u.x2_m for u in uniform_loads], dtype=float),
        ul_w=np.array([u.w_npm for u in uniform_loads], dtype=float),
        E_pa=float(E_pa),
        I_m4=float(I_m4),
        tol=float(tol),
    )


def solve_simple_beam(
    *,
    beam_length_m: float,
    a0_m: float,
    a1_m: float,
    loads: NormalizedBeamLoads,
    E_pa: float,
    I_m4: float,
    settings: Optional[SolverSettings] = None,
) -> SimpleBeamSolution:
    s = settings or DEFAULT_SETTINGS
    notes: List[str] = []

    span = a1_m - a0_m
    if span <= 0:
        notes.append(f"Vano nulo o negativo (apoyos en {a0_m * 1000:g} y {a1_m * 1000:g} mm): reacciones = 0.")

    for p in loads.point_loads:
        if span > 0 and not (a0_m - s.tol <= p.x_m <= a1_m + s.tol):
            notes.append(f'Puntual "{p.label}" fuera de los apoyos (x={p.x_m * 1000:g} mm): no aporta a la flecha.')
    for u in loads.uniform_loads:
        if u.x1_m < a0_m - s.tol or u.x2_m > a1_m + s.tol:
            notes.append(f'Uniforme "{u.label}" recortada a los apoyos para reacciones y flecha; '
                         f'V y M fuera del vano incluyen la parte en voladizo sin equilibrar.')

    if E_pa <= 0 or I_m4 <= 0:
        notes.append("E <= 0 o I <= 0: flecha forzada a 0.")

    model = build_simple_beam(
        beam_length_m=beam_length_m,
        a0_m=a0_m,
        a1_m=a1_m,
        point_loads=loads.point_loads,
        uniform_loads=loads.uniform_loads,
        E_pa=E_pa,
        I_m4=I_m4,
        tol=s.tol,
    )

    sol = SimpleBeamSolution(
        model=model,
        max_shear_n=model.max_shear_n,
        max_moment_nm=model.max_abs_moment(s.n_samples),
        max_deflection_m=model.max_abs_deflection(s.n_samples),
        notes=notes,
    )
    logger.debug(
        "Viga simple: R1=%.6g N, R2=%.6g N, Vmax=%.6g N, Mmax=%.6g N·m, δmax=%.6g m",
        model.R1_n, model.R2_n, sol.max_shear_n, sol.max_moment_nm, sol.max_deflection_m,
    )
    return sol
