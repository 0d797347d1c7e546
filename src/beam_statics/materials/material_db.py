from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

CUSTOM = "Custom"


@dataclass(frozen=True)
class Material:
    """
    Material para análisis elástico.
      - yield_strength_mpa:  fy [MPa]
      - elastic_modulus_gpa: E [GPa]
      - density_kgm3:        ρ [kg/m³]
    """
    name: str
    yield_strength_mpa: float = 0.0
    elastic_modulus_gpa: float = 0.0
    density_kgm3: float = 0.0
    poissons_ratio: float = 0.0
    thermal_expansion: float = 0.0   # 1/°C

    @property
    def elastic_modulus_pa(self) -> float:
        return float(self.elastic_modulus_gpa) * 1e9


STANDARD_MATERIALS: Sequence[Material] = (
    Material("ASTM A36 Structural Steel", 250.0, 200.0, 7850.0, 0.26, 12e-6),
    Material("ASTM A572 Grade 50 Steel", 345.0, 200.0, 7850.0, 0.26, 12e-6),
    Material("ASTM A992 Structural Steel", 345.0, 200.0, 7850.0, 0.30, 12e-6),
    Material("Stainless Steel 304", 215.0, 193.0, 8000.0, 0.29, 17.3e-6),
    Material("Aluminum 6061-T6", 276.0, 68.9, 2700.0, 0.33, 23.6e-6),
    Material(CUSTOM),
)


class MaterialDB:
    """
    Catálogo de materiales por nombre. No se modifica en sitio:
    with_custom() devuelve un catálogo nuevo.
    """

    def __init__(self, materials: Sequence[Material]):
        self.materials: List[Material] = list(materials)
        self.by_name: Dict[str, Material] = {m.name.strip(): m for m in self.materials if m.name.strip()}

    def names(self) -> List[str]:
        return [m.name for m in self.materials]

    def get(self, name: str) -> Optional[Material]:
        return self.by_name.get((name or "").strip())

    def resolve(self, name: str) -> Material:
        m = self.get(name)
        if m is None:
            raise KeyError(f"Material no encontrado en el catálogo: {name!r}. Disponibles: {self.names()}")
        return m

    def with_custom(self, **fields) -> "MaterialDB":
        """Catálogo con la entrada 'Custom' reemplazada (los campos no indicados se conservan)."""
        base = self.get(CUSTOM) or Material(CUSTOM)
        custom = replace(base, name=CUSTOM, **fields)
        mats = [m for m in self.materials if m.name.strip() != CUSTOM]
        mats.append(custom)
        return MaterialDB(mats)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self.materials)

    @classmethod
    def standard(cls) -> "MaterialDB":
        return cls(STANDARD_MATERIALS)

    @staticmethod
    def _norm(s: str) -> str:
        return (s or "").strip()

    @classmethod
    def from_txt(cls, path: str | Path) -> "MaterialDB":
        """
        Lee un TXT separado por ';' con encabezado, por ejemplo:

          name;yield_strength_mpa;elastic_modulus_gpa;density_kgm3;poissons_ratio;thermal_expansion
          ASTM A36 Structural Steel;250;200;7850;0,26;1.2e-5

        Líneas vacías y comentarios (# o //) se ignoran. Acepta coma decimal.
        Si el archivo no trae 'Custom', se agrega una entrada Custom en cero.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"No existe el archivo de materiales: {p}")

        lines = p.read_text(encoding="utf-8", errors="replace").splitlines()
        rows: List[List[str]] = []
        for ln in lines:
            t = ln.strip()
            if not t:
                continue
            if t.startswith("#") or t.startswith("//"):
                continue
            rows.append([c.strip() for c in t.split(";")])

        if not rows:
            raise ValueError("Archivo de materiales vacío o sin filas válidas.")

        # Detectar header
        header = [h.strip().lower() for h in rows[0]]
        has_header = any(x in {"name", "material", "yield_strength_mpa", "fy_mpa"} for x in header)
        data_rows = rows[1:] if has_header else rows
        if not has_header:
            header = ["name", "yield_strength_mpa", "elastic_modulus_gpa",
                      "density_kgm3", "poissons_ratio", "thermal_expansion"]

        def idx(*names: str) -> Optional[int]:
            for name in names:
                if name in header:
                    return header.index(name)
            return None

        i_name = idx("name", "material")
        i_fy = idx("yield_strength_mpa", "fy_mpa")
        i_e = idx("elastic_modulus_gpa", "e_gpa")
        i_rho = idx("density_kgm3", "density")
        i_nu = idx("poissons_ratio", "nu")
        i_alpha = idx("thermal_expansion", "alpha")

        def get_cell(row: List[str], i: Optional[int]) -> str:
            if i is None:
                return ""
            return row[i] if i < len(row) else ""

        def try_float(s: str) -> Optional[float]:
            t = (s or "").strip().replace(",", ".")
            if t == "":
                return None
            try:
                return float(t)
            except ValueError:
                return None

        mats: List[Material] = []
        for r in data_rows:
            name = cls._norm(get_cell(r, i_name)) if i_name is not None else cls._norm(r[0] if r else "")
            if not name:
                continue

            fy = try_float(get_cell(r, i_fy))
            E = try_float(get_cell(r, i_e))
            if (fy is None or E is None) and name != CUSTOM:
                # sin fy o E el material no sirve para verificar
                continue

            mats.append(Material(
                name=name,
                yield_strength_mpa=fy or 0.0,
                elastic_modulus_gpa=E or 0.0,
                density_kgm3=try_float(get_cell(r, i_rho)) or 0.0,
                poissons_ratio=try_float(get_cell(r, i_nu)) or 0.0,
                thermal_expansion=try_float(get_cell(r, i_alpha)) or 0.0,
            ))

        if not mats:
            raise ValueError("No se pudieron cargar materiales: faltan columnas o valores de fy/E.")

        if not any(m.name == CUSTOM for m in mats):
            mats.append(Material(CUSTOM))
        return cls(mats)


def default_materials_path() -> Path:
    """
    Ruta del catálogo incluido en el paquete:
      src/beam_statics/data/materials.txt
    """
    here = Path(__file__).resolve()
    return here.parents[1] / "data" / "materials.txt"
