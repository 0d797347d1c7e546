import pytest

from beam_statics.materials.material_db import CUSTOM, STANDARD_MATERIALS, MaterialDB, default_materials_path


def test_standard_catalog():
    db = MaterialDB.standard()
    assert "ASTM A36 Structural Steel" in db
    assert CUSTOM in db
    a36 = db.resolve("ASTM A36 Structural Steel")
    assert a36.yield_strength_mpa == 250.0
    assert a36.elastic_modulus_pa == pytest.approx(200e9)
    with pytest.raises(KeyError):
        db.resolve("Madera")


def test_bundled_file_matches_standard_table():
    db = MaterialDB.from_txt(default_materials_path())
    assert db.names() == [m.name for m in STANDARD_MATERIALS]
    for m in STANDARD_MATERIALS:
        got = db.resolve(m.name)
        assert got.yield_strength_mpa == pytest.approx(m.yield_strength_mpa)
        assert got.elastic_modulus_gpa == pytest.approx(m.elastic_modulus_gpa)
        assert got.density_kgm3 == pytest.approx(m.density_kgm3)


def test_from_txt_parsing(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text(
        "# comentario\n"
        "name;yield_strength_mpa;elastic_modulus_gpa;density_kgm3;poissons_ratio;thermal_expansion\n"
        "\n"
        "Acero X;250;200;7850;0,3;1,2e-5\n"
        "// otro comentario\n"
        "Sin modulo;300;;7850;0.3;0\n",
        encoding="utf-8",
    )
    db = MaterialDB.from_txt(p)
    assert db.names() == ["Acero X", CUSTOM]
    m = db.resolve("Acero X")
    assert m.poissons_ratio == pytest.approx(0.3)
    assert m.thermal_expansion == pytest.approx(1.2e-5)


def test_from_txt_without_header(tmp_path):
    p = tmp_path / "mats.txt"
    p.write_text("Acero Y;355;210;7850\n", encoding="utf-8")
    m = MaterialDB.from_txt(p).resolve("Acero Y")
    assert m.elastic_modulus_gpa == pytest.approx(210.0)
    assert m.poissons_ratio == 0.0


def test_from_txt_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        MaterialDB.from_txt(tmp_path / "no_existe.txt")

    empty = tmp_path / "vacio.txt"
    empty.write_text("# nada\n\n", encoding="utf-8")
    with pytest.raises(ValueError):
        MaterialDB.from_txt(empty)


def test_with_custom_returns_new_catalog():
    db = MaterialDB.standard()
    db2 = db.with_custom(yield_strength_mpa=180.0, elastic_modulus_gpa=100.0)
    assert db2.resolve(CUSTOM).yield_strength_mpa == 180.0
    assert db.resolve(CUSTOM).yield_strength_mpa == 0.0
    assert len(db2) == len(db)
