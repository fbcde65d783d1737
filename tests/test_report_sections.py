"""
Unit tests for the report section catalogue: value coercion and which sections each report type carries.
"""

import json

import pytest

from backend.core.report_sections import (
    COUNT,
    FLAG,
    NUMBER,
    PHOTOS,
    SECTIONS,
    TEXT,
    coerce,
    property_values,
)

_BY_TABLE = {section.table: section for section in SECTIONS}


class TestCoerce:
    """Tests for coerce()."""

    def test_text_empty_becomes_none(self) -> None:
        assert coerce(TEXT, "") is None
        assert coerce(TEXT, None) is None
        assert coerce(TEXT, "bueno") == "bueno"

    def test_number_zero_becomes_none(self) -> None:
        assert coerce(NUMBER, 0) is None
        assert coerce(NUMBER, 85.5) == 85.5

    def test_flag_is_boolean(self) -> None:
        assert coerce(FLAG, None) is False
        assert coerce(FLAG, 1) is True
        assert coerce(FLAG, True) is True

    def test_count_defaults_to_zero(self) -> None:
        assert coerce(COUNT, None) == 0
        assert coerce(COUNT, 4) == 4

    def test_photos_json_or_none(self) -> None:
        assert coerce(PHOTOS, []) is None
        assert coerce(PHOTOS, None) is None
        assert json.loads(coerce(PHOTOS, ["/uploads/a.jpg"])) == ["/uploads/a.jpg"]


def test_property_values_follow_column_order() -> None:
    values = property_values({"direccion": "Calle Mayor 1", "cambio_uso": 1})
    assert values[0] == "Calle Mayor 1"
    assert values.count(None) >= 10
    assert True in values and False in values


def test_catalogue_covers_every_section_table() -> None:
    assert len(SECTIONS) == 26
    assert len(_BY_TABLE) == 26


@pytest.mark.parametrize(
    "tipo, expected_count",
    [("basico", 4), ("tecnico", 23), ("documental", 26)],
)
def test_sections_per_report_type(tipo: str, expected_count: int) -> None:
    assert sum(section.applies_to(tipo) for section in SECTIONS) == expected_count


def test_read_and_update_paths() -> None:
    assert _BY_TABLE["condiciones_inspeccion"].read_path == ("condiciones",)
    assert _BY_TABLE["condiciones_inspeccion"].update_path == ("condiciones_inspeccion",)
    assert _BY_TABLE["instalacion_agua_acs"].read_path == ("instalaciones", "agua_acs")
    assert _BY_TABLE["estancias_bano"].read_path == ("estructura", "estancias_bano")
    assert _BY_TABLE["estancias_bano"].update_path == ("estancias_bano",)
    assert _BY_TABLE["inspectores"].create_key == "inspectores"


def test_ddl_keys_section_by_report() -> None:
    ddl = _BY_TABLE["cubiertas"].ddl()
    assert "informe_id INTEGER NOT NULL UNIQUE" in ddl
    assert "fotos JSON" in ddl
    assert "cubierta_ventilada BOOLEAN" in ddl
