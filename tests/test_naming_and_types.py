"""Unit tests for enum member naming and the primitive type table."""

import pytest

from tscriptify import Kind, UnmappedPrimitiveKind
from tscriptify.codegen.core.naming import add_word_boundaries_to_numbers, to_camel
from tscriptify.codegen.languages.typescript import PRIMITIVE_TYPE_MAP, TypeMapper


class TestToCamel:
    """Test initial-capital camel conversion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("red", "Red"),
            ("dark_blue", "DarkBlue"),
            ("in transit", "InTransit"),
            ("two-words", "TwoWords"),
            ("HTTPStatus", "HTTPStatus"),
            ("v2beta", "V2Beta"),
            ("it's", "Its"),
            ("", ""),
        ],
    )
    def test_to_camel(self, value, expected):
        assert to_camel(value) == expected

    def test_numbers_become_word_boundaries(self):
        assert add_word_boundaries_to_numbers("v2beta") == "v 2 beta"


class TestTypeMapper:
    """Test the primitive kind table."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (Kind.BOOL, "boolean"),
            (Kind.INT, "number"),
            (Kind.UINT8, "number"),
            (Kind.INT64, "number"),
            (Kind.FLOAT32, "number"),
            (Kind.FLOAT64, "number"),
            (Kind.STRING, "string"),
            (Kind.INTERFACE, "any"),
        ],
    )
    def test_mapped_kinds(self, kind, expected):
        assert TypeMapper().map_primitive(kind) == expected

    @pytest.mark.parametrize("kind", [Kind.BYTES, Kind.COMPLEX, Kind.STRUCT, Kind.UNKNOWN])
    def test_unmapped_kinds(self, kind):
        mapper = TypeMapper()
        assert mapper.lookup(kind) is None
        with pytest.raises(UnmappedPrimitiveKind):
            mapper.map_primitive(kind)

    def test_error_names_the_field(self):
        with pytest.raises(UnmappedPrimitiveKind) as exc_info:
            TypeMapper().map_primitive(Kind.BYTES, "data", "Blob")
        assert str(exc_info.value) == "Cannot find type for: bytes (field 'data', type 'Blob')"

    def test_overrides_do_not_change_the_table(self):
        mapper = TypeMapper({Kind.INT64: "bigint"})
        assert mapper.lookup(Kind.INT64) == "bigint"
        assert PRIMITIVE_TYPE_MAP[Kind.INT64] == "number"
