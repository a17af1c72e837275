"""Unit tests for enum emission by bounded value probing."""

import enum

from tscriptify import Kind, TypeScriptGenerator, enum_ref
from tscriptify.codegen.languages.typescript import ENUM_PROBE_CEILING
from sample_types import Color, Status


def _convert(*types, **options):
    generator = TypeScriptGenerator(options)
    for tp in types:
        generator.add_type(tp)
    return generator.convert()


class TestEnumEmission:
    """Test enum blocks."""

    def test_int_enum_members(self):
        """Test IntEnum member names become camel members; gaps are skipped."""
        assert _convert(Color) == (
            "export enum Color {\n"
            "    Red = 'red',\n"
            "    DarkBlue = 'dark_blue',\n"
            "    LightGreen = 'light_green',\n"
            "}"
        )

    def test_int_subclass_with_str(self):
        """Test int subclasses rendering through __str__."""
        assert _convert(Status) == (
            "export enum Status {\n"
            "    Pending = 'pending',\n"
            "    InTransit = 'in_transit',\n"
            "    Delivered = 'delivered',\n"
            "}"
        )

    def test_plain_enum_with_int_values(self):
        """Test enum.Enum classes whose values are all integers."""

        class Shape(enum.Enum):
            circle = 0
            square = 2

        assert _convert(Shape, export_classes=False) == (
            "enum Shape {\n    Circle = 'circle',\n    Square = 'square',\n}"
        )

    def test_interface_setting_does_not_change_enums(self):
        """Test enums stay enums in interface mode."""
        assert _convert(Color, use_interface=True).startswith("export enum Color {")

    def test_values_at_ceiling_are_not_found(self):
        """Test the probe stops below the ceiling."""
        names = {5: "five", ENUM_PROBE_CEILING: "too_far", -1: "negative"}

        def render(value):
            return names.get(value, f"Big({value})")

        assert _convert(enum_ref("Big", render, kind=Kind.UINT16)) == (
            "export enum Big {\n    Five = 'five',\n}"
        )

    def test_quotes_in_values_are_escaped(self):
        """Test rendered values stay valid string literals."""
        ref = enum_ref("Quote", lambda value: "it's" if value == 0 else f"Quote({value})")
        assert "    Its = 'it\\'s'," in _convert(ref)

    def test_enum_gets_custom_code_markers(self):
        """Test custom code markers apply to enum blocks too."""
        generator = TypeScriptGenerator()
        generator.add_type(Color)
        code = generator.convert({"Color": "    // extra"})
        assert code.endswith("    //[Color:]\n    // extra\n\n    //[end]\n}")

    def test_values_the_type_rejects_are_skipped(self):
        """Test int subclasses that validate their range while probing."""

        class Level(int):
            NAMES = ("low", "mid", "high")

            def __new__(cls, value):
                if value >= len(cls.NAMES):
                    raise ValueError(f"no level {value}")
                return super().__new__(cls, value)

            def __str__(self):
                return self.NAMES[self]

        assert _convert(Level) == (
            "export enum Level {\n"
            "    Low = 'low',\n"
            "    Mid = 'mid',\n"
            "    High = 'high',\n"
            "}"
        )
