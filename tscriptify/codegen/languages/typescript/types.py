"""
TypeScript type mapping.

A fixed table from primitive host kinds to TypeScript type names, plus the
names used for dates and dynamic values.
"""

from typing import Dict, Optional

from ...core.generator import UnmappedPrimitiveKind
from ...core.schema import Kind

TS_BOOLEAN = "boolean"
TS_NUMBER = "number"
TS_STRING = "string"
TS_ANY = "any"
TS_DATE = "Date"

PRIMITIVE_TYPE_MAP: Dict[Kind, str] = {
    Kind.BOOL: TS_BOOLEAN,
    Kind.INT: TS_NUMBER,
    Kind.INT8: TS_NUMBER,
    Kind.INT16: TS_NUMBER,
    Kind.INT32: TS_NUMBER,
    Kind.INT64: TS_NUMBER,
    Kind.UINT: TS_NUMBER,
    Kind.UINT8: TS_NUMBER,
    Kind.UINT16: TS_NUMBER,
    Kind.UINT32: TS_NUMBER,
    Kind.UINT64: TS_NUMBER,
    Kind.FLOAT32: TS_NUMBER,
    Kind.FLOAT64: TS_NUMBER,
    Kind.STRING: TS_STRING,
    Kind.INTERFACE: TS_ANY,
}


class TypeMapper:
    """Maps primitive kinds to TypeScript names."""

    def __init__(self, overrides: Optional[Dict[Kind, str]] = None):
        self._types = dict(PRIMITIVE_TYPE_MAP)
        if overrides:
            self._types.update(overrides)

    def lookup(self, kind: Kind) -> Optional[str]:
        """TypeScript name for ``kind``, or None when unmapped."""
        return self._types.get(kind)

    def map_primitive(
        self, kind: Kind, field_name: str = "", type_name: str = ""
    ) -> str:
        """
        TypeScript name for ``kind``.

        Raises:
            UnmappedPrimitiveKind: If the kind has no entry
        """
        ts_type = self._types.get(kind)
        if ts_type is None:
            raise UnmappedPrimitiveKind(kind, field_name, type_name)
        return ts_type
