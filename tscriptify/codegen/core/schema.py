"""
Core schema representation for code generation.

Describes host types (dataclasses or hand-built schemas) in a normalized
internal format that generators can walk consistently.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional


class Kind(Enum):
    """Structural kind of a host type."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    INTERFACE = "interface"
    STRUCT = "struct"
    POINTER = "pointer"
    SLICE = "slice"
    MAP = "map"

    # Host kinds without a TypeScript counterpart
    BYTES = "bytes"
    COMPLEX = "complex"
    UNKNOWN = "unknown"

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_KINDS


INTEGER_KINDS = frozenset(
    {
        Kind.INT,
        Kind.INT8,
        Kind.INT16,
        Kind.INT32,
        Kind.INT64,
        Kind.UINT,
        Kind.UINT8,
        Kind.UINT16,
        Kind.UINT32,
        Kind.UINT64,
    }
)


@dataclass(eq=False)
class StructType:
    """Explicit description of a structural (record) type."""

    name: str
    fields: List["FieldDescriptor"] = field(default_factory=list)
    description: Optional[str] = None

    def add_field(self, field: "FieldDescriptor") -> None:
        """Add a field to this struct."""
        self.fields.append(field)


@dataclass(eq=False)
class TypeRef:
    """
    Handle for one host type.

    ``target`` is the Python class (or the StructType for hand-built schemas)
    the reference stands for; it doubles as the identity used to detect types
    that were already converted.
    """

    kind: Kind
    name: str = ""
    target: Any = None
    elem: Optional["TypeRef"] = None
    key: Optional["TypeRef"] = None
    render: Optional[Callable[[int], str]] = None

    @property
    def identity(self) -> Any:
        if self.target is not None:
            return self.target
        return (self.kind, self.name)

    @property
    def is_enum_candidate(self) -> bool:
        """True for integer types that can render their values as names."""
        return self.kind.is_integer and self.render is not None

    @property
    def is_named_integer(self) -> bool:
        """True for integer types declared under their own name."""
        return self.kind.is_integer and self.name != self.kind.value

    def deref(self) -> "TypeRef":
        """Strip one level of pointer."""
        if self.kind == Kind.POINTER and self.elem is not None:
            return self.elem
        return self

    def __repr__(self) -> str:
        return f"TypeRef({self.kind.value}, {self.name!r})"


@dataclass
class FieldDescriptor:
    """One field of a structural type."""

    name: str
    type: TypeRef
    tag: str = ""
    embedded: bool = False

    @property
    def serialized_name(self) -> str:
        """Wire name taken from the JSON tag ('' when the field is skipped)."""
        if not self.tag:
            return ""
        name = self.tag.split(",")[0].strip()
        if name == "-":
            return ""
        return name


# Convenience constructors for hand-built schemas


def primitive(kind: Kind, name: Optional[str] = None) -> TypeRef:
    """Reference to a primitive kind."""
    return TypeRef(kind=kind, name=name or kind.value)


def struct_ref(struct: StructType) -> TypeRef:
    """Reference to a hand-built struct."""
    return TypeRef(kind=Kind.STRUCT, name=struct.name, target=struct)


def pointer_to(elem: TypeRef) -> TypeRef:
    return TypeRef(kind=Kind.POINTER, name=elem.name, elem=elem)


def slice_of(elem: TypeRef) -> TypeRef:
    return TypeRef(kind=Kind.SLICE, name=f"[]{elem.name}", elem=elem)


def map_of(key: TypeRef, value: TypeRef) -> TypeRef:
    return TypeRef(
        kind=Kind.MAP, name=f"map[{key.name}]{value.name}", key=key, elem=value
    )


def enum_ref(
    name: str, render: Callable[[int], str], kind: Kind = Kind.INT
) -> TypeRef:
    """Reference to a named integer type with a value renderer."""
    return TypeRef(kind=kind, name=name, target=("enum", name), render=render)


# Dataclass field helpers


def json_field(tag: str, **kwargs) -> Any:
    """
    Declare a dataclass field with a JSON tag.

    The tag follows the ``name[,option...]`` convention; ``"-"`` or an empty
    name excludes the field from generated output.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["json"] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def embedded_field(**kwargs) -> Any:
    """Declare a dataclass field whose own fields are hoisted into the parent."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata["embedded"] = True
    return dataclasses.field(metadata=metadata, **kwargs)
