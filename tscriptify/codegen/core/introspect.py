"""
Runtime introspection of Python types.

Turns dataclasses and type annotations into the schema model from
``schema.py``, so the converter never has to look at Python typing
internals itself.
"""

import collections.abc
import dataclasses
import enum
import functools
import types
import typing
from typing import Any, Callable, Dict, List, Optional

from .generator import GeneratorError
from .schema import (
    FieldDescriptor,
    Kind,
    StructType,
    TypeRef,
    map_of,
    pointer_to,
    slice_of,
    struct_ref,
)
from ...logging_config import get_logger

logger = get_logger(__name__)


class IntrospectionError(GeneratorError):
    """Raised when a host type cannot be described."""

    pass


_SEQUENCE_ORIGINS = {
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
}

_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}

_UNION_ORIGINS = {typing.Union, types.UnionType}


def type_ref_for(annotation: Any) -> TypeRef:
    """
    Describe a type annotation.

    Args:
        annotation: A class, a typing construct, a StructType or a TypeRef

    Returns:
        TypeRef describing the annotation
    """
    if isinstance(annotation, TypeRef):
        return annotation
    if isinstance(annotation, StructType):
        return struct_ref(annotation)

    if annotation is Any or annotation is object or isinstance(annotation, typing.TypeVar):
        return TypeRef(kind=Kind.INTERFACE, name="any")

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return type_ref_for(args[0])

    if origin in _UNION_ORIGINS:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            # Optional[X] behaves like a pointer to X
            return pointer_to(type_ref_for(members[0]))
        return TypeRef(kind=Kind.INTERFACE, name="any")

    if origin is typing.Literal:
        return type_ref_for(type(args[0])) if args else TypeRef(kind=Kind.INTERFACE)

    if origin in _SEQUENCE_ORIGINS:
        return slice_of(type_ref_for(args[0] if args else Any))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return slice_of(type_ref_for(args[0]))
        return slice_of(TypeRef(kind=Kind.INTERFACE, name="any"))

    if origin in _MAPPING_ORIGINS:
        key, value = args if len(args) == 2 else (str, Any)
        return map_of(type_ref_for(key), type_ref_for(value))

    if origin is not None:
        # Parametrised user generics are described by their origin
        return type_ref_for(origin)

    if isinstance(annotation, typing.NewType):
        return type_ref_for(annotation.__supertype__)

    if isinstance(annotation, type):
        return _type_ref_for_class(annotation)

    return TypeRef(kind=Kind.UNKNOWN, name=repr(annotation), target=annotation)


def type_ref_for_value(obj: Any) -> TypeRef:
    """Describe the type of a value (StructType and TypeRef pass through)."""
    if isinstance(obj, (TypeRef, StructType)):
        return type_ref_for(obj)
    return type_ref_for(type(obj))


def _type_ref_for_class(cls: type) -> TypeRef:
    """Describe a plain class."""
    if dataclasses.is_dataclass(cls):
        return TypeRef(kind=Kind.STRUCT, name=cls.__name__, target=cls)

    if issubclass(cls, bool):
        return TypeRef(kind=Kind.BOOL, name="bool")

    if issubclass(cls, enum.Enum) and not issubclass(cls, (int, str)):
        return _type_ref_for_plain_enum(cls)

    if issubclass(cls, int):
        if cls is int:
            return TypeRef(kind=Kind.INT, name=Kind.INT.value)
        return TypeRef(
            kind=Kind.INT, name=cls.__name__, target=cls, render=value_renderer(cls)
        )

    if issubclass(cls, float):
        name = Kind.FLOAT64.value if cls is float else cls.__name__
        return TypeRef(kind=Kind.FLOAT64, name=name)

    if issubclass(cls, str):
        name = Kind.STRING.value if cls is str else cls.__name__
        return TypeRef(kind=Kind.STRING, name=name)

    if issubclass(cls, (bytes, bytearray)):
        return TypeRef(kind=Kind.BYTES, name=cls.__name__)

    if issubclass(cls, complex):
        return TypeRef(kind=Kind.COMPLEX, name=cls.__name__)

    # Unparametrised containers hold values of any type
    if issubclass(cls, collections.abc.Mapping):
        return map_of(type_ref_for(str), type_ref_for(Any))

    if issubclass(cls, (list, tuple, set, frozenset)):
        return slice_of(type_ref_for(Any))

    return TypeRef(kind=Kind.UNKNOWN, name=cls.__name__, target=cls)


def _type_ref_for_plain_enum(cls: type) -> TypeRef:
    """Enums that do not subclass int/str are described by their values."""
    values = [member.value for member in cls]
    if values and all(
        isinstance(v, int) and not isinstance(v, bool) for v in values
    ):
        return TypeRef(
            kind=Kind.INT, name=cls.__name__, target=cls, render=value_renderer(cls)
        )
    if values and all(isinstance(v, str) for v in values):
        return TypeRef(kind=Kind.STRING, name=cls.__name__)
    return TypeRef(kind=Kind.UNKNOWN, name=cls.__name__, target=cls)


def value_renderer(cls: type) -> Optional[Callable[[int], str]]:
    """
    Build the string renderer of an integer-like class.

    Enums render their member names and fall back to ``Name(value)`` for
    values without a member. Other int subclasses qualify only when they
    override ``__str__``.
    """
    if issubclass(cls, enum.Enum):
        names: Dict[int, str] = {}
        for name, member in cls.__members__.items():
            names.setdefault(member.value, name)

        def render_member(value: int) -> str:
            return names.get(value, f"{cls.__name__}({value})")

        return render_member

    if cls.__str__ is not int.__str__:

        def render_value(value: int) -> str:
            return str(cls(value))

        return render_value

    return None


@functools.lru_cache(maxsize=None)
def describe_dataclass(cls: type) -> StructType:
    """
    Describe a dataclass as a StructType.

    JSON names come from ``field.metadata["json"]`` and embedding from
    ``field.metadata["embedded"]`` (see ``json_field``/``embedded_field``).
    Inherited fields come first, in base class order.
    """
    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise IntrospectionError(
            f"Cannot resolve annotations of {cls.__qualname__}: {e}"
        ) from e

    struct = StructType(name=cls.__name__)
    for f in dataclasses.fields(cls):
        struct.add_field(
            FieldDescriptor(
                name=f.name,
                type=type_ref_for(hints.get(f.name, f.type)),
                tag=f.metadata.get("json", ""),
                embedded=bool(f.metadata.get("embedded", False)),
            )
        )

    logger.debug("Described %s with %d field(s)", cls.__qualname__, len(struct.fields))
    return struct


def describe_struct(ref: TypeRef) -> StructType:
    """Resolve a struct reference to its StructType."""
    ref = ref.deref()
    if isinstance(ref.target, StructType):
        return ref.target
    if isinstance(ref.target, type) and dataclasses.is_dataclass(ref.target):
        return describe_dataclass(ref.target)
    raise IntrospectionError(f"Type {ref.name!r} is not a structural type")


def deep_fields(ref: TypeRef) -> List[FieldDescriptor]:
    """
    Fields of a struct with embedded structs flattened in place.

    Non-struct references have no fields.
    """
    ref = ref.deref()
    if ref.kind != Kind.STRUCT:
        return []

    fields: List[FieldDescriptor] = []
    for field in describe_struct(ref).fields:
        if field.embedded and field.type.kind == Kind.STRUCT:
            fields.extend(deep_fields(field.type))
        else:
            fields.append(field)
    return fields
