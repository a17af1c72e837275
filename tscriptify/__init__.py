"""
tscriptify - TypeScript definitions from Python types.

Converts dataclasses, integer enums and explicit struct descriptions into
TypeScript classes, interfaces and enums, keeping hand-written code blocks
of a previously generated file.
"""

from .codegen.core.config import GeneratorConfig, ConfigError, load_config
from .codegen.core.generator import (
    GeneratorError,
    GenerationResult,
    UnmappedPrimitiveKind,
    generate_code,
)
from .codegen.core.introspect import IntrospectionError
from .codegen.core.schema import (
    FieldDescriptor,
    Kind,
    StructType,
    TypeRef,
    embedded_field,
    enum_ref,
    json_field,
    map_of,
    pointer_to,
    primitive,
    slice_of,
    struct_ref,
)
from .codegen.languages.typescript import (
    TypeScriptGenerator,
    create_interface_generator,
    create_typescript_generator,
)
from .logging_config import configure_logging

__version__ = "0.1.0"


def convert_types(*types, **options) -> str:
    """
    Convert the given types with a one-off generator.

    Args:
        *types: Classes, StructTypes or TypeRefs, in registration order
        **options: GeneratorConfig settings

    Returns:
        Generated TypeScript code
    """
    generator = TypeScriptGenerator(options)
    for tp in types:
        generator.add_type(tp)
    return generator.convert()


__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "create_interface_generator",
    "convert_types",
    "GeneratorConfig",
    "load_config",
    "generate_code",
    "GenerationResult",
    "ConfigError",
    "GeneratorError",
    "IntrospectionError",
    "UnmappedPrimitiveKind",
    "FieldDescriptor",
    "Kind",
    "StructType",
    "TypeRef",
    "embedded_field",
    "enum_ref",
    "json_field",
    "map_of",
    "pointer_to",
    "primitive",
    "slice_of",
    "struct_ref",
    "configure_logging",
]
