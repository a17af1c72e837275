"""
Core code generation components.

Provides the type model, introspection and base classes used by the
TypeScript generator.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    GenerationResult,
    UnmappedPrimitiveKind,
    generate_code,
)
from .schema import (
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
from .introspect import (
    IntrospectionError,
    deep_fields,
    describe_struct,
    type_ref_for,
    type_ref_for_value,
)
from .naming import to_camel
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "UnmappedPrimitiveKind",
    "generate_code",
    # Type model
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
    # Introspection
    "IntrospectionError",
    "deep_fields",
    "describe_struct",
    "type_ref_for",
    "type_ref_for_value",
    # Naming
    "to_camel",
    # Configuration
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
