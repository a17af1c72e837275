"""
TypeScript code generator module.

Generates TypeScript classes, interfaces and enums from Python types.
"""

from .generator import (
    ENUM_PROBE_CEILING,
    ConversionSession,
    TypeScriptGenerator,
    create_interface_generator,
    create_typescript_generator,
)
from .types import PRIMITIVE_TYPE_MAP, TypeMapper

__all__ = [
    # Generator
    "ENUM_PROBE_CEILING",
    "ConversionSession",
    "TypeScriptGenerator",
    "create_typescript_generator",
    "create_interface_generator",
    # Types
    "PRIMITIVE_TYPE_MAP",
    "TypeMapper",
]
