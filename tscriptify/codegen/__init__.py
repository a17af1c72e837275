"""
Code generation module.

Generates TypeScript definitions from Python types.
"""

from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.config import GeneratorConfig, ConfigManager, load_config
from .languages.typescript import TypeScriptGenerator, create_typescript_generator

__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "TypeScriptGenerator",
    "create_typescript_generator",
]
