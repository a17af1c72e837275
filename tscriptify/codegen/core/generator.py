"""
Base class and error types shared by the generators.

``generate_code`` wraps a run into a ``GenerationResult`` so the command
line can report failures and warnings without handling exceptions itself.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import GeneratorConfig, load_config
from .schema import Kind, TypeRef
from .templates import TemplateEngine, create_template_engine

# Consecutive blank lines kept by format_code
MAX_BLANK_LINES = 2


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class UnmappedPrimitiveKind(GeneratorError):
    """A field's kind has no entry in the type mapper."""

    def __init__(self, kind: Kind, field_name: str = "", type_name: str = ""):
        self.kind = kind
        self.field_name = field_name
        self.type_name = type_name
        message = f"Cannot find type for: {kind.value}"
        if field_name:
            message += f" (field {field_name!r}"
            message += f", type {type_name!r})" if type_name else ")"
        super().__init__(message)


class CodeGenerator(ABC):
    """Turns registered root types into source text of one language."""

    def __init__(
        self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None
    ):
        """
        Args:
            config: A ready GeneratorConfig, or a dict of overrides applied
                on top of the defaults
        """
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(custom_config=config)
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Name of the target language, e.g. 'typescript'."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of generated files, e.g. '.ts'."""

    def get_template_directory(self) -> Optional[Path]:
        """Directory of this generator's templates (None: in-memory only)."""
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine, created on first use."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    @abstractmethod
    def generate(self, roots: List[TypeRef]) -> str:
        """
        Generate code for ``roots`` and every type they reference.

        Raises:
            GeneratorError: If a reachable type cannot be expressed
        """

    @abstractmethod
    def generate_single_schema(self, root: TypeRef) -> str:
        """Generate code for one root and the types it references."""

    def validate_roots(self, roots: List[TypeRef]) -> List[str]:
        """
        Warnings about the roots, collected before generating.

        Generators extend this with their own checks.
        """
        if not roots:
            return ["No types registered for conversion"]
        return []

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace and collapse runs of blank lines."""
        lines = []
        blank_run = 0

        for line in code.split("\n"):
            line = line.rstrip()
            blank_run = blank_run + 1 if not line else 0
            if blank_run <= MAX_BLANK_LINES:
                lines.append(line)

        return "\n".join(lines)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Generated code together with warnings and run metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, roots: List[TypeRef]) -> GenerationResult:
    """
    Validate, generate and format in one call.

    Args:
        generator: Code generator instance
        roots: Root types in registration order

    Returns:
        GenerationResult; ``success`` is False when a GeneratorError was raised
    """
    try:
        warnings = generator.validate_roots(roots)
        code = generator.format_code(generator.generate(roots))
    except GeneratorError as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "root_count": len(roots),
        "roots": ", ".join(root.name for root in roots),
        "line_count": code.count("\n") + 1 if code else 0,
    }
    return GenerationResult(code, warnings, metadata)
