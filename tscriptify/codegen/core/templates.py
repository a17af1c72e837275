"""
Jinja2 wrapper used to lay out generated blocks.

Generated TypeScript is plain text, so the environment never escapes and
fails loudly on undefined variables instead of silently emitting nothing.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)

from .naming import to_camel


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def comment_lines(value: str, style: str = "//") -> str:
    """Prefix every non-blank line with a line comment marker."""
    return "\n".join(
        f"{style} {line}" if line.strip() else line for line in str(value).split("\n")
    )


DEFAULT_FILTERS: Dict[str, Callable[..., str]] = {
    "camel": to_camel,
    "comment": comment_lines,
}


class TemplateEngine:
    """Renders block templates from a directory or from memory."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        filters: Optional[Dict[str, Callable[..., str]]] = None,
    ):
        """
        Args:
            template_dir: Directory holding ``*.j2`` files; in-memory only
                when None or missing
            filters: Extra filters on top of ``camel`` and ``comment``
        """
        self.template_dir = template_dir

        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )
        self._env.filters.update(DEFAULT_FILTERS)
        self._env.filters.update(filters or {})

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template; any Jinja2 failure becomes TemplateError."""
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, source: str, context: Dict[str, Any]) -> str:
        """Render template source given inline."""
        try:
            return self._env.from_string(source).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, replacing a file loader if needed."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, file based when a directory is given."""
    return TemplateEngine(template_dir)
