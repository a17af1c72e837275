"""
TypeScript code generator implementation.

Walks registered Python types, emits one TypeScript block per distinct
struct or enum reachable from them and places every block after the blocks
it depends on.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ...core.config import ConfigError, GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.introspect import (
    IntrospectionError,
    deep_fields,
    type_ref_for,
    type_ref_for_value,
)
from ...core.schema import FieldDescriptor, Kind, StructType, TypeRef
from ....logging_config import get_logger
from ....utils import (
    CUSTOM_CODE_END,
    backup_file,
    custom_code_start_marker,
    load_custom_code,
    write_output,
)
from .types import TS_ANY, TS_DATE, TS_STRING, TypeMapper

logger = get_logger(__name__)

# Enum values are discovered by probing 0 .. ENUM_PROBE_CEILING - 1
ENUM_PROBE_CEILING = 10000

FORM_CLASS = "class"
FORM_INTERFACE = "interface"
FORM_ENUM = "enum"


@dataclass
class ConversionSession:
    """State of a single conversion run."""

    custom_code: Optional[Dict[str, str]] = None
    visited: Set[Any] = field(default_factory=set)
    output_blocks: List[str] = field(default_factory=list)


class _BlockBuilder:
    """Collects field lines and the createFrom body of one block."""

    def __init__(self):
        self.fields: List[str] = []
        self.create_from: List[str] = []

    def add_simple_field(self, name: str, ts_type: str):
        self.fields.append(f"{name}: {ts_type};")
        self.create_from.append(f'result.{name} = source["{name}"];')

    def add_simple_array_field(self, name: str, ts_type: str):
        self.fields.append(f"{name}: {ts_type}[];")
        self.create_from.append(f'result.{name} = source["{name}"];')

    def add_struct_field(self, name: str, ts_type: str):
        self.fields.append(f"{name}: {ts_type};")
        self.create_from.append(
            f'result.{name} = source["{name}"] ? '
            f'{ts_type}.createFrom(source["{name}"]) : null;'
        )

    def add_array_of_structs_field(self, name: str, ts_type: str):
        self.fields.append(f"{name}: {ts_type}[];")
        self.create_from.append(
            f'result.{name} = source["{name}"] ? source["{name}"].map('
            f"function(element) {{ return {ts_type}.createFrom(element); }}) : null;"
        )

    def add_date_field(self, name: str):
        self.fields.append(f"{name}: {TS_DATE};")
        self.create_from.append(
            f'result.{name} = source["{name}"] ? new Date(source["{name}"]) : null;'
        )

    def add_array_of_dates_field(self, name: str):
        self.fields.append(f"{name}: {TS_DATE}[];")
        self.create_from.append(
            f'result.{name} = source["{name}"] ? source["{name}"].map('
            "function(element) { return new Date(element); }) : null;"
        )


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript classes, interfaces and enums."""

    def __init__(
        self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None
    ):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.type_mapper = TypeMapper(self._type_overrides())
        self._roots: List[TypeRef] = []

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def _type_overrides(self) -> Dict[Kind, str]:
        """Read ``type_overrides`` ({kind: ts_type}) from the custom settings."""
        overrides = {}
        for kind_name, ts_type in self.config.custom.get("type_overrides", {}).items():
            try:
                overrides[Kind(kind_name)] = ts_type
            except ValueError as e:
                raise ConfigError(f"Unknown kind in type_overrides: {kind_name}") from e
        return overrides

    # Registration

    def add(self, obj: Any):
        """Register the type of ``obj`` as a root."""
        self._register(type_ref_for_value(obj))

    def add_type(self, type_or_schema: Any):
        """Register a class, StructType or TypeRef as a root."""
        self._register(type_ref_for(type_or_schema))

    def _register(self, ref: TypeRef):
        target = ref.deref()
        if target.kind != Kind.STRUCT and not target.is_enum_candidate:
            raise IntrospectionError(
                f"Cannot convert {target.name!r}: only structs and enums can be roots"
            )
        self._roots.append(target)
        logger.debug("Registered root type %s", target.name)

    @property
    def roots(self) -> List[TypeRef]:
        """Registered roots in registration order."""
        return list(self._roots)

    # Conversion

    def convert(self, custom_code: Optional[Dict[str, str]] = None) -> str:
        """
        Convert all registered roots.

        Args:
            custom_code: Hand-written code per emitted type name. When given,
                every block gets custom-code markers holding its entry.

        Returns:
            Generated TypeScript code
        """
        return self.generate(self._roots, custom_code)

    def generate(
        self, roots: List[TypeRef], custom_code: Optional[Dict[str, str]] = None
    ) -> str:
        """Generate code for ``roots`` in a fresh conversion session."""
        session = ConversionSession(custom_code=custom_code)

        for root in roots:
            blocks = self._emit(root, session)
            if blocks:
                session.output_blocks.append("\n\n".join(blocks).strip())

        logger.info(
            "Converted %d root(s), %d type(s) visited", len(roots), len(session.visited)
        )
        return "\n\n".join(session.output_blocks)

    def generate_single_schema(self, root: TypeRef) -> str:
        """Generate code for one root and the types it references."""
        return self.generate([root])

    def convert_to_file(self, file_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Convert all registered roots into a file.

        An existing file is backed up first (unless ``backup_extension`` is
        empty) and its custom-code blocks are carried over. The file is only
        written once conversion succeeded.

        Args:
            file_path: Destination, defaults to ``config.output_file``

        Returns:
            Path of the written file
        """
        file_path = file_path or self.config.output_file
        if not file_path:
            raise GeneratorError("No output file given")

        if self.config.backup_extension:
            backup_file(file_path, self.config.backup_extension)

        custom_code = load_custom_code(file_path)
        code = self.convert(custom_code)
        return write_output(file_path, code, self.config.header)

    # Type graph traversal

    def _is_date(self, ref: TypeRef) -> bool:
        return ref.target is not None and any(
            ref.target is date_type for date_type in self.config.date_types
        )

    def _emitted_name(self, ref: TypeRef) -> str:
        return f"{self.config.prefix}{self.config.suffix}{ref.name}"

    def _form_of(self, ref: TypeRef) -> str:
        if ref.is_enum_candidate:
            return FORM_ENUM
        if self.config.use_interface:
            return FORM_INTERFACE
        return FORM_CLASS

    def _emit(self, ref: TypeRef, session: ConversionSession) -> List[str]:
        """
        Emit the block of ``ref`` preceded by the blocks it depends on.

        Returns an empty list for dates and already visited types. The type
        is marked visited before its fields are walked, so a reference cycle
        ends in a by-name reference instead of recursing forever.
        """
        ref = ref.deref()
        if self._is_date(ref):
            return []
        if ref.identity in session.visited:
            return []
        session.visited.add(ref.identity)

        name = self._emitted_name(ref)
        form = self._form_of(ref)
        dependencies: List[str] = []
        builder = _BlockBuilder()

        for descriptor in deep_fields(ref):
            json_name = descriptor.serialized_name
            if not json_name:
                continue
            self._add_field(builder, descriptor, json_name, session, dependencies)

        context = {
            "export": self.config.export_classes,
            "form": form,
            "name": name,
            "description": (
                ref.target.description if isinstance(ref.target, StructType) else None
            ),
            "indent": self.config.indent,
            "fields": builder.fields,
            "factory": (
                builder.create_from
                if form == FORM_CLASS and self.config.create_from_method
                else None
            ),
            "members": self._enum_members(ref) if form == FORM_ENUM else [],
            "custom_code": (
                session.custom_code.get(name, "")
                if session.custom_code is not None
                else None
            ),
            "start_marker": custom_code_start_marker(name),
            "end_marker": CUSTOM_CODE_END,
        }
        block = self.render_template("block.ts.j2", context)

        logger.debug("Emitted %s %s with %d field(s)", form, name, len(builder.fields))
        return dependencies + [block]

    def _depend_on(
        self, ref: TypeRef, session: ConversionSession, dependencies: List[str]
    ) -> str:
        """Emit ``ref`` ahead of everything collected so far; return its name."""
        dependencies[0:0] = self._emit(ref, session)
        return self._emitted_name(ref)

    def _add_field(
        self,
        builder: _BlockBuilder,
        descriptor: FieldDescriptor,
        json_name: str,
        session: ConversionSession,
        dependencies: List[str],
    ):
        field_type = descriptor.type.deref()

        if field_type.kind == Kind.MAP:
            builder.add_simple_field(
                json_name, self._map_type(field_type, session, dependencies)
            )
        elif field_type.kind == Kind.INTERFACE:
            builder.add_simple_field(json_name, TS_ANY)
        elif self._is_date(field_type):
            builder.add_date_field(json_name)
        elif field_type.kind == Kind.STRUCT:
            ts_type = self._depend_on(field_type, session, dependencies)
            builder.add_struct_field(json_name, ts_type)
        elif field_type.kind == Kind.SLICE:
            elem = field_type.elem.deref()
            if self._is_date(elem):
                builder.add_array_of_dates_field(json_name)
            elif elem.kind == Kind.STRUCT:
                ts_type = self._depend_on(elem, session, dependencies)
                builder.add_array_of_structs_field(json_name, ts_type)
            elif elem.is_enum_candidate:
                ts_type = self._depend_on(elem, session, dependencies)
                builder.add_simple_array_field(json_name, ts_type)
            else:
                ts_type = self.type_mapper.map_primitive(elem.kind, json_name, elem.name)
                builder.add_simple_array_field(json_name, ts_type)
        elif field_type.is_named_integer and field_type.is_enum_candidate:
            ts_type = self._depend_on(field_type, session, dependencies)
            builder.add_simple_field(json_name, ts_type)
        else:
            ts_type = self.type_mapper.map_primitive(
                field_type.kind, json_name, field_type.name
            )
            builder.add_simple_field(json_name, ts_type)

    def _map_type(
        self, ref: TypeRef, session: ConversionSession, dependencies: List[str]
    ) -> str:
        """``{[key: K]: V}`` for a map, emitting struct and enum values."""
        key_type = self.type_mapper.lookup(ref.key.deref().kind) if ref.key else None
        value = ref.elem.deref() if ref.elem else TypeRef(kind=Kind.INTERFACE)

        if self._is_date(value):
            value_type = TS_DATE
        elif value.kind == Kind.STRUCT or value.is_enum_candidate:
            value_type = self._depend_on(value, session, dependencies)
        else:
            value_type = self.type_mapper.lookup(value.kind) or TS_ANY

        return f"{{[key: {key_type or TS_STRING}]: {value_type}}}"

    def _enum_members(self, ref: TypeRef) -> List[Dict[str, str]]:
        """
        Probe enum values 0 .. ENUM_PROBE_CEILING - 1.

        A rendering that contains ``(value)`` is the renderer's fallback for
        a value without a name and is skipped, as is a value the type
        refuses to construct. Values outside the probed range are never
        found.
        """
        members = []
        for value in range(ENUM_PROBE_CEILING):
            try:
                rendered = ref.render(value)
            except (ValueError, TypeError) as e:
                logger.debug("%s rejects value %d: %s", ref.name, value, e)
                continue
            if f"({value})" in rendered:
                continue
            members.append(
                {
                    "label": rendered,
                    "value": rendered.replace("\\", "\\\\").replace("'", "\\'"),
                }
            )
        return members

    def validate_roots(self, roots: List[TypeRef]) -> List[str]:
        """Warn about roots whose fields would be dropped."""
        warnings = super().validate_roots(roots)

        for root in roots:
            if root.is_enum_candidate:
                if not self._enum_members(root):
                    warnings.append(
                        f"Enum {root.name} has no named values below {ENUM_PROBE_CEILING}"
                    )
                continue

            fields = deep_fields(root)
            if not fields:
                warnings.append(f"Type {root.name} has no fields")
            for descriptor in fields:
                if not descriptor.serialized_name:
                    warnings.append(
                        f"Field {root.name}.{descriptor.name} has no JSON name and is skipped"
                    )

        return warnings


def create_typescript_generator(
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
) -> TypeScriptGenerator:
    """Create a generator emitting exported classes with createFrom methods."""
    return TypeScriptGenerator(config)


def create_interface_generator(**overrides) -> TypeScriptGenerator:
    """Create a generator emitting plain interfaces."""
    settings = {"use_interface": True, "create_from_method": False}
    settings.update(overrides)
    return TypeScriptGenerator(settings)
