"""
Command line interface for tscriptify.

Resolves ``module:Name`` type references, converts them and prints the
TypeScript code or writes it to a file.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from .codegen.core.config import ConfigError, GeneratorConfig, get_config_manager
from .codegen.core.generator import GeneratorError, generate_code
from .codegen.languages.typescript import TypeScriptGenerator
from .logging_config import configure_logging, get_logger
from .utils import resolve_type

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tscriptify",
        description="Generate TypeScript classes, interfaces and enums from Python types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tscriptify myapp.models:Person
  tscriptify myapp.models:Person myapp.models:Order -o models.ts
  tscriptify myapp.models:Person --interface --prefix Api
  tscriptify --init-config tscriptify.json
        """.strip(),
    )

    parser.add_argument(
        "types",
        nargs="*",
        metavar="TYPE",
        help="Types to convert, as module:Name",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Write to FILE, keeping its custom code blocks (default: stdout)",
    )
    output_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file"
    )
    output_group.add_argument(
        "--no-backup",
        action="store_true",
        help="Don't back up an existing output file",
    )
    output_group.add_argument(
        "--init-config",
        metavar="FILE",
        help="Write the effective configuration to FILE and exit",
    )

    ts_group = parser.add_argument_group("TypeScript options")
    ts_group.add_argument("--prefix", help="Prefix for every emitted type name")
    ts_group.add_argument("--suffix", help="Suffix for every emitted type name")
    ts_group.add_argument("--indent", help="Indent string (default: four spaces)")
    ts_group.add_argument(
        "--interface",
        action="store_true",
        help="Emit interfaces instead of classes",
    )
    ts_group.add_argument(
        "--no-create-from",
        action="store_true",
        help="Don't generate static createFrom methods",
    )
    ts_group.add_argument(
        "--no-export",
        action="store_true",
        help="Don't prefix blocks with export",
    )
    ts_group.add_argument(
        "--date-type",
        action="append",
        metavar="TYPE",
        help="Additional type (module:Name) emitted as Date; may be repeated",
    )

    info_group = parser.add_argument_group("diagnostics")
    info_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show generation result metadata",
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )

    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    config_dict: Dict[str, Any] = {}

    if args.prefix is not None:
        config_dict["prefix"] = args.prefix
    if args.suffix is not None:
        config_dict["suffix"] = args.suffix
    if args.indent is not None:
        config_dict["indent"] = args.indent
    if args.interface:
        config_dict["use_interface"] = True
        config_dict["create_from_method"] = False
    if args.no_create_from:
        config_dict["create_from_method"] = False
    if args.no_export:
        config_dict["export_classes"] = False
    if args.no_backup:
        config_dict["backup_extension"] = ""
    if args.output:
        config_dict["output_file"] = args.output

    try:
        config = get_config_manager().get_config(
            custom_config=config_dict, config_file=args.config
        )
        if args.date_type:
            config.date_types.extend(_resolve(spec) for spec in args.date_type)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    return config


def _resolve(spec: str) -> Any:
    try:
        return resolve_type(spec)
    except (ImportError, AttributeError, ValueError) as e:
        raise CLIError(f"Cannot resolve {spec!r}: {e}") from e


def _build_generator(args: argparse.Namespace, config: GeneratorConfig) -> TypeScriptGenerator:
    """Create the generator and register the requested types."""
    generator = TypeScriptGenerator(config)
    for spec in args.types:
        try:
            generator.add_type(_resolve(spec))
        except GeneratorError as e:
            raise CLIError(str(e)) from e
    return generator


def _print_warnings(warnings: List[str]):
    if not warnings:
        return
    table = Table(title="⚠️  Warnings", box=box.SIMPLE, title_style="bold yellow")
    table.add_column("Warning", style="yellow")
    for warning in warnings:
        table.add_row(warning)
    console.print()
    console.print(table)


def _print_metadata(metadata: Dict[str, Any]):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


def _generate_and_output(
    generator: TypeScriptGenerator, args: argparse.Namespace, config_warnings: List[str]
) -> int:
    """Generate code and handle output with rich formatting."""
    roots = generator.roots

    if args.output:
        warnings = config_warnings + generator.validate_roots(roots)
        try:
            path = generator.convert_to_file(args.output)
        except GeneratorError as e:
            console.print(f"[red]✗ Code generation failed:[/red] {e}")
            return 1
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {args.output}:[/red] {e}")
            return 1

        console.print(f"[green]✓[/green] TypeScript code saved to [cyan]{path}[/cyan]")
        metadata = {
            "language": generator.language_name,
            "output_file": str(path),
            "root_count": len(roots),
        }
    else:
        result = generate_code(generator, roots)
        if not result.success:
            console.print(f"[red]✗ {result.error_message}[/red]")
            return 1

        warnings = config_warnings + result.warnings
        metadata = result.metadata
        console.print(Syntax(result.code, "typescript", theme="monokai"))

    if args.verbose:
        _print_metadata(metadata)
    _print_warnings(warnings)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = _build_config(args)

        if args.init_config:
            get_config_manager().save_config(config, args.init_config)
            console.print(
                f"[green]✓[/green] Configuration saved to [cyan]{args.init_config}[/cyan]"
            )
            return 0

        if not args.types:
            raise CLIError("At least one TYPE (module:Name) is required")

        config_warnings = get_config_manager().validate_config(config)
        generator = _build_generator(args, config)
        return _generate_and_output(generator, args, config_warnings)

    except (CLIError, ConfigError) as e:
        logger.debug("CLI failure", exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
