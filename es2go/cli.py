"""
Command-line interface for es2go.

Generates a Go source file from an Elasticsearch index mapping.
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    GeneratorError,
    GeneratorOptions,
    MappingError,
    TemplateError,
    generate_datamodel,
)
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, OutputWriteError

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()
error_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="es2go",
        description="Generate Go structs from an Elasticsearch index mapping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  es2go --in cafe-mapping.json --out cafe.gen.go --struct CafeDoc --package searchmodel
  es2go --in cafe-mapping.json --out cafe.gen.go --struct CafeDoc --package searchmodel \\
        --init CafeDocWrapper --skip-field skip.json --tmpl custom.go.j2
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        "--in",
        dest="input_path",
        metavar="FILE",
        help="Input mapping JSON file",
    )
    input_group.add_argument(
        "--url",
        metavar="URL",
        help="Fetch the mapping from a URL (e.g. http://localhost:9200/cafe/_mapping)",
    )

    parser.add_argument(
        "--out", dest="output_path", metavar="FILE", required=True, help="Output Go file"
    )
    parser.add_argument(
        "--package", dest="package_name", metavar="NAME", required=True,
        help="Name of the Go package",
    )
    parser.add_argument(
        "--struct", dest="struct_name", metavar="NAME", required=True,
        help="Name of the generated root struct",
    )

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument(
        "--init", dest="wrapper_name", metavar="NAME",
        help="Name of a wrapper struct embedding the root struct",
    )
    overrides.add_argument(
        "--type-mapping", metavar="FILE",
        help="JSON file mapping Elasticsearch types to Go types",
    )
    overrides.add_argument(
        "--exception-field", metavar="FILE",
        help="JSON file mapping field names to Go field names",
    )
    overrides.add_argument(
        "--exception-type", metavar="FILE",
        help="JSON file mapping field names to Go types",
    )
    overrides.add_argument(
        "--skip-field", metavar="FILE",
        help="JSON file of fields to skip (name -> true)",
    )
    overrides.add_argument(
        "--field-comment", metavar="FILE",
        help="JSON file mapping field names to comments",
    )
    overrides.add_argument(
        "--tmpl", dest="template_path", metavar="FILE",
        help="Custom Jinja2 template for the output file",
    )

    go_group = parser.add_argument_group("Go-specific options")
    go_group.add_argument(
        "--unknown-type", default="interface{}", metavar="TYPE",
        help="Go type for unrecognized Elasticsearch types (default: interface{})",
    )
    go_group.add_argument(
        "--nested-as-slice", action="store_true",
        help="Type 'nested' fields as slices instead of pointers",
    )
    go_group.add_argument(
        "--strict-collisions", action="store_true",
        help="Fail when two different sub-mappings produce the same struct name",
    )
    go_group.add_argument(
        "--no-support-types", action="store_true",
        help="Don't emit helper structs such as GeoPoint",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    output_group.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def _build_options(args: argparse.Namespace) -> GeneratorOptions:
    """Build generator options from CLI arguments."""
    if args.wrapper_name is not None and not args.wrapper_name.strip():
        raise CLIError("--init must not be empty")

    return GeneratorOptions(
        wrapper_name=args.wrapper_name,
        type_mapping_path=args.type_mapping,
        exception_field_path=args.exception_field,
        exception_type_path=args.exception_type,
        skip_field_path=args.skip_field,
        field_comment_path=args.field_comment,
        template_path=args.template_path,
        unknown_type=args.unknown_type,
        nested_as_slice=args.nested_as_slice,
        emit_support_types=not args.no_support_types,
        strict_collisions=args.strict_collisions,
    )


def _validate_required(args: argparse.Namespace):
    for flag, value in (
        ("--out", args.output_path),
        ("--package", args.package_name),
        ("--struct", args.struct_name),
    ):
        if not value or not value.strip():
            raise CLIError(f"{flag} must not be empty")


def _print_metadata(metadata: dict):
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in metadata.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        metadata_table.add_row(key.replace("_", " ").title(), escape(str(value)))

    console.print()
    console.print(metadata_table)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the generator from command line arguments.

    Returns:
        Exit code (0 for success, 1 for errors; argparse exits with 2 on usage errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, console=error_console)

    try:
        _validate_required(args)
        options = _build_options(args)
        result = generate_datamodel(
            args.input_path,
            args.output_path,
            args.package_name,
            args.struct_name,
            options=options,
            url=args.url,
        )
    except CLIError as e:
        error_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
    except (JSONLoaderError, OutputWriteError) as e:
        error_console.print(f"[red]✗ I/O error:[/red] {escape(str(e))}")
        return 1
    except (ConfigError, MappingError) as e:
        error_console.print(f"[red]✗ Invalid document:[/red] {escape(str(e))}")
        return 1
    except (GeneratorError, TemplateError) as e:
        error_console.print(f"[red]✗ Code generation failed:[/red] {escape(str(e))}")
        return 1

    source = escape(args.input_path or args.url)
    console.print(
        f"[green]✓[/green] Generated Go struct for [cyan]{source}[/cyan] "
        f"and saved to [cyan]{escape(args.output_path)}[/cyan]"
    )

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {escape(warning)}")
        console.print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
