"""
CLI integration for source emission.

Provides the `render` and `sources` subcommands.
"""

import argparse
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..logging_config import get_logger
from ..utils import JSONLoaderError, load_json
from . import list_all_source_info
from .core import (
    ConfigError,
    DescriptionError,
    EmitterConfig,
    ScribeError,
    convert_description,
    generate_code,
    load_config,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich consoles; diagnostics go to stderr
console = Console()
err_console = Console(stderr=True)


def create_render_subparser(subparsers) -> argparse.ArgumentParser:
    """
    Create the `render` subcommand parser.

    Args:
        subparsers: Subparser group from main parser

    Returns:
        Configured subparser for the render command
    """
    parser = subparsers.add_parser(
        "render",
        help="Render a JSON declaration description to Java source",
        description="Render a JSON declaration description to a Java source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  scribe render taco.json
  scribe render taco.json --package com.example.tacos -o src/main/java
  scribe render taco.json -o Taco.java --show-imports
  scribe render - < taco.json
        """.strip(),
    )

    parser.add_argument("description", help="JSON description file, or - for stdin")
    parser.add_argument(
        "--output",
        "-o",
        metavar="PATH",
        help="Output .java file, or a source root directory (default: stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="Configuration file path (JSON)")
    parser.add_argument("--package", metavar="NAME", help="Override the package name")
    parser.add_argument("--indent", metavar="TEXT", help="Indent unit (default: two spaces)")
    parser.add_argument(
        "--keep-java-lang-imports",
        action="store_true",
        help="Write import lines for java.lang types",
    )
    parser.add_argument(
        "--show-imports",
        action="store_true",
        help="Show the resolved import plan",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    parser.set_defaults(func=handle_render_command)
    return parser


def create_sources_subparser(subparsers) -> argparse.ArgumentParser:
    """Create the `sources` subcommand parser."""
    parser = subparsers.add_parser(
        "sources",
        help="List registered annotation source adapters",
    )
    parser.set_defaults(func=handle_sources_command)
    return parser


def handle_render_command(args: argparse.Namespace) -> int:
    """
    Handle the render subcommand.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        source, description = load_json(args.description)
        config = _build_config(args)

        package_name = args.package if args.package is not None else (config.package_name or None)
        java_file = convert_description(description, package_name)
        logger.info(f"Rendering {java_file.type_spec.name} from {source}")

        result = generate_code(java_file, config)
        if not result.success:
            err_console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
            return 1

        _write_output(result, java_file, args)

        if args.show_imports:
            _print_imports(result.metadata.get("imports", []))
        if args.verbose and result.metadata:
            _print_metadata(result.metadata)
        if result.warnings:
            err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
            for warning in result.warnings:
                err_console.print(f"  [yellow]•[/yellow] {warning}")
        return 0

    except (FileNotFoundError, JSONLoaderError) as e:
        err_console.print(f"[red]✗ Input error:[/red] {e}")
        return 1
    except (ConfigError, DescriptionError) as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except ScribeError as e:
        err_console.print(f"[red]✗ Invalid declaration:[/red] {e}")
        return 1
    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def handle_sources_command(args: argparse.Namespace) -> int:
    """List registered annotation source adapters in a table."""
    source_info = list_all_source_info()

    if not source_info:
        console.print("[yellow]⚠️ No annotation sources registered[/yellow]")
        return 0

    table = Table(title="📋 Annotation Sources", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Kind", style="bold green", no_wrap=True)
    table.add_column("Adapter Class", style="dim")
    table.add_column("Aliases", style="blue")
    table.add_column("Description")

    for kind, info in sorted(source_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(kind, info["class"], aliases, info["description"])

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] AnnotationSpec.get([cyan]value[/cyan], include_defaults=True)",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _build_config(args: argparse.Namespace) -> EmitterConfig:
    """Build configuration from a config file plus CLI overrides."""
    overrides = {}
    if args.indent is not None:
        overrides["indent"] = args.indent
    if args.keep_java_lang_imports:
        overrides["skip_java_lang_imports"] = False
    return load_config(custom_config=overrides, config_file=args.config)


def _write_output(result, java_file, args: argparse.Namespace) -> None:
    output = getattr(args, "output", None)
    if not output:
        if console.is_terminal:
            console.print(Syntax(result.code, "java", theme="monokai"))
        else:
            # piped output is written unstyled
            sys.stdout.write(result.code)
            sys.stdout.flush()
        return

    output_path = Path(output)
    if output_path.suffix != ".java":
        output_path = output_path / java_file.relative_path()
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(result.code)
    except OSError as e:
        raise CLIError(f"Failed to write to {output_path}: {e}") from e
    console.print(f"[green]✓[/green] Wrote [cyan]{output_path}[/cyan]")


def _print_imports(imports) -> None:
    table = Table(title="📦 Imports", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Import", style="green")
    for name in imports:
        table.add_row(name)
    if not imports:
        table.add_row("[dim]none[/dim]")
    console.print(table)


def _print_metadata(metadata) -> None:
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")
    for key, value in metadata.items():
        if key == "imports":
            continue
        metadata_table.add_row(key.replace("_", " ").title(), str(value))
    console.print()
    console.print(metadata_table)
