"""
Command-line interface for symbol-aware code writing.

Loads a symbol graph document, imports the requested symbols into a
language writer and prints the resulting source preamble together with
the dependencies the symbols require.
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Hashable, Iterable, List, Sequence

from rich import box
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from .codegen.core.config import ConfigError
from .codegen.core.dependencies import find_version_conflicts
from .codegen.core.graph import SymbolGraphError, load_symbol_graph, parse_option
from .codegen.core.imports import CyclicReferenceError
from .codegen.core.symbol import Symbol
from .codegen.core.templates import TemplateError
from .codegen.registry import RegistryError, get_registry
from .logging_config import configure_logging, get_logger
from .utils import GraphLoaderError, load_document

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for invalid command-line input."""

    pass


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symbol-codegen",
        description="Write import and dependency preambles from a symbol graph.",
    )
    parser.add_argument("graph", nargs="?", help="Symbol graph JSON file")
    parser.add_argument("--url", help="Fetch the symbol graph from a URL instead")
    parser.add_argument(
        "--language", "-l", default="go", help="Target language (default: go)"
    )
    parser.add_argument(
        "--namespace",
        "-n",
        help="Package path or module name of the generated file",
    )
    parser.add_argument(
        "--import",
        "-i",
        dest="symbols",
        action="append",
        metavar="ID",
        help="Symbol id to import (repeatable; default: every symbol for use)",
    )
    parser.add_argument(
        "--options",
        default="",
        help="Comma-separated reference options to follow, e.g. 'use,declare' "
        "(default: follow every reference)",
    )
    parser.add_argument("--docs", help="Documentation comment written into the body")
    parser.add_argument("--header", default="", help="File header comment")
    parser.add_argument("--config", metavar="FILE", help="JSON writer configuration")
    parser.add_argument(
        "--output", "-o", metavar="FILE", help="Write source to FILE instead of stdout"
    )
    parser.add_argument(
        "--show-dependencies",
        action="store_true",
        help="Print the dependencies required by the imported symbols",
    )
    parser.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    return parser


def parse_options(value: str) -> List[Hashable]:
    """Parse a comma-separated option list."""
    return [parse_option(part.strip()) for part in value.split(",") if part.strip()]


def select_symbols(symbols: Dict[str, Symbol], ids: Iterable[str]) -> List[Symbol]:
    """Look up symbols by id, keeping the requested order."""
    selected = []
    for symbol_id in ids:
        if symbol_id not in symbols:
            raise CLIError(
                f"Unknown symbol id: {symbol_id}. Available: {', '.join(symbols)}"
            )
        selected.append(symbols[symbol_id])
    return selected


def print_languages() -> None:
    registry = get_registry()
    table = Table(title="Supported Languages", box=box.ROUNDED)
    table.add_column("Language", style="cyan")
    table.add_column("Aliases")
    table.add_column("Extension")

    for language in registry.list_languages():
        info = registry.get_language_info(language)
        table.add_row(info["name"], ", ".join(info["aliases"]), info["file_extension"])

    console.print(table)


def print_dependencies(writer: Any) -> None:
    """Print a dependency table and any version conflicts."""
    counts = Counter(writer.dependencies)
    if not counts:
        console.print("[yellow]No dependencies required.[/yellow]")
        return

    table = Table(title="Dependencies", box=box.ROUNDED)
    table.add_column("Type", style="cyan")
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Uses", justify="right")

    for dependency, count in counts.items():
        table.add_row(
            dependency.dependency_type or "-",
            dependency.package_name,
            dependency.version or "-",
            str(count),
        )
    console.print(table)

    for (dependency_type, package), versions in find_version_conflicts([writer]).items():
        console.print(
            f"⚠️  [yellow]{package} ({dependency_type or 'untyped'}) requested at "
            f"versions {', '.join(versions)}[/yellow]"
        )


def run(args: argparse.Namespace) -> int:
    """Run the command for parsed arguments and return an exit code."""
    if args.list_languages:
        print_languages()
        return 0

    if not args.namespace:
        console.print("❌ [red]--namespace is required[/red]")
        return 1

    try:
        source, document = load_document(args.graph, args.url)
        symbols = load_symbol_graph(document)
        language_writer = get_registry().create_writer(
            args.language, args.namespace, args.config
        )
        writer = language_writer.writer

        if args.docs:
            writer.write_docs(args.docs)

        if args.symbols:
            options = parse_options(args.options)
            for symbol in select_symbols(symbols, args.symbols):
                writer.import_symbol(symbol, symbol.name, *options)
        else:
            writer.import_all(symbols.values())

        logger.info("Imported symbols from %s into %s", source, args.namespace)
        output = language_writer.to_source(header=args.header)
    except RecursionError:
        # Only reachable with detect_cycles disabled
        console.print("❌ [red]Symbol references recurse without end (cyclic graph)[/red]")
        logger.error("Code writing failed: recursion limit reached")
        return 1
    except (
        CLIError,
        ConfigError,
        CyclicReferenceError,
        GraphLoaderError,
        RegistryError,
        SymbolGraphError,
        TemplateError,
    ) as e:
        console.print(f"❌ [red]{e}[/red]")
        logger.error("Code writing failed: %s", e)
        return 1

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        console.print(f"✅ [green]Wrote {args.output}[/green]")
    else:
        console.print(Syntax(output, language_writer.language_name, line_numbers=False))

    if args.show_dependencies:
        print_dependencies(writer)

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    args = create_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=args.log_file)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
