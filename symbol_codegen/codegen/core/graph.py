"""
Symbol graph documents.

Builds Symbol objects from JSON-compatible documents of the form::

    {
      "symbols": {
        "greeter": {
          "name": "Greeter",
          "namespace": "example.com/greet",
          "dependencies": [{"package": "example.com/greet", "version": "v1.2.0",
                            "type": "go"}],
          "references": [{"symbol": "writer", "alias": "io", "options": ["use"]}]
        }
      }
    }

Symbols are created before references are attached, so documents may
describe mutually referencing (cyclic) graphs.
"""

from typing import Any, Dict, Hashable, List

from ...logging_config import get_logger
from .symbol import ContextOption, Symbol, SymbolDependency, SymbolReference

logger = get_logger(__name__)

_OPTION_NAMES = {option.value: option for option in ContextOption}


class SymbolGraphError(Exception):
    """Exception raised for malformed symbol graph documents."""

    pass


def parse_option(value: Any) -> Hashable:
    """Map ``"use"``/``"declare"`` to ContextOption; keep custom tags as-is."""
    if isinstance(value, str):
        return _OPTION_NAMES.get(value.lower(), value)
    return value


def _parse_dependency(symbol_id: str, entry: Any) -> SymbolDependency:
    if not isinstance(entry, dict) or "package" not in entry:
        raise SymbolGraphError(
            f"Dependency of symbol '{symbol_id}' must be an object with a 'package'"
        )
    extra = {
        key: value
        for key, value in entry.items()
        if key not in ("package", "version", "type")
    }
    return SymbolDependency(
        package_name=str(entry["package"]),
        version=str(entry.get("version", "")),
        dependency_type=str(entry.get("type", "")),
        properties=extra,
    )


def _create_symbol(symbol_id: str, entry: Any) -> Symbol:
    if not isinstance(entry, dict):
        raise SymbolGraphError(f"Symbol '{symbol_id}' must be an object")

    dependencies = entry.get("dependencies", [])
    if not isinstance(dependencies, list):
        raise SymbolGraphError(f"Dependencies of symbol '{symbol_id}' must be a list")

    properties = entry.get("properties", {})
    if not isinstance(properties, dict):
        raise SymbolGraphError(f"Properties of symbol '{symbol_id}' must be an object")

    return Symbol(
        name=str(entry.get("name", symbol_id)),
        namespace=str(entry.get("namespace", "")),
        namespace_delimiter=str(entry.get("namespace_delimiter", ".")),
        dependencies=tuple(_parse_dependency(symbol_id, d) for d in dependencies),
        properties=dict(properties),
    )


def _create_references(
    symbol_id: str, entry: Dict[str, Any], symbols: Dict[str, Symbol]
) -> List[SymbolReference]:
    references = entry.get("references", [])
    if not isinstance(references, list):
        raise SymbolGraphError(f"References of symbol '{symbol_id}' must be a list")

    result = []
    for ref in references:
        if isinstance(ref, str):
            ref = {"symbol": ref}
        if not isinstance(ref, dict) or not isinstance(ref.get("symbol"), str):
            raise SymbolGraphError(
                f"Reference of symbol '{symbol_id}' must name a target 'symbol'"
            )

        target_id = ref["symbol"]
        if target_id not in symbols:
            raise SymbolGraphError(
                f"Symbol '{symbol_id}' references unknown symbol '{target_id}'"
            )

        options = ref.get("options", [])
        if isinstance(options, str):
            options = [options]
        result.append(
            SymbolReference(
                symbols[target_id],
                ref.get("alias"),
                frozenset(parse_option(option) for option in options),
            )
        )
    return result


def load_symbol_graph(document: Dict[str, Any]) -> Dict[str, Symbol]:
    """
    Build symbols from a graph document.

    Args:
        document: Parsed JSON document with a top-level ``symbols`` object

    Returns:
        Mapping of symbol id to Symbol, in document order

    Raises:
        SymbolGraphError: If the document is malformed or references an
            unknown symbol id
    """
    if not isinstance(document, dict) or not isinstance(
        document.get("symbols"), dict
    ):
        raise SymbolGraphError("Symbol graph must be an object with a 'symbols' object")

    entries = document["symbols"]
    symbols = {
        symbol_id: _create_symbol(symbol_id, entry)
        for symbol_id, entry in entries.items()
    }

    # Second pass: references may point at any symbol, including earlier ones
    for symbol_id, entry in entries.items():
        symbols[symbol_id].references.extend(
            _create_references(symbol_id, entry, symbols)
        )

    logger.info("Loaded symbol graph with %d symbols", len(symbols))
    return symbols
