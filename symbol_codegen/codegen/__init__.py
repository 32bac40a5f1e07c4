"""
Symbol-aware code writing.

Writers emit formatted source text while tracking the imports and
package dependencies required by the symbols they use.
"""

from .core import (
    CodegenWriter,
    CodeWriter,
    CodeWriterError,
    ContextOption,
    CyclicReferenceError,
    DocumentationWriter,
    ImportContainer,
    Symbol,
    SymbolDependency,
    SymbolGraphError,
    SymbolReference,
    WriterConfig,
    collect_dependencies,
    find_version_conflicts,
    load_config,
    load_symbol_graph,
)
from .registry import (
    RegistryError,
    WriterRegistry,
    get_registry,
    get_writer,
    list_supported_languages,
)

__all__ = [
    "CodegenWriter",
    "CodeWriter",
    "CodeWriterError",
    "ContextOption",
    "CyclicReferenceError",
    "DocumentationWriter",
    "ImportContainer",
    "Symbol",
    "SymbolDependency",
    "SymbolGraphError",
    "SymbolReference",
    "WriterConfig",
    "collect_dependencies",
    "find_version_conflicts",
    "load_config",
    "load_symbol_graph",
    "RegistryError",
    "WriterRegistry",
    "get_registry",
    "get_writer",
    "list_supported_languages",
]
