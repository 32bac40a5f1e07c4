"""
Core code writing components.

Provides the symbol model, the text writer and the symbol-aware writer
used by all language writers.
"""

from .code_writer import CodeWriter, CodeWriterError
from .config import ConfigError, ConfigManager, WriterConfig, load_config
from .dependencies import (
    DependencyLedger,
    collect_dependencies,
    find_version_conflicts,
    group_dependencies,
)
from .documentation import (
    BlockCommentDocumentationWriter,
    DocumentationWriter,
    LineCommentDocumentationWriter,
)
from .graph import SymbolGraphError, load_symbol_graph
from .imports import CyclicReferenceError, ImportContainer, ImportResolver
from .symbol import (
    ContextOption,
    Symbol,
    SymbolContainer,
    SymbolDependency,
    SymbolDependencyContainer,
    SymbolReference,
    reference,
)
from .templates import TemplateEngine, TemplateError, create_template_engine
from .writer import CodegenWriter

__all__ = [
    # Symbol model
    "ContextOption",
    "Symbol",
    "SymbolContainer",
    "SymbolDependency",
    "SymbolDependencyContainer",
    "SymbolReference",
    "reference",
    "SymbolGraphError",
    "load_symbol_graph",
    # Writers
    "CodeWriter",
    "CodeWriterError",
    "CodegenWriter",
    # Capabilities
    "ImportContainer",
    "ImportResolver",
    "CyclicReferenceError",
    "DocumentationWriter",
    "LineCommentDocumentationWriter",
    "BlockCommentDocumentationWriter",
    # Dependencies
    "DependencyLedger",
    "collect_dependencies",
    "group_dependencies",
    "find_version_conflicts",
    # Configuration
    "WriterConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
