"""
Symbol-aware code writer.

CodegenWriter is the entry point used by generators: it writes formatted
text like any CodeWriter while recording the dependencies and imports
required by the symbols it is asked to use.
"""

from typing import Any, Callable, Hashable, Iterable, Optional, Tuple, Union

from ...logging_config import get_logger
from .code_writer import CodeWriter
from .config import WriterConfig
from .dependencies import DependencyLedger
from .documentation import DocumentationWriter
from .imports import ImportContainer, ImportResolver
from .symbol import (
    ContextOption,
    Symbol,
    SymbolContainer,
    SymbolDependency,
    SymbolDependencyContainer,
    SymbolReference,
    iter_symbols,
)

logger = get_logger(__name__)


class CodegenWriter(CodeWriter):
    """
    CodeWriter that tracks symbol imports and package dependencies.

    Language-specific behavior is supplied by composition: the import
    container decides which symbols become import statements and the
    documentation writer decides how doc comments look. One instance is
    meant to produce one output file.

    Example:
        writer = CodegenWriter(LineCommentDocumentationWriter(), imports)
        writer.write_docs("Greeter says hello.")
        writer.import_symbol(greeter, "Greeter", ContextOption.USE)
    """

    def __init__(
        self,
        documentation_writer: DocumentationWriter,
        import_container: ImportContainer,
        config: Optional[WriterConfig] = None,
    ):
        """
        Initialize writer.

        Args:
            documentation_writer: Writes documentation comments around callbacks
            import_container: Records and filters imports
            config: Writer configuration

        Raises:
            TypeError: If either capability is missing
        """
        if documentation_writer is None:
            raise TypeError("CodegenWriter requires a documentation writer")
        if import_container is None:
            raise TypeError("CodegenWriter requires an import container")

        super().__init__(config)
        self._documentation_writer = documentation_writer
        self._import_container = import_container
        self._ledger = DependencyLedger()
        self._resolver = ImportResolver(
            import_container, self._ledger, detect_cycles=self.config.detect_cycles
        )

    @property
    def import_container(self) -> ImportContainer:
        """Import container bound to this writer."""
        return self._import_container

    @property
    def documentation_writer(self) -> DocumentationWriter:
        return self._documentation_writer

    @property
    def dependencies(self) -> Tuple[SymbolDependency, ...]:
        """Snapshot of every dependency recorded so far, duplicates included."""
        return self._ledger.snapshot()

    def add_dependency_source(
        self, source: SymbolDependencyContainer
    ) -> "CodegenWriter":
        """
        Record the dependencies exposed by ``source``.

        Tracked dependencies can be aggregated across writers to produce
        manifests for package managers (go.mod, requirements files, ...).

        Args:
            source: Symbol, reference, dependency, writer or any other value
                with a ``dependencies`` attribute

        Returns:
            The writer
        """
        values = tuple(source.dependencies)
        logger.debug(
            "Adding dependencies from %s: %s", source, ", ".join(map(str, values))
        )
        self._ledger.add(values)
        return self

    def import_symbol(
        self, symbol: Symbol, alias: str, *options: Hashable
    ) -> "CodegenWriter":
        """
        Import a symbol (if necessary) and the symbols it references.

        The symbol's dependencies are always recorded, the import container
        decides whether an import statement is needed, and then the symbol's
        references carrying one of ``options`` are imported the same way.
        With no options every reference is followed.

        Args:
            symbol: Symbol to import
            alias: Name to refer to the symbol by
            *options: ContextOption tags references must carry

        Returns:
            The writer

        Raises:
            CyclicReferenceError: If the followed references form a cycle
        """
        self._resolver.resolve(symbol, alias, options)
        return self

    def import_all(
        self, symbols: Union[SymbolContainer, Iterable[Symbol]]
    ) -> "CodegenWriter":
        """
        Import symbols for use under their own names.

        Args:
            symbols: Symbol container or iterable of symbols

        Returns:
            The writer
        """
        for symbol in iter_symbols(symbols):
            self.import_symbol(symbol, symbol.name, ContextOption.USE)
        return self

    def import_reference(self, reference: SymbolReference) -> "CodegenWriter":
        """Import the target of ``reference`` for use under its alias."""
        return self.import_symbol(reference.symbol, reference.alias, ContextOption.USE)

    def write_docs(
        self, docs: Union[str, Callable[["CodegenWriter"], Any]]
    ) -> "CodegenWriter":
        """
        Write a documentation comment.

        Callables receive the writer and perform their own writes; these are
        formatted normally, so a literal ``$`` must be escaped or written
        with write_with_no_formatting(). Strings are written verbatim.

        Args:
            docs: Documentation text or a callback writing it

        Returns:
            The writer
        """
        if isinstance(docs, str):
            text = docs
            return self.write_docs(lambda writer: writer.write_with_no_formatting(text))

        self.push_state()
        try:
            self._documentation_writer.write_docs(self, docs)
        finally:
            self.pop_state()
        return self
