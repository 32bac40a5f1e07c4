"""
Import tracking for symbol-aware writers.

The ImportContainer is the language-specific policy that decides whether
a symbol needs an import statement. The ImportResolver walks a symbol's
reference graph, recording dependencies and feeding every reachable
symbol to the container.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Hashable, Iterable, List, Tuple

from ...logging_config import get_logger
from .dependencies import DependencyLedger
from .symbol import Symbol, SymbolReference

logger = get_logger(__name__)


class CyclicReferenceError(Exception):
    """Raised when an import traversal reaches a symbol already on its path."""

    def __init__(self, path: List[Tuple[Symbol, str]]):
        self.path = path
        chain = " -> ".join(f"{symbol.full_name} as {alias}" for symbol, alias in path)
        super().__init__(f"Cyclic symbol reference: {chain}")


class ImportContainer(ABC):
    """
    Language-specific import policy.

    Implementations must be idempotent: recording an equal symbol and alias
    twice must not produce two import statements.
    """

    @abstractmethod
    def import_symbol(self, symbol: Symbol, alias: str) -> bool:
        """
        Record that ``symbol`` is referred to as ``alias``.

        Args:
            symbol: Symbol being imported
            alias: Name the symbol is bound to at the use site

        Returns:
            True if this call recorded a new import
        """
        pass

    def render(self) -> str:
        """Render the import statements collected so far."""
        return ""

    def __str__(self) -> str:
        return self.render()


def follows(reference: SymbolReference, options: FrozenSet[Hashable]) -> bool:
    """Check whether a traversal filtered by ``options`` follows ``reference``."""
    if not options:
        return True
    return not reference.options.isdisjoint(options)


class ImportResolver:
    """Walks symbol reference graphs on behalf of a writer."""

    def __init__(
        self,
        container: ImportContainer,
        ledger: DependencyLedger,
        detect_cycles: bool = True,
    ):
        """
        Initialize resolver.

        Args:
            container: Import policy that receives every visited symbol
            ledger: Ledger that receives every visited symbol's dependencies
            detect_cycles: Raise CyclicReferenceError on cycles instead of
                recursing until the interpreter's recursion limit
        """
        self.container = container
        self.ledger = ledger
        self.detect_cycles = detect_cycles

    def resolve(
        self, symbol: Symbol, alias: str, options: Iterable[Hashable] = ()
    ) -> None:
        """
        Import ``symbol`` and everything it references under ``options``.

        Symbols are visited depth first in reference order, so ledger entries
        and container calls happen in the same order as a recursive walk.
        An empty option set follows every reference.

        Raises:
            CyclicReferenceError: If a symbol and alias repeat on one path
        """
        options = frozenset(options)
        if not self.detect_cycles:
            self._resolve_recursive(symbol, alias, options)
            return

        # Each entry carries the (symbol, alias) chain that led to it
        pending = [(symbol, alias, ())]
        while pending:
            current, current_alias, path = pending.pop()
            for seen, seen_alias in path:
                if seen is current and seen_alias == current_alias:
                    raise CyclicReferenceError(
                        list(path) + [(current, current_alias)]
                    )

            self._visit(current, current_alias, options)

            child_path = path + ((current, current_alias),)
            children = [
                (ref.symbol, ref.alias, child_path)
                for ref in current.references
                if follows(ref, options)
            ]
            pending.extend(reversed(children))

    def _resolve_recursive(
        self, symbol: Symbol, alias: str, options: FrozenSet[Hashable]
    ) -> None:
        self._visit(symbol, alias, options)
        for ref in symbol.references:
            if follows(ref, options):
                self._resolve_recursive(ref.symbol, ref.alias, options)

    def _visit(self, symbol: Symbol, alias: str, options: FrozenSet[Hashable]) -> None:
        logger.debug(
            "Adding import %s as `%s` (%s)",
            symbol.full_name,
            alias,
            ", ".join(sorted(str(getattr(o, "value", o)) for o in options)) or "all",
        )

        # Dependencies are recorded even when the container suppresses the import
        self.ledger.add(symbol.dependencies)
        self.container.import_symbol(symbol, alias)
