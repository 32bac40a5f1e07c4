"""
Symbol model for code generation.

Symbols name entities in generated code (types, functions, constants).
Each symbol carries the references it needs to be used or declared and the
external package dependencies it brings along.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    Hashable,
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    runtime_checkable,
)


class ContextOption(Enum):
    """Contexts in which a symbol reference applies."""

    USE = "use"  # Referenced while the symbol is being consumed
    DECLARE = "declare"  # Referenced while the symbol is being defined


@runtime_checkable
class SymbolDependencyContainer(Protocol):
    """Anything that exposes a sequence of SymbolDependency values."""

    @property
    def dependencies(self) -> Tuple["SymbolDependency", ...]: ...


@runtime_checkable
class SymbolContainer(Protocol):
    """Anything that exposes a sequence of Symbols."""

    @property
    def symbols(self) -> Tuple["Symbol", ...]: ...


@dataclass(frozen=True)
class SymbolDependency:
    """
    External package requirement attached to a symbol.

    Identity is equality only; the same dependency may be recorded many
    times and aggregation is left to consumers.
    """

    package_name: str
    version: str = ""
    dependency_type: str = ""  # e.g. "go", "pip", "npm"
    properties: Dict[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )

    @property
    def dependencies(self) -> Tuple["SymbolDependency", ...]:
        """A dependency is a dependency source for itself."""
        return (self,)

    def __str__(self) -> str:
        coordinate = self.package_name
        if self.version:
            coordinate = f"{coordinate}@{self.version}"
        if self.dependency_type:
            coordinate = f"{self.dependency_type}:{coordinate}"
        return coordinate


@dataclass(frozen=True)
class Symbol:
    """
    Named, target-language entity.

    The reference list is the caller-owned part of the symbol graph: it is
    excluded from equality and hashing, and graph builders may fill it in
    after construction so mutually referencing symbols can be expressed.
    """

    name: str
    namespace: str = ""
    namespace_delimiter: str = "."
    references: List["SymbolReference"] = field(
        default_factory=list, compare=False, hash=False, repr=False
    )
    dependencies: Tuple[SymbolDependency, ...] = ()
    properties: Dict[str, Any] = field(
        default_factory=dict, compare=False, hash=False
    )

    def __post_init__(self):
        """Normalize sequence fields."""
        if not isinstance(self.references, list):
            object.__setattr__(self, "references", list(self.references))
        if not isinstance(self.dependencies, tuple):
            object.__setattr__(self, "dependencies", tuple(self.dependencies))

    @property
    def full_name(self) -> str:
        """Namespace-qualified name."""
        if not self.namespace:
            return self.name
        return f"{self.namespace}{self.namespace_delimiter}{self.name}"

    @property
    def symbols(self) -> Tuple["Symbol", ...]:
        return (self,)

    def relativize(self, namespace: str) -> str:
        """Return the bare name inside ``namespace``, the full name elsewhere."""
        if self.namespace == namespace:
            return self.name
        return self.full_name

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class SymbolReference:
    """
    Tagged edge from one symbol to another.

    An empty option set is allowed; such a reference is only followed by
    unfiltered import traversals.
    """

    symbol: Symbol
    alias: Optional[str] = None
    options: frozenset = frozenset()

    def __post_init__(self):
        """Default the alias and freeze the option set."""
        if self.alias is None:
            object.__setattr__(self, "alias", self.symbol.name)
        if not isinstance(self.options, frozenset):
            object.__setattr__(self, "options", frozenset(self.options))

    def has_option(self, option: Hashable) -> bool:
        return option in self.options

    @property
    def dependencies(self) -> Tuple[SymbolDependency, ...]:
        return self.symbol.dependencies

    @property
    def symbols(self) -> Tuple[Symbol, ...]:
        return (self.symbol,)


def reference(
    symbol: Symbol, alias: Optional[str] = None, *options: Hashable
) -> SymbolReference:
    """Shorthand for building a SymbolReference with positional options."""
    return SymbolReference(symbol, alias, frozenset(options))


def iter_symbols(source: Any) -> Iterable[Symbol]:
    """
    Iterate the symbols held by a symbol container or a plain iterable.

    Args:
        source: A Symbol, SymbolReference, SymbolContainer or iterable of Symbols

    Returns:
        Iterable of Symbol objects in their stored order
    """
    if isinstance(source, SymbolContainer):
        return source.symbols
    return source
