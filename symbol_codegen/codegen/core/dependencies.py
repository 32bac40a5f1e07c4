"""
Dependency tracking for generated code.

A DependencyLedger records every SymbolDependency a writer encounters,
in order and with duplicates. The aggregation helpers at the bottom of
this module turn the ledgers of many writers into one manifest.
"""

from typing import Dict, Iterable, Iterator, List, Tuple

from ...logging_config import get_logger
from .symbol import SymbolDependency, SymbolDependencyContainer

logger = get_logger(__name__)


class DependencyLedger:
    """Ordered, append-only record of dependencies."""

    def __init__(self):
        self._entries: List[SymbolDependency] = []

    def add(self, dependencies: Iterable[SymbolDependency]) -> None:
        """Append every dependency in order, keeping duplicates."""
        self._entries.extend(dependencies)

    def snapshot(self) -> Tuple[SymbolDependency, ...]:
        """Return an immutable copy of everything recorded so far."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SymbolDependency]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"DependencyLedger({len(self._entries)} entries)"


def collect_dependencies(
    sources: Iterable[SymbolDependencyContainer],
) -> List[SymbolDependency]:
    """
    Merge the dependencies of several sources into one deduplicated list.

    Args:
        sources: Writers, symbols or anything else exposing ``dependencies``

    Returns:
        Dependencies in first-seen order, each equal value once
    """
    seen = set()
    merged = []
    for source in sources:
        for dependency in source.dependencies:
            if dependency in seen:
                continue
            seen.add(dependency)
            merged.append(dependency)
    return merged


def group_dependencies(
    sources: Iterable[SymbolDependencyContainer],
) -> Dict[str, List[SymbolDependency]]:
    """Group deduplicated dependencies by dependency type."""
    grouped: Dict[str, List[SymbolDependency]] = {}
    for dependency in collect_dependencies(sources):
        grouped.setdefault(dependency.dependency_type, []).append(dependency)
    return grouped


def find_version_conflicts(
    sources: Iterable[SymbolDependencyContainer],
) -> Dict[Tuple[str, str], List[str]]:
    """
    Find packages requested with more than one version.

    Returns:
        Mapping of (dependency_type, package_name) to the sorted versions
    """
    versions: Dict[Tuple[str, str], set] = {}
    for dependency in collect_dependencies(sources):
        key = (dependency.dependency_type, dependency.package_name)
        versions.setdefault(key, set()).add(dependency.version)

    conflicts = {}
    for key, requested in versions.items():
        if len(requested) > 1:
            conflicts[key] = sorted(requested)
            logger.warning(
                "Conflicting versions for %s package %s: %s",
                key[0] or "untyped",
                key[1],
                ", ".join(conflicts[key]),
            )
    return conflicts
