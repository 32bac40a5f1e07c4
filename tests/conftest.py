from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import pytest

from symbol_codegen.codegen.core.config import WriterConfig
from symbol_codegen.codegen.core.documentation import DocumentationWriter
from symbol_codegen.codegen.core.imports import ImportContainer
from symbol_codegen.codegen.core.symbol import (
    ContextOption,
    Symbol,
    SymbolDependency,
    SymbolReference,
)
from symbol_codegen.codegen.core.writer import CodegenWriter


class RecordingImportContainer(ImportContainer):
    """Records every call and every newly recorded (symbol, alias) pair."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []
        self.recorded: List[Tuple[str, str]] = []
        self._seen = set()

    def import_symbol(self, symbol: Symbol, alias: str) -> bool:
        self.calls.append((symbol.name, alias))
        key = (symbol, alias)
        if key in self._seen:
            return False
        self._seen.add(key)
        self.recorded.append((symbol.name, alias))
        return True

    def render(self) -> str:
        return "\n".join(f"import {name} as {alias}" for name, alias in self.recorded)


class RecordingDocumentationWriter(DocumentationWriter):
    """Writes <doc> / </doc> delimiters and records the state depth it sees."""

    def __init__(self, events: List[str] | None = None) -> None:
        self.events = events if events is not None else []
        self.depths: List[int] = []

    def write_docs(self, writer, callback) -> None:
        self.events.append("open")
        self.depths.append(writer.state_depth)
        writer.write_with_no_formatting("<doc>")
        callback(writer)
        writer.write_with_no_formatting("</doc>")
        self.events.append("close")


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog keeps seeing package records."""
    logger = logging.getLogger("symbol_codegen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def container() -> RecordingImportContainer:
    return RecordingImportContainer()


@pytest.fixture
def docs_writer() -> RecordingDocumentationWriter:
    return RecordingDocumentationWriter()


@pytest.fixture
def make_writer(
    container: RecordingImportContainer, docs_writer: RecordingDocumentationWriter
) -> Callable[..., CodegenWriter]:
    """Build a CodegenWriter bound to the recording capabilities."""

    def _make(**config_overrides) -> CodegenWriter:
        return CodegenWriter(docs_writer, container, WriterConfig(**config_overrides))

    return _make


@pytest.fixture
def chain():
    """S -(untagged, alias A)-> T -(DECLARE, alias B)-> U, each with one pip dependency."""
    d_s = SymbolDependency("dep-s", "1.0", "pip")
    d_t = SymbolDependency("dep-t", "2.0", "pip")
    d_u = SymbolDependency("dep-u", "3.0", "pip")

    u = Symbol("U", "pkg.u", dependencies=[d_u])
    t = Symbol(
        "T",
        "pkg.t",
        dependencies=[d_t],
        references=[SymbolReference(u, "B", {ContextOption.DECLARE})],
    )
    s = Symbol(
        "S",
        "pkg.s",
        dependencies=[d_s],
        references=[SymbolReference(t, "A")],
    )
    return {"S": s, "T": t, "U": u, "d_s": d_s, "d_t": d_t, "d_u": d_u}


@pytest.fixture
def container_factory() -> Callable[[], RecordingImportContainer]:
    return RecordingImportContainer


@pytest.fixture
def docs_writer_factory() -> Callable[..., RecordingDocumentationWriter]:
    return RecordingDocumentationWriter
