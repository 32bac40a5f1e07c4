"""
Documentation comment writers.

A DocumentationWriter wraps the writes made by a callback in the comment
syntax of a target language. The calling writer has already pushed a
state, so implementations may change prefixes and filters freely.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .code_writer import CodeWriter

DocsCallback = Callable[["CodeWriter"], None]


class DocumentationWriter(ABC):
    """Renders a documentation comment around writer output."""

    @abstractmethod
    def write_docs(self, writer: "CodeWriter", callback: DocsCallback) -> None:
        """
        Write opening tokens, run ``callback(writer)``, write closing tokens.

        Args:
            writer: Writer whose state has already been pushed
            callback: Function performing the documentation writes
        """
        pass


class LineCommentDocumentationWriter(DocumentationWriter):
    """Prefixes every documentation line with a line-comment marker."""

    def __init__(self, prefix: str = "// "):
        self.prefix = prefix

    def write_docs(self, writer: "CodeWriter", callback: DocsCallback) -> None:
        writer.set_newline_prefix(self.prefix)
        callback(writer)


class BlockCommentDocumentationWriter(DocumentationWriter):
    """Javadoc-style ``/** ... */`` documentation comments."""

    def __init__(self, opening: str = "/**", line_prefix: str = " * ", closing: str = " */"):
        self.opening = opening
        self.line_prefix = line_prefix
        self.closing = closing

    @staticmethod
    def sanitize(content: str) -> str:
        """Keep documentation text from closing the comment early."""
        return content.replace("*/", "*\\/")

    def write_docs(self, writer: "CodeWriter", callback: DocsCallback) -> None:
        writer.write_with_no_formatting(self.opening)
        with writer.state():
            writer.set_newline_prefix(self.line_prefix)
            writer.set_content_filter(self.sanitize)
            callback(writer)
        writer.write_with_no_formatting(self.closing)
