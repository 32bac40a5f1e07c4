"""
Python source file writer.

Combines a CodegenWriter with ``from ... import`` handling, docstrings and a
``$T`` formatter that imports symbols and renders their local names.
"""

from typing import Any, Dict, Optional, Union

from ....logging_config import get_logger
from ...core.code_writer import CodeWriter
from ...core.config import WriterConfig, load_config
from ...core.documentation import DocsCallback, DocumentationWriter
from ...core.symbol import ContextOption, Symbol, SymbolReference
from ...core.templates import TemplateEngine, get_default_template_engine
from ...core.writer import CodegenWriter
from .imports import PythonImportContainer

logger = get_logger(__name__)


class PythonDocstringWriter(DocumentationWriter):
    """Writes documentation as a triple-quoted docstring."""

    quote = '"""'

    @classmethod
    def sanitize(cls, content: str) -> str:
        return content.replace(cls.quote, '\\"\\"\\"')

    def write_docs(self, writer: CodeWriter, callback: DocsCallback) -> None:
        writer.write_with_no_formatting(self.quote)
        with writer.state():
            writer.set_content_filter(self.sanitize)
            callback(writer)
        writer.write_with_no_formatting(self.quote)


class PythonWriter:
    """Writes one Python module."""

    language_name = "python"
    file_extension = ".py"

    def __init__(
        self,
        module_name: str,
        config: Optional[WriterConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """
        Initialize writer.

        Args:
            module_name: Dotted name of the module being generated
            config: Writer configuration, defaults to the Python defaults
            template_engine: Engine providing the import template
        """
        self.config = config or load_config("python")
        self.module_name = self.config.package_name or module_name
        self.template_engine = template_engine or get_default_template_engine()
        self.imports = PythonImportContainer(self.module_name, self.template_engine)
        self.writer = CodegenWriter(PythonDocstringWriter(), self.imports, self.config)
        self.writer.put_formatter("T", self._format_type)

    def _format_type(self, value: Union[Symbol, SymbolReference]) -> str:
        """Import a symbol for use and return the name it is bound to."""
        if isinstance(value, SymbolReference):
            self.writer.import_reference(value)
            if self.imports.is_local(value.symbol):
                return value.symbol.name
            return value.alias
        if isinstance(value, Symbol):
            self.writer.import_symbol(value, value.name, ContextOption.USE)
            return value.name
        return str(value)

    def to_source(self, header: str = "") -> str:
        """Return the complete module: optional docstring, imports, body."""
        parts = []
        if header:
            docs = CodeWriter(self.config)
            PythonDocstringWriter().write_docs(
                docs, lambda writer: writer.write_with_no_formatting(header)
            )
            parts.append(docs.to_string())

        imports = self.imports.render()
        if imports:
            parts.append(imports)

        body = self.writer.to_string()
        if body:
            parts.append(body)
        return "\n".join(parts)

    def metadata(self) -> Dict[str, Any]:
        return {
            "language": self.language_name,
            "file_extension": self.file_extension,
            "module": self.module_name,
            "import_count": len(self.imports),
            "dependency_count": len(self.writer.dependencies),
        }

    def __str__(self) -> str:
        return self.to_source()
