"""
Go source file writer.

Combines a CodegenWriter with Go import handling, ``//`` documentation
comments and a ``$T`` formatter that imports and qualifies symbols.
"""

from typing import Any, Dict, Optional, Union

from ....logging_config import get_logger
from ...core.config import WriterConfig, load_config
from ...core.documentation import LineCommentDocumentationWriter
from ...core.symbol import ContextOption, Symbol, SymbolReference
from ...core.templates import TemplateEngine, get_default_template_engine
from ...core.writer import CodegenWriter
from .imports import GoImportContainer, default_package_name

logger = get_logger(__name__)


class GoWriter:
    """Writes one Go source file."""

    language_name = "go"
    file_extension = ".go"

    def __init__(
        self,
        package_path: str,
        config: Optional[WriterConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """
        Initialize writer.

        Args:
            package_path: Import path of the package being generated
            config: Writer configuration, defaults to the Go defaults
            template_engine: Engine providing the Go preamble templates
        """
        self.config = config or load_config("go")
        self.package_path = package_path
        self.package_name = self.config.package_name or default_package_name(
            package_path
        )
        self.template_engine = template_engine or get_default_template_engine()
        self.imports = GoImportContainer(package_path, self.template_engine)
        self.writer = CodegenWriter(
            LineCommentDocumentationWriter("// "), self.imports, self.config
        )
        self.writer.put_formatter("T", self._format_type)

    def _format_type(self, value: Union[Symbol, SymbolReference]) -> str:
        """Import a symbol for use and return its qualified Go name."""
        if isinstance(value, SymbolReference):
            self.writer.import_reference(value)
            symbol = value.symbol
        elif isinstance(value, Symbol):
            self.writer.import_symbol(value, value.name, ContextOption.USE)
            symbol = value
        else:
            return str(value)

        if not symbol.namespace or symbol.namespace == self.package_path:
            return symbol.name
        return f"{self.imports.qualifier(symbol.namespace)}.{symbol.name}"

    def render_preamble(self, header: str = "") -> str:
        """Render the package clause and import block."""
        parts = [
            self.template_engine.render_template(
                "package.go.j2",
                {"package_name": self.package_name, "header": header},
            )
        ]
        imports = self.imports.render()
        if imports:
            parts.append(imports)
        return "\n".join(parts)

    def to_source(self, header: str = "") -> str:
        """Return the complete file: package clause, imports, body."""
        body = self.writer.to_string()
        preamble = self.render_preamble(header)
        if not body:
            return preamble
        return f"{preamble}\n{body}"

    def metadata(self) -> Dict[str, Any]:
        return {
            "language": self.language_name,
            "file_extension": self.file_extension,
            "package": self.package_path,
            "import_count": len(self.imports),
            "dependency_count": len(self.writer.dependencies),
        }

    def __str__(self) -> str:
        return self.to_source()
