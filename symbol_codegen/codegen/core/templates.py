"""
Jinja2 rendering for file preambles.

Language writers render their package clauses and import blocks from the
templates registered here; a directory of ``.j2`` files can replace them.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined

from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Raised when a preamble template is missing or fails to render."""

    pass


def indent_lines(value: Any, prefix: str = "\t") -> str:
    """Prefix every non-blank line."""
    return "\n".join(
        prefix + line if line.strip() else line for line in str(value).split("\n")
    )


def comment(value: Any, marker: str = "//") -> str:
    """Turn text into line comments; blank lines keep a bare marker."""
    return "\n".join(
        f"{marker} {line}" if line.strip() else marker for line in str(value).split("\n")
    )


def quote(value: Any) -> str:
    """Double-quote a value with backslash escapes."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class TemplateEngine:
    """Jinja2 environment configured for source text rather than markup."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory of template files; templates are kept in
                memory when omitted or missing
        """
        self.template_dir = template_dir
        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters.update(indent_lines=indent_lines, comment=comment, quote=quote)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a registered template.

        Raises:
            TemplateError: If the template is unknown or a variable is missing
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            logger.error("Failed to render template %s: %s", template_name, e)
            raise TemplateError(f"Cannot render {template_name}: {e}") from e

    def render_string(self, source: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.from_string(source).render(**context)
        except Exception as e:
            raise TemplateError(f"Cannot render inline template: {e}") from e

    def add_template(self, name: str, content: str):
        """Register ``content`` under ``name``, switching to in-memory loading."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()


GO_PACKAGE_TEMPLATE = """\
{% if header %}
{{ header | comment }}

{% endif %}
package {{ package_name }}
"""

GO_IMPORTS_TEMPLATE = """\
{% if imports | length == 1 %}
{% set imp = imports[0] %}
import {% if imp.alias %}{{ imp.alias }} {% endif %}{{ imp.path | quote }}
{% elif imports %}
import (
{% for imp in imports %}
{{ (((imp.alias ~ " ") if imp.alias else "") ~ (imp.path | quote)) | indent_lines }}
{% endfor %}
)
{% endif %}
"""

PYTHON_IMPORTS_TEMPLATE = """\
{% for module, names in imports %}
from {{ module }} import {{ names | join(", ") }}
{% endfor %}
"""

BUILTIN_TEMPLATES = {
    "package.go.j2": GO_PACKAGE_TEMPLATE,
    "imports.go.j2": GO_IMPORTS_TEMPLATE,
    "imports.py.j2": PYTHON_IMPORTS_TEMPLATE,
}

_shared_engine: Optional[TemplateEngine] = None


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create an engine; without a directory the built-in templates are loaded."""
    engine = TemplateEngine(template_dir)
    if template_dir is None:
        for name, content in BUILTIN_TEMPLATES.items():
            engine.add_template(name, content)
    return engine


def get_default_template_engine() -> TemplateEngine:
    """Return the engine shared by writers that were not given one."""
    global _shared_engine
    if _shared_engine is None:
        _shared_engine = create_template_engine()
    return _shared_engine
