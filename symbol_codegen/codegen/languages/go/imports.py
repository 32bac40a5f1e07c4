"""
Go import tracking.

Go imports whole packages, so the container records package paths and
their optional aliases rather than individual symbols.
"""

from typing import Dict, List, Optional

from ....logging_config import get_logger
from ...core.imports import ImportContainer
from ...core.symbol import Symbol
from ...core.templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)


def default_package_name(package_path: str) -> str:
    """Return the name a Go package is referred to by without an alias."""
    return package_path.rstrip("/").rsplit("/", 1)[-1]


class GoImportContainer(ImportContainer):
    """Collects Go package imports for one file."""

    def __init__(
        self, package_path: str, template_engine: Optional[TemplateEngine] = None
    ):
        """
        Initialize container.

        Args:
            package_path: Import path of the package being generated
            template_engine: Engine providing ``imports.go.j2``
        """
        self.package_path = package_path
        self.template_engine = template_engine or get_default_template_engine()
        self._imports: Dict[str, Optional[str]] = {}

    def import_symbol(self, symbol: Symbol, alias: str) -> bool:
        """
        Record the package of ``symbol``.

        An alias equal to the symbol name or to the package's own name means
        no explicit alias. The first alias recorded for a package is kept.
        """
        path = symbol.namespace
        if not path or path == self.package_path:
            return False

        package_alias = None
        if alias and alias not in (symbol.name, default_package_name(path)):
            package_alias = alias

        if path in self._imports:
            existing = self._imports[path]
            if package_alias and package_alias != existing:
                logger.debug(
                    "Package %s already imported as %s; ignoring alias %s",
                    path,
                    existing or default_package_name(path),
                    package_alias,
                )
            return False

        self._imports[path] = package_alias
        logger.debug("Recorded Go import %s (alias=%s)", path, package_alias)
        return True

    def qualifier(self, package_path: str) -> str:
        """Name used to qualify identifiers from ``package_path``."""
        alias = self._imports.get(package_path)
        return alias or default_package_name(package_path)

    @property
    def imports(self) -> List[Dict[str, Optional[str]]]:
        """Recorded imports sorted by path."""
        return [
            {"path": path, "alias": self._imports[path]}
            for path in sorted(self._imports)
        ]

    def __len__(self) -> int:
        return len(self._imports)

    def render(self) -> str:
        if not self._imports:
            return ""
        return self.template_engine.render_template(
            "imports.go.j2", {"imports": self.imports}
        )
