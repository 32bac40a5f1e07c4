"""
Python import tracking.

Records ``from module import name [as alias]`` pairs per module.
"""

from typing import Dict, List, Optional, Set, Tuple

from ....logging_config import get_logger
from ...core.imports import ImportContainer
from ...core.symbol import Symbol
from ...core.templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)

BUILTIN_MODULES = frozenset({"", "builtins"})


class PythonImportContainer(ImportContainer):
    """Collects Python imports for one module."""

    def __init__(
        self, module_name: str, template_engine: Optional[TemplateEngine] = None
    ):
        """
        Initialize container.

        Args:
            module_name: Dotted name of the module being generated
            template_engine: Engine providing ``imports.py.j2``
        """
        self.module_name = module_name
        self.template_engine = template_engine or get_default_template_engine()
        self._imports: Dict[str, Set[Tuple[str, str]]] = {}

    def is_local(self, symbol: Symbol) -> bool:
        """True for builtins and names defined in the module itself."""
        return symbol.namespace in BUILTIN_MODULES or symbol.namespace == self.module_name

    def import_symbol(self, symbol: Symbol, alias: str) -> bool:
        if self.is_local(symbol):
            return False
        module = symbol.namespace

        entry = (symbol.name, alias or symbol.name)
        names = self._imports.setdefault(module, set())
        if entry in names:
            return False

        names.add(entry)
        logger.debug("Recorded Python import %s.%s as %s", module, *entry)
        return True

    @property
    def imports(self) -> List[Tuple[str, List[str]]]:
        """Sorted ``(module, ["Name", "Other as Alias"])`` pairs."""
        result = []
        for module in sorted(self._imports):
            names = [
                name if name == alias else f"{name} as {alias}"
                for name, alias in sorted(self._imports[module])
            ]
            result.append((module, names))
        return result

    def __len__(self) -> int:
        return sum(len(names) for names in self._imports.values())

    def render(self) -> str:
        if not self._imports:
            return ""
        return self.template_engine.render_template(
            "imports.py.j2", {"imports": self.imports}
        )
