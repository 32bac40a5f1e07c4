"""
Python code writer module.

Writes Python modules with ``from ... import`` statements and docstrings.
"""

from typing import Any, Dict, Optional

from ...core.config import WriterConfig, load_config
from .imports import BUILTIN_MODULES, PythonImportContainer
from .writer import PythonDocstringWriter, PythonWriter

__all__ = [
    "PythonWriter",
    "PythonImportContainer",
    "PythonDocstringWriter",
    "BUILTIN_MODULES",
    "create_python_writer",
]


def create_python_writer(
    module_name: str,
    config: Optional[WriterConfig] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PythonWriter:
    """
    Create a Python writer.

    Args:
        module_name: Dotted name of the module being generated
        config: Full configuration; Python defaults are loaded when omitted
        overrides: Settings merged over the Python defaults (ignored with ``config``)

    Returns:
        Configured PythonWriter instance
    """
    if config is None:
        config = load_config("python", overrides)
    return PythonWriter(module_name, config)
