"""
Go code writer module.

Writes Go source files with package-level imports and ``//`` doc comments.
"""

from typing import Any, Dict, Optional

from ...core.config import WriterConfig, load_config
from .imports import GoImportContainer, default_package_name
from .writer import GoWriter

__all__ = [
    "GoWriter",
    "GoImportContainer",
    "default_package_name",
    "create_go_writer",
]


def create_go_writer(
    package_path: str,
    config: Optional[WriterConfig] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GoWriter:
    """
    Create a Go writer.

    Args:
        package_path: Import path of the package being generated
        config: Full configuration; Go defaults are loaded when omitted
        overrides: Settings merged over the Go defaults (ignored with ``config``)

    Returns:
        Configured GoWriter instance
    """
    if config is None:
        config = load_config("go", overrides)
    return GoWriter(package_path, config)
