"""
Language-specific code writers.

This module contains writers for different programming languages.
"""

from .go import GoImportContainer, GoWriter, create_go_writer
from .python import PythonImportContainer, PythonWriter, create_python_writer

__all__ = [
    "GoWriter",
    "GoImportContainer",
    "create_go_writer",
    "PythonWriter",
    "PythonImportContainer",
    "create_python_writer",
]
