"""
Language writer lookup.

Maps language names and their aliases to writer factories so callers can
ask for "golang" or "py" without importing the language packages.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..logging_config import get_logger
from .core.config import ConfigError, WriterConfig, load_config

logger = get_logger(__name__)

WriterFactory = Callable[[str, WriterConfig], Any]
ConfigSource = Union[WriterConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Raised for unknown languages, bad factories and alias clashes."""

    pass


class WriterRegistry:
    """Case-insensitive table of writer factories."""

    def __init__(self):
        self._factories: Dict[str, WriterFactory] = {}
        self._alias_targets: Dict[str, str] = {}

    def register(
        self,
        language: str,
        factory: WriterFactory,
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Add a writer factory.

        Args:
            language: Primary name, e.g. ``go``
            factory: Writer class or callable taking ``(namespace, config)``
            aliases: Extra names resolving to ``language``
            replace: Overwrite an existing entry instead of keeping it

        Raises:
            RegistryError: If ``factory`` is not callable or an alias is taken
        """
        if not callable(factory):
            raise RegistryError(f"Writer factory for {language} must be callable")

        key = language.lower()
        if key in self._factories and not replace:
            logger.debug("Writer for %s already registered; skipping", key)
            return
        self._factories[key] = factory

        for name in (alias.lower() for alias in aliases or []):
            if name == key:
                continue
            if not replace:
                self._check_alias(name, key)
            self._alias_targets[name] = key

    def _check_alias(self, name: str, key: str) -> None:
        if name in self._factories:
            raise RegistryError(f"Alias '{name}' conflicts with existing primary language")
        target = self._alias_targets.get(name, key)
        if target != key:
            raise RegistryError(f"Alias '{name}' already points to '{target}'")

    def unregister(self, language: str):
        """Remove a language together with every alias pointing at it."""
        key = self.resolve(language)
        self._factories.pop(key, None)
        self._alias_targets = {
            name: target for name, target in self._alias_targets.items() if target != key
        }

    def resolve(self, language: str) -> str:
        """Return the primary name for a language name or alias."""
        name = language.lower()
        return self._alias_targets.get(name, name)

    def get_factory(self, language: str) -> WriterFactory:
        key = self.resolve(language)
        try:
            return self._factories[key]
        except KeyError:
            raise RegistryError(
                f"No writer registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            ) from None

    def create_writer(self, language: str, namespace: str, config: ConfigSource = None):
        """
        Instantiate the writer for one generated file.

        Args:
            language: Name or alias
            namespace: Package path or module name being generated
            config: A WriterConfig used as is, a dict of overrides, a JSON
                settings file, or None for the language defaults

        Raises:
            RegistryError: If the language is unknown or its settings fail to load
        """
        factory = self.get_factory(language)
        key = self.resolve(language)
        writer_config = self._resolve_config(key, config)

        logger.debug("Creating %s writer for %s", key, namespace)
        return factory(namespace, writer_config)

    @staticmethod
    def _resolve_config(key: str, config: ConfigSource) -> WriterConfig:
        if isinstance(config, WriterConfig):
            return config
        if config is not None and not isinstance(config, (dict, str, Path)):
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            if isinstance(config, dict):
                return load_config(key, custom_config=config)
            return load_config(key, config_file=config)
        except ConfigError as e:
            raise RegistryError(f"Failed to configure {key} writer: {e}") from e

    def list_languages(self) -> List[str]:
        return sorted(self._factories)

    def get_aliases_for_language(self, language: str) -> List[str]:
        key = language.lower()
        return sorted(name for name, target in self._alias_targets.items() if target == key)

    def is_supported(self, language: str) -> bool:
        return self.resolve(language) in self._factories

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Summarize a registered language for listings."""
        factory = self.get_factory(language)
        key = self.resolve(language)
        return {
            "name": key,
            "writer": getattr(factory, "__name__", type(factory).__name__),
            "file_extension": getattr(factory, "file_extension", ""),
            "aliases": self.get_aliases_for_language(key),
        }


_registry: Optional[WriterRegistry] = None


def get_registry() -> WriterRegistry:
    """Return the shared registry with the built-in writers registered."""
    global _registry
    if _registry is None:
        _registry = WriterRegistry()
        _register_builtin_writers(_registry)
    return _registry


def _register_builtin_writers(registry: WriterRegistry):
    from .languages.go import GoWriter
    from .languages.python import PythonWriter

    registry.register("go", GoWriter, aliases=["golang"])
    registry.register("python", PythonWriter, aliases=["py"])


def get_writer(language: str, namespace: str, config: ConfigSource = None):
    """Create a writer through the shared registry."""
    return get_registry().create_writer(language, namespace, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()
