"""
Writer settings.

WriterConfig holds the layout and traversal settings every writer reads.
ConfigManager layers them: built-in language defaults first, then a JSON
settings file, then explicit overrides.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised when writer settings cannot be read or written."""

    pass


@dataclass
class WriterConfig:
    """Settings shared by every writer."""

    # Text layout
    indent_text: str = "    "
    newline: str = "\n"
    trim_trailing_spaces: bool = True
    max_blank_lines: int = 2  # -1 keeps every blank line

    # Placeholder syntax
    expression_start: str = "$"

    # Import traversal; False restores plain recursion without cycle checks
    detect_cycles: bool = True

    # Package/module name override for the generated file
    package_name: str = ""

    # Settings only one language writer understands
    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "WriterConfig":
        """Build a config, folding keys that are not fields into ``custom``."""
        names = {f.name for f in fields(cls)}
        known = {key: value for key, value in values.items() if key in names}
        extra = {key: value for key, value in values.items() if key not in names}
        if extra:
            known["custom"] = {**known.get("custom", {}), **extra}
        return cls(**known)


# gofmt indents with tabs and separates declarations with one blank line
_LANGUAGE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "go": {
        "indent_text": "\t",
        "max_blank_lines": 1,
        "custom": {"group_imports": True},
    },
    "python": {
        "indent_text": "    ",
        "max_blank_lines": 2,
        "custom": {"sort_imports": True},
    },
}


class ConfigManager:
    """Resolves writer settings for a language."""

    def __init__(self):
        self._defaults: Dict[str, Dict[str, Any]] = copy.deepcopy(_LANGUAGE_DEFAULTS)

    def get_config(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[PathLike] = None,
    ) -> WriterConfig:
        """
        Resolve the settings for one writer.

        Args:
            language: Language key; unknown languages get WriterConfig() defaults
            custom_config: Overrides applied last
            config_file: JSON file applied over the language defaults

        Returns:
            A new WriterConfig

        Raises:
            ConfigError: If ``config_file`` cannot be read
        """
        values = copy.deepcopy(self._defaults.get(language.lower(), {}))
        if config_file:
            values.update(self._read_file(config_file))
        if custom_config:
            values.update(custom_config)

        logger.debug("Resolved %s writer config: %s", language, values)
        return WriterConfig.from_dict(values)

    def _read_file(self, config_path: PathLike) -> Dict[str, Any]:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Writer config not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Writer config must be a .json file: {path}")

        try:
            values = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Writer config {path} is not valid JSON: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read writer config {path}: {e}") from e

        if not isinstance(values, dict):
            raise ConfigError(f"Writer config {path} must hold a JSON object")
        return values

    def save_config(self, config: WriterConfig, output_path: PathLike) -> None:
        """Write ``config`` as JSON that get_config() can read back."""
        path = Path(output_path)
        try:
            path.write_text(
                json.dumps(asdict(config), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigError(f"Cannot write writer config {path}: {e}") from e

    def list_languages(self) -> List[str]:
        return list(self._defaults)

    def validate_config(self, config: WriterConfig) -> List[str]:
        """Return a warning for every setting that will misbehave."""
        problems = []

        if config.indent_text.strip():
            problems.append(f"indent_text should be whitespace: {config.indent_text!r}")
        if config.newline not in ("\n", "\r\n"):
            problems.append(f"Unsupported newline: {config.newline!r}")

        start = config.expression_start
        if len(start) != 1 or start.isspace() or start.isalnum():
            problems.append(f"Invalid expression_start: {start!r}")

        if config.max_blank_lines < -1:
            problems.append(f"Invalid max_blank_lines: {config.max_blank_lines}")
        if not config.detect_cycles:
            problems.append(
                "detect_cycles is disabled: cyclic symbol graphs will exhaust the stack"
            )

        return problems


_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Return the process-wide ConfigManager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def load_config(
    language: str,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[PathLike] = None,
) -> WriterConfig:
    """Shorthand for ``get_config_manager().get_config(...)``."""
    return get_config_manager().get_config(language, custom_config, config_file)
