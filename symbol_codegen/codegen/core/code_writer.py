"""
Line-oriented text writer for generated source code.

Handles indentation, per-line prefixes, placeholder formatting and a
stack of formatting states that can be pushed and popped around scoped
writes (blocks, documentation comments, sections).
"""

import json
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterator, List, Optional

from .config import WriterConfig

Formatter = Callable[[Any], str]


class CodeWriterError(Exception):
    """Exception raised for formatting and state stack errors."""

    pass


@dataclass
class _WriterState:
    """Formatting settings that are saved and restored by push/pop."""

    indent_level: int = 0
    indent_text: str = "    "
    newline_prefix: str = ""
    expression_start: str = "$"
    content_filter: Optional[Callable[[str], str]] = None


def _format_literal(value: Any) -> str:
    return "" if value is None else str(value)


def _format_string(value: Any) -> str:
    return json.dumps(_format_literal(value), ensure_ascii=False)


class CodeWriter:
    """Writes formatted, indented source text."""

    def __init__(self, config: Optional[WriterConfig] = None):
        """
        Initialize the writer.

        Args:
            config: Writer configuration, defaults to WriterConfig()
        """
        self.config = config or WriterConfig()
        self._chunks: List[str] = []
        self._at_line_start = True
        self._states: List[_WriterState] = [
            _WriterState(
                indent_text=self.config.indent_text,
                expression_start=self.config.expression_start,
            )
        ]
        self._formatters: Dict[str, Formatter] = {
            "L": _format_literal,
            "S": _format_string,
        }

    @property
    def _state(self) -> _WriterState:
        return self._states[-1]

    # State stack

    @property
    def state_depth(self) -> int:
        """Number of states pushed on top of the root state."""
        return len(self._states) - 1

    def push_state(self) -> "CodeWriter":
        """Save a copy of the current formatting state."""
        self._states.append(replace(self._state))
        return self

    def pop_state(self) -> "CodeWriter":
        """Restore the formatting state saved by the matching push_state()."""
        if len(self._states) == 1:
            raise CodeWriterError("Cannot pop the root writer state")
        self._states.pop()
        return self

    @contextmanager
    def state(self) -> Iterator["CodeWriter"]:
        """Push a state for the duration of a ``with`` block."""
        self.push_state()
        try:
            yield self
        finally:
            self.pop_state()

    # State settings

    def indent(self, levels: int = 1) -> "CodeWriter":
        self._state.indent_level += levels
        return self

    def dedent(self, levels: int = 1) -> "CodeWriter":
        if self._state.indent_level - levels < 0:
            raise CodeWriterError(
                f"Cannot dedent {levels} level(s) from level {self._state.indent_level}"
            )
        self._state.indent_level -= levels
        return self

    def set_newline_prefix(self, prefix: str) -> "CodeWriter":
        """Set text written at the start of every new line (after indentation)."""
        self._state.newline_prefix = prefix
        return self

    def set_content_filter(
        self, content_filter: Optional[Callable[[str], str]]
    ) -> "CodeWriter":
        """Set a function applied to written content before it is buffered."""
        self._state.content_filter = content_filter
        return self

    def set_expression_start(self, char: str) -> "CodeWriter":
        if len(char) != 1 or char.isspace() or char.isalnum():
            raise CodeWriterError(f"Invalid expression start character: {char!r}")
        self._state.expression_start = char
        return self

    def put_formatter(self, key: str, formatter: Formatter) -> "CodeWriter":
        """
        Register a formatter for ``$<key>`` placeholders.

        Args:
            key: Single uppercase letter
            formatter: Function converting the argument to text
        """
        if len(key) != 1 or not key.isupper():
            raise CodeWriterError(
                f"Formatter keys must be a single uppercase letter, got {key!r}"
            )
        self._formatters[key] = formatter
        return self

    # Formatting

    def format(self, content: str, *args: Any, **kwargs: Any) -> str:
        """
        Expand placeholders in ``content``.

        ``$$`` writes a literal expression start, ``$L`` consumes the next
        positional argument, ``$2L`` uses the second positional argument and
        ``$name:L`` uses a keyword argument.

        Raises:
            CodeWriterError: On unknown formatters, missing or unused arguments
        """
        start = self._state.expression_start
        if start not in content:
            if args:
                raise CodeWriterError(
                    f"Unused arguments for content without placeholders: {content!r}"
                )
            return content

        result = []
        used = set()
        relative = 0
        position = 0
        length = len(content)

        while position < length:
            char = content[position]
            position += 1
            if char != start:
                result.append(char)
                continue
            if position >= length:
                raise CodeWriterError(f"Dangling {start!r} at end of {content!r}")

            char = content[position]
            if char == start:
                result.append(start)
                position += 1
                continue

            if char.isdigit():
                end = position
                while end < length and content[end].isdigit():
                    end += 1
                index = int(content[position:end]) - 1
                if end >= length:
                    raise CodeWriterError(f"Missing formatter after {start}{index + 1}")
                if index < 0 or index >= len(args):
                    raise CodeWriterError(
                        f"Positional argument {index + 1} out of range in {content!r}"
                    )
                value = args[index]
                used.add(index)
                key = content[end]
                position = end + 1
            elif char.islower() or char == "_":
                end = position
                while end < length and (content[end].isalnum() or content[end] == "_"):
                    end += 1
                name = content[position:end]
                if end + 1 >= length or content[end] != ":":
                    raise CodeWriterError(
                        f"Named argument {name!r} must be followed by ':' and a formatter"
                    )
                if name not in kwargs:
                    raise CodeWriterError(f"Missing named argument {name!r}")
                value = kwargs[name]
                key = content[end + 1]
                position = end + 2
            else:
                if relative >= len(args):
                    raise CodeWriterError(f"Not enough arguments for {content!r}")
                value = args[relative]
                used.add(relative)
                relative += 1
                key = char
                position += 1

            result.append(self._apply_formatter(key, value))

        if len(used) != len(args):
            raise CodeWriterError(
                f"{len(args) - len(used)} unused positional argument(s) for {content!r}"
            )
        return "".join(result)

    def _apply_formatter(self, key: str, value: Any) -> str:
        formatter = self._formatters.get(key)
        if formatter is None:
            raise CodeWriterError(f"Unknown formatter {key!r}")
        return formatter(value)

    # Writing

    def write(self, content: str = "", *args: Any, **kwargs: Any) -> "CodeWriter":
        """Format ``content`` and write it followed by a newline."""
        self._write_content(self.format(content, *args, **kwargs))
        self._append("\n")
        return self

    def write_inline(self, content: str, *args: Any, **kwargs: Any) -> "CodeWriter":
        """Format ``content`` and write it without a trailing newline."""
        self._write_content(self.format(content, *args, **kwargs))
        return self

    def write_with_no_formatting(self, content: Any) -> "CodeWriter":
        """Write ``content`` verbatim (no placeholder expansion) plus a newline."""
        self._write_content(str(content))
        self._append("\n")
        return self

    def newline(self) -> "CodeWriter":
        self._append("\n")
        return self

    @contextmanager
    def block(
        self, opening: str, closing: str, *args: Any, **kwargs: Any
    ) -> Iterator["CodeWriter"]:
        """Write ``opening``, indent the body of the ``with`` block, write ``closing``."""
        self.write(opening, *args, **kwargs)
        self.indent()
        try:
            yield self
        finally:
            self.dedent()
        self.write(closing)

    def _write_content(self, content: str) -> None:
        content_filter = self._state.content_filter
        if content_filter is not None:
            content = content_filter(content)
        self._append(content)

    def _append(self, text: str) -> None:
        state = self._state
        parts = text.split("\n")
        last = len(parts) - 1
        for index, part in enumerate(parts):
            if index:
                self._chunks.append("\n")
                self._at_line_start = True
            if index == last and not part:
                continue
            if self._at_line_start:
                self._chunks.append(
                    state.indent_text * state.indent_level + state.newline_prefix
                )
                self._at_line_start = False
            self._chunks.append(part)

    # Output

    def to_string(self) -> str:
        """Return the written text with configured cleanup applied."""
        lines = "".join(self._chunks).split("\n")
        if self.config.trim_trailing_spaces:
            lines = [line.rstrip() for line in lines]

        cleaned = []
        blank_count = 0
        for line in lines:
            if line.strip():
                blank_count = 0
                cleaned.append(line)
                continue
            blank_count += 1
            if self.config.max_blank_lines < 0 or blank_count <= self.config.max_blank_lines:
                cleaned.append(line)

        while cleaned and not cleaned[-1].strip():
            cleaned.pop()
        if not cleaned:
            return ""
        newline = self.config.newline
        return newline.join(cleaned) + newline

    def __str__(self) -> str:
        return self.to_string()
