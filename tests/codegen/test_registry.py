from __future__ import annotations

import pytest

from symbol_codegen.codegen.core.config import WriterConfig
from symbol_codegen.codegen.languages.go import GoWriter
from symbol_codegen.codegen.languages.python import PythonWriter
from symbol_codegen.codegen.registry import (
    RegistryError,
    WriterRegistry,
    get_registry,
    get_writer,
    list_supported_languages,
)


@pytest.fixture
def registry() -> WriterRegistry:
    registry = WriterRegistry()
    registry.register("go", GoWriter, aliases=["golang"])
    registry.register("python", PythonWriter, aliases=["py"])
    return registry


def test_create_writer_by_name_or_alias(registry) -> None:
    writer = registry.create_writer("GoLang", "example.com/app")

    assert isinstance(writer, GoWriter)
    assert writer.config.indent_text == "\t"
    assert isinstance(registry.create_writer("py", "app.models"), PythonWriter)


def test_create_writer_config_sources(registry, tmp_path) -> None:
    explicit = WriterConfig(indent_text="  ")
    config_file = tmp_path / "writer.json"
    config_file.write_text('{"max_blank_lines": 0}', encoding="utf-8")

    assert registry.create_writer("go", "x", explicit).config is explicit
    assert registry.create_writer("go", "x", {"package_name": "y"}).package_name == "y"
    from_file = registry.create_writer("go", "x", str(config_file)).config
    assert from_file.max_blank_lines == 0
    assert from_file.indent_text == "\t"


def test_config_errors_are_registry_errors(registry, tmp_path) -> None:
    with pytest.raises(RegistryError, match="Failed to configure"):
        registry.create_writer("go", "x", tmp_path / "missing.json")
    with pytest.raises(RegistryError, match="Invalid config type"):
        registry.create_writer("go", "x", 42)


def test_unknown_language(registry) -> None:
    with pytest.raises(RegistryError, match="Available: go, python"):
        registry.create_writer("rust", "x")
    assert not registry.is_supported("rust")
    assert registry.is_supported("GOLANG")


def test_register_rejects_bad_factories_and_alias_conflicts(registry) -> None:
    with pytest.raises(RegistryError):
        registry.register("rust", "not callable")
    with pytest.raises(RegistryError, match="conflicts with existing primary"):
        registry.register("golang2", GoWriter, aliases=["go"])
    with pytest.raises(RegistryError, match="already points to"):
        registry.register("python3", PythonWriter, aliases=["py"])


def test_register_skips_existing_unless_replaced(registry) -> None:
    registry.register("go", PythonWriter)
    assert registry.get_factory("go") is GoWriter

    registry.register("go", PythonWriter, replace=True)
    assert registry.get_factory("golang") is PythonWriter


def test_unregister_removes_aliases(registry) -> None:
    registry.unregister("golang")

    assert registry.list_languages() == ["python"]
    assert registry.get_aliases_for_language("go") == []
    assert not registry.is_supported("golang")


def test_language_info(registry) -> None:
    assert registry.get_language_info("py") == {
        "name": "python",
        "writer": "PythonWriter",
        "file_extension": ".py",
        "aliases": ["py"],
    }


def test_global_registry_has_builtin_writers() -> None:
    assert get_registry() is get_registry()
    assert list_supported_languages() == ["go", "python"]
    assert isinstance(get_writer("golang", "example.com/app"), GoWriter)
