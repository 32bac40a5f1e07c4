from __future__ import annotations

import json
from pathlib import Path

import pytest

from symbol_codegen.cli import CLIError, create_parser, main, parse_options, select_symbols
from symbol_codegen.codegen.core.symbol import ContextOption, Symbol
from symbol_codegen.codegen.core.templates import TemplateError
from symbol_codegen.codegen.languages.go import GoWriter

NAMESPACE = "example.com/app/greet"


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    document = {
        "symbols": {
            "greeter": {
                "name": "Greeter",
                "namespace": "example.com/greet",
                "dependencies": [
                    {"package": "example.com/greet", "version": "v1.2.0", "type": "go"}
                ],
                "references": [
                    {"symbol": "caser", "alias": "cases", "options": ["use"]},
                    {"symbol": "stringer", "options": ["declare"]},
                ],
            },
            "caser": {
                "name": "Caser",
                "namespace": "golang.org/x/text/cases",
                "dependencies": [
                    {"package": "golang.org/x/text", "version": "v0.14.0", "type": "go"}
                ],
            },
            "stringer": {"name": "Stringer", "namespace": "fmt"},
        }
    }
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def cyclic_graph_file(tmp_path: Path) -> Path:
    document = {
        "symbols": {
            "a": {"name": "A", "namespace": "pkg/a", "references": [{"symbol": "b", "options": ["use"]}]},
            "b": {"name": "B", "namespace": "pkg/b", "references": [{"symbol": "a", "options": ["use"]}]},
        }
    }
    path = tmp_path / "cyclic.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_parser_defaults() -> None:
    args = create_parser().parse_args(["graph.json", "-n", "pkg"])

    assert args.language == "go"
    assert args.symbols is None
    assert args.options == ""


def test_parse_options() -> None:
    assert parse_options("use, declare,,runtime") == [
        ContextOption.USE,
        ContextOption.DECLARE,
        "runtime",
    ]
    assert parse_options("") == []


def test_select_symbols_keeps_requested_order() -> None:
    symbols = {"a": Symbol("A"), "b": Symbol("B")}

    assert select_symbols(symbols, ["b", "a"]) == [symbols["b"], symbols["a"]]
    with pytest.raises(CLIError, match="Unknown symbol id: c"):
        select_symbols(symbols, ["c"])


def test_imports_every_symbol_for_use_by_default(graph_file, tmp_path) -> None:
    output = tmp_path / "greet.go"

    code = main([str(graph_file), "-n", NAMESPACE, "-o", str(output)])

    assert code == 0
    assert output.read_text(encoding="utf-8") == (
        "package greet\n"
        "\n"
        "import (\n"
        '\t"example.com/greet"\n'
        '\t"fmt"\n'
        '\t"golang.org/x/text/cases"\n'
        ")\n"
    )


def test_selected_symbols_follow_requested_options(graph_file, tmp_path) -> None:
    output = tmp_path / "greet.go"

    code = main(
        [str(graph_file), "-n", NAMESPACE, "-i", "greeter", "--options", "declare", "-o", str(output)]
    )

    source = output.read_text(encoding="utf-8")
    assert code == 0
    assert '"fmt"' in source
    assert "golang.org/x/text/cases" not in source


def test_docs_and_header_are_written(graph_file, tmp_path) -> None:
    output = tmp_path / "greet.go"

    main(
        [
            str(graph_file),
            "-n",
            NAMESPACE,
            "-i",
            "stringer",
            "--docs",
            "Package greet says hello.",
            "--header",
            "Code generated. DO NOT EDIT.",
            "-o",
            str(output),
        ]
    )

    assert output.read_text(encoding="utf-8") == (
        "// Code generated. DO NOT EDIT.\n"
        "\n"
        "package greet\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "// Package greet says hello.\n"
    )


def test_python_output(graph_file, tmp_path) -> None:
    output = tmp_path / "models.py"

    code = main([str(graph_file), "-l", "py", "-n", "app.models", "-i", "stringer", "-o", str(output)])

    assert code == 0
    assert output.read_text(encoding="utf-8") == "from fmt import Stringer\n"


def test_stdout_and_dependency_table(graph_file, capsys) -> None:
    code = main([str(graph_file), "-n", NAMESPACE, "--show-dependencies"])

    captured = capsys.readouterr().out
    assert code == 0
    assert "package greet" in captured
    assert "v0.14.0" in captured
    assert "v1.2.0" in captured


def test_list_languages(capsys) -> None:
    assert main(["--list-languages"]) == 0
    assert "golang" in capsys.readouterr().out


@pytest.mark.parametrize(
    "extra",
    [
        ["-i", "ghost"],
        ["-l", "cobol"],
        ["--config", "missing.json"],
    ],
)
def test_invalid_input_exits_with_error(graph_file, extra) -> None:
    assert main([str(graph_file), "-n", NAMESPACE, *extra]) == 1


def test_missing_namespace(graph_file) -> None:
    assert main([str(graph_file)]) == 1


def test_missing_graph(tmp_path) -> None:
    assert main([str(tmp_path / "missing.json"), "-n", NAMESPACE]) == 1
    assert main(["-n", NAMESPACE]) == 1


def test_cyclic_graph_is_reported(cyclic_graph_file, capsys) -> None:
    code = main([str(cyclic_graph_file), "-n", NAMESPACE])

    assert code == 1
    assert "Cyclic symbol reference" in capsys.readouterr().out


def test_log_file_receives_debug_records(graph_file, tmp_path) -> None:
    log_file = tmp_path / "run.log"

    main([str(graph_file), "-n", NAMESPACE, "-o", str(tmp_path / "out.go"), "-v", "--log-file", str(log_file)])

    assert "Loaded symbol graph with 3 symbols" in log_file.read_text(encoding="utf-8")


def test_recursive_traversal_of_cyclic_graph_is_reported(cyclic_graph_file, tmp_path, capsys) -> None:
    config_file = tmp_path / "writer.json"
    config_file.write_text(json.dumps({"detect_cycles": False}), encoding="utf-8")

    code = main([str(cyclic_graph_file), "-n", NAMESPACE, "--config", str(config_file)])

    assert code == 1
    assert "recurse without end" in capsys.readouterr().out


def test_template_failures_are_reported(graph_file, monkeypatch, capsys) -> None:
    def broken_source(self, header=""):
        raise TemplateError("Cannot render package.go.j2: boom")

    monkeypatch.setattr(GoWriter, "to_source", broken_source)

    code = main([str(graph_file), "-n", NAMESPACE])

    assert code == 1
    assert "Cannot render package.go.j2" in capsys.readouterr().out
