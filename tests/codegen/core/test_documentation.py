from __future__ import annotations

import pytest

from symbol_codegen.codegen.core.code_writer import CodeWriterError
from symbol_codegen.codegen.core.documentation import (
    BlockCommentDocumentationWriter,
    LineCommentDocumentationWriter,
)
from symbol_codegen.codegen.core.writer import CodegenWriter


def test_line_comments_prefix_every_line(container) -> None:
    writer = CodegenWriter(LineCommentDocumentationWriter("# "), container)

    writer.write_docs(lambda w: w.write("First $L.\nSecond.", 1))
    writer.write("code()")

    assert writer.to_string() == "# First 1.\n# Second.\ncode()\n"


def test_line_comments_follow_indentation(container) -> None:
    writer = CodegenWriter(LineCommentDocumentationWriter(), container)

    with writer.block("type T struct {", "}"):
        writer.write_docs("Name of the thing.")
        writer.write("Name string")

    assert writer.to_string() == (
        "type T struct {\n    // Name of the thing.\n    Name string\n}\n"
    )


def test_block_comments_wrap_and_sanitize(container) -> None:
    writer = CodegenWriter(BlockCommentDocumentationWriter(), container)

    writer.write_docs("Ends early */ not really.\nSecond line.")
    writer.write("class Thing {}")

    assert writer.to_string() == (
        "/**\n"
        " * Ends early *\\/ not really.\n"
        " * Second line.\n"
        " */\n"
        "class Thing {}\n"
    )
    assert writer.state_depth == 0


def test_block_comment_delimiters_are_configurable(container) -> None:
    writer = CodegenWriter(BlockCommentDocumentationWriter("/*", "** ", "*/"), container)

    writer.write_docs("Text")

    assert writer.to_string() == "/*\n** Text\n*/\n"


def test_block_comment_restores_state_when_callback_raises(container) -> None:
    writer = CodegenWriter(BlockCommentDocumentationWriter(), container)

    with pytest.raises(CodeWriterError):
        writer.write_docs(lambda w: w.write("$100 total"))

    assert writer.state_depth == 0
    writer.write("x = 1")
    assert writer.to_string() == "/**\nx = 1\n"
