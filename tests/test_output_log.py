"""Tests for the append-only output log."""

from __future__ import annotations

from termdeck.console.output_log import OutputLog
from termdeck.console.prompt import PromptState
from termdeck.models.blocks import EchoBlock, ErrorBlock, ParagraphBlock, TextSpan


def test_echo_then_result(view):
    prompt = PromptState()
    log = OutputLog(prompt, view)

    log.append_echo("help")
    blocks = log.append_result("Hello")

    assert blocks == [ParagraphBlock(spans=(TextSpan(text="Hello"),))]
    assert log.blocks == (EchoBlock(command="help"), blocks[0])
    assert len(log) == 2
    assert view.written == list(log.blocks)


def test_append_scrolls_and_clears_prompt(view):
    prompt = PromptState()
    prompt.set_text_with_selection("roll [dice]", 5, 11)
    log = OutputLog(prompt, view)

    log.append_error("Engine offline")
    assert log.blocks == (ErrorBlock(text="Engine offline"),)
    assert view.calls[-2:] == ["write_blocks", "scroll_to_end"]
    assert prompt.text == ""
    assert prompt.selection is None


def test_blocks_are_only_appended():
    log = OutputLog(PromptState())
    log.append_result("one")
    first = log.blocks
    log.append_result("two\n\nthree")
    assert log.blocks[: len(first)] == first
    assert len(log) == 3


def test_custom_renderer():
    log = OutputLog(PromptState(), renderer=lambda raw: [ErrorBlock(text=raw.upper())])
    assert log.append_result("quiet") == [ErrorBlock(text="QUIET")]
