"""Tests for the textual console, driven through textual's pilot."""

from __future__ import annotations

import pytest
from textual.widgets import Input, OptionList

from termdeck.adapters.builtin.demo import DemoEngine
from termdeck.console.events import SubmitCommand
from termdeck.models.blocks import EchoBlock, ErrorBlock
from termdeck.tui.app import TermdeckApp, click_action, step_highlight


def test_click_action():
    assert click_action("roll d20") == "app.click_code('roll d20')"


@pytest.mark.parametrize(
    "cursor,step,expected",
    [(-1, -1, 2), (-1, 1, 0), (0, -1, 2), (2, 1, 0), (1, 1, 2)],
)
def test_step_highlight(cursor, step, expected):
    assert step_highlight(cursor, step, 3) == expected


@pytest.mark.asyncio
async def test_welcome_is_shown():
    app = TermdeckApp(DemoEngine())
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.session.started
        assert app.session.output.blocks[0].kind == "heading"
        assert app.focused is app.query_one("#prompt", Input)


@pytest.mark.asyncio
async def test_typed_command_is_submitted():
    app = TermdeckApp(DemoEngine(), config={"display": {"show_welcome": False}})
    async with app.run_test() as pilot:
        await pilot.press("h", "e", "l", "p", "enter")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert EchoBlock(command="help") in app.session.output.blocks
        assert app.query_one("#prompt", Input).value == ""


@pytest.mark.asyncio
async def test_placeholder_submission_selects_bracket():
    app = TermdeckApp(DemoEngine(), config={"display": {"show_welcome": False}})
    async with app.run_test() as pilot:
        app.post_console_event(SubmitCommand("roll [dice]"))
        await app.workers.wait_for_complete()
        await pilot.pause()

        prompt = app.query_one("#prompt", Input)
        assert prompt.value == "roll [dice]"
        assert app.session.prompt.selection == (5, 11)
        assert app.session.output.blocks == ()


@pytest.mark.asyncio
async def test_suggestions_open_while_typing():
    app = TermdeckApp(DemoEngine(), config={"display": {"show_welcome": False}})
    async with app.run_test() as pilot:
        await pilot.press("r", "o")
        await app.workers.wait_for_complete()
        await pilot.pause()

        option_list = app.query_one("#suggestions", OptionList)
        assert app.session.autocomplete.is_open
        assert option_list.has_class("open")
        assert option_list.option_count == 1


@pytest.mark.asyncio
async def test_failed_start_is_visible(engine):
    engine.initialize.side_effect = RuntimeError("no backend")
    app = TermdeckApp(engine)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert app.session.output.blocks == (
            ErrorBlock(text="Failed to start the command engine: no backend"),
        )


@pytest.mark.asyncio
async def test_up_without_highlight_picks_last_suggestion():
    app = TermdeckApp(DemoEngine(), config={"display": {"show_welcome": False}})
    async with app.run_test() as pilot:
        await pilot.press("n", "o")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert [s.suggestion for s in app.session.autocomplete.results] == ["note [text]", "notes"]
        assert app.session.autocomplete.cursor_index == -1

        await pilot.press("up")
        await app.workers.wait_for_complete()
        await pilot.pause()

        assert app.session.autocomplete.cursor_index == 1
        assert app.session.prompt.text == "notes"
