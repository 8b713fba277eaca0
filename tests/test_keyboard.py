"""Tests for routing input events through a console session."""

from __future__ import annotations

import pytest

from termdeck.console.events import (
    CodeClicked,
    EscapePressed,
    PrintableKey,
    PromptEdited,
    PromptSubmitted,
    SubmitCommand,
    SuggestionChosen,
    SuggestionHighlighted,
    TabPressed,
)
from termdeck.console.session import ConsoleSession
from termdeck.models.suggestion import Suggestion


@pytest.fixture
def session(engine, view):
    return ConsoleSession(engine, view=view)


@pytest.mark.asyncio
async def test_code_click_submits_literal_text(session, engine):
    assert await session.handle(CodeClicked("help")) is True
    engine.command.assert_awaited_once_with("help")


@pytest.mark.asyncio
async def test_prompt_submitted(session, engine):
    await session.handle(PromptSubmitted("roll d20"))
    engine.command.assert_awaited_once_with("roll d20")


@pytest.mark.asyncio
async def test_host_submit_command(session, engine):
    await session.handle(SubmitCommand("about"))
    engine.command.assert_awaited_once_with("about")


class TestPrintableKey:
    @pytest.mark.asyncio
    async def test_focuses_prompt(self, session, view):
        session.prompt.set_text("he")
        assert await session.handle(PrintableKey("l")) is True
        assert view.calls[-1] == "focus_prompt"
        assert session.prompt.text == "he"

    @pytest.mark.asyncio
    async def test_ignored_with_modifier(self, session, view):
        assert await session.handle(PrintableKey("l", modifiers=frozenset({"ctrl"}))) is False
        assert "focus_prompt" not in view.calls

    @pytest.mark.asyncio
    async def test_ignored_when_prompt_focused(self, session):
        assert await session.handle(PrintableKey("l", prompt_focused=True)) is False


class TestTab:
    @pytest.mark.asyncio
    async def test_takes_single_suggestion(self, session, engine):
        session.autocomplete.select_expression("roll [dice]")
        session.autocomplete.on_query_result([Suggestion(suggestion="roll d20")])

        assert await session.handle(TabPressed()) is True
        assert session.prompt.text == "roll d20"
        engine.command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_opens_list_when_nothing_to_take(self, session, view):
        session.prompt.set_text("ro")
        assert await session.handle(TabPressed()) is True
        assert session.autocomplete.is_open
        assert "request_suggestions" in view.calls

    @pytest.mark.asyncio
    async def test_empty_prompt(self, session):
        assert await session.handle(TabPressed()) is False
        assert not session.autocomplete.is_open


class TestEscape:
    @pytest.mark.asyncio
    async def test_closes_open_list(self, session):
        session.autocomplete.open(query=False)
        assert await session.handle(EscapePressed()) is True
        assert not session.autocomplete.is_open

    @pytest.mark.asyncio
    async def test_closed_list(self, session):
        assert await session.handle(EscapePressed()) is False


class TestPromptEdited:
    @pytest.mark.asyncio
    async def test_refreshes_and_opens(self, session, engine):
        engine.autocomplete.return_value = [("roll [dice]", "Roll dice")]

        assert await session.handle(PromptEdited("ro")) is True
        engine.autocomplete.assert_awaited_once_with("ro")
        assert session.prompt.text == "ro"
        assert session.autocomplete.is_open
        assert session.autocomplete.results[0].suggestion == "roll [dice]"

    @pytest.mark.asyncio
    async def test_no_results_keeps_list_closed(self, session, engine):
        await session.handle(PromptEdited("zz"))
        assert not session.autocomplete.is_open

    @pytest.mark.asyncio
    async def test_cleared_prompt_closes_list(self, session, engine):
        engine.autocomplete.return_value = [("help", "")]
        await session.handle(PromptEdited("h"))
        await session.handle(PromptEdited(""))
        assert not session.autocomplete.is_open
        assert session.autocomplete.results == []

    @pytest.mark.asyncio
    async def test_unchanged_text_is_ignored(self, session, engine):
        session.prompt.set_text("he")
        assert await session.handle(PromptEdited("he")) is False
        engine.autocomplete.assert_not_awaited()


class TestSuggestionEvents:
    @pytest.mark.asyncio
    async def test_chosen_selects_placeholder(self, session, engine):
        assert await session.handle(SuggestionChosen("roll [dice]")) is True
        assert session.prompt.selection == (5, 11)
        engine.command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_highlighted_previews(self, session, engine):
        session.autocomplete.open(query=False)
        session.autocomplete.on_query_result(
            [Suggestion(suggestion="help"), Suggestion(suggestion="notes")]
        )

        assert await session.handle(SuggestionHighlighted(1, "notes")) is True
        assert session.autocomplete.cursor_index == 1
        assert session.prompt.text == "notes"
        assert await session.handle(SuggestionHighlighted(1, "notes")) is False
        engine.command.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_event(session, caplog):
    assert await session.handle(object()) is False
    assert "Ignoring unknown console event" in caplog.text


class TestFragmentSuggestionEvents:
    @pytest.fixture
    def placeholder_session(self, session):
        session.autocomplete.select_expression("foo [bar]")
        session.autocomplete.on_query_result(
            [Suggestion(suggestion="baz"), Suggestion(suggestion="qux")]
        )
        return session

    @pytest.mark.asyncio
    async def test_highlight_fills_placeholder(self, placeholder_session):
        session = placeholder_session
        await session.handle(SuggestionHighlighted(0, "baz"))
        assert session.prompt.text == "foo [baz]"
        assert session.prompt.selection == (4, 9)

        await session.handle(SuggestionHighlighted(1, "qux"))
        assert session.prompt.text == "foo [qux]"

    @pytest.mark.asyncio
    async def test_tab_after_highlight_keeps_command(self, placeholder_session, engine):
        session = placeholder_session
        await session.handle(SuggestionHighlighted(0, "baz"))
        await session.handle(TabPressed())
        assert session.prompt.text == "foo [baz]"
        engine.command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_chosen_fills_placeholder(self, placeholder_session):
        session = placeholder_session
        await session.handle(SuggestionChosen("qux"))
        assert session.prompt.text == "foo [qux]"
        assert session.prompt.selected_text == "[qux]"
