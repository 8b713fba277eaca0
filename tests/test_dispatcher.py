"""Tests for command submission."""

from __future__ import annotations

import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from termdeck.console.session import ConsoleSession
from termdeck.core.exceptions import RenderError
from termdeck.models.blocks import EchoBlock, ErrorBlock, ParagraphBlock, TextSpan


@pytest.fixture
def session(engine, view):
    return ConsoleSession(engine, view=view)


@pytest.mark.asyncio
async def test_plain_command_runs_once(session, engine):
    engine.command.return_value = "**20**"

    assert await session.dispatcher.submit("roll d20") is True
    engine.command.assert_awaited_once_with("roll d20")
    assert session.output.blocks == (
        EchoBlock(command="roll d20"),
        ParagraphBlock(spans=(TextSpan(text="20", bold=True),)),
    )


@pytest.mark.asyncio
async def test_placeholder_redirects_to_selection(session, engine):
    assert await session.dispatcher.submit("[abc]") is False
    engine.command.assert_not_awaited()
    assert session.prompt.text == "[abc]"
    assert session.prompt.selection == (0, 5)
    assert session.autocomplete.is_open
    assert session.output.blocks == ()


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   "])
async def test_empty_submission_is_ignored(session, engine, text):
    assert await session.dispatcher.submit(text) is False
    engine.command.assert_not_awaited()
    assert session.output.blocks == ()


@pytest.mark.asyncio
async def test_submission_closes_suggestions(session):
    session.autocomplete.open(query=False)
    await session.dispatcher.submit("help")
    assert not session.autocomplete.is_open


@pytest.mark.asyncio
async def test_prompt_is_cleared(session):
    session.prompt.set_text("help")
    await session.dispatcher.submit("help")
    assert session.prompt.text == ""


@pytest.mark.asyncio
async def test_engine_failure_becomes_error_block(session, engine, caplog):
    engine.command.side_effect = RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="termdeck"):
        assert await session.dispatcher.submit("help") is False
    assert session.output.blocks == (
        EchoBlock(command="help"),
        ErrorBlock(text="Command failed: boom"),
    )
    assert "Command failed" in caplog.text


@pytest.mark.asyncio
async def test_render_failure_becomes_error_block(session):
    session.output.renderer = Mock(side_effect=RenderError("Failed to parse result text"))

    assert await session.dispatcher.submit("help") is False
    assert session.output.blocks == (
        EchoBlock(command="help"),
        ErrorBlock(text="Failed to parse result text"),
    )


@pytest.mark.asyncio
async def test_results_keep_submission_order(session, engine):
    async def command(text):
        if text == "slow":
            await asyncio.sleep(0.05)
        return f"result of {text}"

    engine.command = AsyncMock(side_effect=command)

    await asyncio.gather(session.dispatcher.submit("slow"), session.dispatcher.submit("fast"))
    kinds = [(b.kind, getattr(b, "command", None)) for b in session.output.blocks]
    assert kinds == [
        ("echo", "slow"),
        ("paragraph", None),
        ("echo", "fast"),
        ("paragraph", None),
    ]
    assert session.output.blocks[1].spans[0].text == "result of slow"
    assert not session.dispatcher.busy


@pytest.mark.asyncio
async def test_redirect_waits_for_pending_command(session, engine):
    gate = asyncio.Event()

    async def command(text):
        await gate.wait()
        return f"result of {text}"

    engine.command = AsyncMock(side_effect=command)

    pending = asyncio.create_task(session.dispatcher.submit("slow"))
    await asyncio.sleep(0)
    redirect = asyncio.create_task(session.dispatcher.submit("roll [dice]"))
    await asyncio.sleep(0)
    gate.set()

    assert await pending is True
    assert await redirect is False
    assert session.prompt.text == "roll [dice]"
    assert session.prompt.selection == (5, 11)
    assert session.autocomplete.is_open
    engine.command.assert_awaited_once_with("slow")
