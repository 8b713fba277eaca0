"""Root CLI group — entry point for all termdeck commands."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

import click
from rich.markup import escape

from termdeck import __version__
from termdeck.adapters.protocol import CommandEngine
from termdeck.core.config import load_config
from termdeck.core.exceptions import TermdeckError
from termdeck.core.logs import setup_logging
from termdeck.output.formatter import OutputFormatter


class ConsoleContext:
    """Shared context passed through Click commands."""

    def __init__(self, json_mode: bool = False, engine_name: str | None = None) -> None:
        self.json_mode = json_mode
        self.engine_name = engine_name
        self.formatter = OutputFormatter(json_mode=json_mode)
        self._config: dict[str, Any] | None = None
        self._engine: CommandEngine | None = None

    def get_config(self) -> dict[str, Any]:
        """Lazy-load the configuration and start diagnostic logging."""
        if self._config is None:
            self._config = load_config()
            setup_logging(self._config)
        return self._config

    def get_engine(self) -> CommandEngine:
        """Lazy-load the configured command engine."""
        if self._engine is None:
            from termdeck.adapters.registry import EngineRegistry

            name = self.engine_name or self.get_config()["engine"]["name"]
            self._engine = EngineRegistry().load_engine(name)
        return self._engine

    def set_engine(self, engine: CommandEngine) -> None:
        self._engine = engine


pass_context = click.make_pass_decorator(ConsoleContext, ensure=True)


class JsonGroup(click.Group):
    """Click group that reports TermdeckError as a formatted error."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except TermdeckError as e:
            obj = ctx.find_object(ConsoleContext)
            if obj is not None and obj.json_mode:
                obj.formatter.json_error(str(e))
            else:
                click.echo(f"Error: {e}", err=True)
            sys.exit(1)


@click.group(cls=JsonGroup, invoke_without_command=True)
@click.option("--json", "json_mode", is_flag=True, help="Output JSON for agent consumption.")
@click.option("--engine", "engine_name", default=None, help="Engine name or module:attribute path.")
@click.version_option(__version__, prog_name="termdeck")
@click.pass_context
def cli(ctx: click.Context, json_mode: bool, engine_name: str | None) -> None:
    """termdeck — a text-command console with placeholder autocomplete.

    Run without a subcommand to launch the full-screen console.
    """
    if not isinstance(ctx.obj, ConsoleContext):
        ctx.obj = ConsoleContext(json_mode=json_mode, engine_name=engine_name)
    else:
        ctx.obj.json_mode = json_mode
        ctx.obj.formatter = OutputFormatter(json_mode=json_mode)
        ctx.obj.engine_name = engine_name or ctx.obj.engine_name

    if ctx.invoked_subcommand is None:
        from termdeck.tui.app import launch_tui

        launch_tui(ctx.obj)


@cli.command()
@pass_context
def repl(ctx: ConsoleContext) -> None:
    """Launch the line-mode console."""
    from termdeck.cli.repl import launch_repl

    launch_repl(ctx)


@cli.command("run")
@click.argument("words", nargs=-1, required=True)
@pass_context
def run_cmd(ctx: ConsoleContext, words: tuple[str, ...]) -> None:
    """Run one command and print its rendered result."""
    from termdeck.console.session import ConsoleSession

    text = " ".join(words)
    session = ConsoleSession(ctx.get_engine(), max_suggestions=ctx.get_config()["display"]["max_suggestions"])

    async def _run() -> bool:
        if not await session.start(show_welcome=False):
            return False
        return await session.submit(text)

    ok = asyncio.run(_run())
    if session.prompt.selection is not None:
        ctx.formatter.warning(
            f"'{escape(session.prompt.selected_text)}' is a placeholder. "
            f"Replace it, or see: termdeck complete \"{escape(session.prompt.text)}\""
        )
        sys.exit(2)

    # Skip the echo; the user just typed the command.
    blocks = [b for b in session.output.blocks if b.kind != "echo"]
    ctx.formatter.blocks(blocks)
    if not ok or any(b.kind == "error" for b in blocks):
        sys.exit(1)


@cli.command()
@click.argument("query", default="")
@pass_context
def complete(ctx: ConsoleContext, query: str) -> None:
    """Print the engine's suggestions for QUERY."""
    from termdeck.console.session import ConsoleSession

    session = ConsoleSession(ctx.get_engine(), max_suggestions=ctx.get_config()["display"]["max_suggestions"])
    results = asyncio.run(session.autocomplete.refresh(query))

    if not results:
        ctx.formatter.info("No suggestions.")
        if ctx.json_mode:
            ctx.formatter.json([])
        return

    ctx.formatter.table(
        title="Suggestions",
        columns=[("Suggestion", "bold"), ("Description", "dim")],
        rows=[[escape(s.suggestion), escape(s.description)] for s in results],
        data_for_json=[s.model_dump() for s in results],
    )


@cli.command("export")
@click.argument("path")
@pass_context
def export_cmd(ctx: ConsoleContext, path: str) -> None:
    """Export the engine's saved state to PATH."""
    _run_signal(ctx, "export", path)


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@pass_context
def import_cmd(ctx: ConsoleContext, path: str) -> None:
    """Import saved state from PATH into the engine."""
    _run_signal(ctx, "import", path)


def _run_signal(ctx: ConsoleContext, kind: str, path: str) -> None:
    from termdeck.console.events import ExportRequested, ImportRequested
    from termdeck.console.session import ConsoleSession

    session = ConsoleSession(ctx.get_engine())
    event = ExportRequested(name=path) if kind == "export" else ImportRequested(path=path)

    async def _run() -> bool:
        if not await session.start(show_welcome=False):
            return False
        return await session.handle(event)

    ok = asyncio.run(_run())
    ctx.formatter.blocks(list(session.output.blocks))
    if not ok:
        sys.exit(1)


@cli.command()
@click.option("--use", "use_name", default=None, help="Make NAME the default engine.")
@pass_context
def engines(ctx: ConsoleContext, use_name: str | None) -> None:
    """List the available command engines, or choose the default one."""
    from termdeck.adapters.registry import EngineRegistry
    from termdeck.core.config import update_config

    registry = EngineRegistry()
    if use_name:
        registry.load_engine(use_name)
        update_config(engine={"name": use_name})
        if ctx.json_mode:
            ctx.formatter.json({"engine": use_name})
        else:
            ctx.formatter.success(f"Default engine set to {escape(use_name)}.")
        return

    rows = registry.list_engines()
    ctx.formatter.table(
        title="Engines",
        columns=[("Name", "bold cyan"), ("Version", ""), ("Description", "dim")],
        rows=[[r["name"], r["version"], escape(r["description"])] for r in rows],
        data_for_json=rows,
    )
