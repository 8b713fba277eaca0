"""Host signals — export and import of the engine's persisted state."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from termdeck.adapters.protocol import CommandEngine, PersistentEngine
from termdeck.console.output_log import OutputLog

logger = logging.getLogger(__name__)


class HostSignalHandler:
    """Runs export/import requests and reports them in the output log.

    Shares the dispatcher's lock so reports never land inside another
    command's echo/result pair.
    """

    def __init__(self, engine: CommandEngine, output: OutputLog, lock: asyncio.Lock) -> None:
        self.engine = engine
        self.output = output
        self.lock = lock

    def _persistent_engine(self) -> PersistentEngine | None:
        if isinstance(self.engine, PersistentEngine):
            return self.engine
        self.output.append_error("This engine does not support import or export.")
        return None

    async def export(self, name: str) -> Path | None:
        """Write the engine's state to ``name``; returns the path on success."""
        async with self.lock:
            engine = self._persistent_engine()
            if engine is None:
                return None
            path = Path(name).expanduser()
            try:
                payload = await engine.export_state(path.stem)
                path.write_bytes(payload)
            except Exception as e:
                logger.exception("Export to %s failed", path)
                self.output.append_error(f"Export failed: {e}")
                return None
            logger.info("Exported %d bytes to %s", len(payload), path)
            self.output.append_result(f"Exported to **{path}**.")
            return path

    async def import_(self, path_name: str) -> bool:
        """Read ``path_name`` and hand it to the engine."""
        async with self.lock:
            engine = self._persistent_engine()
            if engine is None:
                return False
            path = Path(path_name).expanduser()
            try:
                payload = path.read_bytes()
                message = await engine.import_state(payload)
            except Exception as e:
                logger.exception("Import from %s failed", path)
                self.output.append_error(f"Import failed: {e}")
                return False
            self.output.append_result(str(message))
            return True
