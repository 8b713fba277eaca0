"""Engine registry — discovers engines via entry_points or ``module:attr`` paths."""

from __future__ import annotations

import importlib
from importlib.metadata import entry_points
from typing import Any

from termdeck.adapters.protocol import CommandEngine
from termdeck.core.exceptions import EngineError, EngineNotFoundError

# Available even when the package metadata is not installed.
BUILTIN_ENGINES = {
    "demo": "termdeck.adapters.builtin.demo:DemoEngine",
}


class EngineRegistry:
    """Discovers and loads termdeck engines."""

    ENTRY_POINT_GROUP = "termdeck.engines"

    def __init__(self) -> None:
        self._loaded: dict[str, CommandEngine] = {}

    def _discover(self) -> dict[str, Any]:
        """Map engine names to loadable targets (entry points win over built-ins)."""
        found: dict[str, Any] = dict(BUILTIN_ENGINES)
        for ep in entry_points(group=self.ENTRY_POINT_GROUP):
            found[ep.name] = ep
        return found

    @staticmethod
    def _load_target(target: Any) -> Any:
        if isinstance(target, str):
            module_name, _, attr = target.partition(":")
            if not module_name or not attr:
                raise EngineError(f"Engine path must look like 'module:attribute': {target}")
            module = importlib.import_module(module_name)
            obj: Any = module
            for part in attr.split("."):
                obj = getattr(obj, part)
            return obj
        return target.load()

    def list_engines(self) -> list[dict[str, Any]]:
        """List all available engines with metadata."""
        result = []
        for name, target in sorted(self._discover().items()):
            try:
                engine = self._load_target(target)()
                meta = engine.metadata() if hasattr(engine, "metadata") else {}
                result.append({
                    "name": name,
                    "description": meta.get("description", ""),
                    "version": meta.get("version", "0.0.0"),
                    "author": meta.get("author", ""),
                })
            except Exception as e:
                result.append({
                    "name": name,
                    "description": f"(error loading: {e})",
                    "version": "?",
                    "author": "",
                })
        return result

    def load_engine(self, name: str) -> CommandEngine:
        """Load and instantiate an engine by registered name or ``module:attr`` path."""
        if name in self._loaded:
            return self._loaded[name]

        engines = self._discover()
        if name in engines:
            target = engines[name]
        elif ":" in name:
            target = name
        else:
            raise EngineNotFoundError(f"Engine not found: {name}")

        try:
            engine = self._load_target(target)()
            if not isinstance(engine, CommandEngine):
                raise EngineError(f"Engine '{name}' does not implement the CommandEngine protocol")
            self._loaded[name] = engine
            return engine
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(f"Failed to load engine '{name}': {e}") from e
