"""Custom exceptions for termdeck."""


class TermdeckError(Exception):
    """Base exception for all termdeck errors."""


class ConfigError(TermdeckError):
    """Configuration error."""


class EngineError(TermdeckError):
    """Command engine loading or execution error."""


class EngineNotFoundError(EngineError):
    """No engine registered under the requested name."""


class RenderError(TermdeckError):
    """Result text could not be rendered."""
