"""termdeck — a text-command console with bracket placeholders and autocomplete."""

__version__ = "0.1.0"
