"""Command-line entry points: click commands and the line REPL."""
