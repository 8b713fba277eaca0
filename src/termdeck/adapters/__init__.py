"""Command engines: the protocol, the registry and the built-in demo engine."""
