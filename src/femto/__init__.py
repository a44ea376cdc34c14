"""Minimal terminal text editor built on an immutable-snapshot editing engine."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "keymaps",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
