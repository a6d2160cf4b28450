"""Alone Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for the Alone language.
- A lightweight indexer that reads documents with the real parser without evaluating them.
- A simple TCP REPL server to evaluate code via the existing Interpreter.
"""

__all__ = [
    "server",
    "indexer",
    "repl_server",
]
