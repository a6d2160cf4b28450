from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_PROMPT = "Alone > "
_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_REPL_HOST = "127.0.0.1"
_DEFAULT_REPL_PORT = 8765


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prompt() -> str:
    return str_from_env("ALONE_PROMPT", _DEFAULT_PROMPT)


def get_recursion_limit() -> int:
    return int_from_env("ALONE_RECURSION_LIMIT", _DEFAULT_RECURSION_LIMIT)


def get_log_level() -> int:
    name = str_from_env("ALONE_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName maps unknown names to the string "Level <name>"
    if not isinstance(level, int):
        raise ValueError(f"ALONE_LOG_LEVEL: unknown level {name!r}")
    return level


def get_repl_address() -> tuple[str, int]:
    return (
        str_from_env("ALONE_LSP_HOST", _DEFAULT_REPL_HOST),
        int_from_env("ALONE_LSP_PORT", _DEFAULT_REPL_PORT),
    )
