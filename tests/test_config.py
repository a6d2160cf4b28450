import logging
import sys

import pytest

from alone import config
from alone.runtime_context import recursion_limit


def test_defaults(monkeypatch):
    for var in ("ALONE_PROMPT", "ALONE_RECURSION_LIMIT", "ALONE_LOG_LEVEL", "ALONE_LSP_HOST", "ALONE_LSP_PORT"):
        monkeypatch.delenv(var, raising=False)
    assert config.get_prompt() == "Alone > "
    assert config.get_recursion_limit() == 10000
    assert config.get_log_level() == logging.WARNING
    assert config.get_repl_address() == ("127.0.0.1", 8765)


def test_overrides(monkeypatch):
    monkeypatch.setenv("ALONE_PROMPT", "> ")
    monkeypatch.setenv("ALONE_RECURSION_LIMIT", "2500")
    monkeypatch.setenv("ALONE_LOG_LEVEL", "debug")
    assert config.get_prompt() == "> "
    assert config.get_recursion_limit() == 2500
    assert config.get_log_level() == logging.DEBUG


def test_invalid_values(monkeypatch):
    monkeypatch.setenv("ALONE_RECURSION_LIMIT", "lots")
    with pytest.raises(ValueError):
        config.get_recursion_limit()
    monkeypatch.setenv("ALONE_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        config.get_log_level()


def test_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    with recursion_limit(before + 500) as limit:
        assert limit == before + 500
        assert sys.getrecursionlimit() == before + 500
        with recursion_limit(10) as inner:
            assert inner == before + 500
    assert sys.getrecursionlimit() == before
