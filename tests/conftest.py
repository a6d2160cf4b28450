import pytest

from alone.builtin.env_builtin import make_default_environment
from alone.evaluation.evaluator import evaluate
from alone.interpreter import Interpreter
from alone.reader.parser import parse


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    return make_default_environment()


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(env):
    """Parse and evaluate one expression against the shared test environment."""
    def _run(source):
        return evaluate(parse(source), env)
    return _run
