import logging

import pytest

from alone.types.environment import Environment
from alone.types.errors import UndefinedSymbol
from alone.types.nil import Nil, NilType
from alone.types.value import Builtin, Cons, from_list, is_truthy, to_string


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (-12, "-12"),
        (Nil, "Nil"),
        (Cons(1, 2), "(1, 2)"),
        (Cons(1, Cons(2, Nil)), "(1, (2, Nil))"),
        (Cons(Cons(1, 2), Nil), "((1, 2), Nil)"),
        (Builtin.ADD, "<callable>"),
        (Cons(Builtin.CAR, 1), "(<callable>, 1)"),
    ]
)
def test_to_string(value, expected):
    assert to_string(value) == expected


def test_cons_str_matches_to_string():
    assert str(Cons(1, Nil)) == "(1, Nil)"


@pytest.mark.parametrize(
    "value,expected",
    [
        (Nil, False),
        (0, False),
        (1, True),
        (-1, True),
        (Cons(0, Nil), True),
        (Builtin.PRINT, True),
    ]
)
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


def test_nil_is_a_singleton():
    assert NilType() is Nil
    assert Nil == NilType()
    assert not Nil
    assert repr(Nil) == "Nil"


def test_from_list():
    assert from_list([]) is Nil
    assert from_list([1, 2]) == Cons(1, Cons(2, Nil))


def test_environment_define_and_lookup():
    env = Environment()
    env.define("a", 1)
    env.define("a", 2)
    assert env.lookup("a") == 2
    assert "a" in env
    assert len(env) == 1
    assert list(env) == ["a"]


def test_environment_lookup_of_unbound_name():
    with pytest.raises(UndefinedSymbol) as excinfo:
        Environment().lookup("ghost")
    assert excinfo.value.name == "ghost"


def test_environment_rendering():
    env = Environment({"x": 1, "p": Cons(1, Nil)})
    assert str(env) == "{x: 1, p: (1, Nil)}"
    assert repr(env) == "<Environment {x: 1, p: (1, Nil)}>"


def test_to_string_of_a_long_list():
    n = 5000
    assert to_string(from_list([1] * n)) == "(1, " * n + "Nil" + ")" * n


def test_to_string_of_deeply_nested_cars():
    value = Nil
    for _ in range(5000):
        value = Cons(value, 2)
    text = to_string(value)
    assert text.startswith("(" * 5000 + "Nil, 2)")
    assert text.endswith(", 2)")
    assert str(value) == text


def test_environment_define_of_a_long_list(caplog):
    env = Environment()
    value = from_list(list(range(20000)))
    env.define("xs", value)
    assert env.lookup("xs") is value
    with caplog.at_level(logging.DEBUG, logger="alone.types.environment"):
        env.define("ys", from_list([7] * 3000))
    assert caplog.records[-1].getMessage().startswith("define ys = (7, (7, ")
