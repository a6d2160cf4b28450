import sys

import pytest

from alone.builtin.env_builtin import make_default_environment
from alone.evaluation.evaluator import evaluate
from alone.reader.parser import parse
from alone.types.environment import Environment
from alone.types.errors import (
    EvalError,
    InvalidFunction,
    NotASymbol,
    RecursionDepthExceeded,
    UndefinedSymbol,
)
from alone.types.expr import CallExpr, DefineExpr, NumberExpr, StrExpr
from alone.types.nil import Nil
from alone.types.token import left_bracket, number, right_bracket, symbol
from alone.types.value import Builtin


def test_number_literal(run):
    assert run("42") == 42


def test_symbol_lookup(run, env):
    env.define("x", 42)
    assert run("x") == 42


def test_unbound_symbol(run):
    with pytest.raises(UndefinedSymbol) as excinfo:
        run("nope")
    assert excinfo.value.name == "nope"
    assert "nope" in str(excinfo.value)


def test_builtin_symbol_evaluates_to_callable(run):
    assert run("car") is Builtin.CAR


def test_string_node_evaluates_to_its_text(env):
    assert evaluate(StrExpr("hi"), env) == "hi"


# -------------------------------
# if
# -------------------------------
@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if 1 10 20)", 10),
        ("(if 0 10 20)", 20),
        ("(if Nil 10 20)", 20),
        ("(if (cons 0 0) 10 20)", 10),
        ("(if (- 3) 10 20)", 10),
        ("(if (< 1 2) (+ 1 1) (+ 2 2))", 2),
        ("(if t 1 2)", 1),
        ("(if (if 0 1 0) 1 2)", 2),
    ]
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_evaluates_only_the_taken_branch(run, env, capsys):
    assert run("(if 1 (define a 1) (define b 2))") == 1
    assert "a" in env
    assert "b" not in env
    run("(if 0 (print 1) (print 2))")
    assert capsys.readouterr().out == "2\n"


def test_if_untaken_branch_may_be_invalid(run):
    assert run("(if 1 5 (undefined-function 1))") == 5


# -------------------------------
# define / setq
# -------------------------------
def test_define_returns_value_and_binds(run, env):
    assert run("(define x 5)") == 5
    assert env.lookup("x") == 5


def test_define_is_visible_to_later_evaluations(run):
    run("(define x 5)")
    assert run("(+ x 1)") == 6


def test_setq_overwrites(run):
    run("(define x 5)")
    assert run("(setq x (* x 2))") == 10
    assert run("x") == 10


def test_define_can_shadow_a_builtin(run):
    run("(define + 3)")
    assert run("+") == 3
    with pytest.raises(InvalidFunction):
        run("(+ 1 2)")


def test_define_can_alias_a_builtin(run):
    run("(define add +)")
    assert run("(add 1 2)") == 3


def test_nested_define_inside_arguments(run):
    # Later arguments observe bindings made by earlier ones
    assert run("(+ (define y 2) y)") == 4


def test_define_failure_leaves_no_binding(run, env):
    with pytest.raises(UndefinedSymbol):
        run("(define z missing)")
    assert "z" not in env


def test_failures_are_not_transactional(run, env):
    with pytest.raises(UndefinedSymbol):
        run("(+ (define w 1) missing)")
    assert env.lookup("w") == 1


def test_define_target_must_be_symbol_token(env):
    expr = DefineExpr(left_bracket(), symbol("define"), number(1), NumberExpr(number(2), 2), right_bracket())
    with pytest.raises(NotASymbol) as excinfo:
        evaluate(expr, env)
    assert excinfo.value.token == number(1)


# -------------------------------
# calls
# -------------------------------
def test_call_of_unbound_symbol(run):
    with pytest.raises(InvalidFunction) as excinfo:
        run("(frobnicate 1)")
    assert excinfo.value.name == "frobnicate"


def test_call_of_non_callable(run, env):
    env.define("x", 3)
    with pytest.raises(InvalidFunction) as excinfo:
        run("(x 1)")
    assert excinfo.value.name == "x"


def test_invalid_function_is_reported_before_arguments_run(run, capsys):
    with pytest.raises(InvalidFunction):
        run("(nothing (print 1))")
    assert capsys.readouterr().out == ""


def test_arguments_evaluated_left_to_right(run, capsys):
    run("(begin (print 1) (print 2) (print 3))")
    assert capsys.readouterr().out == "1\n2\n3\n"


def test_call_head_must_be_symbol_token(env):
    expr = CallExpr(left_bracket(), number(1), (), right_bracket())
    with pytest.raises(NotASymbol):
        evaluate(expr, env)


def test_all_evaluation_errors_share_a_base(run):
    for source in ["missing", "(missing)", "(car 1)", "(/ 1 0)", "(not)"]:
        with pytest.raises(EvalError):
            run(source)


def test_environment_is_per_session():
    first = make_default_environment()
    second = make_default_environment()
    evaluate(parse("(define x 1)"), first)
    assert "x" in first
    assert "x" not in second


def test_empty_environment_has_no_builtins():
    with pytest.raises(InvalidFunction):
        evaluate(parse("(+ 1 2)"), Environment())


def test_deep_nesting_fails_cleanly(env, monkeypatch):
    monkeypatch.setenv("ALONE_RECURSION_LIMIT", "200")
    limit = sys.getrecursionlimit()
    depth = 5000
    # Build the tree directly; parsing this deep would hit the same limit
    expr = NumberExpr(number(1), 1)
    for _ in range(depth):
        expr = CallExpr(left_bracket(), symbol("+"), (expr,), right_bracket())
    with pytest.raises(RecursionDepthExceeded):
        evaluate(expr, env)
    assert sys.getrecursionlimit() == limit
    # The environment is still usable afterwards
    assert evaluate(parse("(+ 1 1)"), env) == 2


def test_moderate_nesting_succeeds(run):
    depth = 300
    assert run("(+ " * depth + "1" + ")" * depth) == 1


def test_nil_symbol_is_bound(run):
    assert run("Nil") is Nil
