import pytest

from opgm.front_end.ast import Expr, GispError
from opgm.front_end.parser import expr_parse
from opgm.front_end.rewriter import rewrite, simplify


def test_and():
    assert simplify(expr_parse("(and (< u1 u2) #f)")) == expr_parse("#f")
    assert simplify(
        expr_parse("(and (and (< u1 u2) (< u2 u3)) (and #t (< u1 u3)))")
    ) == expr_parse("(and (and (< u1 u2) (< u2 u3)) (< u1 u3))")
    assert simplify(expr_parse("(and #t #t)")) == expr_parse("#t")


def test_or():
    assert simplify(expr_parse("(or (or (< u1 u2) (< u1 u3)) #t)")) == expr_parse("#t")
    assert simplify(
        expr_parse("(or (or (< u1 u2) (< u2 u3)) (or #f (< u1 u3)))")
    ) == expr_parse("(or (or (< u1 u2) (< u2 u3)) (< u1 u3))")
    assert simplify(expr_parse("(or #f #f)")) == expr_parse("#f")


def test_not_not():
    assert simplify(expr_parse("(not (not #t))")) == expr_parse("#t")
    assert simplify(expr_parse("(not (not (< u1 u2)))")) == expr_parse("(< u1 u2)")


def test_lt():
    assert simplify(expr_parse("(and (< u1 3) (< 3 2))")) == expr_parse("#f")
    assert simplify(expr_parse("(and (< 1 2) (< u1 u2))")) == expr_parse("(< u1 u2)")


def test_not_lt():
    assert simplify(expr_parse("(not (< u1 u2))")) == expr_parse("(>= u1 u2)")


def test_rewrite():
    assert rewrite(
        expr_parse("(and (and (< u1 u2) (< u1 u3))\n     (not (or (>= u2 u3) (>= u4 2020))))")
    ) == [
        expr_parse(text)
        for text in ["(< u1 u2)", "(< u1 u3)", "(< u2 u3)", "(< u4 2020)"]
    ]


def test_eq_and_neq_on_same_vertex():
    assert simplify(expr_parse("(= u1 u1)")) == Expr.bool(True)
    assert simplify(expr_parse("(!= u1 u1)")) == Expr.bool(False)
    assert simplify(expr_parse("(not (= u1 u2))")) == expr_parse("(!= u1 u2)")


def test_mod_truncates_towards_zero():
    assert simplify(expr_parse("(mod 7 3)")) == Expr.int(1)
    assert simplify(expr_parse("(mod -7 3)")) == Expr.int(-1)


def test_not_of_and_is_kept():
    expr = expr_parse("(not (and (< u1 u2) (< u2 u3)))")
    assert simplify(expr) == expr
    assert rewrite(expr) == [expr]


def test_not_of_int_is_a_type_error():
    with pytest.raises(GispError):
        simplify(expr_parse("(not 3)"))


def test_simplify_is_idempotent():
    expr = simplify(expr_parse("(not (or (>= u2 u3) (and #t (< u4 5))))"))
    assert simplify(expr) == expr