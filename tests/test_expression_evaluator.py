"""Tests for the tokenizer, parser and float evaluator."""

import pytest

from expression_evaluator import (
    BinaryOp,
    EvaluationFailure,
    ExpressionEvaluator,
    Number,
    UnaryOp,
    parse,
    tokenize,
)


@pytest.fixture
def evaluator():
    return ExpressionEvaluator()


class TestTokenize:
    def test_numbers_and_operators(self):
        tokens = tokenize("12+3.5*.5")
        assert [t.text for t in tokens] == ["12", "+", "3.5", "*", ".5"]
        assert [t.kind for t in tokens] == ["number", "op", "number", "op", "number"]

    def test_whitespace_ignored(self):
        assert [t.text for t in tokenize("  1 +  2 ")] == ["1", "+", "2"]

    def test_positions(self):
        assert [t.position for t in tokenize("1 + 22")] == [0, 2, 4]

    def test_trailing_dot_is_a_number(self):
        assert [t.text for t in tokenize("5.")] == ["5."]

    def test_invalid_character(self):
        with pytest.raises(EvaluationFailure):
            tokenize("2^3")

    def test_double_decimal_point(self):
        with pytest.raises(EvaluationFailure):
            tokenize("1.2.3")

    def test_lone_decimal_point(self):
        with pytest.raises(EvaluationFailure):
            tokenize(".")


class TestParse:
    def test_precedence_builds_tree(self):
        assert parse("1+2*3") == BinaryOp(
            Number("1"), BinaryOp(Number("2"), Number("3"), "*"), "+"
        )

    def test_left_associative(self):
        assert parse("8-3-2") == BinaryOp(
            BinaryOp(Number("8"), Number("3"), "-"), Number("2"), "-"
        )

    def test_unary_minus(self):
        assert parse("-4") == UnaryOp("-", Number("4"))

    def test_parentheses(self):
        assert parse("(1+2)*3") == BinaryOp(
            BinaryOp(Number("1"), Number("2"), "+"), Number("3"), "*"
        )

    @pytest.mark.parametrize("expr", ["", "5+", "*5", "5*/2", "(1+2", "1+2)", "()", "1 2"])
    def test_malformed(self, expr):
        with pytest.raises(EvaluationFailure):
            parse(expr)


class TestEvaluate:
    @pytest.mark.parametrize(
        "expr, expected",
        [
            ("7+5", 12.0),
            ("7-5", 2.0),
            ("7*5", 35.0),
            ("7/5", 1.4),
            ("2+3*4", 14.0),
            ("2*3+4", 10.0),
            ("20/4/5", 1.0),
            ("10-4-3", 3.0),
            ("1.5*4", 6.0),
            ("5*-2", -10.0),
            ("-5+3", -2.0),
            ("(2+3)*4", 20.0),
            ("0.1+0.2", 0.1 + 0.2),
        ],
    )
    def test_values(self, evaluator, expr, expected):
        assert evaluator.evaluate(expr) == expected

    @pytest.mark.parametrize("a", [0.5, 3.0, -12.25, 1e6])
    @pytest.mark.parametrize("b", [0.25, 2.0, 7.0])
    def test_binary_ops_match_float_arithmetic(self, evaluator, a, b):
        lhs = repr(a) if a >= 0 else f"({a!r})"
        assert evaluator.evaluate(f"{lhs}+{b!r}") == a + b
        assert evaluator.evaluate(f"{lhs}-{b!r}") == a - b
        assert evaluator.evaluate(f"{lhs}*{b!r}") == a * b
        assert evaluator.evaluate(f"{lhs}/{b!r}") == a / b

    @pytest.mark.parametrize("expr", ["", "   ", None])
    def test_empty_input(self, evaluator, expr):
        with pytest.raises(EvaluationFailure, match="vacía"):
            evaluator.evaluate(expr)

    @pytest.mark.parametrize("expr", ["5/0", "1/(2-2)", "0/0", "3/0.0"])
    def test_division_by_zero(self, evaluator, expr):
        with pytest.raises(EvaluationFailure, match="División por cero"):
            evaluator.evaluate(expr)

    def test_overflow_is_failure(self, evaluator):
        big = "9" * 200
        with pytest.raises(EvaluationFailure):
            evaluator.evaluate("*".join([big] * 3))

    def test_failure_is_value_error(self, evaluator):
        with pytest.raises(ValueError):
            evaluator.evaluate("5+")

    def test_deep_nesting_fails_cleanly(self, evaluator):
        with pytest.raises(EvaluationFailure):
            evaluator.evaluate("-" * 100000 + "1")
