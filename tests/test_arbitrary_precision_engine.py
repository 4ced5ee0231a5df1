"""Tests for the mpmath-backed engine."""

import pytest

from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from expression_evaluator import EvaluationFailure


@pytest.fixture
def engine():
    return ArbitraryPrecisionCalculatorEngine(initial_digits=18, precision_step=24)


class TestArbitraryPrecisionEngine:
    def test_integral_result(self, engine):
        assert engine.evaluate("4+4") == "8"

    def test_fractional_result(self, engine):
        assert engine.evaluate("5/2") == "2.5"

    def test_exact_decimal_sum(self, engine):
        assert engine.evaluate("0.1+0.2") == "0.3"

    def test_precedence(self, engine):
        assert engine.evaluate("2+3*4") == "14"

    def test_large_integer_is_exact(self, engine):
        assert engine.evaluate("99999999999*99999999999") == "9999999999800000000001"

    def test_rounding_noise_renders_as_integer(self, engine):
        assert engine.evaluate("1/3*3") == "1"

    def test_digits_follow_initial_precision(self, engine):
        assert engine.evaluate("1/3") == "0." + "3" * 18

    def test_request_more_precision(self, engine):
        engine.evaluate("1/3")
        assert engine.can_expand_precision()
        assert engine.request_more_precision() == "0." + "3" * 42
        assert engine.working_digits == 42

    def test_evaluate_resets_precision(self, engine):
        engine.evaluate("1/3")
        engine.request_more_precision()
        assert engine.evaluate("2/3") == "0." + "6" * 17 + "7"
        assert engine.working_digits == 18

    def test_request_more_precision_without_previous(self, engine):
        assert not engine.can_expand_precision()
        with pytest.raises(EvaluationFailure):
            engine.request_more_precision()

    @pytest.mark.parametrize("expr", ["", "5/0", "5+", "1.2.3"])
    def test_failures(self, engine, expr):
        with pytest.raises(EvaluationFailure):
            engine.evaluate(expr)

    def test_try_evaluate_failure(self, engine):
        outcome = engine.try_evaluate("5/0")
        assert not outcome.ok
        assert outcome.text == "Error"

    def test_try_evaluate_success(self, engine):
        outcome = engine.try_evaluate("12+8")
        assert outcome.ok
        assert outcome.text == "20"

    def test_fraction_above_visible_digits_is_not_an_integer(self, engine):
        text = engine.evaluate("123456789012345678901.5")
        assert text.startswith("1.2345678901234567")
        assert text.endswith("e+20")

    def test_integer_above_visible_digits_stays_exact(self, engine):
        assert engine.evaluate("123456789012345678901") == "123456789012345678901"

    def test_integer_beyond_working_precision_uses_scientific_notation(self, engine):
        text = engine.evaluate("1" + "0" * 4400)
        assert text.startswith("1")
        assert text.endswith("e+4400")

    def test_failed_evaluate_keeps_previous_expression(self, engine):
        engine.evaluate("1/3")
        engine.try_evaluate("5/0")
        assert engine.request_more_precision() == "0." + "3" * 42
