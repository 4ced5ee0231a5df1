from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_engine import CalculatorEngine
from calculator_session import ButtonEvent, CalculatorSession, HistoryEntry
from expression_evaluator import EvaluationFailure, parse, tokenize
import sys


def _press(session: CalculatorSession, labels: str) -> CalculatorSession:
	for label in labels:
		session.handle(ButtonEvent.from_label(label))
	return session


def _walk(labels: str):
	session = _press(CalculatorSession(), labels)
	return session.current_input(), session.current_result(), session.history_entries()


def inspect_expression(expr: str, *, digits: int = 30) -> None:
	"""Imprime tokens, AST y resultado de ambos motores."""
	print("Expression inspection")
	print(f"expr:           {expr}")

	try:
		tokens = tokenize(expr)
		print(f"tokens:         {' '.join(tok.text for tok in tokens)}")
		print(f"ast:            {parse(expr)}")
	except EvaluationFailure as exc:
		print(f"parse error:    {exc}")

	print(f"float result:   {CalculatorEngine().try_evaluate(expr).text}")
	ap_engine = ArbitraryPrecisionCalculatorEngine(initial_digits=digits)
	print(f"mp result:      {ap_engine.try_evaluate(expr).text}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	engine = CalculatorEngine()
	for expr, expected in (
		("4+4", "8"),
		("5/2", "2.5"),
		("2+3*4", "14"),
		("10-4-3", "3"),
		("100/10/5", "2"),
		("0.1+0.2", "0.30000000000000004"),
		("-5+3", "-2"),
		("(2+3)*4", "20"),
	):
		actual = engine.try_evaluate(expr).text
		expected_actual.append((expr, expected, actual))
		checks.append((f"{expr} evaluates to {expected}", actual == expected))

	for expr in ("", "   ", "5/0", "5+", "5*/2", "1.2.3", "(1+2", "2)", "abc"):
		checks.append((f"{expr!r} fails", not engine.try_evaluate(expr).ok))

	current, result, history = _walk("12+8=")
	expected_actual.append(("12+8=", "20", result))
	checks.append(("12+8= shows 20", result == "20"))
	checks.append(("12+8= keeps input", current == "12+8"))
	checks.append(("12+8= logs history", history == [HistoryEntry("12+8", "20")]))

	_, result, history = _walk("5/0=")
	checks.append(("5/0= shows Error", result == "Error"))
	checks.append(("5/0= leaves history empty", history == []))

	_, result, _ = _walk("50=%")
	expected_actual.append(("50=%", "0.5", result))
	checks.append(("percent divides result by 100", result == "0.5"))

	_, result, _ = _walk("16=√")
	expected_actual.append(("16=√", "4", result))
	checks.append(("square root of 16 renders as integer", result == "4"))

	_, result, _ = _walk("0-9=√")
	checks.append(("square root of negative is Error", result == "Error"))

	current, _, _ = _walk("⌫⌫")
	checks.append(("backspace on empty input is a no-op", current == ""))

	ap_engine = ArbitraryPrecisionCalculatorEngine(initial_digits=18, precision_step=24)
	value_third = ap_engine.evaluate("1/3")
	expected_actual.append(("1/3 (mp, 18 digits)", "0.333333333333333333", value_third))
	checks.append(("mp 1/3 has 18 digits", value_third == "0.333333333333333333"))
	more = ap_engine.request_more_precision()
	checks.append(("mp more precision adds digits", len(more) == len(value_third) + 24))
	checks.append(("mp 1/3*3 renders as integer", ap_engine.evaluate("1/3*3") == "1"))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2+3*4"
	#   python regression_checks.py --inspect "1/7" --digits 60
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		def _read_int(flag: str, default: int) -> int:
			if flag not in sys.argv:
				return default
			idx = sys.argv.index(flag)
			try:
				return int(sys.argv[idx + 1])
			except (ValueError, IndexError):
				raise SystemExit(f"Invalid value for {flag}")

		inspect_expression(expr, digits=_read_int("--digits", 30))
	else:
		run_regressions()
