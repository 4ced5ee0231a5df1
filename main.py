"""Punto de entrada de la calculadora."""

import logging
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from calculator_ui import CalculatorApp


USE_ARBITRARY_PRECISION = False
AP_INITIAL_DIGITS = 18
AP_PRECISION_STEP = 24
LOG_LEVEL = logging.WARNING


def _setup_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main():
    _setup_logging()
    root = tk.Tk()
    root.geometry("380x720")
    root.minsize(340, 640)
    if USE_ARBITRARY_PRECISION:
        from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine

        engine = ArbitraryPrecisionCalculatorEngine(
            initial_digits=AP_INITIAL_DIGITS,
            precision_step=AP_PRECISION_STEP,
        )
    else:
        engine = CalculatorEngine()
    CalculatorApp(root, session=CalculatorSession(engine=engine))
    root.mainloop()


if __name__ == "__main__":
    main()
