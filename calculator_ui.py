"""
Interfaz gráfica de la calculadora.

Usa tkinter. La interfaz no guarda estado propio: cada tecla se traduce a
un ButtonEvent para CalculatorSession y la pantalla se repinta desde los
accesores de la sesión cuando esta avisa de un cambio.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_session import CLEAR_HISTORY, ButtonEvent, CalculatorSession


class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#000000",
        "title_bg":   "#2E2E2E",
        "title_fg":   "#FFFFFF",
        "display_fg": "#FFFFFF",
        "history_bg": "#444444",
        "history_fg": "#FFFFFF",
        "num":        "#808080",
        "num_fg":     "#FFFFFF",
        "op":         "#4CAF50",
        "op_fg":      "#FFFFFF",
        "special":    "#F44336",
        "special_fg": "#FFFFFF",
        "active":     "#585B70",
    }

    # ── Teclado ──────────────────────────────────────────────────
    #  Cada fila es una lista de etiquetas; la etiqueta es también la
    #  entrada de ButtonEvent.from_label

    KEYPAD = [
        ["C", "⌫", "%", "√"],
        ["7", "8", "9", "/"],
        ["4", "5", "6", "*"],
        ["1", "2", "3", "-"],
        ["0", "=", ".", "+"],
    ]

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: CalculatorSession = None):
        self.root = root
        self.root.title("CalculatorApp")
        self.root.configure(bg=self.C["bg"])

        self.session = session if session is not None else CalculatorSession()

        self._init_fonts()
        self._create_title_bar()
        self._create_display()
        self._create_history_panel()
        self._create_keypad()
        self._bind_keyboard()

        self.session.subscribe(self._refresh)
        self._refresh(self.session)

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_title  = tkfont.Font(family="Segoe UI", size=16, weight="bold")
        self._f_input  = tkfont.Font(family="Consolas", size=28)
        self._f_result = tkfont.Font(family="Consolas", size=24, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=18)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Barra de título ──────────────────────────────────────────

    def _create_title_bar(self):
        tk.Label(
            self.root, text="CalculatorApp", font=self._f_title,
            bg=self.C["title_bg"], fg=self.C["title_fg"], pady=10,
        ).pack(fill="x", padx=6, pady=(6, 8))

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["bg"], padx=12)
        frame.pack(fill="x")

        self.input_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.input_var, font=self._f_input,
            bg=self.C["bg"], fg=self.C["display_fg"], anchor="e",
        ).pack(fill="x")

        self.result_var = tk.StringVar(value="0")
        tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            bg=self.C["bg"], fg=self.C["display_fg"], anchor="e",
        ).pack(fill="x", pady=(0, 8))

    # ── Historial ────────────────────────────────────────────────

    def _create_history_panel(self):
        frame = tk.Frame(self.root, bg=self.C["history_bg"])
        frame.pack(fill="x", padx=6)

        scrollbar = tk.Scrollbar(frame, orient="vertical")
        self.history_list = tk.Listbox(
            frame, height=5, font=self._f_small,
            bg=self.C["history_bg"], fg=self.C["history_fg"],
            relief="flat", highlightthickness=0, activestyle="none",
            yscrollcommand=scrollbar.set,
        )
        scrollbar.config(command=self.history_list.yview)
        scrollbar.pack(side="right", fill="y")
        self.history_list.pack(side="left", fill="both", expand=True, padx=8, pady=8)

        tk.Button(
            self.root, text="Clear History", font=self._f_small,
            bg=self.C["title_bg"], fg=self.C["title_fg"],
            activebackground=self.C["active"], relief="flat",
            command=lambda: self.session.handle(CLEAR_HISTORY),
        ).pack(fill="x", padx=6, pady=8)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        for c in range(len(self.KEYPAD[0])):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            for c, label in enumerate(row_def):
                kind = self._button_kind(label)
                tk.Button(
                    frame, text=label, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["active"], relief="flat",
                    command=lambda l=label: self._on_key(l),
                ).grid(row=r, column=c, sticky="nsew", padx=4, pady=4, ipady=10)
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _button_kind(label: str) -> str:
        if label in ("C", "⌫", "="):
            return "special"
        if label in ("/", "*", "-", "+"):
            return "op"
        return "num"

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)
        self.root.bind("<Return>", lambda _e: self._on_key("="))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("="))
        self.root.bind("<BackSpace>", lambda _e: self._on_key("⌫"))
        self.root.bind("<Escape>", lambda _e: self._on_key("C"))

    def _on_keypress(self, event):
        if event.char and event.char in "0123456789+-*/.":
            self._on_key(event.char)

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, label: str):
        self.session.handle(ButtonEvent.from_label(label))

    def _refresh(self, session: CalculatorSession):
        self.input_var.set(session.current_input() or "0")
        self.result_var.set(session.current_result())

        self.history_list.delete(0, tk.END)
        for entry in session.history_entries():
            self.history_list.insert(tk.END, str(entry))
        self.history_list.yview_moveto(1.0)
