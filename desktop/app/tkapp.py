"""Tkinter desktop application for the expense ledger."""

from __future__ import annotations

import argparse
import logging
import tkinter as tk
from pathlib import Path
from tkinter import ttk
from typing import Callable, Dict, Iterable, Optional

from expense_ledger.config import Settings
from expense_ledger.form import ExpenseForm
from expense_ledger.logging_config import configure_logging
from expense_ledger.models import CATEGORIES
from expense_ledger.services import ExpenseLedger
from expense_ledger.storage import JSONFileStorage
from expense_ledger.views import (
    ChartPadding,
    View,
    axis_ticks,
    chart_points,
    format_amount,
    recent_expenses,
    total_display,
    trend_series,
)

logger = logging.getLogger(__name__)

PRIMARY_BG = "#0f172a"
SECONDARY_BG = "#1e293b"
ACCENT_BG = "#1d4ed8"
ACCENT_ACTIVE_BG = "#2563eb"
TEXT_PRIMARY = "#e2e8f0"
TEXT_MUTED = "#94a3b8"
TEXT_ERROR = "#fca5a5"
LINE_COLOR = "#8884d8"
GRID_COLOR = "#334155"


class AddExpenseTab(ttk.Frame):
    """Entry form with one inline error label per field."""

    def __init__(self, master: tk.Misc, form: ExpenseForm, on_submit: Callable[[], None]) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.form = form
        self.on_submit = on_submit

        self.amount_var = tk.StringVar()
        self.category_var = tk.StringVar()
        self.date_var = tk.StringVar()
        self.description_var = tk.StringVar()
        self.error_vars: Dict[str, tk.StringVar] = {
            name: tk.StringVar() for name in ("amount", "category", "date")
        }

        self._build_form()
        self.load_values()

    def _build_form(self) -> None:
        form = ttk.LabelFrame(self, text="Add Expense", style="Card.TLabelframe")
        form.grid(row=0, column=0, sticky="ew", padx=4)
        form.columnconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        def add_row(label: str, widget: ttk.Widget, row: int, field: Optional[str] = None) -> None:
            ttk.Label(form, text=label, style="FormLabel.TLabel").grid(
                column=0, row=row, sticky="w", padx=4, pady=(4, 0)
            )
            widget.grid(column=0, row=row + 1, sticky="ew", padx=4)
            if field is not None:
                ttk.Label(form, textvariable=self.error_vars[field], style="FieldError.TLabel").grid(
                    column=0, row=row + 2, sticky="w", padx=4, pady=(0, 4)
                )

        add_row("Amount", ttk.Entry(form, textvariable=self.amount_var, style="App.TEntry"), 0, "amount")
        add_row(
            "Category",
            ttk.Combobox(
                form,
                textvariable=self.category_var,
                values=list(CATEGORIES),
                state="readonly",
                style="App.TCombobox",
            ),
            3,
            "category",
        )
        add_row("Date (YYYY-MM-DD)", ttk.Entry(form, textvariable=self.date_var, style="App.TEntry"), 6, "date")
        add_row(
            "Description (Optional)",
            ttk.Entry(form, textvariable=self.description_var, style="App.TEntry"),
            9,
        )

        ttk.Button(
            form,
            text="Add Expense",
            command=self.submit,
            style="Primary.TButton",
        ).grid(column=0, row=11, sticky="e", padx=4, pady=8)

    def load_values(self) -> None:
        values = self.form.values
        self.amount_var.set(str(values.get("amount", "")))
        self.category_var.set(str(values.get("category") or ""))
        entry_date = values.get("date")
        self.date_var.set(entry_date.isoformat() if hasattr(entry_date, "isoformat") else str(entry_date or ""))
        self.description_var.set(str(values.get("description") or ""))
        for name, var in self.error_vars.items():
            var.set(self.form.errors.get(name, ""))

    def submit(self) -> None:
        self.form.submit({
            "amount": self.amount_var.get(),
            "category": self.category_var.get(),
            "date": self.date_var.get(),
            "description": self.description_var.get(),
        })
        self.load_values()
        self.on_submit()


class RecentExpensesTab(ttk.Frame):
    """Read-only table of the most recently added expenses."""

    def __init__(self, master: tk.Misc, ledger: ExpenseLedger) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.ledger = ledger
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        columns = ("date", "category", "amount", "description")
        self.tree = ttk.Treeview(self, columns=columns, show="headings", height=5, style="App.Treeview")
        headings = {
            "date": "Date",
            "category": "Category",
            "amount": "Amount",
            "description": "Description",
        }
        for key, label in headings.items():
            width = 120 if key == "amount" else 180
            self.tree.heading(key, text=label, anchor="w")
            self.tree.column(key, width=width, anchor="w")
        self.tree.grid(row=0, column=0, sticky="nsew")

    def populate(self) -> None:
        self.tree.delete(*self.tree.get_children())
        for row in recent_expenses(self.ledger.all()):
            self.tree.insert(
                "", "end", iid=row.id, values=(row.date, row.category, row.amount, row.description)
            )


class SpendingChartTab(ttk.Frame):
    """Line chart of spending per day label drawn on a canvas."""

    def __init__(self, master: tk.Misc, ledger: ExpenseLedger) -> None:
        super().__init__(master, padding=16, style="Panel.TFrame")
        self.ledger = ledger
        self.padding = ChartPadding()
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)
        self.canvas = tk.Canvas(self, height=300, bg=SECONDARY_BG, highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.canvas.bind("<Configure>", lambda _event: self.populate())

    def populate(self) -> None:
        canvas = self.canvas
        canvas.delete("all")
        width = max(canvas.winfo_width(), 600)
        height = max(canvas.winfo_height(), 300)
        series = trend_series(self.ledger.all())

        for value, y in axis_ticks(series, height, self.padding):
            canvas.create_line(self.padding.left, y, width - self.padding.right, y, fill=GRID_COLOR)
            canvas.create_text(
                self.padding.left - 6, y, text=format_amount(value), anchor="e", fill=TEXT_MUTED, font=("Segoe UI", 8)
            )

        points = chart_points(series, width, height, self.padding)
        if len(points) > 1:
            canvas.create_line(*[coord for point in points for coord in point], fill=LINE_COLOR, width=2)
        for point, (x, y) in zip(series, points):
            canvas.create_oval(x - 3, y - 3, x + 3, y + 3, fill=LINE_COLOR, outline="")
            canvas.create_text(x, height - 12, text=point.label, fill=TEXT_MUTED, font=("Segoe UI", 8))


class ExpenseLedgerApp(tk.Tk):
    """Main application window."""

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self.title("Expense Tracker")
        self.geometry("820x600")
        self.minsize(640, 480)
        self.configure(bg=PRIMARY_BG)

        self._configure_styles()

        storage = JSONFileStorage(Path(settings.data_dir))
        self.ledger = ExpenseLedger(storage, settings.storage_key)
        self.form = ExpenseForm(self.ledger)

        self.total_var = tk.StringVar(value="$0.00")
        self.notice_var = tk.StringVar()

        self._build_layout()
        self.refresh_all()

    def _configure_styles(self) -> None:
        style = ttk.Style(self)
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass

        style.configure("TFrame", background=PRIMARY_BG)
        style.configure("TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Panel.TFrame", background=SECONDARY_BG, relief="flat")
        style.configure("Header.TFrame", background=PRIMARY_BG)
        style.configure("Footer.TFrame", background=SECONDARY_BG)
        style.configure("Card.TLabelframe", background=SECONDARY_BG, foreground=TEXT_PRIMARY)
        style.configure("Card.TLabelframe.Label", background=SECONDARY_BG, foreground=TEXT_PRIMARY)

        style.configure("FormLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9))
        style.configure("FieldError.TLabel", background=SECONDARY_BG, foreground=TEXT_ERROR, font=("Segoe UI", 9))
        style.configure("Header.TLabel", background=PRIMARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 20, "bold"))
        style.configure("Subtitle.TLabel", background=PRIMARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 10))
        style.configure("MetricLabel.TLabel", background=SECONDARY_BG, foreground=TEXT_MUTED, font=("Segoe UI", 9, "bold"))
        style.configure("MetricValue.TLabel", background=SECONDARY_BG, foreground=TEXT_PRIMARY, font=("Segoe UI", 16, "bold"))
        style.configure("Notice.TLabel", background=SECONDARY_BG, foreground=TEXT_ERROR, font=("Segoe UI", 9))

        style.configure(
            "App.TEntry",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            insertcolor=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
        )
        style.configure(
            "App.TCombobox",
            fieldbackground=SECONDARY_BG,
            background=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            arrowcolor=TEXT_PRIMARY,
        )
        style.map("App.TCombobox", fieldbackground=[("readonly", SECONDARY_BG)])

        style.configure(
            "Primary.TButton",
            background=ACCENT_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=ACCENT_BG,
            padding=(18, 6),
        )
        style.map("Primary.TButton", background=[("active", ACCENT_ACTIVE_BG)])

        style.configure(
            "App.Treeview",
            background=SECONDARY_BG,
            fieldbackground=SECONDARY_BG,
            foreground=TEXT_PRIMARY,
            bordercolor=SECONDARY_BG,
            rowheight=28,
        )
        style.configure("App.Treeview.Heading", background=SECONDARY_BG, foreground=TEXT_MUTED, relief="flat")

        style.configure("App.TNotebook", background=PRIMARY_BG, borderwidth=0)
        style.configure("App.TNotebook.Tab", background=SECONDARY_BG, foreground=TEXT_MUTED, padding=(16, 10))
        style.map(
            "App.TNotebook.Tab",
            background=[("selected", ACCENT_BG)],
            foreground=[("selected", TEXT_PRIMARY)],
        )

    def _build_layout(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        header = ttk.Frame(self, padding=20, style="Header.TFrame")
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Expense Tracker", style="Header.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(header, text="Manage and visualize your expenses", style="Subtitle.TLabel").grid(
            row=1, column=0, sticky="w"
        )

        self.notebook = ttk.Notebook(self, style="App.TNotebook")
        self.notebook.grid(row=1, column=0, sticky="nsew")

        self.tabs: Dict[View, ttk.Frame] = {
            View.ADD: AddExpenseTab(self.notebook, self.form, self.handle_submit),
            View.LIST: RecentExpensesTab(self.notebook, self.ledger),
            View.CHART: SpendingChartTab(self.notebook, self.ledger),
        }
        for view, tab in self.tabs.items():
            self.notebook.add(tab, text=view.heading, padding=4)
        self.notebook.bind("<<NotebookTabChanged>>", self._handle_tab_changed)

        footer = ttk.Frame(self, padding=(20, 12), style="Footer.TFrame")
        footer.grid(row=2, column=0, sticky="ew")
        footer.columnconfigure(1, weight=1)
        ttk.Label(footer, text="Total Expenses", style="MetricLabel.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Label(footer, textvariable=self.notice_var, style="Notice.TLabel").grid(row=0, column=1, sticky="w", padx=12)
        ttk.Label(footer, textvariable=self.total_var, style="MetricValue.TLabel").grid(row=0, column=2, sticky="e")

    def _handle_tab_changed(self, _event: object) -> None:
        index = self.notebook.index(self.notebook.select())
        self.form.select_view(list(self.tabs)[index])

    def handle_submit(self) -> None:
        self.notice_var.set(self.form.notice or "")
        self.refresh_all()
        self.notebook.select(self.tabs[self.form.active_view])

    def refresh_all(self) -> None:
        self.tabs[View.LIST].populate()  # type: ignore[attr-defined]
        self.tabs[View.CHART].populate()  # type: ignore[attr-defined]
        self.total_var.set(f"${total_display(self.ledger.all())}")


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Tkinter desktop app for the expense ledger")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory containing the JSON key-value store (default: ./data)",
    )
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = Settings.from_env(data_dir=args.data_dir, log_level=args.log_level)
    configure_logging(settings.log_level, settings.log_file)
    logger.info("Starting desktop ledger with data in %s", settings.data_dir)

    app = ExpenseLedgerApp(settings)
    app.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
