"""Flask single-page surface for the expense ledger."""

from __future__ import annotations

import argparse
import os
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for
from flask_cors import CORS

from expense_ledger.config import Settings
from expense_ledger.exceptions import PersistenceError, ValidationError
from expense_ledger.form import SAVE_FAILED_NOTICE, ExpenseForm
from expense_ledger.logging_config import configure_logging
from expense_ledger.models import CATEGORIES, ExpenseRecord
from expense_ledger.services import ExpenseLedger
from expense_ledger.storage import JSONFileStorage, KeyValueStorage
from expense_ledger.validators import MIN_DATE, validate_expense
from expense_ledger.views import (
    View,
    axis_ticks,
    chart_points,
    format_amount,
    recent_expenses,
    total_display,
    trend_series,
)

CHART_WIDTH = 640
CHART_HEIGHT = 300


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    today: Optional[Callable[[], date]] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    app.secret_key = settings.secret_key or os.urandom(24).hex()

    if settings.is_dev:
        CORS(app, resources={r"/api/*": {"origins": "*"}})
    elif settings.allowed_origins:
        CORS(app, resources={r"/api/*": {"origins": list(settings.allowed_origins)}})

    ledger = ExpenseLedger(
        storage or JSONFileStorage(Path(settings.data_dir)),
        settings.storage_key,
        today=today,
    )
    app.extensions["expense_ledger"] = ledger

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str, details: Any = None):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": details if details is not None else str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error", exc.errors or str(exc))

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError({}, "Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError({}, "Malformed JSON body")
        return data

    def _render_page(form: ExpenseForm, active: View, status: int = 200):
        records = ledger.all()
        series = trend_series(records)
        points = chart_points(series, CHART_WIDTH, CHART_HEIGHT)
        values = dict(form.values)
        if isinstance(values.get("date"), date):
            values["date"] = values["date"].isoformat()
        page = render_template(
            "index.html",
            views=list(View),
            active=active,
            categories=CATEGORIES,
            values=values,
            errors=form.errors,
            min_date=MIN_DATE.isoformat(),
            max_date=ledger.today().isoformat(),
            recent=recent_expenses(records),
            chart=[
                {"label": point.label, "amount": format_amount(point.amount), "x": x, "y": y}
                for point, (x, y) in zip(series, points)
            ],
            polyline=" ".join(f"{x},{y}" for x, y in points),
            ticks=[{"value": format_amount(value), "y": y} for value, y in axis_ticks(series, CHART_HEIGHT)],
            chart_width=CHART_WIDTH,
            chart_height=CHART_HEIGHT,
            total=total_display(records),
        )
        return page, status

    @app.get("/")
    def index():
        form = ExpenseForm(ledger)
        return _render_page(form, View.parse(request.args.get("tab")))

    @app.post("/")
    def submit_expense():
        form = ExpenseForm(ledger)
        record = form.submit(request.form.to_dict())
        if record is None:
            return _render_page(form, form.active_view, 400)
        if form.notice:
            flash(form.notice, "warning")
        return redirect(url_for("index", tab=form.active_view.value))

    @app.get("/api/expenses")
    def list_expenses():
        records = ledger.all()
        return _success({
            "items": [record.to_dict() for record in records],
            "total": total_display(records),
        })

    @app.post("/api/expenses")
    def create_expense():
        payload = _json_body()
        draft = validate_expense(payload, today=ledger.today()).unwrap()
        record = ExpenseRecord.from_draft(draft)
        body = record.to_dict()
        try:
            ledger.append(record)
        except PersistenceError as exc:
            # The record is kept in memory; report it like the form's notice.
            app.logger.warning("Expense %s kept in memory only: %s", record.id, exc)
            body["warning"] = SAVE_FAILED_NOTICE
        return _success(body, 201)

    @app.get("/api/expenses/recent")
    def list_recent():
        return _success({"items": [asdict(row) for row in recent_expenses(ledger.all())]})

    @app.get("/api/trend")
    def trend():
        series = trend_series(ledger.all())
        return _success({
            "points": [{"label": point.label, "amount": format_amount(point.amount)} for point in series],
        })

    return app


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Web page for the expense ledger")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory containing the JSON key-value store (default: ./data)",
    )
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", default=5000, type=int)
    parser.add_argument("--log-level", help="Logging level (default: INFO)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = Settings.from_env(data_dir=args.data_dir, log_level=args.log_level)
    configure_logging(settings.log_level, settings.log_file)
    app = create_app(settings)
    # One request at a time keeps ledger mutations sequential.
    app.run(host=args.host, port=args.port, threaded=False)


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
