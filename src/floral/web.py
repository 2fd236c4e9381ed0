"""JSON web interface to the floral formula dataset.

Create the app with create_app() and run it with ``python web/app.py``.

Routes:
    GET /health
    GET /api/families
    GET /api/orders
    GET /api/formula/<name>?by=family|order&explain=1
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import Flask, jsonify, request

from floral.dataset import load
from floral.errors import NotFoundError
from floral.explain import explain
from floral.query import QueryMode, find, names
from floral.render import render, render_formula_line

if TYPE_CHECKING:
    from collections.abc import Iterable

    from floral.formula import FloralRecord

TRUE_VALUES = ("1", "true", "yes")

LOOKUP_MODES = {
    "family": QueryMode.FAMILY,
    "order": QueryMode.ORDER,
}


def record_to_dict(record: FloralRecord, explain_formula: bool = False) -> dict[str, Any]:
    """JSON-ready view of a record."""
    info: dict[str, Any] = {
        "order": record.order,
        "family": record.family,
        "sexuality": record.sexuality.label,
        "formula": render_formula_line(record),
        "display": render(record),
        "fruit": list(record.fruit),
        "notes": record.notes,
    }
    if explain_formula:
        info["explanation"] = explain(record)
    return info


def create_app(records: Iterable[FloralRecord] | None = None) -> Flask:
    """Build the Flask app.

    Args:
        records: Records to serve. Loaded from the default dataset if None.
    """
    app = Flask(__name__)
    app.config["FLORAL_RECORDS"] = tuple(records) if records is not None else load()

    def get_records() -> tuple[FloralRecord, ...]:
        return app.config["FLORAL_RECORDS"]

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "records": len(get_records())})

    @app.route("/api/families")
    def families():
        return jsonify(sorted(names(get_records(), QueryMode.FAMILY)))

    @app.route("/api/orders")
    def orders():
        return jsonify(sorted(names(get_records(), QueryMode.ORDER)))

    @app.route("/api/formula/<name>")
    def formula(name: str):
        by = request.args.get("by", "family").lower()
        mode = LOOKUP_MODES.get(by)
        if mode is None:
            return jsonify({"error": f"Unknown lookup field: {by}"}), 400

        explain_formula = request.args.get("explain", "").lower() in TRUE_VALUES
        try:
            matches = find(get_records(), name, mode)
        except NotFoundError as err:
            return jsonify({"error": str(err), "suggestions": err.suggestions}), 404

        return jsonify([record_to_dict(r, explain_formula) for r in matches])

    return app
