"""JSON API exposing the amortization engine to the lending platform.

The loan-request workflow calls ``/api/loans/estimate`` to show a borrower the
expected installment before submitting a request; the repayment view calls
``/api/loans/schedule`` to list due dates and balances.
"""

import logging
from datetime import date
from typing import Dict, Optional

from flask import Flask, jsonify, request

from amortization.config import Settings, configure_logging, load_settings
from amortization.data_models import LoanTerms
from amortization.engine import amortize
from amortization.errors import AmortizationError
from amortization.main import result_to_dict
from amortization.validation import check_term_limit, validate_loan_request

logger = logging.getLogger(__name__)


class InvalidRequest(Exception):
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


def _require(data: dict, name: str):
    value = data.get(name)
    if value is None or value == "":
        raise InvalidRequest(f"{name} is required", field=name)
    return value


def _amortize_request(principal, rate, term, start_date, fields: Dict[str, str], limits: Optional[Settings] = None):
    """Amortize a request, reporting errors under the client's own key names.

    When ``limits`` are given, the term is checked against the
    configured ceiling before any schedule is built.
    """
    try:
        terms = LoanTerms(principal, rate, term)
        if limits is not None:
            check_term_limit(terms.term_months, limits)
        return amortize(terms, start_date)
    except AmortizationError as exc:
        exc.field = fields.get(exc.field, exc.field)
        raise


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.config["AMORTIZATION_SETTINGS"] = settings

    @app.errorhandler(AmortizationError)
    def handle_amortization_error(exc: AmortizationError):
        logger.info("Rejected loan calculation: %s", exc)
        return jsonify({"error": str(exc), "field": exc.field}), 400

    @app.errorhandler(InvalidRequest)
    def handle_bad_request(exc: InvalidRequest):
        return jsonify({"error": str(exc), "field": exc.field}), 400

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    @app.post("/api/loans/estimate")
    def estimate():
        data = _json_body()
        amount, term = validate_loan_request(
            _require(data, "amount"),
            _require(data, "duration"),
            settings,
            monthly_income=data.get("monthly_income"),
            term_field="duration",
        )
        result = _amortize_request(
            amount,
            _require(data, "interest_rate"),
            term,
            date.today(),
            {"principal": "amount", "annual_rate_percent": "interest_rate", "term_months": "duration"},
        )
        summary = result_to_dict(result)["summary"]
        return jsonify(
            {
                "monthly_payment": summary["monthly_payment"],
                "total_interest": summary["total_interest"],
                "total_paid": summary["total_paid"],
                "currency": settings.currency,
            }
        )

    @app.post("/api/loans/schedule")
    def schedule():
        data = _json_body()
        result = _amortize_request(
            _require(data, "principal"),
            _require(data, "interest_rate"),
            _require(data, "term_months"),
            data.get("start_date") or date.today(),
            {"annual_rate_percent": "interest_rate"},
            limits=settings,
        )
        payload = result_to_dict(result)
        payload["currency"] = settings.currency
        return jsonify(payload)

    return app


if __name__ == "__main__":
    _settings = load_settings()
    configure_logging(_settings.log_level)
    print("Starting amortization API...")
    create_app(_settings).run(host="0.0.0.0", port=8710, debug=True)
