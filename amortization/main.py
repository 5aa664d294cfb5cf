"""Command‑line interface for the amortization engine.

This module uses the ``click`` library to implement a multi‑command interface.
Users can estimate a monthly payment, print or export a full repayment
schedule, view a summary or compare two loan scenarios. Results can be printed
to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
import shlex
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .config import Settings, configure_logging, load_settings
from .data_models import AmortizationResult, LoanTerms
from .engine import amortize, compute_monthly_payment
from .errors import AmortizationError
from .formatter import format_currency, print_comparison, print_schedule, print_summary
from .utils import decimal_from_str, parse_start_date, round_whole

logger = logging.getLogger(__name__)


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000", "500,000") and shorthand with ``k``/``m``
    suffixes (e.g., "500k" meaning 500_000).
    """
    value = value.strip().lower()
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_rate(value: str) -> Decimal:
    """Parse an annual rate in percent ("15", "15%", "12.5")."""
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return decimal_from_str(value)
    except ValueError:
        raise click.BadParameter(f"Invalid interest rate: {value}")


OPTION_FOR_FIELD = {"principal": "--principal", "annual_rate_percent": "--rate", "term_months": "--term"}


def build_terms_from_options(principal: str, rate: str, term: int) -> LoanTerms:
    try:
        return LoanTerms(parse_amount(principal), parse_rate(rate), term)
    except AmortizationError as exc:
        raise click.BadParameter(str(exc), param_hint=OPTION_FOR_FIELD.get(exc.field or ""))


def resolve_start_date(start_date: Optional[str]) -> date:
    if not start_date:
        return date.today()
    try:
        return parse_start_date(start_date)
    except AmortizationError as exc:
        raise click.BadParameter(str(exc), param_hint="--start-date")


def run(principal: str, rate: str, term: int, start_date: Optional[str]) -> AmortizationResult:
    terms = build_terms_from_options(principal, rate, term)
    return amortize(terms, resolve_start_date(start_date))


def result_to_dict(result: AmortizationResult) -> Dict[str, Any]:
    """Convert a result into JSON-serialisable dictionaries.

    Amounts are emitted as integers since every figure is in whole units.
    """
    return {
        "summary": {
            "monthly_payment": int(result.monthly_payment),
            "total_interest": int(round_whole(result.total_interest)),
            "total_paid": int(result.total_paid),
            "term_months": len(result.schedule),
            "final_due_date": result.final_due_date.isoformat(),
        },
        "schedule": [
            {
                "month": e.month_index,
                "due_date": e.due_date.isoformat(),
                "payment": int(e.payment_amount),
                "principal": int(e.principal_portion),
                "interest": int(e.interest_portion),
                "balance": int(e.remaining_balance),
            }
            for e in result.schedule
        ],
    }


def export_to_json(path: Path, result: AmortizationResult, summary_only: bool = False) -> None:
    """Export schedule and summary to a JSON file."""
    data = result_to_dict(result)
    if summary_only:
        data = {"summary": data["summary"]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: AmortizationResult) -> None:
    """Export schedule to a CSV file."""
    header = ["Month", "Due_Date", "Payment", "Principal", "Interest", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in result.schedule:
            writer.writerow(
                [
                    e.month_index,
                    e.due_date.isoformat(),
                    e.payment_amount,
                    e.principal_portion,
                    e.interest_portion,
                    e.remaining_balance,
                ]
            )


def loan_options(func):
    """Attach the options shared by every loan command."""
    func = click.option("--term", "-t", "term", required=True, type=int, help="Loan term in months")(func)
    func = click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")(func)
    func = click.option("--principal", "-p", "principal", required=True, help="Loan amount")(func)
    return func


@click.group()
@click.option("--log-level", "log_level", default=None, help="Logging level (default from AMORTIZATION_LOG_LEVEL)")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Loan payment and repayment-schedule calculator."""
    try:
        settings = load_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    configure_logging(log_level or settings.log_level)
    logger.debug("Loaded settings %s", settings)
    ctx.obj = settings


@cli.command()
@loan_options
@click.pass_obj
def payment(settings: Settings, principal: str, rate: str, term: int) -> None:
    """Print the estimated monthly payment for a loan."""
    terms = build_terms_from_options(principal, rate, term)
    amount = compute_monthly_payment(terms.principal, terms.annual_rate_percent, terms.term_months)
    click.echo(format_currency(amount, settings.currency))


@cli.command()
@loan_options
@click.option("--start-date", "-s", "start_date", help="Reference date (YYYY-MM-DD); defaults to today")
@click.option("--currency", "currency", help="Display currency code")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.pass_obj
def schedule(
    settings: Settings,
    principal: str,
    rate: str,
    term: int,
    start_date: Optional[str],
    currency: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print the full repayment schedule."""
    result = run(principal, rate, term, start_date)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        click.echo(f"Schedule exported to {path}")
        return

    currency = currency or settings.currency
    print_summary(result, currency)
    # Limit schedule length printed to avoid flooding the terminal
    max_rows = settings.max_rows
    if len(result.schedule) > max_rows:
        click.echo(f"Schedule has {len(result.schedule)} rows; showing first {max_rows} rows.")
    print_schedule(result.schedule[:max_rows], currency)


@cli.command()
@loan_options
@click.option("--start-date", "-s", "start_date", help="Reference date (YYYY-MM-DD); defaults to today")
@click.option("--currency", "currency", help="Display currency code")
@click.option("--output", "output", type=str, help="Output file path (.json)")
@click.pass_obj
def summary(
    settings: Settings,
    principal: str,
    rate: str,
    term: int,
    start_date: Optional[str],
    currency: Optional[str],
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    result = run(principal, rate, term, start_date)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        export_to_json(path, result, summary_only=True)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result, currency or settings.currency)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Map a quoted option string such as ``"-p 500k -r 15 -t 24"`` to ``run`` arguments."""
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {"principal": None, "rate": None, "term": None, "start_date": None}
    names = {
        "-p": "principal",
        "--principal": "principal",
        "-r": "rate",
        "--rate": "rate",
        "-t": "term",
        "--term": "term",
        "-s": "start_date",
        "--start-date": "start_date",
    }
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token not in names:
            raise click.BadParameter(f"Unknown option in scenario: {token}")
        if i + 1 >= len(tokens):
            raise click.BadParameter(f"Missing value for {token} in scenario")
        params[names[token]] = tokens[i + 1]
        i += 2
    for required in ("principal", "rate", "term"):
        if params[required] is None:
            raise click.BadParameter(f"Scenario missing required option {required}")
    try:
        params["term"] = int(params["term"])
    except ValueError:
        raise click.BadParameter(f"Invalid term in scenario: {params['term']}")
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
@click.option("--currency", "currency", help="Display currency code")
@click.pass_obj
def compare(settings: Settings, scenario1: str, scenario2: str, currency: Optional[str]) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        amortize compare --scenario1 "-p 500k -r 18 -t 12" --scenario2 "-p 500k -r 15 -t 24"
    """
    result1 = run(**parse_scenario_opts(scenario1))
    result2 = run(**parse_scenario_opts(scenario2))
    print_comparison(result1, result2, currency or settings.currency)


if __name__ == "__main__":
    cli()
