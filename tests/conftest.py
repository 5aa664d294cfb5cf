"""Shared fixtures.

Canonical loan: 120,000 at 12 %/year over 12 months (1 % per month),
first installment due one month after 2024-01-15.
"""

import os
from datetime import date
from decimal import Decimal

import pytest
from click.testing import CliRunner

from amortization.config import Settings
from amortization.data_models import LoanTerms
from amortization_web.app import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("AMORTIZATION_"):
            monkeypatch.delenv(name)


@pytest.fixture
def canonical_terms() -> LoanTerms:
    return LoanTerms(Decimal("120000"), Decimal("12"), 12)


@pytest.fixture
def start_date() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()
