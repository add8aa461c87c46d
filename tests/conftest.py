# -*- coding: utf-8 -*-
"""Pytest fixtures for stress test tests."""

from decimal import Decimal

import pytest

from config import TestConfig
from stresstest import create_app, db
from stresstest.models.domain import Loan, Portfolio, Rating


PORTFOLIOS_CSV = """Port_ID,Port_Name,Port_Country,Port_CCY
1,PORT01,GB,GBP
2,PORT02,US,USD
3,PORT03,DE,EUR
"""

# Loan 4 references a portfolio that does not exist
LOANS_CSV = """Loan_ID,Port_ID,OriginalLoanAmount,OutstandingAmount,CollateralValue,CreditRating
1,1,100,100,100,BB
2,1,200,200,200,BB
3,2,100,100,80,BB
4,9,100,100,100,BB
"""

RATINGS_CSV = """Rating,ProbablilityOfDefault
AAA,1
AA,10
A,25
BBB,40
BB,60
B,75
CCC,95
"""


def make_portfolio(port_id, country="GB", ccy="GBP", name=None):
    return Portfolio(
        port_id=port_id,
        port_name=name or f"PORT{port_id:02d}",
        port_country=country,
        port_ccy=ccy,
    )


def make_loan(loan_id, port_id, outstanding, collateral, rating="BB"):
    return Loan(
        loan_id=loan_id,
        port_id=port_id,
        original_loan_amount=Decimal(str(outstanding)),
        outstanding_amount=Decimal(str(outstanding)),
        collateral_value=Decimal(str(collateral)),
        credit_rating=rating,
    )


def make_rating(code, pd_pct):
    return Rating(credit_rating=code, probability_of_default=Decimal(str(pd_pct)))


DEFAULT_RATINGS = [
    make_rating("AAA", 1),
    make_rating("AA", 10),
    make_rating("A", 25),
    make_rating("BBB", 40),
    make_rating("BB", 60),
    make_rating("B", 75),
    make_rating("CCC", 95),
]


def write_data_dir(path, portfolios=PORTFOLIOS_CSV, loans=LOANS_CSV, ratings=RATINGS_CSV):
    (path / "portfolios.csv").write_text(portfolios)
    (path / "loans.csv").write_text(loans)
    (path / "ratings.csv").write_text(ratings)
    return path


@pytest.fixture
def data_dir(tmp_path):
    """Directory with a small, hand-checkable data set."""
    return write_data_dir(tmp_path)


def _make_app(data_path):
    config_class = type("DataDirTestConfig", (TestConfig,), {"DATA_DIR": str(data_path)})
    return create_app(config_class)


@pytest.fixture
def app(data_dir):
    app = _make_app(data_dir)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def empty_app(tmp_path):
    """App pointed at a directory without any source files."""
    missing = tmp_path / "missing"
    missing.mkdir()
    app = _make_app(missing)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
