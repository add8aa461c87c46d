# -*- coding: utf-8 -*-
"""
Stress Test - Domain records

Input records (portfolio, loan, rating) are immutable pydantic models so
that callers can pass plain ints, floats or strings for amounts; everything
numeric ends up as Decimal. The calculator output is a frozen dataclass.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_decimal(value: Any) -> Any:
    """Convert float input through its string form so 0.1 stays 0.1"""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


class Portfolio(BaseModel):
    """A portfolio of loans booked in one country and currency"""
    model_config = ConfigDict(frozen=True)

    port_id: int
    port_name: str = ''
    port_country: str = ''
    port_ccy: str = ''


class Loan(BaseModel):
    """A single loan; port_id references its owning portfolio"""
    model_config = ConfigDict(frozen=True)

    loan_id: int
    port_id: int
    original_loan_amount: Decimal = Decimal('0')
    outstanding_amount: Decimal = Decimal('0')
    collateral_value: Decimal = Decimal('0')
    credit_rating: str = ''

    @field_validator(
        'original_loan_amount', 'outstanding_amount', 'collateral_value',
        mode='before',
    )
    @classmethod
    def coerce_amount(cls, v):
        return to_decimal(v)


class Rating(BaseModel):
    """Credit rating code and its probability of default"""
    model_config = ConfigDict(frozen=True)

    credit_rating: str
    probability_of_default: Decimal = Field(
        default=Decimal('0'),
        description="Percentage, e.g. 60 means 60%",
    )

    @field_validator('probability_of_default', mode='before')
    @classmethod
    def coerce_pd(cls, v):
        return to_decimal(v)


@dataclass(frozen=True)
class PortfolioResult:
    """Aggregated stress test result for one portfolio"""
    port_id: int
    port_name: str
    country: str
    currency: str
    total_outstanding_amount: Decimal
    total_collateral_value: Decimal
    total_scenario_collateral_value: Decimal
    total_expected_loss: Decimal
    loan_count: int


@dataclass(frozen=True)
class RunTotals:
    """Run-level totals across all portfolio results"""
    total_portfolios: int
    total_loans: int
    total_expected_loss: Decimal
