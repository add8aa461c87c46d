# -*- coding: utf-8 -*-
"""
Stress Test - Database models
SQLAlchemy models for stress test run history
"""

import json
from datetime import datetime
from decimal import Decimal

from sqlalchemy.types import String, TypeDecorator

from stresstest import db


class DecimalString(TypeDecorator):
    """Decimal stored as its exact text form"""
    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class StressTestRun(db.Model):
    """A saved stress test run with its shock table snapshot and totals"""
    __tablename__ = 'stress_test_runs'

    id = db.Column(db.Integer, primary_key=True)
    run_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    duration_ms = db.Column(db.Integer, default=0)

    # JSON snapshot of country -> percentage change
    country_inputs_json = db.Column(db.Text, nullable=False)

    total_portfolios = db.Column(db.Integer, default=0)
    total_loans = db.Column(db.Integer, default=0)
    total_expected_loss = db.Column(DecimalString, default=Decimal('0'))

    results = db.relationship(
        'StressTestRunResult',
        backref='run',
        lazy=True,
        cascade='all, delete-orphan',
        order_by='StressTestRunResult.port_id',
    )

    @property
    def country_inputs(self):
        """Shock table as stored, country -> Decimal"""
        raw = json.loads(self.country_inputs_json or '{}')
        return {country: Decimal(value) for country, value in raw.items()}

    def to_dict(self, include_results: bool = False):
        data = {
            'id': self.id,
            'run_at': self.run_at.isoformat() if self.run_at else None,
            'duration_ms': self.duration_ms,
            'country_inputs': {k: float(v) for k, v in self.country_inputs.items()},
            'total_portfolios': self.total_portfolios,
            'total_loans': self.total_loans,
            'total_expected_loss': float(self.total_expected_loss or 0),
        }
        if include_results:
            data['results'] = [r.to_dict() for r in self.results]
        return data

    def __repr__(self):
        return f'<StressTestRun {self.id} @ {self.run_at}>'


class StressTestRunResult(db.Model):
    """Per-portfolio aggregated result saved against a run"""
    __tablename__ = 'stress_test_run_results'

    id = db.Column(db.Integer, primary_key=True)
    stress_test_run_id = db.Column(
        db.Integer, db.ForeignKey('stress_test_runs.id', ondelete='CASCADE'),
        nullable=False, index=True,
    )

    port_id = db.Column(db.Integer, nullable=False)
    port_name = db.Column(db.String(255))
    country = db.Column(db.String(50))
    currency = db.Column(db.String(10))
    total_outstanding_amount = db.Column(DecimalString)
    total_collateral_value = db.Column(DecimalString)
    total_scenario_collateral_value = db.Column(DecimalString)
    total_expected_loss = db.Column(DecimalString)
    loan_count = db.Column(db.Integer, default=0)

    @classmethod
    def from_portfolio_result(cls, result):
        return cls(
            port_id=result.port_id,
            port_name=result.port_name,
            country=result.country,
            currency=result.currency,
            total_outstanding_amount=result.total_outstanding_amount,
            total_collateral_value=result.total_collateral_value,
            total_scenario_collateral_value=result.total_scenario_collateral_value,
            total_expected_loss=result.total_expected_loss,
            loan_count=result.loan_count,
        )

    def to_dict(self):
        return {
            'port_id': self.port_id,
            'port_name': self.port_name,
            'country': self.country,
            'currency': self.currency,
            'total_outstanding_amount': float(self.total_outstanding_amount or 0),
            'total_collateral_value': float(self.total_collateral_value or 0),
            'total_scenario_collateral_value': float(self.total_scenario_collateral_value or 0),
            'total_expected_loss': float(self.total_expected_loss or 0),
            'loan_count': self.loan_count,
        }

    def __repr__(self):
        return f'<StressTestRunResult run={self.stress_test_run_id} port={self.port_id}>'
