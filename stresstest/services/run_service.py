# -*- coding: utf-8 -*-
"""
Stress Test - Run service

Orchestrates one stress test run:
1. Load portfolios, loans and ratings from the data source
2. Call the calculator once
3. Time the run, snapshot the shock table and compute totals
4. Persist the run with its per-portfolio results

Also serves the run history.
"""

import json
import logging
import time
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from config import format_currency, format_percent
from stresstest.models.database import StressTestRun, StressTestRunResult
from stresstest.modules.stress_test import StressTestCalculator, summarize_results
from stresstest.services.csv_data_service import CsvDataService

logger = logging.getLogger(__name__)


class StressTestRunService:
    """Runs stress tests and records them in the database"""

    def __init__(
        self,
        data_service: CsvDataService,
        calculator: StressTestCalculator,
        session,
    ):
        self.data_service = data_service
        self.calculator = calculator
        self.session = session

    def run(self, country_changes: Dict[str, Decimal]) -> StressTestRun:
        """
        Execute a stress test, persist it and return the run record

        Args:
            country_changes: Country code -> percentage change of collateral

        Returns:
            Saved StressTestRun with its results attached
        """
        started = time.perf_counter()

        portfolios = self.data_service.load_portfolios()
        loans = self.data_service.load_loans()
        ratings = self.data_service.load_ratings()

        portfolio_results = self.calculator.calculate(
            country_changes, portfolios, loans, ratings
        )

        duration_ms = int((time.perf_counter() - started) * 1000)
        totals = summarize_results(portfolio_results, self.calculator.precision)

        run = StressTestRun(
            run_at=datetime.utcnow(),
            duration_ms=duration_ms,
            country_inputs_json=self.serialize_country_changes(country_changes),
            total_portfolios=totals.total_portfolios,
            total_loans=totals.total_loans,
            total_expected_loss=totals.total_expected_loss,
            results=[
                StressTestRunResult.from_portfolio_result(r)
                for r in portfolio_results
            ],
        )

        try:
            self.session.add(run)
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            logger.exception(f"Error saving stress test run: {str(e)}")
            raise

        logger.info(
            f"[run {run.id}] {totals.total_portfolios} portfolios, "
            f"{totals.total_loans} loans, EL {format_currency(totals.total_expected_loss)}, "
            f"{duration_ms} ms, shocks: {self.describe_shocks(country_changes)}"
        )
        return run

    def get_runs(self) -> List[StressTestRun]:
        """All past runs, newest first"""
        return (
            self.session.query(StressTestRun)
            .order_by(StressTestRun.run_at.desc(), StressTestRun.id.desc())
            .all()
        )

    def get_run_with_results(self, run_id: int) -> Optional[StressTestRun]:
        """A run with its per-portfolio results, or None"""
        return self.session.get(StressTestRun, run_id)

    def get_countries(self) -> List[str]:
        """Countries that can receive a shock"""
        return self.data_service.load_countries()

    @staticmethod
    def serialize_country_changes(country_changes: Dict[str, Decimal]) -> str:
        """JSON snapshot of the shock table; decimals kept as exact strings"""
        return json.dumps(
            {country: str(value) for country, value in country_changes.items()},
            sort_keys=True,
        )

    @staticmethod
    def describe_shocks(country_changes: Dict[str, Decimal]) -> str:
        """Readable shock table for logs, e.g. 'GB -5.12%, US 0.00%'"""
        if not country_changes:
            return 'none'
        return ', '.join(
            f"{country} {format_percent(value)}"
            for country, value in sorted(country_changes.items())
        )
