# -*- coding: utf-8 -*-
"""
Stress Test - CSV data source

Loads portfolios, loans and ratings from flat CSV files. Cells are read as
text and amounts parsed directly into Decimal, so no binary float enters
the calculation.

Expected headers:
    portfolios.csv  Port_ID, Port_Name, Port_Country, Port_CCY
    loans.csv       Loan_ID, Port_ID, OriginalLoanAmount, OutstandingAmount,
                    CollateralValue, CreditRating
    ratings.csv     Rating, ProbablilityOfDefault
"""

import logging
import os
from decimal import Decimal, InvalidOperation
from typing import Dict, List

import pandas as pd

from config import STRESS_TEST_CONFIG
from stresstest.models.domain import Loan, Portfolio, Rating

logger = logging.getLogger(__name__)


class DataSourceError(Exception):
    """Raised when a source file is missing or cannot be parsed"""


class CsvDataService:
    """Reads the three record sets of a stress test from a data directory"""

    PORTFOLIO_COLUMNS = ['Port_ID', 'Port_Name', 'Port_Country', 'Port_CCY']
    LOAN_COLUMNS = [
        'Loan_ID', 'Port_ID', 'OriginalLoanAmount', 'OutstandingAmount',
        'CollateralValue', 'CreditRating',
    ]
    # Header spelling matches the source files
    RATING_COLUMNS = ['Rating', 'ProbablilityOfDefault']

    def __init__(self, data_dir: str, files: Dict[str, str] = None):
        self.data_dir = data_dir
        self.files = files or STRESS_TEST_CONFIG['FILES']

    def load_portfolios(self) -> List[Portfolio]:
        frame = self._read('portfolios', self.PORTFOLIO_COLUMNS)
        return [
            Portfolio(
                port_id=self._int(row['Port_ID'], 'Port_ID'),
                port_name=row['Port_Name'],
                port_country=row['Port_Country'],
                port_ccy=row['Port_CCY'],
            )
            for row in frame.to_dict('records')
        ]

    def load_loans(self) -> List[Loan]:
        frame = self._read('loans', self.LOAN_COLUMNS)
        return [
            Loan(
                loan_id=self._int(row['Loan_ID'], 'Loan_ID'),
                port_id=self._int(row['Port_ID'], 'Port_ID'),
                original_loan_amount=self._decimal(row['OriginalLoanAmount'], 'OriginalLoanAmount'),
                outstanding_amount=self._decimal(row['OutstandingAmount'], 'OutstandingAmount'),
                collateral_value=self._decimal(row['CollateralValue'], 'CollateralValue'),
                credit_rating=row['CreditRating'],
            )
            for row in frame.to_dict('records')
        ]

    def load_ratings(self) -> List[Rating]:
        frame = self._read('ratings', self.RATING_COLUMNS)
        return [
            Rating(
                credit_rating=row['Rating'],
                probability_of_default=self._decimal(row['ProbablilityOfDefault'], 'ProbablilityOfDefault'),
            )
            for row in frame.to_dict('records')
        ]

    def load_countries(self) -> List[str]:
        """Distinct portfolio countries, sorted"""
        return sorted({p.port_country for p in self.load_portfolios() if p.port_country})

    def _read(self, name: str, columns: List[str]) -> pd.DataFrame:
        """Read one CSV file as text, trimming headers and cells"""
        path = os.path.join(self.data_dir, self.files[name])
        try:
            frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        except FileNotFoundError as e:
            logger.error(f"Source file not found: {path}")
            raise DataSourceError(f"Source file not found: {path}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            logger.exception(f"Failed to parse {path}")
            raise DataSourceError(f"Failed to parse {path}: {e}") from e
        except pd.errors.EmptyDataError:
            frame = pd.DataFrame(columns=columns, dtype=str)

        frame.columns = [str(c).strip() for c in frame.columns]
        missing = [c for c in columns if c not in frame.columns]
        if missing:
            raise DataSourceError(f"{path}: missing columns {', '.join(missing)}")

        frame = frame[columns].apply(lambda col: col.str.strip())
        logger.info(f"Loaded {len(frame)} {name} from {path}")
        return frame

    @staticmethod
    def _int(value: str, column: str) -> int:
        try:
            return int(value)
        except ValueError as e:
            raise DataSourceError(f"{column}: '{value}' is not an integer") from e

    @staticmethod
    def _decimal(value: str, column: str) -> Decimal:
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise DataSourceError(f"{column}: '{value}' is not a number") from e
