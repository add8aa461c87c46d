# -*- coding: utf-8 -*-
"""
Stress Test - System configuration

Country-shock expected-loss stress test for a loan book.
All settings can be overridden through environment variables.
"""

import os
from decimal import Decimal

# Base paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, 'data')

# =============================================================================
# APPLICATION
# =============================================================================
APP_CONFIG = {
    'VERSION': '1.0.0',
    'APP_NAME': 'Stress Test',
    'APP_SUBTITLE': 'Expected credit loss under country collateral shocks',
}


# =============================================================================
# FLASK / DATABASE
# =============================================================================
class Config:
    """Base Flask configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'stress-test-dev-secret-key'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{os.path.join(DATA_DIR, "stresstest.db")}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Directory holding portfolios.csv, loans.csv and ratings.csv
    DATA_DIR = os.environ.get('STRESS_TEST_DATA_DIR') or DATA_DIR

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    LOG_LEVEL = 'DEBUG'


# =============================================================================
# STRESS TEST CALCULATION
# =============================================================================
STRESS_TEST_CONFIG = {
    # Significant digits of the decimal context used by the calculator
    'DECIMAL_PRECISION': 28,

    # Percentages are stored as "60" for 60%
    'PERCENT_DIVISOR': Decimal('100'),

    # Source files inside DATA_DIR
    'FILES': {
        'portfolios': 'portfolios.csv',
        'loans': 'loans.csv',
        'ratings': 'ratings.csv',
    },
}


# =============================================================================
# FORMATTING
# =============================================================================
def format_currency(amount, currency: str = '') -> str:
    """Format an amount with thousands separators and two decimals"""
    if isinstance(amount, (int, float)):
        amount = Decimal(str(amount))

    formatted = f"{amount:,.2f}"

    if currency:
        return f"{formatted} {currency}"
    return formatted


def format_percent(value) -> str:
    """Format a percentage value (5.12 -> '5.12%')"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return f"{value:.2f}%"
