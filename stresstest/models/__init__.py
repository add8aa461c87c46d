# -*- coding: utf-8 -*-
"""
Stress Test - Data models
"""

from stresstest.models.domain import (
    Portfolio, Loan, Rating, PortfolioResult, RunTotals
)

__all__ = [
    'Portfolio', 'Loan', 'Rating', 'PortfolioResult', 'RunTotals',
]
