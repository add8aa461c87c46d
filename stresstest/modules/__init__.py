# -*- coding: utf-8 -*-
"""
Stress Test - Calculation modules
"""

from stresstest.modules.stress_test import StressTestCalculator, summarize_results

__all__ = [
    'StressTestCalculator',
    'summarize_results',
]
