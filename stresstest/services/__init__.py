# -*- coding: utf-8 -*-
"""
Stress Test - Services
"""

from stresstest.services.csv_data_service import CsvDataService, DataSourceError
from stresstest.services.run_service import StressTestRunService

__all__ = [
    'CsvDataService',
    'DataSourceError',
    'StressTestRunService',
]
