# -*- coding: utf-8 -*-
"""
Stress Test API
===============
JSON endpoints over the run service.

Endpoints:
  GET  /api/health                    - Service status
  GET  /api/stress-test/countries     - Countries available for a shock
  POST /api/stress-test/run           - Run and persist a stress test
  GET  /api/stress-test/runs          - Run history (without results)
  GET  /api/stress-test/runs/<id>     - One run with per-portfolio results
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, Field, ValidationError, field_validator

from config import APP_CONFIG
from stresstest import db
from stresstest.modules.stress_test import StressTestCalculator
from stresstest.services.csv_data_service import CsvDataService, DataSourceError
from stresstest.services.run_service import StressTestRunService

api_bp = Blueprint('api', __name__)
logger = logging.getLogger(__name__)


class StressTestRequest(BaseModel):
    """Request body of POST /api/stress-test/run"""
    country_changes: Dict[str, Decimal] = Field(
        default_factory=dict,
        description="Country code -> percentage change of collateral value",
    )

    @field_validator('country_changes', mode='before')
    @classmethod
    def floats_via_str(cls, v):
        if isinstance(v, dict):
            return {k: str(x) if isinstance(x, float) else x for k, x in v.items()}
        return v


def get_run_service() -> StressTestRunService:
    return StressTestRunService(
        data_service=CsvDataService(current_app.config['DATA_DIR']),
        calculator=StressTestCalculator(),
        session=db.session,
    )


@api_bp.route('/health', methods=['GET'])
def health():
    """Service status"""
    return jsonify({
        'status': 'ok',
        'name': APP_CONFIG['APP_NAME'],
        'description': APP_CONFIG['APP_SUBTITLE'],
        'version': APP_CONFIG['VERSION'],
        'timestamp': datetime.now().isoformat(),
    })


@api_bp.route('/stress-test/countries', methods=['GET'])
def get_countries():
    try:
        countries = get_run_service().get_countries()
    except DataSourceError as e:
        logger.warning(f"Data source unavailable: {str(e)}")
        return jsonify({'error': str(e)}), 503

    return jsonify({'countries': countries})


@api_bp.route('/stress-test/run', methods=['POST'])
def run_stress_test():
    """
    Run a stress test.

    Request body (JSON):
    {
        "country_changes": {"GB": -5.12, "US": "-10"}
    }

    Response (201): the saved run with its per-portfolio results
    """
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({'error': 'Request body must be JSON'}), 400

    try:
        payload = StressTestRequest(**data)
    except (ValidationError, TypeError) as e:
        logger.warning(f"Validation failed: {str(e)}")
        return jsonify({'error': str(e)}), 400

    try:
        run = get_run_service().run(payload.country_changes)
    except DataSourceError as e:
        logger.warning(f"Data source unavailable: {str(e)}")
        return jsonify({'error': str(e)}), 503
    except Exception as e:
        logger.exception(f"Stress test error: {str(e)}")
        return jsonify({'error': f"Internal error: {str(e)}"}), 500

    return jsonify(run.to_dict(include_results=True)), 201


@api_bp.route('/stress-test/runs', methods=['GET'])
def list_runs():
    runs = get_run_service().get_runs()
    return jsonify({'runs': [run.to_dict() for run in runs]})


@api_bp.route('/stress-test/runs/<int:run_id>', methods=['GET'])
def get_run(run_id):
    run = get_run_service().get_run_with_results(run_id)
    if run is None:
        return jsonify({'error': f'Run {run_id} not found'}), 404
    return jsonify(run.to_dict(include_results=True))
