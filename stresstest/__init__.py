# -*- coding: utf-8 -*-
"""
Stress Test - Application initialisation
"""

import logging

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import Config, APP_CONFIG

db = SQLAlchemy()


def create_app(config_class=Config):
    """Flask application factory"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    db.init_app(app)

    # Models must be imported after db.init_app() and before db.create_all()
    from stresstest.models import database  # noqa: F401

    from stresstest.api.routes import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    with app.app_context():
        db.create_all()

    logging.getLogger(__name__).info(
        "%s %s started, data directory: %s",
        APP_CONFIG['APP_NAME'], APP_CONFIG['VERSION'], app.config['DATA_DIR'],
    )

    return app
