from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import logging

from vibehub.config import get_config

db = SQLAlchemy()
limiter = Limiter(key_func=get_remote_address)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def _configure_logging(app):
    """Attach a console handler to the package logger at the configured level."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    package_logger = logging.getLogger('vibehub')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(console_handler)
    app.logger.setLevel(level)


def _register_error_handlers(app):
    from vibehub.services.listing_query import DataAccessError

    @app.errorhandler(DataAccessError)
    def handle_data_access_error(error):
        app.logger.error(f"Data access failure: {error}")
        return jsonify({'error': 'Database unavailable'}), 500

    @app.errorhandler(429)
    def handle_rate_limit(error):
        return jsonify({'error': 'Too many requests', 'detail': str(error.description)}), 429


def create_app(config_name='development'):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)
    CORS(app, origins=app.config['CORS_ORIGINS'])

    # Import models so create_all sees every table
    from vibehub import models  # noqa: F401

    with app.app_context():
        try:
            db.create_all()
        except Exception as e:
            app.logger.warning(f"Could not create database tables: {e}")

    from vibehub.routes import register_routes
    register_routes(app)
    _register_error_handlers(app)

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok'}, 200

    app.logger.info(f"vibehub started with '{config_name}' config")
    return app
