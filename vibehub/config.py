"""Application configuration.

Values come from the environment (optionally a local .env file) so the same
code runs locally on SQLite and in production on PostgreSQL.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'DATABASE_URL',
        'sqlite:///vibehub.db'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'dev-secret')
    JWT_ACCESS_TOKEN_EXPIRES = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES', 2592000))  # 30 days
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    CORS_ORIGINS = _split_origins(os.getenv('CORS_ORIGINS', '*'))

    # Flask-Limiter
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = True
    LAUNCH_RATE_LIMIT = os.getenv('LAUNCH_RATE_LIMIT', '30 per minute')
    SUBMIT_RATE_LIMIT = os.getenv('SUBMIT_RATE_LIMIT', '20 per hour')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', 'sqlite:///:memory:')
    JWT_SECRET_KEY = 'test-secret-key-for-testing'
    RATELIMIT_ENABLED = False
    LOG_LEVEL = 'WARNING'


class ProductionConfig(Config):
    DEBUG = False


CONFIGS = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name):
    """Return the config class for a name, falling back to development."""
    return CONFIGS.get(config_name or 'development', DevelopmentConfig)
