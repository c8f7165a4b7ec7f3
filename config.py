"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os

from constants import PAUSE_NOTICE_HOURS, RESUME_NOTICE_HOURS, MAX_PAUSE_DAYS, MAX_PAUSES

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///subscriptions.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Pause/resume rules
    PAUSE_NOTICE_HOURS = int(os.environ.get('PAUSE_NOTICE_HOURS', PAUSE_NOTICE_HOURS))
    RESUME_NOTICE_HOURS = int(os.environ.get('RESUME_NOTICE_HOURS', RESUME_NOTICE_HOURS))
    MAX_PAUSE_DAYS = int(os.environ.get('MAX_PAUSE_DAYS', MAX_PAUSE_DAYS))
    MAX_PAUSES = MAX_PAUSES


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_LEVEL = 'WARNING'
    PAUSE_NOTICE_HOURS = PAUSE_NOTICE_HOURS
    RESUME_NOTICE_HOURS = RESUME_NOTICE_HOURS
    MAX_PAUSE_DAYS = MAX_PAUSE_DAYS


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
