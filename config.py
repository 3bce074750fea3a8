"""Phishguard - Application Configuration"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name, default):
    value = os.environ.get(name)
    return float(value) if value else default


def _env_int(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(32).hex()
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_TIMEOUT_MINUTES = _env_int('SESSION_TIMEOUT_MINUTES', 30)

    # Simulated latency of the analysis call, in seconds
    ANALYSIS_DELAY_MIN = _env_float('ANALYSIS_DELAY_MIN', 0.8)
    ANALYSIS_DELAY_MAX = _env_float('ANALYSIS_DELAY_MAX', 1.3)
    ANALYSIS_TIMEOUT = _env_float('ANALYSIS_TIMEOUT', 10.0)

    MAX_TEXT_LENGTH = _env_int('MAX_TEXT_LENGTH', 100_000)
    MAX_CONTENT_LENGTH = _env_int('MAX_CONTENT_LENGTH', 1024 * 1024)
    ALLOWED_UPLOAD_EXTENSIONS = ('.txt', '.eml')

    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE', 'EN')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    WTF_CSRF_ENABLED = False
    ANALYSIS_DELAY_MIN = 0.0
    ANALYSIS_DELAY_MAX = 0.0
    LOG_LEVEL = 'DEBUG'
