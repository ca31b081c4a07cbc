"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False

    # Session Configuration (Production-safe defaults)
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    PERMANENT_SESSION_LIFETIME = 86400  # 24 hours

    # Database
    # Priority: DATABASE_URL > DB_* > local SQLite file
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        DB_HOST = os.getenv('DB_HOST')
        if DB_HOST:
            DB_PORT = os.getenv('DB_PORT', '5432')
            DB_NAME = os.getenv('DB_NAME', 'fuelshop')
            DB_USER = os.getenv('DB_USER', 'fuelshop')
            DB_PASSWORD = os.getenv('DB_PASSWORD', 'fuelshop')
            DATABASE_URL = (
                f"postgresql://{DB_USER}:{DB_PASSWORD}"
                f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
            )
        else:
            DATABASE_URL = 'sqlite:///fuelshop.db'

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'

    # Storefront
    STORE_NAME = os.getenv('STORE_NAME', 'Fuel & Lubricants Delivery')
    CURRENCY_SYMBOL = os.getenv('CURRENCY_SYMBOL', '₱')
    CURRENCY_CODE = os.getenv('CURRENCY_CODE', 'PHP')

    # Delivery fee policy. Empty threshold = fee always applies.
    DELIVERY_FEE = os.getenv('DELIVERY_FEE', '0.00')
    FREE_DELIVERY_THRESHOLD = os.getenv('FREE_DELIVERY_THRESHOLD') or None

    # Default value shown when the product screen switches to "By Amount"
    DEFAULT_AMOUNT_INPUT = os.getenv('DEFAULT_AMOUNT_INPUT', '100')


class TestConfig(Config):
    """Configuration used by the test suite (in-memory SQLite)."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    DELIVERY_FEE = '0.00'
    FREE_DELIVERY_THRESHOLD = None
