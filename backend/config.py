"""
Configuration management for the bowling community backend.
Centralizes all configuration settings.
"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Base configuration class."""

    # Flask Configuration
    SECRET_KEY = os.getenv('FLASK_SECRET', '')
    FLASK_ENV = os.getenv('FLASK_ENV', 'development')
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

    # Server Configuration
    FLASK_HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.getenv('FLASK_PORT', 5000))

    # CORS Configuration
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*').split(',')

    # Logging Configuration
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # OTP Configuration
    OTP_EXPIRY_MS = int(os.getenv('OTP_EXPIRY_MS', 300000))  # 5 minutes
    OTP_MAX_ENTRIES = int(os.getenv('OTP_MAX_ENTRIES', 10000))  # 0 disables the cap
    OTP_STRICT_CODES = os.getenv('OTP_STRICT_CODES', 'true').lower() == 'true'

    # JWT Configuration
    JWT_ALGORITHM = 'HS256'
    JWT_ACCESS_TOKEN_EXPIRY = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRY', 900))  # 15 minutes

    def __init__(self):
        """Validate configuration for the current environment."""
        self._validate_otp_config()

        if self.is_production():
            self._validate_production_config()

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.FLASK_ENV == 'production' or self.ENVIRONMENT == 'production'

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return not self.is_production()

    def _validate_otp_config(self):
        if self.OTP_EXPIRY_MS <= 0:
            raise ValueError(f"OTP_EXPIRY_MS must be positive, got {self.OTP_EXPIRY_MS}")
        if self.OTP_MAX_ENTRIES < 0:
            raise ValueError(f"OTP_MAX_ENTRIES must not be negative, got {self.OTP_MAX_ENTRIES}")

    def _validate_production_config(self):
        """Validate production configuration."""
        errors = []

        if not self.SECRET_KEY or self.SECRET_KEY == 'your-flask-secret-key-here':
            errors.append("FLASK_SECRET must be set in production")

        if '*' in self.CORS_ORIGINS:
            errors.append("CORS_ORIGINS must not be '*' in production")

        if errors:
            error_msg = "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info("Production configuration validated successfully")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    __test__ = False  # not a pytest test class

    DEBUG = True
    TESTING = True

    FLASK_ENV = 'testing'
    ENVIRONMENT = 'testing'
    SECRET_KEY = 'testing-secret-key'
    CORS_ORIGINS = ['http://localhost:3000']
    OTP_EXPIRY_MS = 300000
    OTP_MAX_ENTRIES = 10000
    OTP_STRICT_CODES = True


# Configuration factory
def get_config():
    """Get configuration based on environment."""
    env = os.getenv('FLASK_ENV', 'development')

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()


# Global config instance
config = get_config()
