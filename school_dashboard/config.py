#!/usr/bin/env python3
"""
Configuration module for the School Performance Dashboard
Reads from environment variables with fallbacks to .env file
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).resolve().parent.parent
env_file = project_root / '.env'
load_dotenv(env_file)

# Also try to load from package directory as fallback
env_path = Path(__file__).parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

class Config:
    """Configuration class that reads from environment variables"""

    # Seeded admin account (created by database_init when missing)
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'change-this-password')
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@example.com')

    # Flask Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.getenv('FLASK_ENV', 'development')
    FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'false').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Server Configuration
    HOST = os.getenv('HOST', '0.0.0.0' if os.getenv('FLASK_ENV') == 'production' else 'localhost')
    PORT = int(os.getenv('PORT', '5001'))

    # Database Configuration
    DATABASE_PATH = os.getenv('DATABASE_PATH', str(project_root / 'database' / 'school_dashboard.db'))

    # Timezones used for report timestamps and export file names
    DEFAULT_TIMEZONE = os.getenv('DEFAULT_TIMEZONE', 'UTC')
    DISPLAY_TIMEZONE = os.getenv('DISPLAY_TIMEZONE', 'America/New_York')

    # Funnel policy targets (percent)
    APPOINTMENT_RATE_TARGET = int(os.getenv('APPOINTMENT_RATE_TARGET', '50'))
    SHOW_RATE_TARGET = int(os.getenv('SHOW_RATE_TARGET', '80'))
    ENROLLMENT_RATE_TARGET = int(os.getenv('ENROLLMENT_RATE_TARGET', '80'))

    # Allowed Origins for CORS
    ALLOWED_ORIGINS = os.getenv('ALLOWED_ORIGINS', 'http://localhost:3000,http://localhost:5001').split(',')

    @property
    def is_production(self):
        """Check if running in production environment"""
        return self.FLASK_ENV == 'production'

    @property
    def funnel_targets(self):
        """Funnel targets keyed by conversion rate name"""
        return {
            'appointment_rate': self.APPOINTMENT_RATE_TARGET,
            'show_rate': self.SHOW_RATE_TARGET,
            'enrollment_rate': self.ENROLLMENT_RATE_TARGET,
        }

# Create singleton instance
config = Config()
