"""
Configuration settings for the application
"""
import os
from dotenv import load_dotenv
from .env_config import SITE_URL, ENVIRONMENT, DEBUG

# Load environment variables
load_dotenv()

# Module-level configuration variables
SUPABASE_URL = os.getenv('SUPABASE_URL') or os.getenv('VITE_SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY') or os.getenv('VITE_SUPABASE_ANON_KEY')
SECRET_KEY = os.getenv('SECRET_KEY')

# Catalog settings
FEATURED_COURSE_LIMIT = int(os.getenv('FEATURED_COURSE_LIMIT', '6'))

# Placeholder metric ranges (display only, see services/metrics_provider.py)
MOCK_RATING_MIN = float(os.getenv('MOCK_RATING_MIN', '4.5'))
MOCK_RATING_SPAN = float(os.getenv('MOCK_RATING_SPAN', '0.5'))
MOCK_STUDENTS_MIN = int(os.getenv('MOCK_STUDENTS_MIN', '50'))
MOCK_STUDENTS_SPAN = int(os.getenv('MOCK_STUDENTS_SPAN', '1000'))


class Config:
    """
    Configuration class for the application.
    Contains all necessary settings and environment variables.
    """

    # Backend
    SUPABASE_URL = SUPABASE_URL
    SUPABASE_KEY = SUPABASE_KEY

    # Flask session signing
    SECRET_KEY = SECRET_KEY

    # Environment settings
    ENVIRONMENT = ENVIRONMENT
    DEBUG = DEBUG
    TESTING = False
    SITE_URL = SITE_URL

    # CORS for the JSON API
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv('CORS_ORIGINS', 'http://localhost:5173,http://localhost:5000').split(',')
        if origin.strip()
    ]

    # Catalog settings
    FEATURED_COURSE_LIMIT = FEATURED_COURSE_LIMIT
    MOCK_RATING_MIN = MOCK_RATING_MIN
    MOCK_RATING_SPAN = MOCK_RATING_SPAN
    MOCK_STUDENTS_MIN = MOCK_STUDENTS_MIN
    MOCK_STUDENTS_SPAN = MOCK_STUDENTS_SPAN

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration values are set.
        Raises ValueError if any required value is missing.
        """
        if not cls.SUPABASE_URL:
            raise ValueError("SUPABASE_URL environment variable is not set")
        if not cls.SUPABASE_KEY:
            raise ValueError("SUPABASE_KEY environment variable is not set")
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable is not set")


class TestingConfig(Config):
    """Configuration used by the test suite; no backend credentials required."""

    TESTING = True
    DEBUG = False
    SECRET_KEY = 'testing-secret-key'
    SUPABASE_URL = 'http://localhost:54321'
    SUPABASE_KEY = 'testing-anon-key'

    @classmethod
    def validate(cls) -> None:
        return None


CONFIGS = {
    'default': Config,
    'testing': TestingConfig,
}
