"""Environment-based configuration settings"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Environment settings
ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

# Public site URL, used for sign-up confirmation redirects
SITE_URLS = {
    'development': 'http://localhost:5000',
    'production': os.getenv('PRODUCTION_SITE_URL', 'https://coursehub.onrender.com')
}

SITE_URL = SITE_URLS.get(ENVIRONMENT, SITE_URLS['development'])

DEBUG = ENVIRONMENT == 'development'
