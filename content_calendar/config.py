#!/usr/bin/env python3
"""
Environment configuration for the content calendar service.
All settings are read once from the process environment (and .env).
"""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

MONGODB_URI = os.getenv('MONGODB_URI', 'mongodb://localhost:27017/')
MONGODB_DB_NAME = os.getenv('MONGODB_DB_NAME', 'content_calendar')

GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-1.5-flash')

JWT_SECRET = os.getenv('JWT_SECRET')
FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')

# Scheduler: "production" | "development" | "disabled"
SCHEDULER_MODE = os.getenv('SCHEDULER_MODE', 'production')
SCHEDULER_TIMEZONE = os.getenv('SCHEDULER_TIMEZONE', 'Asia/Kolkata')
DAILY_GENERATION_HOUR = int(os.getenv('DAILY_GENERATION_HOUR', '17'))
DAILY_GENERATION_MINUTE = int(os.getenv('DAILY_GENERATION_MINUTE', '0'))

# Local hour at which calendar articles are scheduled
ARTICLE_PUBLISH_HOUR = int(os.getenv('ARTICLE_PUBLISH_HOUR', '17'))

GENERATION_DELAY_SECONDS = float(os.getenv('GENERATION_DELAY_SECONDS', '1'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"


def configure_logging(level: str = None):
    """Configure root logging once for the service process."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel((level or LOG_LEVEL).upper())
