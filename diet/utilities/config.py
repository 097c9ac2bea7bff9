"""Configuration management for the dietitian back-office application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Booking window used when an owner has not configured one (or configured garbage)
DEFAULT_WORK_START_HOUR: Final[int] = int(os.getenv('DEFAULT_WORK_START_HOUR', '9'))
DEFAULT_WORK_END_HOUR: Final[int] = int(os.getenv('DEFAULT_WORK_END_HOUR', '17'))
DEFAULT_SESSION_DURATION: Final[int] = int(os.getenv('DEFAULT_SESSION_DURATION', '45'))

# Public booking page
BOOKING_HORIZON_DAYS: Final[int] = int(os.getenv('BOOKING_HORIZON_DAYS', '30'))
BOOKING_TIMEZONE: Final[str] = os.getenv('BOOKING_TIMEZONE', 'Europe/Istanbul')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('DATA_DIR', str(BASE_DIR / 'data')))
