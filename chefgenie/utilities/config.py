"""Configuration management for the ChefGenie application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# API Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_TEXT_MODEL: Final[str] = os.getenv('OPENAI_TEXT_MODEL', 'gpt-4o-mini')
OPENAI_IMAGE_MODEL: Final[str] = os.getenv('OPENAI_IMAGE_MODEL', 'gpt-image-1')
OPENAI_TEMPERATURE: Final[float] = float(os.getenv('OPENAI_TEMPERATURE', '0.7'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Discovery
CACHE_SUFFICIENT_MATCHES: Final[int] = int(os.getenv('CACHE_SUFFICIENT_MATCHES', '9'))
SEARCH_BATCHES: Final[int] = int(os.getenv('SEARCH_BATCHES', '3'))
SEARCH_BATCH_SIZE: Final[int] = int(os.getenv('SEARCH_BATCH_SIZE', '3'))

# Image generation gate (minimum spacing between request starts)
IMAGE_MIN_DELAY_MS: Final[int] = int(os.getenv('IMAGE_MIN_DELAY_MS', '300'))

# Storage
STORAGE_QUOTA_BYTES: Final[int] = int(os.getenv('STORAGE_QUOTA_BYTES', str(5 * 1024 * 1024)))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('CHEFGENIE_DATA_DIR', str(BASE_DIR / 'data')))
