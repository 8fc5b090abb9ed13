"""
Configuration module for the Splatoon 3 schedule resolver

This module centralizes all configuration constants, environment variables,
and file paths used throughout the project.
"""

import os
from dataclasses import dataclass
from typing import List
from dotenv import load_dotenv

# ============================================================================
# ENVIRONMENT SETUP
# ============================================================================

# Load environment variables from .env file (use absolute path for hosting)
SCRIPT_DIR = os.path.dirname(os.path.realpath(__file__))
_ENV_FILE = os.path.join(SCRIPT_DIR, '.env')

load_dotenv(_ENV_FILE)

# ============================================================================
# FILE PATHS
# ============================================================================

CACHE_DIR = os.path.join(SCRIPT_DIR, "data_cache")
SCHEDULE_CACHE_DIR = os.path.join(CACHE_DIR, "splatoon3")

# Error logging
LOGS_DIR = os.path.join(SCRIPT_DIR, "logs")
os.makedirs(LOGS_DIR, exist_ok=True)

# ============================================================================
# UPSTREAM SERVICE
# ============================================================================

DEFAULT_BASE_URL = "https://splatoon3.ink/data"
DEFAULT_USER_AGENT = "splatoon3ink-client/1.0.0"
DEFAULT_LOCALE = "ja-JP"

# Locales published under <base>/locale/<locale>.json
SUPPORTED_LOCALES: List[str] = [
    "de-DE",  # German
    "en-GB",  # English (UK)
    "en-US",  # English (US)
    "es-ES",  # Spanish (Spain)
    "es-MX",  # Spanish (Mexico)
    "fr-CA",  # French (Canada)
    "fr-FR",  # French (France)
    "it-IT",  # Italian
    "ja-JP",  # Japanese
    "ko-KR",  # Korean
    "nl-NL",  # Dutch
    "ru-RU",  # Russian
    "zh-CN",  # Chinese (Simplified)
    "zh-TW",  # Chinese (Traditional)
]

CACHE_TTL_SECONDS = 60 * 60  # 1 hour

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def parse_float(env_var: str, default: float) -> float:
    """Parse a float from environment variable, falling back to default"""
    value = os.getenv(env_var, "")
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


# ============================================================================
# SCHEDULE CONFIGURATION
# ============================================================================

@dataclass
class ScheduleConfig:
    """Schedule client configuration"""
    BASE_URL: str = DEFAULT_BASE_URL
    USER_AGENT: str = DEFAULT_USER_AGENT
    DEFAULT_LOCALE: str = DEFAULT_LOCALE
    CACHE_BACKEND: str = 'memory'  # 'memory' or 'file'
    CACHE_DIR: str = SCHEDULE_CACHE_DIR
    REQUEST_TIMEOUT: float = 30.0  # seconds
    DISPLAY_TIMEZONE: str = 'Asia/Tokyo'

    def __post_init__(self):
        # Load from environment variables for hosting
        self.BASE_URL = os.getenv('SPLATOON_BASE_URL', self.BASE_URL).rstrip('/')
        self.USER_AGENT = os.getenv('SPLATOON_USER_AGENT', self.USER_AGENT)

        locale = os.getenv('SPLATOON_DEFAULT_LOCALE', self.DEFAULT_LOCALE)
        self.DEFAULT_LOCALE = locale if locale in SUPPORTED_LOCALES else DEFAULT_LOCALE

        backend = os.getenv('SPLATOON_CACHE_BACKEND', self.CACHE_BACKEND).strip().lower()
        self.CACHE_BACKEND = backend if backend in ('memory', 'file') else 'memory'

        self.CACHE_DIR = os.getenv('SPLATOON_CACHE_DIR', self.CACHE_DIR)
        self.REQUEST_TIMEOUT = parse_float('SPLATOON_REQUEST_TIMEOUT', self.REQUEST_TIMEOUT)
        self.DISPLAY_TIMEZONE = os.getenv('SPLATOON_DISPLAY_TIMEZONE', self.DISPLAY_TIMEZONE)


config = ScheduleConfig()

# ============================================================================
# DISCORD
# ============================================================================

DISCORD_BOT_TOKEN = os.getenv('DISCORD_BOT_TOKEN', '')

MATCH_TYPE_COLORS = {
    "regular": 0xCFF622,
    "bankara_open": 0xF54910,
    "bankara_challenge": 0xF54910,
    "xmatch": 0x0FDB9B,
    "event": 0xF02D7D,
    "fest": 0xA020F0,
    "Default": 0x808080
}
