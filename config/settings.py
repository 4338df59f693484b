import os
from dotenv import load_dotenv

from utils.constants import GAME_CONFIG

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Socket.IO async mode; wsgi.py switches to eventlet for deployment
ASYNC_MODE = os.getenv('ASYNC_MODE', 'threading')

# Game timing (seconds)
GRACE_PERIOD_SECONDS = float(os.getenv('GRACE_PERIOD_SECONDS', GAME_CONFIG['GRACE_PERIOD_SECONDS']))
GAME_OVER_DELAY_SECONDS = float(os.getenv('GAME_OVER_DELAY_SECONDS', GAME_CONFIG['GAME_OVER_DELAY_SECONDS']))

# Room limits
MAX_PLAYERS = int(os.getenv('MAX_PLAYERS', GAME_CONFIG['MAX_PLAYERS']))
MIN_PLAYERS = int(os.getenv('MIN_PLAYERS', GAME_CONFIG['MIN_PLAYERS']))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Server Configuration
PORT = int(os.getenv('PORT', 5000))
DEBUG = os.environ.get('RENDER', '') != 'true' and os.getenv('FLASK_ENV', 'production') == 'development'

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"


def as_dict():
    """Snapshot of the settings above, used as the app's base config."""
    return {
        'SECRET_KEY': SECRET_KEY,
        'CORS_ORIGINS': CORS_ORIGINS,
        'ASYNC_MODE': ASYNC_MODE,
        'GRACE_PERIOD_SECONDS': GRACE_PERIOD_SECONDS,
        'GAME_OVER_DELAY_SECONDS': GAME_OVER_DELAY_SECONDS,
        'MAX_PLAYERS': MAX_PLAYERS,
        'MIN_PLAYERS': MIN_PLAYERS,
        'LOG_LEVEL': LOG_LEVEL,
        'PORT': PORT,
        'DEBUG': DEBUG,
    }
