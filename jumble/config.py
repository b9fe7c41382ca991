from __future__ import annotations
import os
from pathlib import Path
from typing import List

from dotenv import find_dotenv, load_dotenv

# Runtime settings, read once from the environment (and a local .env) at import time.
load_dotenv(find_dotenv(usecwd=True))

BASE_DIR = Path(__file__).resolve().parent

WORDS_FILE = Path(os.environ.get('JUMBLE_WORDS_FILE', str(BASE_DIR / 'data' / 'words.txt')))

# Defaults for /api/game/new and the 'game:new' socket event
DEFAULT_GAME_LENGTH = int(os.environ.get('JUMBLE_GAME_LENGTH', '6'))
DEFAULT_MIN_LENGTH = int(os.environ.get('JUMBLE_GAME_MIN_LENGTH', '3'))

LOG_LEVEL = os.environ.get('JUMBLE_LOG_LEVEL', 'INFO').upper()

CORS_ORIGINS: List[str] = [
    o.strip() for o in os.environ.get('JUMBLE_CORS_ORIGINS', '*').split(',') if o.strip()
]
