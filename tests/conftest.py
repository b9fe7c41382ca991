from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from jumble import main
from jumble.dictionary import DictionaryIndex
from jumble.managers.game import GameManager

# "yellow" is the only 6-letter word, so 6-letter games are deterministic
WORDS = """
Yellow
low
  Low  
LOW

lye
owl
well
yell
yowl
woe
yew
lowly
ole
owe
yeow
welly
lolly
wool
eel
yellows
apple
angel
alarm
able
ant
eye
level
noon
deed
a
I
zebra
don't
"""

YELLOW_SUB_WORDS = [
    'low', 'lowly', 'lye', 'ole', 'owe', 'owl', 'well',
    'welly', 'woe', 'yell', 'yeow', 'yew', 'yowl',
]


@pytest.fixture
def index():
    return DictionaryIndex.from_lines(WORDS.splitlines())


@pytest.fixture
def games(index):
    return GameManager(index)


@pytest.fixture
def client(monkeypatch, games):
    monkeypatch.setattr(main, 'games', games)
    return TestClient(main.app)


@pytest.fixture
def sio(monkeypatch, games):
    monkeypatch.setattr(main, 'games', games)
    monkeypatch.setattr(main.sio, 'emit', AsyncMock())
    monkeypatch.setattr(main.sio, 'enter_room', AsyncMock())
    return main.sio
