from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .dictionary import DictionaryIndex, get_index
from .managers.game import (
    GameCreationError,
    GameLookupError,
    GameManager,
    GameValidationError,
)
from .schemas import (
    ExistsOutput,
    GameGuessInput,
    GameGuessOutput,
    GameNewInput,
    PrefixOutput,
    RandomWordOutput,
    ScrambleInput,
    ScrambleOutput,
    SubWordsOutput,
    WordsOutput,
)
from .scrambler import scramble

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
)
logger = logging.getLogger(__name__)

_cors = '*' if config.CORS_ORIGINS == ['*'] else config.CORS_ORIGINS

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=_cors)
app = FastAPI(title="Jumble Server", version="0.1.0")

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

# Loads the word list on import; every game shares this registry
games = GameManager(get_index())


def _index() -> DictionaryIndex:
    return games.index


def _field_errors(**errors: str) -> JSONResponse:
    return JSONResponse(status_code=422, content={'errors': errors})


def _game_defaults(length: Optional[int], min_length: Optional[int]):
    if length is None:
        length = config.DEFAULT_GAME_LENGTH
    if min_length is None:
        min_length = config.DEFAULT_MIN_LENGTH
    return length, min_length


# Error mapping
@app.exception_handler(GameLookupError)
async def game_lookup_error(request: Request, exc: GameLookupError):
    return JSONResponse(status_code=404, content=GameGuessOutput(result=exc.result).model_dump())

@app.exception_handler(GameValidationError)
async def game_validation_error(request: Request, exc: GameValidationError):
    return JSONResponse(status_code=400, content={'result': str(exc)})

@app.exception_handler(GameCreationError)
async def game_creation_error(request: Request, exc: GameCreationError):
    return JSONResponse(status_code=400, content={'result': str(exc)})


# REST Endpoints
# Routes calling into the core are plain `def` so FastAPI runs them in its threadpool;
# concurrent guesses on one game then serialize on that game's lock.
@app.get('/')
async def health() -> Dict[str, Any]:
    return { 'message': 'Jumble server is up', 'words': len(_index()) }

@app.get('/api/game/new', response_model=GameGuessOutput)
def new_game(length: Optional[int] = None, minLength: Optional[int] = None):
    length, minLength = _game_defaults(length, minLength)
    return games.create_game(length, minLength)

@app.post('/api/game/guess', response_model=GameGuessOutput)
def guess(payload: GameGuessInput):
    return games.guess(payload.id, payload.word)

@app.get('/api/game/{game_id}', response_model=GameGuessOutput)
def game_state(game_id: str):
    return games.state(game_id)

@app.get('/api/words/exists', response_model=ExistsOutput)
def word_exists(word: str = ''):
    if not word.strip():
        return _field_errors(word='must not be blank')
    return ExistsOutput(word=word, exists=_index().exists(word.strip()))

@app.get('/api/words/prefix', response_model=PrefixOutput)
def words_with_prefix(prefix: str = ''):
    if not prefix.strip():
        return _field_errors(prefix='must not be blank')
    words = _index().words_with_prefix(prefix.strip())
    return PrefixOutput(prefix=prefix, words=sorted(words))

@app.get('/api/words/search', response_model=WordsOutput)
def search_words(
    startChar: Optional[str] = None,
    endChar: Optional[str] = None,
    length: Optional[int] = None,
):
    start = (startChar or '').strip() or None
    end = (endChar or '').strip() or None
    if start is None and end is None and length is None:
        return _field_errors(
            startChar='Invalid startChar',
            endChar='Invalid endChar',
            length='Invalid length',
        )
    for field, value in (('startChar', start), ('endChar', end)):
        if value is None:
            continue
        if len(value) > 1:
            return _field_errors(**{field: 'size must be between 0 and 1'})
        if not value.isalpha():
            return _field_errors(**{field: 'must be a letter'})
    return WordsOutput(words=sorted(_index().search(start, end, length)))

@app.get('/api/words/subwords', response_model=SubWordsOutput)
def sub_words(word: str = '', minLength: Optional[int] = None):
    if not word.strip():
        return _field_errors(word='must not be blank')
    words = _index().sub_words(word.strip(), minLength)
    return SubWordsOutput(word=word, minLength=minLength, words=words)

@app.get('/api/words/palindromes', response_model=WordsOutput)
def palindromes():
    return WordsOutput(words=sorted(_index().palindromes()))

@app.get('/api/words/random', response_model=RandomWordOutput)
def random_word(length: Optional[int] = None):
    return RandomWordOutput(word=_index().random_word(length))

@app.post('/api/words/scramble', response_model=ScrambleOutput)
def scramble_word(payload: ScrambleInput):
    return ScrambleOutput(word=payload.word, scrambledWord=scramble(payload.word))


# Socket.IO Events
@sio.event
async def connect(sid, environ, auth=None):
    logger.debug("Client %s connected", sid)
    await sio.emit('pong', to=sid)

@sio.event
async def disconnect(sid):
    logger.debug("Client %s disconnected", sid)

@sio.on('ping')
async def on_ping(sid):
    await sio.emit('pong', to=sid)

async def _emit_error(sid, result: str):
    await sio.emit('game:error', { 'result': result }, to=sid)

@sio.on('game:new')
async def game_new(sid, payload=None):
    try:
        data = GameNewInput.model_validate(payload or {})
        length, min_length = _game_defaults(data.length, data.minLength)
        state = games.create_game(length, min_length)
    except ValueError as exc:
        # pydantic ValidationError is a ValueError too
        await _emit_error(sid, str(exc))
        return
    await sio.enter_room(sid, state.id)
    await sio.emit('game:state', state.model_dump(), to=sid)

@sio.on('game:join')
async def game_join(sid, game_id=None):
    try:
        state = games.state(game_id if isinstance(game_id, str) else None)
    except GameLookupError as exc:
        await _emit_error(sid, exc.result)
        return
    await sio.enter_room(sid, state.id)
    await sio.emit('game:state', state.model_dump(), to=sid)

@sio.on('game:guess')
async def game_guess(sid, payload=None):
    try:
        data = GameGuessInput.model_validate(payload or {})
    except ValueError as exc:
        await _emit_error(sid, str(exc))
        return
    try:
        output = games.guess(data.id, data.word)
    except GameLookupError as exc:
        await _emit_error(sid, exc.result)
        return
    # a guesser who created the game over REST has not joined the room yet
    await sio.enter_room(sid, output.id)
    # everyone playing this game id sees the new progress
    await sio.emit('game:guessed', output.model_dump(), room=output.id)

# Export ASGI app for uvicorn
application = asgi_app

# For local running (pip install .[server]): uvicorn jumble.main:application --reload --host 0.0.0.0 --port 8000
