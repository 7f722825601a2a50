from __future__ import annotations
import functools
import logging
import uuid
from typing import Dict, List

import socketio
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from .config import Config
from .dictionary import DictionaryIndex
from .errors import GameError, GameNotFound
from .game_logic import GameEngine
from .managers.game import GameManager, player_room
from .schemas import GameOptions, GameSummary

logging.basicConfig(level=Config.LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
log = logging.getLogger("wordgame")

# Socket.IO server (ASGI)
sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=Config.CORS_ORIGINS)
app = FastAPI(title="Wordgame Server", version="0.1.0")

# Mount Socket.IO ASGI application
asgi_app = socketio.ASGIApp(sio, other_asgi_app=app)

# CORS for REST
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

dictionary = DictionaryIndex(Config.DICTIONARY_DIR)
dictionary.load_all(Config.LANGUAGES)
engine = GameEngine(dictionary)
games = GameManager(sio, engine)


# REST Endpoints
@app.get('/health')
async def health() -> Dict[str, object]:
    return {'ok': True, 'languages': dictionary.languages()}


@app.get('/dict/validate')
async def validate_word(word: str, language: str = 'en'):
    return {'word': word.upper(), 'language': language, 'valid': dictionary.is_valid_word(word, language)}


@app.post('/dict/{language}/reload')
async def reload_dictionary(language: str):
    if language not in Config.LANGUAGES:
        raise HTTPException(status_code=404, detail=f'Unknown language: {language}')
    return {'language': language, 'words': dictionary.reload(language)}


@app.get('/dict/{language}')
async def dictionary_info(language: str):
    return {'language': language, 'loaded': dictionary.is_loaded(language), 'words': dictionary.count(language)}


@app.get('/players/{player_id}/games', response_model=List[GameSummary], response_model_by_alias=True)
async def player_games(player_id: str):
    return games.games_for_player(player_id)


@app.get('/games/{game_id}')
async def game_state(game_id: str, player_id: str = ''):
    try:
        view = await games.state_for(game_id, player_id)
    except GameError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return view.model_dump(by_alias=True, mode='json')


# Socket.IO Events
def game_event(handler):
    """Reports rule violations to the calling socket instead of raising."""
    @functools.wraps(handler)
    async def wrapper(sid, *args):
        try:
            return await handler(sid, *args)
        except GameError as exc:
            payload = exc.to_payload()
        except ValidationError as exc:
            payload = {'code': 'bad_request', 'message': str(exc)}
        await sio.emit('game:error', payload, to=sid)
        return {'ok': False, **payload}
    return wrapper


async def _session(sid) -> dict:
    return await sio.get_session(sid) or {}


async def _enter_game(sid, game_id: str):
    # Only called once the player holds a seat in the game
    sess = await _session(sid)
    await sio.save_session(sid, {**sess, 'game_id': game_id})
    await sio.enter_room(sid, game_id)
    await sio.enter_room(sid, player_room(game_id, sess['player_id']))
    # The broadcast for this change went out before the socket joined its room
    view = await games.state_for(game_id, sess['player_id'])
    await sio.emit('game:state', view.model_dump(by_alias=True, mode='json'), to=sid)


@sio.event
async def connect(sid, environ, auth):
    # The auth token is the player id; authentication happens upstream
    player_id = None
    name = None
    if isinstance(auth, dict):
        token = auth.get('token')
        if isinstance(token, str) and token.strip():
            player_id = token.strip()
        if isinstance(auth.get('name'), str):
            name = auth['name'].strip() or None
    player_id = player_id or f'guest-{sid[:8]}'
    await sio.save_session(sid, {'player_id': player_id, 'name': name or player_id})


@sio.event
async def disconnect(sid):
    sess = await _session(sid)
    game_id = sess.get('game_id')
    if not game_id:
        return
    try:
        await games.set_connected(game_id, sess['player_id'], False)
    except GameNotFound:
        log.debug("Disconnect from unknown game %s", game_id)


@sio.on('game:create')
@game_event
async def create_game(sid, payload=None):
    payload = payload or {}
    sess = await _session(sid)
    game_id = payload.get('gameId') or uuid.uuid4().hex[:8]
    options = GameOptions.model_validate(payload.get('options') or {})
    await games.create_game(game_id, payload.get('language', 'en'), sess['player_id'], sess['name'], options)
    await _enter_game(sid, game_id)
    return {'ok': True, 'gameId': game_id}


@sio.on('game:join')
@game_event
async def join_game(sid, game_id: str):
    sess = await _session(sid)
    game = games.get(game_id)
    if game.player(sess['player_id']) is not None:
        # Reconnect to a seat already held
        await games.set_connected(game_id, sess['player_id'], True)
    else:
        await games.join_game(game_id, sess['player_id'], sess['name'])
    await _enter_game(sid, game_id)
    return {'ok': True, 'gameId': game_id}


@sio.on('game:start')
@game_event
async def start_game(sid, payload=None):
    sess = await _session(sid)
    await games.start_game(sess.get('game_id', ''))
    return {'ok': True}


@sio.on('game:move')
@game_event
async def make_move(sid, payload):
    sess = await _session(sid)
    result = await games.make_move(sess.get('game_id', ''), sess['player_id'], (payload or {}).get('tiles', []))
    return {'ok': True, **result.model_dump(by_alias=True, mode='json')}


@sio.on('game:pass')
@game_event
async def pass_turn(sid, payload=None):
    sess = await _session(sid)
    await games.pass_turn(sess.get('game_id', ''), sess['player_id'])
    return {'ok': True}


@sio.on('game:exchange')
@game_event
async def exchange_tiles(sid, payload):
    sess = await _session(sid)
    await games.exchange_tiles(sess.get('game_id', ''), sess['player_id'], (payload or {}).get('letters', []))
    return {'ok': True}


@sio.on('game:state')
@game_event
async def get_state(sid, payload=None):
    sess = await _session(sid)
    view = await games.state_for(sess.get('game_id', ''), sess['player_id'])
    await sio.emit('game:state', view.model_dump(by_alias=True, mode='json'), to=sid)
    return {'ok': True}


# Export ASGI app for uvicorn
application = asgi_app

# For local running: uvicorn wordgame.main:application --reload --host 0.0.0.0 --port 8000
