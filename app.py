"""
The Impostor - A Social Deduction Word Game Backend

Flask-SocketIO backend that serves a browser frontend. Players join a
room, the host picks a secret word, impostors try to blend in, and the
room votes suspects out until one side wins.

App.py is purely server setup and handler registration.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from game import GameManager, RoleAssigner, VoteManager
from handlers import SocketIONotifier, register_api_handlers, register_socket_handlers
from lobby import DisconnectScheduler, PlayerManager, RoomManager, RoomStore
from utils.timers import TimerRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(config: Optional[Dict[str, Any]] = None,
               timer_factory: Callable[..., Any] = threading.Timer):
    """
    Application factory that creates and configures the Flask app.

    Args:
        config: Overrides applied on top of config.settings
        timer_factory: Timer constructor for grace windows and game-over
            delays (tests pass a manual one)

    Returns:
        tuple: (app, socketio)
    """
    app = Flask(__name__)
    app.config.update(settings.as_dict())
    if config:
        app.config.update(config)

    origins = app.config['CORS_ORIGINS'].split(',')

    # CORS configuration for the browser frontend
    CORS(app, origins=origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    socketio = SocketIO(
        app,
        cors_allowed_origins=origins,
        async_mode=app.config['ASYNC_MODE'],
        ping_timeout=60,
        ping_interval=25
    )

    logger.info("Initializing room and game managers...")

    timers = TimerRegistry(timer_factory=timer_factory)
    room_manager = RoomManager(
        store=RoomStore(),
        player_manager=PlayerManager(max_players=app.config['MAX_PLAYERS']),
        disconnect_scheduler=DisconnectScheduler(timers, grace_seconds=app.config['GRACE_PERIOD_SECONDS']),
        notifier=SocketIONotifier(socketio)
    )
    game_manager = GameManager(
        room_manager=room_manager,
        timers=timers,
        role_assigner=RoleAssigner(),
        vote_manager=VoteManager(),
        min_players=app.config['MIN_PLAYERS'],
        game_over_delay=app.config['GAME_OVER_DELAY_SECONDS']
    )

    app.extensions['room_manager'] = room_manager
    app.extensions['game_manager'] = game_manager
    app.extensions['timers'] = timers

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, room_manager, game_manager)
    register_api_handlers(app, room_manager)

    logger.info("Application initialization complete")
    return app, socketio


def main():
    """Main entry point for development server."""
    configure_logging()
    app, socketio = create_app()

    port = app.config['PORT']
    debug = app.config['DEBUG']

    logger.info(f"Starting The Impostor game server on port {port}")
    logger.info(f"Debug mode: {debug}")
    logger.info(f"CORS origins: {app.config['CORS_ORIGINS']}")

    socketio.run(app, debug=debug, port=port, host='0.0.0.0', allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
