from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config
from arena.services.matchmaking import Lobby

socketio = SocketIO(async_mode=None)

def get_lobby() -> Lobby:
    return current_app.extensions['arena_lobby']

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One lobby per app; handlers reach it through get_lobby()
    flask_app.extensions['arena_lobby'] = Lobby(
        matchmaking_timeout=flask_app.config.get('MATCHMAKING_TIMEOUT_SEC', 0),
    )

    from arena.routes import main
    flask_app.register_blueprint(main)

    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to bind (defaults to PORT).')
    @click.option('--debug/--no-debug', default=False)
    def serve_command(host, port, debug):
        """Runs the matchmaking server with websocket support."""
        host = host or flask_app.config.get('HOST', '0.0.0.0')
        port = port or flask_app.config.get('PORT', 5000)
        flask_app.logger.info(f"[serve] host={host} port={port}")
        socketio.run(flask_app, host=host, port=port, debug=debug)

    flask_app.cli.add_command(serve_command)

    return flask_app
