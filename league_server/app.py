import json
import os
from flask import Flask, request, jsonify, Response

from .config import config
from .player_store import PlayerStore, InMemoryPlayerStore, StoreError
from .redis_store import RedisPlayerStore
from .sql_store import db, SqlPlayerStore

JSON_CONTENT_TYPE = 'application/json'

# Every method is routed to the handlers; unsupported ones get a bare 200
ALL_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_app(config_name: str = None, store: PlayerStore = None) -> Flask:
    """Application factory for the league server."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    if store is None:
        store = build_store(app)
    elif isinstance(store, SqlPlayerStore):
        init_database(app)

    # Store service on app for access in routes
    app.store = store
    app.logger.info(f"Using {store.backend} player store")

    # Routes are registered once here and never changed afterwards
    register_routes(app)
    register_error_handlers(app)

    return app


def build_store(app: Flask) -> PlayerStore:
    """Create the player store selected by PLAYER_STORE."""
    backend = app.config.get('PLAYER_STORE', 'memory')

    if backend == 'memory':
        return InMemoryPlayerStore()

    if backend == 'sql':
        init_database(app)
        return SqlPlayerStore()

    if backend == 'redis':
        return RedisPlayerStore.from_url(
            app.config['REDIS_URL'],
            key_prefix=app.config.get('REDIS_KEY_PREFIX', 'league')
        )

    raise ValueError(f"Unknown player store: {backend}")


def init_database(app: Flask):
    """Bind the SQL store to the app and create its tables."""
    db.init_app(app)
    with app.app_context():
        db.create_all()


def register_routes(app: Flask):
    """Register the league and player routes."""

    @app.route('/league', methods=ALL_METHODS)
    def league():
        """Full league as JSON, in the order the store returns it."""
        players = app.store.get_league()
        return Response(
            json.dumps([p.to_dict() for p in players]),
            status=200,
            mimetype=JSON_CONTENT_TYPE
        )

    def players(name: str = ''):
        """Record a win (POST) or show a score (GET) for one player."""
        if request.method == 'POST':
            return process_win(name)
        if request.method == 'GET':
            return show_score(name)
        return Response(status=200)

    app.add_url_rule('/players/', 'players_root', players,
                     methods=ALL_METHODS, defaults={'name': ''})
    app.add_url_rule('/players/<path:name>', 'players', players,
                     methods=ALL_METHODS)

    def show_score(name: str) -> Response:
        score = app.store.get_player_score(name)
        # A 404 still carries the score ("0") as its body
        status = 404 if score == 0 else 200
        return Response(str(score), status=status, mimetype='text/plain')

    def process_win(name: str) -> Response:
        app.store.record_win(name)
        return Response(status=202)

    # ==================== Health Check ====================

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        store_ok = app.store.ping()
        status = 'healthy' if store_ok else 'unhealthy'
        code = 200 if store_ok else 503

        return jsonify({
            'status': status,
            'store': app.store.backend
        }), code


def register_error_handlers(app: Flask):

    @app.errorhandler(StoreError)
    def handle_store_error(e: StoreError):
        app.logger.error(f"{e.backend} store error during {e.operation}: {e.reason}")
        return jsonify({'error': 'store unavailable'}), 500
