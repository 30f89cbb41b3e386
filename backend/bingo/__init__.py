from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS', '*'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from bingo.models import enabled_phrase_texts, add_phrases
    from bingo.broadcast import Broadcaster
    from bingo.services.game.board import generate_board
    from bingo.services.game.lines import LineCatalog
    from bingo.services.game.phrases import PhrasePool, SAMPLE_PHRASES, load_phrases_file
    from bingo.services.game.registry import RoomRegistry

    board_size = int(flask_app.config.get('BOARD_SIZE', 5))

    def load_phrases():
        with flask_app.app_context():
            return enabled_phrase_texts()

    phrases = PhrasePool(load_phrases)
    registry = RoomRegistry(
        lambda: generate_board(phrases.get(), board_size),
        code_length=int(flask_app.config.get('ROOM_CODE_LENGTH', 4)),
        catalog=LineCatalog(board_size),
        max_players=int(flask_app.config.get('MAX_PLAYERS', 2)),
        name_max_length=int(flask_app.config.get('NAME_MAX_LENGTH', 24)),
        label_max_length=int(flask_app.config.get('LABEL_MAX_LENGTH', 50)),
    )
    broadcaster = Broadcaster(socketio, registry)
    flask_app.extensions['bingo_phrases'] = phrases
    flask_app.extensions['bingo_registry'] = registry
    flask_app.extensions['bingo_broadcaster'] = broadcaster

    # Import and register blueprints here
    from bingo.main import main
    flask_app.register_blueprint(main)

    from bingo.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api')

    # Register Socket.IO event handlers against this app's registry
    from bingo.socketio_events import RoomSessionHandler, register_socketio_handlers
    handler = RoomSessionHandler(
        registry,
        broadcaster,
        default_name=flask_app.config.get('DEFAULT_PLAYER_NAME', 'Player'),
    )
    register_socketio_handlers(handler, testing=flask_app.config.get('TESTING', False))
    flask_app.extensions['bingo_sessions'] = handler

    def seed(path):
        texts = load_phrases_file(path) if path else SAMPLE_PHRASES
        added = add_phrases(texts)
        phrases.refresh()
        return added

    @click.command('seed-phrases')
    @click.option('--file', 'path', default=None, help='JSON list of phrases (defaults to PHRASES_FILE).')
    def seed_phrases_command(path):
        """Adds phrases to the store, skipping ones already present."""
        path = path or flask_app.config.get('PHRASES_FILE')
        with flask_app.app_context():
            db.create_all()
            added = seed(path)
        click.echo(f'Seed completed: {added} phrase(s) added.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the phrase store."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            added = seed(flask_app.config.get('PHRASES_FILE'))
        click.echo(f'Database has been reset and seeded with {added} phrase(s)!')

    flask_app.cli.add_command(seed_phrases_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app
