import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///bingo.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Comma separated; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Board edge length (tiles per row)
    BOARD_SIZE = int(os.environ.get('BOARD_SIZE', '5'))
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '2'))
    NAME_MAX_LENGTH = int(os.environ.get('NAME_MAX_LENGTH', '24'))
    LABEL_MAX_LENGTH = int(os.environ.get('LABEL_MAX_LENGTH', '50'))
    DEFAULT_PLAYER_NAME = os.environ.get('DEFAULT_PLAYER_NAME', 'Player')
    # Optional JSON list of phrases used by `flask seed-phrases`
    PHRASES_FILE = os.environ.get('PHRASES_FILE')
