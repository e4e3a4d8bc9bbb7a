import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///dicecricket.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Socket.IO namespace the game protocol is served on
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Comma separated list of browser origins allowed to connect
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Match rules
    MAX_ROUNDS = int(os.environ.get('MAX_ROUNDS', '15'))
    SCORE_CAP = int(os.environ.get('SCORE_CAP', '200'))
    BULL_VALUE = int(os.environ.get('BULL_VALUE', '25'))
    ROLLS_PER_TURN = int(os.environ.get('ROLLS_PER_TURN', '3'))
    # Optional: fixed seed for the dice. Unset uses system entropy.
    DICE_SEED = os.environ.get('DICE_SEED')
