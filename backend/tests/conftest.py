import os
import sys
import pytest

# Ensure the backend root (containing the `dicecricket` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from dicecricket import create_app, db, socketio
from dicecricket.services.match import DEFAULT_RULES, new_match_state


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SOCKETIO_NAMESPACE = '/ws'
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'
    MAX_ROUNDS = 15
    SCORE_CAP = 200
    BULL_VALUE = 25
    ROLLS_PER_TURN = 3
    DICE_SEED = '7'


class ScriptedDice:
    """Stand-in random source returning face indexes from a fixed script."""

    def __init__(self, faces, repeat=True):
        self.faces = list(faces)
        self.repeat = repeat
        self.calls = 0

    def randrange(self, n):
        if self.repeat:
            face = self.faces[self.calls % len(self.faces)]
        else:
            face = self.faces[self.calls]
        self.calls += 1
        assert 0 <= face < n
        return face


# Face indexes into NUMBER_FACES / BULL_FACES
MISS = 0
SINGLE = 2
DOUBLE = 8
TRIPLE = 9
SINGLE_BULL = 2
DOUBLE_BULL = 5


@pytest.fixture()
def rules():
    return DEFAULT_RULES


@pytest.fixture()
def match(rules):
    return new_match_state([
        {'id': 'sid-a', 'name': 'Alice', 'playerNumber': 1},
        {'id': 'sid-b', 'name': 'Bob', 'playerNumber': 2},
    ], rules)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import dicecricket.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, namespace='/ws')
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass
