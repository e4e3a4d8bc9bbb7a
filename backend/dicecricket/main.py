from flask import Blueprint, jsonify, current_app

main = Blueprint('main', __name__)


@main.route('/')
def index():
    rules = current_app.extensions['dicecricket']['rules']
    return jsonify({
        'message': 'Welcome to the dice cricket server!',
        'namespace': current_app.config.get('SOCKETIO_NAMESPACE', '/ws'),
        'targets': list(rules.targets),
        'max_rounds': rules.max_rounds,
    })
