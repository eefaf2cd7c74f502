from flask import Blueprint, jsonify, current_app

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the block statistics server!'})

@main.route('/health')
def health():
    tracker = current_app.extensions['blockstats']
    status = 200 if tracker.enabled else 503
    return jsonify({'storage': 'ok' if tracker.enabled else 'unavailable'}), status
