from flask import Blueprint, jsonify
from arena import get_lobby

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe arena!'})

@main.route('/api/stats')
def stats():
    return jsonify(get_lobby().stats())
