from flask import Blueprint, jsonify, request, current_app
from scoreboard.errors import ValidationError


leaderboard = Blueprint('leaderboard', __name__)


def _store():
    return current_app.extensions['leaderboard_store']


@leaderboard.route('', methods=['GET'])
def get_leaderboard():
    current_app.logger.info('[request] GET /api/leaderboard')
    return jsonify(_store().read())


@leaderboard.route('', methods=['POST'])
def submit_score():
    current_app.logger.info('[request] POST /api/leaderboard')
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError(f"request body must be a JSON object, got {data!r}")
    name = data.get('name')
    score = data.get('score')
    current_app.logger.info(f"[request] received name={name!r} score={score!r}")
    return jsonify(_store().submit(name, score)), 200
