from flask import Blueprint, current_app, jsonify, request

from moleboard.services.scores import InvalidPayload, ScoreError


scores = Blueprint('scores', __name__)


@scores.errorhandler(ScoreError)
def handle_score_error(exc: ScoreError):
    # Storage failures are already logged with a traceback by the service
    if exc.detail and exc.status_code < 500:
        current_app.logger.info(f"[rejected] {request.path} {exc.message}: {exc.detail}")
    return jsonify(exc.to_dict()), exc.status_code


@scores.route('/submit-score', methods=['POST'])
def submit_score():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidPayload('body must be a JSON object')
    service = current_app.extensions['scores']
    service.submit(data.get('fid'), data.get('username'), data.get('score'))
    return jsonify({'ok': True})


@scores.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    # ?date= with an empty value means today
    day = request.args.get('date') or None
    service = current_app.extensions['scores']
    return jsonify(service.leaderboard(day))
