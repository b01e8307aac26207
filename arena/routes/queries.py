from flask import Blueprint, current_app, jsonify

bp = Blueprint('queries', __name__, url_prefix='/api/queries')


@bp.route('', methods=['GET'])
def list_reports():
    """Names of the available reports."""
    return jsonify(current_app.reports.names())


@bp.route('/<name>', methods=['GET'])
def run_report(name):
    if name not in current_app.reports.REPORTS:
        return jsonify({'error': f'Unknown query: {name}'}), 404
    return jsonify(current_app.reports.run(name))
