from flask import Blueprint, current_app, jsonify, request

from arena.models import Award, Match, Player, Referee, Team, parse_object_id

bp = Blueprint('entities', __name__, url_prefix='/api')


def get_payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def deleted():
    return jsonify({'status': 'deleted'})


def created(record_id):
    return jsonify({'status': 'ok', 'id': record_id})


def as_list(records):
    return jsonify([r.to_dict() for r in records])


# ==================== Teams ====================

@bp.route('/teams', methods=['POST'])
def create_team():
    team = Team.from_payload(get_payload())
    team_id = current_app.store.create_team(team)
    return jsonify({'id': team_id})


@bp.route('/teams', methods=['GET'])
def list_teams():
    return as_list(current_app.store.list_teams())


@bp.route('/teams/<team_id>', methods=['DELETE'])
def delete_team(team_id):
    """Delete a team together with its roster."""
    current_app.store.delete_team(parse_object_id(team_id, 'id'))
    return deleted()


# ==================== Players ====================

@bp.route('/players', methods=['POST'])
def create_player():
    player = Player.from_payload(get_payload())
    return created(current_app.store.create_player(player))


@bp.route('/players', methods=['GET'])
def list_players():
    return as_list(current_app.store.list_players())


@bp.route('/players/<player_id>', methods=['DELETE'])
def delete_player(player_id):
    """Delete a player together with their awards."""
    current_app.store.delete_player(parse_object_id(player_id, 'id'))
    return deleted()


# ==================== Referees ====================

@bp.route('/referees', methods=['POST'])
def create_referee():
    referee = Referee.from_payload(get_payload())
    return created(current_app.store.create_referee(referee))


@bp.route('/referees', methods=['GET'])
def list_referees():
    return as_list(current_app.store.list_referees())


# ==================== Matches ====================

@bp.route('/matches', methods=['POST'])
def create_match():
    """Record a match; a named winner is credited on its team record."""
    match = Match.from_payload(get_payload())
    return created(current_app.store.create_match(match))


@bp.route('/matches', methods=['GET'])
def list_matches():
    return as_list(current_app.store.list_matches())


@bp.route('/matches/<match_id>', methods=['DELETE'])
def delete_match(match_id):
    current_app.store.delete_match(parse_object_id(match_id, 'id'))
    return deleted()


# ==================== Awards ====================

@bp.route('/awards', methods=['POST'])
def create_award():
    award = Award.from_payload(get_payload())
    return created(current_app.store.create_award(award))


@bp.route('/awards', methods=['GET'])
def list_awards():
    return as_list(current_app.store.list_awards())


@bp.route('/awards/<award_id>', methods=['DELETE'])
def delete_award(award_id):
    current_app.store.delete_award(parse_object_id(award_id, 'id'))
    return deleted()
