"""
Fixed read-only reports over the entity collections.

Filtering, joining, grouping, sorting and limiting run inside the store as
aggregation pipelines; the methods here only shape the resulting rows. A
reference that no longer resolves leaves its enrichment field null, the row
itself is always kept.
"""
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.database import Database

from .models import Award, Match, Player, Referee, Team

FREE_AGENT = 'Free Agent'
DUAL_AWARD_CATEGORIES = ['MVP', 'Top Scorer']

Row = Dict[str, Any]


def _lookup(source: str, local_field: str, alias: str) -> Dict[str, Any]:
    return {'$lookup': {
        'from': source,
        'localField': local_field,
        'foreignField': '_id',
        'as': alias
    }}


def _first(joined: Optional[List[Row]], key: str) -> Any:
    """Field of the first joined document, or None when the join found nothing."""
    if not joined:
        return None
    return joined[0].get(key)


def _present(values: Optional[List[Any]]) -> List[Any]:
    # Stored documents may still hold mixed types
    return sorted((v for v in (values or []) if v is not None), key=str)


class ReportQueries:
    """Runs the ten named reports against a store database."""

    REPORTS = {
        'highestKills': 'highest_kills',
        'semifinals': 'semifinals',
        'activeReferees': 'active_referees',
        'multiGamePlayers': 'multi_game_players',
        'matchMVPs': 'match_mvps',
        'avgTeamScore': 'avg_team_score',
        'dualWinners': 'dual_winners',
        'drawMatches': 'draw_matches',
        'zeroWinTeams': 'zero_win_teams',
        'top3Teams': 'top_teams',
    }

    def __init__(self, database: Database):
        self.db = database

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.REPORTS)

    def run(self, name: str) -> List[Row]:
        """Run a report by its route name. Raises KeyError for unknown names."""
        return getattr(self, self.REPORTS[name])()

    # ==================== Reports ====================

    def highest_kills(self, limit: int = 5) -> List[Row]:
        """Players with the most kills, labelled with their team name."""
        pipeline = [
            {'$sort': {'kills': DESCENDING}},
            {'$limit': limit},
            _lookup(Team.collection, 'teamId', 'team'),
        ]
        rows = []
        for doc in self.db[Player.collection].aggregate(pipeline):
            player = Player.from_document(doc)
            row = player.to_dict()
            if player.is_free_agent or not doc.get('team'):
                row['teamName'] = FREE_AGENT
            else:
                row['teamName'] = _first(doc['team'], 'teamName')
            rows.append(row)
        return rows

    def semifinals(self) -> List[Row]:
        pipeline = [
            {'$match': {'round': 'Semifinal'}},
            _lookup(Team.collection, 'teamAId', 'teamA'),
            _lookup(Team.collection, 'teamBId', 'teamB'),
        ]
        return [
            {
                '_id': doc['_id'],
                'Round': doc.get('round'),
                'TeamA': _first(doc['teamA'], 'teamName'),
                'TeamB': _first(doc['teamB'], 'teamName'),
            }
            for doc in self.db[Match.collection].aggregate(pipeline)
        ]

    def active_referees(self, min_matches: int = 10) -> List[Row]:
        cursor = self.db[Referee.collection].find({'matchesManaged': {'$gt': min_matches}})
        return [Referee.from_document(doc).to_dict() for doc in cursor]

    def multi_game_players(self) -> List[Row]:
        """Gamertags registered for more than one distinct game."""
        pipeline = [
            {'$group': {
                '_id': '$gamertag',
                'games': {'$addToSet': '$gameName'},
                'count': {'$sum': 1}
            }},
            # A single record can never span two games.
            {'$match': {'count': {'$gt': 1}}},
        ]
        rows = []
        for doc in self.db[Player.collection].aggregate(pipeline):
            games = _present(doc.get('games'))
            if len(games) > 1:
                rows.append({'_id': doc['_id'], 'games': games, 'count': doc['count']})
        return rows

    def match_mvps(self) -> List[Row]:
        pipeline = [
            {'$match': {'category': 'MVP'}},
            _lookup(Player.collection, 'playerId', 'player'),
        ]
        return [
            {
                '_id': doc['_id'],
                'Title': doc.get('title'),
                'Player': _first(doc['player'], 'gamertag'),
                'Role': _first(doc['player'], 'role'),
                'Game': _first(doc['player'], 'gameName'),
                'MatchID': doc.get('matchId'),
            }
            for doc in self.db[Award.collection].aggregate(pipeline)
        ]

    def avg_team_score(self) -> List[Row]:
        """Mean scoreA per teamA. Appearances as teamB are not counted."""
        pipeline = [
            {'$match': {'teamAId': {'$ne': None}}},
            {'$group': {'_id': '$teamAId', 'avgScore': {'$avg': '$scoreA'}}},
            _lookup(Team.collection, '_id', 'team'),
        ]
        rows = []
        for doc in self.db[Match.collection].aggregate(pipeline):
            average = doc.get('avgScore')
            rows.append({
                '_id': doc['_id'],
                'Team': _first(doc['team'], 'teamName'),
                # round() is half-to-even, same as $round
                'AvgScore': round(average, 1) if average is not None else None,
            })
        return rows

    def dual_winners(self) -> List[Row]:
        pipeline = [
            {'$match': {'playerId': {'$ne': None}}},
            {'$group': {'_id': '$playerId', 'categories': {'$addToSet': '$category'}}},
            {'$match': {'categories': {'$all': DUAL_AWARD_CATEGORIES}}},
            _lookup(Player.collection, '_id', 'player'),
        ]
        return [
            {
                '_id': doc['_id'],
                'Gamertag': _first(doc['player'], 'gamertag'),
                'Awards': _present(doc.get('categories')),
            }
            for doc in self.db[Award.collection].aggregate(pipeline)
        ]

    def draw_matches(self) -> List[Row]:
        cursor = self.db[Match.collection].find({'winnerId': None})
        return [Match.from_document(doc).to_dict() for doc in cursor]

    def zero_win_teams(self) -> List[Row]:
        cursor = self.db[Team.collection].find({'wins': 0})
        return [Team.from_document(doc).to_dict() for doc in cursor]

    def top_teams(self, limit: int = 3) -> List[Row]:
        cursor = self.db[Team.collection].find().sort('totalScore', DESCENDING).limit(limit)
        return [Team.from_document(doc).to_dict() for doc in cursor]
