import logging
from typing import List, Type

from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database

from .models import Award, Match, Player, Record, Referee, Team

logger = logging.getLogger(__name__)

COLLECTIONS = (Team.collection, Player.collection, Referee.collection,
               Match.collection, Award.collection)


def connect(uri: str, timeout_ms: int = 5000) -> MongoClient:
    """Open a client; the connection itself is established lazily."""
    return MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)


class EntityStore:
    """
    Data access for the five entity collections:
    - Insert typed records and list them back
    - Delete by id with the manual parent -> child cascades
    - Apply the match-result side effect to the winning team

    Multi-step writes run one after another with no transaction, so a failure
    in the second step leaves the first one applied.
    """

    def __init__(self, database: Database):
        self.db = database

    def ping(self) -> bool:
        self.db.command('ping')
        return True

    # ==================== Generic helpers ====================

    def _insert(self, record: Record) -> ObjectId:
        result = self.db[record.collection].insert_one(record.to_document())
        record.id = result.inserted_id
        return result.inserted_id

    def _list(self, model: Type[Record]) -> List[Record]:
        return [model.from_document(doc) for doc in self.db[model.collection].find()]

    def _delete(self, model: Type[Record], record_id: ObjectId) -> int:
        return self.db[model.collection].delete_one({'_id': record_id}).deleted_count

    def _cascade(self, model: Type[Record], key: str, parent_id: ObjectId) -> int:
        deleted = self.db[model.collection].delete_many({key: parent_id}).deleted_count
        logger.debug(f"Cascade removed {deleted} {model.collection} with {key}={parent_id}")
        return deleted

    # ==================== Teams ====================

    def create_team(self, team: Team) -> ObjectId:
        return self._insert(team)

    def list_teams(self) -> List[Team]:
        return self._list(Team)

    def delete_team(self, team_id: ObjectId) -> None:
        """Delete a team and every player that references it."""
        self._delete(Team, team_id)
        self._cascade(Player, 'teamId', team_id)

    # ==================== Players ====================

    def create_player(self, player: Player) -> ObjectId:
        return self._insert(player)

    def list_players(self) -> List[Player]:
        return self._list(Player)

    def delete_player(self, player_id: ObjectId) -> None:
        """Delete a player and the awards given to them."""
        self._delete(Player, player_id)
        self._cascade(Award, 'playerId', player_id)

    # ==================== Referees ====================

    def create_referee(self, referee: Referee) -> ObjectId:
        return self._insert(referee)

    def list_referees(self) -> List[Referee]:
        return self._list(Referee)

    # ==================== Matches ====================

    def create_match(self, match: Match, credit_winner: bool = True) -> ObjectId:
        """Insert a match, then credit the winner (wins +1, totalScore +3)."""
        match_id = self._insert(match)
        if credit_winner and not match.is_draw:
            self.record_win(match.winner_id)
        return match_id

    def record_win(self, team_id: ObjectId) -> None:
        result = self.db[Team.collection].update_one(
            {'_id': team_id},
            {'$inc': {'wins': 1, 'totalScore': 3}}
        )
        if not result.matched_count:
            logger.debug(f"Winner {team_id} does not resolve to a team; nothing credited")

    def list_matches(self) -> List[Match]:
        return self._list(Match)

    def delete_match(self, match_id: ObjectId) -> None:
        """Delete a match and the awards handed out in it."""
        self._delete(Match, match_id)
        self._cascade(Award, 'matchId', match_id)

    # ==================== Awards ====================

    def create_award(self, award: Award) -> ObjectId:
        return self._insert(award)

    def list_awards(self) -> List[Award]:
        return self._list(Award)

    def delete_award(self, award_id: ObjectId) -> None:
        self._delete(Award, award_id)

    # ==================== Maintenance ====================

    def drop_all(self) -> None:
        for name in COLLECTIONS:
            self.db.drop_collection(name)
