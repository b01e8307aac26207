"""
Typed records for the five entity collections.

Documents in the store are schemaless; these dataclasses are the typed view the
rest of the service works with. Attribute names are Python-style, the document
key of each attribute is kept in the field metadata.
"""
import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId


_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')

# BSON integers are signed 64-bit
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class InvalidFieldError(ValueError):
    """A request field could not be converted to its stored type."""


def parse_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Parse the leading integer of ``value`` ("12abc" -> 12, 7.9 -> 7).

    Values that do not fit a BSON int64 count as unparseable.
    """
    parsed = None
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            parsed = int(match.group(1))
    if parsed is None or not INT64_MIN <= parsed <= INT64_MAX:
        return default
    return parsed


def parse_str(value: Any) -> Optional[str]:
    """Text fields are stored as strings whatever JSON type they arrive as."""
    return str(value) if value is not None else None


def parse_object_id(value: Any, field_name: str) -> Optional[ObjectId]:
    """Convert an opaque id string to an ObjectId; empty values mean no reference."""
    if not value:
        return None
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidFieldError(f"Invalid {field_name}: {e}") from e


def doc_field(key: str, default: Any = None):
    return field(default=default, metadata={'key': key})


class Record:
    """Mapping between a dataclass and its stored document."""

    collection: str = ''

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        values = {}
        for f in fields(cls):
            key = f.metadata.get('key')
            if key in doc:
                values[f.name] = doc[key]
        return cls(**values)

    def to_document(self) -> Dict[str, Any]:
        """Document body without the identifier, ready for insert."""
        return {
            f.metadata['key']: getattr(self, f.name)
            for f in fields(self)
            if f.metadata.get('key') != '_id'
        }

    def to_dict(self) -> Dict[str, Any]:
        data = {'_id': self.id}
        data.update(self.to_document())
        return data


@dataclass
class Team(Record):
    collection = 'teams'

    team_name: Optional[str] = doc_field('teamName')
    game_name: Optional[str] = doc_field('gameName')
    region: Optional[str] = doc_field('region')
    wins: int = doc_field('wins', 0)
    total_score: int = doc_field('totalScore', 0)
    id: Optional[ObjectId] = doc_field('_id')

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Team':
        # Counters only move through match results.
        return cls(
            team_name=parse_str(data.get('teamName')),
            game_name=parse_str(data.get('gameName')),
            region=parse_str(data.get('region'))
        )


@dataclass
class Player(Record):
    collection = 'players'

    gamertag: Optional[str] = doc_field('gamertag')
    team_id: Optional[ObjectId] = doc_field('teamId')
    game_name: Optional[str] = doc_field('gameName')
    role: Optional[str] = doc_field('role')
    kills: int = doc_field('kills', 0)
    assists: int = doc_field('assists', 0)
    id: Optional[ObjectId] = doc_field('_id')

    @property
    def is_free_agent(self) -> bool:
        return self.team_id is None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Player':
        return cls(
            gamertag=parse_str(data.get('gamertag')),
            team_id=parse_object_id(data.get('teamId'), 'teamId'),
            game_name=parse_str(data.get('gameName')),
            role=parse_str(data.get('role') or None),
            kills=parse_int(data.get('kills')),
            assists=parse_int(data.get('assists'))
        )


@dataclass
class Referee(Record):
    collection = 'referees'

    referee_name: Optional[str] = doc_field('refereeName')
    game_name: Optional[str] = doc_field('gameName')
    experience: Optional[int] = doc_field('experience')
    matches_managed: int = doc_field('matchesManaged', 0)
    id: Optional[ObjectId] = doc_field('_id')

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Referee':
        return cls(
            referee_name=parse_str(data.get('refereeName')),
            game_name=parse_str(data.get('gameName')),
            # No fallback: an unparseable experience is stored as null.
            experience=parse_int(data.get('experience'), default=None),
            matches_managed=parse_int(data.get('matchesManaged'))
        )


@dataclass
class Match(Record):
    collection = 'matches'

    game_name: Optional[str] = doc_field('gameName')
    round: Optional[str] = doc_field('round')
    team_a_id: Optional[ObjectId] = doc_field('teamAId')
    team_b_id: Optional[ObjectId] = doc_field('teamBId')
    score_a: int = doc_field('scoreA', 0)
    score_b: int = doc_field('scoreB', 0)
    winner_id: Optional[ObjectId] = doc_field('winnerId')
    referee_id: Optional[ObjectId] = doc_field('refereeId')
    id: Optional[ObjectId] = doc_field('_id')

    @property
    def is_draw(self) -> bool:
        return self.winner_id is None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Match':
        return cls(
            game_name=parse_str(data.get('gameName')),
            round=parse_str(data.get('round')),
            team_a_id=parse_object_id(data.get('teamAId'), 'teamAId'),
            team_b_id=parse_object_id(data.get('teamBId'), 'teamBId'),
            score_a=parse_int(data.get('scoreA')),
            score_b=parse_int(data.get('scoreB')),
            winner_id=parse_object_id(data.get('winnerId'), 'winnerId'),
            referee_id=parse_object_id(data.get('refereeId'), 'refereeId')
        )


@dataclass
class Award(Record):
    collection = 'awards'

    title: Optional[str] = doc_field('title')
    category: Optional[str] = doc_field('category')
    match_id: Optional[ObjectId] = doc_field('matchId')
    player_id: Optional[ObjectId] = doc_field('playerId')
    id: Optional[ObjectId] = doc_field('_id')

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Award':
        return cls(
            title=parse_str(data.get('title')),
            category=parse_str(data.get('category')),
            match_id=parse_object_id(data.get('matchId'), 'matchId'),
            player_id=parse_object_id(data.get('playerId'), 'playerId')
        )
