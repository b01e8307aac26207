"""
Unit tests for typed records and request field coercion.
Tests: parse_int, parse_object_id, from_payload, document mapping
"""
import pytest
from bson import ObjectId

from arena.models import (
    INT64_MAX, INT64_MIN, Award, InvalidFieldError, Match, Player, Referee, Team,
    parse_int, parse_object_id, parse_str
)


class TestParseInt:
    """Tests for parse_int."""

    @pytest.mark.parametrize('value,expected', [
        (7, 7),
        ('42', 42),
        ('  -3', -3),
        ('12abc', 12),
        (7.9, 7),
        ('+5', 5),
    ])
    def test_parses_leading_integer(self, value, expected):
        """Leading integers are parsed, trailing junk ignored."""
        assert parse_int(value) == expected

    @pytest.mark.parametrize('value', [None, '', 'abc', [], {}, True, float('nan')])
    def test_unparseable_uses_default(self, value):
        """Unparseable values fall back to 0."""
        assert parse_int(value) == 0

    def test_custom_default(self):
        """A None default marks the value invalid instead of zeroing it."""
        assert parse_int('ten', default=None) is None

    @pytest.mark.parametrize('value', ['99999999999999999999', 2 ** 63, -2 ** 63 - 1, 1e30])
    def test_outside_int64_uses_default(self, value):
        """Integers the store cannot hold are treated as unparseable."""
        assert parse_int(value) == 0
        assert parse_int(value, default=None) is None

    def test_int64_bounds_kept(self):
        assert parse_int(str(INT64_MAX)) == INT64_MAX
        assert parse_int(INT64_MIN) == INT64_MIN


class TestParseStr:
    """Tests for parse_str."""

    @pytest.mark.parametrize('value,expected', [
        ('PUBG', 'PUBG'),
        (5, '5'),
        (7.5, '7.5'),
        (None, None),
    ])
    def test_text_fields(self, value, expected):
        assert parse_str(value) == expected


class TestParseObjectId:
    """Tests for parse_object_id."""

    def test_valid_hex(self):
        oid = ObjectId()
        assert parse_object_id(str(oid), 'teamId') == oid

    @pytest.mark.parametrize('value', [None, '', 0])
    def test_empty_is_no_reference(self, value):
        """Empty references mean null."""
        assert parse_object_id(value, 'teamId') is None

    def test_malformed_raises(self):
        """A malformed id fails with the field name in the message."""
        with pytest.raises(InvalidFieldError) as exc:
            parse_object_id('not-an-id', 'teamId')
        assert 'teamId' in str(exc.value)

    def test_wrong_type_raises(self):
        with pytest.raises(InvalidFieldError):
            parse_object_id(12345, 'playerId')


class TestFromPayload:
    """Tests for building records from request bodies."""

    def test_team_counters_start_at_zero(self):
        """Team counters are server assigned and ignore the request."""
        team = Team.from_payload({'teamName': 'Fnatic', 'gameName': 'Valorant',
                                  'region': 'EU', 'wins': 9, 'totalScore': 27})
        assert team.team_name == 'Fnatic'
        assert team.wins == 0
        assert team.total_score == 0

    def test_player_defaults(self):
        """Omitted counters default to 0, missing team means free agent."""
        player = Player.from_payload({'gamertag': 'Shroud', 'gameName': 'PUBG'})
        assert player.kills == 0
        assert player.assists == 0
        assert player.team_id is None
        assert player.is_free_agent
        assert player.role is None

    def test_player_parses_fields(self):
        team_id = ObjectId()
        player = Player.from_payload({
            'gamertag': 'TenZ', 'teamId': str(team_id), 'gameName': 'Valorant',
            'role': 'Duelist', 'kills': '150', 'assists': 'x'
        })
        assert player.team_id == team_id
        assert player.role == 'Duelist'
        assert player.kills == 150
        assert player.assists == 0

    def test_referee_experience_invalid_is_null(self):
        """Referee experience has no fallback."""
        referee = Referee.from_payload({'refereeName': 'Ref John', 'experience': 'lots'})
        assert referee.experience is None
        assert referee.matches_managed == 0

    def test_referee_parses_counts(self):
        referee = Referee.from_payload({'refereeName': 'Ref John', 'gameName': 'Valorant',
                                        'experience': '5', 'matchesManaged': 15})
        assert referee.experience == 5
        assert referee.matches_managed == 15
        assert referee.game_name == 'Valorant'

    def test_match_without_winner_is_draw(self):
        a, b = ObjectId(), ObjectId()
        match = Match.from_payload({'round': 'Group Stage', 'teamAId': str(a),
                                    'teamBId': str(b), 'scoreA': '10', 'scoreB': 10})
        assert match.team_a_id == a
        assert match.team_b_id == b
        assert match.score_a == 10
        assert match.winner_id is None
        assert match.is_draw

    def test_match_malformed_winner(self):
        """One bad reference fails the whole record."""
        with pytest.raises(InvalidFieldError):
            Match.from_payload({'teamAId': str(ObjectId()), 'winnerId': 'abc'})

    def test_numeric_text_fields_stored_as_strings(self):
        """JSON numbers sent for text fields become strings."""
        player = Player.from_payload({'gamertag': 1337, 'gameName': 5})
        award = Award.from_payload({'title': 3, 'category': 7})
        assert (player.gamertag, player.game_name) == ('1337', '5')
        assert (award.title, award.category) == ('3', '7')

    def test_award_references(self):
        player_id = ObjectId()
        award = Award.from_payload({'title': 'Golden Gun', 'category': 'Top Scorer',
                                    'playerId': str(player_id)})
        assert award.player_id == player_id
        assert award.match_id is None


class TestDocumentMapping:
    """Tests for Record document conversion."""

    def test_to_document_uses_stored_keys(self):
        team = Team(team_name='Sentinels', game_name='Valorant', region='NA')
        assert team.to_document() == {
            'teamName': 'Sentinels',
            'gameName': 'Valorant',
            'region': 'NA',
            'wins': 0,
            'totalScore': 0
        }

    def test_from_document_ignores_unknown_keys(self):
        """Extra attributes in a stored document are dropped, missing ones defaulted."""
        oid = ObjectId()
        player = Player.from_document({'_id': oid, 'gamertag': 'Shroud', 'totalKills': 200})
        assert player.id == oid
        assert player.gamertag == 'Shroud'
        assert player.kills == 0

    def test_to_dict_includes_id(self):
        oid = ObjectId()
        award = Award.from_document({'_id': oid, 'title': 'Fair Play', 'category': 'Fair Play'})
        data = award.to_dict()
        assert data['_id'] == oid
        assert data['category'] == 'Fair Play'
        assert data['playerId'] is None
