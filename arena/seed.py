"""
Demo fixture set for local development.
"""
import logging

from .models import Award, Match, Player, Referee, Team
from .store import EntityStore

logger = logging.getLogger(__name__)


def seed_database(store: EntityStore, drop: bool = True) -> dict:
    """Insert the demo league. Counters are stored as given, no side effects run."""
    if drop:
        store.drop_all()
        logger.info("Old collections dropped")

    teams = [
        Team(team_name='Sentinels', game_name='Valorant', region='NA', wins=5, total_score=15),
        Team(team_name='Fnatic', game_name='Valorant', region='EU', wins=3, total_score=9),
        Team(team_name='Paper Rex', game_name='Valorant', region='ASIA', wins=0, total_score=1),
        Team(team_name='Team Liquid', game_name='PUBG', region='EU', wins=2, total_score=6),
    ]
    t = [store.create_team(team) for team in teams]
    logger.info(f"Inserted {len(t)} teams")

    players = [
        Player(gamertag='TenZ', team_id=t[0], game_name='Valorant', role='Duelist', kills=150, assists=40),
        Player(gamertag='Zekken', team_id=t[0], game_name='Valorant', role='Duelist', kills=120, assists=35),
        Player(gamertag='Boaster', team_id=t[1], game_name='Valorant', role='Controller', kills=80, assists=90),
        # Same gamertag registered for two games
        Player(gamertag='Shroud', team_id=None, game_name='PUBG', kills=200),
        Player(gamertag='Shroud', team_id=t[0], game_name='Valorant', kills=45),
    ]
    p = [store.create_player(player) for player in players]
    logger.info(f"Inserted {len(p)} players")

    referees = [
        Referee(referee_name='Ref John', game_name='Valorant', experience=5, matches_managed=15),
        Referee(referee_name='Ref Doe', game_name='PUBG', experience=2, matches_managed=3),
    ]
    r = [store.create_referee(referee) for referee in referees]
    logger.info(f"Inserted {len(r)} referees")

    matches = [
        Match(game_name='Valorant', round='Semifinal', team_a_id=t[0], team_b_id=t[1],
              score_a=13, score_b=11, winner_id=t[0], referee_id=r[0]),
        Match(game_name='Valorant', round='Group Stage', team_a_id=t[1], team_b_id=t[2],
              score_a=10, score_b=10, winner_id=None, referee_id=r[0]),
    ]
    m = [store.create_match(match, credit_winner=False) for match in matches]
    logger.info(f"Inserted {len(m)} matches")

    awards = [
        Award(title='Match MVP', category='MVP', match_id=m[0], player_id=p[1]),
        Award(title='Golden Gun', category='Top Scorer', match_id=m[0], player_id=p[1]),
        Award(title='Fair Play', category='Fair Play', match_id=m[1], player_id=p[2]),
    ]
    a = [store.create_award(award) for award in awards]
    logger.info(f"Inserted {len(a)} awards")

    return {'teams': t, 'players': p, 'referees': r, 'matches': m, 'awards': a}
