"""Shared fixtures: player/team builders and raw match payloads."""

import pytest

from mpg.config import clear_config_cache
from mpg.lineup import composition_lines
from mpg.models import Player, PlayerGoals, Position, StarterStatus, Team
from mpg.schemas import EngineConfig


def _make_player(
    player_id,
    position,
    origin_number,
    rating=6.0,
    bonus=0.0,
    status=StarterStatus.PLAYED,
    scored=0,
    own_goals=0,
):
    return Player(
        player_id=player_id,
        position=Position(position),
        rating=rating,
        bonus_rating=bonus,
        starter_status=status,
        goals=PlayerGoals(scored=scored, own_goals=own_goals),
        origin_number=origin_number,
        number=origin_number,
    )


def _make_team(composition='442', ratings=None, bench=(), prefix='h', name=''):
    """Team with 11 rated starters laid out per composition."""
    lines = composition_lines(composition)
    ratings = ratings or [6.0] * 11
    starters = [
        _make_player(f'{prefix}{slot}', lines[slot - 1], slot, rating=ratings[slot - 1])
        for slot in range(1, 12)
    ]
    return Team(composition=composition, starters=starters, bench=list(bench), name=name)


def _raw_team(prefix, rating=5.0):
    """442 team block: 11 starters and a D/M/F/G bench, everyone rated."""
    lines = composition_lines('442')
    players = [
        {'playerId': f'{prefix}_{slot}', 'position': int(lines[slot - 1]), 'rating': rating}
        for slot in range(1, 12)
    ]
    players += [
        {'playerId': f'{prefix}_12', 'position': 'D', 'rating': 5.5},
        {'playerId': f'{prefix}_13', 'position': 'M', 'rating': 6.0},
        {'playerId': f'{prefix}_14', 'position': 'A', 'rating': 6.5},
        {'playerId': f'{prefix}_15', 'position': 'G', 'rating': 5.0},
    ]
    pitch = {str(slot): {'playerId': f'{prefix}_{slot}'} for slot in range(1, 16)}
    return {
        'composition': '442',
        'name': f'Team {prefix.upper()}',
        'abbr': prefix.upper(),
        'players': players,
        'pitch': pitch,
        'tacticalSubs': [],
    }


@pytest.fixture
def make_player():
    """Factory for resolved-roster players (origin_number already set)."""
    return _make_player


@pytest.fixture
def make_team():
    """Factory for a team of rated starters."""
    return _make_team


@pytest.fixture
def engine_config():
    """Default engine configuration, independent of any config file."""
    return EngineConfig()


@pytest.fixture
def raw_match():
    """Finished match payload where every starter is rated 5.0."""
    return {
        'id': 'mpg_3_12',
        'live': False,
        'date': '2026-10-18T15:00:00Z',
        'home': _raw_team('h'),
        'away': _raw_team('a'),
    }


@pytest.fixture
def raw_team():
    """Factory for a 442 team block."""
    return _raw_team


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Never leak a cached config between tests."""
    clear_config_cache()
    yield
    clear_config_cache()
