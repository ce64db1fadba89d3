"""Integration tests: full match payloads through the engine."""

import json
from pathlib import Path

import pytest

from mpg.engine import build_match, build_matches, load_match, match_to_dict, parse_match_day
from mpg.exceptions import MatchPayloadError
from mpg.models import GoalPhase, GoalType, Position
from mpg.validators import validate_match


def player_entry(team_block, player_id):
    return next(p for p in team_block['players'] if p['playerId'] == player_id)


@pytest.fixture
def eventful_match(raw_match):
    """Live match with no-shows, a real goal and an own goal.

    Home: forward h_10 and keeper h_1 did not play, forward h_11 rated
    4.5, midfielder h_6 scored an own goal. Away: midfielder a_9 scored.
    """
    home = raw_match['home']
    forward = player_entry(home, 'h_10')
    forward['status'] = -1
    forward['rating'] = None
    keeper = player_entry(home, 'h_1')
    keeper['compositionStatus'] = -1
    keeper['rating'] = None
    player_entry(home, 'h_6')['ownGoals'] = 1
    player_entry(home, 'h_11')['rating'] = 4.5
    player_entry(raw_match['away'], 'a_9')['goals'] = 1
    raw_match['live'] = True
    return raw_match


@pytest.fixture
def match_dir(tmp_path, raw_match):
    """Temporary data directory holding one saved match payload."""
    matches_dir = tmp_path / 'data' / 'matches'
    matches_dir.mkdir(parents=True)
    with open(matches_dir / 'mpg_3_12.json', 'w') as f:
        json.dump(raw_match, f, indent=2)
    return matches_dir


class TestFullMatch:
    """End-to-end scenario through every engine stage."""

    def test_substitutions(self, eventful_match, engine_config):
        """Test the no-show forward and keeper both get a bench replacement."""
        match = build_match(eventful_match, engine_config)
        home = {p.player_id: p for p in match.home.players}

        assert home['h_10'].virtual_rating == 2.5
        assert home['h_10'].virtual_substitute is home['h_14']
        assert home['h_1'].virtual_substitute is home['h_15']
        assert all(p.virtual_substitute is None for p in match.away.starters)

    def test_line_scores(self, eventful_match, engine_config):
        """Test line averages use the substitutes' totals."""
        match = build_match(eventful_match, engine_config)
        assert match.home.line_scores == {
            Position.KEEPER: 5.0,
            Position.DEFENSE: 5.0,
            Position.MIDFIELD: 5.0,
            Position.FORWARD: 5.5,
        }
        assert set(match.away.line_scores.values()) == {5.0}

    def test_substitute_earns_mpg_goal(self, eventful_match, engine_config):
        """Test the fallback forward at 6.51 beats the away keeper at 5.0."""
        match = build_match(eventful_match, engine_config)
        home = {p.player_id: p for p in match.home.players}

        assert home['h_14'].goals.mpg_awarded == 1
        assert home['h_10'].goals.mpg_awarded == 0
        assert all(p.goals.mpg_awarded == 0 for p in match.away.players)

    def test_goal_events_and_live_score(self, eventful_match, engine_config):
        """Test event lists and live scores for both sides."""
        match = build_match(eventful_match, engine_config)

        assert [(e.type, e.phase, e.player.player_id) for e in match.home.goals] == [
            (GoalType.SIMULATED_GOAL, GoalPhase.SUBSTITUTED_IN, 'h_14'),
        ]
        assert [(e.type, e.player.player_id) for e in match.away.goals] == [
            (GoalType.OWN_GOAL, 'h_6'),
            (GoalType.GOAL, 'a_9'),
        ]
        assert match.home.score == 1
        assert match.away.score == 2

    def test_result_passes_validation(self, eventful_match, engine_config):
        """Test the resolved match satisfies every invariant check."""
        match = build_match(eventful_match, engine_config)
        assert validate_match(match) == []


class TestMatchMetadata:
    """Tests for match-level fields."""

    def test_match_day_from_id(self, raw_match, engine_config):
        """Test the match day is parsed from the match id."""
        match = build_match(raw_match, engine_config)
        assert match.match_id == 'mpg_3_12'
        assert match.match_day == 3

    def test_explicit_match_day_wins(self, raw_match, engine_config):
        """Test an explicit matchDay overrides the id."""
        raw_match['matchDay'] = 7
        assert build_match(raw_match, engine_config).match_day == 7

    def test_not_live_has_no_score(self, raw_match, engine_config):
        """Test finished matches keep the upstream score untouched (None here)."""
        match = build_match(raw_match, engine_config)
        assert match.home.score is None
        assert match.away.score is None
        assert validate_match(match) == []

    @pytest.mark.parametrize(
        'match_id, expected',
        [
            ('mpg_3_12', 3),
            ('mpg_match_4', None),
            ('mpg', None),
            ('', None),
        ],
    )
    def test_parse_match_day(self, match_id, expected):
        """Test match day parsing on well-formed and odd ids."""
        assert parse_match_day(match_id) == expected


class TestMalformedPayloads:
    """Structural errors fail fast with MatchPayloadError."""

    def test_missing_team(self, raw_match, engine_config):
        """Test a payload without an away team is rejected."""
        del raw_match['away']
        with pytest.raises(MatchPayloadError):
            build_match(raw_match, engine_config)

    def test_not_an_object(self, engine_config):
        """Test a non-object payload is rejected."""
        with pytest.raises(MatchPayloadError, match='expected an object'):
            build_match(['not', 'a', 'match'], engine_config)

    def test_unknown_composition(self, raw_match, engine_config):
        """Test an unsupported formation is rejected."""
        raw_match['home']['composition'] = '262'
        with pytest.raises(MatchPayloadError):
            build_match(raw_match, engine_config)

    @pytest.mark.parametrize('position', [[1], {'line': 2}, 'X', 7, None])
    def test_malformed_position(self, raw_match, engine_config, position):
        """Test odd position values raise MatchPayloadError, never a TypeError."""
        raw_match['home']['players'][0]['position'] = position
        with pytest.raises(MatchPayloadError, match='position'):
            build_match(raw_match, engine_config)

    def test_pitch_references_unknown_player(self, raw_match, engine_config):
        """Test the error names the side that carries the bad slot."""
        raw_match['away']['pitch']['4'] = {'playerId': 'nobody'}
        with pytest.raises(MatchPayloadError, match='Invalid away team'):
            build_match(raw_match, engine_config)

    def test_is_a_value_error(self, raw_match, engine_config):
        """Test payload errors can be caught as ValueError."""
        del raw_match['home']
        with pytest.raises(ValueError):
            build_match(raw_match, engine_config)


class TestBatchAndFiles:
    """Tests for batch runs, loading from disk and serialization."""

    def test_build_matches_independent(self, raw_match, engine_config):
        """Test each payload gets its own players, even when reused."""
        first, second = build_matches([raw_match, raw_match], engine_config)
        assert first.home is not second.home
        assert first.home.starters[0] is not second.home.starters[0]

    def test_load_match(self, match_dir, engine_config):
        """Test a payload saved to disk runs through the engine."""
        match = load_match(match_dir / 'mpg_3_12.json', engine_config)
        assert match.match_day == 3
        assert len(match.home.starters) == 11

    def test_load_missing_file(self, tmp_path, engine_config):
        """Test a missing payload file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_match(tmp_path / 'missing.json', engine_config)

    def test_match_to_dict_is_json(self, eventful_match, engine_config):
        """Test the summary is JSON-serializable with camelCase keys."""
        summary = match_to_dict(build_match(eventful_match, engine_config))
        decoded = json.loads(json.dumps(summary))

        assert decoded['matchDay'] == 3
        assert decoded['home']['score'] == 1
        assert decoded['home']['lineScores']['forward'] == 5.5
        forward = decoded['home']['starters'][9]
        assert forward['playerId'] == 'h_10'
        assert forward['substitute']['playerId'] == 'h_14'
        assert [p['playerId'] for p in decoded['home']['bench']] == ['h_12', 'h_13']
        assert decoded['home']['goals'] == [
            {'type': 'mpg_goal', 'playerId': 'h_14', 'phase': 'substituted_in'}
        ]

    def test_shipped_sample_payload(self, engine_config):
        """Test the sample payload under data/matches runs cleanly."""
        path = Path(__file__).parent.parent / 'data' / 'matches' / 'mpg_3_12.json'
        match = load_match(path, engine_config)
        assert match.live
        assert match.home.score is not None
        assert validate_match(match) == []
