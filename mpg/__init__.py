from .models import (
    GoalEvent,
    GoalPhase,
    GoalType,
    Match,
    Player,
    PlayerGoals,
    Position,
    StarterStatus,
    TacticalSubstitution,
    Team,
)
from .exceptions import MatchPayloadError, MpgError
from .lineup import (
    build_team,
    composition_lines,
    normalize_players,
    resolve_pitch_numbers,
)
from .substitutions import SubstitutePool, resolve, resolve_team
from .scoring import (
    cascade_virtual_goal,
    line_score,
    simulate_virtual_goals,
    team_line_scores,
)
from .goals import build_goal_events, compute_live_score
from .engine import (
    build_match,
    build_matches,
    load_match,
    match_to_dict,
    parse_match_day,
)
from .validators import validate_match, validate_team

__all__ = [
    # Models
    'GoalEvent',
    'GoalPhase',
    'GoalType',
    'Match',
    'Player',
    'PlayerGoals',
    'Position',
    'StarterStatus',
    'TacticalSubstitution',
    'Team',
    # Errors
    'MatchPayloadError',
    'MpgError',
    # Lineup normalization
    'build_team',
    'composition_lines',
    'normalize_players',
    'resolve_pitch_numbers',
    # Substitutions
    'SubstitutePool',
    'resolve',
    'resolve_team',
    # Line scores and MPG goals
    'cascade_virtual_goal',
    'line_score',
    'simulate_virtual_goals',
    'team_line_scores',
    # Goal events
    'build_goal_events',
    'compute_live_score',
    # Pipeline
    'build_match',
    'build_matches',
    'load_match',
    'match_to_dict',
    'parse_match_day',
    # Validation
    'validate_match',
    'validate_team',
]
