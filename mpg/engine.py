"""Match pipeline: payload in, resolved teams and goals out.

Order matters within a match: substitutions are resolved for both teams
before any line average is taken, and MPG goals are simulated before goal
events are built, since the events read the awarded flags.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .exceptions import MatchPayloadError
from .goals import build_goal_events, compute_live_score
from .lineup import build_team
from .models import Match, Player, Team
from .schemas import EngineConfig, MatchPayload, RawTeam
from .scoring import simulate_virtual_goals, team_line_scores
from .substitutions import resolve_team
from .utils import load_json, validate_payload

logger = logging.getLogger('mpg.engine')


def parse_match_day(match_id: str) -> Optional[int]:
    """
    Extract the match day from a match id.

    Match ids carry the day as their second underscore-separated field,
    e.g. ``'mpg_3_12'`` -> 3.

    Returns:
        Match day, or None if the id does not carry one
    """
    parts = match_id.split('_')
    if len(parts) < 2:
        return None
    try:
        return int(parts[1])
    except ValueError:
        return None


def _build_side(raw_team: RawTeam, side: str) -> Team:
    try:
        return build_team(raw_team)
    except MatchPayloadError as e:
        logger.error(f'Invalid {side} team: {e}')
        raise MatchPayloadError(f'Invalid {side} team: {e}') from e


def build_match(
    payload: dict[str, Any] | MatchPayload,
    config: Optional[EngineConfig] = None,
) -> Match:
    """
    Run the full engine over one match payload.

    Args:
        payload: Raw match dict (as decoded from the API) or a validated MatchPayload
        config: Engine configuration (defaults to get_config())

    Returns:
        Match with resolved starters, line scores, goal events and, when
        live, recomputed scores

    Raises:
        MatchPayloadError: If the payload is structurally invalid
    """
    if not isinstance(payload, MatchPayload):
        label = 'match'
        if isinstance(payload, dict) and payload.get('id'):
            label = f'match {payload["id"]}'
        payload = validate_payload(payload, MatchPayload, label=label)

    home = _build_side(payload.home, 'home')
    away = _build_side(payload.away, 'away')

    resolve_team(home, config)
    resolve_team(away, config)

    home_lines = team_line_scores(home)
    away_lines = team_line_scores(away)

    simulate_virtual_goals(home, away_lines, home=True, config=config)
    simulate_virtual_goals(away, home_lines, home=False, config=config)

    build_goal_events(home, away)
    build_goal_events(away, home)

    if payload.live:
        home.score = compute_live_score(home.goals)
        away.score = compute_live_score(away.goals)

    match_day = payload.match_day
    if match_day is None and payload.id:
        match_day = parse_match_day(payload.id)

    match = Match(
        home=home,
        away=away,
        match_id=payload.id,
        live=payload.live,
        date=payload.date,
        match_day=match_day,
    )
    logger.debug(
        f'Match {match.match_id or "?"}: {home.name or "home"} {len(home.goals)} goal events, '
        f'{away.name or "away"} {len(away.goals)} goal events'
    )
    return match


def build_matches(
    payloads: Iterable[dict[str, Any] | MatchPayload],
    config: Optional[EngineConfig] = None,
) -> List[Match]:
    """Run build_match over several payloads; each gets its own object graph."""
    return [build_match(payload, config) for payload in payloads]


def load_match(path: str | Path, config: Optional[EngineConfig] = None) -> Match:
    """
    Load a saved match payload from JSON and run the engine over it.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        MatchPayloadError: If the payload is structurally invalid
    """
    return build_match(load_json(path, schema=MatchPayload), config)


def _player_to_dict(player: Player) -> dict[str, Any]:
    return {
        'playerId': player.player_id,
        'name': player.name,
        'position': player.position.name.lower(),
        'originNumber': player.origin_number,
        'number': player.number,
        'rating': player.rating,
        'bonusRating': player.bonus_rating,
        'virtualRating': player.virtual_rating,
        'goals': player.goals.scored,
        'mpgGoals': player.goals.mpg_awarded,
        'ownGoals': player.goals.own_goals,
    }


def team_to_dict(team: Team) -> dict[str, Any]:
    """JSON-serializable view of a resolved team."""
    starters = []
    for starter in team.starters:
        entry = _player_to_dict(starter)
        sub = starter.virtual_substitute
        entry['substitute'] = _player_to_dict(sub) if sub is not None else None
        starters.append(entry)

    return {
        'name': team.name,
        'abbr': team.abbreviation,
        'composition': team.composition,
        'score': team.score,
        'lineScores': {
            position.name.lower(): round(score, 2) for position, score in team.line_scores.items()
        },
        'starters': starters,
        'bench': [_player_to_dict(p) for p in team.bench if not p.is_substitute_for],
        'goals': [
            {'type': e.type.value, 'playerId': e.player.player_id, 'phase': e.phase.value}
            for e in team.goals
        ],
    }


def match_to_dict(match: Match) -> dict[str, Any]:
    """JSON-serializable summary of a match for the view layer."""
    return {
        'id': match.match_id,
        'matchDay': match.match_day,
        'date': match.date,
        'live': match.live,
        'home': team_to_dict(match.home),
        'away': team_to_dict(match.away),
    }
