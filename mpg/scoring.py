"""Line averages and MPG goal simulation.

A player who did not score a real goal can still earn an "MPG goal" when
their rating beats each opposing line between them and the forward line,
then the opposing keeper:

    Defense  -> opposing Forward, Midfield, then Keeper
    Midfield -> opposing Midfield, then Keeper
    Forward  -> opposing Keeper

Each line beaten costs 1 point the first time and 0.5 afterwards. The home
side gets +0.01 so it wins exact ties.
"""

import logging
from typing import Dict, List, Optional

from .config import get_config
from .lineup import composition_lines
from .models import Player, Position, Team
from .schemas import EngineConfig

logger = logging.getLogger('mpg.scoring')


def line_score(players: List[Player]) -> float:
    """
    Average effective total of the starters in one line.

    A starter with a virtual substitute counts with the substitute's total.

    Args:
        players: Starters of one line, after substitution resolution

    Returns:
        Mean score, or 0.0 for an empty line
    """
    if not players:
        return 0.0
    return sum(p.effective_total for p in players) / len(players)


def team_line_scores(team: Team) -> Dict[Position, float]:
    """
    Compute the four line averages of a team.

    Starters are grouped by the line their slot belongs to in the team's
    composition. The result is also stored on ``team.line_scores``.
    """
    lines = composition_lines(team.composition)
    grouped: Dict[Position, List[Player]] = {position: [] for position in Position}
    for line, starter in zip(lines, team.starters):
        grouped[line].append(starter)

    scores = {position: line_score(players) for position, players in grouped.items()}
    team.line_scores = scores
    return scores


def cascade_virtual_goal(
    score: float,
    line: Position,
    opposing: Dict[Position, float],
    config: Optional[EngineConfig] = None,
) -> bool:
    """
    Run the line-by-line comparison for one candidate.

    Args:
        score: Candidate's starting score (home bonus already included)
        line: Line the candidate starts from (Defense, Midfield or Forward)
        opposing: Opposing team's line averages
        config: Engine configuration (defaults to get_config())

    Returns:
        True if the candidate reaches the forward line and then beats the keeper

    Raises:
        ValueError: If called for the keeper line
    """
    if line == Position.KEEPER:
        raise ValueError('Keepers cannot score MPG goals')
    config = config or get_config()

    current = int(line)
    climbs = 0
    while current < Position.FORWARD:
        # Lines mirror each other: our defense faces their forwards
        faced = Position(Position.FORWARD + Position.DEFENSE - current)
        if score <= opposing[faced]:
            return False
        score -= config.first_step_penalty if climbs == 0 else config.next_step_penalty
        climbs += 1
        current += 1

    return score > opposing[Position.KEEPER]


def _eligible(candidate: Optional[Player]) -> bool:
    return (
        candidate is not None
        and candidate.virtual_rating is not None
        and candidate.position != Position.KEEPER
        and candidate.goals.scored == 0
    )


def simulate_virtual_goals(
    team: Team,
    opposing: Dict[Position, float],
    home: bool,
    config: Optional[EngineConfig] = None,
) -> List[Player]:
    """
    Award MPG goals to a team's eligible outfield players.

    Each outfield starter and, separately, its virtual substitute is a
    candidate if it scored no real goal. A candidate starts from the line
    of the slot it fills. ``goals.mpg_awarded`` is set to 1 on the
    candidate that wins, never incremented past 1.

    Args:
        team: Team after substitution resolution
        opposing: Opposing team's line averages
        home: Whether the team plays at home
        config: Engine configuration (defaults to get_config())

    Returns:
        Players awarded an MPG goal by this call
    """
    config = config or get_config()
    bonus = config.home_bonus if home else 0.0
    lines = composition_lines(team.composition)

    awarded = []
    for line, starter in zip(lines, team.starters):
        if line == Position.KEEPER:
            continue
        for candidate in (starter, starter.virtual_substitute):
            if not _eligible(candidate):
                continue
            if cascade_virtual_goal(candidate.virtual_total + bonus, line, opposing, config):
                if candidate.goals.mpg_awarded == 0:
                    awarded.append(candidate)
                candidate.goals.mpg_awarded = 1
                logger.debug(
                    f'{team.name or "Team"}: MPG goal for {candidate.player_id} '
                    f'({candidate.virtual_total:.2f} from {line.name.lower()})'
                )

    return awarded
