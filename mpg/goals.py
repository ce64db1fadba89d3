"""Goal events and live score."""

from typing import List

from .models import GoalEvent, GoalPhase, GoalType, Player, Team


def _player_events(player: Player, phase: GoalPhase) -> tuple[List[GoalEvent], List[GoalEvent]]:
    """Events a player produces for their own side and for the opponent."""
    own_side = [GoalEvent(GoalType.GOAL, player, phase) for _ in range(player.goals.scored)]
    if player.goals.mpg_awarded:
        own_side.append(GoalEvent(GoalType.SIMULATED_GOAL, player, phase))
    opponent_side = [
        GoalEvent(GoalType.OWN_GOAL, player, phase) for _ in range(player.goals.own_goals)
    ]
    return own_side, opponent_side


def build_goal_events(team: Team, opponent: Team) -> None:
    """
    Append the goal events of a team's starters and their substitutes.

    Real and MPG goals go to ``team.goals``; own goals go to
    ``opponent.goals``. A starter without a substitute is tagged STARTED;
    otherwise the starter's events are SUBSTITUTED_OUT and the
    substitute's SUBSTITUTED_IN. Unused bench players contribute nothing.

    Call it once per side.
    """
    for starter in team.starters:
        sub = starter.virtual_substitute
        phase = GoalPhase.STARTED if sub is None else GoalPhase.SUBSTITUTED_OUT

        own_side, opponent_side = _player_events(starter, phase)
        team.goals.extend(own_side)
        opponent.goals.extend(opponent_side)

        if sub is not None:
            own_side, opponent_side = _player_events(sub, GoalPhase.SUBSTITUTED_IN)
            team.goals.extend(own_side)
            opponent.goals.extend(opponent_side)


def compute_live_score(events: List[GoalEvent]) -> int:
    """
    Score of a team from its event list while the match is live.

    Every event counts for one goal except those tagged SUBSTITUTED_OUT,
    which belong to a starter no longer on the virtual pitch.
    """
    return sum(1 for event in events if event.phase != GoalPhase.SUBSTITUTED_OUT)
