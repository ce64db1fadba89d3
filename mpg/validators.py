"""Validation functions for resolved teams and matches."""

from .constants import STARTER_SLOTS
from .models import Match, Team


def validate_team(team: Team) -> list[str]:
    """
    Check that a resolved team satisfies the engine's invariants.

    Checks:
    - Exactly 11 starters, occupying slots 1-11 once each
    - No bench player is the virtual substitute of more than one starter
    - Substitute links never point to the starter itself or to a player
      that has a substitute of its own
    - MPG goals are 0 or 1
    - Virtual bonus equals the upstream bonus rating

    Args:
        team: Team after build_match()

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    label = team.abbreviation or team.name or 'Team'

    if len(team.starters) != STARTER_SLOTS:
        errors.append(f'{label} has {len(team.starters)} starters (expected {STARTER_SLOTS})')

    slots = [p.origin_number for p in team.starters]
    if sorted(slots, key=lambda s: s or 0) != list(range(1, len(slots) + 1)):
        errors.append(f'{label} starter slots are not 1-{len(slots)}: {slots}')

    seen = set()
    duplicates = set()
    for starter in team.starters:
        sub = starter.virtual_substitute
        if sub is None:
            continue
        if sub is starter:
            errors.append(f'{label} starter {starter.player_id} substitutes itself')
        if sub.virtual_substitute is not None:
            errors.append(f'{label} substitute {sub.player_id} has a substitute of its own')
        if sub.player_id in seen:
            duplicates.add(sub.player_id)
        seen.add(sub.player_id)

    if duplicates:
        errors.append(
            f'{label} has substitutes used more than once: {", ".join(sorted(duplicates))}'
        )

    for player in team.players:
        if player.goals.mpg_awarded not in (0, 1):
            errors.append(
                f'{label} player {player.player_id} has {player.goals.mpg_awarded} MPG goals'
            )
        if player.virtual_rating is not None and player.virtual_bonus != player.bonus_rating:
            errors.append(
                f'{label} player {player.player_id} virtual bonus {player.virtual_bonus} '
                f'!= bonus rating {player.bonus_rating}'
            )

    return errors


def validate_match(match: Match) -> list[str]:
    """
    Validate both teams of a match plus match-level consistency.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = validate_team(match.home) + validate_team(match.away)

    if match.live and (match.home.score is None or match.away.score is None):
        errors.append(f'Match {match.match_id or "?"} is live but has no recomputed score')
    if not match.live and (match.home.score is not None or match.away.score is not None):
        errors.append(f'Match {match.match_id or "?"} is not live but carries a live score')

    return errors
