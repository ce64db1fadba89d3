"""Substitution resolution: who actually fills each starter slot.

Every starter gets a virtual rating. Starters who did not play (Rotaldo) or
who were outperformed per a tactical substitution get a virtual substitute
from the bench through three tiers:

    1. Tactical: the manager's declared swap, if the sub has a rating and the
       starter's virtual total is below the trigger rating.
    2. Keeper: a Rotaldo keeper is replaced by any other rated keeper.
    3. Generic: a Rotaldo outfield starter takes the first rated bench player
       at its own line, else one line back, and so on, losing one point per
       line skipped.

Tiers 1 and 2 run for every starter before tier 3 starts, so tier 3 only
draws from bench players nobody claimed.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from .config import get_config
from .models import Player, Position, TacticalSubstitution, Team
from .schemas import EngineConfig

logger = logging.getLogger('mpg.substitutions')


class SubstitutePool:
    """Bench outfield players still available to the generic fallback.

    Keyed by player id; iteration follows insertion (roster) order.
    """

    def __init__(self, players: Iterable[Player] = ()):
        self._players: Dict[str, Player] = {}
        for player in players:
            self.add(player)

    def add(self, player: Player) -> None:
        self._players.setdefault(player.player_id, player)

    def discard(self, player: Player) -> None:
        self._players.pop(player.player_id, None)

    def take_first(self, position: Position) -> Optional[Player]:
        """Remove and return the first rated player at a position, if any."""
        found = None
        for player in self._players.values():
            if player.position == position and player.rating is not None:
                found = player
                break
        if found is not None:
            self.discard(found)
        return found

    def __contains__(self, player: object) -> bool:
        return isinstance(player, Player) and self._players.get(player.player_id) is player

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._players.values()))

    def __len__(self) -> int:
        return len(self._players)


def _link(starter: Player, sub: Player, pool: SubstitutePool, penalty: float = 0.0) -> None:
    sub.virtual_rating = sub.rating - penalty
    sub.virtual_bonus = sub.bonus_rating
    sub.is_substitute_for = True
    starter.virtual_substitute = sub
    pool.discard(sub)


def _apply_tactical(
    starter: Player,
    tactical: Optional[TacticalSubstitution],
    pool: SubstitutePool,
) -> bool:
    """Tier 1. Returns True if the swap took effect."""
    if tactical is None or tactical.substitute is None:
        return False

    sub = tactical.substitute
    if sub.rating is None:
        # Unrated sub counts as no tactical substitution at all
        logger.debug(f'Tactical sub {sub.player_id} for {starter.player_id} has no rating')
        return False
    if sub.is_substitute_for or not sub.is_bench:
        return False
    if starter.virtual_total >= tactical.trigger_rating:
        return False

    _link(starter, sub, pool)
    logger.debug(
        f'Tactical: {sub.player_id} replaces {starter.player_id} '
        f'({starter.virtual_total} < {tactical.trigger_rating})'
    )
    return True


def _apply_keeper_swap(starter: Player, players: List[Player], pool: SubstitutePool) -> bool:
    """Tier 2. Returns True if another keeper was found."""
    for candidate in players:
        if (
            candidate is not starter
            and candidate.position == Position.KEEPER
            and not candidate.is_starter
            and not candidate.is_substitute_for
            and candidate.rating is not None
        ):
            _link(starter, candidate, pool)
            logger.debug(f'Keeper: {candidate.player_id} replaces {starter.player_id}')
            return True
    return False


def _apply_generic_fallback(starter: Player, pool: SubstitutePool) -> bool:
    """Tier 3. Returns True if a bench player was found at or behind the starter's line."""
    for line in range(starter.position, Position.KEEPER, -1):
        sub = pool.take_first(Position(line))
        if sub is None:
            continue
        penalty = starter.position - line
        _link(starter, sub, pool, penalty=penalty)
        logger.debug(
            f'Fallback: {sub.player_id} replaces {starter.player_id} (penalty {penalty})'
        )
        return True

    logger.debug(f'No substitute for {starter.player_id}, keeping Rotaldo rating')
    return False


def resolve(
    players: List[Player],
    tactical_subs: List[TacticalSubstitution],
    config: Optional[EngineConfig] = None,
) -> None:
    """
    Compute virtual ratings and substitutes for one team, in place.

    Args:
        players: The team's roster in roster order (starters first)
        tactical_subs: Tactical substitutions declared for the match
        config: Engine configuration (defaults to get_config())
    """
    config = config or get_config()

    by_id = {p.player_id: p for p in players}
    tactical_by_starter: Dict[str, TacticalSubstitution] = {}
    for tactical in tactical_subs:
        tactical.substitute = by_id.get(tactical.sub_id)
        if tactical.substitute is None:
            logger.debug(f'Tactical sub {tactical.sub_id} is not on the match sheet')
        tactical_by_starter.setdefault(tactical.starter_id, tactical)

    pool = SubstitutePool(
        p for p in players if p.is_bench and p.position != Position.KEEPER
    )
    starters = [p for p in players if p.is_starter]

    for starter in starters:
        rotaldo = starter.is_rotaldo
        if rotaldo:
            starter.virtual_rating = config.rotaldo_rating
        elif starter.rating is not None:
            starter.virtual_rating = starter.rating
        else:
            starter.virtual_rating = config.default_rating
        starter.virtual_bonus = starter.bonus_rating

        if _apply_tactical(starter, tactical_by_starter.get(starter.player_id), pool):
            continue
        if rotaldo and starter.position == Position.KEEPER:
            _apply_keeper_swap(starter, players, pool)

    for starter in starters:
        if (
            starter.is_rotaldo
            and starter.position != Position.KEEPER
            and starter.virtual_substitute is None
        ):
            _apply_generic_fallback(starter, pool)


def resolve_team(team: Team, config: Optional[EngineConfig] = None) -> None:
    """Run resolve() over a team's roster and tactical substitutions."""
    resolve(team.players, team.tactical_subs, config)
