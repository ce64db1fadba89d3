"""Lineup normalization: raw API records to numbered Player objects.

Each player ends up with two slot numbers. ``origin_number`` is the slot the
manager put them in (1-11 starter, 12+ bench). ``number`` is the slot they
physically occupy once the on-pitch table is applied. A bench player who
replaced a starter keeps their bench ``origin_number`` but takes the
starter's slot as ``number``.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .constants import (
    COMPOSITIONS,
    ROTALDO_ID_PREFIX,
    STARTER_SLOTS,
    STATUS_DID_NOT_PLAY,
    STATUS_QUESTIONABLE,
)
from .exceptions import MatchPayloadError
from .models import Player, PlayerGoals, Position, StarterStatus, TacticalSubstitution, Team
from .schemas import PitchSlot, RawPlayer, RawTeam

logger = logging.getLogger('mpg.lineup')


def composition_lines(composition: str) -> List[Position]:
    """
    Map each starter slot to its pitch line for a formation code.

    Args:
        composition: Formation code such as '442' or '352'

    Returns:
        List of 11 positions; index 0 is slot 1 (always the keeper)

    Raises:
        MatchPayloadError: If the formation is not one the league accepts
    """
    try:
        defense, midfield, forward = COMPOSITIONS[str(composition)]
    except KeyError:
        raise MatchPayloadError(f'Unknown composition: {composition}') from None

    return (
        [Position.KEEPER]
        + [Position.DEFENSE] * defense
        + [Position.MIDFIELD] * midfield
        + [Position.FORWARD] * forward
    )


def parse_starter_status(status: Optional[int], composition_status: Optional[int]) -> StarterStatus:
    """Derive a StarterStatus from the upstream status fields."""
    codes = (composition_status, status)
    if STATUS_DID_NOT_PLAY in codes:
        return StarterStatus.DID_NOT_PLAY
    if STATUS_QUESTIONABLE in codes:
        return StarterStatus.QUESTIONABLE
    return StarterStatus.PLAYED


def normalize_player(raw: RawPlayer) -> Optional[Player]:
    """
    Convert one raw record to a Player.

    Returns:
        Player, or None if the record has neither an external nor an internal id
    """
    player_id = raw.identity
    if not player_id:
        return None

    return Player(
        player_id=player_id,
        position=Position(raw.position),
        rating=raw.rating,
        bonus_rating=raw.bonus_rating,
        starter_status=parse_starter_status(raw.status, raw.composition_status),
        goals=PlayerGoals(
            scored=raw.goals,
            mpg_awarded=min(raw.mpg_goals, 1),
            own_goals=raw.own_goals,
        ),
        name=raw.name or '',
    )


def normalize_players(raw_players: Iterable[RawPlayer]) -> Dict[str, Player]:
    """
    Convert raw records to Players keyed by id, preserving input order.

    Records without identity are skipped. If an id appears twice the
    first record wins.
    """
    players: Dict[str, Player] = {}
    for raw in raw_players:
        player = normalize_player(raw)
        if player is None:
            logger.debug(f'Skipping player record without id: {raw.name or raw}')
            continue
        if player.player_id in players:
            logger.warning(f'Duplicate player record {player.player_id}, keeping the first')
            continue
        players[player.player_id] = player
    return players


def _lookup(players: Dict[str, Player], player_id: str, slot: int) -> Player:
    try:
        return players[player_id]
    except KeyError:
        raise MatchPayloadError(
            f'Pitch slot {slot} references unknown player {player_id}'
        ) from None


def recover_starter_links(pitch: Dict[int, PitchSlot]) -> Dict[int, Optional[str]]:
    """
    First pass: resolve the starter link of every slot.

    A mandatory substitution sometimes arrives without its starter id; the
    same occupant is then listed under another slot that does carry it, so
    the link is copied from the first such slot in ascending order.

    Returns:
        Dict mapping slot number to starter id (None when the occupant is
        the nominal holder)
    """
    slots = sorted(pitch)
    links = {slot: pitch[slot].starter_id for slot in slots}

    for slot in slots:
        entry = pitch[slot]
        if not entry.is_mandatory or links[slot]:
            continue
        for other in slots:
            if other == slot:
                continue
            candidate = pitch[other]
            if candidate.player_id == entry.player_id and candidate.starter_id:
                links[slot] = candidate.starter_id
                logger.debug(
                    f'Recovered starter {candidate.starter_id} for slot {slot} from slot {other}'
                )
                break

    return links


def resolve_pitch_numbers(pitch: Dict[int, PitchSlot], players: Dict[str, Player]) -> None:
    """
    Assign origin_number and number to every player on the match sheet.

    Slots are processed in ascending order. For a starter slot with a
    starter link the linked starter is the nominal holder, otherwise the
    occupant is. Each player keeps the first number assigned to them;
    later slot keys mentioning the same player are ignored.

    An occupant seen only under a linked starter slot gets the next free
    bench number, so their rating is not lost.

    Raises:
        MatchPayloadError: If a slot references a player missing from the roster
    """
    links = recover_starter_links(pitch)

    for slot in sorted(pitch):
        occupant = _lookup(players, pitch[slot].player_id, slot)
        starter_id = links[slot]

        nominal = occupant
        if slot <= STARTER_SLOTS and starter_id:
            nominal = _lookup(players, starter_id, slot)

        if nominal.origin_number is None:
            nominal.origin_number = slot
        if occupant.number is None:
            occupant.number = slot

    # Occupants listed only under a linked starter slot still belong on the bench
    used = {p.origin_number for p in players.values() if p.origin_number is not None}
    next_bench = max([STARTER_SLOTS, *pitch]) + 1
    for player in players.values():
        if player.number is None or player.origin_number is not None:
            continue
        while next_bench in used:
            next_bench += 1
        player.origin_number = next_bench
        used.add(next_bench)
        logger.warning(
            f'Player {player.player_id} occupies slot {player.number} without a bench slot, '
            f'numbering them {next_bench}'
        )


def rotaldo_placeholder(slot: int, position: Position) -> Player:
    """Fictional no-show filling a starter slot the manager left empty."""
    return Player(
        player_id=f'{ROTALDO_ID_PREFIX}{slot}',
        position=position,
        starter_status=StarterStatus.DID_NOT_PLAY,
        name='Rotaldo',
        origin_number=slot,
    )


def build_team(raw_team: RawTeam) -> Team:
    """
    Build a Team with exactly 11 numbered starters and a numbered bench.

    Args:
        raw_team: Validated team block of a match payload

    Returns:
        Team with starters in slot order, bench in slot order and
        unlinked tactical substitutions
    """
    lines = composition_lines(raw_team.composition)
    players = normalize_players(raw_team.players)
    resolve_pitch_numbers(raw_team.pitch, players)

    by_slot = {p.origin_number: p for p in players.values() if p.origin_number is not None}

    starters = []
    for slot in range(1, STARTER_SLOTS + 1):
        player = by_slot.get(slot)
        if player is None:
            logger.debug(f'{raw_team.name or "Team"}: slot {slot} empty, filling with Rotaldo')
            player = rotaldo_placeholder(slot, lines[slot - 1])
        starters.append(player)

    bench = sorted(
        (p for p in players.values() if p.is_bench),
        key=lambda p: p.origin_number,
    )

    off_sheet = [p.player_id for p in players.values() if p.origin_number is None]
    if off_sheet:
        logger.debug(f'{raw_team.name or "Team"}: {len(off_sheet)} players not on the match sheet')

    tactical_subs = [
        TacticalSubstitution(
            starter_id=sub.starter_id,
            sub_id=sub.sub_id,
            trigger_rating=sub.rating,
        )
        for sub in raw_team.tactical_subs
    ]

    return Team(
        composition=raw_team.composition,
        starters=starters,
        bench=bench,
        tactical_subs=tactical_subs,
        name=raw_team.name,
        abbreviation=raw_team.abbr,
        user_id=raw_team.user_id,
    )
