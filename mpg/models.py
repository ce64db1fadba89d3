"""Data models for the MPG match engine."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional

from .constants import STARTER_SLOTS


class Position(IntEnum):
    """Pitch line, numbered from the keeper outwards."""
    KEEPER = 1
    DEFENSE = 2
    MIDFIELD = 3
    FORWARD = 4


class StarterStatus(IntEnum):
    """Whether a player took part in the real match."""
    DID_NOT_PLAY = -1
    PLAYED = 1
    QUESTIONABLE = 2


class GoalType(Enum):
    GOAL = 'goal'
    SIMULATED_GOAL = 'mpg_goal'
    OWN_GOAL = 'own_goal'


class GoalPhase(Enum):
    STARTED = 'started'
    SUBSTITUTED_IN = 'substituted_in'
    SUBSTITUTED_OUT = 'substituted_out'


@dataclass
class PlayerGoals:
    """Goal counts for one player in one match."""
    scored: int = 0
    mpg_awarded: int = 0  # 0 or 1
    own_goals: int = 0


@dataclass(eq=False)
class Player:
    """One roster member for one match."""
    player_id: str
    position: Position
    rating: Optional[float] = None
    bonus_rating: float = 0.0
    starter_status: StarterStatus = StarterStatus.PLAYED
    goals: PlayerGoals = field(default_factory=PlayerGoals)
    name: str = ''
    origin_number: Optional[int] = None  # nominal formation slot
    number: Optional[int] = None  # slot physically occupied

    # Set once by the substitution resolver
    virtual_rating: Optional[float] = None
    virtual_bonus: float = 0.0
    virtual_substitute: Optional['Player'] = None
    is_substitute_for: bool = False

    @property
    def is_starter(self) -> bool:
        return self.origin_number is not None and self.origin_number <= STARTER_SLOTS

    @property
    def is_bench(self) -> bool:
        return self.origin_number is not None and self.origin_number > STARTER_SLOTS

    @property
    def is_rotaldo(self) -> bool:
        """True if the player counts as a no-show for this match."""
        if self.starter_status == StarterStatus.DID_NOT_PLAY:
            return True
        return self.starter_status == StarterStatus.QUESTIONABLE and self.rating is None

    @property
    def virtual_total(self) -> float:
        return (self.virtual_rating or 0.0) + self.virtual_bonus

    @property
    def effective_total(self) -> float:
        """Score of whoever holds this player's slot after substitution."""
        if self.virtual_substitute is not None:
            return self.virtual_substitute.virtual_total
        return self.virtual_total


@dataclass
class TacticalSubstitution:
    """Manager-declared swap that applies if the starter rates below the trigger."""
    starter_id: str
    sub_id: str
    trigger_rating: float
    substitute: Optional[Player] = None


@dataclass
class GoalEvent:
    """A goal credited to a team, tagged with how the scorer got on the pitch."""
    type: GoalType
    player: Player
    phase: GoalPhase = GoalPhase.STARTED


@dataclass(eq=False)
class Team:
    """One side of a match, after lineup normalization."""
    composition: str
    starters: List[Player] = field(default_factory=list)  # slot order, 11 entries
    bench: List[Player] = field(default_factory=list)
    tactical_subs: List[TacticalSubstitution] = field(default_factory=list)
    goals: List[GoalEvent] = field(default_factory=list)
    score: Optional[int] = None  # only set while the match is live
    line_scores: Dict[Position, float] = field(default_factory=dict)
    name: str = ''
    abbreviation: str = ''
    user_id: str = ''

    @property
    def players(self) -> List[Player]:
        """Starters followed by bench, the roster order used for resolution."""
        return self.starters + self.bench


@dataclass
class Match:
    """A league match between two fantasy teams."""
    home: Team
    away: Team
    match_id: str = ''
    live: bool = False
    date: Optional[str] = None
    match_day: Optional[int] = None
