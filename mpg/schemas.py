"""Pydantic schemas for match payload and engine configuration validation."""

from pydantic import BaseModel, Field, field_validator

from .constants import (
    COMPOSITIONS,
    DEFAULT_RATING,
    FIRST_STEP_PENALTY,
    HOME_BONUS,
    NEXT_STEP_PENALTY,
    POSITION_CODES,
    ROTALDO_RATING,
    SUBSTITUTION_MANDATORY,
    SUBSTITUTION_TACTICAL,
)


class RawPlayer(BaseModel):
    """Player record as supplied by the league API."""

    player_id: str | None = Field(None, alias='playerId')
    id: str | None = None
    position: int
    name: str | None = None
    rating: float | None = None
    bonus_rating: float = Field(default=0.0, alias='bonusRating')
    status: int | None = None
    composition_status: int | None = Field(None, alias='compositionStatus')
    goals: int = Field(default=0, ge=0)
    own_goals: int = Field(default=0, alias='ownGoals', ge=0)
    mpg_goals: int = Field(default=0, alias='mpgGoals', ge=0)

    @field_validator('player_id', 'id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Numeric ids are accepted and kept as strings."""
        if v is None or v == '':
            return None
        return str(v)

    @field_validator('position', mode='before')
    @classmethod
    def validate_position(cls, v):
        """Map numeric or letter position codes to a line index."""
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError(f'Invalid position: {v!r}')
        key = v
        if isinstance(v, str):
            key = int(v) if v.isdigit() else v.upper()
        if key not in POSITION_CODES:
            raise ValueError(f'Invalid position: {v}')
        return POSITION_CODES[key]

    @field_validator('bonus_rating', 'goals', 'own_goals', 'mpg_goals', mode='before')
    @classmethod
    def none_to_zero(cls, v):
        return 0 if v is None else v

    @property
    def identity(self) -> str | None:
        """External id, falling back to the internal one."""
        return self.player_id or self.id

    class Config:
        extra = 'allow'
        populate_by_name = True


class PitchSubstitution(BaseModel):
    """Substitution marker attached to an on-pitch slot."""

    type: str = Field(default=SUBSTITUTION_TACTICAL)
    starter_id: str | None = Field(None, alias='starterId')

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        if v not in (SUBSTITUTION_MANDATORY, SUBSTITUTION_TACTICAL):
            raise ValueError(f'Invalid substitution type: {v}')
        return v

    @field_validator('starter_id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        if v is None or v == '':
            return None
        return str(v)

    class Config:
        extra = 'allow'
        populate_by_name = True


class PitchSlot(BaseModel):
    """Occupant of one formation slot."""

    player_id: str = Field(..., alias='playerId', min_length=1)
    substitution: PitchSubstitution | None = None

    @field_validator('player_id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return v if v is None else str(v)

    @property
    def is_mandatory(self) -> bool:
        return self.substitution is not None and self.substitution.type == SUBSTITUTION_MANDATORY

    @property
    def starter_id(self) -> str | None:
        return self.substitution.starter_id if self.substitution else None

    class Config:
        extra = 'allow'
        populate_by_name = True


class RawTacticalSub(BaseModel):
    """Tactical substitution declared by the manager."""

    starter_id: str = Field(..., alias='starterId')
    sub_id: str = Field(..., alias='subId')
    rating: float = Field(..., ge=0, le=10)

    @field_validator('starter_id', 'sub_id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return v if v is None else str(v)

    class Config:
        extra = 'allow'
        populate_by_name = True


class RawTeam(BaseModel):
    """One team block of a match payload."""

    composition: str
    players: list[RawPlayer]
    pitch: dict[int, PitchSlot]
    tactical_subs: list[RawTacticalSub] = Field(default_factory=list, alias='tacticalSubs')
    name: str = ''
    abbr: str = ''
    user_id: str = Field(default='', alias='userId')

    @field_validator('composition', mode='before')
    @classmethod
    def validate_composition(cls, v):
        """Ensure the formation is one the league accepts."""
        code = str(v)
        if code not in COMPOSITIONS:
            raise ValueError(f'Invalid composition: {v}')
        return code

    @field_validator('pitch')
    @classmethod
    def validate_slots(cls, v):
        """Ensure slot numbers are positive."""
        for slot in v:
            if slot < 1:
                raise ValueError(f'Invalid slot number: {slot}')
        return v

    class Config:
        extra = 'allow'
        populate_by_name = True


class MatchPayload(BaseModel):
    """Complete match payload: two team blocks plus match metadata."""

    id: str = ''
    live: bool = False
    date: str | None = None
    match_day: int | None = Field(None, alias='matchDay', ge=1)
    home: RawTeam
    away: RawTeam

    class Config:
        extra = 'allow'
        populate_by_name = True


class EngineConfig(BaseModel):
    """Tunable constants of the virtualization engine."""

    rotaldo_rating: float = Field(default=ROTALDO_RATING, ge=0, le=10)
    default_rating: float = Field(default=DEFAULT_RATING, ge=0, le=10)
    home_bonus: float = Field(default=HOME_BONUS, ge=0, le=1)
    first_step_penalty: float = Field(default=FIRST_STEP_PENALTY, ge=0)
    next_step_penalty: float = Field(default=NEXT_STEP_PENALTY, ge=0)

    class Config:
        extra = 'forbid'
