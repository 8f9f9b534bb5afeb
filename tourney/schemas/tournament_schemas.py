from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, to_naive_utc


class GameMode(str, Enum):
    BR = "BR"
    CS = "CS"


class TournamentType(str, Enum):
    SOLO = "solo"
    DUO = "duo"
    SQUAD = "squad"


class TournamentStatus(str, Enum):
    OPEN = "open"
    STARTING = "starting"
    LIVE = "live"
    COMPLETED = "completed"


class TournamentCreate(CamelModel):
    name: str = Field(min_length=3, max_length=100)
    description: Optional[str] = None
    game_mode: GameMode
    type: TournamentType
    format: Optional[str] = None
    prize_pool: int = Field(ge=0)
    slot_price: int = Field(ge=0)
    slots: int = Field(gt=0)
    match_count: Optional[int] = Field(default=None, ge=0, le=10)
    kill_points: Optional[int] = Field(default=None, ge=0, le=10)
    position_points: Optional[str] = None
    rules: Optional[str] = None
    status: TournamentStatus = TournamentStatus.OPEN
    start_time: datetime
    registration_deadline: Optional[datetime] = None
    organizer_id: str = Field(min_length=1)
    cs_game_variant: Optional[str] = None
    device: Optional[str] = None
    is_promoted: bool = False
    promotion_paid: bool = False

    @field_validator("registration_deadline")
    @classmethod
    def deadline_not_after_start(cls, v, info):
        start_time = info.data.get("start_time")
        if v and start_time and to_naive_utc(v) > to_naive_utc(start_time):
            raise ValueError("Registration deadline must not be after the start time")
        return v

    @field_validator("position_points")
    @classmethod
    def position_points_are_numbers(cls, v):
        if v and not all(part.strip().isdigit() for part in v.split(",")):
            raise ValueError("Position points must be a comma separated list of numbers")
        return v


class TournamentUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    description: Optional[str] = None
    prize_pool: Optional[int] = Field(default=None, ge=0)
    slot_price: Optional[int] = Field(default=None, ge=0)
    slots: Optional[int] = Field(default=None, gt=0)
    rules: Optional[str] = None
    start_time: Optional[datetime] = None
    registration_deadline: Optional[datetime] = None
    is_promoted: Optional[bool] = None
    promotion_paid: Optional[bool] = None

    # Omitted means "leave unchanged"; an explicit null would blank a required column.
    @field_validator(
        "name",
        "prize_pool",
        "slot_price",
        "slots",
        "start_time",
        "registration_deadline",
        "is_promoted",
        "promotion_paid",
        mode="before",
    )
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class StatusUpdate(CamelModel):
    status: TournamentStatus


class TournamentRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    game_mode: GameMode
    type: TournamentType
    format: str
    prize_pool: int
    slot_price: int
    slots: int
    registered_players: int = 0
    match_count: int = 1
    kill_points: int = 1
    position_points: str = "10,6,5,4,3,2,1"
    rules: Optional[str] = None
    status: TournamentStatus = TournamentStatus.OPEN
    start_time: datetime
    registration_deadline: datetime
    organizer_id: str
    created_at: datetime
    cs_game_variant: Optional[str] = None
    device: Optional[str] = None
    is_promoted: bool = False
    promotion_paid: bool = False


class TournamentSummary(CamelModel):
    """Nested tournament info attached to organizer registration listings."""

    id: str
    name: str
    game_mode: GameMode
    type: TournamentType
    prize_pool: int
