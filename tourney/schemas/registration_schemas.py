from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from .payment_schemas import PaymentMethod, PaymentStatus
from .tournament_schemas import TournamentSummary


class RegistrationRequest(CamelModel):
    """Body of a team registration as sent by the client."""

    user_id: str = Field(min_length=1)
    team_name: str = Field(min_length=3, max_length=50)
    igl_real_name: str = Field(min_length=2, max_length=50)
    igl_ingame_id: str = Field(min_length=3, max_length=30)
    player_names: Optional[List[str]] = None
    payment_method: Optional[PaymentMethod] = None


class RegistrationCreate(CamelModel):
    tournament_id: str
    user_id: str
    team_name: Optional[str] = None
    igl_real_name: str
    igl_ingame_id: str
    player_names: Optional[List[str]] = None
    registration_fee: int = Field(ge=0)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None


class RegistrationRead(RegistrationCreate):
    id: str
    registered_at: datetime


class OrganizerRegistrationRead(RegistrationRead):
    tournament: TournamentSummary
