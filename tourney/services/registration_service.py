from typing import Any, Dict, List

import structlog
from pydantic import ValidationError

from tourney.schemas.payment_schemas import PaymentStatus
from tourney.schemas.registration_schemas import RegistrationCreate, RegistrationRead, RegistrationRequest
from tourney.schemas.tournament_schemas import TournamentStatus
from tourney.services.errors import (
    InvalidInputError,
    RegistrationClosedError,
    TournamentFullError,
    TournamentNotFoundError,
)
from tourney.services.storage import Storage

logger = structlog.get_logger(__name__)


def register_team(storage: Storage, tournament_id: str, payload: Dict[str, Any]) -> RegistrationRead:
    """Register a team for a tournament.

    Checks run in this order: the tournament exists, it has a free slot, it is
    open, then the payload is valid. The registration fee is the tournament's
    slot price at this moment and payment starts as pending. The storage layer
    claims the slot atomically, so a concurrent registration that passed the
    same pre-checks can still end in TournamentFullError.
    """
    tournament = storage.get_tournament(tournament_id)
    if not tournament:
        raise TournamentNotFoundError()

    if tournament.registered_players >= tournament.slots:
        logger.info("registration_rejected", tournament_id=tournament_id, reason="full")
        raise TournamentFullError()

    if tournament.status != TournamentStatus.OPEN.value:
        logger.info("registration_rejected", tournament_id=tournament_id, reason="closed", status=tournament.status)
        raise RegistrationClosedError()

    try:
        request = RegistrationRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInputError.from_validation_error("Invalid registration data", exc) from exc

    registration = storage.create_tournament_registration(
        RegistrationCreate(
            tournament_id=tournament.id,
            user_id=request.user_id,
            team_name=request.team_name,
            igl_real_name=request.igl_real_name,
            igl_ingame_id=request.igl_ingame_id,
            player_names=request.player_names,
            registration_fee=tournament.slot_price,
            payment_status=PaymentStatus.PENDING,
            payment_method=request.payment_method,
        )
    )
    logger.info(
        "registration_created",
        registration_id=registration.id,
        tournament_id=tournament.id,
        user_id=registration.user_id,
        fee=registration.registration_fee,
    )
    return registration


def list_tournament_registrations(storage: Storage, tournament_id: str) -> List[RegistrationRead]:
    return storage.get_tournament_registrations(tournament_id)


def list_user_registrations(storage: Storage, user_id: str) -> List[RegistrationRead]:
    return storage.get_user_tournament_registrations(user_id)
