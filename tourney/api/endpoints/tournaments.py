from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from tourney.api.dependencies import get_storage
from tourney.api.errors import internal_errors
from tourney.schemas.registration_schemas import RegistrationRead
from tourney.schemas.tournament_schemas import StatusUpdate, TournamentRead, TournamentUpdate
from tourney.services import registration_service, tournament_service
from tourney.services.storage import Storage

router = APIRouter()


@router.get("", response_model=List[TournamentRead], summary="List tournaments")
async def list_tournaments(
    status_filter: Optional[str] = Query(None, alias="status"),
    organizer_id: Optional[str] = Query(None, alias="organizerId"),
    search: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    """
    Lists tournaments. `organizerId` takes precedence over `status`; without
    either every tournament is returned. `search` narrows the list by name,
    description or format.
    """
    with internal_errors("Failed to fetch tournaments"):
        return tournament_service.list_tournaments(
            storage, status=status_filter, organizer_id=organizer_id, search=search
        )


@router.get("/{tournament_id}", response_model=TournamentRead)
async def get_tournament(tournament_id: str, storage: Storage = Depends(get_storage)):
    with internal_errors("Failed to fetch tournament"):
        return tournament_service.get_tournament(storage, tournament_id)


@router.post("", response_model=TournamentRead, status_code=status.HTTP_201_CREATED, summary="Create tournament")
async def create_tournament(
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
):
    """
    Creates a tournament. `format`, `description` and `registrationDeadline`
    are derived when omitted, and scoring fields get the defaults of the game
    mode (BR or CS).
    """
    with internal_errors("Failed to create tournament"):
        return tournament_service.create_tournament(storage, payload)


@router.patch("/{tournament_id}", response_model=TournamentRead)
async def update_tournament(
    tournament_id: str,
    tournament_in: TournamentUpdate,
    storage: Storage = Depends(get_storage),
):
    with internal_errors("Failed to update tournament"):
        return tournament_service.update_tournament(storage, tournament_id, tournament_in)


@router.patch("/{tournament_id}/status", response_model=TournamentRead)
async def update_tournament_status(
    tournament_id: str,
    status_in: StatusUpdate,
    storage: Storage = Depends(get_storage),
):
    """Moves a tournament forward: open → starting → live → completed."""
    with internal_errors("Failed to update tournament status"):
        return tournament_service.change_status(storage, tournament_id, status_in.status)


@router.post(
    "/{tournament_id}/register",
    response_model=RegistrationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a team",
)
async def register_for_tournament(
    tournament_id: str,
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
):
    """
    Registers a team. Fails with 404 for an unknown tournament, and with 400
    when it is full, not open, or the team details are invalid.
    """
    with internal_errors("Failed to register for tournament"):
        return registration_service.register_team(storage, tournament_id, payload)


@router.get("/{tournament_id}/registrations", response_model=List[RegistrationRead])
async def list_tournament_registrations(tournament_id: str, storage: Storage = Depends(get_storage)):
    with internal_errors("Failed to fetch tournament registrations"):
        return registration_service.list_tournament_registrations(storage, tournament_id)
