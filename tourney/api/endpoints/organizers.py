from typing import List

from fastapi import APIRouter, Depends

from tourney.api.dependencies import get_storage
from tourney.api.errors import internal_errors
from tourney.schemas.registration_schemas import OrganizerRegistrationRead
from tourney.services import tournament_service
from tourney.services.storage import Storage

router = APIRouter()


@router.get("/{organizer_id}/registrations", response_model=List[OrganizerRegistrationRead])
async def list_organizer_registrations(organizer_id: str, storage: Storage = Depends(get_storage)):
    """Every registration across the organizer's tournaments, with a short tournament summary each."""
    with internal_errors("Failed to fetch organizer registrations"):
        return tournament_service.get_organizer_registrations(storage, organizer_id)
