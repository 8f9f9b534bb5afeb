from typing import List

from fastapi import APIRouter, Depends

from tourney.api.dependencies import get_storage
from tourney.api.errors import internal_errors
from tourney.schemas.registration_schemas import RegistrationRead
from tourney.schemas.user_schemas import RoleUpdate, UserRead
from tourney.services import auth_service, registration_service
from tourney.services.storage import Storage

router = APIRouter()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    with internal_errors("Failed to fetch user"):
        return auth_service.get_user(storage, user_id)


@router.patch("/{user_id}/role", response_model=UserRead)
async def select_role(user_id: str, role_in: RoleUpdate, storage: Storage = Depends(get_storage)):
    with internal_errors("Failed to set role"):
        return auth_service.select_role(storage, user_id, role_in.role)


@router.get("/{user_id}/registrations", response_model=List[RegistrationRead])
async def list_user_registrations(user_id: str, storage: Storage = Depends(get_storage)):
    with internal_errors("Failed to fetch user registrations"):
        return registration_service.list_user_registrations(storage, user_id)
