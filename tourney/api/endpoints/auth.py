from fastapi import APIRouter, Depends, status

from tourney.api.dependencies import get_current_user_id, get_settings, get_storage
from tourney.api.errors import internal_errors
from tourney.core.config import Settings
from tourney.schemas.user_schemas import SignInRequest, Token, UserCreate, UserRead
from tourney.services import auth_service
from tourney.services.storage import Storage

router = APIRouter()


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def sign_up(user_in: UserCreate, storage: Storage = Depends(get_storage)):
    """Creates an account. Usernames are stored lower-cased; the password is stored hashed."""
    with internal_errors("Failed to create account"):
        return auth_service.sign_up(storage, user_in)


@router.post("/signin", response_model=Token)
async def sign_in(
    credentials: SignInRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    with internal_errors("Failed to sign in"):
        return auth_service.sign_in(
            storage,
            credentials.username,
            credentials.password,
            secret_key=settings.secret_key,
            expire_minutes=settings.access_token_expire_minutes,
        )


@router.get("/me", response_model=UserRead)
async def read_current_user(
    user_id: str = Depends(get_current_user_id),
    storage: Storage = Depends(get_storage),
):
    with internal_errors("Failed to fetch user"):
        return auth_service.get_user(storage, user_id)
