from fastapi import Depends, HTTPException, Request, status

from tourney.core import security
from tourney.core.config import Settings
from tourney.services.payment_service import PaymentSimulator
from tourney.services.storage import Storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_payment_simulator(request: Request) -> PaymentSimulator:
    return request.app.state.payment_simulator


def get_current_user_id(
    token: str = Depends(security.oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    user_id = security.decode_access_token(token, settings.secret_key)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
