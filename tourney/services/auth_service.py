from datetime import timedelta

import structlog

from tourney.core import security
from tourney.schemas.user_schemas import NewUser, Token, UserCreate, UserRead, UserRecord, UserRole
from tourney.services.errors import DuplicateUsernameError, InvalidCredentialsError, UserNotFoundError
from tourney.services.storage import Storage

logger = structlog.get_logger(__name__)


def sign_up(storage: Storage, user_in: UserCreate) -> UserRecord:
    if storage.get_user_by_username(user_in.username):
        raise DuplicateUsernameError()

    user = storage.create_user(
        NewUser(username=user_in.username, password=security.get_password_hash(user_in.password))
    )
    logger.info("user_signed_up", user_id=user.id, username=user.username)
    return user


def authenticate(storage: Storage, username: str, password: str) -> UserRecord:
    user = storage.get_user_by_username(username)
    if not user or not security.verify_password(password, user.password):
        raise InvalidCredentialsError()
    return user


def sign_in(storage: Storage, username: str, password: str, secret_key: str, expire_minutes: int) -> Token:
    user = authenticate(storage, username, password)
    access_token = security.create_access_token(
        data={"sub": user.id},
        secret_key=secret_key,
        expires_delta=timedelta(minutes=expire_minutes),
    )
    logger.info("user_signed_in", user_id=user.id)
    return Token(access_token=access_token, user=UserRead(id=user.id, username=user.username, role=user.role))


def get_user(storage: Storage, user_id: str) -> UserRecord:
    user = storage.get_user(user_id)
    if not user:
        raise UserNotFoundError()
    return user


def select_role(storage: Storage, user_id: str, role: UserRole) -> UserRecord:
    user = storage.update_user_role(user_id, role)
    if not user:
        raise UserNotFoundError()
    logger.info("user_role_selected", user_id=user_id, role=user.role)
    return user
