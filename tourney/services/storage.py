import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from tourney.core.config import Settings
from tourney.schemas.base import utcnow
from tourney.schemas.payment_schemas import PaymentMethod, PaymentStatus
from tourney.schemas.registration_schemas import RegistrationCreate, RegistrationRead
from tourney.schemas.tournament_schemas import TournamentCreate, TournamentRead, TournamentStatus
from tourney.schemas.user_schemas import NewUser, UserRecord, UserRole
from tourney.services.errors import DuplicateUsernameError, TournamentFullError, TournamentNotFoundError


def normalize_username(username: str) -> str:
    return username.strip().lower()


class Storage(ABC):
    """Persistence contract shared by the in-memory and the SQL backends.

    Reads return ``None`` (or an empty list) for unknown ids instead of raising.
    Records handed out are copies; mutating them never changes stored state.
    """

    name = "abstract"

    # --- users ---

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create_user(self, data: NewUser) -> UserRecord:
        """Store a user under a fresh id; raises DuplicateUsernameError on a taken username."""

    @abstractmethod
    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserRecord]: ...

    # --- tournaments ---

    @abstractmethod
    def get_tournament(self, tournament_id: str) -> Optional[TournamentRead]: ...

    @abstractmethod
    def get_all_tournaments(self) -> List[TournamentRead]: ...

    @abstractmethod
    def get_tournaments_by_status(self, status: str) -> List[TournamentRead]: ...

    @abstractmethod
    def get_tournaments_by_organizer(self, organizer_id: str) -> List[TournamentRead]: ...

    @abstractmethod
    def create_tournament(self, data: TournamentCreate) -> TournamentRead:
        """Store a tournament with ``registered_players=0``, ``status="open"`` when unset and ``created_at=now``."""

    @abstractmethod
    def update_tournament(self, tournament_id: str, fields: Dict[str, Any]) -> Optional[TournamentRead]:
        """Merge ``fields`` (snake_case attribute names) into the tournament."""

    # --- registrations ---

    @abstractmethod
    def get_registration(self, registration_id: str) -> Optional[RegistrationRead]: ...

    @abstractmethod
    def get_tournament_registrations(self, tournament_id: str) -> List[RegistrationRead]: ...

    @abstractmethod
    def create_tournament_registration(self, data: RegistrationCreate) -> RegistrationRead:
        """Insert a registration and increment the parent tournament's ``registered_players``.

        The capacity check and the increment happen as one atomic step: the call raises
        TournamentFullError instead of pushing ``registered_players`` past ``slots``, and
        TournamentNotFoundError when the tournament does not exist. No row is written in
        either case.
        """

    @abstractmethod
    def get_user_tournament_registrations(self, user_id: str) -> List[RegistrationRead]: ...

    @abstractmethod
    def update_registration_payment(
        self,
        registration_id: str,
        status: PaymentStatus,
        method: Optional[PaymentMethod] = None,
    ) -> Optional[RegistrationRead]: ...


class MemoryStorage(Storage):
    name = "memory"

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._tournaments: Dict[str, TournamentRead] = {}
        self._registrations: Dict[str, RegistrationRead] = {}
        self._lock = threading.RLock()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        username = normalize_username(username)
        user = next((u for u in self._users.values() if u.username == username), None)
        return user.model_copy() if user else None

    def create_user(self, data: NewUser) -> UserRecord:
        with self._lock:
            username = normalize_username(data.username)
            if any(u.username == username for u in self._users.values()):
                raise DuplicateUsernameError()
            user = UserRecord(**{**data.model_dump(), "username": username}, id=str(uuid.uuid4()))
            self._users[user.id] = user
            return user.model_copy()

    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            if not user:
                return None
            updated = user.model_copy(update={"role": UserRole(role).value})
            self._users[user_id] = updated
            return updated.model_copy()

    def get_tournament(self, tournament_id: str) -> Optional[TournamentRead]:
        tournament = self._tournaments.get(tournament_id)
        return tournament.model_copy(deep=True) if tournament else None

    def get_all_tournaments(self) -> List[TournamentRead]:
        return [t.model_copy(deep=True) for t in self._tournaments.values()]

    def get_tournaments_by_status(self, status: str) -> List[TournamentRead]:
        return [t.model_copy(deep=True) for t in self._tournaments.values() if t.status == status]

    def get_tournaments_by_organizer(self, organizer_id: str) -> List[TournamentRead]:
        return [t.model_copy(deep=True) for t in self._tournaments.values() if t.organizer_id == organizer_id]

    def create_tournament(self, data: TournamentCreate) -> TournamentRead:
        values = data.model_dump(exclude_none=True)
        values.setdefault("status", TournamentStatus.OPEN.value)
        tournament = TournamentRead(
            **values,
            id=str(uuid.uuid4()),
            registered_players=0,
            created_at=utcnow(),
        )
        with self._lock:
            self._tournaments[tournament.id] = tournament
        return tournament.model_copy(deep=True)

    def update_tournament(self, tournament_id: str, fields: Dict[str, Any]) -> Optional[TournamentRead]:
        with self._lock:
            tournament = self._tournaments.get(tournament_id)
            if not tournament:
                return None
            updated = tournament.model_copy(update=fields)
            self._tournaments[tournament_id] = updated
            return updated.model_copy(deep=True)

    def get_registration(self, registration_id: str) -> Optional[RegistrationRead]:
        registration = self._registrations.get(registration_id)
        return registration.model_copy(deep=True) if registration else None

    def get_tournament_registrations(self, tournament_id: str) -> List[RegistrationRead]:
        return [
            r.model_copy(deep=True) for r in self._registrations.values() if r.tournament_id == tournament_id
        ]

    def create_tournament_registration(self, data: RegistrationCreate) -> RegistrationRead:
        with self._lock:
            tournament = self._tournaments.get(data.tournament_id)
            if not tournament:
                raise TournamentNotFoundError()
            if tournament.registered_players >= tournament.slots:
                raise TournamentFullError()

            registration = RegistrationRead(
                **data.model_dump(),
                id=str(uuid.uuid4()),
                registered_at=utcnow(),
            )
            self._registrations[registration.id] = registration
            self._tournaments[tournament.id] = tournament.model_copy(
                update={"registered_players": tournament.registered_players + 1}
            )
            return registration.model_copy(deep=True)

    def get_user_tournament_registrations(self, user_id: str) -> List[RegistrationRead]:
        return [r.model_copy(deep=True) for r in self._registrations.values() if r.user_id == user_id]

    def update_registration_payment(
        self,
        registration_id: str,
        status: PaymentStatus,
        method: Optional[PaymentMethod] = None,
    ) -> Optional[RegistrationRead]:
        with self._lock:
            registration = self._registrations.get(registration_id)
            if not registration:
                return None
            update = {"payment_status": PaymentStatus(status).value}
            if method is not None:
                update["payment_method"] = PaymentMethod(method).value
            updated = registration.model_copy(update=update)
            self._registrations[registration_id] = updated
            return updated.model_copy(deep=True)


def build_storage(settings: Settings) -> Storage:
    """Pick the storage backend named by STORAGE_BACKEND."""
    if settings.storage_backend == "database":
        from tourney.services.sql_storage import SqlStorage

        return SqlStorage(settings.database_url)
    return MemoryStorage()
