import uuid
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tourney.core.database import Base, create_db_engine, create_session_factory
from tourney.models import Tournament, TournamentRegistration, User
from tourney.schemas.base import utcnow
from tourney.schemas.payment_schemas import PaymentMethod, PaymentStatus
from tourney.schemas.registration_schemas import RegistrationCreate, RegistrationRead
from tourney.schemas.tournament_schemas import TournamentCreate, TournamentRead, TournamentStatus
from tourney.schemas.user_schemas import NewUser, UserRecord, UserRole
from tourney.services.errors import DuplicateUsernameError, TournamentFullError, TournamentNotFoundError
from tourney.services.storage import Storage, normalize_username

logger = structlog.get_logger(__name__)


class SqlStorage(Storage):
    """Storage backed by a relational database through the SQLAlchemy ORM.

    Every operation runs in its own session and commits before returning. Tables are
    created on construction when missing.
    """

    name = "database"

    def __init__(self, database_url: str):
        self._engine = create_db_engine(database_url)
        self._session_factory = create_session_factory(self._engine)
        Base.metadata.create_all(bind=self._engine)

    def dispose(self) -> None:
        self._engine.dispose()

    def _session(self) -> Session:
        return self._session_factory()

    # --- users ---

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._session() as db:
            user = db.get(User, user_id)
            return UserRecord.model_validate(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._session() as db:
            user = db.query(User).filter(User.username == normalize_username(username)).first()
            return UserRecord.model_validate(user) if user else None

    def create_user(self, data: NewUser) -> UserRecord:
        db_user = User(
            id=str(uuid.uuid4()),
            username=normalize_username(data.username),
            password=data.password,
            role=data.role,
        )
        with self._session() as db:
            db.add(db_user)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise DuplicateUsernameError() from exc
            return UserRecord.model_validate(db_user)

    def update_user_role(self, user_id: str, role: UserRole) -> Optional[UserRecord]:
        with self._session() as db:
            user = db.get(User, user_id)
            if not user:
                return None
            user.role = UserRole(role).value
            db.commit()
            return UserRecord.model_validate(user)

    # --- tournaments ---

    def get_tournament(self, tournament_id: str) -> Optional[TournamentRead]:
        with self._session() as db:
            tournament = db.get(Tournament, tournament_id)
            return TournamentRead.model_validate(tournament) if tournament else None

    def _list_tournaments(self, *criteria) -> List[TournamentRead]:
        with self._session() as db:
            rows = db.scalars(
                select(Tournament).where(*criteria).order_by(Tournament.created_at, Tournament.id)
            ).all()
            return [TournamentRead.model_validate(row) for row in rows]

    def get_all_tournaments(self) -> List[TournamentRead]:
        return self._list_tournaments()

    def get_tournaments_by_status(self, status: str) -> List[TournamentRead]:
        return self._list_tournaments(Tournament.status == status)

    def get_tournaments_by_organizer(self, organizer_id: str) -> List[TournamentRead]:
        return self._list_tournaments(Tournament.organizer_id == organizer_id)

    def create_tournament(self, data: TournamentCreate) -> TournamentRead:
        values = data.model_dump(exclude_none=True)
        values.setdefault("status", TournamentStatus.OPEN.value)
        db_tournament = Tournament(
            **values,
            id=str(uuid.uuid4()),
            registered_players=0,
            created_at=utcnow(),
        )
        with self._session() as db:
            db.add(db_tournament)
            db.commit()
            db.refresh(db_tournament)
            return TournamentRead.model_validate(db_tournament)

    def update_tournament(self, tournament_id: str, fields: Dict[str, Any]) -> Optional[TournamentRead]:
        with self._session() as db:
            db_tournament = db.get(Tournament, tournament_id)
            if not db_tournament:
                return None
            for key, value in fields.items():
                setattr(db_tournament, key, value)
            db.commit()
            db.refresh(db_tournament)
            return TournamentRead.model_validate(db_tournament)

    # --- registrations ---

    def get_registration(self, registration_id: str) -> Optional[RegistrationRead]:
        with self._session() as db:
            registration = db.get(TournamentRegistration, registration_id)
            return RegistrationRead.model_validate(registration) if registration else None

    def _list_registrations(self, *criteria) -> List[RegistrationRead]:
        with self._session() as db:
            rows = db.scalars(
                select(TournamentRegistration)
                .where(*criteria)
                .order_by(TournamentRegistration.registered_at, TournamentRegistration.id)
            ).all()
            return [RegistrationRead.model_validate(row) for row in rows]

    def get_tournament_registrations(self, tournament_id: str) -> List[RegistrationRead]:
        return self._list_registrations(TournamentRegistration.tournament_id == tournament_id)

    def get_user_tournament_registrations(self, user_id: str) -> List[RegistrationRead]:
        return self._list_registrations(TournamentRegistration.user_id == user_id)

    def create_tournament_registration(self, data: RegistrationCreate) -> RegistrationRead:
        with self._session() as db:
            # Claim a slot and insert in one transaction; the WHERE clause is the capacity check.
            result = db.execute(
                update(Tournament)
                .where(
                    Tournament.id == data.tournament_id,
                    Tournament.registered_players < Tournament.slots,
                )
                .values(registered_players=Tournament.registered_players + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                if db.get(Tournament, data.tournament_id) is None:
                    raise TournamentNotFoundError()
                logger.info("registration_slot_claim_failed", tournament_id=data.tournament_id)
                raise TournamentFullError()

            db_registration = TournamentRegistration(
                **data.model_dump(),
                id=str(uuid.uuid4()),
                registered_at=utcnow(),
            )
            db.add(db_registration)
            db.commit()
            return RegistrationRead.model_validate(db_registration)

    def update_registration_payment(
        self,
        registration_id: str,
        status: PaymentStatus,
        method: Optional[PaymentMethod] = None,
    ) -> Optional[RegistrationRead]:
        with self._session() as db:
            db_registration = db.get(TournamentRegistration, registration_id)
            if not db_registration:
                return None
            db_registration.payment_status = PaymentStatus(status).value
            if method is not None:
                db_registration.payment_method = PaymentMethod(method).value
            db.commit()
            return RegistrationRead.model_validate(db_registration)
