from datetime import timedelta

import structlog

from tourney.core.security import get_password_hash
from tourney.schemas.base import utcnow
from tourney.schemas.tournament_schemas import TournamentCreate
from tourney.schemas.user_schemas import NewUser, UserRole
from tourney.services.storage import Storage
from tourney.services.tournament_service import normalize_tournament_input

logger = structlog.get_logger(__name__)

SAMPLE_ORGANIZER = "admin"


def _sample_tournaments():
    now = utcnow()
    return [
        dict(
            name="Free Fire Pro League",
            description="Professional championship tournament for elite players",
            game_mode="BR",
            type="squad",
            prize_pool=25000,
            slot_price=50,
            slots=800,
            start_time=now + timedelta(hours=4, minutes=30),
            registration_deadline=now + timedelta(hours=4),
        ),
        dict(
            name="Clash Royale",
            description="Solo tournament for individual champions",
            game_mode="BR",
            type="solo",
            prize_pool=15000,
            slot_price=30,
            slots=1000,
            status="starting",
            start_time=now + timedelta(minutes=45),
            registration_deadline=now + timedelta(minutes=30),
        ),
        dict(
            name="Weekend Warriors",
            description="Weekend duo tournament for casual competitors",
            game_mode="CS",
            type="duo",
            prize_pool=40000,
            slot_price=80,
            slots=600,
            start_time=now + timedelta(hours=2, minutes=15),
            registration_deadline=now + timedelta(hours=2),
        ),
    ]


def seed_sample_data(storage: Storage) -> int:
    """Add the demo organizer and tournaments to an empty store. Returns the number of tournaments added."""
    if storage.get_all_tournaments():
        return 0

    organizer = storage.get_user_by_username(SAMPLE_ORGANIZER)
    if not organizer:
        organizer = storage.create_user(
            NewUser(
                username=SAMPLE_ORGANIZER,
                password=get_password_hash("admin123"),
                role=UserRole.ORGANIZER,
            )
        )

    tournaments = _sample_tournaments()
    for values in tournaments:
        storage.create_tournament(normalize_tournament_input(TournamentCreate(**values, organizer_id=organizer.id)))
    logger.info("sample_data_seeded", tournaments=len(tournaments))
    return len(tournaments)
