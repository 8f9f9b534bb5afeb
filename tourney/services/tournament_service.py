from datetime import timedelta
from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError

from tourney.schemas.base import to_naive_utc
from tourney.schemas.registration_schemas import OrganizerRegistrationRead
from tourney.schemas.tournament_schemas import (
    GameMode,
    TournamentCreate,
    TournamentRead,
    TournamentStatus,
    TournamentSummary,
    TournamentUpdate,
)
from tourney.services.errors import InvalidInputError, InvalidStatusTransitionError, TournamentNotFoundError
from tourney.services.storage import Storage

logger = structlog.get_logger(__name__)

BR_DEFAULT_POSITION_POINTS = "10,6,5,4,3,2,1"
CS_DEFAULT_GAME_VARIANT = "Limited"
CS_DEFAULT_DEVICE = "Both"
REGISTRATION_CLOSES_BEFORE_START = timedelta(minutes=30)

GAME_MODE_NAMES = {
    GameMode.BR.value: "Battle Royale",
    GameMode.CS.value: "Clash Squad",
}

# Statuses only ever move forward along this order.
STATUS_ORDER = [
    TournamentStatus.OPEN.value,
    TournamentStatus.STARTING.value,
    TournamentStatus.LIVE.value,
    TournamentStatus.COMPLETED.value,
]


def normalize_tournament_input(data: TournamentCreate) -> TournamentCreate:
    """Fill the derived fields and the game-mode defaults of a new tournament.

    - ``format`` defaults to ``"<gameMode> <TYPE>"`` and ``description`` to
      ``"<Battle Royale|Clash Squad> <type> tournament"``.
    - ``registration_deadline`` defaults to 30 minutes before ``start_time``.
    - BR: ``match_count``/``kill_points``/``position_points`` fall back to 1, 1 and
      ``"10,6,5,4,3,2,1"`` when missing or zero; the CS-only fields are cleared.
    - CS: scoring is fixed to one match, no kill points and no position points;
      ``cs_game_variant`` defaults to ``"Limited"`` and ``device`` to ``"Both"``.

    Timestamps are converted to naive UTC. The input is left untouched.
    """
    values = data.model_dump()

    if not values["format"]:
        values["format"] = f"{values['game_mode']} {values['type'].upper()}"
    if not values["description"]:
        values["description"] = f"{GAME_MODE_NAMES[values['game_mode']]} {values['type']} tournament"

    values["start_time"] = to_naive_utc(values["start_time"])
    if values["registration_deadline"] is None:
        values["registration_deadline"] = values["start_time"] - REGISTRATION_CLOSES_BEFORE_START
    else:
        values["registration_deadline"] = to_naive_utc(values["registration_deadline"])

    if values["game_mode"] == GameMode.BR.value:
        values["match_count"] = values["match_count"] or 1
        values["kill_points"] = values["kill_points"] or 1
        values["position_points"] = values["position_points"] or BR_DEFAULT_POSITION_POINTS
        values["cs_game_variant"] = None
        values["device"] = None
    elif values["game_mode"] == GameMode.CS.value:
        values["match_count"] = 1
        values["kill_points"] = 0
        values["position_points"] = ""
        values["cs_game_variant"] = values["cs_game_variant"] or CS_DEFAULT_GAME_VARIANT
        values["device"] = values["device"] or CS_DEFAULT_DEVICE

    return TournamentCreate(**values)


def create_tournament(storage: Storage, payload: Dict[str, Any]) -> TournamentRead:
    try:
        data = TournamentCreate.model_validate(payload)
    except ValidationError as exc:
        logger.info("tournament_rejected", errors=exc.error_count())
        raise InvalidInputError.from_validation_error("Invalid tournament data", exc) from exc

    tournament = storage.create_tournament(normalize_tournament_input(data))
    logger.info(
        "tournament_created",
        tournament_id=tournament.id,
        organizer_id=tournament.organizer_id,
        game_mode=tournament.game_mode,
    )
    return tournament


def get_tournament(storage: Storage, tournament_id: str) -> TournamentRead:
    tournament = storage.get_tournament(tournament_id)
    if not tournament:
        raise TournamentNotFoundError()
    return tournament


def _matches_search(tournament: TournamentRead, search: str) -> bool:
    needle = search.lower()
    haystack = (tournament.name, tournament.description or "", tournament.format)
    return any(needle in text.lower() for text in haystack)


def list_tournaments(
    storage: Storage,
    status: Optional[str] = None,
    organizer_id: Optional[str] = None,
    search: Optional[str] = None,
) -> List[TournamentRead]:
    """List tournaments by organizer, else by status, else all; ``search`` narrows the result."""
    if organizer_id:
        tournaments = storage.get_tournaments_by_organizer(organizer_id)
    elif status:
        tournaments = storage.get_tournaments_by_status(status)
    else:
        tournaments = storage.get_all_tournaments()

    if search and search.strip():
        tournaments = [t for t in tournaments if _matches_search(t, search.strip())]
    return tournaments


def update_tournament(storage: Storage, tournament_id: str, update: TournamentUpdate) -> TournamentRead:
    fields = update.model_dump(exclude_unset=True)
    for key in ("start_time", "registration_deadline"):
        if fields.get(key) is not None:
            fields[key] = to_naive_utc(fields[key])

    current = get_tournament(storage, tournament_id)
    if "slots" in fields and fields["slots"] < current.registered_players:
        raise InvalidInputError("Slots cannot be lower than the number of registered teams")

    start_time = fields.get("start_time", current.start_time)
    deadline = fields.get("registration_deadline", current.registration_deadline)
    if deadline > start_time:
        raise InvalidInputError("Registration deadline must not be after the start time")

    updated = storage.update_tournament(tournament_id, fields)
    if not updated:
        raise TournamentNotFoundError()
    logger.info("tournament_updated", tournament_id=tournament_id, fields=sorted(fields))
    return updated


def change_status(storage: Storage, tournament_id: str, new_status: str) -> TournamentRead:
    tournament = get_tournament(storage, tournament_id)
    if STATUS_ORDER.index(new_status) <= STATUS_ORDER.index(tournament.status):
        raise InvalidStatusTransitionError(
            f"Cannot move tournament from '{tournament.status}' to '{new_status}'"
        )

    updated = storage.update_tournament(tournament_id, {"status": new_status})
    if not updated:
        raise TournamentNotFoundError()
    logger.info("tournament_status_changed", tournament_id=tournament_id, status=new_status)
    return updated


def get_organizer_registrations(storage: Storage, organizer_id: str) -> List[OrganizerRegistrationRead]:
    """All registrations across an organizer's tournaments, each with a tournament summary."""
    enriched = []
    for tournament in storage.get_tournaments_by_organizer(organizer_id):
        summary = TournamentSummary(
            id=tournament.id,
            name=tournament.name,
            game_mode=tournament.game_mode,
            type=tournament.type,
            prize_pool=tournament.prize_pool,
        )
        for registration in storage.get_tournament_registrations(tournament.id):
            enriched.append(OrganizerRegistrationRead(**registration.model_dump(), tournament=summary))
    return enriched
