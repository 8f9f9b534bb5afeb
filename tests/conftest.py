from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from pydantic.alias_generators import to_camel

from tourney.core.config import Settings
from tourney.main import create_app
from tourney.services import tournament_service
from tourney.services.payment_service import PaymentSimulator
from tourney.services.sql_storage import SqlStorage
from tourney.services.storage import MemoryStorage


def _camelize(overrides):
    # Accept both snake_case and camelCase override keys.
    return {(to_camel(key) if "_" in key else key): value for key, value in overrides.items()}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        storage_backend="memory",
        secret_key="test-secret-key",
        banner_dir=tmp_path / "banners",
        seed_sample_data=False,
    )


# Every test that asks for `storage` runs once per backend.
@pytest.fixture(params=["memory", "database"])
def storage(request, tmp_path):
    if request.param == "memory":
        yield MemoryStorage()
    else:
        sql_storage = SqlStorage(f"sqlite:///{tmp_path / 'tourney.db'}")
        yield sql_storage
        sql_storage.dispose()


@pytest.fixture
def payment_simulator():
    return PaymentSimulator(latency_seconds=0)


@pytest.fixture
def client(settings, storage, payment_simulator):
    app = create_app(settings=settings, storage=storage, payment_simulator=payment_simulator)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tournament_payload():
    def _payload(**overrides):
        payload = {
            "name": "Sunday Showdown",
            "gameMode": "BR",
            "type": "squad",
            "prizePool": 5000,
            "slotPrice": 50,
            "slots": 12,
            "startTime": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
            "organizerId": "organizer-1",
        }
        payload.update(_camelize(overrides))
        return payload

    return _payload


@pytest.fixture
def registration_payload():
    def _payload(**overrides):
        payload = {
            "userId": "player-1",
            "teamName": "Night Owls",
            "iglRealName": "Arjun Mehta",
            "iglIngameId": "OWL_001",
            "playerNames": ["OWL_001", "OWL_002", "OWL_003", "OWL_004"],
            "paymentMethod": "upi",
        }
        payload.update(_camelize(overrides))
        return payload

    return _payload


@pytest.fixture
def make_tournament(storage, tournament_payload):
    """Create a tournament in `storage`, optionally forcing counter/status fields afterwards."""

    def _make(registered_players=None, status=None, **overrides):
        tournament = tournament_service.create_tournament(storage, tournament_payload(**overrides))
        forced = {}
        if registered_players is not None:
            forced["registered_players"] = registered_players
        if status is not None:
            forced["status"] = status
        if forced:
            tournament = storage.update_tournament(tournament.id, forced)
        return tournament

    return _make
