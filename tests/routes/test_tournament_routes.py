import pytest
from fastapi.testclient import TestClient

from tourney.main import create_app
from tourney.services.storage import MemoryStorage


class BrokenStorage(MemoryStorage):
    def get_all_tournaments(self):
        raise RuntimeError("connection lost")


class TestTournamentRoutes:

    def test_create_tournament(self, client, tournament_payload):
        response = client.post("/api/tournaments", json=tournament_payload(gameMode="CS", type="duo"))

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["gameMode"] == "CS"
        assert body["format"] == "CS DUO"
        assert body["description"] == "Clash Squad duo tournament"
        assert body["registeredPlayers"] == 0
        assert body["status"] == "open"
        assert body["matchCount"] == 1
        assert body["killPoints"] == 0
        assert body["csGameVariant"] == "Limited"
        assert body["device"] == "Both"
        assert "createdAt" in body
        assert "registrationDeadline" in body

    def test_create_tournament_invalid(self, client, tournament_payload):
        response = client.post("/api/tournaments", json=tournament_payload(slots=0, name="x"))

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid tournament data"
        assert {tuple(error["loc"]) for error in body["errors"]} == {("slots",), ("name",)}

    def test_create_tournament_non_object_body(self, client):
        response = client.post("/api/tournaments", json=["not", "an", "object"])

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    def test_get_tournament(self, client, make_tournament):
        tournament = make_tournament(name="Night Clash")

        response = client.get(f"/api/tournaments/{tournament.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Night Clash"
        assert response.json()["slotPrice"] == tournament.slot_price

    def test_get_unknown_tournament(self, client):
        response = client.get("/api/tournaments/missing")

        assert response.status_code == 404
        assert response.json() == {"message": "Tournament not found"}

    def test_list_filters(self, client, make_tournament):
        open_one = make_tournament(organizer_id="org-a", name="Morning Cup")
        live_one = make_tournament(organizer_id="org-b", status="live", name="Evening Cup")

        all_ids = {t["id"] for t in client.get("/api/tournaments").json()}
        live_ids = [t["id"] for t in client.get("/api/tournaments", params={"status": "live"}).json()]
        org_ids = [
            t["id"]
            for t in client.get("/api/tournaments", params={"organizerId": "org-a", "status": "live"}).json()
        ]
        search_ids = [t["id"] for t in client.get("/api/tournaments", params={"search": "evening"}).json()]

        assert all_ids == {open_one.id, live_one.id}
        assert live_ids == [live_one.id]
        assert org_ids == [open_one.id]
        assert search_ids == [live_one.id]

    def test_update_tournament(self, client, make_tournament):
        tournament = make_tournament()

        response = client.patch(f"/api/tournaments/{tournament.id}", json={"slotPrice": 99, "isPromoted": True})

        assert response.status_code == 200
        assert response.json()["slotPrice"] == 99
        assert response.json()["isPromoted"] is True

    @pytest.mark.parametrize("field", ["name", "slots", "slotPrice", "startTime", "isPromoted"])
    def test_update_tournament_rejects_null(self, client, make_tournament, field):
        tournament = make_tournament(name="Night Clash", slots=12)

        response = client.patch(f"/api/tournaments/{tournament.id}", json={field: None})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        stored = client.get(f"/api/tournaments/{tournament.id}").json()
        assert stored["name"] == "Night Clash"
        assert stored["slots"] == 12
        assert client.get("/api/tournaments", params={"search": "night"}).status_code == 200

    def test_update_tournament_allows_clearing_optional_text(self, client, make_tournament):
        tournament = make_tournament(rules="No emulators")

        response = client.patch(f"/api/tournaments/{tournament.id}", json={"rules": None})

        assert response.status_code == 200
        assert response.json()["rules"] is None

    def test_update_tournament_invalid_body(self, client, make_tournament):
        tournament = make_tournament()

        response = client.patch(f"/api/tournaments/{tournament.id}", json={"slots": -3})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
        assert response.json()["errors"]

    def test_status_transitions(self, client, make_tournament):
        tournament = make_tournament()

        forward = client.patch(f"/api/tournaments/{tournament.id}/status", json={"status": "live"})
        backward = client.patch(f"/api/tournaments/{tournament.id}/status", json={"status": "open"})

        assert forward.status_code == 200
        assert forward.json()["status"] == "live"
        assert backward.status_code == 400
        assert backward.json()["message"] == "Cannot move tournament from 'live' to 'open'"

    def test_unexpected_failure_returns_500(self, settings, payment_simulator):
        app = create_app(settings=settings, storage=BrokenStorage(), payment_simulator=payment_simulator)

        with TestClient(app) as client:
            response = client.get("/api/tournaments")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch tournaments"}


class TestRegistrationRoutes:

    def test_register_team(self, client, make_tournament, registration_payload):
        tournament = make_tournament(slot_price=40)

        response = client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["tournamentId"] == tournament.id
        assert body["registrationFee"] == 40
        assert body["paymentStatus"] == "pending"
        assert body["playerNames"] == ["OWL_001", "OWL_002", "OWL_003", "OWL_004"]
        assert client.get(f"/api/tournaments/{tournament.id}").json()["registeredPlayers"] == 1

    def test_register_unknown_tournament(self, client, registration_payload):
        response = client.post("/api/tournaments/missing/register", json=registration_payload())

        assert response.status_code == 404
        assert response.json()["message"] == "Tournament not found"

    def test_register_full_tournament(self, client, make_tournament, registration_payload):
        tournament = make_tournament(slots=1, registered_players=1)

        response = client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload())

        assert response.status_code == 400
        assert response.json()["message"] == "Tournament is full"

    def test_register_closed_tournament(self, client, make_tournament, registration_payload):
        tournament = make_tournament(status="starting")

        response = client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload())

        assert response.status_code == 400
        assert response.json()["message"] == "Tournament registration is closed"
        assert client.get(f"/api/tournaments/{tournament.id}/registrations").json() == []

    def test_register_invalid_data(self, client, make_tournament, registration_payload):
        tournament = make_tournament()

        response = client.post(
            f"/api/tournaments/{tournament.id}/register", json=registration_payload(teamName="ab")
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid registration data"
        assert response.json()["errors"][0]["loc"] == ["teamName"]

    def test_list_tournament_registrations(self, client, make_tournament, registration_payload):
        tournament = make_tournament()
        client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload(userId="u1"))
        client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload(userId="u2"))

        response = client.get(f"/api/tournaments/{tournament.id}/registrations")

        assert response.status_code == 200
        assert {r["userId"] for r in response.json()} == {"u1", "u2"}

    def test_organizer_registrations(self, client, make_tournament, registration_payload):
        tournament = make_tournament(organizer_id="org-a", name="Organizer Cup", prize_pool=2500)
        client.post(f"/api/tournaments/{tournament.id}/register", json=registration_payload())

        response = client.get("/api/organizer/org-a/registrations")

        assert response.status_code == 200
        [registration] = response.json()
        assert registration["tournament"] == {
            "id": tournament.id,
            "name": "Organizer Cup",
            "gameMode": "BR",
            "type": "squad",
            "prizePool": 2500,
        }
        assert client.get("/api/organizer/nobody/registrations").json() == []
