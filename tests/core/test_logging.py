import json

import structlog

from tourney.core.logging import configure_logging, service_context


class TestLogging:

    def test_service_context_is_added(self):
        processor = service_context("prod", "1.2.3")

        event = processor(None, "info", {"event": "tournament_created"})

        assert event == {"event": "tournament_created", "service": "ff-tourney", "version": "1.2.3", "env": "prod"}

    def test_explicit_keys_win(self):
        processor = service_context("prod", "1.2.3")

        assert processor(None, "info", {"event": "x", "env": "test"})["env"] == "test"

    def test_configured_chain_renders_json_with_context(self):
        configure_logging("INFO", app_env="test", version="9.9.9")

        event = {"event": "registration_created", "tournament_id": "t-1"}
        for processor in structlog.get_config()["processors"]:
            event = processor(None, "info", event)
        record = json.loads(event)

        assert record["event"] == "registration_created"
        assert record["tournament_id"] == "t-1"
        assert record["env"] == "test"
        assert record["version"] == "9.9.9"
        assert record["level"] == "info"
        assert "timestamp" in record
