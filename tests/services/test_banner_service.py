from tourney.core.config import DEFAULT_BANNER_DIR
from tourney.services.banner_service import BANNER_FILES, resolve_banner_path, select_banner


class TestBannerSelection:

    def test_sum_of_character_codes_modulo_banner_count(self):
        # ord("a") + ord("b") + ord("c") == 294, 294 % 4 == 2
        assert select_banner("abc") == BANNER_FILES[2]

    def test_selection_is_deterministic(self):
        tournament_id = "6f1c2b1e-8a4d-4c1e-9a4b-1f2e3d4c5b6a"

        assert {select_banner(tournament_id) for _ in range(10)} == {select_banner(tournament_id)}

    def test_custom_banner_list(self):
        assert select_banner("a", banners=["only.svg"]) == "only.svg"
        assert select_banner("a", banners=["x.svg", "y.svg"]) == "y.svg"

    def test_every_shipped_banner_exists(self):
        for name in BANNER_FILES:
            assert (DEFAULT_BANNER_DIR / name).is_file()

    def test_resolve_banner_path(self, tmp_path):
        (tmp_path / select_banner("abc")).write_text("<svg/>")

        assert resolve_banner_path(tmp_path, "abc") == tmp_path / BANNER_FILES[2]
        assert resolve_banner_path(tmp_path, "abd") is None
