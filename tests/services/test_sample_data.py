from tourney.core import security
from tourney.services.sample_data import SAMPLE_ORGANIZER, seed_sample_data


class TestSampleData:

    def test_seeds_organizer_and_tournaments(self, storage):
        added = seed_sample_data(storage)

        assert added == 3
        organizer = storage.get_user_by_username(SAMPLE_ORGANIZER)
        assert organizer.role == "organizer"
        assert security.verify_password("admin123", organizer.password)

        tournaments = storage.get_tournaments_by_organizer(organizer.id)
        assert {t.name for t in tournaments} == {"Free Fire Pro League", "Clash Royale", "Weekend Warriors"}
        weekend = next(t for t in tournaments if t.name == "Weekend Warriors")
        assert weekend.game_mode == "CS"
        assert weekend.kill_points == 0
        assert [t.name for t in storage.get_tournaments_by_status("starting")] == ["Clash Royale"]

    def test_seeding_twice_is_a_no_op(self, storage):
        seed_sample_data(storage)

        assert seed_sample_data(storage) == 0
        assert len(storage.get_all_tournaments()) == 3
