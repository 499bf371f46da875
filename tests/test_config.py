from eventradar.config import Settings


def test_unknown_settings_are_ignored():
    settings = Settings(NOT_A_SETTING="x")

    assert not hasattr(settings, "NOT_A_SETTING")


def test_environment_names_are_case_insensitive(monkeypatch):
    monkeypatch.setenv("geocoding_cache_size", "7")

    assert Settings().GEOCODING_CACHE_SIZE == 7
