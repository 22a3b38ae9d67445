from travel_booking.config.settings import Settings


def test_app_name_and_version_read_from_their_own_names(monkeypatch):
    monkeypatch.setenv("APP_NAME", "Trips API")
    monkeypatch.setenv("API_VERSION", "v2")

    settings = Settings(_env_file=None)

    assert settings.APP_NAME == "Trips API"
    assert settings.API_VERSION == "v2"


def test_legacy_project_names_still_accepted(monkeypatch):
    monkeypatch.delenv("APP_NAME", raising=False)
    monkeypatch.setenv("PROJECT_NAME", "Legacy Trips")
    monkeypatch.setenv("BACKEND_CORS_ORIGINS", '["https://trips.example"]')

    settings = Settings(_env_file=None)

    assert settings.APP_NAME == "Legacy Trips"
    assert settings.CORS_ORIGINS == ["https://trips.example"]
