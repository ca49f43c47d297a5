import pytest
from sabores.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    get_settings.cache_clear()


def test_defaults_without_database(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DATABASE_URL", "MAX_CAPACITY", "MAX_PARTY_SIZE", "APP_TIMEZONE", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.database_url is None
    assert settings.store_configured is False
    assert settings.max_capacity == 50
    assert settings.max_party_size == 12
    assert settings.environment == "development"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db.example.com:5432/postgres")
    monkeypatch.setenv("MAX_CAPACITY", "80")
    monkeypatch.setenv("APP_TIMEZONE", "Europe/Madrid")
    settings = get_settings()
    assert settings.store_configured is True
    assert settings.max_capacity == 80
    assert settings.timezone == "Europe/Madrid"


def test_empty_database_url_is_unconfigured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "")
    assert get_settings().store_configured is False


def test_capacity_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(max_capacity=0)
