import types

from cronograma import config
from cronograma.holidays import HolidayResolver


class _MissingSecrets:
    def __contains__(self, key):
        raise FileNotFoundError("No secrets.toml found")


def _clear_env(monkeypatch):
    for name in (config.HOLIDAYS_ENV, config.SECTION_ENV, config.REPEAT_MONTH_ENV):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env_or_secrets(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setattr(config, "st", types.SimpleNamespace(secrets={}))

    settings = config.load_settings()

    assert settings.holidays_source == str(config.DEFAULT_HOLIDAYS_PATH)
    assert settings.holidays_section == "Feriados"
    assert settings.repeat_month is False


def test_env_overrides_secrets(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setattr(
        config,
        "st",
        types.SimpleNamespace(
            secrets={
                "CRONOGRAMA_HOLIDAYS": "/secrets/feriados.org",
                "CRONOGRAMA_HOLIDAYS_SECTION": "Holidays",
            }
        ),
    )
    monkeypatch.setenv("CRONOGRAMA_HOLIDAYS", "/env/feriados.org")
    monkeypatch.setenv("CRONOGRAMA_REPEAT_MONTH", "yes")

    settings = config.load_settings()

    assert settings.holidays_source == "/env/feriados.org"
    assert settings.holidays_section == "Holidays"
    assert settings.repeat_month is True


def test_lowercase_secret_keys_and_bool_values(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setattr(
        config,
        "st",
        types.SimpleNamespace(
            secrets={"holidays_source": "https://example.org/f.org", "repeat_month": True}
        ),
    )

    settings = config.load_settings()

    assert settings.holidays_source == "https://example.org/f.org"
    assert settings.repeat_month is True


def test_missing_secrets_file_is_tolerated(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setattr(config, "st", types.SimpleNamespace(secrets=_MissingSecrets()))

    settings = config.load_settings()

    assert settings.holidays_section == "Feriados"


def test_make_resolver_builds_a_fresh_resolver():
    settings = config.ScheduleSettings(
        holidays_source="/tmp/feriados.org", holidays_section="Holidays"
    )

    first = settings.make_resolver()
    second = settings.make_resolver(strict=True)

    assert isinstance(first, HolidayResolver)
    assert first is not second
    assert first.source == "/tmp/feriados.org"
    assert first.section == "Holidays"
    assert second.strict is True
