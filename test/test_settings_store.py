import pytest

from llm.schemas import AppSettings, VisionBackend
from storage.settings_store import SettingsStore


def test_settings_roundtrip(tmp_path):
    store = SettingsStore(path=str(tmp_path / "nested" / "settings.json"))
    store.save(AppSettings(provider="openrouter", openrouter_key="or-1", model="openai/gpt-4o"))
    loaded = store.load()
    assert loaded.provider is VisionBackend.OPENROUTER
    assert loaded.openrouter_key == "or-1"
    assert loaded.model == "openai/gpt-4o"


def test_missing_file_uses_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("LIFECAPTURE_PROVIDER", "openrouter")
    monkeypatch.setenv("OPENROUTER_API_KEY", " or-env ")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    settings = SettingsStore(path=str(tmp_path / "absent.json")).load()
    assert settings.provider is VisionBackend.OPENROUTER
    assert settings.openrouter_key == "or-env"
    assert settings.has_api_key()
    assert not settings.has_api_key(VisionBackend.OPENAI)


def test_corrupted_file_falls_back(tmp_path, monkeypatch):
    monkeypatch.delenv("LIFECAPTURE_PROVIDER", raising=False)
    p = tmp_path / "settings.json"
    p.write_text("{not valid json")
    settings = SettingsStore(path=str(p)).load()
    assert isinstance(settings, AppSettings)
    assert settings.provider is VisionBackend.OPENAI


def test_backend_config_picks_provider_key():
    settings = AppSettings(openai_key="sk-1", openrouter_key="or-1", model="gpt-4o-mini")

    default = settings.backend_config()
    assert default.api_key == "sk-1"
    assert default.model_id == "gpt-4o-mini"

    # stored model belongs to the stored provider only
    other = settings.backend_config(provider=VisionBackend.OPENROUTER)
    assert other.api_key == "or-1"
    assert other.model_id == "anthropic/claude-3.5-sonnet"

    explicit = settings.backend_config(provider="openrouter", model="google/gemini-pro-vision")
    assert explicit.model_id == "google/gemini-pro-vision"


@pytest.mark.parametrize(
    "name, value",
    [("LIFECAPTURE_PROVIDER", "anthropic"), ("LIFECAPTURE_TIMEOUT_S", "soon")],
)
def test_invalid_environment_falls_back_to_defaults(tmp_path, monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    missing = SettingsStore(path=str(tmp_path / "absent.json")).load()
    assert missing == AppSettings()

    corrupt = tmp_path / "settings.json"
    corrupt.write_text("{not valid json")
    assert SettingsStore(path=str(corrupt)).load() == AppSettings()
