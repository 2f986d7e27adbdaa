"""
Bootstrap tests for the FitMuse app: configuration loading and component wiring.
"""

from pathlib import Path

import pytest

from agents.outfit_selector import OutfitSelectorAgent
from fitmuse_app.app import FitMuseApp
from fitmuse_app.config import DEFAULT_GEMINI_MODEL, AppConfig

from conftest import FakeAIClient


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "APP_ENV",
        "APP_CONFIG_PATH",
        "AI_PROVIDER",
        "MODEL",
        "DATABASE_PATH",
        "SESSION_TTL_SECONDS",
        "SESSION_BACKEND",
        "SESSION_DIR",
    ):
        monkeypatch.delenv(key, raising=False)

    config = AppConfig.from_env()

    assert config.ai_provider == "gemini"
    assert config.model == DEFAULT_GEMINI_MODEL
    assert config.database_path == "data/fitmuse.db"
    assert config.session_ttl_seconds == 7 * 24 * 3600
    assert config.session_backend == "sqlite"
    assert config.session_dir == "data/sessions"


def test_config_reads_environment_file_and_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "staging.yaml").write_text(
        "# staging\nai_provider: OpenAI\ndatabase_path: \"/srv/fitmuse.db\"\nsession_ttl_seconds: 3600\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("FITMUSE_CONFIG_DIR", str(env_dir))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "override.db"))
    monkeypatch.delenv("APP_CONFIG_PATH", raising=False)
    monkeypatch.delenv("AI_PROVIDER", raising=False)
    monkeypatch.delenv("SESSION_TTL_SECONDS", raising=False)

    config = AppConfig.from_env()

    assert config.environment == "staging"
    assert config.ai_provider == "openai"
    assert config.openai_api_key == "sk-env"
    assert config.database_path == str(tmp_path / "override.db")
    assert config.session_ttl_seconds == 3600


def test_app_wires_one_ai_client_into_every_agent(app_config: AppConfig) -> None:
    fake_ai = FakeAIClient()

    fitmuse = FitMuseApp(config=app_config, ai_client=fake_ai)

    assert fitmuse.garment_analyzer.ai_client is fake_ai
    assert fitmuse.collage_detector.ai_client is fake_ai
    assert fitmuse.inspiration_analyzer.ai_client is fake_ai
    assert fitmuse.outfit_illustrator.ai_client is fake_ai
    assert isinstance(fitmuse.outfit_selector, OutfitSelectorAgent)
    assert fitmuse.outfit_selector.reference_store is fitmuse.reference_store
    assert fitmuse.closet_ingestion.garment_analyzer is fitmuse.garment_analyzer


def test_app_seeds_reference_data_once(app_config: AppConfig) -> None:
    FitMuseApp(config=app_config, ai_client=FakeAIClient())
    fitmuse = FitMuseApp(config=app_config, ai_client=FakeAIClient())

    assert len(fitmuse.reference_store.list_moodboards()) == 6
    assert len(fitmuse.reference_store.list_style_vibes()) == 5


def test_app_can_skip_seeding(app_config: AppConfig) -> None:
    fitmuse = FitMuseApp(config=app_config, ai_client=FakeAIClient(), seed_reference=False)

    assert fitmuse.reference_store.list_moodboards() == []
