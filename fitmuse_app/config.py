"""Configuration helpers for the FitMuse service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "models/gemini-1.5-flash-002"
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_IMAGE_MODEL = "gpt-image-1"
DEFAULT_DATABASE_PATH = "data/fitmuse.db"
DEFAULT_SESSION_DIR = "data/sessions"


@dataclass
class AppConfig:
    """Configuration values for the FitMuse app.

    Only the AI provider credentials are secrets; everything else has a local
    default so the service boots against a throwaway SQLite file.
    """

    ai_provider: str = "gemini"
    model: str = DEFAULT_GEMINI_MODEL
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    database_path: str = DEFAULT_DATABASE_PATH
    session_cookie_name: str = "fitmuse_session"
    session_ttl_seconds: int = 7 * 24 * 3600
    session_backend: str = "sqlite"
    session_dir: str = DEFAULT_SESSION_DIR
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that API keys can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("FITMUSE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        ai_provider = get_value("ai_provider", "gemini")
        model = get_value("model", DEFAULT_GEMINI_MODEL)
        openai_model = get_value("openai_model", DEFAULT_OPENAI_MODEL)
        image_model = get_value("image_model", DEFAULT_IMAGE_MODEL)
        database_path = get_value("database_path", DEFAULT_DATABASE_PATH)
        cookie_name = get_value("session_cookie_name", "fitmuse_session")
        ttl = get_value("session_ttl_seconds")
        session_backend = get_value("session_backend", "sqlite")
        session_dir = get_value("session_dir", DEFAULT_SESSION_DIR)

        return cls(
            ai_provider=str(ai_provider or "gemini").lower(),
            model=str(model or DEFAULT_GEMINI_MODEL),
            google_api_key=get_value("google_api_key"),
            openai_api_key=get_value("openai_api_key"),
            openai_base_url=get_value("openai_base_url"),
            openai_model=str(openai_model or DEFAULT_OPENAI_MODEL),
            image_model=str(image_model or DEFAULT_IMAGE_MODEL),
            database_path=str(database_path or DEFAULT_DATABASE_PATH),
            session_cookie_name=str(cookie_name or "fitmuse_session"),
            session_ttl_seconds=int(ttl) if ttl else 7 * 24 * 3600,
            session_backend=str(session_backend or "sqlite").lower(),
            session_dir=str(session_dir or DEFAULT_SESSION_DIR),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
