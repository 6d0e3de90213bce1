from __future__ import annotations

import json
import logging
from pathlib import Path

from llm.schemas import AppSettings

logger = logging.getLogger(__name__)


def _env_defaults() -> AppSettings:
    try:
        return AppSettings.from_env()
    except ValueError as e:
        # bad LIFECAPTURE_PROVIDER / LIFECAPTURE_TIMEOUT_S and friends
        logger.warning(f"Ignoring invalid settings in the environment: {e}")
        return AppSettings()


class SettingsStore:
    def __init__(self, path: str = "data/settings.json"):
        self.path = Path(path)

    def load(self) -> AppSettings:
        """
        Load settings from disk. Falls back to environment defaults if the file is missing or invalid,
        and to built-in defaults if the environment is invalid too.
        """
        if not self.path.exists():
            return _env_defaults()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return AppSettings(**data)
        except Exception as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return _env_defaults()

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(settings.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
