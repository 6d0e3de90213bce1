import os

from api.backend import ExtractionPipeline
from llm.llm_client import VisionClient
from llm.providers.mock_provider import MockProvider
from llm.schemas import BackendConfig
from ocr.ocr_service import NullOCRService, VisionOCRService
from storage.settings_store import SettingsStore

# Configuration
SETTINGS_PATH = os.getenv("LIFECAPTURE_SETTINGS_PATH", "data/settings.json")
OCR_ENABLED = os.getenv("LIFECAPTURE_OCR", "on").lower() not in {"0", "off", "false", "no"}
USE_MOCK_PROVIDER = os.getenv("LIFECAPTURE_MOCK", "false").lower() in {"1", "true", "yes"}


def _client_factory(config: BackendConfig, cancel_event=None) -> VisionClient:
    provider = MockProvider() if USE_MOCK_PROVIDER else None
    return VisionClient(config, provider=provider, cancel_event=cancel_event)


pipeline = ExtractionPipeline(
    ocr_factory=VisionOCRService if OCR_ENABLED else NullOCRService,
    client_factory=_client_factory,
)
settings_store = SettingsStore(path=SETTINGS_PATH)


def get_pipeline() -> ExtractionPipeline:
    return pipeline


def get_settings_store() -> SettingsStore:
    return settings_store
