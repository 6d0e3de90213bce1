import logging

from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from pydantic import BaseModel

from api.dependencies import OCR_ENABLED, get_settings_store
from llm.schemas import AppSettings
from storage.settings_store import SettingsStore

router = APIRouter()
logger = logging.getLogger(__name__)


class SettingsOut(BaseModel):
    provider: str
    model: str
    has_openai_key: bool
    has_openrouter_key: bool


def _settings_out(settings: AppSettings) -> SettingsOut:
    return SettingsOut(
        provider=settings.provider.value,
        model=settings.backend_config().model_id,
        has_openai_key=bool(settings.openai_key),
        has_openrouter_key=bool(settings.openrouter_key),
    )


@router.get("/health")
async def health_check(store: SettingsStore = Depends(get_settings_store)) -> dict:
    """Liveness plus whether a backend key is configured."""
    settings = store.load()
    return {
        "status": "healthy",
        "provider": settings.provider.value,
        "api_key_configured": settings.has_api_key(),
        "ocr_enabled": OCR_ENABLED,
    }


@router.get("/settings")
async def get_settings(store: SettingsStore = Depends(get_settings_store)) -> SettingsOut:
    """Current settings; keys are reported as present/absent only."""
    return _settings_out(store.load())


@router.put("/settings")
async def put_settings(
    payload: AppSettings,
    store: SettingsStore = Depends(get_settings_store),
) -> SettingsOut:
    store.save(payload)
    logger.info(f"Settings updated (provider: {payload.provider.value})")
    return _settings_out(payload)


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
