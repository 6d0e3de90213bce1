import asyncio
import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.backend import ExtractionPipeline
from api.dependencies import get_pipeline, get_settings_store
from api.metrics import EXTRACTIONS_TOTAL, REQUEST_LATENCY_SECONDS, REQUESTS_TOTAL
from lifecapture.errors import (
    ExtractionParseError,
    LifeCaptureError,
    MalformedResponseError,
    TransportError,
)
from lifecapture.models import ExtractedResult
from llm.schemas import BackendConfig, VisionBackend
from storage.settings_store import SettingsStore

router = APIRouter()
logger = logging.getLogger(__name__)


class ExtractIn(BaseModel):
    image: str = Field(..., min_length=1)  # data URL or base64
    provider: Optional[VisionBackend] = None
    model: Optional[str] = None


class BatchExtractIn(BaseModel):
    images: List[str] = Field(..., min_length=1)
    provider: Optional[VisionBackend] = None
    model: Optional[str] = None


def _status_for(error: Exception) -> int:
    if isinstance(error, (TransportError, MalformedResponseError)):
        return 502
    if isinstance(error, ExtractionParseError):
        return 422
    if isinstance(error, ValueError):
        return 400
    return 500


def _backend_config(
    store: SettingsStore, provider: Optional[VisionBackend], model: Optional[str]
) -> BackendConfig:
    settings = store.load()
    config = settings.backend_config(provider=provider, model=model)
    if not config.api_key:
        raise HTTPException(
            status_code=400,
            detail=f"No API key configured for provider '{config.provider.value}'",
        )
    return config


async def _run(endpoint: str, coro):
    start = time.time()
    try:
        result = await coro
    except (LifeCaptureError, ValueError) as e:
        REQUESTS_TOTAL.labels(endpoint=endpoint, status="error").inc()
        logger.exception(f"Extraction failed on {endpoint}")
        raise HTTPException(status_code=_status_for(e), detail=f"Extraction failed: {e}") from e
    finally:
        REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(time.time() - start)

    REQUESTS_TOTAL.labels(endpoint=endpoint, status="ok").inc()
    return result


def _count(result: ExtractedResult) -> dict:
    EXTRACTIONS_TOTAL.labels(type=result.type.value).inc()
    return result.to_payload()


@router.post("/extract")
async def extract(
    payload: ExtractIn,
    pipeline: ExtractionPipeline = Depends(get_pipeline),
    store: SettingsStore = Depends(get_settings_store),
) -> dict:
    config = _backend_config(store, payload.provider, payload.model)
    logger.info(f"Received screenshot for extraction ({config.provider.value})")

    result = await _run(
        "/extract", asyncio.to_thread(pipeline.extract_from_image, payload.image, config)
    )
    return _count(result)


@router.post("/extract/batch")
async def extract_batch(
    payload: BatchExtractIn,
    pipeline: ExtractionPipeline = Depends(get_pipeline),
    store: SettingsStore = Depends(get_settings_store),
) -> dict:
    config = _backend_config(store, payload.provider, payload.model)
    logger.info(f"Received {len(payload.images)} screenshots for extraction")

    results = await _run(
        "/extract/batch",
        asyncio.gather(
            *(asyncio.to_thread(pipeline.extract_from_image, image, config) for image in payload.images)
        ),
    )
    return {"results": [_count(r) for r in results]}
