import base64
import io
import json
import threading
from datetime import date

import pytest
from PIL import Image

from api.backend import ExtractionPipeline
from lifecapture.errors import ClassificationError, ExtractionCancelled, TransportError
from lifecapture.models import EventData, LinkData, ScreenshotType
from llm.llm_client import VisionClient
from ocr.ocr_service import OCRResult, OCRService, StaticOCRService

OCR_TEXT = "Tech Talk Night\nHosted by Acme Robotics\nDate: 03-05\nTime: 18:30"
EVENT_JSON = json.dumps({"title": "Tech Talk Night", "host": "", "date": "03-05", "time": "18:30"})


class FlakyOCR(OCRService):
    """Fails on the first call, then returns text."""

    def __init__(self, text: str):
        self.text = text
        self.calls = 0

    def recognize(self, image: str) -> OCRResult:
        self.calls += 1
        if self.calls == 1:
            raise TransportError("OCR backend down")
        return OCRResult(text=self.text)


class StaticOCRLookup(OCRService):
    def __init__(self, texts: dict):
        self.texts = texts

    def recognize(self, image: str) -> OCRResult:
        return OCRResult(text=self.texts[image])


def _pipeline(provider, ocr: OCRService, today=date(2026, 10, 19)):
    def client_factory(config, cancel_event=None):
        return VisionClient(config, provider=provider, cancel_event=cancel_event)

    return ExtractionPipeline(
        ocr_factory=lambda client: ocr,
        client_factory=client_factory,
        clock=lambda: today,
    )


def test_end_to_end_event_with_host_backfill(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory('{"type": "event", "confidence": 0.92}', EVENT_JSON)
    pipeline = _pipeline(provider, StaticOCRService(OCR_TEXT))

    result = pipeline.extract_from_image(png_data_url, backend_config)

    assert result.type is ScreenshotType.EVENT
    assert isinstance(result.data, EventData)
    assert result.data.title == "Tech Talk Night"
    assert result.data.host == "Acme Robotics"
    assert result.data.date == "2026-03-05"
    assert result.data.time == "18:30"
    assert result.confidence == pytest.approx(0.92)
    assert len(provider.calls) == 2


def test_model_host_is_kept(fake_provider_factory, backend_config, png_data_url):
    event = json.dumps({"title": "Gala", "host": "City Museum", "date": "2026-12-01", "time": "19:00"})
    provider = fake_provider_factory('{"type": "event", "confidence": 0.9}', event)
    result = _pipeline(provider, StaticOCRService(OCR_TEXT)).extract_from_image(png_data_url, backend_config)
    assert result.data.host == "City Museum"


def test_ocr_failure_is_not_fatal_and_is_retried_for_host(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory('{"type": "event", "confidence": 0.8}', EVENT_JSON)
    ocr = FlakyOCR(OCR_TEXT)

    result = _pipeline(provider, ocr).extract_from_image(png_data_url, backend_config)

    assert ocr.calls == 2
    assert result.data.host == "Acme Robotics"
    assert "extracted text" not in provider.calls[1]["user"][0]["text"]


def test_no_host_anywhere_leaves_host_empty(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory('{"type": "event", "confidence": 0.8}', EVENT_JSON)
    result = _pipeline(provider, StaticOCRService("")).extract_from_image(png_data_url, backend_config)
    assert result.data.host == ""


def test_unknown_type_still_yields_link(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory(
        '{"type": "meme", "confidence": 0.99}',
        '{"title": "Example", "url": "https://example.com"}',
    )
    result = _pipeline(provider, StaticOCRService("")).extract_from_image(png_data_url, backend_config)

    assert result.type is ScreenshotType.LINK
    assert isinstance(result.data, LinkData)
    assert result.confidence == 0.5


def test_classification_failure_propagates(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory("not json")
    with pytest.raises(ClassificationError):
        _pipeline(provider, StaticOCRService("")).extract_from_image(png_data_url, backend_config)


def test_extraction_transport_failure_propagates(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory('{"type": "song", "confidence": 0.9}', TransportError("HTTP 500: boom"))
    with pytest.raises(TransportError, match="boom"):
        _pipeline(provider, StaticOCRService("")).extract_from_image(png_data_url, backend_config)


def test_cancel_event_stops_before_first_call(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory()
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(ExtractionCancelled):
        _pipeline(provider, StaticOCRService(OCR_TEXT)).extract_from_image(
            png_data_url, backend_config, cancel_event=cancel
        )
    assert provider.calls == []


def test_result_payload_uses_wire_names(fake_provider_factory, backend_config, png_data_url):
    provider = fake_provider_factory('{"type": "event", "confidence": 0.9}', EVENT_JSON)
    payload = _pipeline(provider, StaticOCRService(OCR_TEXT)).extract_from_image(
        png_data_url, backend_config
    ).to_payload()

    assert payload["type"] == "event"
    assert payload["data"]["endDate"] == "2026-03-05"
    assert "end_date" not in payload["data"]


def test_extract_many_keeps_order(backend_config, png_data_url):
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(10, 10, 240)).save(buf, format="PNG")
    second_url = "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")
    texts = {png_data_url: "first", second_url: "second"}

    class RoutingProvider:
        """Answers from the prompt so concurrent calls cannot race on a script."""

        def generate(self, *, system, user, model=None, max_tokens=500, temperature=0.3):
            if "classifying" in system:
                return '{"type": "link", "confidence": 0.7}'
            marker = "first" if '"first"' in user[0]["text"] else "second"
            return json.dumps({"title": marker, "url": f"https://{marker}.example"})

    pipeline = ExtractionPipeline(
        ocr_factory=lambda client: StaticOCRLookup(texts),
        client_factory=lambda config, cancel_event=None: VisionClient(config, provider=RoutingProvider()),
    )
    results = pipeline.extract_many([second_url, png_data_url, second_url], backend_config, max_workers=3)

    assert [r.data.title for r in results] == ["second", "first", "second"]
    assert pipeline.extract_many([], backend_config) == []
