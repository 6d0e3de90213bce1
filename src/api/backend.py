import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, List, Optional

from api.metrics import HOST_BACKFILL_TOTAL
from classification.screenshot_classifier import ScreenshotClassifier
from extraction.registry import extractor_for
from inference.host_inference import infer_host
from lifecapture.errors import ExtractionCancelled
from lifecapture.models import EventData, ExtractedResult, ScreenshotType
from llm.llm_client import VisionClient
from llm.schemas import BackendConfig
from ocr.image_io import ImageSource, ensure_data_url
from ocr.ocr_service import OCRService, VisionOCRService

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., VisionClient]
OCRFactory = Callable[[VisionClient], OCRService]


class ExtractionPipeline:
    """Central orchestration: OCR -> classify -> extract -> host backfill.

    Holds no per-image state, so one instance can serve concurrent invocations.
    """

    def __init__(
        self,
        ocr_factory: OCRFactory = VisionOCRService,
        client_factory: ClientFactory = VisionClient,
        clock: Callable[[], date] = date.today,
    ):
        self.ocr_factory = ocr_factory
        self.client_factory = client_factory
        self.clock = clock

    def extract_from_image(
        self,
        image: ImageSource,
        config: BackendConfig,
        cancel_event: Optional[threading.Event] = None,
    ) -> ExtractedResult:
        image_url = ensure_data_url(image)
        client = self.client_factory(config, cancel_event=cancel_event)
        ocr = self.ocr_factory(client)

        # 1. OCR is an accuracy booster only; losing it is not fatal
        ocr_text = self._recognize_quietly(ocr, image_url)

        # 2. Classify (failures propagate)
        classification = ScreenshotClassifier(client).classify(image_url, ocr_text)
        logger.info(
            f"Classified screenshot as {classification.type.value} "
            f"({classification.confidence:.2f})"
        )

        # 3. Dispatch to the matching extractor
        extractor = extractor_for(classification.type, client, clock=self.clock)
        record = extractor.extract(image_url, ocr_text)

        # 4. Host backfill for events the model left without a host
        if classification.type is ScreenshotType.EVENT and isinstance(record, EventData):
            record = self._backfill_host(record, ocr, image_url, ocr_text, client)

        return ExtractedResult(
            type=extractor.screenshot_type,
            data=record,
            confidence=classification.confidence,
        )

    def extract_many(
        self,
        images: List[ImageSource],
        config: BackendConfig,
        max_workers: int = 4,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[ExtractedResult]:
        """Run independent pipelines concurrently; results keep the input order."""
        if not images:
            return []
        with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(images)))) as pool:
            futures = [
                pool.submit(self.extract_from_image, image, config, cancel_event)
                for image in images
            ]
            return [f.result() for f in futures]

    @staticmethod
    def _recognize_quietly(ocr: OCRService, image_url: str) -> str:
        try:
            return ocr.recognize(image_url).text or ""
        except ExtractionCancelled:
            raise
        except Exception as e:
            logger.warning(f"OCR failed, continuing without text: {e}")
            return ""

    @staticmethod
    def _backfill_host(
        record: EventData,
        ocr: OCRService,
        image_url: str,
        ocr_text: str,
        client: VisionClient,
    ) -> EventData:
        if record.host.strip():
            return record

        if not ocr_text:
            # Second OCR attempt; unlike the first one its failure is surfaced
            client.check_cancelled()
            ocr_text = ocr.recognize(image_url).text or ""

        host = infer_host(ocr_text)
        if not host:
            HOST_BACKFILL_TOTAL.labels(outcome="not_found").inc()
            logger.info("No host found in OCR text; leaving host empty")
            return record

        HOST_BACKFILL_TOTAL.labels(outcome="found").inc()
        logger.info(f"Backfilled event host from OCR text: {host!r}")
        return record.model_copy(update={"host": host})
