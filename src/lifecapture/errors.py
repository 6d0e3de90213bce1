from __future__ import annotations

from typing import Optional


class LifeCaptureError(Exception):
    """Base class for every failure surfaced by the extraction core."""


class TransportError(LifeCaptureError):
    """The OCR or AI backend could not be reached or did not answer 2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(LifeCaptureError):
    """The backend answered 2xx but the assistant text was not where expected."""


class ExtractionParseError(LifeCaptureError):
    """Model output did not parse into the expected record shape."""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class ClassificationError(ExtractionParseError):
    """Same failure as ExtractionParseError, raised by the classification stage."""


class ExtractionCancelled(LifeCaptureError):
    """The caller cancelled the pipeline before the next network call."""
