from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from lifecapture.errors import MalformedResponseError, TransportError


class VisionProvider(ABC):
    @abstractmethod
    def generate(
        self,
        *,
        system: str,
        user: list[dict[str, Any]],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Must return the assistant output as TEXT (JSON parsing happens in VisionClient).
        """
        raise NotImplementedError


def error_message(response: httpx.Response) -> str:
    """Best message for a failed call: the backend's own error text, else the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
        if data.get("message"):
            return str(data["message"])

    return f"HTTP {response.status_code}: {response.reason_phrase}"


def post_chat(
    url: str,
    *,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout_s: float,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    try:
        with httpx.Client(timeout=timeout_s, transport=transport) as client:
            r = client.post(url, headers=headers, json=payload)
    except httpx.TimeoutException as e:
        raise TransportError(f"Request to {url} timed out after {timeout_s:.0f}s") from e
    except httpx.HTTPError as e:
        raise TransportError(f"Request to {url} failed: {e}") from e

    if not r.is_success:
        raise TransportError(error_message(r), status_code=r.status_code)

    try:
        return r.json()
    except ValueError as e:
        raise MalformedResponseError(f"HTTP {r.status_code}: response body is not JSON") from e
