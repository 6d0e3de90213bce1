"""Best-guess event host from raw OCR text.

Used only when the vision model leaves ``host`` empty. The rules below run in
a fixed order and the first one producing a candidate wins; false positives
are accepted since a stronger signal (the model) has already been tried.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from normalization.text_normalizer import sanitize_host

LABEL_PATTERNS = [
    re.compile(r"hosted\s+by[:\-]?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"organized\s+by[:\-]?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"organised\s+by[:\-]?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"presented\s+by[:\-]?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"^host[:\-]?\s*(.+)$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^organizer[:\-]?\s*(.+)$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^organiser[:\-]?\s*(.+)$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"\bby[:\-]?\s*([^\n]+)", re.IGNORECASE),
    re.compile(r"from[:\-]?\s*([^\n]+)", re.IGNORECASE),
]

HANDLE_PATTERN = re.compile(r"@[A-Za-z0-9_.\-]+")

POSTED_BY_PATTERN = re.compile(
    r"(?:posted|created|event)\s+(?:by|from)[:\-]?\s*([^\n,]+)", re.IGNORECASE
)

ORG_KEYWORDS = re.compile(
    r"club|society|association|department|lab|center|centre|team|group|chapter|union|university|college|school",
    re.IGNORECASE,
)
CAPITALIZED_NAME = re.compile(r"^[A-Z][A-Za-z\s&]+$")

# Only the top of a flyer tends to carry the organizer's name.
HEURISTIC_LINE_LIMIT = 15


def _lines(text: str) -> List[str]:
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


def _accept(candidate: Optional[str]) -> str:
    host = sanitize_host(candidate)
    return host if len(host) > 1 else ""


def labeled_line(text: str) -> str:
    for line in _lines(text):
        for pattern in LABEL_PATTERNS:
            match = pattern.search(line)
            if match and match.group(1):
                host = _accept(match.group(1))
                if host:
                    return host
    return ""


def _inside_url(text: str, start: int) -> bool:
    token_start = max(text.rfind(" ", 0, start), text.rfind("\n", 0, start)) + 1
    token = text[token_start:start]
    return "http" in token or "://" in token or "/" in token


def handle(text: str) -> str:
    for match in HANDLE_PATTERN.finditer(text):
        raw = match.group(0)
        if "http" in raw or _inside_url(text, match.start()):
            continue
        host = _accept(raw.lstrip("@"))
        if host:
            return host
    return ""


def posted_by(text: str) -> str:
    match = POSTED_BY_PATTERN.search(text)
    if match and match.group(1):
        return sanitize_host(match.group(1))
    return ""


def organization_line(text: str) -> str:
    for line in _lines(text)[:HEURISTIC_LINE_LIMIT]:
        if ORG_KEYWORDS.search(line) and 2 < len(line) < 80:
            return sanitize_host(line)
        if (
            2 < len(line) < 60
            and CAPITALIZED_NAME.match(line)
            and len(line.split()) <= 5
        ):
            return sanitize_host(line)
    return ""


@dataclass(frozen=True)
class HostRule:
    name: str
    apply: Callable[[str], str]


HOST_RULES: List[HostRule] = [
    HostRule("labeled_line", labeled_line),
    HostRule("handle", handle),
    HostRule("posted_by", posted_by),
    HostRule("organization_line", organization_line),
]


def infer_host(text: Optional[str], rules: List[HostRule] = HOST_RULES) -> str:
    """Return the first host candidate any rule finds, or "" when none does."""
    if not text:
        return ""
    for rule in rules:
        host = rule.apply(text)
        if host:
            return host
    return ""
