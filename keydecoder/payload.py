"""
Payload reading: bytes in, parsed record out.

Responsibilities:
- encoding detection + decoding
- JSON parsing
- top-level object enforcement
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from charset_normalizer import from_bytes

from .config import settings

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


class PayloadError(ValueError):
    pass


def decode_text(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode payload bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - UTF-8 with a BOM is decoded as utf-8-sig so the BOM never reaches the parser.
    - If decode fails, fall back to UTF-8, then to replacement characters, and report it.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        logger.warning("decode with %s failed, fell back to %s", detected, decode_used)

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }
    return text, report


def read_record(raw: bytes) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """Parse a JSON object payload into a record plus an encoding report."""
    if not raw:
        raise PayloadError("Payload is empty")
    if len(raw) > settings.max_payload_bytes:
        raise PayloadError(f"Payload exceeds limit of {settings.max_payload_bytes} bytes")

    text, report = decode_text(raw)

    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Payload is not valid JSON: {e.msg} at line {e.lineno}") from e

    if not isinstance(record, dict):
        raise PayloadError(
            f"Payload must be a JSON object, got {type(record).__name__}"
        )

    return record, report
