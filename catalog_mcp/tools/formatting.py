"""Render catalog responses as text for the host."""

import base64
import json
from typing import Any

EXCEL_PREVIEW_CHARS = 100


def pretty(data: Any) -> str:
    """Pretty-print a decoded JSON body."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def compact(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False)


def inline(value: Any) -> str:
    """Render a scalar as-is and anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return compact(value)


def excel_preview(content: bytes) -> str:
    """Summarize a binary Excel export without inlining the whole file.

    Args:
        content: Raw xlsx bytes.

    Returns:
        Byte count plus the first characters of the base64 encoding.
    """
    encoded = base64.b64encode(content).decode("ascii")
    return (
        f"Excel exported (base64, {len(content)} bytes): "
        f"{encoded[:EXCEL_PREVIEW_CHARS]}..."
    )
