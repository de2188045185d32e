# this_file: ogcard/card.py
"""
Validation of the three card strings before they reach the renderer.
"""

from __future__ import annotations

from typing import Mapping

from .base import CardParamError
from .constants import MAX_TEXT_LENGTH


def validate_card_params(
    params: Mapping[str, str | None],
    max_text_length: int = MAX_TEXT_LENGTH,
) -> tuple[str, str, str]:
    """
    Pull ``text``, ``title`` and ``author`` out of query-style parameters.

    Only ``text`` is length-limited; the limit counts UTF-8 bytes.

    Raises:
        CardParamError: If a parameter is missing or ``text`` is too long
    """
    text = params.get("text")
    if text is None:
        raise CardParamError("text parameter is required")
    if len(text.encode("utf-8")) > max_text_length:
        raise CardParamError("text parameter is too long")

    author = params.get("author")
    if author is None:
        raise CardParamError("author parameter is required")

    title = params.get("title")
    if title is None:
        raise CardParamError("title parameter is required")

    return text, title, author
