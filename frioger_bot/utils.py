"""Shared utilities used across the chat attendant."""

import re
import unicodedata
from typing import Optional


def normalize_text(text: Optional[str]) -> str:
    """Fold text for comparison: strip diacritics and lower-case.

    Every keyword trigger and catalog lookup compares normalized text,
    so the result must be stable under repeated application.

    Examples:
        >>> normalize_text("Preço")
        'preco'
        >>> normalize_text("AÇÃO")
        'acao'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def contact_link(user_id: str, base: str = "https://wa.me/") -> str:
    """Build a click-to-chat link from a channel user id.

    Examples:
        >>> contact_link("5511999990000@c.us")
        'https://wa.me/5511999990000'
    """
    local_part = user_id.split("@", 1)[0]
    return base + re.sub(r"[^\d]", "", local_part)
