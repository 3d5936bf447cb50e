"""
Normalization helpers

Trim and canonicalize user-supplied identifiers before they hit the database.
"""

import re
import unicodedata

_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def normalize_currency_code(value: str | None) -> str | None:
    """
    Canonical currency code

    - NFKC normalization (full-width letters become ASCII)
    - surrounding whitespace removed
    - upper case

    Returns None for empty input.

    Example:
        >>> normalize_currency_code(" usd ")
        "USD"
    """
    if value is None:
        return None
    trimmed = unicodedata.normalize("NFKC", value).strip().upper()
    return trimmed or None


def is_currency_code(value: str | None) -> bool:
    """True for exactly three ASCII letters (ISO 4217 style)."""
    return bool(value) and bool(_CURRENCY_RE.match(value))


def normalize_name(value: str | None) -> str:
    """
    Display-name normalization

    - NFKC normalization
    - trim, and collapse internal whitespace runs to a single space

    Example:
        >>> normalize_name("  Alice   budget ")
        "Alice budget"
    """
    if not value:
        return ""
    s = unicodedata.normalize("NFKC", value)
    return re.sub(r"\s+", " ", s).strip()
