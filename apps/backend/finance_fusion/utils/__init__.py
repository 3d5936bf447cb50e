"""
Utils package
"""

from .normalization import is_currency_code, normalize_currency_code, normalize_name

__all__ = [
    "is_currency_code",
    "normalize_currency_code",
    "normalize_name",
]
