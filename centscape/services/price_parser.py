"""Price detection and currency disambiguation for free text"""

import logging
import re
from typing import Optional, List, Pattern

from centscape.core.models import PriceInfo


logger = logging.getLogger(__name__)


CURRENCY_SYMBOLS = {
    "$": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
    "₽": "RUB",
    "₩": "KRW",
    "₪": "ILS",
}

CURRENCY_CODES = (
    "USD", "EUR", "GBP", "CAD", "AUD", "INR", "JPY", "CNY", "CHF", "SEK", "NOK", "DKK",
    "PLN", "CZK", "HUF", "RUB", "KRW", "SGD", "HKD", "NZD", "BRL", "MXN", "ARS", "CLP",
    "COP", "PEN", "UYU", "VND", "THB", "MYR", "IDR", "PHP",
)

# Checked in order; singular forms also cover their plurals
CURRENCY_WORDS = (
    ("dollar", "USD"),
    ("euro", "EUR"),
    ("pound", "GBP"),
    ("rupee", "INR"),
    ("yen", "JPY"),
    ("yuan", "CNY"),
    ("peso", "MXN"),
    ("reais", "BRL"),
    ("real", "BRL"),
)

REGIONAL_INDICATORS = (
    (re.compile(r"\brs\.?(?![a-z])|\binr\b", re.IGNORECASE), "INR"),
    (re.compile(r"\bcad\b|\bcanadian\b", re.IGNORECASE), "CAD"),
    (re.compile(r"\baud\b|\baustralian\b", re.IGNORECASE), "AUD"),
)

_AMOUNT = r"\d[\d,]*\.?\d*"
_CODES = "|".join(CURRENCY_CODES)

_CURRENCY_CODE_RE = re.compile(rf"\b({_CODES})\b", re.IGNORECASE)
_CURRENCY_WORD_RES = [(re.compile(rf"\b{word}s?\b", re.IGNORECASE), code) for word, code in CURRENCY_WORDS]
_NON_PRICE_CHARS_RE = re.compile(r"[^\d.," + re.escape("".join(CURRENCY_SYMBOLS)) + r"]")
_AMOUNT_RE = re.compile(_AMOUNT)

# Page-text patterns, most specific first
PRICE_PATTERNS: List[Pattern] = [
    re.compile(r"\$" + _AMOUNT),
    re.compile(r"€" + _AMOUNT),
    re.compile(r"£" + _AMOUNT),
    re.compile(r"¥" + _AMOUNT),
    re.compile(r"₹" + _AMOUNT),
    re.compile(r"₽" + _AMOUNT),
    re.compile(r"₩" + _AMOUNT),
    re.compile(r"₪" + _AMOUNT),
    re.compile(rf"{_AMOUNT}\s*(?:{_CODES})\b", re.IGNORECASE),
    re.compile(rf"price[:\s]+\$?{_AMOUNT}", re.IGNORECASE),
    re.compile(rf"{_AMOUNT}\s*(?:dollars?|euros?|pounds?|rupees?|yen|yuan|pesos?|reais|real)\b", re.IGNORECASE),
    re.compile(rf"\b(?:USD|EUR|GBP|CAD|AUD|INR|JPY|CNY)\s*{_AMOUNT}", re.IGNORECASE),
]

# Structured price locations, tried before scanning the page text
PRICE_SELECTORS = [
    ".price",
    ".product-price",
    ".current-price",
    ".sale-price",
    ".price-current",
    '[data-testid*="price"]',
    '[class*="price"]',
    '[id*="price"]',
    ".cost",
    ".amount",
    "[data-a-price-whole]",
    ".a-price-whole",
    ".a-price .a-offscreen",
]


def detect_currency(text: str) -> str:
    """
    Detect the currency of a price text.

    Symbols win over ISO codes, codes over spelled-out words, and words over
    regional hints such as ``Rs.``. Defaults to USD.
    """
    for symbol, code in CURRENCY_SYMBOLS.items():
        if symbol in text:
            return code

    code_match = _CURRENCY_CODE_RE.search(text)
    if code_match:
        return code_match.group(1).upper()

    for pattern, code in _CURRENCY_WORD_RES:
        if pattern.search(text):
            return code

    for pattern, code in REGIONAL_INDICATORS:
        if pattern.search(text):
            return code

    return "USD"


def parse_price(text: Optional[str]) -> Optional[PriceInfo]:
    """
    Parse the first amount in ``text`` into a PriceInfo.

    Thousands separators are removed before conversion. Returns None when the text holds no digits.
    """
    if not text:
        return None

    cleaned = _NON_PRICE_CHARS_RE.sub("", text)
    number_match = _AMOUNT_RE.search(cleaned)
    if not number_match:
        return None

    amount = float(number_match.group(0).replace(",", "").rstrip("."))
    return PriceInfo(raw=text, amount=amount, currency=detect_currency(text))


def find_price_in_text(text: str) -> Optional[PriceInfo]:
    """Scan page text with PRICE_PATTERNS; the first pattern with a match wins"""
    if not text:
        return None

    for pattern in PRICE_PATTERNS:
        match = pattern.search(text)
        if match:
            logger.debug(f"Price pattern {pattern.pattern!r} matched {match.group(0)!r}")
            return parse_price(match.group(0))

    return None
