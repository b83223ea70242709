"""Helpers shared by the fallback extraction chains"""

import logging
from typing import Callable, Iterable, Optional, TypeVar

import dateparser


logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_match(sources: Iterable[Callable[[], Optional[T]]], validator: Callable[[T], bool]) -> Optional[T]:
    """
    Evaluate ``sources`` in order and return the first value accepted by ``validator``.

    Sources are only called until one is accepted. Missing values are skipped.
    """
    for source in sources:
        value = source()
        if value is not None and validator(value):
            return value
    return None


def non_empty(value: str) -> bool:
    return len(value) > 0


def longer_than(length: int) -> Callable[[str], bool]:
    return lambda value: len(value) > length


def shorter_than(length: int) -> Callable[[str], bool]:
    return lambda value: 0 < len(value) < length


def is_parseable_date(value: str) -> bool:
    if not value or not value.strip():
        return False
    try:
        return dateparser.parse(value.strip()) is not None
    except (ValueError, OverflowError) as e:
        logger.debug(f"Date parse failed for {value!r}: {e}")
        return False
