"""Discovery, filtering and ranking of product images found in markup"""

import logging
from typing import List, Optional, Iterable

from centscape.core.models import ImageCandidate
from .html_parser import HTMLParser


logger = logging.getLogger(__name__)


MAX_IMAGES = 10

# Selector tiers, merged in this order before ranking so discovery order stays well defined
HIGH_PRIORITY_SELECTORS = (
    ".hero-image img",
    ".featured-image img",
    ".article-image img",
    ".product-image img",
    ".main-image img",
    ".gallery-image img",
    ".product-gallery img",
    ".image-gallery img",
    ".product-photo img",
    ".product-thumbnail img",
    "[data-a-image-name] img",
    ".a-dynamic-image",
    ".a-image-stack-vertical img",
    ".product-media img",
    ".product-visual img",
    ".product-picture img",
)

MEDIUM_PRIORITY_SELECTORS = (
    'img[src*="product"]',
    'img[src*="image"]',
    'img[src*="photo"]',
    'img[alt*="product"]',
    'img[alt*="image"]',
)

REGULAR_SELECTORS = (
    "img[src]",
    "img[data-src]",
    "img[data-lazy-src]",
)

IMAGE_SELECTORS = HIGH_PRIORITY_SELECTORS + MEDIUM_PRIORITY_SELECTORS + REGULAR_SELECTORS

SOURCE_ATTRIBUTES = ("src", "data-src", "data-lazy-src")

REJECTED_MARKERS = ("data:", "placeholder", "logo", "icon", "avatar", "banner")
MIN_URL_LENGTH = 11

TOP_PRIORITY_MARKERS = ("product", "main", "hero")
MID_PRIORITY_MARKERS = ("image", "photo")


def resolve_image_url(src: str, origin: str) -> str:
    """
    Make an image src absolute against the page origin.

    ``//cdn/x.jpg`` becomes https, ``/x.jpg`` and bare relative paths are joined to the origin.
    """
    if src.startswith("//"):
        return "https:" + src
    if src.startswith("/"):
        return origin + src
    if not src.startswith(("http://", "https://")):
        return f"{origin}/{src}"
    return src


def is_valid_image(src: str) -> bool:
    """Reject data URIs, placeholder-like names and URLs shorter than MIN_URL_LENGTH"""
    if len(src) < MIN_URL_LENGTH:
        return False
    return not any(marker in src for marker in REJECTED_MARKERS)


def image_priority(src: str) -> int:
    if any(marker in src for marker in TOP_PRIORITY_MARKERS):
        return 3
    if any(marker in src for marker in MID_PRIORITY_MARKERS):
        return 2
    return 1


def rank_images(candidates: Iterable[ImageCandidate], limit: Optional[int] = MAX_IMAGES) -> List[ImageCandidate]:
    """Sort by priority, highest first. The sort is stable, so ties keep discovery order."""
    ranked = sorted(candidates, key=lambda candidate: image_priority(candidate.src), reverse=True)
    return ranked[:limit] if limit is not None else ranked


def _element_source(el) -> Optional[str]:
    for attr in SOURCE_ATTRIBUTES:
        value = str(el.get(attr) or "").strip()
        if value:
            return value
    return None


def discover_images(parser: HTMLParser) -> List[ImageCandidate]:
    """
    Collect valid, de-duplicated image candidates in selector-tier order.

    The first alt text seen for a URL is kept.
    """
    seen = set()
    candidates: List[ImageCandidate] = []

    for selector in IMAGE_SELECTORS:
        for el in parser.select(selector):
            src = _element_source(el)
            if not src:
                continue

            resolved = resolve_image_url(src, parser.origin)
            if resolved in seen:
                continue
            if not is_valid_image(resolved):
                logger.debug(f"Filtered out image: {resolved}")
                continue

            seen.add(resolved)
            alt = el.get("alt") or ""
            candidates.append(ImageCandidate(src=resolved, alt=str(alt)))

    logger.debug(f"Discovered {len(candidates)} images on {parser.url}")
    return candidates


def select_images(parser: HTMLParser, limit: int = MAX_IMAGES) -> List[ImageCandidate]:
    """Discover and rank the page's images, best first"""
    return rank_images(discover_images(parser), limit)
