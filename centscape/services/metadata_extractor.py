import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, List

from centscape.core.models import (
    ExtractedMetadata,
    FallbackMetadata,
    ImageCandidate,
    PriceInfo,
    ResolvedMetadata,
    StructuredTags,
)
from .fallback_extractor import FallbackExtractor
from .html_parser import HTMLParser
from .image_selector import rank_images
from .web_fetcher import WebFetcherInterface


logger = logging.getLogger(__name__)


DEFAULT_TITLE = "No title found"
DEFAULT_TYPE = "website"
DEFAULT_CURRENCY = "USD"

# Structured price tag pairs, in precedence order
STRUCTURED_PRICE_KEYS = (
    ("product_price_amount", "product_price_currency"),
    ("og_price_amount", "og_price_currency"),
)


class MetadataExtractorInterface(ABC):
    """Interface for metadata extraction following the Dependency Inversion Principle"""

    @abstractmethod
    def extract(self, html: str, url: str) -> ExtractedMetadata:
        pass

    @abstractmethod
    async def extract_metadata(self, url: str) -> ExtractedMetadata:
        pass


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


class MetadataExtractor(MetadataExtractorInterface):
    """
    Extracts a product page's metadata from Open Graph, Twitter Card and fallback markup,
    then resolves them into one record.

    Holds no per-page state, so one instance can serve concurrent calls.
    """

    def __init__(self, web_fetcher: WebFetcherInterface):
        self.web_fetcher = web_fetcher

    async def extract_metadata(self, url: str) -> ExtractedMetadata:
        """
        Fetch ``url`` and extract its metadata.

        Raises:
            FetchError: If the page cannot be retrieved
            ParseError: If the markup cannot be parsed at all
        """
        logger.info(f"Extracting metadata from: {url}")
        html = await self.web_fetcher.fetch_html(url)
        return self.extract(html, url)

    def extract(self, html: str, url: str) -> ExtractedMetadata:
        """Extract metadata from already fetched HTML"""
        html_parser = HTMLParser(html, url)

        open_graph = html_parser.get_open_graph()
        twitter_card = html_parser.get_twitter_card()
        fallback = FallbackExtractor(html_parser).extract()

        metadata = ExtractedMetadata(
            url=url,
            timestamp=datetime.now(timezone.utc).isoformat(),
            open_graph=open_graph,
            twitter_card=twitter_card,
            fallback=fallback,
            resolved=self.resolve(open_graph, twitter_card, fallback)
        )
        logger.info(f"Successfully extracted metadata for URL: {url}")
        return metadata

    def resolve(
        self,
        open_graph: Optional[StructuredTags],
        twitter_card: Optional[StructuredTags],
        fallback: FallbackMetadata
    ) -> ResolvedMetadata:
        """
        Merge the three views. For each field: Open Graph, then Twitter Card,
        then the fallback value, then the field default.
        """
        og = open_graph or {}
        twitter = twitter_card or {}

        return ResolvedMetadata(
            title=_first(og.get("og_title"), twitter.get("title"), fallback.title) or DEFAULT_TITLE,
            description=_first(og.get("og_description"), twitter.get("description"), fallback.description),
            image=self._resolve_image(og, twitter, fallback.images),
            author=_first(og.get("article_author"), twitter.get("creator"), fallback.author),
            publish_date=_first(og.get("article_published_time"), fallback.publish_date),
            price=self._resolve_price(og) or fallback.price,
            site_name=_first(og.get("og_site_name"), twitter.get("site"), fallback.site_name),
            type=_first(og.get("og_type"), twitter.get("card")) or DEFAULT_TYPE,
            language=fallback.language or "en"
        )

    @staticmethod
    def _resolve_image(og: StructuredTags, twitter: StructuredTags, images: List[ImageCandidate]) -> Optional[str]:
        structured = _first(og.get("og_image"), twitter.get("image"), twitter.get("image:src"))
        if structured:
            return structured

        ranked = rank_images(images, limit=1)
        return ranked[0].src if ranked else None

    @staticmethod
    def _resolve_price(og: StructuredTags) -> Optional[PriceInfo]:
        """A structured price pair supplies the whole PriceInfo; partial fields are never merged"""
        for amount_key, currency_key in STRUCTURED_PRICE_KEYS:
            raw = og.get(amount_key)
            if not raw:
                continue
            try:
                amount = float(raw.replace(",", ""))
            except ValueError:
                logger.warning(f"Ignoring unparseable structured price {raw!r}")
                continue
            return PriceInfo(raw=raw, amount=amount, currency=og.get(currency_key) or DEFAULT_CURRENCY)
        return None
