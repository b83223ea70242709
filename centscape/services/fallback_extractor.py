import logging
from typing import Optional, List

from centscape.core.models import FallbackMetadata, ImageCandidate, PriceInfo
from .html_parser import HTMLParser
from .image_selector import select_images
from .metadata_extractor_utils import first_match, non_empty, longer_than, shorter_than, is_parseable_date
from .price_parser import PRICE_SELECTORS, parse_price, find_price_in_text


logger = logging.getLogger(__name__)


TITLE_CLASS_SELECTOR = ".title, .post-title, .article-title, .entry-title"
TITLE_TEST_ID_SELECTOR = '[data-testid*="title"], [data-test*="title"]'
DESCRIPTION_CLASS_SELECTOR = ".description, .excerpt, .summary, .lead"
AUTHOR_CLASS_SELECTOR = ".author, .byline, .writer"
AUTHOR_REL_SELECTOR = '[rel="author"]'
SITE_AUTHOR_SELECTOR = ".post-author, .article-author"
DATE_CLASS_SELECTOR = ".published, .date, .post-date"

PARAGRAPH_DESCRIPTION_LENGTH = 200
MIN_DESCRIPTION_LENGTH = 10
MAX_AUTHOR_LENGTH = 100
DEFAULT_LANGUAGE = "en"
TITLE_SEPARATOR = " | "


class FallbackExtractor:
    """
    Extracts metadata heuristically from visible markup.

    Each field is an ordered chain of sources; the first value the field's validator
    accepts wins. A source that finds nothing never raises, the chain moves on.
    """

    def __init__(self, html_parser: HTMLParser):
        self.parser = html_parser

    def extract(self) -> FallbackMetadata:
        """Run every field chain and collect the results"""
        fallback = FallbackMetadata(
            title=self.extract_title(),
            description=self.extract_description(),
            images=self.extract_images(),
            price=self.extract_price(),
            author=self.extract_author(),
            publish_date=self.extract_publish_date(),
            language=self.extract_language(),
            site_name=self.extract_site_name()
        )
        found = sum(1 for value in vars(fallback).values() if value)
        logger.info(f"Fallback: extracted {found} properties for URL: {self.parser.url}")
        return fallback

    def extract_title(self) -> Optional[str]:
        return first_match([
            lambda: self.parser.first_text("h1"),
            lambda: self.parser.get_document_title(),
            lambda: self.parser.first_text(TITLE_CLASS_SELECTOR),
            lambda: self.parser.first_text(TITLE_TEST_ID_SELECTOR),
        ], non_empty)

    def extract_description(self) -> Optional[str]:
        return first_match([
            lambda: self.parser.get_meta_content("description"),
            lambda: self.parser.first_text(DESCRIPTION_CLASS_SELECTOR),
            lambda: self.parser.first_text("p")[:PARAGRAPH_DESCRIPTION_LENGTH],
        ], longer_than(MIN_DESCRIPTION_LENGTH))

    def extract_images(self) -> List[ImageCandidate]:
        images = select_images(self.parser)
        if images:
            logger.debug(f"Top images: {[image.src for image in images[:3]]}")
        return images

    def extract_price(self) -> Optional[PriceInfo]:
        """
        Structured price selectors first, then a scan of the visible page text
        """
        for selector in PRICE_SELECTORS:
            price = parse_price(self.parser.first_text(selector))
            if price:
                logger.debug(f"Price found with selector {selector!r}: {price.raw}")
                return price

        return find_price_in_text(self.parser.get_visible_text())

    def extract_author(self) -> Optional[str]:
        return first_match([
            lambda: self.parser.get_meta_content("author"),
            lambda: self.parser.first_text(AUTHOR_CLASS_SELECTOR),
            lambda: self.parser.first_text(AUTHOR_REL_SELECTOR),
            lambda: self.parser.first_text(SITE_AUTHOR_SELECTOR),
        ], shorter_than(MAX_AUTHOR_LENGTH))

    def extract_publish_date(self) -> Optional[str]:
        return first_match([
            lambda: self.parser.get_meta_content("publish_date"),
            lambda: self.parser.first_attr("time[datetime]", "datetime"),
            lambda: self.parser.first_text(DATE_CLASS_SELECTOR),
        ], is_parseable_date)

    def extract_language(self) -> str:
        return (
            self.parser.get_language()
            or self.parser.first_attr('meta[http-equiv="content-language" i]', "content")
            or DEFAULT_LANGUAGE
        )

    def extract_site_name(self) -> Optional[str]:
        return first_match([
            lambda: self.parser.get_meta_content("application-name"),
            lambda: self.parser.get_meta_content("site_name"),
            lambda: self.parser.get_document_title().split(TITLE_SEPARATOR)[-1].strip(),
        ], non_empty)
