"""HTML parsing utilities for metadata extraction"""

import logging
from typing import Optional, List, Dict
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Comment, ParserRejectedMarkup, Tag

from .exceptions import ParseError


logger = logging.getLogger(__name__)


# Namespaces read from meta[property] (Open Graph family) and meta[name] (Twitter)
OPEN_GRAPH_NAMESPACES = ("og", "article", "product")
TWITTER_NAMESPACE = "twitter"

NON_VISIBLE_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title"})


class HTMLParser:
    """Encapsulates HTML parsing functionality"""

    def __init__(self, html: str, url: str):
        """
        Initialize the HTML parser

        Args:
            html: HTML content to parse
            url: Page URL, used as the origin for resolving relative links

        Raises:
            ParseError: If the markup cannot be turned into a document
        """
        self.html = html
        self.url = url
        try:
            self.soup = BeautifulSoup(html, "lxml")
        except (ParserRejectedMarkup, TypeError, ValueError) as e:
            logger.error(f"Failed to parse HTML for URL {url}: {str(e)}")
            raise ParseError(url, str(e)) from e

        parsed = urlsplit(url)
        self.origin = f"{parsed.scheme}://{parsed.netloc}"

    def get_meta_content(self, value: str, attr: str = "name") -> Optional[str]:
        """Return the content of the first meta tag whose ``attr`` equals ``value``"""
        el = self.soup.find("meta", attrs={attr: value})
        if el is None:
            return None
        content = el.get("content")
        return str(content) if content else None

    def select(self, selector: str) -> List[Tag]:
        return self.soup.select(selector)

    def first_text(self, selector: str) -> str:
        """Trimmed text of the first element matching ``selector``, or an empty string"""
        el = self.soup.select_one(selector)
        if el is None:
            return ""
        return el.get_text().strip()

    def first_attr(self, selector: str, attr: str) -> Optional[str]:
        el = self.soup.select_one(selector)
        if el is None:
            return None
        value = el.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return value or None

    def get_document_title(self) -> str:
        return self.first_text("title")

    def get_language(self) -> Optional[str]:
        """Extract language from the html tag"""
        html_tag = self.soup.find("html")
        if html_tag is None:
            return None
        lang = html_tag.get("lang")
        if not lang:
            return None
        return str(lang).strip() or None

    def get_visible_text(self) -> str:
        """Text of the body, skipping scripts, styles and comments"""
        root = self.soup.body or self.soup
        chunks = []
        for text in root.find_all(string=True):
            if isinstance(text, Comment) or text.parent.name in NON_VISIBLE_TAGS:
                continue
            stripped = text.strip()
            if stripped:
                chunks.append(stripped)
        return " ".join(chunks)

    def get_open_graph(self) -> Optional[Dict[str, str]]:
        """
        Extract Open Graph, article and product tags.

        Keys become ``<namespace>_<name>`` with any further colons turned into underscores,
        e.g. ``product:price:amount`` -> ``product_price_amount``. Returns None when no tag is present.
        """
        selectors = [f'meta[property^="{namespace}:"]' for namespace in OPEN_GRAPH_NAMESPACES]
        tags = self._collect_tags(selectors, "property", keep_namespace=True)
        logger.debug(f"Open Graph: found {len(tags)} properties")
        return tags or None

    def get_twitter_card(self) -> Optional[Dict[str, str]]:
        """Extract Twitter Card tags with the ``twitter:`` prefix stripped. Returns None when absent."""
        tags = self._collect_tags([f'meta[name^="{TWITTER_NAMESPACE}:"]'], "name", keep_namespace=False)
        logger.debug(f"Twitter Card: found {len(tags)} properties")
        return tags or None

    def _collect_tags(self, selectors: List[str], attr: str, keep_namespace: bool) -> Dict[str, str]:
        tags: Dict[str, str] = {}
        for selector in selectors:
            for el in self.soup.select(selector):
                name = el.get(attr)
                content = el.get("content")
                if not name or not content:
                    continue

                namespace, _, local_name = str(name).partition(":")
                if keep_namespace:
                    key = f"{namespace}_{local_name.replace(':', '_')}"
                else:
                    key = local_name

                # First occurrence wins, e.g. the primary og:image
                tags.setdefault(key, str(content))
        return tags
