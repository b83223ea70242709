from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


StructuredTags = Dict[str, str]


@dataclass(frozen=True)
class PriceInfo:
    """
    A monetary value found on a page: the source text, its numeric amount and a currency code
    """
    raw: str
    amount: float
    currency: str = "USD"

    def to_dict(self) -> Dict[str, Any]:
        return {"raw": self.raw, "amount": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class ImageCandidate:
    """An image found in the markup, with an absolute src"""
    src: str
    alt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"src": self.src, "alt": self.alt}


@dataclass(frozen=True)
class NormalizedUrl:
    """
    Result of URL canonicalization.

    ``cleaned`` is only True when a merchant product identifier was extracted;
    stripping tracking parameters alone leaves it False.
    """
    original: str
    normalized: str
    cleaned: bool = False
    product_id: Optional[str] = None
    hostname: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "normalized": self.normalized,
            "cleaned": self.cleaned,
            "productId": self.product_id,
            "hostname": self.hostname
        }


@dataclass
class FallbackMetadata:
    """
    Metadata scraped heuristically from visible markup
    """
    title: Optional[str] = None
    description: Optional[str] = None
    images: List[ImageCandidate] = field(default_factory=list)
    price: Optional[PriceInfo] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    language: str = "en"
    site_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "images": [image.to_dict() for image in self.images],
            "price": self.price.to_dict() if self.price else None,
            "author": self.author,
            "publishDate": self.publish_date,
            "language": self.language,
            "siteName": self.site_name
        }


@dataclass
class ResolvedMetadata:
    """
    The single merged record, built from Open Graph, Twitter Card and fallback values
    """
    title: str = "No title found"
    description: Optional[str] = None
    image: Optional[str] = None
    author: Optional[str] = None
    publish_date: Optional[str] = None
    price: Optional[PriceInfo] = None
    site_name: Optional[str] = None
    type: str = "website"
    language: str = "en"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "author": self.author,
            "publishDate": self.publish_date,
            "price": self.price.to_dict() if self.price else None,
            "siteName": self.site_name,
            "type": self.type,
            "language": self.language
        }


@dataclass
class ExtractedMetadata:
    """
    Everything extracted from one page.

    ``open_graph`` and ``twitter_card`` are None when the page carries no such tags.
    """
    url: str
    timestamp: str
    open_graph: Optional[StructuredTags]
    twitter_card: Optional[StructuredTags]
    fallback: FallbackMetadata
    resolved: ResolvedMetadata

    def to_dict(self) -> Dict[str, Any]:
        """Convert the metadata to the JSON payload shape"""
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "openGraph": dict(self.open_graph) if self.open_graph is not None else None,
            "twitterCard": dict(self.twitter_card) if self.twitter_card is not None else None,
            "fallback": self.fallback.to_dict(),
            "resolved": self.resolved.to_dict()
        }

    def to_preview(self, source_url: str) -> Dict[str, Any]:
        """Flatten the resolved record into the legacy preview shape"""
        price = self.resolved.price
        return {
            "title": self.resolved.title or "No title found",
            "image": self.resolved.image,
            "price": price.raw if price else None,
            "currency": price.currency if price else None,
            "siteName": self.resolved.site_name,
            "sourceUrl": source_url
        }
