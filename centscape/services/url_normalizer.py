"""Canonicalization of product URLs for caching and duplicate detection"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple
from urllib.parse import SplitResult, parse_qsl, urlencode, urlsplit, urlunsplit

from centscape.core.models import NormalizedUrl
from .url_validator import is_valid_hostname, is_valid_url


logger = logging.getLogger(__name__)


# Query parameters that never affect which product a URL points at
TRACKING_PARAMS = frozenset({
    "ref", "source", "campaign", "medium",
    "fbclid", "gclid", "msclkid",
    "mc_cid", "mc_eid", "mc_tc", "mc_rid",
})
TRACKING_PREFIXES = ("utm_",)


@dataclass(frozen=True)
class MerchantRule:
    """
    Canonicalization rule for one merchant.

    ``marker`` is matched as a substring of the hostname. The first pattern that matches the
    path yields the product id, and the canonical URL is ``origin + canonical_prefix + id``.
    """
    marker: str
    patterns: Tuple[Pattern, ...]
    canonical_prefix: str

    def match(self, path: str) -> Optional[str]:
        for pattern in self.patterns:
            found = pattern.search(path)
            if found:
                return found.group(1)
        return None


MERCHANT_RULES: Tuple[MerchantRule, ...] = (
    MerchantRule(
        marker="amazon",
        patterns=(
            re.compile(r"/dp/([A-Z0-9]{10})"),
            re.compile(r"/gp/product/([A-Z0-9]{10})"),
        ),
        canonical_prefix="/dp/",
    ),
    MerchantRule(
        marker="flipkart",
        patterns=(re.compile(r"/p/([a-zA-Z0-9]+)"),),
        canonical_prefix="/p/",
    ),
    MerchantRule(
        marker="myntra",
        patterns=(re.compile(r"/product/([a-zA-Z0-9-]+)"),),
        canonical_prefix="/product/",
    ),
)


def is_tracking_param(key: str) -> bool:
    lowered = key.lower()
    return lowered in TRACKING_PARAMS or lowered.startswith(TRACKING_PREFIXES)


def _origin(parts: SplitResult) -> str:
    host_port = parts.netloc.rpartition("@")[2].lower()
    return f"{parts.scheme.lower()}://{host_port}"


class UrlNormalizer:
    """
    Turns marketing-tagged product URLs into stable canonical URLs.

    Known merchants are reduced to ``origin + prefix + product id``; every other URL only
    has its tracking parameters removed. Normalizing a normalized URL returns it unchanged.
    """

    def __init__(self, rules: Tuple[MerchantRule, ...] = MERCHANT_RULES):
        self.rules = rules

    def normalize(self, url_string: str) -> NormalizedUrl:
        """Normalize a URL. Never raises; unparseable input is returned as-is."""
        try:
            parts = urlsplit(url_string)
            hostname = parts.hostname
            # Accessing the port validates it
            parts.port
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug(f"Could not parse URL {url_string!r}: {e}")
            return self._unparseable(url_string)

        if not parts.scheme or not is_valid_hostname(hostname):
            logger.debug(f"URL has no scheme or a malformed host: {url_string!r}")
            return self._unparseable(url_string)

        for rule in self.rules:
            if rule.marker in hostname:
                return self._apply_merchant_rule(rule, url_string, parts, hostname)

        return self._remove_tracking_params(url_string, parts, hostname)

    @staticmethod
    def is_valid_url(url_string: str) -> bool:
        """True iff the string is an absolute http or https URL"""
        return is_valid_url(url_string)

    def _apply_merchant_rule(self, rule: MerchantRule, url_string: str, parts: SplitResult, hostname: str) -> NormalizedUrl:
        product_id = rule.match(parts.path)
        if product_id is None:
            logger.debug(f"No {rule.marker} product id in path {parts.path!r}")
            return self._remove_tracking_params(url_string, parts, hostname)

        normalized = _origin(parts) + rule.canonical_prefix + product_id
        logger.info(f"Canonicalized {rule.marker} URL to {normalized}")
        return NormalizedUrl(
            original=url_string,
            normalized=normalized,
            cleaned=True,
            product_id=product_id,
            hostname=hostname
        )

    def _remove_tracking_params(self, url_string: str, parts: SplitResult, hostname: str) -> NormalizedUrl:
        params = parse_qsl(parts.query, keep_blank_values=True)
        kept = [(key, value) for key, value in params if not is_tracking_param(key)]
        if len(kept) != len(params):
            logger.debug(f"Removed {len(params) - len(kept)} tracking parameters from {url_string}")

        userinfo, at, host_port = parts.netloc.rpartition("@")
        normalized = urlunsplit((
            parts.scheme.lower(),
            f"{userinfo}{at}{host_port.lower()}",
            parts.path or "/",
            urlencode(kept),
            parts.fragment,
        ))
        # Generic cleaning never marks the URL as cleaned, even when parameters were dropped
        return NormalizedUrl(
            original=url_string,
            normalized=normalized,
            cleaned=False,
            hostname=hostname
        )

    @staticmethod
    def _unparseable(url_string: str) -> NormalizedUrl:
        return NormalizedUrl(
            original=url_string,
            normalized=url_string,
            cleaned=False,
            hostname="unknown"
        )
