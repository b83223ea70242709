import ipaddress
from urllib.parse import urlsplit
from abc import ABC, abstractmethod


ALLOWED_SCHEMES = ("http", "https")

# Code points a host may never contain
FORBIDDEN_HOST_CHARS = frozenset(" #%/:<>?@[\\]^|")

BLOCKED_HOSTNAMES = ("localhost",)


class URLValidatorInterface(ABC):
    """Interface for URL validation following the Dependency Inversion Principle"""

    @abstractmethod
    def validate(self, url: str) -> bool:
        """
        Validate a URL to check if it's properly formatted.

        Args:
            url: The URL string to validate

        Returns:
            True if the URL is valid, False otherwise
        """
        pass


def is_valid_hostname(hostname: str) -> bool:
    """
    Check a parsed hostname for forbidden characters and malformed labels.

    Bracketed IPv6 literals arrive without their brackets and are checked as addresses.
    """
    if not hostname:
        return False
    if ":" in hostname:
        try:
            ipaddress.IPv6Address(hostname)
            return True
        except ValueError:
            return False

    if any(ch in FORBIDDEN_HOST_CHARS or ch.isspace() for ch in hostname):
        return False
    try:
        hostname.encode("idna")
    except UnicodeError:
        return False
    return True


def is_private_host(hostname: str) -> bool:
    """
    True for localhost and for loopback, private, link-local or reserved IP literals.

    Names are not resolved; only the literal host is inspected.
    """
    hostname = (hostname or "").lower().rstrip(".")
    if hostname in BLOCKED_HOSTNAMES or hostname.endswith(".localhost"):
        return True
    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
        or address.is_multicast
    )


class URLValidator(URLValidatorInterface):
    """
    Accepts absolute http and https URLs with a well-formed host.
    """

    def validate(self, url: str) -> bool:
        """
        Validate that the URL is absolute and uses http or https.

        Args:
            url: The URL string to validate

        Returns:
            True if the URL is valid, False otherwise
        """
        if not isinstance(url, str):
            return False
        try:
            parsed = urlsplit(url.strip())
            if parsed.scheme.lower() not in ALLOWED_SCHEMES:
                return False
            if not parsed.netloc or not is_valid_hostname(parsed.hostname):
                return False

            # Check port validity
            if parsed.port is not None:
                if parsed.port < 1 or parsed.port > 65535:
                    return False

            return True
        except ValueError:
            return False


def is_valid_url(url: str) -> bool:
    return URLValidator().validate(url)
