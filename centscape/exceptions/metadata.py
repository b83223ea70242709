from centscape.services.exceptions import (
    FetchError,
    InvalidUrlError,
    MissingContentError,
    MissingUrlError,
    ParseError,
    ServiceError,
)
from .base import AppException, ErrorCode


class MissingURLException(AppException):
    """Raised when the request carries no URL"""

    def __init__(self, message: str = "URL is required"):
        super().__init__(
            code=ErrorCode.MISSING_URL,
            message=message,
            status_code=400
        )


class MissingContentException(AppException):
    """Raised when a preview request has neither url nor raw_html"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.MISSING_CONTENT,
            message="Either url or raw_html must be provided",
            status_code=400
        )


class InvalidURLException(AppException):
    """Raised when the URL is not an absolute http(s) URL"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.INVALID_URL,
            message="Invalid URL provided",
            status_code=400,
            details={"url": url} if url else None
        )


class FetchFailedException(AppException):
    """Raised when the target page could not be fetched or parsed"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.FETCH_FAILED,
            message="Failed to fetch URL - site may be blocking requests",
            status_code=400,
            details={"url": url} if url else None
        )


class ExtractionFailedException(AppException):
    """Raised when extraction fails for a reason other than fetching"""

    def __init__(self, message: str = "Metadata extraction failed"):
        super().__init__(
            code=ErrorCode.EXTRACTION_ERROR,
            message=message,
            status_code=500
        )


class NormalizationFailedException(AppException):
    """Raised when URL normalization fails unexpectedly"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.NORMALIZATION_ERROR,
            message="URL normalization failed",
            status_code=500
        )


class MissingImageURLException(AppException):
    """Raised when an image proxy request carries no URL"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.MISSING_IMAGE_URL,
            message="Image URL is required",
            status_code=400
        )


class InvalidImageURLException(AppException):
    """Raised when the image URL is invalid or points at a private host"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.INVALID_IMAGE_URL,
            message="Invalid image URL provided",
            status_code=400,
            details={"url": url} if url else None
        )


class ProxyFailedException(AppException):
    """Raised when the upstream image cannot be relayed"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.PROXY_ERROR,
            message="Failed to proxy image",
            status_code=500
        )


def map_image_proxy_error(error: ServiceError) -> AppException:
    if isinstance(error, MissingUrlError):
        return MissingImageURLException()
    if isinstance(error, InvalidUrlError):
        return InvalidImageURLException(error.url)
    return ProxyFailedException()


def map_service_error(error: ServiceError, default: AppException) -> AppException:
    """Translate a service-layer error into the API exception the caller should see"""
    if isinstance(error, MissingContentError):
        return MissingContentException()
    if isinstance(error, MissingUrlError):
        return MissingURLException(error.message)
    if isinstance(error, InvalidUrlError):
        return InvalidURLException(error.url)
    if isinstance(error, (FetchError, ParseError)):
        return FetchFailedException(error.url)
    return default
