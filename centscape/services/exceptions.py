"""Custom exception hierarchy for the service layer"""


class ServiceError(Exception):
    """Base exception for all service-related errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Raised when input validation fails"""
    def __init__(self, message: str = "Invalid input provided"):
        super().__init__(message, "VALIDATION_ERROR")


class MissingUrlError(ValidationError):
    """Raised when no URL was supplied"""
    def __init__(self, message: str = "URL is required"):
        super().__init__(message)


class MissingContentError(ValidationError):
    """Raised when neither a URL nor raw HTML was supplied"""
    def __init__(self, message: str = "Either url or raw_html must be provided"):
        super().__init__(message)


class InvalidUrlError(ValidationError):
    """Raised when the input is not an absolute http(s) URL"""
    def __init__(self, url: str = "", message: str = None):
        if message is None:
            message = f"Invalid URL provided: {url}" if url else "Invalid URL provided"
        super().__init__(message)
        self.url = url


class PrivateHostError(InvalidUrlError):
    """Raised when a URL points at a local or private-network host"""
    def __init__(self, url: str = ""):
        super().__init__(url, f"URL points at a private or local host: {url}")


class FetchError(ServiceError):
    """Raised when the page at a URL cannot be retrieved"""
    def __init__(self, url: str, reason: str = "request failed"):
        super().__init__(f"Failed to fetch {url}: {reason}", "FETCH_ERROR")
        self.url = url
        self.reason = reason


class HTTPFetchError(FetchError):
    """Raised when the server answers with a non-success status"""
    def __init__(self, url: str, status_code: int, reason: str = None):
        if reason is None:
            reason = f"HTTP request failed with status code {status_code}"
        super().__init__(url, reason)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """Raised when the page is not retrieved within the configured timeout"""
    def __init__(self, url: str, timeout_ms: int):
        super().__init__(url, f"timed out after {timeout_ms}ms")
        self.timeout_ms = timeout_ms


class ParseError(ServiceError):
    """Raised when markup cannot be parsed into a document at all"""
    def __init__(self, url: str, reason: str = "Error parsing content"):
        super().__init__(f"Failed to parse {url}: {reason}", "PARSE_ERROR")
        self.url = url
        self.reason = reason
