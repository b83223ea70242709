from typing import Optional

from pydantic import BaseModel


class UrlRequest(BaseModel):
    # Optional so a missing url is reported as MISSING_URL rather than a schema error
    url: Optional[str] = None


class PreviewRequest(BaseModel):
    url: Optional[str] = None
    raw_html: Optional[str] = None


class PreviewResponse(BaseModel):
    title: str
    image: Optional[str] = None
    price: Optional[str] = None
    currency: Optional[str] = None
    siteName: Optional[str] = None
    sourceUrl: str
