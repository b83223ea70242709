import re
from datetime import datetime, timezone
from typing import Tuple

from fastapi import APIRouter, Request

from centscape.core.config import settings

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_version(version: str) -> Tuple[int, int, int]:
    """Leading digits of each dotted part; missing or non-numeric parts count as 0"""
    parts = (version.strip().lstrip("vV").split(".") + ["", ""])[:3]
    numbers = []
    for part in parts:
        match = re.match(r"\d+", part.strip())
        numbers.append(int(match.group(0)) if match else 0)
    return numbers[0], numbers[1], numbers[2]


@router.get("/health")
async def health():
    return {
        "success": True,
        "data": {
            "status": "OK",
            "timestamp": _timestamp(),
            "version": settings.api_version,
            "environment": settings.environment,
            "debug": settings.is_development
        }
    }


@router.get("/version")
async def version():
    major, minor, patch = parse_version(settings.api_version)
    return {
        "success": True,
        "data": {
            "version": settings.api_version,
            "major": major,
            "minor": minor,
            "patch": patch,
            "environment": settings.environment,
            "timestamp": _timestamp()
        }
    }


@router.get("/server-info")
async def server_info(request: Request):
    return {
        "baseurl": str(request.base_url).rstrip("/"),
        "version": settings.api_version,
        "environment": settings.environment,
        "timestamp": _timestamp()
    }
