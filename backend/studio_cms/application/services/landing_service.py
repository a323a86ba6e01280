"""Landing read model — what a visitor sees on the public site.

Every ordered section is cut to its first ``LANDING_SIZE`` records. Reviews
are the exception: the landing page shows a random sample of them.
Portfolio media links are normalized so Google Drive share links render
as embeddable thumbnails and players.
"""

import logging
import random
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

from studio_cms.application.interfaces import RecordStore
from studio_cms.application.services.footer_service import FOOTER_PATH
from studio_cms.application.services.ordered_collection_view import derive
from studio_cms.domain.collections import (
    FEATURES,
    PORTFOLIO_GRAPHICS,
    PORTFOLIO_VIDEOS,
    PRICING_INDIVIDUAL,
    PRICING_MONTHLY,
    REVIEWS,
    SERVICES,
    CollectionSchema,
)
from studio_cms.domain.entities import Footer, OrderedRecord

logger = logging.getLogger(__name__)

LANDING_SIZE = 3
LANDING_THUMBNAIL_WIDTH = 1600
EDITOR_THUMBNAIL_WIDTH = 800

_DRIVE_HOST = re.compile(r"^(https?://)?(drive\.google\.com|docs\.google\.com)", re.IGNORECASE)
_DRIVE_FILE_PATH = re.compile(r"/file/d/([^/?#]+)")


# ── Google Drive links ──────────────────────────────────────────────


def is_drive_url(url: str) -> bool:
    return bool(url) and _DRIVE_HOST.match(url.strip()) is not None


def extract_drive_file_id(url: str) -> str | None:
    """File id from ``/file/d/<id>/...`` or ``?id=<id>`` Drive links."""
    if not is_drive_url(url):
        return None
    match = _DRIVE_FILE_PATH.search(url)
    if match:
        return match.group(1)
    candidate = url.strip()
    if not candidate.lower().startswith(("http://", "https://")):
        candidate = "https://" + candidate
    ids = parse_qs(urlparse(candidate).query).get("id")
    return ids[0] if ids else None


def drive_thumbnail_url(file_id: str, width: int = LANDING_THUMBNAIL_WIDTH) -> str:
    return f"https://drive.google.com/thumbnail?id={file_id}&sz=w{width}"


def drive_image_fallbacks(file_id: str, width: int = LANDING_THUMBNAIL_WIDTH) -> list[str]:
    """Alternate image URLs, tried in order when the thumbnail fails to load."""
    return [
        f"https://drive.google.com/uc?export=view&id={file_id}",
        f"https://lh3.googleusercontent.com/d/{file_id}=w{width}",
    ]


def drive_preview_url(file_id: str) -> str:
    return f"https://drive.google.com/file/d/{file_id}/preview"


def normalize_image(url: str, width: int = LANDING_THUMBNAIL_WIDTH) -> dict[str, Any]:
    file_id = extract_drive_file_id(url)
    if file_id is None:
        return {"src": url, "fallbacks": []}
    return {"src": drive_thumbnail_url(file_id, width), "fallbacks": drive_image_fallbacks(file_id, width)}


def normalize_video(url: str) -> dict[str, Any]:
    file_id = extract_drive_file_id(url)
    if file_id is None:
        return {"src": url, "embed": False}
    return {"src": drive_preview_url(file_id), "embed": True}


# ── Read model ──────────────────────────────────────────────────────


class LandingService:
    """One-shot reads of public content, shaped for rendering."""

    def __init__(self, store: RecordStore, rng: random.Random | None = None):
        self._store = store
        self._rng = rng or random.Random()

    async def _section(self, schema: CollectionSchema, limit: int | None = LANDING_SIZE) -> list[OrderedRecord]:
        raw = await self._store.read_tree(schema.path)
        records = derive(raw, schema.partition_field, schema.partition_value)
        return records if limit is None else records[:limit]

    async def features(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in await self._section(FEATURES)]

    async def services(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in await self._section(SERVICES)]

    async def portfolio(self) -> dict[str, list[dict[str, Any]]]:
        graphics = []
        for record in await self._section(PORTFOLIO_GRAPHICS):
            item = record.to_dict()
            item["image"] = normalize_image(str(record.get("imageUrl", "")))
            graphics.append(item)

        videos = []
        for record in await self._section(PORTFOLIO_VIDEOS):
            item = record.to_dict()
            item["video"] = normalize_video(str(record.get("videoUrl", "")))
            videos.append(item)

        return {"graphics": graphics, "videos": videos}

    async def pricing(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "monthly": [r.to_dict() for r in await self._section(PRICING_MONTHLY)],
            "individual": [r.to_dict() for r in await self._section(PRICING_INDIVIDUAL)],
        }

    async def reviews(self, size: int = LANDING_SIZE) -> list[dict[str, Any]]:
        records = await self._section(REVIEWS, limit=None)
        if len(records) > size:
            records = self._rng.sample(records, size)
        return [r.to_dict() for r in records]

    async def footer(self) -> Footer:
        return Footer.from_raw(await self._store.read_tree(FOOTER_PATH))
