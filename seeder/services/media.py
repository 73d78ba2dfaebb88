"""Download remote images into the local media directory."""

import logging
import mimetypes
import uuid
from pathlib import Path
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

ALLOWED_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}


def _extension(url: str, content_type: str) -> str:
    suffix = Path(urlparse(url).path).suffix.lower()
    if suffix in {".jpg", ".jpeg", ".png", ".webp", ".gif"}:
        return suffix
    return mimetypes.guess_extension(content_type) or ".jpg"


def download_image(client: httpx.Client, url: str, media_dir: Path) -> Path:
    """Fetch ``url`` and store it under ``media_dir`` with a unique file name.

    Raises ``httpx.HTTPError`` for transport errors, error statuses and
    responses that are not images.
    """
    response = client.get(url, follow_redirects=True)
    response.raise_for_status()

    content_type = response.headers.get("content-type", "").split(";")[0].strip()
    if content_type not in ALLOWED_TYPES:
        raise httpx.HTTPError(f"Unexpected content type '{content_type}' for {url}")

    media_dir.mkdir(parents=True, exist_ok=True)
    filepath = media_dir / f"{uuid.uuid4().hex}{_extension(url, content_type)}"
    filepath.write_bytes(response.content)

    logger.debug(f"Downloaded {url} to {filepath} ({len(response.content)} bytes)")
    return filepath
