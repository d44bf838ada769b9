"""Shape raw provider image lists into SearchResultImage records."""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from src.core.logger import logger
from src.search.models import SearchResultImage

_WHITESPACE_RUN = re.compile(r"\s+")


def sanitize_url(url: str) -> str:
    """Replace every whitespace run with ``%20``. Idempotent."""
    return _WHITESPACE_RUN.sub("%20", url)


def _annotated(raw: Any) -> SearchResultImage | None:
    if not isinstance(raw, Mapping):
        return None
    url = raw.get("url")
    description = raw.get("description")
    if not isinstance(url, str) or not url:
        return None
    if not isinstance(description, str) or description == "":
        return None
    return SearchResultImage(url=sanitize_url(url), description=description)


def _bare(raw: Any) -> SearchResultImage | None:
    if isinstance(raw, str) and raw:
        return SearchResultImage(url=sanitize_url(raw))
    return None


def normalize_images(
    raw_images: Iterable[Any] | None,
    include_descriptions: bool,
) -> list[SearchResultImage]:
    """Map provider images to the canonical shape, in provider order.

    With descriptions, records lacking a non-empty description are dropped;
    without, each entry is a bare URL string.
    """
    if not raw_images:
        return []
    convert = _annotated if include_descriptions else _bare
    images: list[SearchResultImage] = []
    dropped = 0
    for raw in raw_images:
        image = convert(raw)
        if image is None:
            dropped += 1
            continue
        images.append(image)
    if dropped:
        logger.debug(f"Skipped {dropped} image record(s) without usable url/description")
    return images
