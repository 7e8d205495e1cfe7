"""Walk a paginated endpoint until the server reports no further page."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional, TypeVar

from .models import Envelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[int, int], Envelope[List[T]]]


def iter_pages(
    fetch_page: PageFetcher,
    *,
    limit: int = 500,
    start_page: int = 1,
    has_more: Optional[Callable[[Envelope[List[T]]], bool]] = None,
) -> Iterator[List[T]]:
    """Yield the item list of each page, fetching pages one at a time.

    Iteration stops when a page is unsuccessful or empty (nothing is yielded
    for it), or when ``has_more`` returns False for the page just yielded.
    By default ``has_more`` follows ``pagination.hasNextPage``; page totals
    reported by the server are ignored.
    """
    if limit <= 0:
        raise ValueError("limit must be a positive integer")
    if has_more is None:
        has_more = _has_next_page

    page = start_page
    while True:
        envelope = fetch_page(page, limit)
        if not envelope.success:
            logger.warning("Stopping pagination at page %d: %s", page, envelope.error)
            break
        if not envelope.data:
            break

        yield envelope.data

        if not has_more(envelope):
            break
        page += 1


def fetch_all_pages(
    fetch_page: PageFetcher,
    *,
    limit: int = 500,
    start_page: int = 1,
    has_more: Optional[Callable[[Envelope[List[T]]], bool]] = None,
) -> List[T]:
    """Return every item across all pages, in page order."""
    items: List[T] = []
    for page_items in iter_pages(
        fetch_page, limit=limit, start_page=start_page, has_more=has_more
    ):
        items.extend(page_items)
    logger.debug("Fetched %d items in batches of %d", len(items), limit)
    return items


def _has_next_page(envelope: Envelope) -> bool:
    return envelope.has_next_page
