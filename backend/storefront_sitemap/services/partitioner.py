"""
Splitting of the merged URL list into indexed sitemap files
"""

import math
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def chunk_count(total_entries: int, chunk_size: int) -> int:
    """Number of sitemap files needed for total_entries"""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return math.ceil(total_entries / chunk_size)


def select_page(entries: Sequence[T], chunk_size: int, page_index: object) -> Optional[List[T]]:
    """
    Select the 1-indexed chunk of entries

    Chunk k holds entries[(k - 1) * chunk_size:k * chunk_size].

    Returns:
        The chunk, or None when page_index is not a positive integer, is past
        the last chunk, or when all entries fit in a single sitemap
    """
    if isinstance(page_index, bool) or not isinstance(page_index, int) or page_index < 1:
        return None

    if len(entries) <= chunk_size:
        return None

    if page_index > chunk_count(len(entries), chunk_size):
        return None

    start = (page_index - 1) * chunk_size
    return list(entries[start:start + chunk_size])


def index_urls(base_url: str, total_chunks: int) -> List[str]:
    """Pointer URLs for the sitemap index, one per chunk"""
    base_url = base_url.rstrip("/")
    return [f"{base_url}/sitemap/{number}.xml" for number in range(1, total_chunks + 1)]
