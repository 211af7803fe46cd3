"""Order-preserving chunking."""

from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive, non-overlapping slices of at most `size` items."""
    if size < 1:
        raise ValueError("size must be >= 1")
    for i in range(0, len(items), size):
        yield list(items[i : i + size])
