"""Dot-path lookup into nested API responses."""

from typing import Any

from stat_sync.errors import PathNotFoundError


def split_path(path: str) -> list[str]:
    return path.split(".")


def top_level_part(path: str) -> str:
    """First segment of a statistic path (the YouTube `part` to request)."""
    return split_path(path)[0]


def get_path(obj: Any, path: str) -> Any:
    """
    Walk `path` (property names separated by '.') into obj.
    Raises PathNotFoundError naming the first missing segment.
    """
    value = obj
    for segment in split_path(path):
        if isinstance(value, dict) and segment in value:
            value = value[segment]
        elif isinstance(value, list) and segment.isdigit() and int(segment) < len(value):
            value = value[int(segment)]
        else:
            raise PathNotFoundError(segment, path)
    return value
