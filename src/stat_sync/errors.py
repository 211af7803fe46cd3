"""Error taxonomy for sync runs."""

from typing import Optional


class SyncError(Exception):
    """Base class for errors that abort a sync run."""


class FetchError(SyncError):
    """External metadata API call failed."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseShapeError(FetchError):
    """Response item count does not match the requested identifiers."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Expected {expected} items in response, got {actual}")
        self.expected = expected
        self.actual = actual


class PathNotFoundError(FetchError):
    """A segment of the statistic path is missing from a response item."""

    def __init__(self, segment: str, path: str = ""):
        super().__init__(f'The property "{segment}" is not defined.')
        self.segment = segment
        self.path = path


class StoreError(SyncError):
    """Record store request failed."""


class WriteError(SyncError):
    """A write batch failed. Earlier batches remain committed."""

    def __init__(self, message: str, *, batch_index: int, committed: int):
        super().__init__(message)
        self.batch_index = batch_index
        self.committed = committed


class PermissionDenied(SyncError):
    """Caller may not update the destination field."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class RunInProgressError(SyncError):
    """A run was started while another is still running."""
