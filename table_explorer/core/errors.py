"""
Error Taxonomy

Every failure the backend reports belongs to one of these classes. The API
turns them into a 500 response carrying the message and the ``kind`` so
callers can branch on the category instead of the message text.
"""

from typing import Optional


class TableExplorerError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str, table_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table_name = table_name

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


class BackendUnavailable(TableExplorerError):
    """The table store could not be reached (network, credentials, throttling)."""


class TableNotFound(TableExplorerError):
    """The table identifier is unknown to the store."""


class InvalidQuery(TableExplorerError):
    """The store rejected a key condition or expression."""


class ItemConflict(TableExplorerError):
    """A conditional write was rejected by the store."""


class GenerationFailed(TableExplorerError):
    """The text-generation provider call failed."""
