"""Exceptions for the content bounded context.

These represent the terminal rejection states of a tenant-scoped request.
They are raised by the application layer and translated to HTTP responses
by the presentation layer. None of them carry entry data.
"""


class UnauthenticatedError(Exception):
    """Raised when a request has no resolvable tenant context."""

    pass


class EntryNotFoundError(Exception):
    """Raised when an addressed entry does not exist."""

    def __init__(self, content_type: str, entry_id: str):
        self.content_type = content_type
        self.entry_id = entry_id
        super().__init__(f"Entry {entry_id} of {content_type} not found")


class TenantAccessDeniedError(Exception):
    """Raised when an addressed entry belongs to another tenant.

    Raised before any mutation is attempted.
    """

    pass


class UnknownContentTypeError(Exception):
    """Raised when a collection is not a tenant-owned content type."""

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f"Unknown content type: {collection}")
