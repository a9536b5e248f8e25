"""
Catalog Exceptions

Failures the catalog surfaces to its callers.

- NotFound: a detail/update request named an id the store doesn't hold.
- SchemaViolation: a value outside its persisted domain reached the store.

Validation failures and blocked deletions are not exceptions: the services
return them as re-rendered pages (see catalog.services.outcomes).
"""


class CatalogError(Exception):
    """Base class for catalog failures rendered on the error page."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(CatalogError):
    """A record looked up on a hard-fail path does not exist."""

    status_code = 404


class SchemaViolation(CatalogError, ValueError):
    """A persisted field was given a value outside its domain."""

    status_code = 400
