"""Domain exceptions raised by services and caught by the app's exception handlers.

Handlers in main.py translate them into the standard error envelope:
{"error": {"code": "...", "message": "..."}}.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class ForbiddenError(DomainError):
    """Raised when the caller does not own the requested entity."""


class SearchExpiredError(DomainError):
    """Raised when a finished search's cached results are no longer available."""

    def __init__(self, search_id: str) -> None:
        self.search_id = search_id
        super().__init__(f"Results for search {search_id} have expired")


class OfferUnavailableError(DomainError):
    """Raised when booking an offer that is no longer available."""
