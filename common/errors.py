from typing import Dict


class StorefrontError(Exception):
    """Base error carrying an HTTP status and a message safe to show callers."""

    status_code = 500
    default_message = "Unexpected error. Please try again."

    def __init__(self, message: str = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.message}


class InvalidInput(StorefrontError, ValueError):
    status_code = 400
    default_message = "Invalid request."


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found."


class UpstreamUnavailable(NotFound):
    """Catalog was unreachable and the fallback table had no match."""

    status_code = 503
    default_message = "Service temporarily unavailable. Please try again."


class DuplicateLine(StorefrontError):
    status_code = 400
    default_message = "Item already exists in cart. Use update instead."


class LimitExceeded(StorefrontError):
    status_code = 400
    default_message = "Cannot add more items. Maximum quantity is 999."


class CartConflict(StorefrontError):
    """Concurrent add for the same product lost the race on creation."""

    status_code = 503
    default_message = "Cart was updated at the same time. Please try again."


class Internal(StorefrontError):
    status_code = 500
