# freshbite/domain/exceptions.py


class StorefrontError(Exception):
    """Bazowy blad domeny, message idzie prosto do klienta."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    default_message = "Invalid request"


class InvalidStatus(ValidationError):
    default_message = "Invalid status"


class NotFound(StorefrontError):
    default_message = "Not found"


class LimitExceeded(StorefrontError):
    default_message = "Limit exceeded"


class EmptyCart(StorefrontError):
    default_message = "Cart is empty"


class NoAddress(StorefrontError):
    default_message = "Please add a delivery address before placing an order"


class VerificationFailed(StorefrontError):
    default_message = "Payment verification failed"


class AuthenticationError(StorefrontError):
    default_message = "Invalid credentials"


class Conflict(StorefrontError):
    default_message = "Resource already exists"


class ProviderError(StorefrontError):
    default_message = "External provider unavailable"
