"""Error taxonomy shared by all Storefront contexts.

Every error carries the HTTP status it maps to and the message that is safe
to show a client. Internal detail stays in the exception chain and the logs.
"""


class StorefrontError(Exception):
    status_code = 500
    public_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.public_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Malformed or missing input. Raised before any resource is acquired."""

    status_code = 400
    public_message = "Invalid request."

    def __init__(self, messages: dict[str, list[str]]):
        self.messages = messages
        summary = "; ".join(f"{field}: {', '.join(errors)}" for field, errors in messages.items())
        super().__init__(summary or self.public_message)

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Collect a pydantic error into the field to messages shape."""
        messages: dict[str, list[str]] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "__root__"
            messages.setdefault(field, []).append(error["msg"])
        return cls(messages)


class NotFoundError(StorefrontError):
    status_code = 404
    public_message = "Resource not found."


class InsufficientStockError(StorefrontError):
    """The conditional stock decrement matched no row.

    The product is either missing or short on stock; callers are not told which.
    """

    status_code = 500

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Insufficient stock or product not found for product ID: {product_id}")


class PersistenceError(StorefrontError):
    status_code = 500
    public_message = "A storage error occurred."


class TransientUpstreamError(StorefrontError):
    """A third-party service call failed in a way that may succeed later."""

    status_code = 502
    public_message = "An upstream service is unavailable."

    def __init__(self, service: str, message: str | None = None):
        self.service = service
        super().__init__(message or f"{service} is unavailable")


class AuthenticationError(StorefrontError):
    status_code = 401
    public_message = "Not authorized, token failed."


class AuthorizationError(StorefrontError):
    status_code = 403

    def __init__(self, role):
        self.role = role
        super().__init__(f"User role '{role}' is not authorized to access this route.")


class OrderPlacementError(PersistenceError):
    """Storage failure while placing an order; the transaction was rolled back."""

    public_message = "Failed to place order."
