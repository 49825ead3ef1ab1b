"""Error types shared across the pet shop.

Business-rule failures are ``ValidationError`` subclasses so they carry the
same ``{field: [messages]}`` payload Protean uses everywhere; the API layer
maps each class to its HTTP status.
"""

from protean.exceptions import ValidationError


class InvalidArgumentError(ValidationError):
    """A request argument was outside the accepted set (e.g. an unknown action)."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self, messages=None):
        super().__init__(messages or {"cart": ["Cart is empty"]})


class InsufficientStockError(ValidationError):
    """A requested quantity exceeds the product's live stock."""

    def __init__(self, product_id, product_name=None, available=None, requested=None):
        self.product_id = str(product_id)
        self.product_name = product_name
        self.available = available
        self.requested = requested

        label = product_name or self.product_id
        message = f"Insufficient stock for product: {label}"
        if available is not None and requested is not None:
            message = f"{message} ({available} available, {requested} requested)"
        super().__init__({"stock": [message]})


class NotEligibleError(ValidationError):
    """The user may not perform the action on this resource (e.g. review without purchase)."""


class IllegalStatusTransitionError(ValidationError):
    """An order status change not allowed by the transition table."""

    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition from {current} to {target}"]})


class ConflictError(ValidationError):
    """The write collides with existing state (duplicate review, duplicate email)."""


class AuthenticationFailed(Exception):
    """Credentials or tokens could not be verified."""

    def __init__(self, message="Authentication failed"):
        self.message = message
        super().__init__(message)


class PermissionDenied(Exception):
    """The authenticated principal lacks the rights for this action."""

    def __init__(self, message="You do not have permission to perform this action"):
        self.message = message
        super().__init__(message)
