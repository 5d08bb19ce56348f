"""
Loyalty admin exceptions.

Business errors subclass LoyaltyError, which is a ValueError:
the request was wrong or conflicts with existing data.
Infrastructure errors subclass InfrastructureError instead, so
they can never be mistaken for a bad request.
"""


class ConfigurationError(RuntimeError):
    """Required configuration is missing. Fatal at startup."""


class LoyaltyError(ValueError):
    """Base class for business errors surfaced by the loyalty services."""


class InfrastructureError(RuntimeError):
    """Base class for failures of the systems the services depend on."""


class DuplicatePhoneError(LoyaltyError):
    """Another customer already holds this phone number."""

    def __init__(self, phone: str):
        self.phone = phone
        super().__init__("This phone number is already registered")


class CustomerNotFoundError(LoyaltyError):

    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class StoreUnavailableError(InfrastructureError):
    """A call to the underlying store failed."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store unavailable during {operation}")


class ConcurrentUpdateError(LoyaltyError):
    """The balance kept changing underneath a points adjustment."""

    def __init__(self, customer_id, attempts: int):
        self.customer_id = customer_id
        self.attempts = attempts
        super().__init__(
            f"Customer {customer_id} was modified concurrently; "
            f"gave up after {attempts} attempts"
        )
