# bazar/errors.py
from typing import Optional


class BazarError(Exception):
    """Base class for inventory client errors."""


class ValidationError(BazarError):
    """A draft failed local validation; no request was sent."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class GatewayUnreachable(BazarError):
    """Transport failure, timeout or non-2xx response from a remote source."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class NotFound(BazarError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"product {product_id} not found")


class AccessDenied(BazarError):
    pass
