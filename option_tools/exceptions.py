"""
exceptions.py
Errors raised by the option tools.

User errors returned by individual mutations are NOT raised; the
workflows collect them into a BulkResult instead.
"""


class ShopifyTransportError(RuntimeError):
    """HTTP failure or top-level GraphQL `errors` from the Admin API."""


class OptionValidationError(ValueError):
    """Bad local input, detected before any remote call."""
