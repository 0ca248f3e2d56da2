"""Lookup service exceptions."""


class LookupServiceError(Exception):
    """Raised when a query, traversal or free-text lookup cannot be completed."""
