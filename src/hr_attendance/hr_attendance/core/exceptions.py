class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StoreError(DomainError):
    """Raised when the backing store rejects or fails a query."""


class RefreshInProgressError(DomainError):
    """Raised when a refresh is requested while another one is still running."""
