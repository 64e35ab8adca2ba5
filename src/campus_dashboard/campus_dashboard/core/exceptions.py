class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or references unknown entities."""


class InvalidStateError(DomainError):
    """Raised when a lifecycle precondition does not hold."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the document store rejects or fails an operation."""


class TransportError(DomainError):
    """Raised when a webhook post does not succeed."""


class ConfigurationError(DomainError):
    """Raised when required external configuration is missing."""
