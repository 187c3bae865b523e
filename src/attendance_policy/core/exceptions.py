class DomainError(Exception):
    """Base exception for policy evaluation failures."""


class ValidationError(DomainError):
    """Raised when input data is malformed or out of range."""


class NotFoundError(DomainError):
    """Raised when a referenced policy, shift or assignment does not resolve."""


class RuleNotFoundError(DomainError):
    """Raised when a policy has no rule for the requested type."""


class ConfigurationError(DomainError):
    """Raised when required application settings are missing."""
