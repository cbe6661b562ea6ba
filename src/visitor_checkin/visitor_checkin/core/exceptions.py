class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCoordinate(ValidationError):
    """Latitude/longitude missing, non-numeric or out of range."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a record does not exist or is not owned by the caller."""


class TenantNotFound(NotFoundError):
    """Raised when a tenant reference (e.g. a QR code token) does not resolve."""


class ConflictError(DomainError):
    """Raised when a create would violate a uniqueness rule."""


class StorageError(DomainError):
    """Raised when the resume storage backend fails."""


class ConfigurationError(Exception):
    """Raised at startup when settings are missing or invalid."""


class GeofenceDenied(DomainError):
    """Raised when a submission's position is outside the tenant's radius."""
