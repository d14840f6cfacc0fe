"""Service layer — input validation and engine orchestration."""


class ServiceError(Exception):
    """Base service exception."""


class ValidationError(ServiceError):
    """Malformed caller input, rejected before any network call (-> HTTP 422)."""


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404)."""
