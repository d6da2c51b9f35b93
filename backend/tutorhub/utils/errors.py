"""Service-layer exceptions mapped to HTTP status codes."""

class ServiceError(Exception):
    """Base error raised by services."""
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class ValidationError(ServiceError):
    """Input rejected before any state change."""
    status_code = 400

class Forbidden(ServiceError):
    """Caller does not own the resource."""
    status_code = 403

class NotFound(ServiceError):
    """Referenced entity does not exist."""
    status_code = 404

class InvalidTransition(ServiceError):
    """Requested status change is not allowed from the current status."""
    status_code = 409

    def __init__(self, current: str, target: str, message: str = None):
        self.current = current
        self.target = target
        super().__init__(message or f"Cannot change session from '{current}' to '{target}'")
