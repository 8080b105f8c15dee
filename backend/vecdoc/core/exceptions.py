"""
Application exception hierarchy.
"""


class AppException(Exception):
    def __init__(self, status_code: int, detail: str, error_code: str | None = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code


class NotFoundException(AppException):
    def __init__(self, resource: str, identifier):
        super().__init__(404, f"{resource} with id {identifier} not found", "NOT_FOUND")


class ValidationException(AppException):
    def __init__(self, detail: str):
        super().__init__(400, detail, "VALIDATION_ERROR")


class ForbiddenException(AppException):
    def __init__(self, detail: str):
        super().__init__(403, detail, "FORBIDDEN")


class AlertProcessingError(Exception):
    """A single alert could not be turned into a notification."""


class MalformedAlertError(AlertProcessingError):
    """The alert's document or bike data cannot produce a notification."""


class EnqueueError(AlertProcessingError):
    """The delivery collaborator rejected the entry or did not answer in time."""
