class AppException(Exception):
    """Base application exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class StorageError(AppException):
    """Storage operation error exception."""

    pass


class ExternalServiceError(AppException):
    """An upstream service could not be reached or rejected the call."""

    pass
