class CatalogServiceError(Exception):
    """Base exception for catalog service errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogServiceError):
    """Raised when a referenced product, user, brand or group is absent."""

    status_code = 404


class ConflictError(CatalogServiceError):
    """Raised when a uniqueness invariant would be violated."""

    status_code = 409


class InvalidInputError(CatalogServiceError):
    """Raised for malformed identifiers or out-of-range pagination values."""

    status_code = 422
