"""Exceptions raised by the EventRadar services and mapped to HTTP responses."""


class EventRadarError(Exception):
    """Base exception for all EventRadar errors.

    Carries the HTTP status the request boundary answers with and the
    human-readable message placed in the ``{"message": ...}`` body.
    """
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidParameterError(EventRadarError):
    """Raised when query parameters are malformed or combined incorrectly."""
    status_code = 400


class ForbiddenError(EventRadarError):
    """Raised when the caller lacks the capability a filter requires."""
    status_code = 403


class NotFoundError(EventRadarError):
    """Raised when a requested resource does not exist or is not visible."""
    status_code = 404


class InternalError(EventRadarError):
    """Raised when the data store or a query fails."""
    status_code = 500


class UpstreamError(EventRadarError):
    """Raised when an external provider (e.g. the geocoder) fails."""
    status_code = 502
