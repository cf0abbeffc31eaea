"""Error taxonomy for the recommendation pipeline.

Enrichment stages (weather, lodging, flights) catch the upstream kinds and
degrade to empty results. Only the reasoning-model call and request-level
checks let these escape to the HTTP layer.
"""


class TripPlannerError(Exception):
    """Base class; ``status_code`` is used by the HTTP exception handler."""

    status_code: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(TripPlannerError):
    """Malformed or out-of-range request. Not retried."""

    status_code = 400


class AuthorizationError(TripPlannerError):
    """Caller is unauthenticated (401) or does not own the trip (403)."""

    status_code = 403

    def __init__(self, message: str = "Forbidden", status_code: int = 403):
        super().__init__(message)
        self.status_code = status_code


class TripNotFound(TripPlannerError):
    status_code = 404


class UpstreamAuthError(TripPlannerError):
    """Credential or token failure with a data provider."""

    status_code = 502


class UpstreamUnavailable(TripPlannerError):
    """Timeout or non-2xx response from a data provider."""

    status_code = 502


class ParseError(TripPlannerError):
    """Reasoning-model output could not be decoded as JSON."""

    status_code = 500


class PersistenceError(TripPlannerError):
    """Store write failure. Logged by callers, never surfaced."""

    status_code = 500
