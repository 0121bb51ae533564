"""Error taxonomy for the decaf service.

Every error that aborts a request derives from DecafError and is rendered
to the caller as ``Error: <message>`` with ``status_code``.
"""


class DecafError(Exception):
    """Base exception for decaf."""

    status_code = 500


class ConfigurationMissing(DecafError):
    pass


class UnknownBackend(DecafError):
    pass


class ClusterRequired(DecafError):
    pass


class ConnectionFailed(DecafError):
    pass


class QueryFailed(DecafError):
    pass


class VerificationFailed(DecafError):
    """Bond rejected the result or could not be reached.

    ``body`` holds the raw response body when the service answered.
    """

    def __init__(self, message: str, body: bytes | None = None):
        super().__init__(message)
        self.body = body
