"""Exception hierarchy for the artwork finder.

Only the catalog client raises during a search; parsing and link derivation
never fail. Routers turn these into HTTP errors.
"""


class ArtworkFinderError(Exception):
    """Base exception carrying a user-presentable message and optional details."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogRequestError(ArtworkFinderError):
    """The iTunes catalog could not be reached, answered with an error, or sent garbage.

    ``status_code`` is the upstream HTTP status, or None when no response was
    received.
    """

    def __init__(self, message: str, status_code: int | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.status_code = status_code


class ServiceInitializationError(ArtworkFinderError):
    pass


class ConfigurationError(ArtworkFinderError):
    """Raised for an invalid setting value."""
