"""
Error taxonomy for the environmental index engine.
"""


class EnvironmentalIndexError(Exception):
    """Base class for all engine errors."""


class ProviderUnreachable(EnvironmentalIndexError):
    """Network or transport failure talking to an upstream provider."""

    def __init__(self, source, detail=''):
        self.source = source
        self.detail = detail
        message = f"{source} unreachable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NoDataAvailable(EnvironmentalIndexError):
    """A well-formed response lacked the fields the engine needs."""


class PermissionDenied(EnvironmentalIndexError):
    """Device geolocation was refused."""


class LocationNotFound(EnvironmentalIndexError):
    """A free-text query did not resolve to any place."""
