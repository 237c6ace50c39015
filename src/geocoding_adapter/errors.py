from typing import Optional


class GeocodingError(Exception):
    """Base class for every error raised by the geocoding adapter."""


class InvalidCredentials(GeocodingError):
    """Raised when an adapter is constructed without a usable API key."""


class UnsupportedOperation(GeocodingError):
    """Raised when a query is structurally incompatible with a provider."""


class InvalidArgument(GeocodingError, ValueError):
    """Raised when a query or coordinate value is rejected at construction."""


class CollectionIsEmpty(GeocodingError):
    """Raised when the first address of an empty collection is requested."""


class OutOfBounds(GeocodingError, IndexError):
    """Raised when an address collection is indexed past its end."""


class BuilderConsumed(GeocodingError, RuntimeError):
    """Raised when an AddressBuilder is used after build()."""


class TransportError(GeocodingError):
    def __init__(self, message: str, url: str = "", status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    def summary(self) -> str:
        """Human-readable one-liner including the HTTP status when known."""
        if self.status_code is None:
            return f"{self.args[0]} ({self.url})"
        return f"HTTP {self.status_code}: {self.args[0]} ({self.url})"
