"""
Abstract base classes for the geocoding adapter.

These define the interfaces that all concrete implementations must follow.
"""

from abc import ABC, abstractmethod

from .models import AddressCollection, GeocodeQuery, ReverseQuery


class HttpClient(ABC):
    """
    Abstract base for the network transport.

    A client executes one GET request and returns the raw body. Timeouts,
    TLS and connection pooling are the client's business; any failure is
    raised to the caller as-is.
    """

    @abstractmethod
    def fetch(self, url: str) -> bytes:
        """
        Execute a GET request.

        Args:
            url: Fully built request URL

        Returns:
            Raw response body
        """
        pass


class Provider(ABC):
    """
    Abstract base for geocoding providers.

    Providers turn a query into an ordered AddressCollection. All providers
    expose the same contract so callers can swap backends freely.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier stamped on every Address this provider produces."""
        pass

    @abstractmethod
    def geocode(self, query: GeocodeQuery) -> AddressCollection:
        """
        Forward lookup.

        Args:
            query: The text query

        Returns:
            AddressCollection, possibly empty
        """
        pass

    @abstractmethod
    def reverse(self, query: ReverseQuery) -> AddressCollection:
        """
        Reverse lookup.

        Args:
            query: The coordinate query

        Returns:
            AddressCollection, possibly empty
        """
        pass
