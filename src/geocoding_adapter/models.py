"""
Core data models for geocoding queries and normalized addresses.

Queries and addresses are immutable, frozen dataclasses that serve as the
contract between callers, provider adapters and the address normalizer.
The AddressBuilder is the only mutable piece and lives for exactly one
raw result item.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, fields, replace
from ipaddress import ip_address
from typing import Any, Iterable, Iterator, Optional, List

from .errors import BuilderConsumed, CollectionIsEmpty, InvalidArgument, OutOfBounds


def coordinates_in_range(latitude: float, longitude: float) -> bool:
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        try:
            in_range = coordinates_in_range(self.latitude, self.longitude)
        except TypeError as e:
            raise InvalidArgument(
                f"Coordinates must be numeric, got ({self.latitude!r}, {self.longitude!r})"
            ) from e
        if not in_range:
            raise InvalidArgument(
                f"Coordinates out of range: ({self.latitude}, {self.longitude})"
            )

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True)
class GeocodeQuery:
    """
    A forward (text to address) lookup request.

    Attributes:
        text: Free-form address text, must not be blank
        locale: Optional language/region hint forwarded to the provider
    """
    text: str
    locale: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise InvalidArgument("Geocode query text must not be empty")

    def with_locale(self, locale: Optional[str]) -> "GeocodeQuery":
        return replace(self, locale=locale)

    def is_ip_address(self) -> bool:
        """True when the text is a literal IPv4 or IPv6 address."""
        try:
            ip_address(self.text.strip())
        except ValueError:
            return False
        return True


@dataclass(frozen=True)
class ReverseQuery:
    """A reverse (coordinates to address) lookup request."""
    coordinates: Coordinates
    locale: Optional[str] = None

    @classmethod
    def from_coordinates(
        cls, latitude: float, longitude: float, locale: Optional[str] = None
    ) -> "ReverseQuery":
        return cls(Coordinates(latitude, longitude), locale=locale)

    def with_locale(self, locale: Optional[str]) -> "ReverseQuery":
        return replace(self, locale=locale)


@dataclass(frozen=True)
class Address:
    """
    One matched location, normalized across providers.

    Any field the provider did not report is None. An empty string is kept
    as-is and means the provider reported the field as empty.
    """
    provider_name: str
    country_code: Optional[str] = None
    country: Optional[str] = None
    street_number: Optional[str] = None
    street_name: Optional[str] = None
    locality: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone_id: Optional[str] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        # Providers occasionally report positions outside the valid range
        if not coordinates_in_range(self.latitude, self.longitude):
            return None
        return Coordinates(self.latitude, self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage/serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


class AddressCollection(Sequence):
    """
    Ordered, read-only sequence of addresses.

    Order is whatever the provider returned (usually best match first).
    Duplicates are kept.
    """

    def __init__(self, addresses: Iterable[Address] = ()):
        self._addresses: tuple[Address, ...] = tuple(addresses)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return AddressCollection(self._addresses[index])
        return self._addresses[index]

    def __len__(self) -> int:
        return len(self._addresses)

    def __iter__(self) -> Iterator[Address]:
        return iter(self._addresses)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressCollection):
            return NotImplemented
        return self._addresses == other._addresses

    def __hash__(self) -> int:
        return hash(self._addresses)

    def __repr__(self) -> str:
        return f"AddressCollection({list(self._addresses)!r})"

    def first(self) -> Address:
        if not self._addresses:
            raise CollectionIsEmpty("The address collection is empty")
        return self._addresses[0]

    def is_empty(self) -> bool:
        return not self._addresses

    def get(self, index: int) -> Address:
        if not 0 <= index < len(self._addresses):
            raise OutOfBounds(
                f"Index {index} is out of bounds for a collection of {len(self._addresses)}"
            )
        return self._addresses[index]

    def slice(self, offset: int, length: Optional[int] = None) -> "AddressCollection":
        end = None if length is None else offset + length
        return AddressCollection(self._addresses[offset:end])

    def to_list(self) -> List[Address]:
        return list(self._addresses)


@dataclass
class AddressBuilder:
    """
    Accumulates the fields of exactly one Address.

    Setters accept None (the field stays unknown) and overwrite earlier
    values. After build() the builder is consumed: any further setter or
    build() call raises BuilderConsumed.
    """
    provider_name: str
    _values: dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _built: bool = field(default=False, init=False, repr=False)

    def _set(self, name: str, value: Any) -> "AddressBuilder":
        if self._built:
            raise BuilderConsumed(f"AddressBuilder for '{self.provider_name}' was already built")
        self._values[name] = value
        return self

    def set_country_code(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("country_code", value)

    def set_country(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("country", value)

    def set_street_name(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("street_name", value)

    def set_street_number(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("street_number", value)

    def set_locality(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("locality", value)

    def set_postal_code(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("postal_code", value)

    def set_timezone(self, value: Optional[str]) -> "AddressBuilder":
        return self._set("timezone_id", value)

    def set_coordinates(
        self, latitude: Optional[float], longitude: Optional[float]
    ) -> "AddressBuilder":
        # Latitude and longitude are stored as a pair or not at all
        if latitude is None or longitude is None:
            latitude = longitude = None
        self._set("latitude", latitude)
        return self._set("longitude", longitude)

    def build(self) -> Address:
        if self._built:
            raise BuilderConsumed(f"AddressBuilder for '{self.provider_name}' was already built")
        self._built = True
        return Address(provider_name=self.provider_name, **self._values)
