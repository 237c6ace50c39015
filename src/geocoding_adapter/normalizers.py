"""
Table-driven normalization of provider properties into Address records.

Each provider describes its response layout as a FieldMap: which nested
property feeds which AddressBuilder setter. PropertyNormalizer walks that
table for one raw result item and returns the built Address.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from .models import Address, AddressBuilder, coordinates_in_range

PropertyPath = Tuple[str, ...]


@dataclass(frozen=True)
class FieldMap:
    """
    Mapping from provider property paths to AddressBuilder setters.

    Attributes:
        text_fields: (path, setter name) pairs for string-valued fields
        latitude: Path of the latitude property
        longitude: Path of the longitude property
    """
    text_fields: Tuple[Tuple[PropertyPath, str], ...]
    latitude: PropertyPath
    longitude: PropertyPath


def resolve_path(properties: Mapping[str, Any], path: PropertyPath) -> Any:
    """
    Follow a key path through nested mappings.

    Returns None as soon as a key is missing or an intermediate value is
    not a mapping.
    """
    value: Any = properties
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    # bool is an int subclass, but True is not a postcode
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class PropertyNormalizer:
    """Feeds one provider's properties map into a fresh AddressBuilder."""

    def __init__(self, field_map: FieldMap):
        self.field_map = field_map

    def populate(self, builder: AddressBuilder, properties: Mapping[str, Any]) -> AddressBuilder:
        """
        Apply every mapped property to the builder.

        Args:
            builder: A builder that has not been built yet
            properties: The provider's raw properties for one result

        Returns:
            The same builder, for chaining
        """
        for path, setter in self.field_map.text_fields:
            getattr(builder, setter)(as_text(resolve_path(properties, path)))

        latitude = as_float(resolve_path(properties, self.field_map.latitude))
        longitude = as_float(resolve_path(properties, self.field_map.longitude))
        if latitude is not None and longitude is not None:
            if not coordinates_in_range(latitude, longitude):
                latitude = longitude = None
        builder.set_coordinates(latitude, longitude)
        return builder

    def normalize(self, provider_name: str, properties: Mapping[str, Any]) -> Address:
        return self.populate(AddressBuilder(provider_name), properties).build()
