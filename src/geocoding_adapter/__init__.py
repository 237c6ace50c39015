"""
- Models: Queries, Address, AddressCollection, AddressBuilder
- Base classes: HttpClient and Provider interfaces
- Normalizers: Table-driven mapping of provider properties onto addresses
- Providers: Profile registry and the generic ProviderAdapter
- Transport: requests-based HttpClient
- Errors: Exception hierarchy
"""

from .errors import (
    GeocodingError,
    InvalidCredentials,
    UnsupportedOperation,
    InvalidArgument,
    CollectionIsEmpty,
    OutOfBounds,
    BuilderConsumed,
    TransportError,
)

from .models import (
    Coordinates,
    GeocodeQuery,
    ReverseQuery,
    Address,
    AddressCollection,
    AddressBuilder,
)

from .base import (
    HttpClient,
    Provider,
)

from .normalizers import (
    FieldMap,
    PropertyNormalizer,
)

from .providers import (
    ProviderProfile,
    ProviderAdapter,
    Geoapify,
    GEOAPIFY,
    register_profile,
    get_profile,
    available_providers,
)

from .transport import (
    RequestsHttpClient,
)

__all__ = [
    # Errors
    "GeocodingError",
    "InvalidCredentials",
    "UnsupportedOperation",
    "InvalidArgument",
    "CollectionIsEmpty",
    "OutOfBounds",
    "BuilderConsumed",
    "TransportError",
    # Models
    "Coordinates",
    "GeocodeQuery",
    "ReverseQuery",
    "Address",
    "AddressCollection",
    "AddressBuilder",
    # Base classes
    "HttpClient",
    "Provider",
    # Normalizers
    "FieldMap",
    "PropertyNormalizer",
    # Providers
    "ProviderProfile",
    "ProviderAdapter",
    "Geoapify",
    "GEOAPIFY",
    "register_profile",
    "get_profile",
    "available_providers",
    # Transport
    "RequestsHttpClient",
]
