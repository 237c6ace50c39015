"""
Generic provider adapter and the per-provider profiles it runs on.

Provider differences (endpoint template, response layout, supported query
shapes) live in ProviderProfile records rather than in subclasses, so one
adapter algorithm serves every registered backend.

Reference (Geoapify): https://apidocs.geoapify.com/docs/geocoding/forward-geocoding/
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

from .base import HttpClient, Provider
from .errors import InvalidCredentials, UnsupportedOperation
from .models import Address, AddressCollection, GeocodeQuery, ReverseQuery
from .normalizers import FieldMap, PropertyNormalizer
from .transport import redact_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderProfile:
    """
    Everything that distinguishes one geocoding backend from another.

    Attributes:
        name: Provider identifier stamped on every Address
        endpoint: URL template with {api_key} and {text} placeholders
        field_map: How result properties map onto Address fields
        features_key: Top-level key holding the result list
        properties_key: Key of the properties map inside each result
        locale_param: Query parameter carrying the locale, None if unsupported
        supports_ip: Whether IP-address text may be sent to the endpoint
    """
    name: str
    endpoint: str
    field_map: FieldMap
    features_key: str = "features"
    properties_key: str = "properties"
    locale_param: Optional[str] = None
    supports_ip: bool = False


GEOAPIFY = ProviderProfile(
    name="geoapify",
    endpoint="https://api.geoapify.com/v1/geocode/search?apiKey={api_key}&text={text}",
    field_map=FieldMap(
        text_fields=(
            (("country_code",), "set_country_code"),
            (("country",), "set_country"),
            (("street",), "set_street_name"),
            (("housenumber",), "set_street_number"),
            (("city",), "set_locality"),
            (("postcode",), "set_postal_code"),
            (("timezone", "name"), "set_timezone"),
        ),
        latitude=("lat",),
        longitude=("lon",),
    ),
    locale_param="lang",
)


_PROFILES: dict[str, ProviderProfile] = {}


def register_profile(profile: ProviderProfile) -> ProviderProfile:
    """Register a profile under its lowercased name."""
    key = profile.name.lower()
    existing = _PROFILES.get(key)
    if existing is not None and existing != profile:
        raise RuntimeError(f"Duplicate provider profile '{key}'")
    _PROFILES[key] = profile
    logger.debug(f"Registered provider profile '{key}'")
    return profile


def get_profile(name: str) -> ProviderProfile:
    key = str(name).lower()
    try:
        return _PROFILES[key]
    except KeyError as e:
        raise ValueError(
            f"Unknown provider '{name}'. "
            f"Known providers: {available_providers()}"
        ) from e


def available_providers() -> list[str]:
    return sorted(_PROFILES)


register_profile(GEOAPIFY)


class ProviderAdapter(Provider):
    """
    Runs queries against one backend described by a ProviderProfile.

    The adapter holds no mutable state beyond construction, so one instance
    may serve concurrent callers if its HttpClient can.

    Args:
        profile: The backend description
        transport: HttpClient used for the single GET per query
        api_key: Provider credential, must be non-empty
    """

    def __init__(self, profile: ProviderProfile, transport: HttpClient, api_key: str):
        if not api_key:
            raise InvalidCredentials("No API key provided.")

        self.profile = profile
        self.transport = transport
        self._api_key = api_key
        self._normalizer = PropertyNormalizer(profile.field_map)

        logger.info(f"Initialized {profile.name} adapter using {type(transport).__name__}")

    @classmethod
    def from_name(cls, name: str, transport: HttpClient, api_key: str) -> "ProviderAdapter":
        """
        Factory to build an adapter from a registered provider name.

        Example:
            adapter = ProviderAdapter.from_name('geoapify', RequestsHttpClient(), key)
        """
        return cls(get_profile(name), transport, api_key)

    @property
    def name(self) -> str:
        return self.profile.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.profile.name!r})"

    def geocode(self, query: GeocodeQuery) -> AddressCollection:
        """
        Forward-geocode the query text.

        Raises:
            UnsupportedOperation: The text is an IP address and the backend
                only searches place/address text
        """
        if not self.profile.supports_ip and query.is_ip_address():
            raise UnsupportedOperation(
                f"The {self.profile.name} provider does not support IP addresses."
            )

        url = self.build_url(query)
        body = self.transport.fetch(url)
        return AddressCollection(self.parse_response(body))

    def reverse(self, query: ReverseQuery) -> AddressCollection:
        # Reverse lookups are an extension point no profile implements yet
        raise UnsupportedOperation(
            f"The {self.profile.name} provider does not support reverse geocoding."
        )

    def build_url(self, query: GeocodeQuery) -> str:
        url = self.profile.endpoint.format(
            api_key=quote(self._api_key, safe=""),
            text=quote(query.text, safe=""),
        )
        if query.locale is not None and self.profile.locale_param:
            url += "&" + urlencode({self.profile.locale_param: query.locale}, quote_via=quote)

        logger.debug(f"Built {self.profile.name} URL: {redact_url(url)}")
        return url

    def parse_response(self, body: Any) -> list[Address]:
        """
        Decode a raw response body into addresses.

        A body that is not JSON, not an object, or lacks the results list
        produces no addresses rather than an error.
        """
        try:
            document = json.loads(body)
        except (TypeError, ValueError):
            logger.debug(f"{self.profile.name} response is not valid JSON")
            return []

        if not isinstance(document, Mapping):
            return []
        features = document.get(self.profile.features_key)
        if not isinstance(features, list):
            return []

        logger.debug(f"{self.profile.name} returned {len(features)} features")
        return [self._normalize_feature(item) for item in features]

    def _normalize_feature(self, item: Any) -> Address:
        # A feature with no usable properties map still holds its result slot
        properties = item.get(self.profile.properties_key) if isinstance(item, Mapping) else None
        if not isinstance(properties, Mapping):
            properties = {}
        return self._normalizer.normalize(self.profile.name, properties)


class Geoapify(ProviderAdapter):
    """Adapter for the Geoapify forward-geocoding search endpoint."""

    def __init__(self, transport: HttpClient, api_key: str):
        super().__init__(GEOAPIFY, transport, api_key)
