from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from conftest import RecordingHttpClient
from geocoding_adapter.errors import InvalidCredentials, TransportError, UnsupportedOperation
from geocoding_adapter.models import Address, AddressCollection, GeocodeQuery, ReverseQuery
import geocoding_adapter.providers as providers
from geocoding_adapter.providers import (
    GEOAPIFY,
    Geoapify,
    ProviderAdapter,
    ProviderProfile,
    available_providers,
    get_profile,
    register_profile,
)


@pytest.fixture(autouse=True)
def reset_registry():
    original_registry = providers._PROFILES.copy()
    yield
    providers._PROFILES.clear()
    providers._PROFILES.update(original_registry)


def _query_params(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


def test_empty_api_key_fails_construction(recording_client):
    with pytest.raises(InvalidCredentials):
        Geoapify(recording_client, "")

    with pytest.raises(InvalidCredentials):
        ProviderAdapter(GEOAPIFY, recording_client, "")


def test_adapter_name_is_provider_name(recording_client):
    adapter = Geoapify(recording_client, "secret")

    assert adapter.name == "geoapify"


def test_geocode_issues_one_request_with_encoded_text(recording_client):
    adapter = Geoapify(recording_client, "secret")

    adapter.geocode(GeocodeQuery("10 Rue de Rivoli & Co, Paris"))

    assert len(recording_client.urls) == 1
    url = recording_client.urls[0]
    assert url.startswith("https://api.geoapify.com/v1/geocode/search?apiKey=secret&text=")
    assert "text=10%20Rue%20de%20Rivoli%20%26%20Co%2C%20Paris" in url
    assert "lang" not in _query_params(url)


def test_geocode_appends_locale(recording_client):
    adapter = Geoapify(recording_client, "secret")

    adapter.geocode(GeocodeQuery("Zürich", locale="de CH"))

    url = recording_client.urls[0]
    assert url.endswith("&lang=de%20CH")
    assert "text=Z%C3%BCrich" in url
    assert _query_params(url)["lang"] == ["de CH"]


@pytest.mark.parametrize("text", ["8.8.8.8", "::1", "2001:db8::1"])
def test_ip_text_is_unsupported_and_never_fetched(recording_client, text):
    adapter = Geoapify(recording_client, "secret")

    with pytest.raises(UnsupportedOperation):
        adapter.geocode(GeocodeQuery(text))

    assert recording_client.urls == []


def test_boston_response_is_normalized(boston_body):
    client = RecordingHttpClient(boston_body)

    addresses = Geoapify(client, "secret").geocode(GeocodeQuery("Boston"))

    assert len(addresses) == 1
    assert addresses.first() == Address(
        provider_name="geoapify",
        country_code="US",
        locality="Boston",
        latitude=42.36,
        longitude=-71.06,
    )


@pytest.mark.parametrize(
    "body",
    [b"{}", b"not json", b"", b"[1, 2]", b'{"features": null}', b'{"features": {"a": 1}}', b"\xff\xfe"],
)
def test_malformed_or_empty_responses_yield_empty_collection(body):
    client = RecordingHttpClient(body)

    addresses = Geoapify(client, "secret").geocode(GeocodeQuery("Nowhere"))

    assert isinstance(addresses, AddressCollection)
    assert addresses.is_empty()
    assert len(client.urls) == 1


def test_results_keep_backend_order():
    body = {
        "features": [
            {"properties": {"city": "Springfield", "postcode": "62701"}},
            {"properties": {"city": "Springfield", "postcode": "01101"}},
        ]
    }

    addresses = Geoapify(RecordingHttpClient(body), "secret").geocode(GeocodeQuery("Springfield"))

    assert len(addresses) == 2
    assert [a.postal_code for a in addresses] == ["62701", "01101"]


def test_features_without_usable_properties_yield_bare_addresses():
    body = {"features": [{"type": "Feature"}, "junk", {"properties": {"city": "Oslo"}}]}

    addresses = Geoapify(RecordingHttpClient(body), "secret").geocode(GeocodeQuery("Oslo"))

    assert addresses.to_list() == [
        Address(provider_name="geoapify"),
        Address(provider_name="geoapify"),
        Address(provider_name="geoapify", locality="Oslo"),
    ]


def test_every_feature_is_returned_in_order():
    body = {"features": [{"properties": {"postcode": str(n)}} for n in range(8)]}

    addresses = Geoapify(RecordingHttpClient(body), "secret").geocode(GeocodeQuery("Main Street"))

    assert len(addresses) == 8
    assert [a.postal_code for a in addresses] == [str(n) for n in range(8)]


def test_transport_errors_propagate_unchanged():
    error = TransportError("Unexpected response status 503", url="https://example", status_code=503)
    adapter = Geoapify(RecordingHttpClient(error=error), "secret")

    with pytest.raises(TransportError) as excinfo:
        adapter.geocode(GeocodeQuery("Boston"))

    assert excinfo.value is error


def test_reverse_is_not_implemented(recording_client):
    adapter = Geoapify(recording_client, "secret")

    with pytest.raises(UnsupportedOperation):
        adapter.reverse(ReverseQuery.from_coordinates(42.36, -71.06))

    assert recording_client.urls == []


def test_from_name_uses_registered_profile(recording_client):
    adapter = ProviderAdapter.from_name("GeoApify", recording_client, "secret")

    assert adapter.profile is GEOAPIFY
    assert "geoapify" in available_providers()


def test_unknown_provider_lists_known_ones():
    with pytest.raises(ValueError, match="geoapify"):
        get_profile("does-not-exist")


def test_registered_profile_drives_the_generic_adapter():
    profile = register_profile(
        ProviderProfile(
            name="test-results",
            endpoint="https://geo.example/search?key={api_key}&q={text}",
            field_map=GEOAPIFY.field_map,
            features_key="results",
            properties_key="attrs",
        )
    )
    client = RecordingHttpClient({"results": [{"attrs": {"city": "Lyon"}}]})

    addresses = ProviderAdapter.from_name("test-results", client, "k").geocode(
        GeocodeQuery("Lyon", locale="fr")
    )

    assert client.urls == ["https://geo.example/search?key=k&q=Lyon"]
    assert addresses.first() == Address(provider_name="test-results", locality="Lyon")
    assert get_profile("test-results") is profile


def test_duplicate_profile_name_is_rejected():
    with pytest.raises(RuntimeError):
        register_profile(
            ProviderProfile(name="geoapify", endpoint="https://other", field_map=GEOAPIFY.field_map)
        )


def test_only_builtin_profiles_remain_registered():
    assert available_providers() == ["geoapify"]
