import pytest

from location_tools.parsers import (
    AddressFields,
    GeocodeResult,
    city_name,
    first_non_empty,
    parse_results,
)


def test_city_name_priority():
    assert city_name({"city": "Paris"}) == "Paris"
    assert city_name({"town": "Ube"}) == "Ube"
    assert city_name({"village": "Hallstatt"}) == "Hallstatt"
    assert city_name({"city": "Lyon", "town": "Ube", "village": "Hallstatt"}) == "Lyon"
    assert city_name({"town": "Ube", "village": "Hallstatt"}) == "Ube"


def test_city_name_empty_values_count_as_absent():
    assert city_name({}) == "Unknown"
    assert city_name({"city": "", "town": "Ube"}) == "Ube"
    assert city_name({"city": None, "town": "", "village": ""}) == "Unknown"


def test_city_name_accepts_address_fields():
    assert city_name(AddressFields(village="Giethoorn")) == "Giethoorn"


def test_first_non_empty_falls_back_through_keys():
    assert first_non_empty({"province": "Ontario"}, "state", "province") == "Ontario"
    assert first_non_empty({"state": "Texas", "province": "Ontario"}, "state", "province") == "Texas"
    assert first_non_empty({"postcode": ""}, "postcode") == "Unknown"


def test_first_non_empty_tolerates_malformed_input():
    assert first_non_empty(None, "city") == "Unknown"
    assert first_non_empty(["city"], "city") == "Unknown"
    assert first_non_empty({"city": 42}, "city") == "Unknown"


def test_address_fields_from_dict():
    fields = AddressFields.from_dict({
        "town": "Ube",
        "province": "Yamaguchi",
        "country": "Japan",
        "postcode": "755-0000",
        "country_code": "jp",
    })
    assert fields.city_name == "Ube"
    assert fields.state_name == "Yamaguchi"
    assert fields.country_name == "Japan"
    assert fields.postal_code == "755-0000"


def test_address_fields_from_garbage_is_all_unknown():
    fields = AddressFields.from_dict("not an address")
    assert fields == AddressFields()
    assert fields.city_name == "Unknown"
    assert fields.state_name == "Unknown"
    assert fields.country_name == "Unknown"
    assert fields.postal_code == "Unknown"


def test_geocode_result_from_dict_parses_string_coordinates():
    result = GeocodeResult.from_dict({
        "lat": "48.8588897",
        "lon": "2.3200410",
        "display_name": "Paris, Île-de-France, France",
        "address": {"city": "Paris", "country": "France"},
    })
    assert result.latitude == pytest.approx(48.8588897)
    assert result.longitude == pytest.approx(2.3200410)
    assert result.has_coordinates
    assert result.short_name == "Paris"
    assert result.address.city_name == "Paris"


def test_geocode_result_from_dict_with_missing_fields():
    result = GeocodeResult.from_dict({"lat": "not-a-number", "display_name": ""})
    assert result.latitude is None
    assert result.longitude is None
    assert not result.has_coordinates
    assert result.display_name is None
    assert result.short_name is None
    assert result.address.city_name == "Unknown"


def test_parse_results_handles_search_and_reverse_shapes():
    search = parse_results([{"display_name": "A"}, "junk", {"display_name": "B"}])
    assert [r.display_name for r in search] == ["A", "B"]

    reverse = parse_results({"display_name": "C"})
    assert [r.display_name for r in reverse] == ["C"]


def test_parse_results_rejects_unexpected_payload():
    with pytest.raises(ValueError):
        parse_results("<html>")


def test_geocode_result_keeps_coordinate_text_as_sent():
    result = GeocodeResult.from_dict({"lat": "40.71272810", "lon": -74.0060152})
    assert result.latitude_text == "40.71272810"
    assert result.longitude_text == "-74.0060152"
    assert GeocodeResult.from_dict({"lat": True}).latitude_text is None
