import pytest

from places_search.core.models import (
    ConfigError,
    Coordinate,
    PlaceDetails,
    PlaceSummary,
    PlaceTypeFilter,
    SearchBias,
    SessionConfig,
)


def test_session_config_requires_api_key():
    with pytest.raises(ConfigError):
        SessionConfig(api_key="")
    with pytest.raises(ConfigError):
        SessionConfig(api_key="   ")
    assert SessionConfig(api_key="k").place_type is PlaceTypeFilter.ALL


def test_search_bias_rejects_negative_radius():
    with pytest.raises(ValueError):
        SearchBias(radius_meters=-1)


def test_coordinate_validity_bounds():
    assert Coordinate(90, 180).is_valid
    assert Coordinate(-90, -180).is_valid
    assert not Coordinate(-90.1, 0).is_valid
    assert not Coordinate(0, float("inf")).is_valid


def test_place_type_filter_parse():
    assert PlaceTypeFilter.parse("cities") is PlaceTypeFilter.CITIES
    assert PlaceTypeFilter.parse("(regions)") is PlaceTypeFilter.REGIONS
    assert PlaceTypeFilter.parse("") is PlaceTypeFilter.ALL
    assert PlaceTypeFilter.parse(None) is PlaceTypeFilter.ALL
    with pytest.raises(ValueError):
        PlaceTypeFilter.parse("restaurants")


def test_place_summary_identity_is_id():
    assert PlaceSummary("abc", "One") == PlaceSummary("abc", "Other", "text")
    assert PlaceSummary("abc") != PlaceSummary("xyz")
    assert len({PlaceSummary("abc", "One"), PlaceSummary("abc", "Two")}) == 1


def test_place_details_str_and_dict():
    details = PlaceDetails(
        formatted_address="Main St",
        name="Acme",
        coordinate=Coordinate(1.5, 2.5),
        raw={"result": {}},
    )
    assert "Address: Main St" in str(details)
    assert "(1.5, 2.5)" in str(details)
    data = details.to_dict()
    assert data["coordinate"] == {"lat": 1.5, "lng": 2.5}
    assert "raw" not in data
    assert PlaceDetails(formatted_address="Main St").to_dict()["coordinate"] is None
