import pytest

from places_search.core.models import Coordinate, PlaceTypeFilter, SearchBias
from places_search.vendors import query


def test_minimal_params_are_encoded_and_sorted():
    params = query.build_autocomplete_params("1600 Amphitheatre", PlaceTypeFilter.ALL, SearchBias(), "k")
    assert params == {"input": "1600%20Amphitheatre", "key": "k", "types": ""}
    assert list(params) == ["input", "key", "types"]


@pytest.mark.parametrize(
    "place_type, token",
    [
        (PlaceTypeFilter.ALL, ""),
        (PlaceTypeFilter.GEOCODE, "geocode"),
        (PlaceTypeFilter.ADDRESS, "address"),
        (PlaceTypeFilter.ESTABLISHMENT, "establishment"),
        (PlaceTypeFilter.REGIONS, "(regions)"),
        (PlaceTypeFilter.CITIES, "(cities)"),
    ],
)
def test_types_token(place_type, token):
    params = query.build_autocomplete_params("x", place_type, SearchBias(), "k")
    assert params["types"] == token


def test_bias_with_valid_coordinate():
    bias = SearchBias(coordinate=Coordinate(55.751244, 37.618423), radius_meters=500, strict_bounds=True)
    params = query.build_autocomplete_params("cafe", PlaceTypeFilter.ESTABLISHMENT, bias, "k")
    assert params["location"] == "55.751244,37.618423"
    assert params["radius"] == "500"
    assert params["strictbounds"] == "true"
    assert list(params) == sorted(params)


def test_zero_radius_and_no_strict_flag_are_omitted():
    bias = SearchBias(coordinate=Coordinate(10, -20.5))
    params = query.build_autocomplete_params("cafe", PlaceTypeFilter.ALL, bias, "k")
    assert params["location"] == "10,-20.5"
    assert "radius" not in params
    assert "strictbounds" not in params


@pytest.mark.parametrize(
    "coordinate",
    [None, Coordinate(91, 0), Coordinate(0, 180.5), Coordinate(float("nan"), 0)],
)
def test_invalid_coordinate_drops_all_bias_params(coordinate):
    bias = SearchBias(coordinate=coordinate, radius_meters=1000, strict_bounds=True)
    params = query.build_autocomplete_params("cafe", PlaceTypeFilter.ALL, bias, "k")
    assert not {"location", "radius", "strictbounds"} & set(params)


def test_reserved_characters_are_encoded_once():
    params = query.build_autocomplete_params("a&b=c+d/e?#%", PlaceTypeFilter.ALL, SearchBias(), "k")
    assert params["input"] == "a%26b%3Dc%2Bd%2Fe%3F%23%25"


def test_unicode_input_is_utf8_encoded():
    params = query.build_autocomplete_params("Zürich", PlaceTypeFilter.ALL, SearchBias(), "k")
    assert params["input"] == "Z%C3%BCrich"


def test_details_params():
    assert query.build_details_params("ChIJ abc", "k") == {"key": "k", "placeid": "ChIJ%20abc"}


def test_encode_query_does_not_reencode():
    params = {"types": "(regions)", "input": "a%20b", "key": "k"}
    assert query.encode_query(params) == "input=a%20b&key=k&types=(regions)"
