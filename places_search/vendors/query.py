"""Query string construction for the Places web service."""

from typing import Any, Dict, Mapping
from urllib.parse import quote

from places_search.core.models import PlaceTypeFilter, SearchBias

# Commas keep "lat,lng" readable and parentheses keep "(regions)" literal.
_SAFE_CHARS = ",()"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _encode(value: Any) -> str:
    return quote(_format_value(value), safe=_SAFE_CHARS)


def _sorted_encoded(raw: Mapping[str, Any]) -> Dict[str, str]:
    return {name: _encode(raw[name]) for name in sorted(raw)}


def build_autocomplete_params(
    text: str,
    place_type: PlaceTypeFilter,
    bias: SearchBias,
    api_key: str,
) -> Dict[str, str]:
    """Build the encoded, name-ordered parameter set for an autocomplete request.

    ``location`` is only sent for a valid coordinate; ``radius`` and
    ``strictbounds`` additionally depend on it.
    """
    raw: Dict[str, Any] = {
        "input": text,
        "types": place_type.token,
        "key": api_key,
    }
    if bias.has_valid_coordinate:
        coordinate = bias.coordinate
        raw["location"] = f"{_format_value(float(coordinate.lat))},{_format_value(float(coordinate.lng))}"
        if bias.radius_meters > 0:
            raw["radius"] = float(bias.radius_meters)
        if bias.strict_bounds:
            raw["strictbounds"] = True
    return _sorted_encoded(raw)


def build_details_params(place_id: str, api_key: str) -> Dict[str, str]:
    return _sorted_encoded({"placeid": place_id, "key": api_key})


def encode_query(params: Mapping[str, str]) -> str:
    """Join already-encoded values; nothing is escaped a second time."""
    return "&".join(f"{name}={params[name]}" for name in sorted(params))
