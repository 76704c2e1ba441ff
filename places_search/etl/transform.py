"""Utilities for transforming Google Places responses into domain objects."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from places_search.core.models import Coordinate, PlaceDetails, PlaceSummary
from places_search.core.results import ApiResult, Ok, ParseError

logger = logging.getLogger(__name__)

# field -> (component type tag, name variant)
_COMPONENT_FIELDS: Dict[str, Tuple[str, str]] = {
    "street_number": ("street_number", "short_name"),
    "route": ("route", "short_name"),
    "postal_code": ("postal_code", "long_name"),
    "country": ("country", "long_name"),
    "country_code": ("country", "short_name"),
    "locality": ("locality", "long_name"),
    "sub_locality": ("sublocality", "long_name"),
    "administrative_area": ("administrative_area_level_1", "long_name"),
    "administrative_area_code": ("administrative_area_level_1", "short_name"),
    "sub_administrative_area": ("administrative_area_level_2", "long_name"),
}


class PlaceDetailsParseError(ValueError):
    """Raised when a details payload lacks the fields a record requires."""


def _str_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _split_terms(terms: Any) -> Tuple[str, str]:
    values = [item.get("value") for item in terms or [] if isinstance(item, dict)]
    values = [value for value in values if isinstance(value, str)]
    if not values:
        return "", ""
    return values[0], ", ".join(values[1:])


def to_place_summary(prediction: Any) -> PlaceSummary:
    if not isinstance(prediction, dict):
        logger.debug("Prediction is not an object: %r", prediction)
        return PlaceSummary(id="")

    place_id = _str_or_empty(prediction.get("place_id"))
    if not place_id:
        logger.debug("Prediction without place_id: %s", prediction)

    description = _str_or_none(prediction.get("description"))
    formatting = prediction.get("structured_formatting")
    if isinstance(formatting, dict):
        main_text = _str_or_empty(formatting.get("main_text"))
        secondary_text = _str_or_empty(formatting.get("secondary_text"))
    elif prediction.get("terms"):
        main_text, secondary_text = _split_terms(prediction.get("terms"))
    else:
        main_text, secondary_text = description or "", ""

    return PlaceSummary(
        id=place_id,
        main_text=main_text,
        secondary_text=secondary_text,
        description=description,
    )


def to_place_summaries(predictions: Optional[Iterable[Any]]) -> List[PlaceSummary]:
    return [to_place_summary(prediction) for prediction in predictions or []]


def find_component(address_components: Iterable[Any], type_tag: str, variant: str) -> Optional[str]:
    """Return ``variant`` of the first component tagged ``type_tag``, else None."""
    for component in address_components or []:
        if not isinstance(component, dict):
            continue
        types = component.get("types") or []
        if isinstance(types, list) and type_tag in types:
            return _str_or_none(component.get(variant))
    return None


def _parse_coordinate(result: Dict[str, Any]) -> Optional[Coordinate]:
    geometry = result.get("geometry")
    if not isinstance(geometry, dict):
        return None
    location = geometry.get("location")
    if not isinstance(location, dict):
        return None
    lat = location.get("lat")
    lng = location.get("lng")
    if _is_number(lat) and _is_number(lng):
        return Coordinate(lat=float(lat), lng=float(lng))
    return None


def to_place_details(payload: Any) -> PlaceDetails:
    if not isinstance(payload, dict):
        raise PlaceDetailsParseError("details payload is not an object")
    result = payload.get("result")
    if not isinstance(result, dict):
        raise PlaceDetailsParseError("details payload has no 'result' object")
    formatted_address = result.get("formatted_address")
    if not isinstance(formatted_address, str):
        raise PlaceDetailsParseError("details result has no 'formatted_address'")

    components = result.get("address_components")
    if not isinstance(components, list):
        components = []
    fields = {
        name: find_component(components, type_tag, variant)
        for name, (type_tag, variant) in _COMPONENT_FIELDS.items()
    }

    return PlaceDetails(
        formatted_address=formatted_address,
        name=_str_or_none(result.get("name")),
        phone_number=_str_or_none(result.get("formatted_phone_number")),
        coordinate=_parse_coordinate(result),
        raw=payload,
        **fields,
    )


def parse_place_details(payload: Any) -> ApiResult[PlaceDetails]:
    try:
        return Ok(to_place_details(payload))
    except PlaceDetailsParseError as exc:
        logger.warning("Unable to parse place details: %s", exc)
        return ParseError(str(exc))
