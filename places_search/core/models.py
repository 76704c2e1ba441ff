"""Domain models shared by the autocomplete pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


class PlaceTypeFilter(Enum):
    """Place type restriction sent as the ``types`` parameter."""

    ALL = ""
    GEOCODE = "geocode"
    ADDRESS = "address"
    ESTABLISHMENT = "establishment"
    REGIONS = "(regions)"
    CITIES = "(cities)"

    @property
    def token(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: Optional[str]) -> "PlaceTypeFilter":
        """Accept either an enum name (any case) or the API token itself."""
        if raw is None:
            return cls.ALL
        text = raw.strip()
        for member in cls:
            if text.upper() == member.name or text == member.value:
                return member
        raise ValueError(f"Unknown place type filter: {raw!r}")


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float
    lng: float

    @property
    def is_valid(self) -> bool:
        try:
            lat = float(self.lat)
            lng = float(self.lng)
        except (TypeError, ValueError):
            return False
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


@dataclass(frozen=True, slots=True)
class SearchBias:
    """Optional geographic hint narrowing autocomplete results."""

    coordinate: Optional[Coordinate] = None
    radius_meters: float = 0.0
    strict_bounds: bool = False

    def __post_init__(self) -> None:
        if self.radius_meters is None or self.radius_meters < 0:
            raise ValueError("radius_meters must be >= 0")

    @property
    def has_valid_coordinate(self) -> bool:
        return self.coordinate is not None and self.coordinate.is_valid


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable per-session settings passed explicitly to every request."""

    api_key: str
    place_type: PlaceTypeFilter = PlaceTypeFilter.ALL
    bias: SearchBias = field(default_factory=SearchBias)
    timeout_sec: float = 10.0
    autocomplete_url: str = AUTOCOMPLETE_URL
    details_url: str = DETAILS_URL

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("A Google Places API key is required to create a session.")


@dataclass(frozen=True, slots=True)
class PlaceSummary:
    """Lightweight prediction row; identity is the place id."""

    id: str
    main_text: str = field(default="", compare=False)
    secondary_text: str = field(default="", compare=False)
    description: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "main_text": self.main_text,
            "secondary_text": self.secondary_text,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class PlaceDetails:
    """Structured result of a Place Details lookup."""

    formatted_address: str
    name: Optional[str] = None
    phone_number: Optional[str] = None
    street_number: Optional[str] = None
    route: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    locality: Optional[str] = None
    sub_locality: Optional[str] = None
    administrative_area: Optional[str] = None
    administrative_area_code: Optional[str] = None
    sub_administrative_area: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "formatted_address": self.formatted_address,
            "name": self.name,
            "phone_number": self.phone_number,
            "street_number": self.street_number,
            "route": self.route,
            "postal_code": self.postal_code,
            "country": self.country,
            "country_code": self.country_code,
            "locality": self.locality,
            "sub_locality": self.sub_locality,
            "administrative_area": self.administrative_area,
            "administrative_area_code": self.administrative_area_code,
            "sub_administrative_area": self.sub_administrative_area,
            "coordinate": None,
        }
        if self.coordinate is not None:
            data["coordinate"] = {"lat": self.coordinate.lat, "lng": self.coordinate.lng}
        return data

    def __str__(self) -> str:
        coordinate = "n/a"
        if self.coordinate is not None:
            coordinate = f"({self.coordinate.lat}, {self.coordinate.lng})"
        return (
            f"Place: {self.name or '-'}\n"
            f"Address: {self.formatted_address}\n"
            f"Coordinate: {coordinate}\n"
            f"Phone No.: {self.phone_number or '-'}"
        )
