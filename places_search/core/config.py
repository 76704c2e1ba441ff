"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from places_search.core.models import (
    Coordinate,
    PlaceTypeFilter,
    SearchBias,
    SessionConfig,
)

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes"}


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    place_type: PlaceTypeFilter = PlaceTypeFilter.ALL
    bias_lat: Optional[float] = None
    bias_lng: Optional[float] = None
    bias_radius: float = 0.0
    strict_bounds: bool = False
    request_timeout: float = 10.0
    input_placeholder: str = "Enter Address"
    port: int = 8080

    def search_bias(self) -> SearchBias:
        coordinate = None
        if self.bias_lat is not None and self.bias_lng is not None:
            coordinate = Coordinate(lat=self.bias_lat, lng=self.bias_lng)
        return SearchBias(
            coordinate=coordinate,
            radius_meters=self.bias_radius,
            strict_bounds=self.strict_bounds,
        )

    def session_config(self) -> SessionConfig:
        """Raises ConfigError when the API key is missing."""
        return SessionConfig(
            api_key=self.google_api_key,
            place_type=self.place_type,
            bias=self.search_bias(),
            timeout_sec=self.request_timeout,
        )


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s=%r is not a number; using %s.", name, raw, default)
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %s.", name, raw, default)
        return default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "").strip()
    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; Google Places requests will fail.")

    place_type_raw = os.getenv("PLACES_TYPE_FILTER")
    try:
        place_type = PlaceTypeFilter.parse(place_type_raw)
    except ValueError:
        logger.warning("PLACES_TYPE_FILTER=%r is unknown; using ALL.", place_type_raw)
        place_type = PlaceTypeFilter.ALL

    bias_radius = _float_env("PLACES_BIAS_RADIUS", 0.0)
    if bias_radius < 0:
        logger.warning("PLACES_BIAS_RADIUS must be >= 0; ignoring %s.", bias_radius)
        bias_radius = 0.0

    return Settings(
        google_api_key=google_api_key,
        place_type=place_type,
        bias_lat=_float_env("PLACES_BIAS_LAT", None),
        bias_lng=_float_env("PLACES_BIAS_LNG", None),
        bias_radius=bias_radius,
        strict_bounds=os.getenv("PLACES_STRICT_BOUNDS", "false").lower() in _TRUTHY,
        request_timeout=_float_env("PLACES_REQUEST_TIMEOUT", 10.0),
        input_placeholder=os.getenv("PLACES_INPUT_PLACEHOLDER") or "Enter Address",
        port=_int_env("PORT", 8080),
    )
