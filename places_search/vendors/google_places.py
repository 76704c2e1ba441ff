"""Client utilities for the Google Places web service."""

import logging
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from places_search.core.results import (
    ApiResult,
    ApiStatusError,
    HttpStatusError,
    Ok,
    ParseError,
    TransportError,
    ZERO_RESULTS,
)
from places_search.vendors.query import encode_query

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
DEFAULT_TIMEOUT_SEC = 10


def _noop() -> None:
    return None


class PlacesRequester:
    """Issues GET requests and classifies the outcome into an ``ApiResult``.

    Failures are logged and returned, never raised, so callers running on a
    worker thread can hand the value straight to their completion callback.
    """

    def __init__(
        self,
        session: Optional[Any] = None,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        on_network_activity_ended: Optional[Callable[[], None]] = None,
    ) -> None:
        self._session = session
        self.timeout_sec = timeout_sec
        self._on_network_activity_ended = on_network_activity_ended or _noop

    @property
    def session(self) -> Any:
        return self._session if self._session is not None else _SESSION

    @staticmethod
    def build_url(base_url: str, params: Mapping[str, str]) -> str:
        query = encode_query(params)
        if not query:
            return base_url
        return f"{base_url}?{query}"

    def fetch(self, base_url: str, params: Mapping[str, str]) -> ApiResult[Dict[str, Any]]:
        url = self.build_url(base_url, params)
        try:
            response = self.session.get(url, timeout=self.timeout_sec)
        except requests.RequestException as exc:
            logger.error("Places request to %s failed: %s", base_url, exc)
            return TransportError(str(exc) or exc.__class__.__name__)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Places transport raised unexpectedly for %s: %s", base_url, exc)
            return TransportError(str(exc) or exc.__class__.__name__)

        if response.status_code != 200:
            logger.error("Places request to %s returned HTTP %s", base_url, response.status_code)
            return HttpStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Places response from %s is not valid JSON: %s", base_url, exc)
            return ParseError(f"invalid JSON body: {exc}")
        if not isinstance(payload, dict):
            logger.error("Places response from %s is not a JSON object", base_url)
            return ParseError("response body is not a JSON object")

        status = payload.get("status")
        if status == ZERO_RESULTS:
            logger.info("Places query to %s matched nothing (ZERO_RESULTS)", base_url)
            return ApiStatusError(status, payload.get("error_message"))
        if status is not None and status != "OK":
            logger.error(
                "Places API error from %s: status=%s, error_message=%s",
                base_url,
                status,
                payload.get("error_message"),
            )
            return ApiStatusError(str(status), payload.get("error_message"))

        self._on_network_activity_ended()
        return Ok(payload)

    def submit(
        self,
        executor: Executor,
        base_url: str,
        params: Mapping[str, str],
    ) -> "Future[ApiResult[Dict[str, Any]]]":
        return executor.submit(self.fetch, base_url, dict(params))
