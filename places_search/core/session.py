"""Stateful autocomplete session driving the query and details pipelines."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from places_search.core.models import PlaceDetails, PlaceSummary, SessionConfig
from places_search.core.results import ApiResult, Ok, ParseError, is_zero_results
from places_search.etl.transform import parse_place_details, to_place_summaries
from places_search.vendors.google_places import PlacesRequester
from places_search.vendors.query import build_autocomplete_params, build_details_params

logger = logging.getLogger(__name__)

ResultsCallback = Callable[[List[PlaceSummary]], None]
DetailsCallback = Callable[[Optional[PlaceDetails]], None]


def fetch_predictions(
    requester: PlacesRequester,
    config: SessionConfig,
    text: str,
) -> ApiResult[List[PlaceSummary]]:
    """Run one autocomplete round trip and map the predictions."""
    params = build_autocomplete_params(text, config.place_type, config.bias, config.api_key)
    outcome = requester.fetch(config.autocomplete_url, params)
    if not outcome.ok:
        return outcome
    predictions = outcome.value.get("predictions")
    if not isinstance(predictions, list):
        logger.warning("Autocomplete response has no predictions array for input=%r", text)
        return ParseError("autocomplete response has no 'predictions' array")
    return Ok(to_place_summaries(predictions))


def fetch_place_details(
    requester: PlacesRequester,
    config: SessionConfig,
    place_id: str,
) -> ApiResult[PlaceDetails]:
    params = build_details_params(place_id, config.api_key)
    outcome = requester.fetch(config.details_url, params)
    if not outcome.ok:
        return outcome
    return parse_place_details(outcome.value)


def _run_inline(fn: Callable[[], None]) -> None:
    fn()


class AutocompleteSession:
    """Owns the query configuration and the latest result set.

    Each keystroke is dispatched on ``executor`` tagged with a sequence number;
    only the response matching the latest issued number may replace the
    results. Callbacks run through ``deliver``, which defaults to calling them
    inline on the worker thread.
    """

    def __init__(
        self,
        config: SessionConfig,
        requester: Optional[PlacesRequester] = None,
        executor: Optional[Executor] = None,
        on_results_changed: Optional[ResultsCallback] = None,
        on_details_resolved: Optional[DetailsCallback] = None,
        deliver: Optional[Callable[[Callable[[], None]], None]] = None,
    ) -> None:
        if not isinstance(config, SessionConfig):
            raise TypeError("config must be a SessionConfig")
        self.config = config
        self._requester = requester or PlacesRequester(timeout_sec=config.timeout_sec)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=4)
        self._on_results_changed = on_results_changed
        self._on_details_resolved = on_details_resolved
        self._deliver = deliver or _run_inline
        self._lock = threading.Lock()
        self._sequence = 0
        self._results: Tuple[PlaceSummary, ...] = ()

    @property
    def results(self) -> Tuple[PlaceSummary, ...]:
        with self._lock:
            return self._results

    @property
    def latest_sequence(self) -> int:
        with self._lock:
            return self._sequence

    def _next_sequence(self) -> int:
        with self._lock:
            self._sequence += 1
            return self._sequence

    def _notify(self, callback: Optional[Callable], value, sequence: Optional[int] = None) -> None:
        if callback is None:
            return

        def _invoke() -> None:
            # a newer keystroke may have been issued while this was queued
            if sequence is not None and sequence != self.latest_sequence:
                logger.debug("Dropping stale results callback seq=%d", sequence)
                return
            try:
                callback(value)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Autocomplete callback failed: %s", exc)

        self._deliver(_invoke)

    def _replace_results(self, sequence: int, results: Sequence[PlaceSummary]) -> bool:
        with self._lock:
            if sequence != self._sequence:
                return False
            self._results = tuple(results)
            snapshot = list(self._results)
        self._notify(self._on_results_changed, snapshot, sequence)
        return True

    def on_query_text_changed(self, text: Optional[str]) -> Optional[Future]:
        """Start a search for ``text``; empty text clears the results."""
        sequence = self._next_sequence()
        if not text:
            self._replace_results(sequence, [])
            return None
        logger.debug("Dispatching autocomplete seq=%d input=%r", sequence, text)
        return self._executor.submit(self._run_query, sequence, text)

    def _run_query(self, sequence: int, text: str) -> ApiResult[List[PlaceSummary]]:
        outcome = fetch_predictions(self._requester, self.config, text)
        if outcome.ok:
            applied = self._replace_results(sequence, outcome.value)
        elif is_zero_results(outcome):
            applied = self._replace_results(sequence, [])
        else:
            logger.warning("Autocomplete failed for input=%r: %s", text, outcome)
            return outcome
        if not applied:
            logger.debug("Discarding stale autocomplete response seq=%d", sequence)
        return outcome

    def on_result_selected(
        self,
        summary: PlaceSummary,
        handler: Optional[DetailsCallback] = None,
    ) -> Future:
        """Resolve ``summary`` into details, delivered to ``handler`` (or the session default)."""
        callback = handler or self._on_details_resolved
        return self._executor.submit(self._run_details, summary, callback)

    def select_index(self, index: int, handler: Optional[DetailsCallback] = None) -> Future:
        results = self.results
        if index < 0 or index >= len(results):
            raise IndexError(f"No result at index {index}; {len(results)} available")
        return self.on_result_selected(results[index], handler)

    def _run_details(
        self,
        summary: PlaceSummary,
        callback: Optional[DetailsCallback],
    ) -> ApiResult[PlaceDetails]:
        outcome = fetch_place_details(self._requester, self.config, summary.id)
        if outcome.ok:
            self._notify(callback, outcome.value)
        else:
            logger.warning("Place details failed for place_id=%s: %s", summary.id, outcome)
            self._notify(callback, None)
        return outcome

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "AutocompleteSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
