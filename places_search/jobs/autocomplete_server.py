"""HTTP entrypoint exposing place autocomplete and details lookups."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Any, Dict

from flask import Flask, jsonify, request

from places_search.core.config import get_settings
from places_search.core.models import ConfigError, PlaceTypeFilter
from places_search.core.results import ApiStatusError, HttpStatusError, is_zero_results
from places_search.core.session import fetch_place_details, fetch_predictions
from places_search.vendors.google_places import PlacesRequester

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
_requester = PlacesRequester()

# ---------- Routes ----------


@app.get("/healthz")
def healthcheck() -> Any:
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "api_key_configured": bool(settings.google_api_key),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.get("/autocomplete")
def autocomplete() -> Any:
    """
    Autocomplete predictions for partial input.
    Required query args: input
    Optional: types (filter name or token)
    """
    text = request.args.get("input", "")
    if not text:
        return jsonify({"error": "input is required"}), 400

    try:
        config = get_settings().session_config()
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return jsonify({"error": "server is not configured"}), 500

    types_raw = request.args.get("types")
    if types_raw is not None:
        try:
            config = replace(config, place_type=PlaceTypeFilter.parse(types_raw))
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

    outcome = fetch_predictions(_requester, config, text)
    if is_zero_results(outcome):
        return jsonify({"data": []}), 200
    if not outcome.ok:
        return _failure_response(outcome)
    return jsonify({"data": [summary.to_dict() for summary in outcome.value]}), 200


@app.get("/details")
def details() -> Any:
    """
    Place details for a selected prediction.
    Required query args: placeid
    """
    place_id = request.args.get("placeid", "")
    if not place_id:
        return jsonify({"error": "placeid is required"}), 400

    try:
        config = get_settings().session_config()
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return jsonify({"error": "server is not configured"}), 500

    outcome = fetch_place_details(_requester, config, place_id)
    if not outcome.ok:
        return _failure_response(outcome)
    return jsonify({"data": outcome.value.to_dict()}), 200


# ---------- Internals ----------


def _failure_response(outcome) -> Any:
    body: Dict[str, Any] = {"error": outcome.kind}
    if isinstance(outcome, ApiStatusError):
        body["status"] = outcome.status
        if outcome.error_message:
            body["error_message"] = outcome.error_message
    elif isinstance(outcome, HttpStatusError):
        body["upstream_status"] = outcome.code
    return jsonify(body), 502


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
