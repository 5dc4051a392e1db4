"""Rename relay HTTP endpoint."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from fname_swap.features.relay.schemas import RenameRequest, format_validation_errors
from fname_swap.shared.errors import DirectoryError, OutcomeUnknown, PartialFailure

logger = logging.getLogger(__name__)

RELAY_EXTENSION_KEY = "fname_swap.relay"

rename_api_bp = Blueprint("rename_api", __name__, url_prefix="/api")


@rename_api_bp.get("/health")
def health_endpoint():
    return jsonify({"status": "ok"})


@rename_api_bp.post("/rename")
def rename_endpoint():
    payload = request.get_json(silent=True)
    if payload is None:
        return (
            jsonify({"error": "Invalid request body: Failed to parse JSON."}),
            400,
        )

    try:
        data = RenameRequest.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"error": f"Invalid input: {format_validation_errors(exc)}"}),
            400,
        )

    service = current_app.extensions[RELAY_EXTENSION_KEY]
    try:
        message = service.execute(data)
    except PartialFailure as exc:
        logger.error("Claim step failed after release: %s", exc)
        return (
            jsonify(
                {
                    "error": str(exc),
                    "stage": "claim",
                    "released": exc.released,
                    "detail": exc.detail,
                }
            ),
            500,
        )
    except OutcomeUnknown as exc:
        logger.error("Release step unconfirmed: %s", exc)
        return (
            jsonify(
                {
                    "error": str(exc),
                    "stage": "release",
                    "outcome": "unknown",
                    "detail": exc.reason,
                }
            ),
            504,
        )
    except DirectoryError as exc:
        logger.error("Release step failed: %s", exc)
        return jsonify({"error": str(exc), "stage": "release"}), 500

    return jsonify({"success": True, "message": message}), 200
