"""
Health controller - health check endpoints for monitoring.
"""

import logging

from flask import Blueprint, current_app, jsonify

from clinic.core.limiter_config import limiter

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("/", methods=["GET"])
@limiter.exempt
def health_check():
    """
    Report whether the application can reach its database.

    Returns:
        JSON response with:
        - status: "ok" or "error"
        - database: "up" or "down"

    Status codes:
        200: database reachable
        503: database unreachable
    """
    database = current_app.extensions["clinic_db"]
    if database.ping():
        return jsonify({"status": "ok", "database": "up"}), 200

    logger.error(
        "Health check failed: database unreachable",
        extra={"context": {"endpoint": "/health/", "database": repr(database)}},
    )
    return jsonify({"status": "error", "database": "down"}), 503
