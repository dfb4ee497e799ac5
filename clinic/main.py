import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from clinic.core.config import (
    get_database_url,
    get_environment,
    get_log_json,
    get_log_level,
    get_log_sql_timing,
    get_log_to_file,
    get_max_daily_appointments,
    get_rate_limit_enabled,
    get_sentry_dsn,
    is_production,
    is_testing,
    log_booking_config,
)
from clinic.db.session import Database

# Get logger for this module
logger = logging.getLogger(__name__)

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()


def create_app(database_url: Optional[str] = None, testing: bool = False) -> Flask:
    """
    Build the clinic API application.

    Args:
        database_url: Store URL; defaults to DATABASE_URL or local SQLite
        testing: Force TESTING mode (also enabled by the TESTING env var)
    """
    env = get_environment()
    production = is_production()

    app = Flask(__name__)
    if testing or is_testing():
        app.config["TESTING"] = True

    # Configure structured logging (after app creation so we can register hooks)
    from clinic.core.logging_config import setup_logging

    setup_logging(
        app=app,
        log_level=get_log_level(),
        enable_sql_echo=get_log_sql_timing(),
        log_to_file=get_log_to_file(),
        use_json_format=get_log_json(),
    )
    logger.info(
        "Logging configured",
        extra={
            "context": {
                "environment": env,
                "json_format": get_log_json(),
                "log_level": get_log_level(),
            }
        },
    )

    # Sentry: error tracking only when a DSN is configured
    sentry_dsn = get_sentry_dsn()
    if sentry_dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=env,
            release=os.getenv("GIT_SHA", "unknown"),
            integrations=[FlaskIntegration(), SqlalchemyIntegration()],
            traces_sample_rate=0.1,
            send_default_pii=False,
        )
        logger.info("Sentry initialized", extra={"context": {"environment": env}})
    else:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )

    # Prometheus metrics at /metrics; MUST be initialized BEFORE the limiter
    from prometheus_client import CollectorRegistry
    from prometheus_flask_exporter import PrometheusMetrics

    # Test apps get a private registry so repeated create_app calls do not
    # register the same collectors twice
    registry = CollectorRegistry() if app.config.get("TESTING") else None
    metrics = PrometheusMetrics(app, registry=registry)
    try:
        metrics.info(
            "clinic_app_info",
            "Application information",
            version=os.getenv("GIT_SHA", "unknown"),
            environment=env,
        )
    except ValueError as e:
        # Metric already registered (create_app called twice in one process)
        logger.debug(
            "clinic_app_info metric already registered",
            extra={"context": {"error": str(e)}},
        )

    # Rate limiting
    from clinic.core.limiter_config import limiter

    rate_limit_enabled = get_rate_limit_enabled()
    app.config["RATELIMIT_ENABLED"] = rate_limit_enabled
    app.config["RATELIMIT_STORAGE_URI"] = os.getenv(
        "LIMITER_STORAGE_URI", "memory://"
    )
    limiter.init_app(app)
    limiter.enabled = rate_limit_enabled
    if not rate_limit_enabled:
        logger.info(
            "Rate limiting disabled",
            extra={"context": {"test_mode": bool(app.config.get("TESTING"))}},
        )

    # Store handle: one per application, no module-level session
    url = database_url or get_database_url()
    database = Database(url)
    database.create_tables()
    app.extensions["clinic_db"] = database
    app.config["MAX_DAILY_APPOINTMENTS"] = get_max_daily_appointments()
    logger.info(
        "Database configured",
        extra={
            "context": {
                "database": repr(database),
                "production": production,
            }
        },
    )
    log_booking_config()

    from clinic.controllers import appointment_bp, doctor_bp, health_bp, patient_bp

    app.register_blueprint(doctor_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(health_bp)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
