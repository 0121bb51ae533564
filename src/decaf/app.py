"""Flask application factory and the single GET route."""

import logging

from flask import Blueprint, Flask, Response, current_app, jsonify

from decaf import create_service
from decaf.bond.client import BondClient, HttpBondClient
from decaf.config import Settings, load_settings
from decaf.errors import DecafError
from decaf.handler import ServiceFactory, handle_request

logger = logging.getLogger(__name__)

decaf_bp = Blueprint("decaf", __name__)


def _error_response(message: str, status: int) -> Response:
    return Response(f"Error: {message}", status=status, mimetype="text/plain")


@decaf_bp.route("/", methods=["GET"])
def verify_coffee() -> Response:
    settings: Settings = current_app.config["DECAF_SETTINGS"]
    try:
        result = handle_request(
            settings,
            current_app.config["DECAF_BOND_CLIENT"],
            current_app.config["DECAF_SERVICE_FACTORY"],
        )
    except DecafError as e:
        logger.error("Data-Driven Decaf: Error: %s", e)
        return _error_response(str(e), e.status_code)
    except Exception as e:
        logger.exception("Data-Driven Decaf: unexpected error")
        return _error_response(str(e), 500)
    return jsonify(result.to_payload())


def create_app(
    settings: Settings | None = None,
    bond_client: BondClient | None = None,
    service_factory: ServiceFactory | None = None,
) -> Flask:
    """Configure and return the Flask application."""

    settings = settings or load_settings()

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["DECAF_SETTINGS"] = settings
    app.config["DECAF_BOND_CLIENT"] = bond_client or HttpBondClient(
        settings.bond_url, timeout=settings.bond_timeout
    )
    app.config["DECAF_SERVICE_FACTORY"] = service_factory or create_service
    app.register_blueprint(decaf_bp)
    return app
