"""Flask application factory."""
import logging

from flask import Flask
from flask_cors import CORS


def create_app(config_name: str = "default"):
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Load configuration
    from thermal_bridge.config import config
    app.config.from_object(config[config_name])

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Single printer connection per application
    from thermal_bridge.printer import NetworkScanner, PrinterRegistry, ReceiptRenderer
    app.extensions["printer_registry"] = PrinterRegistry(
        connect_timeout=app.config["CONNECT_TIMEOUT"],
        renderer=ReceiptRenderer(
            header=app.config["BRAND_HEADER"],
            encoding=app.config["TEXT_ENCODING"],
        ),
    )
    app.extensions["printer_scanner"] = NetworkScanner(
        ports=app.config["DISCOVERY_PORTS"],
        timeout=app.config["DISCOVERY_TIMEOUT"],
        max_workers=app.config["DISCOVERY_WORKERS"],
    )

    # Register blueprints
    from thermal_bridge.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    CORS(app, origins=app.config["CORS_ORIGIN"])

    return app
