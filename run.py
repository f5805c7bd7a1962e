#!/usr/bin/env python3
"""Entry point for the Thermal Printer Bridge API server."""
import logging
import os
from thermal_bridge import create_app

app = create_app(os.environ.get("FLASK_ENV", "default"))

if __name__ == "__main__":
    # Get host and port from environment or use defaults
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", 3001))
    debug = os.environ.get("FLASK_ENV", "default") == "development"

    logging.getLogger(__name__).info("Starting Thermal Printer Bridge on http://%s:%d", host, port)
    # The reloader forks a second process with its own registry
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
