"""REST API endpoints for printer connection and printing."""
import logging

from flask import Blueprint, current_app, jsonify, request

from thermal_bridge.errors import PrinterError
from thermal_bridge.models import NetworkTarget, PrintJob, SerialTarget
from thermal_bridge.printer import list_serial_ports

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _registry():
    return current_app.extensions["printer_registry"]


def _scanner():
    return current_app.extensions["printer_scanner"]


def _failure(error: PrinterError, **extra):
    body = {"success": False, "error": str(error)}
    body.update(extra)
    return jsonify(body), error.status_code


# Serial ports

@api_bp.route("/printer/serial/list", methods=["GET"])
def list_ports():
    """List serial ports available on this host."""
    try:
        ports = list_serial_ports()
    except OSError as e:
        logger.exception("Serial port enumeration failed")
        return _failure(PrinterError(f"Failed to list serial ports: {e}"), ports=[])

    return jsonify({
        "success": True,
        "ports": [p.to_dict() for p in ports]
    })


@api_bp.route("/printer/serial/connect", methods=["POST"])
def connect_serial():
    """Connect to a serial printer.

    Request body:
    {
        "portPath": "/dev/ttyUSB0",
        "baudRate": 19200  // optional
    }
    """
    data = request.get_json(silent=True) or {}

    try:
        target = SerialTarget.from_dict(data, current_app.config["DEFAULT_BAUD_RATE"])
        _registry().connect(target)
    except PrinterError as e:
        logger.error("Serial connection error: %s", e)
        return _failure(e)

    return jsonify({
        "success": True,
        "connectionType": target.kind.value,
        "message": f"Connected to {target.path} at {target.baud_rate} baud"
    })


# Network printers

@api_bp.route("/printer/discover", methods=["GET", "POST"])
def discover():
    """Scan a /24 network for printers.

    Query params (or JSON body):
    - baseIP: First three octets to scan (default: 192.168.1)
    """
    data = request.get_json(silent=True) or {}
    base_ip = (request.args.get("baseIP") or data.get("baseIP")
               or current_app.config["DISCOVERY_BASE_IP"])

    try:
        printers = _scanner().discover(base_ip)
    except PrinterError as e:
        logger.error("Discovery error: %s", e)
        return _failure(e, printers=[])

    return jsonify({
        "success": True,
        "printers": [p.to_dict() for p in printers]
    })


@api_bp.route("/printer/connect", methods=["POST"])
def connect_network():
    """Connect to a network printer.

    Request body:
    {
        "ipAddress": "192.168.1.100",
        "port": 9100
    }
    """
    data = request.get_json(silent=True) or {}

    try:
        target = NetworkTarget.from_dict(data)
        _registry().connect(target)
    except PrinterError as e:
        logger.error("Network connection error: %s", e)
        return _failure(e)

    return jsonify({
        "success": True,
        "connectionType": target.kind.value,
        "message": f"Connected to {target.ip_address}:{target.port}"
    })


# Common

@api_bp.route("/printer/disconnect", methods=["POST"])
def disconnect():
    """Disconnect from the printer. Always succeeds."""
    _registry().disconnect()
    return jsonify({
        "success": True,
        "message": "Disconnected"
    })


@api_bp.route("/printer/print", methods=["POST"])
def print_receipt():
    """Print a receipt on the connected printer.

    Request body:
    {
        "text": "Dona",
        "customText": "Welcome!",        // optional
        "timestamp": "2024-01-01 10:00"  // optional
    }
    """
    data = request.get_json(silent=True) or {}

    try:
        job = PrintJob.from_dict(data)
        kind = _registry().print_job(job)
    except PrinterError as e:
        logger.error("Print error: %s", e)
        return _failure(e)

    return jsonify({
        "success": True,
        "connectionType": kind.value,
        "message": "Print job sent successfully"
    })


@api_bp.route("/printer/status", methods=["GET"])
def status():
    """Report the current connection."""
    return jsonify({"success": True, **_registry().status()})


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check."""
    return jsonify({
        "success": True,
        "message": "Printer API server is running",
        "connected": _registry().status()["connected"]
    })
