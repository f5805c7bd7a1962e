"""Printer module for ESC/POS thermal printing."""
from thermal_bridge.printer.connection import (
    PrinterConnection,
    NetworkPrinter,
    SerialPrinter,
    create_printer,
    list_serial_ports,
)
from thermal_bridge.printer.discovery import NetworkScanner
from thermal_bridge.printer.escpos import ESCPOSBuilder
from thermal_bridge.printer.registry import PrinterRegistry
from thermal_bridge.printer.renderer import ReceiptRenderer, encode

__all__ = [
    "PrinterConnection",
    "NetworkPrinter",
    "SerialPrinter",
    "create_printer",
    "list_serial_ports",
    "NetworkScanner",
    "ESCPOSBuilder",
    "PrinterRegistry",
    "ReceiptRenderer",
    "encode",
]
