"""Request validation and JSON shapes of the value types."""

from __future__ import annotations

import pytest

from thermal_bridge.errors import InvalidRequest
from thermal_bridge.models import (
    DiscoveredPrinter,
    NetworkTarget,
    PrintJob,
    SerialPortDescriptor,
    SerialTarget,
)


def test_serial_target_defaults_baud_rate() -> None:
    target = SerialTarget.from_dict({"portPath": "/dev/ttyUSB0"})

    assert target == SerialTarget("/dev/ttyUSB0", 19200)
    assert target.metadata() == {"portPath": "/dev/ttyUSB0", "baudRate": 19200}


def test_serial_target_accepts_string_baud_rate() -> None:
    assert SerialTarget.from_dict({"portPath": "COM3", "baudRate": "9600"}).baud_rate == 9600


@pytest.mark.parametrize("body", [{}, {"portPath": ""}, {"portPath": "COM3", "baudRate": 0},
                                  {"portPath": "COM3", "baudRate": "fast"}])
def test_serial_target_rejects_bad_input(body: dict) -> None:
    with pytest.raises(InvalidRequest):
        SerialTarget.from_dict(body)


def test_network_target_from_dict() -> None:
    target = NetworkTarget.from_dict({"ipAddress": "192.168.1.50", "port": "9100"})

    assert target == NetworkTarget("192.168.1.50", 9100)
    assert target.metadata() == {"ipAddress": "192.168.1.50", "port": 9100}


@pytest.mark.parametrize("body", [{}, {"ipAddress": "10.0.0.1"}, {"port": 9100},
                                  {"ipAddress": "10.0.0.1", "port": 70000}])
def test_network_target_rejects_bad_input(body: dict) -> None:
    with pytest.raises(InvalidRequest):
        NetworkTarget.from_dict(body)


def test_print_job_requires_text() -> None:
    with pytest.raises(InvalidRequest, match="Text is required"):
        PrintJob.from_dict({"customText": "hello"})
    with pytest.raises(InvalidRequest):
        PrintJob.from_dict({"text": "   "})


def test_print_job_ignores_non_string_optionals() -> None:
    job = PrintJob.from_dict({"text": "Dona", "customText": 5, "timestamp": "2024-01-01 10:00"})

    assert job == PrintJob(text="Dona", custom_text=None, timestamp="2024-01-01 10:00")


def test_discovered_printer_name_comes_from_address() -> None:
    printer = DiscoveredPrinter.at("192.168.1.20", 9100)

    assert printer.to_dict() == {
        "ipAddress": "192.168.1.20",
        "port": 9100,
        "name": "Network Printer (192.168.1.20)",
    }


def test_serial_port_descriptor_uses_camel_case() -> None:
    port = SerialPortDescriptor(path="/dev/ttyUSB0", serial_number="A1", vendor_id="1a86")

    assert port.to_dict()["serialNumber"] == "A1"
    assert port.to_dict()["vendorId"] == "1a86"
