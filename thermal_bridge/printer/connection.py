"""Printer connection handlers for Network and Serial interfaces."""
import logging
import socket
from abc import ABC, abstractmethod
from typing import List, Optional, Union

import serial
from serial.tools import list_ports

from thermal_bridge.errors import (
    ConnectionTimeout,
    InvalidRequest,
    TransportOpenError,
    WriteFailure,
)
from thermal_bridge.models import (
    DEFAULT_BAUD_RATE,
    ConnectionKind,
    NetworkTarget,
    SerialPortDescriptor,
    SerialTarget,
)
from thermal_bridge.printer.escpos import ESCPOSBuilder

logger = logging.getLogger(__name__)


class PrinterConnection(ABC):
    """Abstract base class for printer connections."""

    kind: ConnectionKind

    @abstractmethod
    def open(self) -> None:
        """Establish the connection and initialize the printer."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Never raises."""
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Send data to the printer, blocking until it is handed off."""
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if printer is connected."""
        pass

    def _initialize(self) -> None:
        """Send ESC @, closing the handle if the printer rejects it."""
        try:
            self.write(ESCPOSBuilder.INIT)
        except WriteFailure as e:
            self.close()
            raise TransportOpenError(f"Failed to initialize {self}: {e}") from e


class NetworkPrinter(PrinterConnection):
    """TCP/IP network printer connection."""

    kind = ConnectionKind.NETWORK

    def __init__(self, ip: str, port: int = 9100, timeout: float = 5.0):
        self.ip = ip
        self.port = port
        self.timeout = timeout
        self._socket: Optional[socket.socket] = None

    def open(self) -> None:
        """Connect to network printer."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect((self.ip, self.port))
        except socket.timeout:
            sock.close()
            raise ConnectionTimeout()
        except OSError as e:
            sock.close()
            raise TransportOpenError(f"Failed to connect to {self.ip}:{self.port}: {e}") from e

        self._socket = sock
        self._initialize()

    def close(self) -> None:
        """Close network connection."""
        if self._socket:
            try:
                self._socket.close()
            except OSError as e:
                logger.warning("Error closing %r: %s", self, e)
            self._socket = None

    def write(self, data: bytes) -> None:
        """Send data to network printer."""
        if not self._socket:
            raise WriteFailure("Not connected")
        try:
            self._socket.sendall(data)
        except OSError as e:
            raise WriteFailure(f"Failed to send data: {e}") from e

    def is_connected(self) -> bool:
        """Check if socket is connected."""
        return self._socket is not None

    def __repr__(self):
        return f"NetworkPrinter({self.ip}:{self.port})"


class SerialPrinter(PrinterConnection):
    """Serial port printer connection."""

    kind = ConnectionKind.SERIAL

    def __init__(self, port: str, baudrate: int = DEFAULT_BAUD_RATE,
                 bytesize: int = serial.EIGHTBITS,
                 stopbits: float = serial.STOPBITS_ONE,
                 parity: str = serial.PARITY_NONE,
                 timeout: float = 5.0):
        self.port = port
        self.baudrate = baudrate
        self.bytesize = bytesize
        self.stopbits = stopbits
        self.parity = parity
        self.timeout = timeout
        self._serial: Optional[serial.Serial] = None

    def open(self) -> None:
        """Connect to serial printer."""
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=self.bytesize,
                stopbits=self.stopbits,
                parity=self.parity,
                timeout=self.timeout,
                write_timeout=self.timeout,
            )
        except (serial.SerialException, ValueError) as e:
            self._serial = None
            raise TransportOpenError(f"Failed to connect to {self.port}: {e}") from e

        self._initialize()

    def close(self) -> None:
        """Close serial connection."""
        if self._serial:
            try:
                self._serial.close()
            except (serial.SerialException, OSError) as e:
                logger.warning("Error closing %r: %s", self, e)
            self._serial = None

    def write(self, data: bytes) -> None:
        """Send data to serial printer."""
        if not self._serial:
            raise WriteFailure("Not connected")
        try:
            self._serial.write(data)
            self._serial.flush()
        except (serial.SerialException, OSError) as e:
            raise WriteFailure(f"Failed to send data: {e}") from e

    def is_connected(self) -> bool:
        """Check if serial port is open."""
        return self._serial is not None and self._serial.is_open

    def __repr__(self):
        return f"SerialPrinter({self.port}@{self.baudrate})"


def create_printer(target: Union[SerialTarget, NetworkTarget], timeout: float = 5.0) -> PrinterConnection:
    """Factory function to create a printer connection for a target.

    Args:
        target: SerialTarget or NetworkTarget describing the printer.
        timeout: Open/write timeout in seconds.

    Returns:
        PrinterConnection instance (not yet opened).
    """
    if isinstance(target, NetworkTarget):
        return NetworkPrinter(ip=target.ip_address, port=target.port, timeout=timeout)
    elif isinstance(target, SerialTarget):
        return SerialPrinter(port=target.path, baudrate=target.baud_rate, timeout=timeout)
    else:
        raise InvalidRequest(f"Unknown printer target: {target!r}")


def _hex_id(value: Optional[int]) -> Optional[str]:
    return f"{value:04x}" if value is not None else None


def list_serial_ports() -> List[SerialPortDescriptor]:
    """Enumerate serial ports on this host, freshly on every call."""
    ports = []
    for info in list_ports.comports():
        label = info.manufacturer or info.description
        if label and label != "n/a":
            display_name = f"{info.device} - {label}"
        else:
            display_name = info.device
        ports.append(SerialPortDescriptor(
            path=info.device,
            manufacturer=info.manufacturer,
            serial_number=info.serial_number,
            vendor_id=_hex_id(info.vid),
            product_id=_hex_id(info.pid),
            display_name=display_name,
        ))
    return sorted(ports, key=lambda p: p.path)
