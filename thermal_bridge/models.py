"""Value types shared by the printer core and the API."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from thermal_bridge.errors import InvalidRequest

DEFAULT_BAUD_RATE = 19200


class ConnectionKind(str, Enum):
    """Kind of transport backing the active connection."""
    SERIAL = "serial"
    NETWORK = "network"


class ConnectionState(str, Enum):
    """Lifecycle of the registry's single connection."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


@dataclass(frozen=True)
class SerialTarget:
    """Serial device to connect to."""
    path: str
    baud_rate: int = DEFAULT_BAUD_RATE

    kind = ConnectionKind.SERIAL

    def metadata(self) -> dict:
        return {"portPath": self.path, "baudRate": self.baud_rate}

    @classmethod
    def from_dict(cls, data: dict, default_baud_rate: int = DEFAULT_BAUD_RATE) -> "SerialTarget":
        """Build from an API request body ({portPath, baudRate})."""
        path = data.get("portPath")
        if not path or not isinstance(path, str):
            raise InvalidRequest("Port path is required")

        baud_rate = data.get("baudRate")
        if baud_rate is None or baud_rate == "":
            baud_rate = default_baud_rate
        try:
            baud_rate = int(baud_rate)
        except (TypeError, ValueError):
            raise InvalidRequest(f"Invalid baud rate: {baud_rate!r}")
        if baud_rate <= 0:
            raise InvalidRequest("Baud rate must be greater than 0")

        return cls(path=path, baud_rate=baud_rate)


@dataclass(frozen=True)
class NetworkTarget:
    """TCP endpoint to connect to."""
    ip_address: str
    port: int = 9100

    kind = ConnectionKind.NETWORK

    def metadata(self) -> dict:
        return {"ipAddress": self.ip_address, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict) -> "NetworkTarget":
        """Build from an API request body ({ipAddress, port})."""
        ip_address = data.get("ipAddress")
        port = data.get("port")
        if not ip_address or not isinstance(ip_address, str) or port in (None, ""):
            raise InvalidRequest("IP address and port are required")
        try:
            port = int(port)
        except (TypeError, ValueError):
            raise InvalidRequest(f"Invalid port: {port!r}")
        if not 0 < port < 65536:
            raise InvalidRequest(f"Invalid port: {port}")

        return cls(ip_address=ip_address.strip(), port=port)


@dataclass(frozen=True)
class SerialPortDescriptor:
    """A serial port found on the host."""
    path: str
    manufacturer: Optional[str] = None
    serial_number: Optional[str] = None
    vendor_id: Optional[str] = None
    product_id: Optional[str] = None
    display_name: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "path": self.path,
            "manufacturer": self.manufacturer,
            "serialNumber": self.serial_number,
            "vendorId": self.vendor_id,
            "productId": self.product_id,
            "displayName": self.display_name,
        }


@dataclass(frozen=True)
class DiscoveredPrinter:
    """An endpoint that accepted a TCP connection during a scan."""
    ip_address: str
    port: int
    name: str

    @classmethod
    def at(cls, ip_address: str, port: int) -> "DiscoveredPrinter":
        return cls(ip_address=ip_address, port=port, name=f"Network Printer ({ip_address})")

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {"ipAddress": self.ip_address, "port": self.port, "name": self.name}


@dataclass(frozen=True)
class PrintJob:
    """Content of a single receipt."""
    text: str
    custom_text: Optional[str] = None
    timestamp: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PrintJob":
        """Build from an API request body ({text, customText, timestamp})."""
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise InvalidRequest("Text is required")

        custom_text = data.get("customText")
        timestamp = data.get("timestamp")
        return cls(
            text=text,
            custom_text=custom_text if isinstance(custom_text, str) else None,
            timestamp=timestamp if isinstance(timestamp, str) else None,
        )
