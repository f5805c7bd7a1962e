"""Shared fixtures: fake transports, loopback TCP listener, Flask app."""

from __future__ import annotations

from pathlib import Path
import socket
import sys
import threading
import time

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from thermal_bridge import create_app
from thermal_bridge.errors import WriteFailure
from thermal_bridge.models import ConnectionKind, NetworkTarget
from thermal_bridge.printer import PrinterRegistry
from thermal_bridge.printer.connection import PrinterConnection


class TransportLog:
    """Tracks every fake transport so tests can count open handles."""

    def __init__(self) -> None:
        self.created: list[FakeTransport] = []
        self.open_handles = 0
        self.max_open_handles = 0
        self.open_error: Exception | None = None
        self.write_error: Exception | None = None
        self.open_delay = 0.0
        self._lock = threading.Lock()

    def factory(self, target, timeout: float) -> "FakeTransport":
        transport = FakeTransport(self, target, timeout)
        self.created.append(transport)
        return transport

    def opened(self) -> None:
        with self._lock:
            self.open_handles += 1
            self.max_open_handles = max(self.max_open_handles, self.open_handles)

    def closed(self) -> None:
        with self._lock:
            self.open_handles -= 1


class FakeTransport(PrinterConnection):
    """In-memory transport that records what it is sent."""

    def __init__(self, log: TransportLog, target, timeout: float) -> None:
        self.log = log
        self.target = target
        self.timeout = timeout
        self.kind = ConnectionKind.NETWORK if isinstance(target, NetworkTarget) else ConnectionKind.SERIAL
        self.written: list[bytes] = []
        self._open = False

    def open(self) -> None:
        if self.log.open_delay:
            time.sleep(self.log.open_delay)
        if self.log.open_error is not None:
            raise self.log.open_error
        self._open = True
        self.log.opened()
        self.written.append(b"\x1b\x40")

    def close(self) -> None:
        if self._open:
            self._open = False
            self.log.closed()

    def write(self, data: bytes) -> None:
        if not self._open:
            raise WriteFailure("Not connected")
        if self.log.write_error is not None:
            raise self.log.write_error
        self.written.append(data)

    def is_connected(self) -> bool:
        return self._open

    def __repr__(self) -> str:
        return f"FakeTransport({self.target})"


class LoopbackListener:
    """TCP server on 127.0.0.1 that accepts connections and keeps what it reads."""

    def __init__(self) -> None:
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.sock.bind(("127.0.0.1", 0))
        self.sock.listen(16)
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]
        self.received = bytearray()
        self.connections = 0
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self.sock.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            self.connections += 1
            with conn:
                conn.settimeout(0.1)
                while not self._stop.is_set():
                    try:
                        chunk = conn.recv(4096)
                    except socket.timeout:
                        continue
                    except OSError:
                        break
                    if not chunk:
                        break
                    self.received.extend(chunk)

    def wait_for(self, size: int, timeout: float = 2.0) -> bytes:
        deadline = time.monotonic() + timeout
        while len(self.received) < size and time.monotonic() < deadline:
            time.sleep(0.01)
        return bytes(self.received)

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2)
        self.sock.close()


@pytest.fixture()
def transports() -> TransportLog:
    return TransportLog()


@pytest.fixture()
def registry(transports: TransportLog) -> PrinterRegistry:
    return PrinterRegistry(transport_factory=transports.factory, connect_timeout=1.0)


@pytest.fixture()
def listener():
    server = LoopbackListener()
    yield server
    server.close()


@pytest.fixture()
def app(transports: TransportLog):
    app = create_app("testing")
    app.extensions["printer_registry"].transport_factory = transports.factory
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
