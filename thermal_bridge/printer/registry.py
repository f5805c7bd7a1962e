"""Holds the single active printer connection and dispatches print jobs."""
import logging
import threading
from typing import Callable, Optional, Union

from thermal_bridge.errors import NotConnected, WriteFailure
from thermal_bridge.models import (
    ConnectionKind,
    ConnectionState,
    NetworkTarget,
    PrintJob,
    SerialTarget,
)
from thermal_bridge.printer.connection import PrinterConnection, create_printer
from thermal_bridge.printer.renderer import ReceiptRenderer

logger = logging.getLogger(__name__)

Target = Union[SerialTarget, NetworkTarget]


class PrinterRegistry:
    """Owner of the one active printer connection.

    connect, disconnect and print_job are serialized by a lock, so at most
    one transport is ever open. Any failure while connecting or printing
    drops back to the disconnected state instead of keeping a broken handle.
    """

    def __init__(self,
                 transport_factory: Callable[[Target, float], PrinterConnection] = create_printer,
                 connect_timeout: float = 5.0,
                 renderer: Optional[ReceiptRenderer] = None):
        self.transport_factory = transport_factory
        self.connect_timeout = connect_timeout
        self.renderer = renderer or ReceiptRenderer()
        self._lock = threading.Lock()
        self._state = ConnectionState.DISCONNECTED
        self._kind: Optional[ConnectionKind] = None
        self._transport: Optional[PrinterConnection] = None
        self._metadata: dict = {}

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def kind(self) -> Optional[ConnectionKind]:
        return self._kind

    def connect(self, target: Target) -> dict:
        """Replace the active connection with a new one to target.

        Raises:
            PrinterError: the transport could not be opened; the registry is
                left disconnected.
        """
        with self._lock:
            self._release()
            self._state = ConnectionState.CONNECTING
            try:
                transport = self.transport_factory(target, self.connect_timeout)
                transport.open()
            except Exception:
                self._reset()
                raise

            self._transport = transport
            self._kind = transport.kind
            self._metadata = target.metadata()
            self._state = ConnectionState.CONNECTED
            logger.info("Connected to %r", transport)
            return self._status()

    def disconnect(self) -> None:
        """Release the active connection, if any."""
        with self._lock:
            self._release()

    close = disconnect

    def status(self) -> dict:
        """Return {connected, connectionType, info} for the current connection."""
        with self._lock:
            return self._status()

    def print_job(self, job: PrintJob) -> ConnectionKind:
        """Render job and write it through the active connection.

        Raises:
            NotConnected: no connection is active.
            WriteFailure: the write failed; the connection has been dropped.
        """
        with self._lock:
            if self._transport is None:
                raise NotConnected()

            data = self.renderer.render(job)
            try:
                self._transport.write(data)
            except WriteFailure:
                logger.warning("Write to %r failed, dropping connection", self._transport)
                self._release()
                raise

            logger.info("Printed %r via %s (%d bytes)", job.text, self._kind.value, len(data))
            return self._kind

    def _status(self) -> dict:
        connected = self._state == ConnectionState.CONNECTED
        return {
            "connected": connected,
            "connectionType": self._kind.value if connected else None,
            "info": dict(self._metadata) if connected else None,
        }

    def _release(self) -> None:
        """Close the transport and reset state. Caller holds the lock."""
        if self._transport is None:
            self._reset()
            return

        self._state = ConnectionState.DISCONNECTING
        transport = self._transport
        transport.close()
        self._reset()
        logger.info("Disconnected from %r", transport)

    def _reset(self) -> None:
        self._state = ConnectionState.DISCONNECTED
        self._kind = None
        self._transport = None
        self._metadata = {}
