"""Error types raised by the printer core."""


class PrinterError(Exception):
    """Base class for printer errors surfaced to API callers."""
    status_code = 500


class InvalidRequest(PrinterError):
    """A required field is missing or malformed."""
    status_code = 400


class NotConnected(PrinterError):
    """A print was requested with no active connection."""
    status_code = 409

    def __init__(self, message: str = "Printer not connected"):
        super().__init__(message)


class TransportOpenError(PrinterError):
    """The serial device or socket could not be opened or initialized."""
    status_code = 502


class ConnectionTimeout(TransportOpenError):
    """The network connect did not complete within the deadline."""
    status_code = 504

    def __init__(self, message: str = "Connection timeout"):
        super().__init__(message)


class WriteFailure(PrinterError):
    """An I/O error occurred while sending data to the printer."""
    status_code = 502
