"""ESC/POS command builder for thermal printers."""


class ESCPOSBuilder:
    """Builder for ESC/POS printer commands."""

    # ESC/POS Command Constants
    ESC = b'\x1b'
    GS = b'\x1d'

    # Initialize printer
    INIT = ESC + b'\x40'  # ESC @

    # Text formatting
    BOLD_ON = ESC + b'\x45\x01'   # ESC E 1
    BOLD_OFF = ESC + b'\x45\x00'  # ESC E 0
    DOUBLE_SIZE_ON = ESC + b'\x21\x30'     # ESC ! 48
    NORMAL_SIZE = ESC + b'\x21\x00'        # ESC ! 0

    # Alignment
    ALIGN_CENTER = ESC + b'\x61\x01'  # ESC a 1

    # Paper control
    CUT_FEED_FULL = GS + b'\x56\x42\x00'  # GS V 66 0 - Feed to cutter, full cut
    FEED_LINE = b'\n'

    def __init__(self, encoding: str = "cp437", initialize: bool = True):
        """Initialize builder.

        Args:
            encoding: Codepage used to encode text
            initialize: Start the buffer with ESC @
        """
        self.encoding = encoding
        self._buffer = bytearray()
        if initialize:
            self._buffer.extend(self.INIT)

    # Text formatting methods

    def text(self, content: str) -> "ESCPOSBuilder":
        """Add plain text."""
        self._buffer.extend(content.encode(self.encoding, errors="replace"))
        return self

    def newline(self, count: int = 1) -> "ESCPOSBuilder":
        """Add newline(s)."""
        self._buffer.extend(self.FEED_LINE * count)
        return self

    def bold(self, on: bool = True) -> "ESCPOSBuilder":
        """Set bold mode."""
        self._buffer.extend(self.BOLD_ON if on else self.BOLD_OFF)
        return self

    def double_size(self, on: bool = True) -> "ESCPOSBuilder":
        """Set double height and width."""
        self._buffer.extend(self.DOUBLE_SIZE_ON if on else self.NORMAL_SIZE)
        return self

    def normal_size(self) -> "ESCPOSBuilder":
        """Reset to normal text size, leaving bold untouched."""
        self._buffer.extend(self.NORMAL_SIZE)
        return self

    # Alignment methods

    def align_center(self) -> "ESCPOSBuilder":
        """Set center alignment."""
        self._buffer.extend(self.ALIGN_CENTER)
        return self

    # Paper control

    def feed_cut(self) -> "ESCPOSBuilder":
        """Let the printer feed to the cutter position, then cut."""
        self._buffer.extend(self.CUT_FEED_FULL)
        return self

    # Build output

    def build(self) -> bytes:
        """Build and return the command buffer."""
        return bytes(self._buffer)

