"""Receipt renderer: turns a print job into ESC/POS commands."""
from typing import Optional

from thermal_bridge.models import PrintJob
from thermal_bridge.printer.escpos import ESCPOSBuilder

DEFAULT_HEADER = "Hard Plot Center"


def _present(value: Optional[str]) -> bool:
    return bool(value and value.strip())


class ReceiptRenderer:
    """Renders a PrintJob to ESC/POS bytes.

    Receipt layout, top to bottom:
    - brand header (centered, bold, double size)
    - custom text, when given (centered, bold, normal size)
    - main text (centered, bold, double size)
    - "Printed: <timestamp>", when given (normal size, not bold)
    - feed-and-cut

    The output carries no ESC @; the printer is initialized when the
    connection is opened.
    """

    def __init__(self, header: str = DEFAULT_HEADER, encoding: str = "cp437"):
        """Initialize renderer.

        Args:
            header: Brand line printed at the top of every receipt
            encoding: Codepage used to encode text
        """
        self.header = header
        self.encoding = encoding

    def render(self, job: PrintJob) -> bytes:
        """Render a print job to ESC/POS bytes."""
        builder = ESCPOSBuilder(encoding=self.encoding, initialize=False)

        self._large_block(builder, self.header)

        if _present(job.custom_text):
            (builder.align_center()
                .normal_size()
                .bold()
                .text(job.custom_text)
                .bold(False)
                .newline(2))

        self._large_block(builder, job.text)

        if _present(job.timestamp):
            (builder.normal_size()
                .bold(False)
                .text(f"Printed: {job.timestamp}")
                .newline(3))

        builder.feed_cut()
        return builder.build()

    def _large_block(self, builder: ESCPOSBuilder, content: str):
        builder.align_center().double_size().bold().text(content).bold(False).newline(2)


def encode(job: PrintJob) -> bytes:
    """Render a job with the default header and codepage."""
    return ReceiptRenderer().render(job)
