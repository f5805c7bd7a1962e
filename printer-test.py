#!/usr/bin/env python3
"""
Thermal Receipt Printer Connectivity Tester
Lists serial ports, scans the network, and tests Serial or Network printers
"""

import sys
from datetime import datetime

from thermal_bridge.errors import PrinterError
from thermal_bridge.models import DEFAULT_BAUD_RATE, NetworkTarget, PrintJob, SerialTarget
from thermal_bridge.printer import NetworkScanner, PrinterRegistry, list_serial_ports


def list_ports() -> bool:
    """Print the serial ports found on this host."""
    ports = list_serial_ports()
    if not ports:
        print("  No serial ports detected")
        return False
    for port in ports:
        ids = f" [{port.vendor_id}:{port.product_id}]" if port.vendor_id else ""
        print(f"  Found: {port.display_name}{ids}")
    return True


def scan_network(base_ip: str, timeout: float) -> bool:
    """Scan base_ip.1-254 for printers."""
    print(f"Scanning network {base_ip}.x for printers...")
    try:
        printers = NetworkScanner(timeout=timeout).discover(base_ip)
    except PrinterError as e:
        print(f"✗ {e}")
        return False

    for printer in printers:
        print(f"  Found: {printer.name} on port {printer.port}")
    print(f"Found {len(printers)} printer(s)")
    return bool(printers)


def test_printer(target, print_test: bool = True) -> bool:
    """Connect to target and optionally print a test receipt."""
    registry = PrinterRegistry()
    try:
        registry.connect(target)
        print(f"✓ Connected ({target.kind.value})")

        if print_test:
            registry.print_job(PrintJob(
                text="PRINTER TEST",
                custom_text=" ".join(f"{k}: {v}" for k, v in target.metadata().items()),
                timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            ))
            print("✓ Test page sent")
        return True
    except PrinterError as e:
        print(f"✗ {e}")
        return False
    finally:
        registry.disconnect()


def main():
    import argparse

    parser = argparse.ArgumentParser(
        description="Thermal Receipt Printer Connectivity Tester",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python printer-test.py ports
  python printer-test.py scan 192.168.1
  python printer-test.py net 192.168.1.100
  python printer-test.py --no-print net 192.168.1.100 9100
  python printer-test.py serial /dev/ttyUSB0 19200
        """
    )

    parser.add_argument("--no-print", action="store_true",
                        help="Skip printing test page (connection test only)")

    subparsers = parser.add_subparsers(dest="mode", required=True)

    subparsers.add_parser("ports", help="List serial ports")

    scan_parser = subparsers.add_parser("scan", help="Scan network for printers")
    scan_parser.add_argument("base_ip", nargs="?", default="192.168.1",
                             help="First three octets (default: 192.168.1)")
    scan_parser.add_argument("--timeout", type=float, default=0.5,
                             help="Seconds per probe (default: 0.5)")

    # Network subcommand
    net_parser = subparsers.add_parser("net", help="Test network printer")
    net_parser.add_argument("ip", help="Printer IP address")
    net_parser.add_argument("port", nargs="?", type=int, default=9100,
                            help="Port number (default: 9100)")

    # Serial subcommand
    serial_parser = subparsers.add_parser("serial", help="Test serial printer")
    serial_parser.add_argument("port", help="Serial port (e.g., COM3, /dev/ttyUSB0)")
    serial_parser.add_argument("baudrate", nargs="?", type=int, default=DEFAULT_BAUD_RATE,
                               help=f"Baud rate (default: {DEFAULT_BAUD_RATE})")

    args = parser.parse_args()

    print("=" * 40)
    print("Thermal Printer Connectivity Tester")
    print("=" * 40 + "\n")

    print_test = not args.no_print
    mode = args.mode

    if mode == "ports":
        ok = list_ports()

    elif mode == "scan":
        ok = scan_network(args.base_ip, args.timeout)

    elif mode == "net":
        print(f"Testing network connection to {args.ip}:{args.port}...")
        ok = test_printer(NetworkTarget(args.ip, args.port), print_test=print_test)

    elif mode == "serial":
        print(f"Testing serial connection on {args.port} at {args.baudrate} baud...")
        ok = test_printer(SerialTarget(args.port, args.baudrate), print_test=print_test)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
