"""Network discovery of raw/LPD printers on a /24 subnet."""
import logging
import socket
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional

from thermal_bridge.errors import InvalidRequest
from thermal_bridge.models import DiscoveredPrinter

logger = logging.getLogger(__name__)

DEFAULT_PORTS = (9100, 515)  # RAW printing, LPD
HOST_RANGE = range(1, 255)


def probe_tcp(ip: str, port: int, timeout: float) -> bool:
    """Return True if something accepts a TCP connection at ip:port."""
    try:
        with socket.create_connection((ip, port), timeout=timeout):
            return True
    except OSError:
        return False
    except (OverflowError, ValueError) as e:
        logger.debug("Probe of %s:%s failed: %s", ip, port, e)
        return False


def validate_base_ip(base_ip: str) -> str:
    """Check that base_ip is the first three octets of an IPv4 address."""
    if not isinstance(base_ip, str):
        raise InvalidRequest("Base IP is required")
    base_ip = base_ip.strip().rstrip(".")
    octets = base_ip.split(".")
    if len(octets) != 3 or not all(o.isascii() and o.isdigit() and int(o) <= 255 for o in octets):
        raise InvalidRequest(f"Invalid base IP: {base_ip!r} (expected e.g. 192.168.1)")
    return base_ip


def _settled(candidate, future) -> bool:
    """Result of one probe; a probe that raised found nothing."""
    try:
        return bool(future.result())
    except Exception as e:
        logger.debug("Probe of %s:%s raised %r", *candidate, e)
        return False


class NetworkScanner:
    """Probes every host of a /24 prefix on a set of candidate ports.

    Probes run on a bounded thread pool. Every probe is allowed to settle
    before results are returned; a refused or timed-out probe just means
    nothing is there. A completed TCP handshake is taken as a printer.
    """

    def __init__(self, ports: Iterable[int] = DEFAULT_PORTS, timeout: float = 0.5,
                 max_workers: int = 64,
                 probe: Optional[Callable[[str, int, float], bool]] = None):
        self.ports = tuple(ports)
        self.timeout = timeout
        self.max_workers = max_workers
        self.probe = probe or probe_tcp

    def discover(self, base_ip: str = "192.168.1") -> List[DiscoveredPrinter]:
        """Scan base_ip.1 - base_ip.254 and return the endpoints that answered."""
        base_ip = validate_base_ip(base_ip)
        candidates = [(f"{base_ip}.{host}", port) for host in HOST_RANGE for port in self.ports]

        logger.info("Scanning network %s.x on ports %s (%d probes)",
                    base_ip, ", ".join(map(str, self.ports)), len(candidates))

        with ThreadPoolExecutor(max_workers=self.max_workers,
                                thread_name_prefix="printer-scan") as pool:
            futures = [pool.submit(self.probe, ip, port, self.timeout) for ip, port in candidates]
            # Results in candidate order: host first, then port
            hits = [candidate for candidate, future in zip(candidates, futures) if _settled(candidate, future)]

        printers = []
        for ip, port in hits:
            logger.info("Found printer at %s:%d", ip, port)
            printers.append(DiscoveredPrinter.at(ip, port))

        logger.info("Found %d printer(s)", len(printers))
        return printers
