"""Subnet scanning for listening printer ports."""

from __future__ import annotations

import threading

import pytest

from thermal_bridge.errors import InvalidRequest
from thermal_bridge.models import DiscoveredPrinter
from thermal_bridge.printer.discovery import NetworkScanner, probe_tcp, validate_base_ip


def test_finds_loopback_listener(listener) -> None:
    scanner = NetworkScanner(ports=[listener.port], timeout=0.2)

    printers = scanner.discover("127.0.0")

    assert DiscoveredPrinter.at("127.0.0.1", listener.port) in printers
    assert all(p.port == listener.port for p in printers)


def test_probe_tcp(listener) -> None:
    assert probe_tcp("127.0.0.1", listener.port, 0.5)
    listener_port = listener.port
    listener.close()
    assert not probe_tcp("127.0.0.1", listener_port, 0.5)


def test_probes_every_host_and_port() -> None:
    calls = []
    lock = threading.Lock()

    def probe(ip: str, port: int, timeout: float) -> bool:
        with lock:
            calls.append((ip, port, timeout))
        return False

    NetworkScanner(ports=(9100, 515), timeout=0.5, probe=probe).discover("10.1.2")

    assert len(calls) == 254 * 2
    assert {ip for ip, _, _ in calls} == {f"10.1.2.{i}" for i in range(1, 255)}
    assert {port for _, port, _ in calls} == {9100, 515}
    assert {timeout for _, _, timeout in calls} == {0.5}


def test_results_ordered_by_host_then_port() -> None:
    open_endpoints = {("10.0.0.200", 515), ("10.0.0.7", 9100), ("10.0.0.7", 515)}

    scanner = NetworkScanner(probe=lambda ip, port, timeout: (ip, port) in open_endpoints)

    assert scanner.discover("10.0.0") == [
        DiscoveredPrinter.at("10.0.0.7", 9100),
        DiscoveredPrinter.at("10.0.0.7", 515),
        DiscoveredPrinter.at("10.0.0.200", 515),
    ]


def test_empty_network_returns_empty_list() -> None:
    assert NetworkScanner(probe=lambda ip, port, timeout: False).discover("192.168.50") == []


def test_concurrency_is_bounded() -> None:
    active = 0
    peak = 0
    lock = threading.Lock()
    release = threading.Event()

    def probe(ip: str, port: int, timeout: float) -> bool:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        release.wait(0.01)
        with lock:
            active -= 1
        return False

    NetworkScanner(ports=(9100,), max_workers=8, probe=probe).discover("10.0.0")

    assert 1 <= peak <= 8


@pytest.mark.parametrize("base_ip", ["192.168", "192.168.1.1", "300.1.1", "a.b.c", "", "192.168.\u00b2"])
def test_rejects_malformed_prefix(base_ip: str) -> None:
    with pytest.raises(InvalidRequest):
        NetworkScanner(probe=lambda ip, port, timeout: True).discover(base_ip)


def test_trailing_dot_is_accepted() -> None:
    assert validate_base_ip(" 192.168.1. ") == "192.168.1"


def test_raising_probe_does_not_fail_scan() -> None:
    def probe(ip: str, port: int, timeout: float) -> bool:
        if ip == "10.0.0.3":
            raise OverflowError("port must be 0-65535.")
        return ip == "10.0.0.4"

    printers = NetworkScanner(ports=(9100,), probe=probe).discover("10.0.0")

    assert printers == [DiscoveredPrinter.at("10.0.0.4", 9100)]


def test_probe_tcp_rejects_out_of_range_port() -> None:
    assert probe_tcp("127.0.0.1", 70000, 0.2) is False
