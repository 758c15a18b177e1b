from types import SimpleNamespace
from unittest import mock

from parapet.widget import NetworkData
from parapet.widgets.network import NetworkWidget


def _io(recv, sent):
    return SimpleNamespace(bytes_recv=recv, bytes_sent=sent)


def test_network_first_call_returns_zero():
    data = NetworkWidget("network", "auto").update()
    assert data.rx_bytes_per_sec == 0
    assert data.tx_bytes_per_sec == 0


def test_network_interface_name_non_empty():
    w = NetworkWidget("network", "auto")
    data = w.update()
    assert isinstance(data, NetworkData)
    assert data.interface == w.interface
    assert len(data.interface) > 0


def test_network_auto_resolves_to_non_loopback_or_lo():
    w = NetworkWidget("network", "auto")
    assert w.interface and w.interface != "auto"


def test_network_reports_deltas_after_first_call():
    snapshots = [
        {"lo": _io(5, 5), "eth0": _io(100, 50)},
        {"lo": _io(6, 6), "eth0": _io(200, 80)},
        {"lo": _io(7, 7), "eth0": _io(500, 100)},
    ]
    with mock.patch("psutil.net_io_counters", side_effect=snapshots):
        w = NetworkWidget("network", "auto")
        first = w.update()
        second = w.update()
    assert w.interface == "eth0"
    assert first == NetworkData(rx_bytes_per_sec=0, tx_bytes_per_sec=0, interface="eth0")
    assert second == NetworkData(rx_bytes_per_sec=300, tx_bytes_per_sec=20, interface="eth0")


def test_network_auto_falls_back_to_loopback():
    with mock.patch("psutil.net_io_counters", return_value={"lo": _io(1, 1)}):
        w = NetworkWidget("network", "auto")
    assert w.interface == "lo"


def test_network_missing_interface_reports_zero():
    snapshots = [{"lo": _io(1, 1)}, {"lo": _io(2, 2)}, {"lo": _io(9, 9)}]
    with mock.patch("psutil.net_io_counters", side_effect=snapshots):
        w = NetworkWidget("network", "wlan9")
        w.update()
        data = w.update()
    assert data == NetworkData(rx_bytes_per_sec=0, tx_bytes_per_sec=0, interface="wlan9")