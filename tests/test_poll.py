from parapet.errors import SysInfoError
from parapet.poll import Poller
from parapet.widget import ClockData, CpuData, Widget


class MockWidget(Widget):
    def __init__(self, name, data):
        self.name = name
        self.data = data
        self.calls = 0

    def update(self):
        self.calls += 1
        return self.data


class ErrorWidget(Widget):
    def __init__(self, name):
        self.name = name
        self.calls = 0

    def update(self):
        self.calls += 1
        raise SysInfoError("simulated failure")


def test_poller_new_is_empty():
    assert Poller().poll(0.0) == []


def test_poller_polls_on_first_call():
    poller = Poller()
    poller.register(MockWidget("clock", ClockData(display="12:00")), 1000)
    results = poller.poll(100.0)
    assert len(results) == 1
    assert results[0][0] == "clock"


def test_poller_respects_interval():
    poller = Poller()
    poller.register(MockWidget("clock", ClockData(display="12:00")), 500)
    t0 = 50.0
    assert len(poller.poll(t0)) == 1
    assert poller.poll(t0 + 0.1) == []
    assert len(poller.poll(t0 + 0.6)) == 1


def test_poller_skips_erroring_widget():
    poller = Poller()
    poller.register(ErrorWidget("bad"), 100)
    assert poller.poll(1.0) == []


def test_poller_retries_erroring_widget_next_poll():
    poller = Poller()
    widget = ErrorWidget("bad")
    poller.register(widget, 10_000)
    poller.poll(1.0)
    poller.poll(1.001)
    assert widget.calls == 2


def test_poller_returns_widget_name_with_data():
    poller = Poller()
    data = CpuData(usage_pct=42.0, per_core=(), temp_celsius=None)
    poller.register(MockWidget("cpu", data), 100)
    results = poller.poll(3.0)
    assert results[0][0] == "cpu"
    assert isinstance(results[0][1], CpuData)
    assert results[0][1].usage_pct == 42.0


def test_poller_error_does_not_block_other_widgets():
    poller = Poller()
    poller.register(ErrorWidget("bad"), 100)
    poller.register(MockWidget("clock", ClockData(display="09:30")), 100)
    assert poller.poll(0.0) == [("clock", ClockData(display="09:30"))]


def test_poller_default_now_polls_first_time():
    poller = Poller()
    widget = MockWidget("clock", ClockData(display="x"))
    poller.register(widget, 1000)
    assert [name for name, _ in poller.poll()] == ["clock"]
    assert widget.calls == 1