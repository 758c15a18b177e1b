import io
import subprocess
import time
from unittest import mock

from parapet.widget import VolumeData
from parapet.widgets.volume import (
    VolumeWidget,
    parse_mute,
    parse_volume_pct,
    read_volume_info,
)

SINK_INFO_FIXTURE = (
    "Sink #0\n"
    "\tState: RUNNING\n"
    "\tName: alsa_output.pci-0000_00_1f.3.analog-stereo\n"
    "\tVolume: front-left: 45875 /  70% / -8.66 dB   front-right: 45875 /  70% / -8.66 dB\n"
    "\tBalance: 0.00\n"
    "\tMute: no\n"
)

SINK_INFO_MUTED = "Sink #0\n\tVolume: front-left: 0 /   0% / -inf dB\n\tMute: yes\n"

SINK_INFO_NO_VOLUME_LINE = "Sink #0\n\tMute: no\n"


def _missing(*args, **kwargs):
    raise FileNotFoundError("pactl")


def _completed(args, code, text):
    return subprocess.CompletedProcess(args, code, text.encode(), b"")


class _FakeProcess:
    def __init__(self, output):
        self.stdout = io.StringIO(output)
        self.returncode = None

    def poll(self):
        return self.returncode

    def terminate(self):
        self.returncode = -15

    def kill(self):
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode


def test_parse_volume_pct_extracts_from_fixture():
    assert parse_volume_pct(SINK_INFO_FIXTURE) == 70.0


def test_parse_volume_pct_returns_zero_when_muted():
    assert parse_volume_pct(SINK_INFO_MUTED) == 0.0


def test_parse_volume_pct_none_when_volume_line_absent():
    assert parse_volume_pct(SINK_INFO_NO_VOLUME_LINE) is None


def test_parse_volume_pct_none_for_garbage_token():
    assert parse_volume_pct("Volume: front-left: 1 / loud / 0 dB\n") is None


def test_parse_mute_false_on_unmuted_sink():
    assert parse_mute(SINK_INFO_FIXTURE) is False


def test_parse_mute_true_on_muted_sink():
    assert parse_mute(SINK_INFO_MUTED) is True


def test_parse_mute_false_when_line_absent():
    assert parse_mute("Sink #0\n\tVolume: front-left: 1 / 5% / 0 dB\n") is False


def test_read_volume_info_none_without_pactl():
    with mock.patch("subprocess.run", side_effect=_missing):
        assert read_volume_info() is None


def test_read_volume_info_none_on_failure_exit():
    with mock.patch("subprocess.run", return_value=_completed(["pactl"], 1, "")):
        assert read_volume_info() is None


def test_read_volume_info_parses_both_calls():
    def fake_run(args, **kwargs):
        if args[1] == "get-sink-volume":
            return _completed(args, 0, SINK_INFO_FIXTURE)
        return _completed(args, 0, "Mute: yes\n")

    with mock.patch("subprocess.run", side_effect=fake_run):
        assert read_volume_info() == (70.0, True)


def test_volume_widget_update_returns_default_when_pactl_absent():
    with mock.patch("subprocess.run", side_effect=_missing), mock.patch(
        "subprocess.Popen", side_effect=_missing
    ):
        widget = VolumeWidget("vol-absent")
        time.sleep(0.02)
        data = widget.update()
        widget.close()
    assert widget.name == "vol-absent"
    assert data == VolumeData(volume_pct=0.0, muted=False)


def test_volume_widget_initial_value_comes_from_pactl():
    def fake_run(args, **kwargs):
        return _completed(args, 0, SINK_INFO_FIXTURE)

    with mock.patch("subprocess.run", side_effect=fake_run), mock.patch(
        "subprocess.Popen", side_effect=_missing
    ):
        widget = VolumeWidget("vol")
        data = widget.update()
        widget.close()
    assert data == VolumeData(volume_pct=70.0, muted=False)


def test_volume_widget_picks_up_sink_change_events():
    calls = []

    def fake_run(args, **kwargs):
        calls.append(args)
        if len(calls) == 1:
            return _completed(args, 1, "")
        if args[1] == "get-sink-volume":
            return _completed(args, 0, SINK_INFO_FIXTURE)
        return _completed(args, 0, "Mute: yes\n")

    events = "Event 'new' on client #5\nEvent 'change' on sink #0\n"
    with mock.patch("subprocess.run", side_effect=fake_run), mock.patch(
        "subprocess.Popen", return_value=_FakeProcess(events)
    ):
        widget = VolumeWidget("vol")
        first = widget.update()
        deadline = time.monotonic() + 5
        data = first
        while data.volume_pct == 0.0 and time.monotonic() < deadline:
            time.sleep(0.01)
            data = widget.update()
        widget.close()
    assert data == VolumeData(volume_pct=70.0, muted=True)
    assert widget.update() == VolumeData(volume_pct=70.0, muted=True)