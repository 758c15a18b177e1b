"""Audio output volume and mute state from the default PulseAudio sink."""

from __future__ import annotations

import logging
import queue
import subprocess
import threading

from ..widget import VolumeData, Widget

_log = logging.getLogger(__name__)

_DEFAULT_SINK = "@DEFAULT_SINK@"
_UNKNOWN = VolumeData(volume_pct=0.0, muted=False)


def _find_line(text: str, prefix: str) -> str | None:
    return next((line for line in text.splitlines() if line.lstrip().startswith(prefix)), None)


def parse_volume_pct(text: str) -> float | None:
    """Return the percentage from the first ``Volume:`` line, or None."""
    line = _find_line(text, "Volume:")
    if line is None:
        return None
    parts = line.split("/")
    if len(parts) < 2:
        return None
    token = parts[1].strip().rstrip("%")
    if "_" in token:
        return None
    try:
        return float(token)
    except ValueError:
        return None


def parse_mute(text: str) -> bool:
    """Return True if a ``Mute:`` line says yes; False when it is absent."""
    line = _find_line(text, "Mute:")
    return line is not None and "yes" in line.lower()


def _pactl(*args: str) -> subprocess.CompletedProcess[bytes] | None:
    try:
        return subprocess.run(["pactl", *args], capture_output=True, check=False)
    except OSError:
        return None


def read_volume_info() -> tuple[float, bool] | None:
    """Query ``(volume_pct, muted)`` of the default sink; None if pactl is unusable."""
    volume_out = _pactl("get-sink-volume", _DEFAULT_SINK)
    if volume_out is None or volume_out.returncode != 0:
        return None
    volume = parse_volume_pct(volume_out.stdout.decode("utf-8", errors="replace"))
    if volume is None:
        return None
    mute_out = _pactl("get-sink-mute", _DEFAULT_SINK)
    if mute_out is None:
        return None
    muted = parse_mute(mute_out.stdout.decode("utf-8", errors="replace"))
    return volume, muted


def _terminate(process: subprocess.Popen[str]) -> None:
    if process.poll() is not None:
        return
    process.terminate()
    try:
        process.wait(timeout=2)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()


class VolumeWidget(Widget):
    """Reports the default sink's volume, kept current by ``pactl subscribe``.

    A background thread follows sink change events; ``update`` returns the
    newest value, or the last known one when nothing changed or the
    subscription has ended. Call ``close`` to stop the subscription.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._updates: queue.SimpleQueue[VolumeData] = queue.SimpleQueue()
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._process: subprocess.Popen[str] | None = None
        self._warned_disconnected = False

        initial = read_volume_info()
        self._cached = (
            VolumeData(volume_pct=initial[0], muted=initial[1]) if initial else _UNKNOWN
        )

        thread: threading.Thread | None = threading.Thread(
            target=self._subscribe_loop, name="parapet-volume-subscribe", daemon=True
        )
        try:
            thread.start()
        except RuntimeError as exc:
            _log.warning("could not spawn volume subscribe thread: %s", exc)
            thread = None
        self._thread = thread

    def _subscribe_loop(self) -> None:
        try:
            process = subprocess.Popen(
                ["pactl", "subscribe"],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            _log.warning(
                "pactl subscribe failed to start; volume widget will not receive "
                "live updates: %s",
                exc,
            )
            return
        with self._lock:
            self._process = process
        try:
            if self._stop.is_set():
                return
            for line in process.stdout:
                if self._stop.is_set():
                    break
                if "change" in line and "sink" in line:
                    info = read_volume_info()
                    if info is not None:
                        self._updates.put(VolumeData(volume_pct=info[0], muted=info[1]))
        except (OSError, ValueError) as exc:
            _log.debug("pactl subscribe read failed: %s", exc)
        finally:
            _terminate(process)
            if process.stdout is not None:
                process.stdout.close()
            _log.debug("pactl subscribe loop exited")

    def update(self) -> VolumeData:
        """Return the latest volume snapshot; never raises."""
        while True:
            try:
                self._cached = self._updates.get_nowait()
            except queue.Empty:
                break
        if (self._thread is None or not self._thread.is_alive()) and not self._warned_disconnected:
            self._warned_disconnected = True
            _log.warning(
                "volume %s: subscribe thread disconnected; returning last cached value",
                self.name,
            )
        return self._cached

    def close(self) -> None:
        """Stop the subscription and wait for the background thread to end."""
        self._stop.set()
        with self._lock:
            process = self._process
        if process is not None:
            _terminate(process)
        if self._thread is not None:
            self._thread.join(timeout=2)