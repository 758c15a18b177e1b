from types import SimpleNamespace
from unittest import mock

import pytest

from parapet.errors import SysInfoError
from parapet.widget import MemoryData
from parapet.widgets.memory import MemoryWidget


def test_memory_update_returns_valid_totals():
    data = MemoryWidget("memory").update()
    assert isinstance(data, MemoryData)
    assert data.total_bytes > 0
    assert data.used_bytes <= data.total_bytes


def test_memory_swap_fields_non_negative():
    data = MemoryWidget("memory").update()
    assert 0 <= data.swap_used <= data.swap_total


def test_memory_used_is_total_minus_available():
    with mock.patch(
        "psutil.virtual_memory",
        return_value=SimpleNamespace(total=8000, available=3000),
    ), mock.patch("psutil.swap_memory", return_value=SimpleNamespace(total=2000, used=500)):
        data = MemoryWidget("memory").update()
    assert data == MemoryData(used_bytes=5000, total_bytes=8000, swap_used=500, swap_total=2000)


def test_memory_zero_total_raises():
    with mock.patch(
        "psutil.virtual_memory", return_value=SimpleNamespace(total=0, available=0)
    ):
        with pytest.raises(SysInfoError, match="total memory is zero"):
            MemoryWidget("memory").update()