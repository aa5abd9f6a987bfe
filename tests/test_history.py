"""
Tests for the bounded trend history
"""
import numpy as np
import pytest

from neurolink.core.config import INITIAL_HISTORY
from neurolink.core.data_types import HistoryPoint
from neurolink.core.exceptions import ConfigurationError
from neurolink.processing.history import HistoryBuffer, series_of


def point(i, focus=50.0, stress=20.0, heart_rate=70.0):
    return HistoryPoint(f"t{i:02d}", focus=focus, stress=stress, heart_rate=heart_rate)


def test_keeps_only_the_most_recent_points_in_order():
    buffer = HistoryBuffer(capacity=5)
    points = [point(i) for i in range(12)]
    for p in points:
        buffer.append(p)

    assert len(buffer) == 5
    assert buffer.snapshot() == tuple(points[-5:])
    assert [p.timestamp for p in buffer] == ["t07", "t08", "t09", "t10", "t11"]


def test_below_capacity_keeps_everything():
    buffer = HistoryBuffer(capacity=10, points=INITIAL_HISTORY)
    assert buffer.snapshot() == INITIAL_HISTORY
    assert buffer.latest().timestamp == "10:20"


def test_initial_points_beyond_capacity_are_evicted():
    buffer = HistoryBuffer(capacity=3, points=INITIAL_HISTORY)
    assert [p.timestamp for p in buffer.snapshot()] == ["10:10", "10:15", "10:20"]


def test_snapshot_is_a_detached_read_only_view():
    buffer = HistoryBuffer(capacity=3)
    buffer.append(point(0))
    view = buffer.snapshot()
    buffer.append(point(1))

    assert isinstance(view, tuple)
    assert len(view) == 1
    assert len(buffer.snapshot()) == 2


@pytest.mark.parametrize("capacity", [0, -1, 2.5, None])
def test_rejects_invalid_capacity(capacity):
    with pytest.raises(ConfigurationError):
        HistoryBuffer(capacity=capacity)


def test_empty_buffer():
    buffer = HistoryBuffer(capacity=2)
    assert len(buffer) == 0
    assert buffer.latest() is None
    assert buffer.snapshot() == ()


def test_clear():
    buffer = HistoryBuffer(capacity=2, points=[point(0), point(1)])
    buffer.clear()
    assert len(buffer) == 0


def test_trend_is_percent_change_of_last_two_points():
    buffer = HistoryBuffer(capacity=4)
    buffer.append(point(0, focus=80.0, stress=20.0))
    assert buffer.trend("focus") is None

    buffer.append(point(1, focus=88.0, stress=15.0))
    assert buffer.trend("focus") == pytest.approx(10.0)
    assert buffer.trend("stress") == pytest.approx(-25.0)
    assert buffer.trend("heart_rate") == pytest.approx(0.0)


def test_trend_with_zero_base_is_undefined():
    buffer = HistoryBuffer(capacity=4, points=[point(0, stress=0.0), point(1, stress=5.0)])
    assert buffer.trend("stress") is None


def test_trend_rejects_unknown_field():
    buffer = HistoryBuffer(capacity=2)
    with pytest.raises(KeyError):
        buffer.trend("fatigue")


def test_as_series_columns():
    buffer = HistoryBuffer(capacity=10, points=INITIAL_HISTORY)
    series = buffer.as_series()

    assert series["timestamp"] == ["10:00", "10:05", "10:10", "10:15", "10:20"]
    np.testing.assert_array_equal(series["focus"], [75.0, 80.0, 85.0, 78.0, 82.0])
    np.testing.assert_array_equal(series["stress"], [20.0, 15.0, 18.0, 25.0, 22.0])
    np.testing.assert_array_equal(series["heart_rate"], [70.0, 72.0, 74.0, 76.0, 72.0])


def test_series_of_matches_buffer_columns():
    buffer = HistoryBuffer(capacity=3, points=INITIAL_HISTORY)
    series = series_of(buffer.snapshot())

    assert series["timestamp"] == ["10:10", "10:15", "10:20"]
    np.testing.assert_array_equal(series["focus"], buffer.as_series()["focus"])


def test_rejects_boolean_capacity():
    with pytest.raises(ConfigurationError):
        HistoryBuffer(capacity=True)
