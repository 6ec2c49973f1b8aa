"""
Pytest configuration for shapematch tests.
"""

import pytest

from shapematch.core.models import Record
from shapematch.core.types import DEFAULT_FEATURE_KEYS
from shapematch.dataset.dataset import Dataset


class FakeHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeTimer:
    """Logical clock standing in for loop.call_later."""

    def __init__(self):
        self.now = 0.0
        self.scheduled: list[tuple[float, object, FakeHandle]] = []

    def call_later(self, delay, callback):
        handle = FakeHandle()
        self.scheduled.append((self.now + delay, callback, handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self.scheduled if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [s for s in self.scheduled if s[0] <= self.now + 1e-9]
        self.scheduled = [s for s in self.scheduled if s[0] > self.now + 1e-9]
        for _, callback, handle in sorted(due, key=lambda s: s[0]):
            if not handle.cancelled:
                callback()


def make_record(record_id, vector, name=None):
    return Record(record_id=record_id, name=name or record_id, vector=tuple(vector))


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture
def feature_keys():
    return DEFAULT_FEATURE_KEYS


@pytest.fixture
def abc_dataset(feature_keys):
    """A, B share peak axis 0; C peaks on axis 1."""
    return Dataset(
        [
            make_record("A", [1, 0, 0, 0, 0, 0]),
            make_record("B", [0.9, 0.1, 0, 0, 0, 0]),
            make_record("C", [0, 1, 0, 0, 0, 0]),
        ],
        feature_keys,
    )


@pytest.fixture
def sample_csv():
    return (
        "id,name,region,axis1,axis2,axis3,axis4,axis5,axis6\n"
        "R1,Ridge,north,0.1,0.9,0.2,,0.3,0.5\n"
        "R2,Basin,south,0.9,0.1,0.05,0,0,0.2\n"
        "R3,Spire,east,0.2,0.85,#N/A,0.1,0.3,0.4\n"
        "R4,Blank,west,,#VALUE!,#DIV/0!,#REF!,,\n"
        "R5,Mesa,north,0.5,0.5,0.5,0.5,0.5,0.5\n"
    )


@pytest.fixture
def sample_csv_path(tmp_path, sample_csv):
    path = tmp_path / "shapes.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path
