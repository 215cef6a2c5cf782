import os
from datetime import date

# Headless test runs: pystray must not look for a desktop tray
os.environ.setdefault("PYSTRAY_BACKEND", "dummy")

import pytest
from loguru import logger

from settings import MemoryStore


@pytest.fixture(autouse=True)
def quiet_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def today() -> date:
    return date(2025, 3, 15)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


class RecordingPresenter:
    """Presenter double that records descriptors and can fail chosen instances."""

    def __init__(self, fail: set[int] | None = None, raise_on: set[int] | None = None):
        self.fail = fail or set()
        self.raise_on = raise_on or set()
        self.calls = []

    def __call__(self, instance_id, descriptor):
        if instance_id in self.raise_on:
            raise OSError(f"cannot decode image for widget {instance_id}")
        self.calls.append((instance_id, descriptor))
        return instance_id not in self.fail

    @property
    def presented_ids(self):
        return [i for i, _ in self.calls]


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()
