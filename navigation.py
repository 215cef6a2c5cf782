"""Previous/next month navigation, bounded by months that have their own image."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Mapping

from loguru import logger

from calendar_logic import MonthKey, format_month_key, next_month, parse_month_key, prev_month
from image_resolver import IMAGE_KEY_PREFIX, specific_image

CURRENT_MONTH_KEY = "widget_month_key"


class Direction(Enum):
    PREV = -1
    NEXT = 1


@dataclass(frozen=True)
class NavigationResult:
    previous: MonthKey
    target: MonthKey
    committed: bool

    @property
    def current(self) -> MonthKey:
        return self.target if self.committed else self.previous


def propose(current: MonthKey, direction: Direction) -> MonthKey:
    """Return the month one step away from *current*. Nothing is persisted.

    NEXT then PREV gets back to *current*, except at 0001-01 and 9999-12
    where the step past the edge returns *current* itself.
    """
    if direction is Direction.PREV:
        return prev_month(current)
    return next_month(current)


def can_commit(target: MonthKey, mapping: Mapping[str, str]) -> bool:
    """True when *target* has its own entry; the fallback does not count."""
    return specific_image(target, mapping) is not None


class _SnapshotImages:
    """Read-only month -> image lookup over store keys."""

    def __init__(self, snapshot) -> None:
        self._snapshot = snapshot

    def get(self, month_key: str, default=None):
        value = self._snapshot.get(f"{IMAGE_KEY_PREFIX}{month_key}")
        return default if value is None else value


def navigate(store, direction: Direction, today: date | None = None) -> NavigationResult:
    """Move the persisted month one step if the target month has an image.

    The read of the current month, the gate check and the write happen in one
    store transaction. A blocked move leaves the store untouched.
    """
    with store.transaction() as snapshot:
        current = parse_month_key(snapshot.get(CURRENT_MONTH_KEY), today)
        target = propose(current, direction)
        committed = target != current and can_commit(target, _SnapshotImages(snapshot))
        if committed:
            snapshot.set(CURRENT_MONTH_KEY, format_month_key(target))

    if committed:
        logger.info("Month {} -> {}", current, target)
    else:
        logger.debug("Navigation {} from {} blocked: no image for {}",
                     direction.name, current, target)
    return NavigationResult(previous=current, target=target, committed=committed)
