"""Widget triggers: periodic refresh, prev/next taps and the root tap."""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Mapping

from loguru import logger

import navigation
from actions import NEXT, OPEN, PREV, ActionRef
from calendar_logic import DEFAULT_LABEL_FORMAT, MonthKey, parse_month_key
from dispatcher import DispatchReport, dispatch
from image_resolver import FALLBACK_IMAGE_KEY, IMAGE_KEY_PREFIX, resolve
from navigation import CURRENT_MONTH_KEY, Direction
from render_descriptor import RenderDescriptor, build


@dataclass(frozen=True)
class WidgetState:
    current: MonthKey
    mapping: Mapping[str, str] = field(default_factory=dict)
    fallback: str | None = None


def load_state(store, today: date | None = None) -> WidgetState:
    """Read a fresh snapshot of the persisted widget state."""
    with store.transaction() as snapshot:
        current = parse_month_key(snapshot.get(CURRENT_MONTH_KEY), today)
        mapping = {
            key[len(IMAGE_KEY_PREFIX):]: snapshot.get(key)
            for key in snapshot.keys()
            if key.startswith(IMAGE_KEY_PREFIX)
        }
        fallback = snapshot.get(FALLBACK_IMAGE_KEY)
    return WidgetState(current=current, mapping=mapping, fallback=fallback)


class MonthWidget:
    """Runs the refresh and navigation flows against the collaborators.

    *presenter* is called as ``presenter(instance_id, descriptor)`` and
    *instances* returns the active instance ids at dispatch time.
    """

    def __init__(
        self,
        store,
        presenter: Callable[[int, RenderDescriptor], bool],
        instances: Callable[[], Iterable[int]],
        label_format: str = DEFAULT_LABEL_FORMAT,
        on_open: Callable[[RenderDescriptor], None] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self.store = store
        self.presenter = presenter
        self.instances = instances
        self.label_format = label_format
        self.on_open = on_open
        self._today = today or date.today
        self._last: dict[int, RenderDescriptor] = {}

    def current_month(self) -> MonthKey:
        return parse_month_key(self.store.get(CURRENT_MONTH_KEY), self._today())

    def describe(self, instance_id: int, state: WidgetState | None = None) -> RenderDescriptor:
        state = state or load_state(self.store, self._today())
        image = resolve(state.current, state.mapping, state.fallback)
        return build(instance_id, state.current, image, self.label_format)

    def refresh(self) -> DispatchReport:
        state = load_state(self.store, self._today())

        def produce(instance_id: int) -> RenderDescriptor:
            descriptor = self.describe(instance_id, state)
            self._last[instance_id] = descriptor
            return descriptor

        report = dispatch(self.instances(), produce, self.presenter)
        logger.debug("Refreshed {} widget(s) for {}, {} failed",
                     len(report.presented), state.current, len(report.failed))
        return report

    def navigate(self, direction: Direction, instance_id: int | None = None) -> bool:
        """Step the shown month and redraw all instances.

        Returns True if the move was committed.
        """
        logger.debug("Navigate {} from widget {}", direction.name, instance_id)
        result = navigation.navigate(self.store, direction, self._today())
        self.refresh()
        return result.committed

    def handle(self, ref: ActionRef) -> None:
        logger.debug("Action {}", ref.token)
        if ref.kind == PREV:
            self.navigate(Direction.PREV, ref.instance_id)
        elif ref.kind == NEXT:
            self.navigate(Direction.NEXT, ref.instance_id)
        elif ref.kind == OPEN:
            if self.on_open is None:
                return
            descriptor = self._last.get(ref.instance_id) or self.describe(ref.instance_id)
            self.on_open(descriptor)
