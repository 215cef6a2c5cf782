from datetime import date

from actions import NEXT, OPEN, PREV, ActionRef, ActionRegistry
from calendar_logic import MonthKey
from conftest import RecordingPresenter
from navigation import CURRENT_MONTH_KEY, Direction
from settings import MemoryStore
from widget import MonthWidget, load_state


def make_widget(store, presenter, instances=(1,), **kwargs):
    return MonthWidget(store, presenter, lambda: list(instances),
                       today=lambda: date(2025, 3, 15), **kwargs)


def test_load_state(today):
    store = MemoryStore({
        CURRENT_MONTH_KEY: "2025-03",
        "month_image_path_2025-03": "a.png",
        "month_image_path_2025-04": "",
        "month_image_path": "f.png",
        "unrelated": "x",
    })
    state = load_state(store, today)
    assert state.current == MonthKey(2025, 3)
    assert state.mapping == {"2025-03": "a.png", "2025-04": ""}
    assert state.fallback == "f.png"


def test_refresh_with_specific_and_fallback_image(presenter):
    store = MemoryStore({
        CURRENT_MONTH_KEY: "2025-03",
        "month_image_path_2025-03": "a.png",
        "month_image_path": "f.png",
    })
    widget = make_widget(store, presenter)
    widget.refresh()
    assert presenter.calls[-1][1].image_path == "a.png"

    store.set(CURRENT_MONTH_KEY, "2025-05")
    widget.refresh()
    assert presenter.calls[-1][1].image_path == "f.png"
    assert presenter.calls[-1][1].label == "2025/05"


def test_refresh_without_any_image(presenter, store):
    widget = make_widget(store, presenter)
    report = widget.refresh()
    assert report.ok
    descriptor = presenter.calls[0][1]
    assert descriptor.image_path is None
    assert descriptor.label == "2025/03"
    assert descriptor.prev == ActionRef(PREV, 1)
    assert descriptor.next == ActionRef(NEXT, 1)


def test_navigate_next_blocked_then_allowed(presenter):
    store = MemoryStore({
        CURRENT_MONTH_KEY: "2025-03",
        "month_image_path_2025-03": "a.png",
        "month_image_path": "f.png",
    })
    widget = make_widget(store, presenter)
    assert widget.navigate(Direction.NEXT) is False
    assert widget.current_month() == MonthKey(2025, 3)
    assert presenter.calls[-1][1].label == "2025/03"

    store.set("month_image_path_2025-04", "b.png")
    assert widget.navigate(Direction.NEXT) is True
    assert widget.current_month() == MonthKey(2025, 4)
    assert presenter.calls[-1][1].image_path == "b.png"


def test_navigation_redraws_every_instance(presenter):
    store = MemoryStore({"month_image_path_2025-02": "feb.png"})
    widget = make_widget(store, presenter, instances=(1, 2, 3))
    widget.handle(ActionRef(PREV, 2))
    assert presenter.presented_ids == [1, 2, 3]
    assert {d.month for _, d in presenter.calls} == {MonthKey(2025, 2)}


def test_failing_instance_isolated_during_refresh():
    presenter = RecordingPresenter(raise_on={2})
    widget = make_widget(MemoryStore(), presenter, instances=(1, 2, 3))
    report = widget.refresh()
    assert report.presented == [1, 3]
    assert report.failed == [2]


def test_instances_enumerated_at_dispatch_time(presenter):
    active = [1]
    widget = MonthWidget(MemoryStore(), presenter, lambda: list(active),
                         today=lambda: date(2025, 3, 15))
    widget.refresh()
    active.append(5)
    widget.refresh()
    assert presenter.presented_ids == [1, 1, 5]


def test_open_action_passes_descriptor(presenter):
    opened = []
    store = MemoryStore({"month_image_path_2025-03": "a.png"})
    widget = make_widget(store, presenter, instances=(4,), on_open=opened.append)
    widget.refresh()
    widget.handle(ActionRef(OPEN, 4))
    assert len(opened) == 1
    assert opened[0].image_path == "a.png"
    assert opened[0].instance_id == 4


def test_open_without_callback_is_ignored(presenter):
    widget = make_widget(MemoryStore(), presenter)
    widget.handle(ActionRef(OPEN, 1))
    assert presenter.calls == []


def test_registry_routes_taps_to_widget(presenter):
    store = MemoryStore({"month_image_path_2025-04": "b.png"})
    widget = make_widget(store, presenter)
    registry = ActionRegistry(widget.handle)
    widget.refresh()
    descriptor = presenter.calls[-1][1]
    registry.fire(registry.pending(descriptor.next))
    assert store.get(CURRENT_MONTH_KEY) == "2025-04"


def test_empty_entry_shows_no_image_instead_of_fallback(presenter):
    store = MemoryStore({
        CURRENT_MONTH_KEY: "2025-03",
        "month_image_path_2025-04": "",
        "month_image_path": "f.png",
    })
    widget = make_widget(store, presenter)
    assert widget.navigate(Direction.NEXT) is True
    descriptor = presenter.calls[-1][1]
    assert descriptor.month == MonthKey(2025, 4)
    assert descriptor.image_path == ""
    assert not descriptor.has_image
