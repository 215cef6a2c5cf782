from calendar_logic import MonthKey
from conftest import RecordingPresenter
from dispatcher import dispatch
from render_descriptor import build


def produce(instance_id):
    return build(instance_id, MonthKey(2025, 3), "a.png")


def test_every_instance_presented(presenter):
    report = dispatch([1, 2, 3], produce, presenter)
    assert report.ok
    assert report.presented == [1, 2, 3]
    assert [d.instance_id for _, d in presenter.calls] == [1, 2, 3]


def test_raising_instance_does_not_stop_the_others():
    presenter = RecordingPresenter(raise_on={2})
    report = dispatch([1, 2, 3], produce, presenter)
    assert presenter.presented_ids == [1, 3]
    assert report.presented == [1, 3]
    assert report.failed == [2]


def test_false_return_marks_instance_failed():
    presenter = RecordingPresenter(fail={1})
    report = dispatch([1, 2], produce, presenter)
    assert report.failed == [1]
    assert report.presented == [2]
    assert not report.ok


def test_no_instances():
    report = dispatch([], produce, RecordingPresenter())
    assert report.presented == [] and report.failed == []
