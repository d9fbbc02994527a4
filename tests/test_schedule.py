import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from agenda import schedule
from agenda.db import connect, migrate
from agenda.models import DAYS, Priority, ScheduleItem
from agenda.storage import LocalStorage


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _storage() -> LocalStorage:
    conn = connect(":memory:")
    migrate(conn)
    return LocalStorage(conn)


class _Clock:
    def __init__(self, start=NOW, step=timedelta(0)):
        self.now = start
        self.step = step

    def __call__(self):
        t = self.now
        self.now = self.now + self.step
        return t


def _add(state, now=NOW, **fields):
    return schedule.add_item(schedule.update_draft(state, **fields), now)


def _stored(storage):
    return json.loads(storage.get_item("scheduleItems"))


# ---------- pure updates ----------

def test_add_fills_defaults_and_resets_draft():
    s = schedule.open_modal(schedule.ScheduleState())
    s = schedule.update_draft(s, title="Reunião", day=None, time=None, duration=None,
                              category=None, priority=None, is_recurring=None)
    s = schedule.add_item(s, NOW)

    (item,) = s.items
    assert item == ScheduleItem(
        id="1792411200000",
        title="Reunião",
        day="Segunda",
        time="09:00",
        duration=60,
        category="Trabalho",
        priority=Priority.MEDIUM,
        is_recurring=False,
        description=None,
    )
    assert s.modal_open is False
    assert s.draft == schedule.ScheduleDraft()


def test_add_count_matches_and_ids_unique():
    s = schedule.ScheduleState()
    for i in range(10):
        s = _add(s, title=f"item {i}")  # same millisecond every time
    assert len(s.items) == 10
    assert len({i.id for i in s.items}) == 10


@pytest.mark.parametrize("title", [None, "", "   ", "\n"])
def test_blank_title_leaves_state_unchanged(title):
    s = schedule.open_modal(schedule.ScheduleState())
    s = schedule.update_draft(s, title=title, time="07:00")
    assert schedule.add_item(s, NOW) is s
    assert s.modal_open is True


def test_cancel_discards_draft():
    s = schedule.open_modal(schedule.ScheduleState())
    s = schedule.update_draft(s, title="Draft", day="Sexta")
    s = schedule.cancel_modal(s)
    assert s.modal_open is False
    assert s.draft == schedule.ScheduleDraft()
    assert s.items == ()


def test_delete_removes_exactly_one():
    s = schedule.ScheduleState()
    s = _add(s, title="a")
    s = _add(s, title="b")
    s = _add(s, title="c")
    target = s.items[1].id

    after = schedule.delete_item(s, target)
    assert [i.title for i in after.items] == ["a", "c"]
    assert schedule.delete_item(after, target) is after
    assert schedule.delete_item(after, "unknown") is after


def test_select_day_does_not_touch_items():
    s = _add(schedule.ScheduleState(), title="a")
    s2 = schedule.select_day(s, "Quarta")
    assert s2.selected_day == "Quarta"
    assert s2.items == s.items

    with pytest.raises(ValueError):
        schedule.select_day(s, "Monday")


def test_visible_items_filtered_and_sorted():
    s = schedule.ScheduleState()
    entries = [
        ("late", "Segunda", "18:00"),
        ("other day", "Terça", "06:00"),
        ("early", "Segunda", "07:30"),
        ("noon a", "Segunda", "12:00"),
        ("noon b", "Segunda", "12:00"),
        ("padded", "Segunda", "8:15"),
    ]
    for title, day, time in entries:
        s = _add(s, title=title, day=day, time=time)

    s = schedule.select_day(s, "Segunda")
    visible = schedule.visible_items(s)
    assert [i.title for i in visible] == ["early", "padded", "noon a", "noon b", "late"]
    for a, b in zip(visible, visible[1:]):
        assert a.day == b.day == "Segunda"
        assert a.time <= b.time

    s = schedule.select_day(s, "Domingo")
    assert schedule.visible_items(s) == []


def test_gym_example_view():
    s = _add(
        schedule.ScheduleState(),
        title="Gym", day="Segunda", time="07:00", duration=45,
        category="Exercício", priority=Priority.HIGH, is_recurring=True,
    )
    s = schedule.select_day(s, "Segunda")

    (view,) = [schedule.item_view(i) for i in schedule.visible_items(s)]
    assert view.title == "Gym"
    assert view.time == "07:00"
    assert view.duration_text == "45min"
    assert view.category == "Exercício"
    assert view.priority == "high"
    assert view.priority_colors == schedule.PRIORITY_BADGE_COLORS[Priority.HIGH]
    assert view.recurring_label == "Recorrente"


def test_non_recurring_has_no_indicator():
    s = _add(schedule.ScheduleState(), title="Leitura", description="")
    view = schedule.item_view(s.items[0])
    assert view.recurring_label is None
    assert view.description is None


def test_invalid_time_and_duration_normalized():
    s = _add(schedule.ScheduleState(), title="x", time="25:99", duration=-5)
    assert s.items[0].time == "09:00"
    assert s.items[0].duration == 1


# ---------- serialization ----------

def test_json_round_trip():
    items = [
        ScheduleItem(id="1", title="Gym", day="Segunda", time="07:00", duration=45,
                     category="Exercício", priority=Priority.HIGH, is_recurring=True),
        ScheduleItem(id="2", title="Aula", day="Terça", time="19:30", duration=90,
                     category="Estudo", priority=Priority.LOW, description="Cálculo II"),
    ]
    assert schedule.loads_items(schedule.dumps_items(items)) == items


def test_json_layout():
    item = ScheduleItem(id="1", title="Gym", day="Segunda", time="07:00", duration=45,
                        category="Exercício", priority=Priority.HIGH, is_recurring=True)
    (rec,) = json.loads(schedule.dumps_items([item]))
    assert rec == {
        "id": "1", "title": "Gym", "day": "Segunda", "time": "07:00", "duration": 45,
        "category": "Exercício", "priority": "high", "isRecurring": True,
    }


def test_loads_missing_is_empty():
    assert schedule.loads_items(None) == []


@pytest.mark.parametrize("raw", ["{not json", '{"id": "1"}', "42", '"text"'])
def test_loads_malformed_falls_back_to_empty(raw, caplog):
    with caplog.at_level(logging.WARNING, logger="agenda.schedule"):
        assert schedule.loads_items(raw) == []
    assert "scheduleItems" in caplog.text


def test_loads_skips_bad_records():
    good = {"id": "1", "title": "ok", "day": "Segunda", "time": "07:00", "duration": 30,
            "category": "Lazer", "priority": "low", "isRecurring": False}
    raw = json.dumps([
        good,
        "nope",
        {"id": "2", "title": "no priority", "day": "Segunda", "time": "08:00",
         "duration": 30, "category": "Lazer"},
        {**good, "id": "3", "priority": "urgent"},
        {**good, "id": "4", "title": "  "},
    ])
    assert [i.id for i in schedule.loads_items(raw)] == ["1"]


# ---------- controller ----------

def test_controller_starts_empty_without_stored_data():
    c = schedule.ScheduleController(_storage(), clock=_Clock())
    assert c.state.items == ()
    assert c.state.selected_day == "Segunda"


def test_controller_saves_after_add_and_delete():
    storage = _storage()
    c = schedule.ScheduleController(storage, clock=_Clock(step=timedelta(milliseconds=1)))

    c.open_modal()
    c.update_draft(title="Gym", time="07:00")
    assert c.add_item() is True
    c.open_modal()
    c.update_draft(title="Aula", day="Terça")
    assert c.add_item() is True

    assert [r["title"] for r in _stored(storage)] == ["Gym", "Aula"]
    assert [r["id"] for r in _stored(storage)] == ["1792411200000", "1792411200001"]

    c.delete_item(_stored(storage)[0]["id"])
    assert [r["title"] for r in _stored(storage)] == ["Aula"]


def test_controller_rejects_blank_title_without_changes():
    storage = _storage()
    c = schedule.ScheduleController(storage, clock=_Clock())
    c.open_modal()
    c.update_draft(title="  ")
    assert c.add_item() is False
    assert c.state.modal_open is True
    assert _stored(storage) == []


def test_view_changes_do_not_write():
    storage = _storage()
    c = schedule.ScheduleController(storage, clock=_Clock())
    c.select_day("Sexta")
    c.open_modal()
    c.update_draft(title="x")
    c.cancel_modal()
    assert storage.get_item("scheduleItems") is None


def test_controller_rehydrates_from_storage():
    storage = _storage()
    first = schedule.ScheduleController(storage, clock=_Clock(step=timedelta(milliseconds=1)))
    for title, time in (("b", "10:00"), ("a", "08:00")):
        first.update_draft(title=title, time=time, day="Quinta")
        first.add_item()

    second = schedule.ScheduleController(storage, clock=_Clock())
    assert second.state.items == first.state.items

    second.select_day("Quinta")
    assert [v.title for v in second.views()] == ["a", "b"]
    assert [i.title for i in second.visible_items()] == ["a", "b"]


def test_controller_recovers_from_corrupt_storage():
    storage = _storage()
    storage.set_item("scheduleItems", "[{oops")
    c = schedule.ScheduleController(storage, clock=_Clock())
    assert c.state.items == ()

    c.update_draft(title="fresh")
    c.add_item()
    assert [r["title"] for r in _stored(storage)] == ["fresh"]


def test_days_are_ordered_sunday_first():
    assert DAYS[0] == "Domingo" and DAYS[1] == "Segunda" and len(DAYS) == 7
