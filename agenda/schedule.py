from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .models import CATEGORIES, DAYS, Priority, ScheduleItem, new_id
from .periods import normalize_hhmm, now_utc, timestamp_ms
from .storage import LocalStorage

log = logging.getLogger(__name__)

STORAGE_KEY = "scheduleItems"

DEFAULT_DAY = DAYS[1]  # Segunda
DEFAULT_TIME = "09:00"
DEFAULT_DURATION = 60
DEFAULT_CATEGORY = CATEGORIES[0]  # Trabalho
DEFAULT_PRIORITY = Priority.MEDIUM

RECURRING_LABEL = "Recorrente"

# (background, foreground) for the priority badge
PRIORITY_BADGE_COLORS = {
    Priority.HIGH: ("#fee2e2", "#991b1b"),
    Priority.MEDIUM: ("#fef9c3", "#854d0e"),
    Priority.LOW: ("#dcfce7", "#166534"),
}
DEFAULT_BADGE_COLORS = ("#f3f4f6", "#1f2937")


@dataclass(frozen=True)
class ScheduleDraft:
    title: Optional[str] = None
    description: Optional[str] = None
    day: Optional[str] = DEFAULT_DAY
    time: Optional[str] = DEFAULT_TIME
    duration: Optional[int] = DEFAULT_DURATION
    category: Optional[str] = DEFAULT_CATEGORY
    priority: Optional[Priority] = DEFAULT_PRIORITY
    is_recurring: Optional[bool] = False


@dataclass(frozen=True)
class ScheduleState:
    # insertion order; the view sorts
    items: Tuple[ScheduleItem, ...] = ()
    selected_day: str = DEFAULT_DAY
    modal_open: bool = False
    draft: ScheduleDraft = field(default_factory=ScheduleDraft)


@dataclass(frozen=True)
class ScheduleItemView:
    id: str
    time: str
    duration_text: str
    title: str
    description: Optional[str]
    priority: str
    priority_colors: Tuple[str, str]
    category: str
    recurring_label: Optional[str]


# ---------- Pure updates ----------

def open_modal(state: ScheduleState) -> ScheduleState:
    return replace(state, modal_open=True)


def cancel_modal(state: ScheduleState) -> ScheduleState:
    return replace(state, modal_open=False, draft=ScheduleDraft())


def update_draft(state: ScheduleState, **fields) -> ScheduleState:
    return replace(state, draft=replace(state.draft, **fields))


def add_item(state: ScheduleState, now: datetime) -> ScheduleState:
    d = state.draft
    if not (d.title or "").strip():
        return state

    item = ScheduleItem(
        id=new_id(timestamp_ms(now), (i.id for i in state.items)),
        title=d.title,
        description=d.description or None,
        day=d.day if d.day in DAYS else DEFAULT_DAY,
        time=normalize_hhmm(d.time, DEFAULT_TIME),
        duration=max(1, int(d.duration)) if d.duration else DEFAULT_DURATION,
        category=d.category or DEFAULT_CATEGORY,
        priority=Priority(d.priority) if d.priority else DEFAULT_PRIORITY,
        is_recurring=bool(d.is_recurring),
    )
    return replace(
        state,
        items=state.items + (item,),
        modal_open=False,
        draft=ScheduleDraft(),
    )


def delete_item(state: ScheduleState, item_id: str) -> ScheduleState:
    kept = tuple(i for i in state.items if i.id != item_id)
    if len(kept) == len(state.items):
        return state
    return replace(state, items=kept)


def select_day(state: ScheduleState, day: str) -> ScheduleState:
    if day not in DAYS:
        raise ValueError(f"unknown day: {day!r}")
    return replace(state, selected_day=day)


def visible_items(state: ScheduleState) -> List[ScheduleItem]:
    # sorted() is stable: equal times keep insertion order
    return sorted(
        (i for i in state.items if i.day == state.selected_day),
        key=lambda i: i.time,
    )


def item_view(item: ScheduleItem) -> ScheduleItemView:
    return ScheduleItemView(
        id=item.id,
        time=item.time,
        duration_text=f"{item.duration}min",
        title=item.title,
        description=item.description or None,
        priority=item.priority.value,
        priority_colors=PRIORITY_BADGE_COLORS.get(item.priority, DEFAULT_BADGE_COLORS),
        category=item.category,
        recurring_label=RECURRING_LABEL if item.is_recurring else None,
    )


# ---------- Serialization ----------

def dumps_items(items) -> str:
    return json.dumps([i.to_dict() for i in items], ensure_ascii=False)


def loads_items(raw: Optional[str]) -> List[ScheduleItem]:
    """Missing or unreadable data yields an empty list. Bad records are skipped."""
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except ValueError as exc:
        log.warning("Ignoring malformed %s: %s", STORAGE_KEY, exc)
        return []
    if not isinstance(data, list):
        log.warning("Ignoring %s: expected a JSON array, got %s", STORAGE_KEY, type(data).__name__)
        return []

    out: List[ScheduleItem] = []
    for idx, rec in enumerate(data):
        if not isinstance(rec, dict):
            log.warning("Skipping %s[%d]: not an object", STORAGE_KEY, idx)
            continue
        try:
            out.append(ScheduleItem.from_dict(rec))
        except (KeyError, ValueError, TypeError) as exc:
            log.warning("Skipping %s[%d]: %s", STORAGE_KEY, idx, exc)
    return out


# ---------- Persisted controller ----------

class ScheduleController:
    """
    Owns the schedule screen state. Loads from storage once on construction;
    every operation that changes items ends with save(), which overwrites the
    whole stored array.
    """

    def __init__(self, storage: LocalStorage, clock: Callable[[], datetime] = now_utc):
        self.storage = storage
        self.clock = clock
        self.state = ScheduleState(items=tuple(self.load()))

    def load(self) -> List[ScheduleItem]:
        items = loads_items(self.storage.get_item(STORAGE_KEY))
        log.debug("Loaded %d schedule items", len(items))
        return items

    def save(self) -> None:
        self.storage.set_item(STORAGE_KEY, dumps_items(self.state.items))
        log.debug("Saved %d schedule items", len(self.state.items))

    # ---------- mutating ----------
    def add_item(self) -> bool:
        before = self.state
        self.state = add_item(self.state, self.clock())
        self.save()
        return self.state is not before

    def delete_item(self, item_id: str) -> None:
        self.state = delete_item(self.state, item_id)
        self.save()

    # ---------- view only ----------
    def open_modal(self) -> None:
        self.state = open_modal(self.state)

    def cancel_modal(self) -> None:
        self.state = cancel_modal(self.state)

    def update_draft(self, **fields) -> None:
        self.state = update_draft(self.state, **fields)

    def select_day(self, day: str) -> None:
        self.state = select_day(self.state, day)

    def visible_items(self) -> List[ScheduleItem]:
        return visible_items(self.state)

    def views(self) -> List[ScheduleItemView]:
        return [item_view(i) for i in visible_items(self.state)]
