from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITY_LABELS = {
    Priority.LOW: "Baixa",
    Priority.MEDIUM: "Média",
    Priority.HIGH: "Alta",
}

# Sunday first, matching the day selector order.
DAYS = [
    "Domingo",
    "Segunda",
    "Terça",
    "Quarta",
    "Quinta",
    "Sexta",
    "Sábado",
]

CATEGORIES = [
    "Trabalho",
    "Estudo",
    "Exercício",
    "Lazer",
    "Pessoal",
    "Outros",
]

# value -> label, for the task dashboard
TASK_CATEGORIES = {
    "personal": "Pessoal",
    "work": "Trabalho",
    "study": "Estudos",
}


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: Priority
    category: str
    completed: bool = False
    description: Optional[str] = None
    due_date: Optional[datetime] = None  # kept for completeness, no flow reads it


@dataclass(frozen=True)
class ScheduleItem:
    id: str
    title: str
    day: str
    time: str  # HH:MM, zero padded
    duration: int  # minutes
    category: str
    priority: Priority
    is_recurring: bool = False
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
        }
        # unset description is omitted, not written as null
        if self.description is not None:
            d["description"] = self.description
        d.update(
            {
                "day": self.day,
                "time": self.time,
                "duration": self.duration,
                "category": self.category,
                "priority": self.priority.value,
                "isRecurring": self.is_recurring,
            }
        )
        return d

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ScheduleItem":
        """Raises KeyError/ValueError/TypeError on records that cannot be read."""
        title = d["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValueError("title must be a non-empty string")
        description = d.get("description")
        return ScheduleItem(
            id=str(d["id"]),
            title=title,
            day=str(d["day"]),
            time=str(d["time"]),
            duration=int(d["duration"]),
            category=str(d["category"]),
            priority=Priority(d["priority"]),
            is_recurring=bool(d.get("isRecurring", False)),
            description=str(description) if description is not None else None,
        )


def new_id(now_ms: int, taken: Iterable[str]) -> str:
    """
    Creation timestamp in milliseconds. Bumped to the next free value when an
    item created in the same millisecond already holds it.
    """
    used = set(taken)
    candidate = now_ms
    while str(candidate) in used:
        candidate += 1
    return str(candidate)
