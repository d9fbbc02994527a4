from __future__ import annotations
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QPushButton, QVBoxLayout, QWidget
)

from .. import tasks
from ..models import PRIORITY_LABELS, TASK_CATEGORIES, Priority
from ..periods import now_utc


class TaskDashboard(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        # memory only: a restart starts with an empty list
        self.state = tasks.TaskListState()

        self.layout = QVBoxLayout(self)
        self.header = QLabel("Minhas Tarefas")
        self.header.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.layout.addWidget(self.header)

        # --- Add task row ---
        add_row = QHBoxLayout()

        self.title = QLineEdit()
        self.title.setPlaceholderText("Nova tarefa...")
        self.title.textChanged.connect(self._on_title_changed)
        self.title.returnPressed.connect(self.add_task)
        add_row.addWidget(self.title, 1)

        self.priority = QComboBox()
        for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH):
            self.priority.addItem(PRIORITY_LABELS[p], p.value)
        self.priority.setCurrentIndex(self.priority.findData(self.state.selected_priority.value))
        self.priority.currentIndexChanged.connect(self._on_priority_changed)
        add_row.addWidget(self.priority)

        self.category = QComboBox()
        for value, label in TASK_CATEGORIES.items():
            self.category.addItem(label, value)
        self.category.setCurrentIndex(self.category.findData(self.state.selected_category))
        self.category.currentIndexChanged.connect(self._on_category_changed)
        add_row.addWidget(self.category)

        self.btn_add = QPushButton("+")
        self.btn_add.setToolTip("Adicionar tarefa")
        self.btn_add.clicked.connect(self.add_task)
        add_row.addWidget(self.btn_add)

        self.layout.addLayout(add_row)

        self.list = QListWidget()
        self.list.itemChanged.connect(self._on_item_changed)
        self.layout.addWidget(self.list)

        self.refresh()

    # -------- actions ----------
    def add_task(self) -> None:
        self.state = tasks.add_task(self.state, now_utc())
        self.refresh()

    def toggle_complete(self, task_id: str) -> None:
        self.state = tasks.toggle_complete(self.state, task_id)
        self.refresh()

    def _on_title_changed(self, text: str) -> None:
        self.state = tasks.set_new_title(self.state, text)

    def _on_priority_changed(self, _idx: int) -> None:
        self.state = tasks.select_priority(self.state, Priority(self.priority.currentData()))

    def _on_category_changed(self, _idx: int) -> None:
        self.state = tasks.select_category(self.state, self.category.currentData())

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        tid = str(item.data(Qt.UserRole))
        # rebuild the list after Qt is done with this item
        QTimer.singleShot(0, lambda: self.toggle_complete(tid))

    def refresh(self) -> None:
        if self.title.text() != self.state.new_title:
            self.title.setText(self.state.new_title)

        self.list.blockSignals(True)
        try:
            self.list.clear()
            for t in self.state.tasks:
                category = TASK_CATEGORIES.get(t.category, t.category)
                it = QListWidgetItem(f"{t.title}    [{t.priority.value}]  {category}")
                it.setData(Qt.UserRole, t.id)
                it.setFlags(it.flags() | Qt.ItemIsUserCheckable)
                it.setCheckState(Qt.Checked if t.completed else Qt.Unchecked)
                it.setForeground(QBrush(QColor("#6b7280" if t.completed else "#111827")))
                font = it.font()
                font.setStrikeOut(t.completed)
                it.setFont(font)
                it.setBackground(_badge_brush(t.priority))
                self.list.addItem(it)
        finally:
            self.list.blockSignals(False)


def _badge_brush(priority: Priority) -> QBrush:
    color = QColor(tasks.priority_color(priority))
    color.setAlpha(40)
    return QBrush(color)
