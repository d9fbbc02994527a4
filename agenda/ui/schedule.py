from __future__ import annotations
from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import (
    QButtonGroup, QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QMenu,
    QPushButton, QVBoxLayout, QWidget
)

from ..models import DAYS
from ..periods import now_utc, to_local, weekday_name
from ..schedule import ScheduleController, ScheduleItemView
from ..storage import LocalStorage
from .item_editor import ScheduleItemEditor


class SchedulePlanner(QWidget):
    def __init__(self, storage: LocalStorage, parent=None):
        super().__init__(parent)
        self.controller = ScheduleController(storage)

        self.layout = QVBoxLayout(self)

        header_row = QHBoxLayout()
        self.header = QLabel("Cronograma Semanal")
        self.header.setStyleSheet("font-size: 18px; font-weight: bold;")
        header_row.addWidget(self.header, 1)

        self.btn_new = QPushButton("Novo Item")
        self.btn_new.clicked.connect(self.new_item)
        header_row.addWidget(self.btn_new)
        self.layout.addLayout(header_row)

        # --- Day selector ---
        days_row = QHBoxLayout()
        self.day_group = QButtonGroup(self)
        self.day_group.setExclusive(True)
        self.day_buttons = {}
        for day in DAYS:
            b = QPushButton(day)
            b.setCheckable(True)
            b.clicked.connect(lambda _checked=False, d=day: self.select_day(d))
            self.day_group.addButton(b)
            self.day_buttons[day] = b
            days_row.addWidget(b)

        self.btn_today = QPushButton("Hoje")
        self.btn_today.clicked.connect(self.select_today)
        days_row.addWidget(self.btn_today)
        self.layout.addLayout(days_row)

        self.list = QListWidget()
        self.list.setContextMenuPolicy(Qt.CustomContextMenu)
        self.list.customContextMenuRequested.connect(self._show_item_menu_at)
        self.layout.addWidget(self.list)

        manage_row = QHBoxLayout()
        self.btn_delete = QPushButton("Excluir item")
        self.btn_delete.clicked.connect(self.delete_selected)
        manage_row.addWidget(self.btn_delete)
        self.layout.addLayout(manage_row)

        self.refresh()

    def selected_item_id(self):
        item = self.list.currentItem()
        if not item:
            return None
        return str(item.data(Qt.UserRole))

    # -------- actions ----------
    def new_item(self) -> None:
        self.controller.open_modal()
        ScheduleItemEditor(self.controller, parent=self).exec()
        self.refresh()

    def delete_item(self, item_id: str) -> None:
        self.controller.delete_item(item_id)
        self.refresh()

    def delete_selected(self) -> None:
        iid = self.selected_item_id()
        if iid is None:
            return
        self.delete_item(iid)

    def select_day(self, day: str) -> None:
        self.controller.select_day(day)
        self.refresh()

    def select_today(self) -> None:
        self.select_day(weekday_name(to_local(now_utc())))

    def _show_item_menu_at(self, pos) -> None:
        item = self.list.itemAt(pos)
        if item is None:
            return
        self.list.setCurrentItem(item)
        iid = str(item.data(Qt.UserRole))

        menu = QMenu(self)
        menu.addAction("Excluir").triggered.connect(lambda: self.delete_item(iid))
        menu.exec(self.list.mapToGlobal(pos))

    def refresh(self) -> None:
        state = self.controller.state
        self.day_buttons[state.selected_day].setChecked(True)

        self.list.clear()
        for v in self.controller.views():
            it = QListWidgetItem(_format_row(v))
            it.setData(Qt.UserRole, v.id)
            it.setToolTip(v.description or "")
            it.setBackground(QBrush(QColor(v.priority_colors[0])))
            it.setForeground(QBrush(QColor(v.priority_colors[1])))
            self.list.addItem(it)


def _format_row(v: ScheduleItemView) -> str:
    tags = [v.priority, v.category]
    if v.recurring_label:
        tags.append(v.recurring_label)
    text = f"{v.time}  ({v.duration_text})  {v.title}  [" + ", ".join(tags) + "]"
    if v.description:
        text += f"\n        {v.description}"
    return text
