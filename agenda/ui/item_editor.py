from __future__ import annotations
from PySide6.QtCore import QTime
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDialog, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QSpinBox, QTextEdit, QTimeEdit, QVBoxLayout
)

from ..models import CATEGORIES, DAYS, PRIORITY_LABELS, Priority
from ..periods import parse_hhmm
from ..schedule import ScheduleController


class ScheduleItemEditor(QDialog):
    """The "Novo Item" modal. Edits the controller's draft; Adicionar commits it."""

    def __init__(self, controller: ScheduleController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.setWindowTitle("Novo Item no Cronograma")
        self.setMinimumWidth(420)
        draft = controller.state.draft

        layout = QVBoxLayout(self)

        self.title = QLineEdit(draft.title or "")
        self.title.setPlaceholderText("Título")
        layout.addWidget(self.title)

        self.description = QTextEdit(draft.description or "")
        self.description.setPlaceholderText("Descrição (opcional)")
        self.description.setFixedHeight(72)
        layout.addWidget(self.description)

        row = QHBoxLayout()
        self.day = QComboBox()
        self.day.addItems(DAYS)
        self.day.setCurrentText(draft.day)
        row.addWidget(self.day)

        self.time = QTimeEdit()
        self.time.setDisplayFormat("HH:mm")
        t = parse_hhmm(draft.time or "")
        if t is not None:
            self.time.setTime(QTime(t.hour, t.minute))
        row.addWidget(self.time)
        layout.addLayout(row)

        row = QHBoxLayout()
        self.category = QComboBox()
        self.category.addItems(CATEGORIES)
        self.category.setCurrentText(draft.category)
        row.addWidget(self.category)

        self.priority = QComboBox()
        for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH):
            self.priority.addItem(PRIORITY_LABELS[p], p.value)
        self.priority.setCurrentIndex(self.priority.findData(Priority(draft.priority).value))
        row.addWidget(self.priority)
        layout.addLayout(row)

        layout.addWidget(QLabel("Duração (minutos)"))
        self.duration = QSpinBox()
        self.duration.setRange(1, 24 * 60)
        self.duration.setValue(int(draft.duration))
        layout.addWidget(self.duration)

        self.recurring = QCheckBox("Atividade Recorrente")
        self.recurring.setChecked(bool(draft.is_recurring))
        layout.addWidget(self.recurring)

        btns = QHBoxLayout()
        btns.addStretch(1)
        self.btn_cancel = QPushButton("Cancelar")
        self.btn_cancel.clicked.connect(self.reject)
        btns.addWidget(self.btn_cancel)

        self.btn_add = QPushButton("Adicionar")
        self.btn_add.setDefault(True)
        self.btn_add.clicked.connect(self.add)
        btns.addWidget(self.btn_add)
        layout.addLayout(btns)

    def _push_draft(self) -> None:
        qt = self.time.time()
        self.controller.update_draft(
            title=self.title.text(),
            description=self.description.toPlainText() or None,
            day=self.day.currentText(),
            time=f"{qt.hour():02d}:{qt.minute():02d}",
            duration=int(self.duration.value()),
            category=self.category.currentText(),
            priority=Priority(self.priority.currentData()),
            is_recurring=self.recurring.isChecked(),
        )

    def add(self) -> None:
        self._push_draft()
        # empty title: nothing happens, the dialog stays open
        if self.controller.add_item():
            self.accept()

    def reject(self) -> None:
        self.controller.cancel_modal()
        super().reject()
