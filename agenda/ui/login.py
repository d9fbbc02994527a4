from __future__ import annotations
from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtWidgets import QLabel, QLineEdit, QPushButton, QVBoxLayout, QWidget

from ..auth import LoginController
from ..storage import LocalStorage


class LoginScreen(QWidget):
    logged_in = Signal()

    def __init__(self, storage: LocalStorage, delay_ms: int = 500, parent=None):
        super().__init__(parent)
        self.controller = LoginController(storage)
        self.delay_ms = delay_ms

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        title = QLabel("Área Restrita")
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("font-size: 20px; font-weight: bold;")
        layout.addWidget(title)

        subtitle = QLabel("Digite sua senha para acessar")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet("color: #6b7280;")
        layout.addWidget(subtitle)

        self.error = QLabel("")
        self.error.setAlignment(Qt.AlignCenter)
        self.error.setStyleSheet("""
            QLabel {
                color: #dc2626;
                background: #fef2f2;
                border-radius: 8px;
                padding: 8px;
            }
        """)
        self.error.hide()
        layout.addWidget(self.error)

        self.password = QLineEdit()
        self.password.setEchoMode(QLineEdit.EchoMode.Password)
        self.password.setPlaceholderText("Digite sua senha")
        self.password.setMinimumWidth(280)
        self.password.textChanged.connect(self.controller.set_password)
        self.password.returnPressed.connect(self.submit)
        layout.addWidget(self.password)

        self.btn_submit = QPushButton("Entrar")
        self.btn_submit.clicked.connect(self.submit)
        layout.addWidget(self.btn_submit)

        footer = QLabel("Acesso exclusivo na rede local")
        footer.setAlignment(Qt.AlignCenter)
        footer.setStyleSheet("color: #888; font-size: 11px; padding-top: 12px;")
        layout.addWidget(footer)

        self.refresh()

    def reset(self) -> None:
        self.controller.reset()
        self.password.clear()
        self.refresh()

    def submit(self) -> None:
        if not self.password.text():
            return  # required field
        if not self.controller.submit():
            return
        self.refresh()
        # simulated latency; only this handler waits
        QTimer.singleShot(self.delay_ms, self._complete)

    def _complete(self) -> None:
        ok = self.controller.complete()
        self.refresh()
        if ok:
            self.logged_in.emit()

    def refresh(self) -> None:
        state = self.controller.state
        self.password.setEnabled(not state.is_loading)
        self.btn_submit.setEnabled(not state.is_loading)
        self.btn_submit.setText("Entrando…" if state.is_loading else "Entrar")
        if state.error:
            self.error.setText(state.error)
            self.error.show()
        else:
            self.error.hide()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.password.setFocus()
