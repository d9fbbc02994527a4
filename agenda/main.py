from __future__ import annotations
import logging
import signal
import sys

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QApplication, QHBoxLayout, QMainWindow, QPushButton, QStackedWidget, QVBoxLayout, QWidget
)

from .auth import ROUTE_DASHBOARD, ROUTE_LOGIN, ROUTE_SCHEDULE, logout, resolve_route
from .config import AppConfig, load_config
from .db import connect, db_path, migrate
from .storage import LocalStorage
from .ui.dashboard import TaskDashboard
from .ui.login import LoginScreen
from .ui.schedule import SchedulePlanner

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, storage: LocalStorage, config: AppConfig):
        super().__init__()
        self.storage = storage
        self.setWindowTitle("Agenda")

        self.login = LoginScreen(storage, delay_ms=config.login_delay_ms)
        self.login.logged_in.connect(lambda: self.navigate(ROUTE_DASHBOARD))
        self.dashboard = TaskDashboard()
        self.schedule = SchedulePlanner(storage)

        self.stack = QStackedWidget()
        self.pages = {
            ROUTE_LOGIN: self.login,
            ROUTE_DASHBOARD: self.dashboard,
            ROUTE_SCHEDULE: self.schedule,
        }
        for page in self.pages.values():
            self.stack.addWidget(page)

        # --- Navigation bar (hidden on the login screen) ---
        self.nav = QWidget()
        nav_row = QHBoxLayout(self.nav)
        btn_tasks = QPushButton("Tarefas")
        btn_tasks.clicked.connect(lambda: self.navigate(ROUTE_DASHBOARD))
        nav_row.addWidget(btn_tasks)
        btn_schedule = QPushButton("Cronograma")
        btn_schedule.clicked.connect(lambda: self.navigate(ROUTE_SCHEDULE))
        nav_row.addWidget(btn_schedule)
        nav_row.addStretch(1)
        btn_logout = QPushButton("Sair")
        btn_logout.clicked.connect(self.sign_out)
        nav_row.addWidget(btn_logout)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self.nav)
        layout.addWidget(self.stack)
        self.setCentralWidget(central)

        self.navigate(ROUTE_DASHBOARD)

    def navigate(self, route: str) -> None:
        target = resolve_route(self.storage, route)
        if target != route:
            log.debug("Route %s requires login", route)
        if target == ROUTE_LOGIN:
            self.login.reset()
        self.nav.setVisible(target != ROUTE_LOGIN)
        self.stack.setCurrentWidget(self.pages[target])

    def sign_out(self) -> None:
        logout(self.storage)
        self.navigate(ROUTE_LOGIN)


def main() -> int:
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)

    # Ctrl-C quits; Qt's event loop eats SIGINT unless we pump it.
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    _sig_timer = QTimer()
    _sig_timer.start(250)
    _sig_timer.timeout.connect(lambda: None)

    path = db_path(config.data_dir)
    log.info("Using storage at %s", path)
    conn = connect(path)
    migrate(conn)
    storage = LocalStorage(conn)

    win = MainWindow(storage, config)
    win.resize(900, 640)
    win.show()
    try:
        return app.exec()
    finally:
        conn.close()
