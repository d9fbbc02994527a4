"""
Login gate.

The password below is a placeholder compared on the client. It is NOT an
access control mechanism: anyone who can read this file or the storage
database can get past it. Real access control needs a server-side
credential check.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, replace

from .storage import LocalStorage

log = logging.getLogger(__name__)

LOGGED_IN_KEY = "isLoggedIn"
PLACEHOLDER_PASSWORD = "123456"
WRONG_PASSWORD_MESSAGE = "Senha incorreta"

ROUTE_LOGIN = "login"
ROUTE_DASHBOARD = "dashboard"
ROUTE_SCHEDULE = "schedule"
ROUTES = (ROUTE_LOGIN, ROUTE_DASHBOARD, ROUTE_SCHEDULE)


@dataclass(frozen=True)
class LoginState:
    password: str = ""
    error: str = ""
    is_loading: bool = False


def set_password(state: LoginState, password: str) -> LoginState:
    return replace(state, password=password)


def begin_submit(state: LoginState) -> LoginState:
    return replace(state, is_loading=True, error="")


def fail_submit(state: LoginState) -> LoginState:
    return replace(state, is_loading=False, error=WRONG_PASSWORD_MESSAGE)


def password_matches(password: str) -> bool:
    return password == PLACEHOLDER_PASSWORD


def is_logged_in(storage: LocalStorage) -> bool:
    return storage.get_item(LOGGED_IN_KEY) == "true"


def resolve_route(storage: LocalStorage, requested: str) -> str:
    if requested not in ROUTES:
        raise ValueError(f"unknown route: {requested!r}")
    if not is_logged_in(storage):
        return ROUTE_LOGIN
    return requested


def logout(storage: LocalStorage) -> None:
    storage.remove_item(LOGGED_IN_KEY)
    log.info("Logged out")


class LoginController:
    """
    Owns the login form state. Submission is split in two steps so the UI can
    wait between them without blocking the event loop:

        if controller.submit():          # form disabled, error cleared
            ... wait ...
            controller.complete()        # True -> navigate to dashboard
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self.state = LoginState()

    def reset(self) -> None:
        self.state = LoginState()

    def set_password(self, password: str) -> None:
        self.state = set_password(self.state, password)

    def submit(self) -> bool:
        if self.state.is_loading:
            return False
        self.state = begin_submit(self.state)
        return True

    def complete(self) -> bool:
        if not self.state.is_loading:
            return False
        if password_matches(self.state.password):
            self.storage.set_item(LOGGED_IN_KEY, "true")
            # form stays disabled on success; reset() re-arms it
            log.info("Login accepted")
            return True
        self.state = fail_submit(self.state)
        log.warning("Login rejected: wrong password")
        return False
