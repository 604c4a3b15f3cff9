# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from .dialog import PaymentDialog
from .navigation import HOME, Router, Toaster
from .session import SessionStore


class IndexPage:
    title = "Payment App"
    blurb = "Click the button below to make a secure cryptocurrency payment"

    def __init__(self, session: SessionStore, dialog: PaymentDialog):
        self.session = session
        self.dialog = dialog

    @property
    def show_logout(self) -> bool:
        return self.session.is_logged_in

    def open_payment_dialog(self) -> None:
        self.dialog.open()

    def logout(self) -> None:
        self.session.logout()


class LoginPage:
    """Mock login: any non-empty credentials sign the user in."""

    title = "Login"

    def __init__(self, session: SessionStore, router: Router, toaster: Toaster):
        self.session = session
        self.router = router
        self.toaster = toaster

    def sign_in(self, email: str, password: str) -> bool:
        if not email or not password:
            return False
        self.session.login()
        self.toaster.success("Login successful")
        self.router.navigate(HOME)
        return True
