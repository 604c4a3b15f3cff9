# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
from typing import Any, Optional, Union

from .config import ClientConfig, build_service
from .dialog import PaymentDialog
from .navigation import LOGIN, Router, Toaster
from .outcomes import OutcomeProvider
from .pages import IndexPage, LoginPage
from .session import SessionStore
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class PaymentApp:
    """Wires storage, session, service, dialog and pages from one config."""

    def __init__(
        self,
        cfg: Optional[ClientConfig] = None,
        *,
        provider: Optional[OutcomeProvider] = None,
        tracer_provider: Optional[Any] = None,
    ):
        self.cfg = cfg or ClientConfig()
        self.storage = LocalStorage(self.cfg.storage_path)
        self.router = Router()
        self.toaster = Toaster()
        self.session = SessionStore(self.storage, self.router)
        self.service = build_service(self.cfg, provider, tracer_provider)
        self.dialog = PaymentDialog(
            self.service,
            self.session,
            self.router,
            self.toaster,
            redirect_delay_s=self.cfg.login_redirect_delay_s,
        )
        self.index = IndexPage(self.session, self.dialog)
        self.login = LoginPage(self.session, self.router, self.toaster)
        logger.info(f"Payment app initialized (mode={self.cfg.mode}, logged_in={self.session.is_logged_in})")

    @property
    def current_page(self) -> Union[IndexPage, LoginPage]:
        return self.login if self.router.current == LOGIN else self.index

    async def aclose(self) -> None:
        close = getattr(self.service.gateway, "aclose", None)
        if close is not None:
            await close()
