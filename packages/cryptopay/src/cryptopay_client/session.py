# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .navigation import LOGIN, Router
from .storage import LocalStorage

logger = logging.getLogger(__name__)

SESSION_KEY = "isLoggedIn"


@dataclass(frozen=True)
class SessionSnapshot:
    authenticated: bool


class SessionStore:
    """Mock login state persisted under a single storage key.

    Consumers take a ``snapshot()`` per operation; ``reload()`` re-reads the
    persisted marker.
    """

    def __init__(self, storage: LocalStorage, router: Optional[Router] = None):
        self.storage = storage
        self.router = router
        self._logged_in = self._read_marker()

    def _read_marker(self) -> bool:
        return self.storage.get_item(SESSION_KEY) == "true"

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(authenticated=self._logged_in)

    def reload(self) -> SessionSnapshot:
        self._logged_in = self._read_marker()
        return self.snapshot()

    def login(self) -> None:
        self._logged_in = True
        self.storage.set_item(SESSION_KEY, "true")
        logger.info("[SESSION] Logged in")

    def logout(self) -> None:
        self._logged_in = False
        self.storage.remove_item(SESSION_KEY)
        logger.info("[SESSION] Logged out")
        if self.router is not None:
            self.router.navigate(LOGIN)
