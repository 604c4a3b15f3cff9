# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Headless payment dialog.

Binds the form schema to field values and runs one submission at a time:
validate, check the session, call the service, then turn the outcome into a
notice (and, for auth failures, a deferred redirect to the login view).
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Dict, Optional, Set

from .navigation import LOGIN, Router, Toaster
from .results import ErrorKind, PaymentFailure, PaymentResult
from .schema import DEFAULT_VALUES, FIELDS, validate_form
from .service import PaymentService
from .session import SessionStore

logger = logging.getLogger(__name__)

AUTH_TITLE = "Authentication required"
AUTH_DESCRIPTION = "You need to login to make a payment"
SERVER_TITLE = "Server Error"
SERVER_DESCRIPTION = "Something went wrong on our end. Please try again later."
FAILED_TITLE = "Payment Failed"
FAILED_DESCRIPTION = "Please check your payment details and try again."
SUCCESS_TITLE = "Payment successful!"

SUBMIT_LABEL = "Submit Payment"
BUSY_LABEL = "Processing..."


class DialogState(str, Enum):
    idle = "idle"
    validating = "validating"
    rejected_locally = "rejected_locally"
    submitting = "submitting"
    succeeded = "succeeded"
    failed_auth = "failed_auth"
    failed_client = "failed_client"
    failed_server = "failed_server"


class PaymentDialog:
    def __init__(
        self,
        service: PaymentService,
        session: SessionStore,
        router: Router,
        toaster: Toaster,
        *,
        redirect_delay_s: float = 1.5,
    ):
        self.service = service
        self.session = session
        self.router = router
        self.toaster = toaster
        self.redirect_delay_s = redirect_delay_s
        self.state = DialogState.idle
        self.is_open = False
        self.is_submitting = False
        self.pending_redirect: Optional[asyncio.TimerHandle] = None
        self._values: Dict[str, Optional[str]] = dict(DEFAULT_VALUES)
        self._touched: Set[str] = set()
        self._all_errors: Dict[str, str] = {}
        self._opened = 0
        self._revalidate()

    def open(self) -> None:
        if not self.is_open:
            self.is_open = True
            self._opened += 1

    def close(self) -> None:
        self.is_open = False

    @property
    def values(self) -> Dict[str, Optional[str]]:
        return dict(self._values)

    @property
    def errors(self) -> Dict[str, str]:
        """Errors for fields the user has touched (or all, after a submit)."""
        return {k: v for k, v in self._all_errors.items() if k in self._touched}

    @property
    def is_valid(self) -> bool:
        return not self._all_errors

    @property
    def is_dirty(self) -> bool:
        return self._values != DEFAULT_VALUES

    @property
    def submit_disabled(self) -> bool:
        return self.is_submitting or not self.is_valid or not self.is_dirty

    @property
    def submit_label(self) -> str:
        return BUSY_LABEL if self.is_submitting else SUBMIT_LABEL

    def set_field(self, name: str, value: Optional[str]) -> None:
        if name not in FIELDS:
            raise KeyError(f"unknown payment field: {name}")
        self._values[name] = value
        self._touched.add(name)
        self._revalidate()

    def reset(self) -> None:
        self._values = dict(DEFAULT_VALUES)
        self._touched.clear()
        self._revalidate()

    def _revalidate(self) -> None:
        self._all_errors = validate_form(self._values).errors

    def _schedule_login_redirect(self) -> None:
        loop = asyncio.get_running_loop()
        self.pending_redirect = loop.call_later(self.redirect_delay_s, self.router.navigate, LOGIN)

    def _notify_auth_required(self) -> None:
        self.toaster.show(AUTH_TITLE, AUTH_DESCRIPTION, variant="destructive")
        self._schedule_login_redirect()

    async def submit(self) -> DialogState:
        if not self.is_open:
            logger.debug("[DIALOG] Submit ignored (dialog closed)")
            return DialogState.idle
        if self.is_submitting:
            logger.debug("[DIALOG] Submit ignored (already in flight)")
            return self.state

        self.state = DialogState.validating
        result = validate_form(self._values)
        if not result.ok or not self.is_dirty:
            self._touched.update(FIELDS)
            self._all_errors = result.errors
            self.state = DialogState.rejected_locally
            return self.state

        if not self.session.is_logged_in:
            self._notify_auth_required()
            self.close()
            self.reset()
            self.state = DialogState.failed_auth
            return self.state

        request = result.request
        values = self.values
        opened = self._opened
        self.is_submitting = True
        self.state = DialogState.submitting
        try:
            outcome = await self.service.submit(request, self.session.reload())
        except Exception:
            logger.exception("[DIALOG] Payment submission raised")
            outcome = PaymentFailure.server_error("Unexpected error during payment submission", status_code=None)
        finally:
            self.is_submitting = False

        if not self.is_open or opened != self._opened:
            logger.info("[DIALOG] Dialog closed while in flight; discarding result")
            self.state = DialogState.idle
            return self.state

        if isinstance(outcome, PaymentResult):
            self.close()
            self.toaster.show(
                SUCCESS_TITLE,
                f"You sent {values['amount']} {request.source_currency.value} to {request.recipient}",
            )
            self.reset()
            self.state = DialogState.succeeded
        elif outcome.kind == ErrorKind.unauthorized:
            self._notify_auth_required()
            self.state = DialogState.failed_auth
        elif outcome.kind == ErrorKind.server_error:
            self.toaster.show(SERVER_TITLE, SERVER_DESCRIPTION, variant="destructive")
            self.state = DialogState.failed_server
        else:
            self.toaster.show(FAILED_TITLE, outcome.message or FAILED_DESCRIPTION, variant="destructive")
            self.state = DialogState.failed_client
        return self.state
