# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
import os
import sys
from typing import Callable
from unittest.mock import AsyncMock, Mock

import pytest


def _add_project_root_to_syspath() -> None:
    root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if root not in sys.path:
        sys.path.insert(0, root)


_add_project_root_to_syspath()


# Import after adding to syspath
from cryptopay_client import (
    FixedOutcomeProvider,
    LocalStorage,
    PaymentDialog,
    PaymentService,
    Router,
    SessionStore,
    SimulatedGateway,
    SimulatedOutcome,
    Toaster,
)


@pytest.fixture
def test_env(monkeypatch, tmp_path) -> None:
    """Set up test environment variables."""
    monkeypatch.setenv("PAYMENT_MODE", "simulated")
    monkeypatch.setenv("PAYMENT_BACKEND_URL", "http://payments.test")
    monkeypatch.setenv("PAYMENT_SIMULATED_DELAY_S", "0")
    monkeypatch.setenv("PAYMENT_OUTCOME_WEIGHTS", "1,0,0")
    monkeypatch.setenv("PAYMENT_STORAGE_PATH", str(tmp_path / "local_storage.json"))
    monkeypatch.setenv("PAYMENT_LOGIN_REDIRECT_DELAY_S", "0")

    monkeypatch.setenv("BACKEND_OUTCOME_WEIGHTS", "1,0,0")
    monkeypatch.setenv("BACKEND_LEDGER_TTL_S", "60")


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def toaster() -> Toaster:
    return Toaster()


@pytest.fixture
def session(storage: LocalStorage, router: Router) -> SessionStore:
    return SessionStore(storage, router)


@pytest.fixture
def logged_in_session(session: SessionStore) -> SessionStore:
    session.login()
    return session


@pytest.fixture
def make_service() -> Callable[..., PaymentService]:
    """Build a service over a simulated gateway pinned to one outcome."""

    def _make(outcome: SimulatedOutcome = SimulatedOutcome.success, delay_s: float = 0) -> PaymentService:
        return PaymentService(SimulatedGateway(FixedOutcomeProvider(outcome), delay_s=delay_s))

    return _make


@pytest.fixture
def mock_service() -> Mock:
    """Stand-in service whose ``submit`` is an AsyncMock."""
    service = Mock(spec=PaymentService)
    service.submit = AsyncMock()
    return service


@pytest.fixture
def make_dialog(router: Router, toaster: Toaster) -> Callable[..., PaymentDialog]:
    def _make(service, session: SessionStore, redirect_delay_s: float = 0) -> PaymentDialog:
        dialog = PaymentDialog(service, session, router, toaster, redirect_delay_s=redirect_delay_s)
        dialog.open()
        return dialog

    return _make


@pytest.fixture
def sample_form() -> dict:
    """Valid raw form values."""
    return {
        "recipient": "a@b.com",
        "source_currency": "BTC",
        "amount": "1.5",
        "description": "Coffee",
    }
