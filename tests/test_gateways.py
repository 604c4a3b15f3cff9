# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""
Test simulated and HTTP payment gateways.
"""
import asyncio
import re
from unittest.mock import Mock, patch

import httpx
import pytest
from fastapi import FastAPI

from cryptopay_backend import reset_ledger, router as backend_router
from cryptopay_client import (
    ErrorKind,
    FixedOutcomeProvider,
    HttpGateway,
    PaymentFailure,
    PaymentResult,
    SimulatedGateway,
    SimulatedOutcome,
    validate_form,
)
from mock_backend import LAST_REQUEST, app as mock_app, last_body


@pytest.fixture
def request_a():
    return validate_form(
        {"recipient": "a@b.com", "source_currency": "ETH", "amount": "2.25", "description": "Rent"}
    ).request


def _json_response(status_code: int, payload, content_type: str = "application/json") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.headers = {"content-type": content_type}
    response.json.return_value = payload
    return response


@pytest.mark.asyncio
class TestSimulatedGateway:
    async def test_waits_for_delay(self, request_a):
        gateway = SimulatedGateway(FixedOutcomeProvider(SimulatedOutcome.success), delay_s=0.05)
        loop = asyncio.get_running_loop()

        started = loop.time()
        outcome = await gateway.execute(request_a)

        assert loop.time() - started >= 0.04
        assert isinstance(outcome, PaymentResult)

    @pytest.mark.parametrize(
        "drawn, kind, status",
        [
            (SimulatedOutcome.bad_request, ErrorKind.bad_request, 400),
            (SimulatedOutcome.server_error, ErrorKind.server_error, 500),
        ],
    )
    async def test_failure_outcomes(self, request_a, drawn, kind, status):
        gateway = SimulatedGateway(FixedOutcomeProvider(drawn), delay_s=0)

        outcome = await gateway.execute(request_a)

        assert isinstance(outcome, PaymentFailure)
        assert outcome.kind is kind
        assert outcome.status_code == status


@pytest.mark.asyncio
class TestHttpGateway:
    """HTTP gateway against a patched httpx client."""

    @pytest.fixture
    def gateway(self):
        return HttpGateway(base_url="http://localhost:3001/")

    async def test_posts_wire_body_with_transaction_id(self, gateway, request_a):
        with patch.object(gateway.http, "post") as mock_post:
            mock_post.return_value = _json_response(201, {"transactionId": "TX-SERVER01", "message": "ok"})

            outcome = await gateway.execute(request_a)

            assert isinstance(outcome, PaymentResult)
            assert outcome.transaction_id == "TX-SERVER01"
            assert outcome.message == "ok"

            mock_post.assert_called_once()
            args, kwargs = mock_post.call_args
            assert args[0] == "http://localhost:3001/payments"
            body = kwargs["json"]
            assert body["recipient"] == "a@b.com"
            assert body["sourceCurrency"] == "ETH"
            assert body["amount"] == 2.25
            assert body["description"] == "Rent"
            assert re.fullmatch(r"TX-[0-9A-Z]{8}", body["transactionId"])
            assert kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.parametrize(
        "status, kind",
        [(401, ErrorKind.unauthorized), (400, ErrorKind.bad_request), (500, ErrorKind.server_error), (502, ErrorKind.server_error)],
    )
    async def test_non_2xx_carries_status(self, gateway, request_a, status, kind):
        with patch.object(gateway.http, "post") as mock_post:
            mock_post.return_value = _json_response(status, {"detail": "backend says no"})

            outcome = await gateway.execute(request_a)

            assert outcome.kind is kind
            assert outcome.status_code == status
            assert outcome.message == "backend says no"

    async def test_non_json_error_body_gets_fallback_message(self, gateway, request_a):
        with patch.object(gateway.http, "post") as mock_post:
            response = _json_response(404, None, content_type="text/html")
            response.json.side_effect = ValueError("not json")
            mock_post.return_value = response

            outcome = await gateway.execute(request_a)

            assert outcome.kind is ErrorKind.bad_request
            assert outcome.message == "Payment request failed with status 404"

    async def test_transport_error_is_server_error(self, gateway, request_a):
        with patch.object(gateway.http, "post") as mock_post:
            mock_post.side_effect = httpx.ConnectError("connection refused")

            outcome = await gateway.execute(request_a)

            assert outcome.kind is ErrorKind.server_error
            assert outcome.status_code is None

    async def test_rejects_non_json_success(self, gateway, request_a):
        with patch.object(gateway.http, "post") as mock_post:
            mock_post.return_value = _json_response(200, None, content_type="text/plain")

            outcome = await gateway.execute(request_a)

            assert outcome.kind is ErrorKind.server_error

    async def test_unparsable_json_success_is_server_error(self, gateway, request_a):
        with patch.object(gateway.http, "post") as mock_post:
            response = _json_response(200, None)
            response.json.side_effect = ValueError("Expecting value")
            mock_post.return_value = response

            outcome = await gateway.execute(request_a)

            assert isinstance(outcome, PaymentFailure)
            assert outcome.kind is ErrorKind.server_error
            assert outcome.status_code is None


class TestHttpGatewayConfig:
    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            HttpGateway(base_url="")

    def test_strips_trailing_slash(self):
        assert HttpGateway(base_url="http://localhost:3001/").payments_url == "http://localhost:3001/payments"


@pytest.mark.asyncio
class TestHttpGatewayAgainstBackends:
    """End-to-end through httpx's ASGI transport."""

    def _gateway(self, app, base_url: str) -> HttpGateway:
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
        return HttpGateway(base_url=base_url, http=http)

    async def test_mock_backend_success(self, request_a):
        gateway = self._gateway(mock_app, "http://mock/ok")

        outcome = await gateway.execute(request_a)
        await gateway.aclose()

        assert isinstance(outcome, PaymentResult)
        assert outcome.transaction_id == last_body()["transactionId"]
        assert outcome.message == "Accepted by mock"
        assert LAST_REQUEST["headers"]["content-type"] == "application/json"

    @pytest.mark.parametrize(
        "prefix, kind, status, message",
        [
            ("unauthorized", ErrorKind.unauthorized, 401, "Authentication required"),
            ("rejected", ErrorKind.bad_request, 400, "Invalid payment details"),
            ("broken", ErrorKind.server_error, 503, "Backend under maintenance"),
        ],
    )
    async def test_mock_backend_failures(self, request_a, prefix, kind, status, message):
        gateway = self._gateway(mock_app, f"http://mock/{prefix}")

        outcome = await gateway.execute(request_a)
        await gateway.aclose()

        assert outcome.kind is kind
        assert outcome.status_code == status
        assert outcome.message == message

    @pytest.mark.parametrize("prefix", ["plain", "missing-tid"])
    async def test_mock_backend_malformed_success(self, request_a, prefix):
        gateway = self._gateway(mock_app, f"http://mock/{prefix}")

        outcome = await gateway.execute(request_a)
        await gateway.aclose()

        assert outcome.kind is ErrorKind.server_error

    async def test_real_backend_router(self, request_a, test_env):
        reset_ledger()
        app = FastAPI()
        app.include_router(backend_router)
        gateway = self._gateway(app, "http://backend")

        outcome = await gateway.execute(request_a)
        await gateway.aclose()

        assert isinstance(outcome, PaymentResult)
        assert outcome.message == "Payment processed successfully"
