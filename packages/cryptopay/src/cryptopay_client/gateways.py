# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

import httpx

from .headers import build_payment_headers
from .outcomes import OutcomeProvider, RandomOutcomeProvider, SimulatedOutcome
from .results import PaymentFailure, PaymentResult, SubmitOutcome, new_transaction_id
from .schema import PaymentRequest

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Payment processed successfully"


class PaymentGateway(Protocol):
    async def execute(self, request: PaymentRequest) -> SubmitOutcome: ...


class SimulatedGateway:
    """Local stand-in for a payment backend: fixed latency, then a drawn outcome."""

    def __init__(self, provider: Optional[OutcomeProvider] = None, delay_s: float = 1.0):
        self.provider = provider or RandomOutcomeProvider()
        self.delay_s = delay_s

    async def execute(self, request: PaymentRequest) -> SubmitOutcome:
        await asyncio.sleep(self.delay_s)
        outcome = self.provider.draw()
        logger.debug(f"[SIMULATED] Drew outcome {outcome.value}")
        if outcome == SimulatedOutcome.success:
            return PaymentResult(success=True, transaction_id=new_transaction_id(), message=SUCCESS_MESSAGE)
        if outcome == SimulatedOutcome.bad_request:
            return PaymentFailure.bad_request("Invalid payment details")
        return PaymentFailure.server_error("Server error occurred")


def _error_message(r: httpx.Response) -> str:
    try:
        data = r.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("message")
        if isinstance(detail, str) and detail:
            return detail
    return f"Payment request failed with status {r.status_code}"


class HttpGateway:
    """Forwards payments to ``POST {base_url}/payments``."""

    def __init__(self, base_url: str, timeout_s: float = 15.0, http: Optional[httpx.AsyncClient] = None):
        if not base_url:
            raise ValueError("base_url required for HttpGateway")
        self.base_url = base_url.rstrip("/")
        self.payments_url = f"{self.base_url}/payments"
        self.http = http or httpx.AsyncClient(timeout=timeout_s)

    async def execute(self, request: PaymentRequest) -> SubmitOutcome:
        body = request.to_wire()
        body["transactionId"] = new_transaction_id()
        try:
            r = await self.http.post(self.payments_url, json=body, headers=build_payment_headers())
        except httpx.TransportError as e:
            logger.warning(f"[HTTP] {self.payments_url} unreachable: {e!r}")
            return PaymentFailure.server_error("Payment service is unreachable", status_code=None)

        if not 200 <= r.status_code < 300:
            logger.warning(f"[HTTP] {self.payments_url} responded with status {r.status_code}")
            return PaymentFailure.from_status(r.status_code, _error_message(r))

        if (r.headers.get("content-type") or "").split(";", 1)[0].strip().lower() != "application/json":
            return PaymentFailure.server_error("invalid content-type from /payments", status_code=None)
        try:
            data = r.json()
        except ValueError:
            logger.warning(f"[HTTP] {self.payments_url} returned an unparsable JSON body")
            return PaymentFailure.server_error("invalid JSON body from /payments", status_code=None)
        tx = data.get("transactionId") if isinstance(data, dict) else None
        if not tx:
            return PaymentFailure.server_error("payment response missing transactionId", status_code=None)
        return PaymentResult(success=True, transaction_id=str(tx), message=data.get("message") or SUCCESS_MESSAGE)

    async def aclose(self) -> None:
        await self.http.aclose()
