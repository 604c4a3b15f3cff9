# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
from typing import Any, Optional

from .gateways import PaymentGateway
from .headers import start_client_span
from .results import PaymentFailure, PaymentResult, SubmitOutcome
from .schema import PaymentRequest
from .session import SessionSnapshot

logger = logging.getLogger(__name__)


class PaymentService:
    """Submission flow: structural check, session check, then the gateway.

    Expected failures come back as ``PaymentFailure`` values; nothing is
    applied when an attempt fails.
    """

    def __init__(self, gateway: PaymentGateway, tracer_provider: Optional[Any] = None):
        self.gateway = gateway
        self.tracer_provider = tracer_provider

    async def submit(self, request: PaymentRequest, session: SessionSnapshot) -> SubmitOutcome:
        with start_client_span("payment.submit", self.tracer_provider) as span:
            if not request.recipient or request.source_currency is None or not request.amount:
                logger.warning("[PAYMENT] Rejected: missing required payment information")
                outcome: SubmitOutcome = PaymentFailure.bad_request("Missing required payment information")
            elif not session.authenticated:
                logger.warning("[PAYMENT] Rejected: no active session")
                outcome = PaymentFailure.unauthorized("Authentication required")
            else:
                span.set_attribute("payment.currency", request.source_currency.value)
                logger.info(
                    f"[PAYMENT] Submitting {request.amount} {request.source_currency.value} "
                    f"to {request.recipient} via {type(self.gateway).__name__}"
                )
                try:
                    outcome = await self.gateway.execute(request)
                except Exception as e:
                    logger.exception(f"[PAYMENT] Gateway raised: {e!r}")
                    span.record_exception(e)
                    outcome = PaymentFailure.server_error("Payment processing failed", status_code=None)

            if isinstance(outcome, PaymentResult):
                span.set_attribute("payment.transaction_id", outcome.transaction_id or "")
                logger.info(f"[PAYMENT] ✅ Accepted: transaction_id={outcome.transaction_id}")
            else:
                span.set_attribute("payment.error_kind", outcome.kind.value)
                logger.info(f"[PAYMENT] Failed: kind={outcome.kind.value} status={outcome.status_code} {outcome.message}")
            return outcome
