# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from cachetools import TTLCache
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from cryptopay_client.outcomes import OutcomeWeights, RandomOutcomeProvider, SimulatedOutcome

logger = logging.getLogger(__name__)

# -------------------------------
# Models
# -------------------------------


class PaymentBody(BaseModel):
    recipient: EmailStr = Field(..., description="Recipient email address")
    sourceCurrency: Literal["BTC", "ETH"] = Field(..., description="Currency the payment is drawn from")
    amount: float = Field(..., gt=0, description="Amount in units of sourceCurrency")
    description: Optional[str] = None
    transactionId: str = Field(..., min_length=1, description="Client-generated transaction identifier")


class PaymentResponse(BaseModel):
    success: bool
    transactionId: str
    message: str


class PaymentRecord(BaseModel):
    transactionId: str
    recipient: str
    sourceCurrency: str
    amount: float
    description: Optional[str] = None
    created_at: str


class BackendRuntimeConfig(BaseModel):
    outcome_weights: OutcomeWeights = Field(
        default_factory=lambda: OutcomeWeights.parse(os.getenv("BACKEND_OUTCOME_WEIGHTS", "1,0,0"))
    )
    ledger_ttl_s: int = Field(default_factory=lambda: int(os.getenv("BACKEND_LEDGER_TTL_S", "900")))


def get_backend_cfg() -> BackendRuntimeConfig:
    return BackendRuntimeConfig()


# -------------------------------
# Ledger
# -------------------------------


class _Ledger:
    def __init__(self, ttl_s: int) -> None:
        self.payments: TTLCache[str, Dict[str, Any]] = TTLCache(maxsize=10000, ttl=ttl_s)

    def record(self, body: PaymentBody) -> PaymentRecord:
        rec = PaymentRecord(
            transactionId=body.transactionId,
            recipient=body.recipient,
            sourceCurrency=body.sourceCurrency,
            amount=body.amount,
            description=body.description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.payments[body.transactionId] = rec.model_dump()
        return rec

    def get(self, transaction_id: str) -> Optional[PaymentRecord]:
        raw = self.payments.get(transaction_id)
        return PaymentRecord(**raw) if raw is not None else None


_LEDGER: Optional[_Ledger] = None


def get_ledger(cfg: BackendRuntimeConfig = Depends(get_backend_cfg)) -> _Ledger:
    global _LEDGER
    if _LEDGER is None:
        _LEDGER = _Ledger(cfg.ledger_ttl_s)
    return _LEDGER


def reset_ledger() -> None:
    global _LEDGER
    _LEDGER = None


# -------------------------------
# Routes
# -------------------------------

router = APIRouter(tags=["payments"])


@router.post("/payments", response_model=PaymentResponse)
async def create_payment(
    body: PaymentBody,
    cfg: BackendRuntimeConfig = Depends(get_backend_cfg),
    ledger: _Ledger = Depends(get_ledger),
):
    """Accept a payment, subject to the configured server-side outcome draw."""
    outcome = RandomOutcomeProvider(cfg.outcome_weights).draw()
    logger.info(
        f"[BACKEND] Payment {body.transactionId}: {body.amount} {body.sourceCurrency} "
        f"to {body.recipient} -> {outcome.value}"
    )
    if outcome == SimulatedOutcome.bad_request:
        raise HTTPException(status_code=400, detail="Invalid payment details")
    if outcome == SimulatedOutcome.server_error:
        raise HTTPException(status_code=500, detail="Server error occurred")

    ledger.record(body)
    return PaymentResponse(success=True, transactionId=body.transactionId, message="Payment processed successfully")


@router.get("/payments/{transaction_id}", response_model=PaymentRecord)
async def get_payment(transaction_id: str, ledger: _Ledger = Depends(get_ledger)):
    rec = ledger.get(transaction_id)
    if rec is None:
        raise HTTPException(status_code=404, detail="unknown transactionId")
    return rec
