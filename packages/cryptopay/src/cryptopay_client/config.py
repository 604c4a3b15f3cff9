# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .gateways import HttpGateway, PaymentGateway, SimulatedGateway
from .outcomes import OutcomeProvider, OutcomeWeights, RandomOutcomeProvider
from .service import PaymentService


class ClientConfig(BaseModel):
    mode: Literal["simulated", "http"] = Field(
        default_factory=lambda: os.getenv("PAYMENT_MODE", "simulated").strip().lower(),
        validate_default=True,
    )
    backend_url: str = Field(default_factory=lambda: os.getenv("PAYMENT_BACKEND_URL", "http://localhost:3001"))
    timeout_s: float = Field(default_factory=lambda: float(os.getenv("PAYMENT_TIMEOUT_S", "15")))
    simulated_delay_s: float = Field(
        default_factory=lambda: float(os.getenv("PAYMENT_SIMULATED_DELAY_S", "1.0")), ge=0
    )
    outcome_weights: OutcomeWeights = Field(
        default_factory=lambda: OutcomeWeights.parse(os.getenv("PAYMENT_OUTCOME_WEIGHTS", "0.8,0.1,0.1"))
    )
    storage_path: Optional[str] = Field(default_factory=lambda: os.getenv("PAYMENT_STORAGE_PATH") or None)
    login_redirect_delay_s: float = Field(
        default_factory=lambda: float(os.getenv("PAYMENT_LOGIN_REDIRECT_DELAY_S", "1.5")), ge=0
    )

    @field_validator("outcome_weights", mode="before")
    @classmethod
    def parse_weights(cls, v):
        return OutcomeWeights.parse(v) if isinstance(v, str) else v


def build_gateway(cfg: ClientConfig, provider: Optional[OutcomeProvider] = None) -> PaymentGateway:
    if cfg.mode == "http":
        return HttpGateway(cfg.backend_url, timeout_s=cfg.timeout_s)
    return SimulatedGateway(provider or RandomOutcomeProvider(cfg.outcome_weights), delay_s=cfg.simulated_delay_s)


def build_service(
    cfg: ClientConfig,
    provider: Optional[OutcomeProvider] = None,
    tracer_provider: Optional[Any] = None,
) -> PaymentService:
    return PaymentService(build_gateway(cfg, provider), tracer_provider=tracer_provider)
