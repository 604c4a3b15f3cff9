# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Outcome providers for simulated payment backends.

A provider decides how a simulated network step ends. The random provider
draws from configurable weights; the fixed provider pins one outcome so every
branch of the payment flow can be exercised deterministically.
"""
from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field, model_validator


class SimulatedOutcome(str, Enum):
    success = "success"
    bad_request = "bad_request"
    server_error = "server_error"


class OutcomeWeights(BaseModel):
    success: float = Field(0.8, ge=0)
    bad_request: float = Field(0.1, ge=0)
    server_error: float = Field(0.1, ge=0)

    @model_validator(mode="after")
    def _positive_total(self) -> "OutcomeWeights":
        if self.total <= 0:
            raise ValueError("outcome weights must sum to a positive value")
        return self

    @property
    def total(self) -> float:
        return self.success + self.bad_request + self.server_error

    @classmethod
    def parse(cls, raw: str) -> "OutcomeWeights":
        """Parse ``"success,bad_request,server_error"``, e.g. ``"0.8,0.1,0.1"``."""
        parts = [p.strip() for p in raw.split(",")]
        if len(parts) != 3:
            raise ValueError(f"expected three comma-separated weights, got {raw!r}")
        success, bad_request, server_error = (float(p) for p in parts)
        return cls(success=success, bad_request=bad_request, server_error=server_error)


class OutcomeProvider(Protocol):
    def draw(self) -> SimulatedOutcome: ...


class RandomOutcomeProvider:
    def __init__(self, weights: Optional[OutcomeWeights] = None, rng: Optional[random.Random] = None):
        self.weights = weights or OutcomeWeights()
        self.rng = rng or random.Random()

    def draw(self) -> SimulatedOutcome:
        w = self.weights
        point = self.rng.random() * w.total
        if point < w.success:
            return SimulatedOutcome.success
        if point < w.success + w.bad_request:
            return SimulatedOutcome.bad_request
        return SimulatedOutcome.server_error


class FixedOutcomeProvider:
    def __init__(self, outcome: SimulatedOutcome):
        self.outcome = SimulatedOutcome(outcome)

    def draw(self) -> SimulatedOutcome:
        return self.outcome
