# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import secrets
import string
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, model_validator

_TX_ALPHABET = string.digits + string.ascii_uppercase


def new_transaction_id() -> str:
    """Opaque client-side identifier, e.g. ``TX-4K9Q0ZB1``."""
    return "TX-" + "".join(secrets.choice(_TX_ALPHABET) for _ in range(8))


class ErrorKind(str, Enum):
    bad_request = "bad_request"
    unauthorized = "unauthorized"
    server_error = "server_error"


def classify_status(status_code: int) -> ErrorKind:
    if status_code == 401:
        return ErrorKind.unauthorized
    if status_code >= 500:
        return ErrorKind.server_error
    return ErrorKind.bad_request


class PaymentResult(BaseModel):
    success: bool
    transaction_id: Optional[str] = None
    message: Optional[str] = None

    @model_validator(mode="after")
    def _success_has_transaction(self) -> "PaymentResult":
        if self.success and not self.transaction_id:
            raise ValueError("successful payment requires a transaction_id")
        return self


class PaymentFailure(BaseModel):
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    @classmethod
    def bad_request(cls, message: str) -> "PaymentFailure":
        return cls(kind=ErrorKind.bad_request, message=message, status_code=400)

    @classmethod
    def unauthorized(cls, message: str) -> "PaymentFailure":
        return cls(kind=ErrorKind.unauthorized, message=message, status_code=401)

    @classmethod
    def server_error(cls, message: str, status_code: Optional[int] = 500) -> "PaymentFailure":
        return cls(kind=ErrorKind.server_error, message=message, status_code=status_code)

    @classmethod
    def from_status(cls, status_code: int, message: str) -> "PaymentFailure":
        return cls(kind=classify_status(status_code), message=message, status_code=status_code)


SubmitOutcome = Union[PaymentResult, PaymentFailure]
