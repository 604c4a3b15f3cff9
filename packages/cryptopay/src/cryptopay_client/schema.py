# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Payment form schema.

Turns raw form strings into a typed ``PaymentRequest`` or a field-keyed set of
messages. Pure and synchronous: no session or network access happens here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_serializer,
    field_validator,
)

INVALID_EMAIL = "Please enter a valid email address"
SELECT_CURRENCY = "Please select a cryptocurrency"
AMOUNT_NOT_NUMBER = "Amount must be a number"
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0"

FIELDS = ("recipient", "source_currency", "amount", "description")

DEFAULT_VALUES: Dict[str, Optional[str]] = {
    "recipient": "",
    "source_currency": None,
    "amount": "",
    "description": "",
}


class Currency(str, Enum):
    BTC = "BTC"
    ETH = "ETH"

    @property
    def label(self) -> str:
        return {"BTC": "Bitcoin (BTC)", "ETH": "Ethereum (ETH)"}[self.value]


class PaymentRequest(BaseModel):
    """A payment as handed to the submission service.

    Fields default to empty so that a request built outside ``validate_form``
    can still reach the service, which rejects it structurally.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    recipient: str = ""
    source_currency: Optional[Currency] = Field(None, alias="sourceCurrency")
    amount: Optional[Decimal] = None
    description: Optional[str] = None

    @field_serializer("amount", when_used="json")
    def _amount_as_number(self, v: Optional[Decimal]) -> Optional[float]:
        return float(v) if v is not None else None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class _PaymentForm(BaseModel):
    recipient: EmailStr
    source_currency: Currency
    amount: Decimal
    description: Optional[str] = None

    @field_validator("recipient", mode="wrap")
    @classmethod
    def validate_recipient(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        try:
            return handler(v)
        except ValidationError:
            raise ValueError(INVALID_EMAIL) from None

    @field_validator("source_currency", mode="before")
    @classmethod
    def validate_source_currency(cls, v: Any) -> Currency:
        try:
            return Currency(v)
        except ValueError:
            raise ValueError(SELECT_CURRENCY) from None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        text = "" if v is None else str(v).strip()
        # An empty field reads as zero, which then fails the positivity rule.
        try:
            value = Decimal(text) if text else Decimal(0)
        except InvalidOperation:
            raise ValueError(AMOUNT_NOT_NUMBER) from None
        if not value.is_finite():
            raise ValueError(AMOUNT_NOT_NUMBER)
        if value <= 0:
            raise ValueError(AMOUNT_NOT_POSITIVE)
        return value

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> Optional[str]:
        return v or None


@dataclass
class ValidationResult:
    request: Optional[PaymentRequest] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors


def _message(err: Dict[str, Any]) -> str:
    ctx = err.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    return err.get("msg", "Invalid value")


def validate_form(values: Mapping[str, Any]) -> ValidationResult:
    """Validate raw form values; missing keys take their form defaults."""
    data = {**DEFAULT_VALUES, **values}
    try:
        form = _PaymentForm.model_validate({name: data[name] for name in FIELDS})
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            errors.setdefault(str(err["loc"][0]), _message(err))
        return ValidationResult(errors=errors)

    return ValidationResult(
        request=PaymentRequest(
            recipient=form.recipient,
            source_currency=form.source_currency,
            amount=form.amount,
            description=form.description,
        )
    )
