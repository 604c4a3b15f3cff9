# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from .app import PaymentApp
from .config import ClientConfig, build_gateway, build_service
from .dialog import DialogState, PaymentDialog
from .gateways import HttpGateway, PaymentGateway, SimulatedGateway
from .headers import build_payment_headers, start_client_span
from .navigation import Router, Toast, Toaster
from .otel import setup_otel_from_env
from .outcomes import FixedOutcomeProvider, OutcomeWeights, RandomOutcomeProvider, SimulatedOutcome
from .pages import IndexPage, LoginPage
from .results import ErrorKind, PaymentFailure, PaymentResult, SubmitOutcome
from .schema import Currency, PaymentRequest, ValidationResult, validate_form
from .service import PaymentService
from .session import SessionSnapshot, SessionStore
from .storage import LocalStorage

__version__ = "0.1.0"

__all__ = [
    "PaymentApp",
    "ClientConfig",
    "build_gateway",
    "build_service",
    "DialogState",
    "PaymentDialog",
    "PaymentGateway",
    "HttpGateway",
    "SimulatedGateway",
    "build_payment_headers",
    "start_client_span",
    "Router",
    "Toast",
    "Toaster",
    "setup_otel_from_env",
    "SimulatedOutcome",
    "OutcomeWeights",
    "RandomOutcomeProvider",
    "FixedOutcomeProvider",
    "IndexPage",
    "LoginPage",
    "ErrorKind",
    "PaymentResult",
    "PaymentFailure",
    "SubmitOutcome",
    "Currency",
    "PaymentRequest",
    "ValidationResult",
    "validate_form",
    "PaymentService",
    "SessionSnapshot",
    "SessionStore",
    "LocalStorage",
]
