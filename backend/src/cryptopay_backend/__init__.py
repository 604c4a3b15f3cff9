# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Local payments backend

Provides a FastAPI router that accepts ``POST /payments`` from the client's
HTTP gateway and keeps accepted payments in a short-lived ledger.

Usage:
    from cryptopay_backend import router

    app = FastAPI()
    app.include_router(router)
"""

from .routes import (
    BackendRuntimeConfig,
    PaymentBody,
    PaymentRecord,
    PaymentResponse,
    get_backend_cfg,
    get_ledger,
    reset_ledger,
    router,
)

__version__ = "0.1.0"

__all__ = [
    "router",
    "BackendRuntimeConfig",
    "get_backend_cfg",
    "get_ledger",
    "reset_ledger",
    "PaymentBody",
    "PaymentResponse",
    "PaymentRecord",
]
