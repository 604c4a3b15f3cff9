#!/usr/bin/env python3
# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""
Standalone runner for the local payments backend.

Env:
  - BACKEND_PORT (default: 3001)
  - BACKEND_HOST (default: 127.0.0.1)
  - BACKEND_OUTCOME_WEIGHTS (default: 1,0,0 -> always succeed)
  - BACKEND_LEDGER_TTL_S (default: 900)
  - LOG_LEVEL (default: INFO)
"""

import logging
import os
from datetime import datetime, timezone

# Load .env before importing the backend so env vars are visible to its config
from dotenv import load_dotenv  # type: ignore
load_dotenv()

from fastapi import Depends, FastAPI

from cryptopay_backend import BackendRuntimeConfig, get_backend_cfg, router


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("payment_backend")


def build_app() -> FastAPI:
    app = FastAPI(
        title="Crypto Payment Backend",
        description="Local endpoint for the payment demo's HTTP gateway",
        version="0.1.0",
    )

    @app.get("/health")
    async def health(cfg: BackendRuntimeConfig = Depends(get_backend_cfg)) -> dict:
        return {
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "outcome_weights": cfg.outcome_weights.model_dump(),
        }

    app.include_router(router)

    logger.info("Payment backend app initialized")
    return app


app = build_app()


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("BACKEND_HOST", "127.0.0.1")
    port = int(os.getenv("BACKEND_PORT", "3001"))
    uvicorn.run("run_payment_backend:app", host=host, port=port, reload=True, log_level="info")
