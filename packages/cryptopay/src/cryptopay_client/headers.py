# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from typing import Any, Dict, Optional

from opentelemetry.propagate import inject

TRACER_NAME = "cryptopay.client"


def build_payment_headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Headers for ``POST /payments``: JSON content type plus W3C trace context.

    ``traceparent`` is only present while a span is active.
    """
    carrier: Dict[str, str] = {}
    inject(carrier)
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    headers.update(carrier)
    if extra:
        headers.update(extra)
    return headers


def start_client_span(name: str, tracer_provider: Optional[Any] = None):
    from opentelemetry import trace

    tracer = trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)
    return tracer.start_as_current_span(name)
