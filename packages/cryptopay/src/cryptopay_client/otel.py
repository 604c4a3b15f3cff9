# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import os
from typing import Any, Optional


def setup_otel_from_env(
    use_console: bool = False,
    exporter: Optional[Any] = None,
    set_global: bool = True,
):
    """Install a tracer provider for the payment client and return it.

    Spans opened by ``PaymentService`` (``payment.submit``) and the trace
    context sent with ``POST /payments`` come from the ``cryptopay.client``
    tracer on this provider.

    Env vars:
    - OTEL_EXPORTER_OTLP_ENDPOINT (unset disables OTLP export)
    - OTEL_SERVICE_NAME (default cryptopay-client)
    - PAYMENT_MODE (recorded as the ``payment.mode`` resource attribute)
    - OTEL_CONSOLE_EXPORTER=1 to add console export

    ``exporter`` attaches an extra span exporter (for example an in-memory one)
    through a synchronous processor. With ``set_global=False`` the provider is
    returned without replacing the process-wide one.
    """
    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as e:  # pragma: no cover - import error path
        raise RuntimeError(
            "OpenTelemetry SDK not installed. Install extras: pip install cryptopay-demo[otel]"
        ) from e

    from . import __version__

    resource = Resource.create(
        {
            SERVICE_NAME: os.getenv("OTEL_SERVICE_NAME", "cryptopay-client"),
            SERVICE_VERSION: __version__,
            "service.namespace": "cryptopay",
            "payment.mode": os.getenv("PAYMENT_MODE", "simulated").strip().lower(),
        }
    )
    provider = TracerProvider(resource=resource)

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))

    if use_console or os.getenv("OTEL_CONSOLE_EXPORTER", "0").lower() in {"1", "true", "yes"}:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))

    if set_global:
        trace.set_tracer_provider(provider)
    return provider
