# Copyright 2025 t54 labs
# SPDX-License-Identifier: Apache-2.0
"""Scripted walk through the payment app: log in, fill the dialog, submit."""

import asyncio
import logging
import os

from dotenv import load_dotenv
from cryptopay_client import ClientConfig, PaymentApp, setup_otel_from_env

load_dotenv()


async def main():
    """Drive one payment through the dialog and print the notices."""
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    if os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT") or os.getenv("OTEL_CONSOLE_EXPORTER"):
        setup_otel_from_env()

    app = PaymentApp(ClientConfig())
    try:
        if not app.session.is_logged_in:
            app.router.navigate("/login")
            app.login.sign_in("demo@example.com", "demo")

        app.index.open_payment_dialog()
        dialog = app.dialog
        dialog.set_field("recipient", os.getenv("PAY_TO", "friend@example.com"))
        dialog.set_field("source_currency", os.getenv("PAY_CURRENCY", "BTC"))
        dialog.set_field("amount", os.getenv("PAY_AMOUNT", "0.01"))
        dialog.set_field("description", "Coffee")

        print(f"[{dialog.submit_label}] disabled={dialog.submit_disabled}")
        state = await dialog.submit()
        print(f"Dialog finished in state: {state.value}")
        for toast in app.toaster.history:
            marker = "❌" if toast.variant == "destructive" else "✅"
            print(f"{marker} {toast.title}" + (f" - {toast.description}" if toast.description else ""))
        if dialog.pending_redirect is not None:
            await asyncio.sleep(app.cfg.login_redirect_delay_s + 0.1)
            print(f"Redirected to {app.router.current}")
    finally:
        await app.aclose()


if __name__ == "__main__":
    asyncio.run(main())
