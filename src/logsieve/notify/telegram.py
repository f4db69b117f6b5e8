"""Send fault summaries through the Telegram Bot API."""

from __future__ import annotations

import requests

from .summary import FaultSummary

API_URL = "https://api.telegram.org"


def notify_telegram(token: str, chat_id: str, message: str, silent: bool = False) -> None:
    """Send *message* to *chat_id*; *silent* delivers it without a sound."""
    url = f"{API_URL}/bot{token}/sendMessage"
    payload = {
        "chat_id": chat_id,
        "text": message,
        "disable_web_page_preview": True,
        "disable_notification": silent,
    }
    r = requests.post(url, json=payload, timeout=10)
    r.raise_for_status()


def send_summary(token: str, chat_id: str, summary: FaultSummary) -> None:
    # Telegram has no title field, so the title leads the text
    notify_telegram(token, chat_id, f"{summary.title}\n{summary.to_text()}", silent=summary.silent)
