"""Fan-out dispatcher for fault summaries.

Each configured channel (ntfy, Telegram) gets the summary rendered its own
way. Failures are collected per channel and returned instead of raised.
"""

from __future__ import annotations

from typing import List

from . import ntfy, telegram
from .summary import FaultSummary


def _telegram_configured(args) -> bool:
    return bool(getattr(args, "notify_telegram_token", "") and getattr(args, "notify_telegram_chat_id", ""))


def notify_configured(args) -> bool:
    """True if at least one notification channel is configured on *args*."""
    return bool(getattr(args, "notify_ntfy_topic", "")) or _telegram_configured(args)


def dispatch_notifications(args, summary: FaultSummary) -> List[str]:
    """Send *summary* to every notification channel configured in *args*.

    Returns a list of human-readable failure descriptions (empty on success).
    """
    failures: List[str] = []

    if getattr(args, "notify_ntfy_topic", ""):
        try:
            ntfy.send_summary(args.notify_ntfy_topic, summary, server=args.notify_ntfy_server)
        except Exception as e:
            failures.append(f"ntfy: {e}")

    if _telegram_configured(args):
        try:
            telegram.send_summary(args.notify_telegram_token, args.notify_telegram_chat_id, summary)
        except Exception as e:
            failures.append(f"telegram: {e}")

    return failures
