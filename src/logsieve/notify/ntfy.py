"""Push fault summaries to an ntfy topic."""

from __future__ import annotations

from typing import Sequence

import requests

from .summary import FaultSummary


def notify_ntfy(
    topic: str,
    message: str,
    server: str = "https://ntfy.sh",
    title: str = "logsieve",
    priority: str = "default",
    tags: Sequence[str] = (),
) -> None:
    """POST *message* to an ntfy *topic*.

    Title, priority and tags travel in HTTP headers; the body is the raw
    message.
    """
    url = f"{server.rstrip('/')}/{topic}"
    headers = {"Title": title, "Priority": priority}
    if tags:
        headers["Tags"] = ",".join(tags)
    r = requests.post(url, data=message.encode("utf-8"), headers=headers, timeout=10)
    r.raise_for_status()


def send_summary(topic: str, summary: FaultSummary, server: str = "https://ntfy.sh") -> None:
    notify_ntfy(
        topic,
        summary.to_text(),
        server=server,
        title=summary.title,
        priority=summary.ntfy_priority,
        tags=summary.tags,
    )
