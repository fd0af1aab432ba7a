from typing import Iterable

from .alert import Alert
from .constants import MENTION_PREFIX


def format_mention(username: str) -> str:
    return f"{MENTION_PREFIX}{username}"


def format_mentions(usernames: Iterable[str]) -> str:
    return " ".join(format_mention(u) for u in usernames)


def format_alert_message(alert: Alert, subscribers: Iterable[str]) -> str:
    """Monta o texto enviado ao chat (título em negrito + linhas citadas)."""
    lines = [
        f"*{alert.type}*",
        f">Severity: {alert.severity}",
        f">Program: {alert.program}",
        f">Host: {alert.host}",
        f">Hits: {alert.hits}",
        f">Timestamp: {alert.timestamp}",
        f">Message: {alert.message}",
        f">cc: {format_mentions(subscribers)}",
    ]
    return "\n".join(lines)
