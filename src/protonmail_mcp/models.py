from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class OutboundMessage:
    """A validated send_email request. Lives for a single tool call."""

    to: str
    subject: str
    body: str
    is_html: bool = False
    cc: Optional[str] = None
    bcc: Optional[str] = None


def split_addresses(value: Optional[str]) -> List[str]:
    """Split a comma-separated address list, dropping blanks."""
    if not value:
        return []
    return [addr.strip() for addr in value.split(",") if addr.strip()]
