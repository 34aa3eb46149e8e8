from typing import Any, Dict, List

from email.message import EmailMessage
from email.utils import make_msgid

import aiosmtplib

from .config import EmailConfig
from .log import debug_logger
from .models import OutboundMessage, split_addresses


class EmailClient:
    """SMTP transport bound to one connection profile for the process lifetime."""

    def __init__(self, config: EmailConfig) -> None:
        self.config = config
        self.from_addr = config.username

    async def verify_connection(self) -> None:
        """Connect, authenticate and disconnect. Raises on any failure."""
        cfg = self.config
        debug_logger.info("[Setup] Verifying SMTP connection to %s:%s", cfg.host, cfg.port)
        smtp = aiosmtplib.SMTP(
            hostname=cfg.host,
            port=cfg.port,
            use_tls=cfg.secure,
            start_tls=cfg.start_tls,
        )
        async with smtp:
            await smtp.login(cfg.username, cfg.password)
        debug_logger.info("[Setup] SMTP connection verified")

    def build_message(self, message: OutboundMessage) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_addr
        msg["To"] = ", ".join(split_addresses(message.to))
        cc = split_addresses(message.cc)
        if cc:
            msg["Cc"] = ", ".join(cc)
        msg["Subject"] = message.subject
        msg["Message-Id"] = make_msgid()

        if message.is_html:
            msg.set_content(message.body, subtype="html")
        else:
            msg.set_content(message.body)
        return msg

    @staticmethod
    def recipients(message: OutboundMessage) -> List[str]:
        # Bcc goes on the envelope only, never into the headers
        return (
            split_addresses(message.to)
            + split_addresses(message.cc)
            + split_addresses(message.bcc)
        )

    async def send_email(self, message: OutboundMessage) -> Dict[str, Any]:
        """Send one message. Transport errors propagate unchanged."""
        cfg = self.config
        msg = self.build_message(message)
        recipients = self.recipients(message)

        debug_logger.info("[Email] Sending to %d recipient(s) via %s", len(recipients), cfg.host)
        errors, info = await aiosmtplib.send(
            msg,
            sender=self.from_addr,
            recipients=recipients,
            hostname=cfg.host,
            port=cfg.port,
            username=cfg.username,
            password=cfg.password,
            use_tls=cfg.secure,
            start_tls=cfg.start_tls,
        )
        rejected = sorted(errors)
        result = {
            "messageId": msg["Message-Id"],
            "accepted": [r for r in recipients if r not in errors],
            "rejected": rejected,
            "responseInfo": info,
        }
        debug_logger.info("[Email] Sent %s: %s", result["messageId"], result["responseInfo"])
        return result
