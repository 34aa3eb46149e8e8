"""Protonmail MCP package.

Provides an MCP stdio server for sending emails via Protonmail SMTP.
"""

from .config import ConfigurationError, EmailConfig, load_config
from .email_client import EmailClient  # re-export for public API
from .models import OutboundMessage

__all__ = [
    "ConfigurationError",
    "EmailClient",
    "EmailConfig",
    "OutboundMessage",
    "load_config",
]

__version__ = "0.1.0"
