"""Environment-driven SMTP settings for the Protonmail MCP server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_HOST = "smtp.protonmail.ch"
DEFAULT_PORT = 587

REQUIRED_VARS = ("PROTONMAIL_USERNAME", "PROTONMAIL_PASSWORD")


class ConfigurationError(RuntimeError):
    """Raised when mandatory settings are absent from the environment."""


@dataclass(frozen=True)
class EmailConfig:
    host: str
    port: int
    secure: bool
    username: str
    password: str
    debug: bool = False

    @property
    def start_tls(self) -> bool:
        # 587 -> plaintext then STARTTLS; secure (usually 465) -> implicit TLS
        return not self.secure


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def load_config(environ: Optional[Mapping[str, str]] = None) -> EmailConfig:
    """Build an immutable config from ``environ`` (``os.environ`` by default).

    Raises ConfigurationError naming every missing mandatory variable.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {' and '.join(missing)} must be set"
        )

    port_str = env.get("PROTONMAIL_PORT") or str(DEFAULT_PORT)
    try:
        port = int(port_str)
    except ValueError:
        port = DEFAULT_PORT

    return EmailConfig(
        host=env.get("PROTONMAIL_HOST") or DEFAULT_HOST,
        port=port,
        secure=_flag(env.get("PROTONMAIL_SECURE")),
        username=env["PROTONMAIL_USERNAME"],
        password=env["PROTONMAIL_PASSWORD"],
        debug=_flag(env.get("DEBUG")),
    )
