from unittest.mock import AsyncMock

import pytest

from protonmail_mcp.config import EmailConfig
from protonmail_mcp.email_client import EmailClient


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def email_config():
    """Valid test configuration (STARTTLS on 587)."""
    return EmailConfig(
        host="smtp.example.com",
        port=587,
        secure=False,
        username="sender@example.com",
        password="secret123",
        debug=False,
    )


@pytest.fixture
def mock_client(email_config):
    """EmailClient whose network operations are mocked out."""
    client = EmailClient(email_config)
    client.send_email = AsyncMock(return_value={"messageId": "<1@example.com>"})
    client.verify_connection = AsyncMock(return_value=None)
    return client
