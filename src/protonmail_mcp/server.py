"""
MCP server over stdio exposing a single ``send_email`` tool.
"""

from typing import Any, List, Optional, Sequence

# MCP Python SDK (low-level stdio server)
import mcp.server.stdio
import mcp.types as types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.shared.exceptions import McpError

from .config import EmailConfig
from .email_client import EmailClient
from .log import debug_logger, logger
from .models import OutboundMessage

SERVER_NAME = "protonmail-mcp"
SERVER_VERSION = "0.1.0"

SEND_EMAIL_TOOL = types.Tool(
    name="send_email",
    description="Send an email using Protonmail SMTP",
    inputSchema={
        "type": "object",
        "properties": {
            "to": {
                "type": "string",
                "description": "Recipient email address(es). Multiple addresses can be separated by commas.",
            },
            "subject": {"type": "string", "description": "Email subject line"},
            "body": {
                "type": "string",
                "description": "Email body content (can be plain text or HTML)",
            },
            "isHtml": {
                "type": "boolean",
                "description": "Whether the body contains HTML content",
                "default": False,
            },
            "cc": {"type": "string", "description": "CC recipient(s), separated by commas"},
            "bcc": {"type": "string", "description": "BCC recipient(s), separated by commas"},
        },
        "required": ["to", "subject", "body"],
    },
)


class ServerStartupError(RuntimeError):
    """The SMTP connection could not be verified before serving."""


def _error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


def _optional_str(value: Any) -> Optional[str]:
    # Non-string cc/bcc are dropped silently, not rejected
    if isinstance(value, str) and value:
        return value
    return None


def validate_arguments(arguments: Any) -> OutboundMessage:
    """Turn a raw argument bag into an OutboundMessage.

    Rejects on the first missing or non-string required field with an
    INVALID_PARAMS error. Nothing touches the network before this passes.
    """
    if arguments is None or not isinstance(arguments, dict):
        raise _error(types.INVALID_PARAMS, "Invalid arguments")

    for field in ("to", "subject", "body"):
        value = arguments.get(field)
        if not value or not isinstance(value, str):
            raise _error(types.INVALID_PARAMS, f"Missing or invalid '{field}' parameter")

    return OutboundMessage(
        to=arguments["to"],
        subject=arguments["subject"],
        body=arguments["body"],
        is_html=arguments.get("isHtml") is True,
        cc=_optional_str(arguments.get("cc")),
        bcc=_optional_str(arguments.get("bcc")),
    )


def format_confirmation(message: OutboundMessage, rejected: Sequence[str] = ()) -> str:
    text = f"Email sent successfully to {message.to}"
    if message.cc:
        text += f" with CC to {message.cc}"
    if message.bcc:
        text += f" and BCC to {message.bcc}"
    text += "."
    if rejected:
        text += f" Rejected recipients: {', '.join(rejected)}."
    return text


async def send_email_tool(arguments: Any, client: EmailClient) -> List[types.TextContent]:
    message = validate_arguments(arguments)
    try:
        result = await client.send_email(message)
    except Exception as e:
        # Logged regardless of DEBUG
        logger.error("Failed to send email: %s", e)
        raise _error(types.INTERNAL_ERROR, f"Failed to send email: {e}") from e

    text = format_confirmation(message, result.get("rejected", ()))
    return [types.TextContent(type="text", text=text)]


async def call_tool(name: str, arguments: Any, client: EmailClient) -> List[types.TextContent]:
    """Dispatch a tool invocation by name."""
    debug_logger.info("[Tool] Executing tool: %s", name)
    if name == SEND_EMAIL_TOOL.name:
        return await send_email_tool(arguments, client)
    raise _error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")


def create_server(client: EmailClient) -> Server:
    """Build the MCP server with its handlers bound to ``client``."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """Advertise available tools to the client."""
        debug_logger.info("[Setup] Listing available tools")
        return [SEND_EMAIL_TOOL]

    # Bypasses @server.call_tool(), which turns exceptions into isError
    # results; a McpError raised here must reach the client as a JSON-RPC
    # error with its code. Arguments are checked by validate_arguments only.
    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        """Handle tool invocations from the client."""
        content = await call_tool(req.params.name, req.params.arguments, client)
        return types.ServerResult(types.CallToolResult(content=content))

    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def _run(config: EmailConfig) -> None:
    """Verify the SMTP connection, then run the MCP server over stdio."""
    debug_logger.info("[Setup] Starting Protonmail MCP server...")
    client = EmailClient(config)
    try:
        await client.verify_connection()
    except Exception as e:
        raise ServerStartupError(str(e)) from e

    server = create_server(client)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        debug_logger.info("[Setup] Protonmail MCP server started successfully")
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name=SERVER_NAME,
                server_version=SERVER_VERSION,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )
