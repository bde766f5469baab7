import logging
from typing import Any, Dict, List, Optional

from core.errors import ToolError
from tmdb.client import UpstreamClient
from toolserver.dispatcher import InvocationDispatcher
from toolserver.registry import ToolRegistry, default_registry

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
SUPPORTED_PROTOCOL_VERSIONS = ("2025-11-25", "2025-06-18", "2024-11-05")

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVER_INFO = {
    "name": "tmdb-mcp-server",
    "version": "0.1.0",
    "title": "Example MCP Server Demonstrating MCP Tools",
    "description": (
        "An MCP server that retrieves detailed information about actors "
        "and movies from the TMDB database."
    ),
    "websiteUrl": "https://github.com/theREDspace/mcp-server-example",
}

INSTRUCTIONS = (
    "Use get_actor_info to look up an actor by name; the result contains the "
    "actor's TMDB id. Pass that id to get_movies_by_actor to list their movies."
)


def _result(request_id: Any, result: Dict[str, Any]) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


class MCPServer:
    """
    MCP request handler.
    Knows nothing about the transport; one decoded message in, one response out.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        dispatcher: InvocationDispatcher,
        server_info: Optional[Dict[str, Any]] = None,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.server_info = server_info or SERVER_INFO

    def list_tools(self) -> List[Dict[str, Any]]:
        return [descriptor.to_wire() for descriptor in self.registry.list()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Raises:
            UnknownTool, InvalidArguments: the request itself is wrong.
        """
        invocation = self.registry.resolve(name, arguments)
        logger.info("Calling %s", name)
        outcome = await self.dispatcher.execute(invocation)
        return outcome.to_wire()

    def initialize(self, params: Dict[str, Any]) -> Dict[str, Any]:
        requested = params.get("protocolVersion")
        if requested in SUPPORTED_PROTOCOL_VERSIONS:
            version = requested
        else:
            version = SUPPORTED_PROTOCOL_VERSIONS[0]
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": self.server_info,
            "instructions": INSTRUCTIONS,
        }

    async def handle_request(self, message: Any) -> Optional[Dict[str, Any]]:
        """
        Handle one JSON-RPC message.
        Returns None for notifications, otherwise exactly one response.
        """
        if not isinstance(message, dict) or message.get("jsonrpc") != JSONRPC_VERSION:
            request_id = message.get("id") if isinstance(message, dict) else None
            return _error(request_id, INVALID_REQUEST, "Invalid request: expected a JSON-RPC 2.0 object.")

        method = message.get("method")
        request_id = message.get("id")
        is_notification = "id" not in message

        if not isinstance(method, str):
            if is_notification:
                return None
            return _error(request_id, INVALID_REQUEST, "Invalid request: method is missing.")

        if is_notification:
            logger.debug("Notification %s", method)
            return None

        params = message.get("params") or {}
        if not isinstance(params, dict):
            return _error(request_id, INVALID_PARAMS, "Invalid params: expected an object.")

        try:
            if method == "initialize":
                return _result(request_id, self.initialize(params))

            elif method == "ping":
                return _result(request_id, {})

            elif method == "tools/list":
                return _result(request_id, {"tools": self.list_tools()})

            elif method == "tools/call":
                name = params.get("name")
                if not isinstance(name, str):
                    return _error(request_id, INVALID_PARAMS, "Invalid params: tool name is missing.")
                result = await self.call_tool(name, params.get("arguments"))
                return _result(request_id, result)

            else:
                return _error(request_id, METHOD_NOT_FOUND, f"Unknown method: {method!r}")

        except ToolError as exc:
            logger.info("Rejected %s: %s", method, exc.message)
            return _error(request_id, exc.code, exc.message)
        except Exception:
            logger.exception("Unexpected error while handling %s", method)
            return _error(
                request_id,
                INTERNAL_ERROR,
                "Internal error: the server could not complete the request.",
            )


def build_server(upstream: UpstreamClient) -> MCPServer:
    registry = default_registry()
    dispatcher = InvocationDispatcher(registry=registry, upstream=upstream)
    return MCPServer(registry=registry, dispatcher=dispatcher)
