from fastapi import FastAPI

from api.mcp import router as mcp_router
from toolserver.server import MCPServer


def create_app(server: MCPServer) -> FastAPI:
    """
    HTTP surface over the same request handler the stdio transport uses.
    The server (and its upstream client) is owned by the caller.
    """
    app = FastAPI(title="TMDB MCP Server")
    app.state.mcp_server = server
    app.include_router(mcp_router)
    return app
