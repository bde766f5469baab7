from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response

from api.schemas import CallToolResponse, ToolOut
from core.errors import InvalidArguments, UnknownTool
from toolserver.server import MCPServer

router = APIRouter(prefix="/mcp", tags=["mcp"])


def get_server(request: Request) -> MCPServer:
    return request.app.state.mcp_server


@router.get("/tools", response_model=List[ToolOut])
def list_tools(server: MCPServer = Depends(get_server)):
    return server.list_tools()


@router.post(
    "/call/{tool_name}",
    response_model=CallToolResponse,
    response_model_exclude_none=True,
)
async def call_tool(
    tool_name: str,
    arguments: Dict[str, Any] = Body(default={}),
    server: MCPServer = Depends(get_server),
):
    try:
        return await server.call_tool(tool_name, arguments)
    except UnknownTool as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except InvalidArguments as exc:
        raise HTTPException(status_code=422, detail=exc.message)


@router.post("")
async def json_rpc(message: Any = Body(...), server: MCPServer = Depends(get_server)):
    response = await server.handle_request(message)
    if response is None:
        return Response(status_code=202)
    return response
