from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class ToolIcon(BaseModel):
    src: str
    mimeType: str
    sizes: List[str] = []


class ToolOut(BaseModel):
    name: str
    title: str
    description: str
    inputSchema: Dict[str, Any]
    icons: List[ToolIcon] = []


class ContentBlockOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: Literal["text", "image"]
    text: Optional[str] = None
    data: Optional[str] = None
    mimeType: Optional[str] = None


class CallToolResponse(BaseModel):
    content: List[ContentBlockOut]
    isError: bool
