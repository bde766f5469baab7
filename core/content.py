from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


# --------------------------------------------------
# CONTENT BLOCKS
# --------------------------------------------------

@dataclass(frozen=True)
class TextContent:
    text: str

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageContent:
    data: str
    mime_type: str = "image/jpeg"

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "image", "data": self.data, "mimeType": self.mime_type}


ContentBlock = Union[TextContent, ImageContent]


# --------------------------------------------------
# OUTCOME
# --------------------------------------------------

@dataclass(frozen=True)
class InvocationOutcome:
    """
    Result of one tool call.
    Either content blocks or an error message, never both.
    """
    content: Tuple[ContentBlock, ...] = ()
    error: Optional[str] = None

    @classmethod
    def success(cls, *blocks: ContentBlock) -> "InvocationOutcome":
        if not blocks:
            raise ValueError("A successful outcome needs at least one content block")
        return cls(content=tuple(blocks))

    @classmethod
    def failure(cls, message: str) -> "InvocationOutcome":
        return cls(error=message)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_wire(self) -> Dict[str, Any]:
        if self.error is not None:
            return {
                "content": [TextContent(self.error).to_wire()],
                "isError": True,
            }
        return {
            "content": [block.to_wire() for block in self.content],
            "isError": False,
        }
