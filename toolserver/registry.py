from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from core.errors import InvalidArguments, UnknownTool
from toolserver.tools import DEFAULT_TOOLS, MovieTool, ToolArguments, ToolDescriptor


class ToolRegistry:
    """
    Closed set of tools known to the server.
    Fixed at construction, never modified afterwards.
    """

    def __init__(self, tools: Iterable[MovieTool]):
        self._tools: Dict[str, MovieTool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._tools[tool.name] = tool
        self._descriptors: Tuple[ToolDescriptor, ...] = tuple(
            tool.schema() for tool in self._tools.values()
        )

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list(self) -> Tuple[ToolDescriptor, ...]:
        return self._descriptors

    def get(self, name: str) -> MovieTool:
        if name not in self:
            raise UnknownTool(name)
        return self._tools[name]

    def resolve(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]],
    ) -> ToolArguments:
        """
        Turn a tool name and a raw argument payload into typed arguments.

        Raises:
            UnknownTool: no tool with this exact name.
            InvalidArguments: the first field failing validation.
        """
        tool = self.get(name)

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise InvalidArguments(
                "arguments",
                f"expected an object, got {type(arguments).__name__}",
            )

        try:
            return tool.arguments.model_validate(dict(arguments))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "arguments"
            raise InvalidArguments(field, first["msg"]) from None


def default_registry() -> ToolRegistry:
    return ToolRegistry(tool_cls() for tool_cls in DEFAULT_TOOLS)
