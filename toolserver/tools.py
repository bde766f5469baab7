import copy
import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from core.content import ImageContent, InvocationOutcome, TextContent
from core.errors import NotFound
from tmdb.client import UpstreamClient
from toolserver.formatting import format_movies, format_person

logger = logging.getLogger(__name__)

ICON_BASE_URL = "https://raw.githubusercontent.com/theREDspace/mcp-server-example/main/icons"


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    title: str
    description: str
    input_schema: Dict[str, Any]
    icons: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    def to_wire(self) -> Dict[str, Any]:
        wire = {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }
        if self.icons:
            wire["icons"] = [dict(icon) for icon in self.icons]
        return wire


class ToolArguments(BaseModel):
    """
    Validated arguments of one tool call.
    Each subclass is one variant of a resolved invocation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    tool_name: ClassVar[str]


class MovieTool:
    name: str
    title: str
    description: str
    arguments: Type[ToolArguments]
    input_schema: Dict[str, Any]
    icons: Tuple[Dict[str, Any], ...] = ()

    def schema(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            title=self.title,
            description=self.description,
            input_schema=self.input_schema,
            icons=self.icons,
        )

    async def execute(
        self,
        arguments: ToolArguments,
        upstream: UpstreamClient,
    ) -> InvocationOutcome:
        raise NotImplementedError

    async def fetch_image(
        self,
        upstream: UpstreamClient,
        path: Optional[str],
    ) -> Optional[ImageContent]:
        """
        Download an image to attach to the result.
        A failed download only drops the image, it never fails the call.
        """
        if not path:
            return None
        try:
            data = await upstream.image_as_base64(path)
        except Exception as exc:
            logger.warning("%s: image %s skipped: %s", self.name, path, exc)
            return None
        return ImageContent(data=data, mime_type="image/jpeg")


# -------- ACTOR INFO --------

class ActorInfoArguments(ToolArguments):
    tool_name: ClassVar[str] = "get_actor_info"

    actor_name: str = Field(min_length=1, description="The name of the actor.")


class GetActorInfo(MovieTool):
    name = ActorInfoArguments.tool_name
    title = "Get Actor Information"
    description = (
        "Search for detailed information about an actor based on their name. "
        "This tool retrieves data such as actor id, biography, date and place of birth, "
        "and a profile photo to provide a comprehensive profile of the actor. "
        "Use this tool when you want to learn more about a specific actor or explore "
        "their career. Simply provide the actor's name, and the tool will fetch all "
        "available details."
    )
    arguments = ActorInfoArguments
    input_schema = {
        "type": "object",
        "properties": {
            "actor_name": {
                "type": "string",
                "description": "The name of the actor.",
            },
        },
        "required": ["actor_name"],
    }
    icons = (
        {
            "src": f"{ICON_BASE_URL}/stallone-128.png",
            "mimeType": "image/png",
            "sizes": ["128x128"],
        },
    )

    async def execute(self, arguments, upstream):
        person = await upstream.find_person(arguments.actor_name)
        if person is None:
            raise NotFound(
                f'No results found for an actor named "{arguments.actor_name}".'
            )

        blocks: List[Any] = [TextContent(format_person(person))]
        image = await self.fetch_image(upstream, person.profile_path)
        if image is not None:
            blocks.append(image)
        return InvocationOutcome.success(*blocks)


# -------- MOVIES BY ACTOR --------

class MoviesByActorArguments(ToolArguments):
    tool_name: ClassVar[str] = "get_movies_by_actor"

    actor_id: int = Field(description="Required filter: return movies for this actor ID.")


class GetMoviesByActor(MovieTool):
    name = MoviesByActorArguments.tool_name
    title = "Get Movies by Actor ID"
    description = (
        "Retrieve a list of movies featuring a specific actor. "
        "Specify `actor_id` to search for movies that the actor appeared in. "
        "The actor id can be found with the get_actor_info tool."
    )
    arguments = MoviesByActorArguments
    input_schema = {
        "type": "object",
        "properties": {
            "actor_id": {
                "type": "integer",
                "description": "Required filter: return movies for this actor ID.",
            },
        },
        "required": ["actor_id"],
    }
    icons = (
        {
            "src": f"{ICON_BASE_URL}/movies-128.png",
            "mimeType": "image/png",
            "sizes": ["128x128"],
        },
    )

    async def execute(self, arguments, upstream):
        movies = await upstream.movies_by_actor(arguments.actor_id)
        if not movies:
            raise NotFound(
                f"No results found: no movies were found for actor id {arguments.actor_id}."
            )
        return InvocationOutcome.success(TextContent(format_movies(movies)))


# -------- REGISTRY --------

DEFAULT_TOOLS: List[Type[MovieTool]] = [
    GetActorInfo,
    GetMoviesByActor,
]
