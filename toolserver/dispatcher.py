import logging

from core.content import InvocationOutcome
from core.errors import ToolError, UpstreamError, UpstreamUnavailable
from tmdb.client import UpstreamClient
from toolserver.registry import ToolRegistry
from toolserver.tools import ToolArguments

logger = logging.getLogger(__name__)


class InvocationDispatcher:
    """
    Executes resolved invocations against the upstream client.

    Every expected failure comes back as an error outcome. Anything else the
    upstream client raises is reported as the service being unavailable. The
    dispatcher keeps no state between calls.
    """

    def __init__(self, registry: ToolRegistry, upstream: UpstreamClient):
        self.registry = registry
        self.upstream = upstream

    async def execute(self, invocation: ToolArguments) -> InvocationOutcome:
        name = invocation.tool_name
        try:
            tool = self.registry.get(name)
            try:
                outcome = await tool.execute(invocation, self.upstream)
            except ToolError:
                raise
            except UpstreamError as exc:
                raise UpstreamUnavailable(str(exc)) from exc
            except Exception as exc:
                logger.exception("%s: unexpected upstream failure", name)
                raise UpstreamUnavailable("the request could not be completed.") from exc
        except ToolError as exc:
            logger.info("%s failed: %s", name, exc.message)
            return InvocationOutcome.failure(exc.message)

        logger.info("%s returned %d content block(s)", name, len(outcome.content))
        return outcome
