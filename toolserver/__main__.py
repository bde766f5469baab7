import asyncio
import logging
import sys

from core.config import Settings, load_settings
from core.errors import ConfigError
from core.log import configure_logging
from tmdb.client import TmdbClient
from toolserver.server import build_server
from toolserver.transport import serve, stdin_lines, stdout_writer

logger = logging.getLogger("toolserver")


async def run(settings: Settings) -> None:
    async with TmdbClient(settings) as client:
        server = build_server(client)

        if settings.transport == "http":
            import uvicorn

            from api.main import create_app

            config = uvicorn.Config(
                create_app(server),
                host=settings.http_host,
                port=settings.http_port,
                log_config=None,
            )
            await uvicorn.Server(config).serve()
        else:
            await serve(server, stdin_lines(), stdout_writer)


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    logger.info("Starting TMDB MCP server (%s transport)", settings.transport)
    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
