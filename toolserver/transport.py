"""
Newline-delimited JSON-RPC over stdin/stdout.

One message per line. Requests are handled strictly one after another; the
next line is only read after the previous response has been written.
"""

import asyncio
import json
import logging
import sys
from typing import Any, AsyncIterator, BinaryIO, Callable, Dict, Optional

from toolserver.server import INTERNAL_ERROR, MCPServer

logger = logging.getLogger(__name__)

PARSE_ERROR = -32700


async def stdin_lines(stream: Optional[BinaryIO] = None) -> AsyncIterator[str]:
    """
    Yield decoded lines from stdin (or the given binary stream).
    Bytes that are not valid UTF-8 are replaced, so they end up as a parse error.
    """
    if stream is None:
        stream = sys.stdin.buffer
    loop = asyncio.get_running_loop()
    while True:
        raw = await loop.run_in_executor(None, stream.readline)
        if not raw:
            return
        yield raw.decode("utf-8", errors="replace")


def stdout_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _error(request_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def _send(writer: Callable[[str], None], response: Dict[str, Any]) -> None:
    # json.dumps escapes non-ASCII, lone surrogates included
    try:
        writer(json.dumps(response))
    except UnicodeError as exc:
        logger.warning("Response could not be written: %s", exc)
        writer(json.dumps(_error(
            response.get("id"),
            INTERNAL_ERROR,
            "Internal error: the response could not be encoded.",
        )))


async def serve(
    server: MCPServer,
    reader: AsyncIterator[str],
    writer: Callable[[str], None],
) -> None:
    logger.info("Serving %d tool(s)", len(server.registry))

    async for raw in reader:
        line = raw.strip()
        if not line:
            continue

        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            logger.warning("Dropping undecodable message: %s", exc)
            _send(writer, _error(None, PARSE_ERROR, "Parse error: message is not valid JSON."))
            continue

        response = await server.handle_request(message)
        if response is not None:
            _send(writer, response)

    logger.info("Input closed, shutting down")
