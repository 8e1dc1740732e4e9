"""FastMCP server for design token lookups - main entry point."""
import sys
import os
import logging
import asyncio
from pathlib import Path
from contextlib import asynccontextmanager
from concurrent.futures import ThreadPoolExecutor

from mcp.server.fastmcp import FastMCP

from mcp_server.token_server import DesignTokenServer
from mcp_server.mcp_tools import register_tools
from mcp_server.strings_loader import load_strings

# Keep stdout clean for stdio transport; log to stderr and keep volume low.
log_level = os.getenv("DESIGN_TOKENS_LOG_LEVEL", "WARNING").upper()
if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
    log_level = "WARNING"

log_file = os.getenv("DESIGN_TOKENS_LOG_FILE")
handlers = None
if log_file:
    try:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers = [logging.FileHandler(log_path)]
    except OSError:
        handlers = [logging.StreamHandler(sys.stderr)]
else:
    handlers = [logging.StreamHandler(sys.stderr)]

logging.basicConfig(
    level=getattr(logging, log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers,
)
logger = logging.getLogger(__name__)
logging.getLogger("mcp").setLevel(getattr(logging, log_level))

# One worker: the index has a single owner.
_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mcp-design-tokens")


@asynccontextmanager
async def _lifespan(app: FastMCP):
    """FastMCP lifespan hook for startup/shutdown."""
    if os.getenv("DESIGN_TOKENS_PRELOAD", "").lower() in {"1", "true", "yes"}:
        loop = asyncio.get_running_loop()
        loop.run_in_executor(_EXECUTOR, server.ensure_index_ready)
    try:
        yield
    finally:
        pass


mcp = FastMCP("Design Tokens", log_level=log_level, lifespan=_lifespan)
server = DesignTokenServer()
strings = load_strings()
register_tools(mcp, server, strings, _EXECUTOR)


def main():
    """Main entry point for the server."""
    import argparse

    parser = argparse.ArgumentParser(description="Design Token Index MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol to use (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for HTTP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for HTTP transport (default: 8000)",
    )

    args = parser.parse_args()

    transport = args.transport.lower()
    if transport == "http":
        transport = "streamable-http"

    if transport in {"streamable-http", "sse"}:
        if args.host == "0.0.0.0":
            logger.warning("Server is binding to 0.0.0.0. Ensure network access is protected.")

        mcp.settings.host = args.host
        mcp.settings.port = args.port
        logger.info(f"Starting HTTP server on {args.host}:{args.port} ({transport})")

    # The lifespan hook runs once per session; the shared worker outlives them all.
    try:
        mcp.run(transport=transport)
    finally:
        _EXECUTOR.shutdown(wait=False)


if __name__ == "__main__":
    main()
