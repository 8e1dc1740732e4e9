"""Shared MCP tool/resource registration."""

import asyncio
import inspect
import json
import logging
from typing import Optional, Any
from concurrent.futures import ThreadPoolExecutor

from mcp.server.fastmcp import FastMCP, Context

from mcp_server.token_server import DesignTokenServer

logger = logging.getLogger(__name__)


def _extract_progress_token(ctx: Optional[Context]) -> Any | None:
    """Extract progress token from context metadata or attributes."""
    if ctx is None:
        return None

    rc = getattr(ctx, "request_context", None)
    meta = getattr(rc, "meta", None) if rc else getattr(ctx, "meta", None)

    if isinstance(meta, dict):
        token = meta.get("progressToken") or meta.get("progress_token")
        if token:
            return token

    for attr in ("progress_token", "progressToken"):
        token = getattr(meta, attr, None) if meta is not None else None
        if token:
            return token
    return None


async def _send_progress(ctx: Optional[Context], message: str, progress: Optional[int] = None, total: Optional[int] = None) -> None:
    if ctx is None:
        return
    session = getattr(ctx, "session", None)
    sender = getattr(session, "send_progress_notification", None) if session else None
    if sender is None:
        return

    token = _extract_progress_token(ctx)
    if token is None:
        return

    try:
        # Older SDKs have no message parameter
        if "message" in inspect.signature(sender).parameters:
            await sender(progress_token=token, progress=progress, total=total, message=message)
        else:
            await sender(progress_token=token, progress=progress, total=total)
    except Exception as exc:
        logger.debug("Progress notification failed: %s", exc)


def register_tools(mcp: FastMCP, server: DesignTokenServer, strings: dict, executor: ThreadPoolExecutor) -> None:
    """Register tools/resources/prompts on the given MCP instance.

    Every call runs on ``executor``; with a single worker that serializes
    all access to the index.
    """
    tools = strings.get("tools", {})

    async def _run(func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, lambda: func(*args, **kwargs))

    @mcp.tool(description=tools.get("build_index", "Build the design token index"))
    async def build_index(
        sources: list[str] = None,
        class_whitelist: list[str] = None,
        roots: list[str] = None,
        ctx: Optional[Context] = None,
    ) -> dict:
        await _send_progress(ctx, "indexing design tokens", progress=0)
        result = await _run(server.build_index, sources, class_whitelist, roots)
        await _send_progress(ctx, "indexing completed", progress=100)
        return result

    @mcp.tool(description=tools.get("find_tokens", "Find tokens for a CSS value"))
    async def find_tokens(value: str, include_references: bool = True, ctx: Optional[Context] = None) -> dict:
        return await _run(server.find_tokens, value, include_references)

    @mcp.tool(description=tools.get("find_references", "Find tokens referencing a variable"))
    async def find_references(variable: str, ctx: Optional[Context] = None) -> dict:
        return await _run(server.find_references, variable)

    @mcp.tool(description=tools.get("notify_file_changed", "Re-index a changed stylesheet"))
    async def notify_file_changed(path: str, ctx: Optional[Context] = None) -> dict:
        return await _run(server.notify_file_changed, path)

    @mcp.tool(description=tools.get("list_token_files", "List indexed stylesheets"))
    async def list_token_files(ctx: Optional[Context] = None) -> dict:
        return await _run(server.list_token_files)

    @mcp.tool(description=tools.get("get_file_summary", "Get one stylesheet's summary"))
    async def get_file_summary(path: str, ctx: Optional[Context] = None) -> dict:
        return await _run(server.get_file_summary, path)

    @mcp.tool(description=tools.get("get_index_status", "Get index status"))
    async def get_index_status(ctx: Optional[Context] = None) -> dict:
        return await _run(server.get_index_status)

    @mcp.resource("tokens://files")
    async def token_files() -> str:
        result = await _run(server.list_token_files)
        return json.dumps(result)

    @mcp.prompt()
    def token_help() -> str:
        return strings.get("help", "")
