"""MCP tool surface for the design-token index."""
