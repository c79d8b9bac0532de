"""vestige-init - connect AI coding tools to the Vestige MCP server."""

__version__ = "2.0.0"
