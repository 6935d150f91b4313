"""Transports for the gcloud MCP server."""
