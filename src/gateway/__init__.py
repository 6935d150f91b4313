"""HTTP gateway for the gcloud MCP server."""
