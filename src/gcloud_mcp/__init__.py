"""
MCP server exposing Google Cloud REST APIs as tools.

JSON-RPC 2.0 message handling, the tool registry and the gcloud tool catalog.
"""
