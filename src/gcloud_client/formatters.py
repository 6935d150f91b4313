"""
Response formatting for MCP tool outputs.

Every tool result is an MCP content envelope holding a single text block:
pretty JSON by default, or markdown for human-facing clients.
"""

import json
from typing import Any, Dict, List, Optional

from .errors import GCloudApiError

MAX_COLUMNS = 6
MAX_CELL_LENGTH = 50


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _text_content(text: str) -> List[Dict[str, str]]:
    return [{"type": "text", "text": text}]


def format_response(
    data: Any, format: str = "json", resource_type: Optional[str] = None
) -> Dict[str, Any]:
    """
    Wrap a successful result in an MCP content envelope.

    Args:
        data: Decoded API result
        format: "json" (default) or "markdown"
        resource_type: Label used in markdown headings and empty-list messages

    Returns:
        {"content": [{"type": "text", "text": ...}]}
    """
    if format == "markdown":
        return {"content": _text_content(format_markdown(data, resource_type))}
    return {"content": _text_content(_dumps(data))}


def format_error(error: BaseException) -> Dict[str, Any]:
    """Wrap an exception in an MCP content envelope flagged with isError."""
    if isinstance(error, GCloudApiError):
        payload = error.to_dict()
    else:
        payload = {"error": True, "message": str(error)}
    return {"content": _text_content(_dumps(payload)), "isError": True}


def format_markdown(data: Any, resource_type: Optional[str] = None) -> str:
    if isinstance(data, list):
        return _list_as_markdown(data, resource_type)
    if isinstance(data, dict):
        return _dict_as_markdown(data, resource_type)
    return _scalar(data)


def _scalar(value: Any) -> str:
    # Match JSON spelling for booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _list_as_markdown(items: List[Any], resource_type: Optional[str]) -> str:
    if not items:
        return f"No {resource_type or 'items'} found."

    first = items[0]
    if not isinstance(first, dict):
        return "\n".join(f"- {_scalar(item)}" for item in items)

    keys = list(first.keys())[:MAX_COLUMNS]
    lines = [
        "| " + " | ".join(keys) + " |",
        "| " + " | ".join("---" for _ in keys) + " |",
    ]
    for item in items:
        record = item if isinstance(item, dict) else {}
        cells = []
        for key in keys:
            value = record.get(key)
            if value is None:
                cells.append("-")
            elif isinstance(value, (dict, list)):
                cells.append("[object]")
            else:
                cells.append(truncate(_scalar(value), MAX_CELL_LENGTH))
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def _dict_as_markdown(obj: Dict[str, Any], resource_type: Optional[str]) -> str:
    title = f"## {resource_type}\n\n" if resource_type else ""
    lines = []
    for key, value in obj.items():
        if value is None:
            lines.append(f"**{key}:** -")
        elif isinstance(value, (dict, list)):
            lines.append(f"**{key}:**\n```json\n{_dumps(value)}\n```")
        else:
            lines.append(f"**{key}:** {_scalar(value)}")
    return title + "\n\n".join(lines)


def truncate(text: str, max_length: int) -> str:
    """Shorten text to max_length characters, marking the cut with '...'."""
    if len(text) <= max_length:
        return text
    return text[: max(max_length - 3, 0)] + "..."
