"""Cloud Logging tools: reading and writing log entries."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_mcp.tool_registry import ToolParameter, ToolParameterType

from .base import GCloudTool, define, integer_param, items_of, mutation, project_param, string_param

CATEGORY = "logging"

SEVERITIES = [
    "DEFAULT",
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "ALERT",
    "EMERGENCY",
]


def _entry(args: Dict[str, Any], **payload: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"severity": args.get("severity") or "INFO"}
    entry.update(payload)
    if args.get("labels"):
        entry["labels"] = args["labels"]
    return entry


async def list_log_entries(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_log_entries(
        args["projectId"], filter=args.get("filter"), page_size=args.get("pageSize") or 100
    )
    return items_of(response, "entries")


async def write_log_entry(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    await client.write_log_entries(
        args["projectId"], args["logName"], [_entry(args, textPayload=args["message"])]
    )
    return mutation("Log entry written")


async def write_log_json(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    await client.write_log_entries(
        args["projectId"], args["logName"], [_entry(args, jsonPayload=args["jsonPayload"])]
    )
    return mutation("JSON log entry written")


async def list_logs(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_logs(args["projectId"]), "logNames")


def logging_tools() -> List[GCloudTool]:
    log_name = string_param("logName", "Name of the log")

    def severity() -> ToolParameter:
        return string_param(
            "severity", "Log severity", required=False, enum=SEVERITIES, default="INFO"
        )

    def labels() -> ToolParameter:
        return ToolParameter(
            name="labels", type=ToolParameterType.OBJECT, description="Entry labels"
        )

    return [
        define(
            "gcloud_list_log_entries",
            "List recent log entries of a project, newest first. Accepts a Logging "
            'filter expression (e.g., severity>=ERROR AND resource.type="gce_instance").',
            [
                project_param(),
                string_param("filter", "Filter expression", required=False),
                integer_param(
                    "pageSize", "Number of entries", minimum=1, maximum=1000, default=100
                ),
            ],
            list_log_entries,
            CATEGORY,
            "log_entries",
            formatted=True,
        ),
        define(
            "gcloud_write_log_entry",
            "Write a text log entry.",
            [
                project_param(),
                log_name,
                severity(),
                string_param("message", "Log message"),
                labels(),
            ],
            write_log_entry,
            CATEGORY,
        ),
        define(
            "gcloud_write_log_json",
            "Write a structured (JSON payload) log entry.",
            [
                project_param(),
                log_name,
                severity(),
                ToolParameter(
                    name="jsonPayload",
                    type=ToolParameterType.OBJECT,
                    description="JSON payload",
                    required=True,
                ),
                labels(),
            ],
            write_log_json,
            CATEGORY,
        ),
        define(
            "gcloud_list_logs",
            "List the names of logs that have entries in a project.",
            [project_param()],
            list_logs,
            CATEGORY,
            "logs",
            formatted=True,
        ),
    ]
