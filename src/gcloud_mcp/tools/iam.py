"""IAM tools: service accounts, project policy and roles."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_mcp.tool_registry import ToolParameter, ToolParameterType

from .base import GCloudTool, define, items_of, mutation, project_param, string_param

CATEGORY = "iam"


async def list_service_accounts(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_service_accounts(args["projectId"]), "accounts")


async def get_service_account(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_service_account(args["projectId"], args["email"])


async def create_service_account(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    account_id = args["accountId"]
    account = await client.create_service_account(
        args["projectId"], account_id, display_name=args.get("displayName")
    )
    return mutation(f"Service account {account_id} created", account=account)


async def delete_service_account(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    email = args["email"]
    await client.delete_service_account(args["projectId"], email)
    return mutation(f"Service account {email} deleted")


async def get_project_iam_policy(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_project_iam_policy(args["projectId"])


async def set_project_iam_policy(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    """Replace the project's bindings, carrying over version and etag from the live policy."""
    project_id = args["projectId"]
    current = await client.get_project_iam_policy(project_id) or {}

    new_policy: Dict[str, Any] = {"bindings": args["bindings"]}
    if current.get("version") is not None:
        new_policy["version"] = current["version"]
    if current.get("etag") is not None:
        # Concurrent edits fail with 409 instead of being silently overwritten
        new_policy["etag"] = current["etag"]

    policy = await client.set_project_iam_policy(project_id, new_policy)
    return mutation("IAM policy updated", policy=policy)


async def list_roles(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_roles(args.get("projectId")), "roles")


def iam_tools() -> List[GCloudTool]:
    binding = ToolParameter(
        name="binding",
        type=ToolParameterType.OBJECT,
        description="Role binding",
        properties={
            "role": string_param("role", "IAM role (e.g., roles/viewer)"),
            "members": ToolParameter(
                name="members",
                type=ToolParameterType.ARRAY,
                description="List of members (e.g., user:alice@example.com)",
                required=True,
                items=string_param("member", "Member identifier"),
            ),
        },
    )

    return [
        define(
            "gcloud_list_service_accounts",
            "List service accounts in a project.",
            [project_param()],
            list_service_accounts,
            CATEGORY,
            "service_accounts",
            formatted=True,
        ),
        define(
            "gcloud_get_service_account",
            "Get details of a service account.",
            [project_param(), string_param("email", "Service account email")],
            get_service_account,
            CATEGORY,
            "service_account",
            formatted=True,
        ),
        define(
            "gcloud_create_service_account",
            "Create a service account.",
            [
                project_param(),
                string_param("accountId", "ID for the service account"),
                string_param("displayName", "Display name", required=False),
            ],
            create_service_account,
            CATEGORY,
        ),
        define(
            "gcloud_delete_service_account",
            "Delete a service account.",
            [project_param(), string_param("email", "Service account email to delete")],
            delete_service_account,
            CATEGORY,
        ),
        define(
            "gcloud_get_project_iam_policy",
            "Get the IAM policy of a project.",
            [project_param()],
            get_project_iam_policy,
            CATEGORY,
            "iam_policy",
            formatted=True,
        ),
        define(
            "gcloud_set_project_iam_policy",
            "Set the IAM policy for a project. Warning: this replaces all existing bindings.",
            [
                project_param(),
                ToolParameter(
                    name="bindings",
                    type=ToolParameterType.ARRAY,
                    description="Role bindings",
                    required=True,
                    items=binding,
                ),
            ],
            set_project_iam_policy,
            CATEGORY,
        ),
        define(
            "gcloud_list_roles",
            "List IAM roles: custom roles of a project when projectId is given, "
            "predefined roles otherwise.",
            [
                ToolParameter(
                    name="projectId",
                    type=ToolParameterType.STRING,
                    description="GCP project ID (optional)",
                )
            ],
            list_roles,
            CATEGORY,
            "roles",
            formatted=True,
            resolve_project_id=False,
        ),
    ]
