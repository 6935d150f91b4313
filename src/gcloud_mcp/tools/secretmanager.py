"""Secret Manager tools: secrets and secret versions."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_client.client import b64decode_text

from .base import GCloudTool, boolean_param, define, items_of, mutation, project_param, string_param

CATEGORY = "secretmanager"


async def list_secrets(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_secrets(args["projectId"]), "secrets")


async def get_secret(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_secret(args["projectId"], args["secretName"])


async def create_secret(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    secret_id = args["secretId"]
    replication = {"automatic": {}} if args.get("automatic", True) else None
    secret = await client.create_secret(args["projectId"], secret_id, replication)
    return mutation(f"Secret {secret_id} created", secret=secret)


async def delete_secret(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["secretName"]
    await client.delete_secret(args["projectId"], name)
    return mutation(f"Secret {name} deleted")


async def list_secret_versions(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_secret_versions(args["projectId"], args["secretName"])
    return items_of(response, "versions")


async def access_secret_version(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    secret_name = args["secretName"]
    version = args.get("version") or "latest"
    response = await client.access_secret_version(args["projectId"], secret_name, version) or {}

    # The REST response nests the bytes under payload.data
    payload = response.get("payload") or response
    data = payload.get("data")
    return {
        "secretName": secret_name,
        "version": version,
        "data": b64decode_text(data) if data else "",
    }


async def add_secret_version(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    version = await client.add_secret_version(
        args["projectId"], args["secretName"], args["payload"]
    )
    return mutation("Secret version added", version=version)


def secretmanager_tools() -> List[GCloudTool]:
    secret_name = string_param("secretName", "Name of the secret")

    return [
        define(
            "gcloud_list_secrets",
            "List secrets in a project. Secret values are not included.",
            [project_param()],
            list_secrets,
            CATEGORY,
            "secrets",
            formatted=True,
        ),
        define(
            "gcloud_get_secret",
            "Get metadata of a secret. The secret value is not included.",
            [project_param(), secret_name],
            get_secret,
            CATEGORY,
            "secret",
            formatted=True,
        ),
        define(
            "gcloud_create_secret",
            "Create a secret container. Add a value with gcloud_add_secret_version.",
            [
                project_param(),
                string_param("secretId", "ID for the new secret"),
                boolean_param("automatic", "Use automatic replication", default=True),
            ],
            create_secret,
            CATEGORY,
        ),
        define(
            "gcloud_delete_secret",
            "Delete a secret and all of its versions.",
            [project_param(), string_param("secretName", "Name of the secret to delete")],
            delete_secret,
            CATEGORY,
        ),
        define(
            "gcloud_list_secret_versions",
            "List versions of a secret.",
            [project_param(), secret_name],
            list_secret_versions,
            CATEGORY,
            "versions",
            formatted=True,
        ),
        define(
            "gcloud_access_secret_version",
            "Access the value of a secret version.",
            [
                project_param(),
                secret_name,
                string_param("version", "Version to access", required=False, default="latest"),
            ],
            access_secret_version,
            CATEGORY,
            "secret_value",
        ),
        define(
            "gcloud_add_secret_version",
            "Add a new version holding the given value to a secret.",
            [project_param(), secret_name, string_param("payload", "Secret value to store")],
            add_secret_version,
            CATEGORY,
        ),
    ]
