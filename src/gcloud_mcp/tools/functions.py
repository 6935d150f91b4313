"""Serverless tools: Cloud Functions (v2) and Cloud Run services."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, define, items_of, mutation, project_param, string_param

CATEGORY = "functions"


def _location(example: bool = True):
    description = "Location (e.g., us-central1)" if example else "Location"
    return string_param("location", description)


async def list_functions(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_functions(args["projectId"], args["location"]), "functions")


async def get_function(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_function(args["projectId"], args["location"], args["functionName"])


async def delete_function(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["functionName"]
    operation = await client.delete_function(args["projectId"], args["location"], name)
    return mutation(f"Function {name} deletion initiated", operation=operation)


async def list_cloud_run_services(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_cloud_run_services(args["projectId"], args["location"])
    return items_of(response, "services")


async def get_cloud_run_service(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_cloud_run_service(
        args["projectId"], args["location"], args["serviceName"]
    )


async def delete_cloud_run_service(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["serviceName"]
    operation = await client.delete_cloud_run_service(args["projectId"], args["location"], name)
    return mutation(f"Service {name} deletion initiated", operation=operation)


def functions_tools() -> List[GCloudTool]:
    return [
        define(
            "gcloud_list_functions",
            "List Cloud Functions (2nd gen) in a location.",
            [project_param(), _location()],
            list_functions,
            CATEGORY,
            "functions",
            formatted=True,
        ),
        define(
            "gcloud_get_function",
            "Get details of a Cloud Function including runtime, trigger and build config.",
            [project_param(), _location(False), string_param("functionName", "Name of the function")],
            get_function,
            CATEGORY,
            "function",
            formatted=True,
        ),
        define(
            "gcloud_delete_function",
            "Delete a Cloud Function.",
            [
                project_param(),
                _location(False),
                string_param("functionName", "Name of the function to delete"),
            ],
            delete_function,
            CATEGORY,
        ),
        define(
            "gcloud_list_cloud_run_services",
            "List Cloud Run services in a location.",
            [project_param(), _location()],
            list_cloud_run_services,
            CATEGORY,
            "services",
            formatted=True,
        ),
        define(
            "gcloud_get_cloud_run_service",
            "Get details of a Cloud Run service including its URL and latest revision.",
            [project_param(), _location(False), string_param("serviceName", "Name of the service")],
            get_cloud_run_service,
            CATEGORY,
            "service",
            formatted=True,
        ),
        define(
            "gcloud_delete_cloud_run_service",
            "Delete a Cloud Run service.",
            [
                project_param(),
                _location(False),
                string_param("serviceName", "Name of the service to delete"),
            ],
            delete_cloud_run_service,
            CATEGORY,
        ),
    ]
