"""Cloud SQL tools: instances and databases."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, define, items_of, mutation, project_param, string_param

CATEGORY = "sql"


async def list_sql_instances(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_sql_instances(args["projectId"]), "items")


async def get_sql_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_sql_instance(args["projectId"], args["instanceName"])


async def delete_sql_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.delete_sql_instance(args["projectId"], name)
    return mutation(f"Instance {name} deletion initiated", operation=operation)


async def restart_sql_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.restart_sql_instance(args["projectId"], name)
    return mutation(f"Instance {name} restart initiated", operation=operation)


async def list_databases(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_databases(args["projectId"], args["instanceName"]), "items")


async def get_database(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_database(
        args["projectId"], args["instanceName"], args["databaseName"]
    )


async def create_database(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["databaseName"]
    operation = await client.create_database(args["projectId"], args["instanceName"], name)
    return mutation(f"Database {name} creation initiated", operation=operation)


async def delete_database(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["databaseName"]
    operation = await client.delete_database(args["projectId"], args["instanceName"], name)
    return mutation(f"Database {name} deletion initiated", operation=operation)


def sql_tools() -> List[GCloudTool]:
    sql_instance = string_param("instanceName", "Name of the SQL instance")

    return [
        define(
            "gcloud_list_sql_instances",
            "List Cloud SQL instances in a project.",
            [project_param()],
            list_sql_instances,
            CATEGORY,
            "instances",
            formatted=True,
        ),
        define(
            "gcloud_get_sql_instance",
            "Get details of a Cloud SQL instance.",
            [project_param(), string_param("instanceName", "Name of the instance")],
            get_sql_instance,
            CATEGORY,
            "instance",
            formatted=True,
        ),
        define(
            "gcloud_delete_sql_instance",
            "Delete a Cloud SQL instance and all its data.",
            [project_param(), string_param("instanceName", "Name of the instance to delete")],
            delete_sql_instance,
            CATEGORY,
        ),
        define(
            "gcloud_restart_sql_instance",
            "Restart a Cloud SQL instance.",
            [project_param(), string_param("instanceName", "Name of the instance to restart")],
            restart_sql_instance,
            CATEGORY,
        ),
        define(
            "gcloud_list_databases",
            "List databases in a Cloud SQL instance.",
            [project_param(), sql_instance],
            list_databases,
            CATEGORY,
            "databases",
            formatted=True,
        ),
        define(
            "gcloud_get_database",
            "Get details of a database in a Cloud SQL instance.",
            [project_param(), sql_instance, string_param("databaseName", "Name of the database")],
            get_database,
            CATEGORY,
            "database",
            formatted=True,
        ),
        define(
            "gcloud_create_database",
            "Create a database in a Cloud SQL instance.",
            [
                project_param(),
                sql_instance,
                string_param("databaseName", "Name for the new database"),
            ],
            create_database,
            CATEGORY,
        ),
        define(
            "gcloud_delete_database",
            "Delete a database from a Cloud SQL instance.",
            [
                project_param(),
                sql_instance,
                string_param("databaseName", "Name of the database to delete"),
            ],
            delete_database,
            CATEGORY,
        ),
    ]
