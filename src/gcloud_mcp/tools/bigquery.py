"""BigQuery tools: datasets, tables and synchronous queries."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, boolean_param, define, items_of, mutation, project_param, string_param

CATEGORY = "bigquery"


async def list_datasets(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_datasets(args["projectId"]), "datasets")


async def get_dataset(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_dataset(args["projectId"], args["datasetId"])


async def create_dataset(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    project_id = args["projectId"]
    dataset_id = args["datasetId"]
    body: Dict[str, Any] = {
        "datasetReference": {"datasetId": dataset_id, "projectId": project_id}
    }
    if args.get("location"):
        body["location"] = args["location"]

    dataset = await client.create_dataset(project_id, body)
    return mutation(f"Dataset {dataset_id} created", dataset=dataset)


async def delete_dataset(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    dataset_id = args["datasetId"]
    await client.delete_dataset(
        args["projectId"], dataset_id, delete_contents=bool(args.get("deleteContents"))
    )
    return mutation(f"Dataset {dataset_id} deleted")


async def list_tables(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_tables(args["projectId"], args["datasetId"]), "tables")


async def get_table(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_table(args["projectId"], args["datasetId"], args["tableId"])


async def run_query(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.run_query(
        args["projectId"], args["query"], use_legacy_sql=bool(args.get("useLegacySql"))
    )


def bigquery_tools() -> List[GCloudTool]:
    dataset_id = string_param("datasetId", "Dataset ID")

    return [
        define(
            "gcloud_list_datasets",
            "List BigQuery datasets in a project.",
            [project_param()],
            list_datasets,
            CATEGORY,
            "datasets",
            formatted=True,
        ),
        define(
            "gcloud_get_dataset",
            "Get details of a BigQuery dataset.",
            [project_param(), dataset_id],
            get_dataset,
            CATEGORY,
            "dataset",
            formatted=True,
        ),
        define(
            "gcloud_create_dataset",
            "Create a BigQuery dataset.",
            [
                project_param(),
                string_param("datasetId", "ID for the new dataset"),
                string_param("location", "Dataset location (e.g., US, EU)", required=False),
            ],
            create_dataset,
            CATEGORY,
        ),
        define(
            "gcloud_delete_dataset",
            "Delete a BigQuery dataset. Non-empty datasets require deleteContents.",
            [
                project_param(),
                string_param("datasetId", "Dataset ID to delete"),
                boolean_param("deleteContents", "Delete all tables in dataset", default=False),
            ],
            delete_dataset,
            CATEGORY,
        ),
        define(
            "gcloud_list_tables",
            "List tables in a BigQuery dataset.",
            [project_param(), dataset_id],
            list_tables,
            CATEGORY,
            "tables",
            formatted=True,
        ),
        define(
            "gcloud_get_table",
            "Get details of a BigQuery table including its schema.",
            [project_param(), dataset_id, string_param("tableId", "Table ID")],
            get_table,
            CATEGORY,
            "table",
            formatted=True,
        ),
        define(
            "gcloud_bigquery_query",
            "Run a SQL query in BigQuery and return the result rows and schema.",
            [
                project_param(),
                string_param("query", "SQL query to execute"),
                boolean_param("useLegacySql", "Use legacy SQL syntax", default=False),
            ],
            run_query,
            CATEGORY,
            "query_result",
        ),
    ]
