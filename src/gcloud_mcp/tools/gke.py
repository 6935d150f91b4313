"""GKE tools: clusters and node pools."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, define, items_of, mutation, project_param, string_param

CATEGORY = "gke"


async def list_clusters(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_clusters(args["projectId"], args["location"]), "clusters")


async def get_cluster(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_cluster(args["projectId"], args["location"], args["clusterName"])


async def delete_cluster(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["clusterName"]
    operation = await client.delete_cluster(args["projectId"], args["location"], name)
    return mutation(f"Cluster {name} deletion initiated", operation=operation)


async def list_node_pools(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_node_pools(
        args["projectId"], args["location"], args["clusterName"]
    )
    return items_of(response, "nodePools")


async def get_node_pool(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_node_pool(
        args["projectId"], args["location"], args["clusterName"], args["nodePoolName"]
    )


def gke_tools() -> List[GCloudTool]:
    location = string_param("location", "Location")
    cluster_name = string_param("clusterName", "Name of the cluster")

    return [
        define(
            "gcloud_list_clusters",
            "List GKE clusters in a location.",
            [project_param(), string_param("location", 'Location (region or zone, use "-" for all)')],
            list_clusters,
            CATEGORY,
            "clusters",
            formatted=True,
        ),
        define(
            "gcloud_get_cluster",
            "Get details of a GKE cluster.",
            [project_param(), location, cluster_name],
            get_cluster,
            CATEGORY,
            "cluster",
            formatted=True,
        ),
        define(
            "gcloud_delete_cluster",
            "Delete a GKE cluster.",
            [project_param(), location, string_param("clusterName", "Name of the cluster to delete")],
            delete_cluster,
            CATEGORY,
        ),
        define(
            "gcloud_list_node_pools",
            "List node pools of a GKE cluster.",
            [project_param(), location, cluster_name],
            list_node_pools,
            CATEGORY,
            "node_pools",
            formatted=True,
        ),
        define(
            "gcloud_get_node_pool",
            "Get details of a GKE node pool.",
            [
                project_param(),
                location,
                cluster_name,
                string_param("nodePoolName", "Name of the node pool"),
            ],
            get_node_pool,
            CATEGORY,
            "node_pool",
            formatted=True,
        ),
    ]
