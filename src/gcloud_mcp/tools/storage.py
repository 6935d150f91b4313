"""Cloud Storage tools: buckets and objects."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient

from .base import GCloudTool, define, integer_param, items_of, mutation, project_param, string_param

CATEGORY = "storage"

STORAGE_CLASSES = ["STANDARD", "NEARLINE", "COLDLINE", "ARCHIVE"]


async def list_buckets(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_buckets(args["projectId"]), "items")


async def get_bucket(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_bucket(args["bucketName"])


async def create_bucket(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["name"]
    bucket: Dict[str, Any] = {"name": name}
    if args.get("location"):
        bucket["location"] = args["location"]
    if args.get("storageClass"):
        bucket["storageClass"] = args["storageClass"]

    created = await client.create_bucket(args["projectId"], bucket)
    return mutation(f"Bucket {name} created", bucket=created)


async def delete_bucket(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["bucketName"]
    await client.delete_bucket(name)
    return mutation(f"Bucket {name} deleted")


async def list_objects(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_objects(
        args["bucketName"], prefix=args.get("prefix"), max_results=args.get("maxResults")
    )
    return items_of(response, "items")


async def get_object(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_object(args["bucketName"], args["objectName"])


async def delete_object(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    await client.delete_object(args["bucketName"], args["objectName"])
    return mutation(f"Object {args['objectName']} deleted from {args['bucketName']}")


async def copy_object(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    copied = await client.copy_object(
        args["sourceBucket"], args["sourceObject"], args["destBucket"], args["destObject"]
    )
    return mutation("Object copied successfully", object=copied)


def storage_tools() -> List[GCloudTool]:
    bucket_name = string_param("bucketName", "Name of the bucket")

    return [
        define(
            "gcloud_list_buckets",
            "List Cloud Storage buckets in a project.",
            [project_param()],
            list_buckets,
            CATEGORY,
            "buckets",
            formatted=True,
        ),
        define(
            "gcloud_get_bucket",
            "Get metadata of a Cloud Storage bucket.",
            [bucket_name],
            get_bucket,
            CATEGORY,
            "bucket",
            formatted=True,
        ),
        define(
            "gcloud_create_bucket",
            "Create a Cloud Storage bucket. Bucket names are globally unique.",
            [
                project_param(),
                string_param("name", "Name for the new bucket (globally unique)"),
                string_param("location", "Bucket location (e.g., US, us-central1)", required=False),
                string_param(
                    "storageClass", "Storage class", required=False, enum=STORAGE_CLASSES
                ),
            ],
            create_bucket,
            CATEGORY,
        ),
        define(
            "gcloud_delete_bucket",
            "Delete an empty Cloud Storage bucket.",
            [string_param("bucketName", "Name of the bucket to delete")],
            delete_bucket,
            CATEGORY,
        ),
        define(
            "gcloud_list_objects",
            "List objects in a Cloud Storage bucket, optionally filtered by prefix.",
            [
                bucket_name,
                string_param("prefix", "Filter objects by prefix", required=False),
                integer_param("maxResults", "Maximum results", minimum=1, maximum=1000),
            ],
            list_objects,
            CATEGORY,
            "objects",
            formatted=True,
        ),
        define(
            "gcloud_get_object",
            "Get metadata of an object in a Cloud Storage bucket.",
            [bucket_name, string_param("objectName", "Name of the object (full path)")],
            get_object,
            CATEGORY,
            "object",
            formatted=True,
        ),
        define(
            "gcloud_delete_object",
            "Delete an object from a Cloud Storage bucket.",
            [bucket_name, string_param("objectName", "Name of the object to delete")],
            delete_object,
            CATEGORY,
        ),
        define(
            "gcloud_copy_object",
            "Copy an object within or between Cloud Storage buckets.",
            [
                string_param("sourceBucket", "Source bucket name"),
                string_param("sourceObject", "Source object name"),
                string_param("destBucket", "Destination bucket name"),
                string_param("destObject", "Destination object name"),
            ],
            copy_object,
            CATEGORY,
        ),
    ]
