"""Cloud DNS tools: managed zones and resource record sets."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_mcp.tool_registry import ToolParameter, ToolParameterType

from .base import GCloudTool, define, integer_param, items_of, mutation, project_param, string_param

CATEGORY = "dns"


async def list_managed_zones(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_managed_zones(args["projectId"]), "managedZones")


async def get_managed_zone(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_managed_zone(args["projectId"], args["zoneName"])


async def create_managed_zone(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["name"]
    zone: Dict[str, Any] = {
        "name": name,
        "dnsName": args["dnsName"],
        # description is required by the API
        "description": args.get("description") or "",
        "visibility": args.get("visibility") or "public",
    }
    created = await client.create_managed_zone(args["projectId"], zone)
    return mutation(f"Managed zone {name} created", zone=created)


async def delete_managed_zone(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["zoneName"]
    await client.delete_managed_zone(args["projectId"], name)
    return mutation(f"Managed zone {name} deleted")


async def list_resource_record_sets(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    response = await client.list_resource_record_sets(args["projectId"], args["zoneName"])
    return items_of(response, "rrsets")


async def create_resource_record_set(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    rrset = await client.create_resource_record_set(
        args["projectId"],
        args["zoneName"],
        {
            "name": args["name"],
            "type": args["type"],
            "ttl": args["ttl"],
            "rrdatas": args["rrdatas"],
        },
    )
    return mutation("Resource record set created", rrset=rrset)


async def delete_resource_record_set(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["name"]
    record_type = args["type"]
    await client.delete_resource_record_set(args["projectId"], args["zoneName"], name, record_type)
    return mutation(f"Record {name} ({record_type}) deleted")


def dns_tools() -> List[GCloudTool]:
    zone_name = string_param("zoneName", "Name of the managed zone")

    return [
        define(
            "gcloud_list_managed_zones",
            "List Cloud DNS managed zones in a project.",
            [project_param()],
            list_managed_zones,
            CATEGORY,
            "managed_zones",
            formatted=True,
        ),
        define(
            "gcloud_get_managed_zone",
            "Get details of a Cloud DNS managed zone including its name servers.",
            [project_param(), zone_name],
            get_managed_zone,
            CATEGORY,
            "managed_zone",
            formatted=True,
        ),
        define(
            "gcloud_create_managed_zone",
            "Create a Cloud DNS managed zone.",
            [
                project_param(),
                string_param("name", "Name for the managed zone"),
                string_param("dnsName", "DNS name (must end with a dot, e.g., example.com.)"),
                string_param("description", "Zone description", required=False),
                string_param(
                    "visibility", "Zone visibility", required=False,
                    enum=["public", "private"], default="public",
                ),
            ],
            create_managed_zone,
            CATEGORY,
        ),
        define(
            "gcloud_delete_managed_zone",
            "Delete a Cloud DNS managed zone. The zone must not contain custom records.",
            [project_param(), string_param("zoneName", "Name of the managed zone to delete")],
            delete_managed_zone,
            CATEGORY,
        ),
        define(
            "gcloud_list_resource_record_sets",
            "List DNS records in a managed zone.",
            [project_param(), zone_name],
            list_resource_record_sets,
            CATEGORY,
            "resource_record_sets",
            formatted=True,
        ),
        define(
            "gcloud_create_resource_record_set",
            "Create a DNS record in a managed zone.",
            [
                project_param(),
                zone_name,
                string_param("name", "Record name (must end with a dot)"),
                string_param("type", "Record type (A, AAAA, CNAME, MX, TXT, etc.)"),
                integer_param("ttl", "TTL in seconds", required=True, minimum=1),
                ToolParameter(
                    name="rrdatas",
                    type=ToolParameterType.ARRAY,
                    description="Record data values",
                    required=True,
                    items=string_param("rrdata", "Record data value"),
                ),
            ],
            create_resource_record_set,
            CATEGORY,
        ),
        define(
            "gcloud_delete_resource_record_set",
            "Delete a DNS record from a managed zone.",
            [
                project_param(),
                zone_name,
                string_param("name", "Record name to delete"),
                string_param("type", "Record type"),
            ],
            delete_resource_record_set,
            CATEGORY,
        ),
    ]
