"""Compute Engine tools: instances, disks, networks and firewall rules."""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_mcp.tool_registry import ToolParameter, ToolParameterType

from .base import (
    GCloudTool,
    boolean_param,
    define,
    items_of,
    mutation,
    project_param,
    string_param,
)

CATEGORY = "compute"


def _zone() -> ToolParameter:
    return string_param("zone", "Compute zone (e.g., us-central1-a)")


def _disk_type_url(zone: str, disk_type: str) -> str:
    if "/" in disk_type:
        return disk_type
    return f"zones/{zone}/diskTypes/{disk_type}"


# Instances


async def list_instances(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_instances(args["projectId"], args["zone"]), "items")


async def get_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_instance(args["projectId"], args["zone"], args["instanceName"])


async def create_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    zone = args["zone"]
    name = args["name"]
    instance = {
        "name": name,
        "machineType": f"zones/{zone}/machineTypes/{args['machineType']}",
        "disks": [
            {
                "boot": True,
                "autoDelete": True,
                "initializeParams": {"sourceImage": args["sourceImage"]},
            }
        ],
        "networkInterfaces": [
            {
                "network": f"global/networks/{args['network']}",
                "accessConfigs": [{"type": "ONE_TO_ONE_NAT", "name": "External NAT"}],
            }
        ],
    }
    if args.get("diskSizeGb"):
        instance["disks"][0]["initializeParams"]["diskSizeGb"] = args["diskSizeGb"]
    if args.get("labels"):
        instance["labels"] = args["labels"]

    operation = await client.create_instance(args["projectId"], zone, instance)
    return mutation(f"Instance {name} creation initiated", operation=operation)


async def start_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.start_instance(args["projectId"], args["zone"], name)
    return mutation(f"Instance {name} start initiated", operation=operation)


async def stop_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.stop_instance(args["projectId"], args["zone"], name)
    return mutation(f"Instance {name} stop initiated", operation=operation)


async def reset_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.reset_instance(args["projectId"], args["zone"], name)
    return mutation(f"Instance {name} reset initiated", operation=operation)


async def delete_instance(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["instanceName"]
    operation = await client.delete_instance(args["projectId"], args["zone"], name)
    return mutation(f"Instance {name} deletion initiated", operation=operation)


# Disks


async def list_disks(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_disks(args["projectId"], args["zone"]), "items")


async def get_disk(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_disk(args["projectId"], args["zone"], args["diskName"])


async def create_disk(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    zone = args["zone"]
    name = args["name"]
    disk: Dict[str, Any] = {"name": name, "sizeGb": args["sizeGb"]}
    if args.get("type"):
        disk["type"] = _disk_type_url(zone, args["type"])
    if args.get("sourceImage"):
        disk["sourceImage"] = args["sourceImage"]

    operation = await client.create_disk(args["projectId"], zone, disk)
    return mutation(f"Disk {name} creation initiated", operation=operation)


async def delete_disk(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["diskName"]
    operation = await client.delete_disk(args["projectId"], args["zone"], name)
    return mutation(f"Disk {name} deletion initiated", operation=operation)


async def resize_disk(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["diskName"]
    operation = await client.resize_disk(args["projectId"], args["zone"], name, args["sizeGb"])
    return mutation(f"Disk {name} resize initiated", operation=operation)


# Networks


async def list_networks(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_networks(args["projectId"]), "items")


async def get_network(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_network(args["projectId"], args["networkName"])


async def create_network(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["name"]
    operation = await client.create_network(
        args["projectId"],
        {"name": name, "autoCreateSubnetworks": args.get("autoCreateSubnetworks", True)},
    )
    return mutation(f"Network {name} creation initiated", operation=operation)


async def delete_network(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["networkName"]
    operation = await client.delete_network(args["projectId"], name)
    return mutation(f"Network {name} deletion initiated", operation=operation)


# Firewalls


async def list_firewalls(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_firewalls(args["projectId"]), "items")


async def get_firewall(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_firewall(args["projectId"], args["firewallName"])


async def create_firewall(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["name"]
    rule_key = "allowed" if args.get("action", "allow") == "allow" else "denied"
    firewall: Dict[str, Any] = {
        "name": name,
        "network": f"global/networks/{args.get('network') or 'default'}",
        "direction": args.get("direction") or "INGRESS",
        rule_key: args["rules"],
    }
    for key in ("sourceRanges", "targetTags", "priority", "description"):
        if args.get(key) is not None:
            firewall[key] = args[key]

    operation = await client.create_firewall(args["projectId"], firewall)
    return mutation(f"Firewall {name} creation initiated", operation=operation)


async def delete_firewall(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["firewallName"]
    operation = await client.delete_firewall(args["projectId"], name)
    return mutation(f"Firewall {name} deletion initiated", operation=operation)


def compute_tools() -> List[GCloudTool]:
    instance_name = string_param("instanceName", "Name of the instance")
    disk_name = string_param("diskName", "Name of the disk")
    network_name = string_param("networkName", "Name of the network")
    firewall_name = string_param("firewallName", "Name of the firewall rule")

    firewall_rule = ToolParameter(
        name="rule",
        type=ToolParameterType.OBJECT,
        description="Protocol rule",
        properties={
            "IPProtocol": string_param("IPProtocol", "Protocol (tcp, udp, icmp, all)"),
            "ports": ToolParameter(
                name="ports",
                type=ToolParameterType.ARRAY,
                description="Ports or port ranges",
                items=string_param("port", "Port or range (e.g., 80, 8000-8080)"),
            ),
        },
    )

    return [
        define(
            "gcloud_list_instances",
            "List Compute Engine VM instances in a zone with their status, machine type "
            "and network info.",
            [project_param(), _zone()],
            list_instances,
            CATEGORY,
            "instances",
            formatted=True,
        ),
        define(
            "gcloud_get_instance",
            "Get details of a Compute Engine VM instance.",
            [project_param(), _zone(), instance_name],
            get_instance,
            CATEGORY,
            "instance",
            formatted=True,
        ),
        define(
            "gcloud_create_instance",
            "Create a Compute Engine VM instance with a single boot disk and an external IP.",
            [
                project_param(),
                _zone(),
                string_param("name", "Name for the new instance"),
                string_param("machineType", "Machine type (e.g., e2-medium)"),
                string_param(
                    "sourceImage",
                    "Boot image (e.g., projects/debian-cloud/global/images/family/debian-12)",
                ),
                string_param("network", "VPC network name", required=False, default="default"),
                string_param("diskSizeGb", "Boot disk size in GB", required=False),
                ToolParameter(
                    name="labels", type=ToolParameterType.OBJECT, description="Instance labels"
                ),
            ],
            create_instance,
            CATEGORY,
        ),
        define(
            "gcloud_start_instance",
            "Start a stopped Compute Engine VM instance.",
            [project_param(), _zone(), string_param("instanceName", "Name of the instance to start")],
            start_instance,
            CATEGORY,
        ),
        define(
            "gcloud_stop_instance",
            "Stop a running Compute Engine VM instance.",
            [project_param(), _zone(), string_param("instanceName", "Name of the instance to stop")],
            stop_instance,
            CATEGORY,
        ),
        define(
            "gcloud_reset_instance",
            "Reset (reboot) a Compute Engine VM instance.",
            [project_param(), _zone(), string_param("instanceName", "Name of the instance to reset")],
            reset_instance,
            CATEGORY,
        ),
        define(
            "gcloud_delete_instance",
            "Delete a Compute Engine VM instance.",
            [
                project_param(),
                _zone(),
                string_param("instanceName", "Name of the instance to delete"),
            ],
            delete_instance,
            CATEGORY,
        ),
        define(
            "gcloud_list_disks",
            "List Compute Engine persistent disks in a zone.",
            [project_param(), _zone()],
            list_disks,
            CATEGORY,
            "disks",
            formatted=True,
        ),
        define(
            "gcloud_get_disk",
            "Get details of a persistent disk.",
            [project_param(), _zone(), disk_name],
            get_disk,
            CATEGORY,
            "disk",
            formatted=True,
        ),
        define(
            "gcloud_create_disk",
            "Create a persistent disk, optionally from a source image.",
            [
                project_param(),
                _zone(),
                string_param("name", "Name for the new disk"),
                string_param("sizeGb", "Size in GB"),
                string_param("type", "Disk type (pd-standard, pd-ssd)", required=False),
                string_param("sourceImage", "Source image for the disk", required=False),
            ],
            create_disk,
            CATEGORY,
        ),
        define(
            "gcloud_delete_disk",
            "Delete a persistent disk.",
            [project_param(), _zone(), string_param("diskName", "Name of the disk to delete")],
            delete_disk,
            CATEGORY,
        ),
        define(
            "gcloud_resize_disk",
            "Resize a persistent disk. Disks can only grow.",
            [project_param(), _zone(), disk_name, string_param("sizeGb", "New size in GB")],
            resize_disk,
            CATEGORY,
        ),
        define(
            "gcloud_list_networks",
            "List VPC networks in a project.",
            [project_param()],
            list_networks,
            CATEGORY,
            "networks",
            formatted=True,
        ),
        define(
            "gcloud_get_network",
            "Get details of a VPC network.",
            [project_param(), network_name],
            get_network,
            CATEGORY,
            "network",
            formatted=True,
        ),
        define(
            "gcloud_create_network",
            "Create a VPC network.",
            [
                project_param(),
                string_param("name", "Name for the new network"),
                boolean_param("autoCreateSubnetworks", "Auto-create subnets", default=True),
            ],
            create_network,
            CATEGORY,
        ),
        define(
            "gcloud_delete_network",
            "Delete a VPC network.",
            [project_param(), string_param("networkName", "Name of the network to delete")],
            delete_network,
            CATEGORY,
        ),
        define(
            "gcloud_list_firewalls",
            "List firewall rules in a project.",
            [project_param()],
            list_firewalls,
            CATEGORY,
            "firewalls",
            formatted=True,
        ),
        define(
            "gcloud_get_firewall",
            "Get details of a firewall rule.",
            [project_param(), firewall_name],
            get_firewall,
            CATEGORY,
            "firewall",
            formatted=True,
        ),
        define(
            "gcloud_create_firewall",
            "Create a firewall rule allowing or denying traffic on a VPC network.",
            [
                project_param(),
                string_param("name", "Name for the firewall rule"),
                ToolParameter(
                    name="rules",
                    type=ToolParameterType.ARRAY,
                    description="Protocol rules, e.g. [{\"IPProtocol\": \"tcp\", \"ports\": [\"22\"]}]",
                    required=True,
                    items=firewall_rule,
                ),
                string_param("network", "VPC network name", required=False, default="default"),
                string_param(
                    "action", "Allow or deny matching traffic", required=False,
                    enum=["allow", "deny"], default="allow",
                ),
                string_param(
                    "direction", "Traffic direction", required=False,
                    enum=["INGRESS", "EGRESS"], default="INGRESS",
                ),
                ToolParameter(
                    name="sourceRanges",
                    type=ToolParameterType.ARRAY,
                    description="Source CIDR ranges (e.g., 0.0.0.0/0)",
                    items=string_param("range", "CIDR range"),
                ),
                ToolParameter(
                    name="targetTags",
                    type=ToolParameterType.ARRAY,
                    description="Instance network tags the rule applies to",
                    items=string_param("tag", "Network tag"),
                ),
                ToolParameter(
                    name="priority",
                    type=ToolParameterType.INTEGER,
                    description="Rule priority (0-65535, lower wins)",
                    minimum=0,
                    maximum=65535,
                ),
                string_param("description", "Rule description", required=False),
            ],
            create_firewall,
            CATEGORY,
        ),
        define(
            "gcloud_delete_firewall",
            "Delete a firewall rule.",
            [project_param(), string_param("firewallName", "Name of the firewall rule to delete")],
            delete_firewall,
            CATEGORY,
        ),
    ]
