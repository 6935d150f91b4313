"""
Pub/Sub tools: topics, subscriptions, publishing and pulling.

Message data crosses the tool boundary as plain text and is base64-encoded
on the wire in both directions.
"""

from typing import Any, Dict, List

from gcloud_client import GCloudClient
from gcloud_client.client import b64decode_text, b64encode_text
from gcloud_mcp.tool_registry import ToolParameter, ToolParameterType

from .base import GCloudTool, define, integer_param, items_of, mutation, project_param, string_param

CATEGORY = "pubsub"


async def list_topics(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_topics(args["projectId"]), "topics")


async def get_topic(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_topic(args["projectId"], args["topicName"])


async def create_topic(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["topicName"]
    topic = await client.create_topic(args["projectId"], name)
    return mutation(f"Topic {name} created", topic=topic)


async def delete_topic(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["topicName"]
    await client.delete_topic(args["projectId"], name)
    return mutation(f"Topic {name} deleted")


async def publish_message(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    message: Dict[str, Any] = {"data": b64encode_text(args["data"])}
    if args.get("attributes"):
        message["attributes"] = args["attributes"]

    response = await client.publish_message(args["projectId"], args["topicName"], [message])
    return mutation("Message published", messageIds=(response or {}).get("messageIds", []))


async def list_subscriptions(client: GCloudClient, args: Dict[str, Any]) -> List[Any]:
    return items_of(await client.list_subscriptions(args["projectId"]), "subscriptions")


async def get_subscription(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await client.get_subscription(args["projectId"], args["subscriptionName"])


async def create_subscription(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["subscriptionName"]
    subscription = await client.create_subscription(args["projectId"], name, args["topicName"])
    return mutation(f"Subscription {name} created", subscription=subscription)


async def delete_subscription(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    name = args["subscriptionName"]
    await client.delete_subscription(args["projectId"], name)
    return mutation(f"Subscription {name} deleted")


def _decode_received(received: Dict[str, Any]) -> Dict[str, Any]:
    message = received.get("message") or {}
    data = message.get("data")
    return {
        "ackId": received.get("ackId"),
        "messageId": message.get("messageId"),
        "data": b64decode_text(data) if data else None,
        "attributes": message.get("attributes"),
        "publishTime": message.get("publishTime"),
    }


async def pull_messages(client: GCloudClient, args: Dict[str, Any]) -> List[Dict[str, Any]]:
    response = await client.pull_messages(
        args["projectId"], args["subscriptionName"], max_messages=args.get("maxMessages") or 10
    )
    return [_decode_received(received) for received in items_of(response, "receivedMessages")]


async def acknowledge_messages(client: GCloudClient, args: Dict[str, Any]) -> Dict[str, Any]:
    ack_ids = args["ackIds"]
    await client.acknowledge_messages(args["projectId"], args["subscriptionName"], ack_ids)
    return mutation(f"{len(ack_ids)} messages acknowledged")


def pubsub_tools() -> List[GCloudTool]:
    topic_name = string_param("topicName", "Name of the topic")
    subscription_name = string_param("subscriptionName", "Name of the subscription")

    return [
        define(
            "gcloud_list_topics",
            "List Pub/Sub topics in a project.",
            [project_param()],
            list_topics,
            CATEGORY,
            "topics",
            formatted=True,
        ),
        define(
            "gcloud_get_topic",
            "Get details of a Pub/Sub topic.",
            [project_param(), topic_name],
            get_topic,
            CATEGORY,
            "topic",
            formatted=True,
        ),
        define(
            "gcloud_create_topic",
            "Create a Pub/Sub topic.",
            [project_param(), string_param("topicName", "Name for the new topic")],
            create_topic,
            CATEGORY,
        ),
        define(
            "gcloud_delete_topic",
            "Delete a Pub/Sub topic.",
            [project_param(), string_param("topicName", "Name of the topic to delete")],
            delete_topic,
            CATEGORY,
        ),
        define(
            "gcloud_publish_message",
            "Publish a text message to a Pub/Sub topic.",
            [
                project_param(),
                topic_name,
                string_param("data", "Message data"),
                ToolParameter(
                    name="attributes",
                    type=ToolParameterType.OBJECT,
                    description="Message attributes (string values)",
                ),
            ],
            publish_message,
            CATEGORY,
        ),
        define(
            "gcloud_list_subscriptions",
            "List Pub/Sub subscriptions in a project.",
            [project_param()],
            list_subscriptions,
            CATEGORY,
            "subscriptions",
            formatted=True,
        ),
        define(
            "gcloud_get_subscription",
            "Get details of a Pub/Sub subscription.",
            [project_param(), subscription_name],
            get_subscription,
            CATEGORY,
            "subscription",
            formatted=True,
        ),
        define(
            "gcloud_create_subscription",
            "Create a pull subscription on a Pub/Sub topic.",
            [
                project_param(),
                string_param("subscriptionName", "Name for the new subscription"),
                string_param("topicName", "Name of the topic to subscribe to"),
            ],
            create_subscription,
            CATEGORY,
        ),
        define(
            "gcloud_delete_subscription",
            "Delete a Pub/Sub subscription.",
            [
                project_param(),
                string_param("subscriptionName", "Name of the subscription to delete"),
            ],
            delete_subscription,
            CATEGORY,
        ),
        define(
            "gcloud_pull_messages",
            "Pull messages from a Pub/Sub subscription. Messages must be acknowledged "
            "separately with gcloud_acknowledge_messages.",
            [
                project_param(),
                subscription_name,
                integer_param(
                    "maxMessages", "Max messages to pull", minimum=1, maximum=1000, default=10
                ),
            ],
            pull_messages,
            CATEGORY,
            "messages",
            formatted=True,
        ),
        define(
            "gcloud_acknowledge_messages",
            "Acknowledge pulled Pub/Sub messages by ack ID.",
            [
                project_param(),
                subscription_name,
                ToolParameter(
                    name="ackIds",
                    type=ToolParameterType.ARRAY,
                    description="List of ack IDs to acknowledge",
                    required=True,
                    items=string_param("ackId", "Ack ID"),
                ),
            ],
            acknowledge_messages,
            CATEGORY,
        ),
    ]
