"""
Tests for the gcloud tool catalog, executed through the registry.
"""

import json

import pytest

from conftest import tool_payload
from gcloud_client import GCloudClient, TenantCredentials
from gcloud_mcp.tools import build_registry


async def _call(registry, client, name, arguments=None):
    execution = await registry.execute_tool(name, arguments or {}, client)
    assert execution.success, execution.error
    return execution.result


class TestCatalog:
    @pytest.mark.asyncio
    async def test_names_are_unique_and_prefixed(self):
        registry = await build_registry()
        names = [tool.name for tool in await registry.list_tools()]

        assert len(names) == len(set(names))
        assert all(name.startswith("gcloud_") for name in names)
        assert len(names) >= 90

    @pytest.mark.asyncio
    async def test_every_service_is_present(self):
        registry = await build_registry()

        assert await registry.get_tool_categories() == [
            "bigquery",
            "compute",
            "connection",
            "dns",
            "functions",
            "gke",
            "iam",
            "logging",
            "pubsub",
            "secretmanager",
            "sql",
            "storage",
        ]

    @pytest.mark.asyncio
    async def test_list_tools_accept_format(self):
        registry = await build_registry()
        tool = await registry.get_tool("gcloud_list_instances")

        names = [param.name for param in tool.parameters]
        assert names == ["projectId", "zone", "format"]
        assert tool.parameters[-1].enum == ["json", "markdown"]


class TestProjectResolution:
    @pytest.mark.asyncio
    async def test_defaults_to_tenant_project(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"items": [{"name": "net-1"}]})

        result = await _call(registry, gcloud, "gcloud_list_networks")

        assert tool_payload(result) == [{"name": "net-1"}]
        assert "/projects/my-project/global/networks" in str(google.last.url)

    @pytest.mark.asyncio
    async def test_explicit_project_wins(self, google, gcloud):
        registry = await build_registry()

        await _call(registry, gcloud, "gcloud_list_networks", {"projectId": "other"})

        assert "/projects/other/global/networks" in str(google.last.url)

    @pytest.mark.asyncio
    async def test_missing_project_is_error_envelope(self, google):
        registry = await build_registry()
        client = GCloudClient(TenantCredentials(access_token="t"), google.http_client())

        result = await _call(registry, client, "gcloud_list_topics")

        assert result["isError"] is True
        assert "projectId is required" in tool_payload(result)["message"]
        assert google.requests == []

    @pytest.mark.asyncio
    async def test_list_roles_without_project(self, google):
        registry = await build_registry()
        client = GCloudClient(TenantCredentials(access_token="t"), google.http_client())
        google.respond(200, {"roles": [{"name": "roles/viewer"}]})

        result = await _call(registry, client, "gcloud_list_roles")

        assert tool_payload(result) == [{"name": "roles/viewer"}]
        assert str(google.last.url) == "https://iam.googleapis.com/v1/roles"


class TestResults:
    @pytest.mark.asyncio
    async def test_empty_list(self, google, gcloud):
        registry = await build_registry()

        result = await _call(registry, gcloud, "gcloud_list_buckets")

        assert tool_payload(result) == []

    @pytest.mark.asyncio
    async def test_markdown_format(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"items": [{"name": "b1", "location": "US"}]})

        result = await _call(registry, gcloud, "gcloud_list_buckets", {"format": "markdown"})

        assert result["content"][0]["text"] == (
            "| name | location |\n| --- | --- |\n| b1 | US |"
        )

    @pytest.mark.asyncio
    async def test_api_error_envelope(self, google, gcloud):
        registry = await build_registry()
        google.respond(403)

        result = await _call(
            registry, gcloud, "gcloud_get_instance", {"zone": "z", "instanceName": "vm"}
        )

        assert result["isError"] is True
        payload = tool_payload(result)
        assert payload["code"] == "PERMISSION_DENIED"
        assert payload["statusCode"] == 403

    @pytest.mark.asyncio
    async def test_mutation_message(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "operation-1"})

        result = await _call(
            registry, gcloud, "gcloud_start_instance", {"zone": "z", "instanceName": "vm-1"}
        )

        assert tool_payload(result) == {
            "success": True,
            "message": "Instance vm-1 start initiated",
            "operation": {"name": "operation-1"},
        }

    @pytest.mark.asyncio
    async def test_invalid_arguments_fail_execution(self, gcloud):
        registry = await build_registry()

        execution = await registry.execute_tool(
            "gcloud_pull_messages", {"subscriptionName": "s", "maxMessages": 0}, gcloud
        )

        assert execution.success is False
        assert "must be >= 1" in execution.error


class TestCompute:
    @pytest.mark.asyncio
    async def test_create_instance_body(self, google, gcloud):
        registry = await build_registry()

        await _call(
            registry,
            gcloud,
            "gcloud_create_instance",
            {
                "zone": "us-central1-a",
                "name": "web-1",
                "machineType": "e2-medium",
                "sourceImage": "projects/debian-cloud/global/images/family/debian-12",
            },
        )

        body = google.last_json()
        assert body["machineType"] == "zones/us-central1-a/machineTypes/e2-medium"
        assert body["disks"][0]["boot"] is True
        assert body["networkInterfaces"][0]["network"] == "global/networks/default"

    @pytest.mark.asyncio
    async def test_disk_type_short_name_expanded(self, google, gcloud):
        registry = await build_registry()

        await _call(
            registry,
            gcloud,
            "gcloud_create_disk",
            {"zone": "z1", "name": "d", "sizeGb": "10", "type": "pd-ssd"},
        )

        assert google.last_json()["type"] == "zones/z1/diskTypes/pd-ssd"

    @pytest.mark.asyncio
    async def test_create_firewall_deny(self, google, gcloud):
        registry = await build_registry()

        await _call(
            registry,
            gcloud,
            "gcloud_create_firewall",
            {
                "name": "block-telnet",
                "rules": [{"IPProtocol": "tcp", "ports": ["23"]}],
                "action": "deny",
            },
        )

        body = google.last_json()
        assert body["denied"] == [{"IPProtocol": "tcp", "ports": ["23"]}]
        assert "allowed" not in body
        assert body["direction"] == "INGRESS"


class TestPubSub:
    @pytest.mark.asyncio
    async def test_publish_encodes_data(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"messageIds": ["42"]})

        result = await _call(
            registry,
            gcloud,
            "gcloud_publish_message",
            {"topicName": "events", "data": "hello", "attributes": {"k": "v"}},
        )

        assert google.last_json() == {
            "messages": [{"data": "aGVsbG8=", "attributes": {"k": "v"}}]
        }
        assert tool_payload(result)["messageIds"] == ["42"]

    @pytest.mark.asyncio
    async def test_pull_decodes_data(self, google, gcloud):
        registry = await build_registry()
        google.respond(
            200,
            {
                "receivedMessages": [
                    {
                        "ackId": "ack-1",
                        "message": {
                            "data": "aGVsbG8=",
                            "messageId": "42",
                            "publishTime": "2024-01-01T00:00:00Z",
                        },
                    }
                ]
            },
        )

        result = await _call(registry, gcloud, "gcloud_pull_messages", {"subscriptionName": "s"})

        assert google.last_json() == {"maxMessages": 10}
        assert tool_payload(result) == [
            {
                "ackId": "ack-1",
                "messageId": "42",
                "data": "hello",
                "attributes": None,
                "publishTime": "2024-01-01T00:00:00Z",
            }
        ]

    @pytest.mark.asyncio
    async def test_acknowledge_counts(self, google, gcloud):
        registry = await build_registry()

        result = await _call(
            registry,
            gcloud,
            "gcloud_acknowledge_messages",
            {"subscriptionName": "s", "ackIds": ["a", "b", "c"]},
        )

        assert tool_payload(result)["message"] == "3 messages acknowledged"


class TestSecrets:
    @pytest.mark.asyncio
    async def test_access_decodes_payload(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "v/1", "payload": {"data": "czNjcjN0"}})

        result = await _call(
            registry, gcloud, "gcloud_access_secret_version", {"secretName": "api-key"}
        )

        assert tool_payload(result) == {"secretName": "api-key", "version": "latest", "data": "s3cr3t"}
        assert str(google.last.url).endswith("/secrets/api-key/versions/latest:access")


class TestIam:
    @pytest.mark.asyncio
    async def test_set_policy_preserves_etag_and_version(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"version": 3, "etag": "BwX1", "bindings": []})
        google.respond(200, {"version": 3, "etag": "BwX2"})
        bindings = [{"role": "roles/viewer", "members": ["user:a@example.com"]}]

        result = await _call(
            registry, gcloud, "gcloud_set_project_iam_policy", {"bindings": bindings}
        )

        assert [str(r.url).rsplit(":", 1)[-1] for r in google.requests] == [
            "getIamPolicy",
            "setIamPolicy",
        ]
        assert google.last_json() == {
            "policy": {"bindings": bindings, "version": 3, "etag": "BwX1"}
        }
        assert tool_payload(result)["message"] == "IAM policy updated"

    @pytest.mark.asyncio
    async def test_binding_without_members_rejected(self, gcloud):
        registry = await build_registry()

        execution = await registry.execute_tool(
            "gcloud_set_project_iam_policy", {"bindings": [{"role": "roles/viewer"}]}, gcloud
        )

        assert execution.success is False
        assert "members" in execution.error


class TestLogging:
    @pytest.mark.asyncio
    async def test_write_text_entry(self, google, gcloud):
        registry = await build_registry()

        result = await _call(
            registry,
            gcloud,
            "gcloud_write_log_entry",
            {"logName": "app", "message": "deployed", "severity": "WARNING"},
        )

        body = google.last_json()
        assert body["logName"] == "projects/my-project/logs/app"
        assert body["entries"] == [{"severity": "WARNING", "textPayload": "deployed"}]
        assert tool_payload(result)["message"] == "Log entry written"


class TestConnection:
    @pytest.mark.asyncio
    async def test_connection_tool(self, google, gcloud):
        registry = await build_registry()

        result = await _call(registry, gcloud, "gcloud_test_connection")

        assert "isError" not in result
        assert json.loads(result["content"][0]["text"])["connected"] is True


class TestBigQuery:
    @pytest.mark.asyncio
    async def test_list_returns_items_only(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"datasets": [{"id": "my-project:sales"}], "nextPageToken": "t-2"})

        result = await _call(registry, gcloud, "gcloud_list_datasets")

        assert tool_payload(result) == [{"id": "my-project:sales"}]

    @pytest.mark.asyncio
    async def test_create_dataset_reference(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"id": "my-project:sales"})

        result = await _call(
            registry, gcloud, "gcloud_create_dataset", {"datasetId": "sales", "location": "EU"}
        )

        assert google.last.method == "POST"
        assert str(google.last.url).endswith("/bigquery/v2/projects/my-project/datasets")
        assert google.last_json() == {
            "datasetReference": {"datasetId": "sales", "projectId": "my-project"},
            "location": "EU",
        }
        assert tool_payload(result) == {
            "success": True,
            "message": "Dataset sales created",
            "dataset": {"id": "my-project:sales"},
        }

    @pytest.mark.asyncio
    async def test_create_dataset_without_location(self, google, gcloud):
        registry = await build_registry()

        await _call(registry, gcloud, "gcloud_create_dataset", {"datasetId": "sales"})

        assert "location" not in google.last_json()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments, expected", [({}, "false"), ({"deleteContents": True}, "true")])
    async def test_delete_dataset_contents_flag(self, google, gcloud, arguments, expected):
        registry = await build_registry()
        google.respond(204)

        result = await _call(
            registry, gcloud, "gcloud_delete_dataset", {"datasetId": "sales", **arguments}
        )

        assert google.last.method == "DELETE"
        assert google.last.url.params["deleteContents"] == expected
        assert tool_payload(result) == {"success": True, "message": "Dataset sales deleted"}

    @pytest.mark.asyncio
    async def test_query_body(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"jobComplete": True, "rows": []})

        result = await _call(
            registry, gcloud, "gcloud_bigquery_query", {"query": "SELECT 1"}
        )

        assert google.last_json() == {"query": "SELECT 1", "useLegacySql": False}
        assert tool_payload(result) == {"jobComplete": True, "rows": []}


class TestSql:
    @pytest.mark.asyncio
    async def test_create_database(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "op-1", "operationType": "CREATE_DATABASE"})

        result = await _call(
            registry,
            gcloud,
            "gcloud_create_database",
            {"instanceName": "db-1", "databaseName": "orders"},
        )

        assert google.last.method == "POST"
        assert str(google.last.url).endswith("/projects/my-project/instances/db-1/databases")
        assert google.last_json() == {"name": "orders"}
        assert tool_payload(result) == {
            "success": True,
            "message": "Database orders creation initiated",
            "operation": {"name": "op-1", "operationType": "CREATE_DATABASE"},
        }

    @pytest.mark.asyncio
    async def test_restart_instance(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "op-2"})

        result = await _call(registry, gcloud, "gcloud_restart_sql_instance", {"instanceName": "db-1"})

        assert google.last.method == "POST"
        assert str(google.last.url) == (
            "https://sqladmin.googleapis.com/sql/v1beta4/projects/my-project/instances/db-1/restart"
        )
        assert tool_payload(result) == {
            "success": True,
            "message": "Instance db-1 restart initiated",
            "operation": {"name": "op-2"},
        }


class TestDns:
    @pytest.mark.asyncio
    async def test_create_zone_defaults(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "corp", "id": "123"})

        result = await _call(
            registry, gcloud, "gcloud_create_managed_zone", {"name": "corp", "dnsName": "corp.example."}
        )

        assert google.last_json() == {
            "name": "corp",
            "dnsName": "corp.example.",
            "description": "",
            "visibility": "public",
        }
        assert tool_payload(result)["message"] == "Managed zone corp created"
        assert tool_payload(result)["zone"] == {"name": "corp", "id": "123"}

    @pytest.mark.asyncio
    async def test_create_zone_rejects_unknown_visibility(self, google, gcloud):
        registry = await build_registry()

        execution = await registry.execute_tool(
            "gcloud_create_managed_zone",
            {"name": "corp", "dnsName": "corp.example.", "visibility": "internal"},
            gcloud,
        )

        assert execution.success is False
        assert google.requests == []

    @pytest.mark.asyncio
    async def test_create_record_set_body(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "www.corp.example.", "type": "A"})

        result = await _call(
            registry,
            gcloud,
            "gcloud_create_resource_record_set",
            {
                "zoneName": "corp",
                "name": "www.corp.example.",
                "type": "A",
                "ttl": 300,
                "rrdatas": ["10.0.0.1"],
            },
        )

        assert google.last.method == "POST"
        assert str(google.last.url).endswith("/projects/my-project/managedZones/corp/rrsets")
        assert google.last_json() == {
            "name": "www.corp.example.",
            "type": "A",
            "ttl": 300,
            "rrdatas": ["10.0.0.1"],
        }
        assert tool_payload(result)["message"] == "Resource record set created"

    @pytest.mark.asyncio
    async def test_delete_record_set_path(self, google, gcloud):
        registry = await build_registry()
        google.respond(204)

        result = await _call(
            registry,
            gcloud,
            "gcloud_delete_resource_record_set",
            {"zoneName": "corp", "name": "www.corp.example.", "type": "CNAME"},
        )

        assert google.last.method == "DELETE"
        assert str(google.last.url).endswith("/managedZones/corp/rrsets/www.corp.example./CNAME")
        assert tool_payload(result) == {
            "success": True,
            "message": "Record www.corp.example. (CNAME) deleted",
        }


class TestGke:
    @pytest.mark.asyncio
    async def test_delete_cluster(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "operation-9", "operationType": "DELETE_CLUSTER"})

        result = await _call(
            registry,
            gcloud,
            "gcloud_delete_cluster",
            {"location": "us-central1", "clusterName": "prod"},
        )

        assert google.last.method == "DELETE"
        assert str(google.last.url) == (
            "https://container.googleapis.com/v1/projects/my-project/locations/us-central1/clusters/prod"
        )
        assert tool_payload(result) == {
            "success": True,
            "message": "Cluster prod deletion initiated",
            "operation": {"name": "operation-9", "operationType": "DELETE_CLUSTER"},
        }

    @pytest.mark.asyncio
    async def test_list_node_pools(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"nodePools": [{"name": "default-pool"}]})

        result = await _call(
            registry, gcloud, "gcloud_list_node_pools", {"location": "-", "clusterName": "prod"}
        )

        assert tool_payload(result) == [{"name": "default-pool"}]
        assert str(google.last.url).endswith("/locations/-/clusters/prod/nodePools")


class TestServerless:
    @pytest.mark.asyncio
    async def test_list_functions(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"functions": [{"name": "hook", "state": "ACTIVE"}]})

        result = await _call(registry, gcloud, "gcloud_list_functions", {"location": "us-central1"})

        assert tool_payload(result) == [{"name": "hook", "state": "ACTIVE"}]
        assert str(google.last.url).startswith("https://cloudfunctions.googleapis.com/v2/")
        assert str(google.last.url).endswith("/projects/my-project/locations/us-central1/functions")

    @pytest.mark.asyncio
    async def test_delete_function(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "op-f"})

        result = await _call(
            registry,
            gcloud,
            "gcloud_delete_function",
            {"location": "us-central1", "functionName": "hook"},
        )

        assert google.last.method == "DELETE"
        assert str(google.last.url).endswith("/locations/us-central1/functions/hook")
        assert tool_payload(result) == {
            "success": True,
            "message": "Function hook deletion initiated",
            "operation": {"name": "op-f"},
        }

    @pytest.mark.asyncio
    async def test_delete_cloud_run_service(self, google, gcloud):
        registry = await build_registry()
        google.respond(200, {"name": "op-r"})

        result = await _call(
            registry,
            gcloud,
            "gcloud_delete_cloud_run_service",
            {"location": "europe-west1", "serviceName": "api"},
        )

        assert google.last.method == "DELETE"
        assert str(google.last.url) == (
            "https://run.googleapis.com/v2/projects/my-project/locations/europe-west1/services/api"
        )
        assert tool_payload(result)["message"] == "Service api deletion initiated"
