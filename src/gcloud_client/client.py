"""
Google Cloud Platform REST client.

Handles all HTTP communication with Google Cloud APIs. Every method issues
exactly one request to a fixed endpoint and returns the decoded JSON body
unmodified; nextPageToken values are passed through, never followed.

Credentials are supplied per instance (one instance per tenant request), while
the underlying httpx.AsyncClient is shared so connections are pooled across
tenants.
"""

import base64
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from common.logging import TimedLogger, get_logger
from .credentials import TenantCredentials, validate_credentials
from .errors import GCloudApiError, raise_for_status

logger = get_logger(__name__)

API_URLS = {
    "compute": "https://compute.googleapis.com/compute/v1",
    "storage": "https://storage.googleapis.com/storage/v1",
    "functions": "https://cloudfunctions.googleapis.com/v2",
    "run": "https://run.googleapis.com/v2",
    "bigquery": "https://bigquery.googleapis.com/bigquery/v2",
    "pubsub": "https://pubsub.googleapis.com/v1",
    "sql": "https://sqladmin.googleapis.com/sql/v1beta4",
    "iam": "https://iam.googleapis.com/v1",
    "secretmanager": "https://secretmanager.googleapis.com/v1",
    "dns": "https://dns.googleapis.com/dns/v1",
    "container": "https://container.googleapis.com/v1",
    "logging": "https://logging.googleapis.com/v2",
    "resourcemanager": "https://cloudresourcemanager.googleapis.com/v1",
}


def _segment(value: str) -> str:
    """Encode a value as a single URL path segment."""
    return quote(value, safe="")


def b64encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def b64decode_text(data: str) -> str:
    return base64.b64decode(data).decode("utf-8", errors="replace")


class GCloudClient:
    """Async client for Google Cloud REST APIs bound to one tenant's credentials."""

    def __init__(
        self,
        credentials: TenantCredentials,
        http: httpx.AsyncClient,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.credentials = credentials
        self.http = http
        self.timeout = timeout
        self.user_agent = user_agent

    def _auth_headers(self) -> Dict[str, str]:
        validate_credentials(self.credentials)
        headers = {
            "Authorization": f"Bearer {self.credentials.access_token}",
            "Content-Type": "application/json",
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Issue one authenticated request and decode the response.

        Returns:
            Parsed JSON body, or None for 204 / empty responses

        Raises:
            GCloudApiError (or a subclass) for any non-2xx response
        """
        headers = self._auth_headers()
        kwargs: Dict[str, Any] = {"headers": headers, "params": params, "json": json}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        with TimedLogger(logger, "gcloud_api_request", method=method, url=url):
            response = await self.http.request(method, url, **kwargs)

        raise_for_status(response)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GCloudApiError(
                f"Invalid JSON in response: {e}", status_code=response.status_code
            ) from e

    # =========================================================================
    # Connection
    # =========================================================================

    async def test_connection(self) -> Dict[str, Any]:
        """Check access to the tenant's default project. Never raises."""
        project_id = self.credentials.project_id
        if not project_id:
            return {
                "connected": False,
                "message": "No project ID provided. Set X-GCloud-Project-ID header.",
            }
        try:
            await self._request("GET", f"{API_URLS['compute']}/projects/{project_id}")
        except GCloudApiError as e:
            return {"connected": False, "message": e.message}
        except httpx.HTTPError as e:
            return {"connected": False, "message": str(e) or "Connection failed"}
        return {
            "connected": True,
            "message": f"Successfully connected to GCP project: {project_id}",
        }

    # =========================================================================
    # Compute Engine
    # =========================================================================

    def _zone_url(self, project_id: str, zone: str, collection: str) -> str:
        return f"{API_URLS['compute']}/projects/{project_id}/zones/{zone}/{collection}"

    def _global_url(self, project_id: str, collection: str) -> str:
        return f"{API_URLS['compute']}/projects/{project_id}/global/{collection}"

    async def list_instances(self, project_id: str, zone: str) -> Dict[str, Any]:
        return await self._request("GET", self._zone_url(project_id, zone, "instances"))

    async def get_instance(self, project_id: str, zone: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'instances')}/{instance_name}"
        return await self._request("GET", url)

    async def create_instance(
        self, project_id: str, zone: str, instance: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", self._zone_url(project_id, zone, "instances"), json=instance
        )

    async def delete_instance(
        self, project_id: str, zone: str, instance_name: str
    ) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'instances')}/{instance_name}"
        return await self._request("DELETE", url)

    async def start_instance(self, project_id: str, zone: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'instances')}/{instance_name}/start"
        return await self._request("POST", url)

    async def stop_instance(self, project_id: str, zone: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'instances')}/{instance_name}/stop"
        return await self._request("POST", url)

    async def reset_instance(self, project_id: str, zone: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'instances')}/{instance_name}/reset"
        return await self._request("POST", url)

    async def list_disks(self, project_id: str, zone: str) -> Dict[str, Any]:
        return await self._request("GET", self._zone_url(project_id, zone, "disks"))

    async def get_disk(self, project_id: str, zone: str, disk_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._zone_url(project_id, zone, 'disks')}/{disk_name}")

    async def create_disk(self, project_id: str, zone: str, disk: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", self._zone_url(project_id, zone, "disks"), json=disk)

    async def delete_disk(self, project_id: str, zone: str, disk_name: str) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'disks')}/{disk_name}"
        return await self._request("DELETE", url)

    async def resize_disk(
        self, project_id: str, zone: str, disk_name: str, size_gb: str
    ) -> Dict[str, Any]:
        url = f"{self._zone_url(project_id, zone, 'disks')}/{disk_name}/resize"
        return await self._request("POST", url, json={"sizeGb": size_gb})

    async def list_networks(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", self._global_url(project_id, "networks"))

    async def get_network(self, project_id: str, network_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._global_url(project_id, 'networks')}/{network_name}")

    async def create_network(self, project_id: str, network: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", self._global_url(project_id, "networks"), json=network)

    async def delete_network(self, project_id: str, network_name: str) -> Dict[str, Any]:
        url = f"{self._global_url(project_id, 'networks')}/{network_name}"
        return await self._request("DELETE", url)

    async def list_firewalls(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", self._global_url(project_id, "firewalls"))

    async def get_firewall(self, project_id: str, firewall_name: str) -> Dict[str, Any]:
        url = f"{self._global_url(project_id, 'firewalls')}/{firewall_name}"
        return await self._request("GET", url)

    async def create_firewall(self, project_id: str, firewall: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", self._global_url(project_id, "firewalls"), json=firewall)

    async def delete_firewall(self, project_id: str, firewall_name: str) -> Dict[str, Any]:
        url = f"{self._global_url(project_id, 'firewalls')}/{firewall_name}"
        return await self._request("DELETE", url)

    # =========================================================================
    # Cloud Storage
    # =========================================================================

    async def list_buckets(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['storage']}/b", params={"project": project_id})

    async def get_bucket(self, bucket_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['storage']}/b/{bucket_name}")

    async def create_bucket(self, project_id: str, bucket: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request(
            "POST", f"{API_URLS['storage']}/b", params={"project": project_id}, json=bucket
        )

    async def delete_bucket(self, bucket_name: str) -> None:
        await self._request("DELETE", f"{API_URLS['storage']}/b/{bucket_name}")

    async def list_objects(
        self, bucket_name: str, prefix: Optional[str] = None, max_results: Optional[int] = None
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if prefix:
            params["prefix"] = prefix
        if max_results:
            params["maxResults"] = str(max_results)
        return await self._request(
            "GET", f"{API_URLS['storage']}/b/{bucket_name}/o", params=params or None
        )

    async def get_object(self, bucket_name: str, object_name: str) -> Dict[str, Any]:
        url = f"{API_URLS['storage']}/b/{bucket_name}/o/{_segment(object_name)}"
        return await self._request("GET", url)

    async def delete_object(self, bucket_name: str, object_name: str) -> None:
        url = f"{API_URLS['storage']}/b/{bucket_name}/o/{_segment(object_name)}"
        await self._request("DELETE", url)

    async def copy_object(
        self, source_bucket: str, source_object: str, dest_bucket: str, dest_object: str
    ) -> Dict[str, Any]:
        url = (
            f"{API_URLS['storage']}/b/{source_bucket}/o/{_segment(source_object)}"
            f"/copyTo/b/{dest_bucket}/o/{_segment(dest_object)}"
        )
        return await self._request("POST", url)

    # =========================================================================
    # Cloud Functions (v2)
    # =========================================================================

    def _functions_url(self, project_id: str, location: str) -> str:
        return f"{API_URLS['functions']}/projects/{project_id}/locations/{location}/functions"

    async def list_functions(self, project_id: str, location: str) -> Dict[str, Any]:
        return await self._request("GET", self._functions_url(project_id, location))

    async def get_function(
        self, project_id: str, location: str, function_name: str
    ) -> Dict[str, Any]:
        return await self._request(
            "GET", f"{self._functions_url(project_id, location)}/{function_name}"
        )

    async def delete_function(
        self, project_id: str, location: str, function_name: str
    ) -> Dict[str, Any]:
        return await self._request(
            "DELETE", f"{self._functions_url(project_id, location)}/{function_name}"
        )

    # =========================================================================
    # Cloud Run (v2)
    # =========================================================================

    def _run_url(self, project_id: str, location: str) -> str:
        return f"{API_URLS['run']}/projects/{project_id}/locations/{location}/services"

    async def list_cloud_run_services(self, project_id: str, location: str) -> Dict[str, Any]:
        return await self._request("GET", self._run_url(project_id, location))

    async def get_cloud_run_service(
        self, project_id: str, location: str, service_name: str
    ) -> Dict[str, Any]:
        return await self._request("GET", f"{self._run_url(project_id, location)}/{service_name}")

    async def delete_cloud_run_service(
        self, project_id: str, location: str, service_name: str
    ) -> Dict[str, Any]:
        return await self._request(
            "DELETE", f"{self._run_url(project_id, location)}/{service_name}"
        )

    # =========================================================================
    # BigQuery
    # =========================================================================

    async def list_datasets(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['bigquery']}/projects/{project_id}/datasets")

    async def get_dataset(self, project_id: str, dataset_id: str) -> Dict[str, Any]:
        url = f"{API_URLS['bigquery']}/projects/{project_id}/datasets/{dataset_id}"
        return await self._request("GET", url)

    async def create_dataset(self, project_id: str, dataset: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{API_URLS['bigquery']}/projects/{project_id}/datasets"
        return await self._request("POST", url, json=dataset)

    async def delete_dataset(
        self, project_id: str, dataset_id: str, delete_contents: bool = False
    ) -> None:
        url = f"{API_URLS['bigquery']}/projects/{project_id}/datasets/{dataset_id}"
        await self._request(
            "DELETE", url, params={"deleteContents": "true" if delete_contents else "false"}
        )

    async def list_tables(self, project_id: str, dataset_id: str) -> Dict[str, Any]:
        url = f"{API_URLS['bigquery']}/projects/{project_id}/datasets/{dataset_id}/tables"
        return await self._request("GET", url)

    async def get_table(self, project_id: str, dataset_id: str, table_id: str) -> Dict[str, Any]:
        url = (
            f"{API_URLS['bigquery']}/projects/{project_id}/datasets/{dataset_id}/tables/{table_id}"
        )
        return await self._request("GET", url)

    async def run_query(
        self, project_id: str, query: str, use_legacy_sql: bool = False
    ) -> Dict[str, Any]:
        url = f"{API_URLS['bigquery']}/projects/{project_id}/queries"
        return await self._request("POST", url, json={"query": query, "useLegacySql": use_legacy_sql})

    # =========================================================================
    # Pub/Sub
    # =========================================================================

    def _topic_url(self, project_id: str, topic_name: str) -> str:
        return f"{API_URLS['pubsub']}/projects/{project_id}/topics/{topic_name}"

    def _subscription_url(self, project_id: str, subscription_name: str) -> str:
        return f"{API_URLS['pubsub']}/projects/{project_id}/subscriptions/{subscription_name}"

    async def list_topics(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['pubsub']}/projects/{project_id}/topics")

    async def get_topic(self, project_id: str, topic_name: str) -> Dict[str, Any]:
        return await self._request("GET", self._topic_url(project_id, topic_name))

    async def create_topic(self, project_id: str, topic_name: str) -> Dict[str, Any]:
        return await self._request("PUT", self._topic_url(project_id, topic_name))

    async def delete_topic(self, project_id: str, topic_name: str) -> None:
        await self._request("DELETE", self._topic_url(project_id, topic_name))

    async def publish_message(
        self, project_id: str, topic_name: str, messages: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        url = f"{self._topic_url(project_id, topic_name)}:publish"
        return await self._request("POST", url, json={"messages": messages})

    async def list_subscriptions(self, project_id: str) -> Dict[str, Any]:
        url = f"{API_URLS['pubsub']}/projects/{project_id}/subscriptions"
        return await self._request("GET", url)

    async def get_subscription(self, project_id: str, subscription_name: str) -> Dict[str, Any]:
        return await self._request("GET", self._subscription_url(project_id, subscription_name))

    async def create_subscription(
        self, project_id: str, subscription_name: str, topic_name: str
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            self._subscription_url(project_id, subscription_name),
            json={"topic": f"projects/{project_id}/topics/{topic_name}"},
        )

    async def delete_subscription(self, project_id: str, subscription_name: str) -> None:
        await self._request("DELETE", self._subscription_url(project_id, subscription_name))

    async def pull_messages(
        self, project_id: str, subscription_name: str, max_messages: int = 10
    ) -> Dict[str, Any]:
        url = f"{self._subscription_url(project_id, subscription_name)}:pull"
        return await self._request("POST", url, json={"maxMessages": max_messages})

    async def acknowledge_messages(
        self, project_id: str, subscription_name: str, ack_ids: List[str]
    ) -> None:
        url = f"{self._subscription_url(project_id, subscription_name)}:acknowledge"
        await self._request("POST", url, json={"ackIds": ack_ids})

    # =========================================================================
    # Cloud SQL
    # =========================================================================

    def _sql_instance_url(self, project_id: str, instance_name: str) -> str:
        return f"{API_URLS['sql']}/projects/{project_id}/instances/{instance_name}"

    async def list_sql_instances(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['sql']}/projects/{project_id}/instances")

    async def get_sql_instance(self, project_id: str, instance_name: str) -> Dict[str, Any]:
        return await self._request("GET", self._sql_instance_url(project_id, instance_name))

    async def delete_sql_instance(self, project_id: str, instance_name: str) -> Dict[str, Any]:
        return await self._request("DELETE", self._sql_instance_url(project_id, instance_name))

    async def restart_sql_instance(self, project_id: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._sql_instance_url(project_id, instance_name)}/restart"
        return await self._request("POST", url)

    async def list_databases(self, project_id: str, instance_name: str) -> Dict[str, Any]:
        url = f"{self._sql_instance_url(project_id, instance_name)}/databases"
        return await self._request("GET", url)

    async def get_database(
        self, project_id: str, instance_name: str, database_name: str
    ) -> Dict[str, Any]:
        url = f"{self._sql_instance_url(project_id, instance_name)}/databases/{database_name}"
        return await self._request("GET", url)

    async def create_database(
        self, project_id: str, instance_name: str, database_name: str
    ) -> Dict[str, Any]:
        url = f"{self._sql_instance_url(project_id, instance_name)}/databases"
        return await self._request("POST", url, json={"name": database_name})

    async def delete_database(
        self, project_id: str, instance_name: str, database_name: str
    ) -> Dict[str, Any]:
        url = f"{self._sql_instance_url(project_id, instance_name)}/databases/{database_name}"
        return await self._request("DELETE", url)

    # =========================================================================
    # IAM
    # =========================================================================

    async def list_service_accounts(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['iam']}/projects/{project_id}/serviceAccounts")

    async def get_service_account(self, project_id: str, email: str) -> Dict[str, Any]:
        url = f"{API_URLS['iam']}/projects/{project_id}/serviceAccounts/{email}"
        return await self._request("GET", url)

    async def create_service_account(
        self, project_id: str, account_id: str, display_name: Optional[str] = None
    ) -> Dict[str, Any]:
        service_account: Dict[str, Any] = {}
        if display_name:
            service_account["displayName"] = display_name
        return await self._request(
            "POST",
            f"{API_URLS['iam']}/projects/{project_id}/serviceAccounts",
            json={"accountId": account_id, "serviceAccount": service_account},
        )

    async def delete_service_account(self, project_id: str, email: str) -> None:
        await self._request("DELETE", f"{API_URLS['iam']}/projects/{project_id}/serviceAccounts/{email}")

    async def get_project_iam_policy(self, project_id: str) -> Dict[str, Any]:
        url = f"{API_URLS['resourcemanager']}/projects/{project_id}:getIamPolicy"
        return await self._request("POST", url, json={})

    async def set_project_iam_policy(self, project_id: str, policy: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{API_URLS['resourcemanager']}/projects/{project_id}:setIamPolicy"
        return await self._request("POST", url, json={"policy": policy})

    async def list_roles(self, project_id: Optional[str] = None) -> Dict[str, Any]:
        if project_id:
            return await self._request("GET", f"{API_URLS['iam']}/projects/{project_id}/roles")
        return await self._request("GET", f"{API_URLS['iam']}/roles")

    # =========================================================================
    # Secret Manager
    # =========================================================================

    def _secret_url(self, project_id: str, secret_name: str) -> str:
        return f"{API_URLS['secretmanager']}/projects/{project_id}/secrets/{secret_name}"

    async def list_secrets(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['secretmanager']}/projects/{project_id}/secrets")

    async def get_secret(self, project_id: str, secret_name: str) -> Dict[str, Any]:
        return await self._request("GET", self._secret_url(project_id, secret_name))

    async def create_secret(
        self, project_id: str, secret_id: str, replication: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"{API_URLS['secretmanager']}/projects/{project_id}/secrets",
            params={"secretId": secret_id},
            json={"replication": replication or {"automatic": {}}},
        )

    async def delete_secret(self, project_id: str, secret_name: str) -> None:
        await self._request("DELETE", self._secret_url(project_id, secret_name))

    async def list_secret_versions(self, project_id: str, secret_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._secret_url(project_id, secret_name)}/versions")

    async def access_secret_version(
        self, project_id: str, secret_name: str, version: str = "latest"
    ) -> Dict[str, Any]:
        url = f"{self._secret_url(project_id, secret_name)}/versions/{version}:access"
        return await self._request("GET", url)

    async def add_secret_version(
        self, project_id: str, secret_name: str, payload: str
    ) -> Dict[str, Any]:
        url = f"{self._secret_url(project_id, secret_name)}:addVersion"
        return await self._request("POST", url, json={"payload": {"data": b64encode_text(payload)}})

    # =========================================================================
    # Cloud DNS
    # =========================================================================

    def _zones_url(self, project_id: str) -> str:
        return f"{API_URLS['dns']}/projects/{project_id}/managedZones"

    async def list_managed_zones(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", self._zones_url(project_id))

    async def get_managed_zone(self, project_id: str, zone_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._zones_url(project_id)}/{zone_name}")

    async def create_managed_zone(self, project_id: str, zone: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", self._zones_url(project_id), json=zone)

    async def delete_managed_zone(self, project_id: str, zone_name: str) -> None:
        await self._request("DELETE", f"{self._zones_url(project_id)}/{zone_name}")

    async def list_resource_record_sets(self, project_id: str, zone_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._zones_url(project_id)}/{zone_name}/rrsets")

    async def create_resource_record_set(
        self, project_id: str, zone_name: str, rrset: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", f"{self._zones_url(project_id)}/{zone_name}/rrsets", json=rrset
        )

    async def delete_resource_record_set(
        self, project_id: str, zone_name: str, name: str, record_type: str
    ) -> None:
        url = f"{self._zones_url(project_id)}/{zone_name}/rrsets/{name}/{record_type}"
        await self._request("DELETE", url)

    # =========================================================================
    # GKE (Kubernetes Engine)
    # =========================================================================

    def _clusters_url(self, project_id: str, location: str) -> str:
        return f"{API_URLS['container']}/projects/{project_id}/locations/{location}/clusters"

    async def list_clusters(self, project_id: str, location: str) -> Dict[str, Any]:
        return await self._request("GET", self._clusters_url(project_id, location))

    async def get_cluster(self, project_id: str, location: str, cluster_name: str) -> Dict[str, Any]:
        return await self._request("GET", f"{self._clusters_url(project_id, location)}/{cluster_name}")

    async def delete_cluster(
        self, project_id: str, location: str, cluster_name: str
    ) -> Dict[str, Any]:
        return await self._request(
            "DELETE", f"{self._clusters_url(project_id, location)}/{cluster_name}"
        )

    async def list_node_pools(
        self, project_id: str, location: str, cluster_name: str
    ) -> Dict[str, Any]:
        url = f"{self._clusters_url(project_id, location)}/{cluster_name}/nodePools"
        return await self._request("GET", url)

    async def get_node_pool(
        self, project_id: str, location: str, cluster_name: str, node_pool_name: str
    ) -> Dict[str, Any]:
        url = f"{self._clusters_url(project_id, location)}/{cluster_name}/nodePools/{node_pool_name}"
        return await self._request("GET", url)

    # =========================================================================
    # Cloud Logging
    # =========================================================================

    async def list_log_entries(
        self, project_id: str, filter: Optional[str] = None, page_size: int = 100
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "resourceNames": [f"projects/{project_id}"],
            "pageSize": page_size,
            "orderBy": "timestamp desc",
        }
        if filter:
            body["filter"] = filter
        return await self._request("POST", f"{API_URLS['logging']}/entries:list", json=body)

    async def write_log_entries(
        self, project_id: str, log_name: str, entries: List[Dict[str, Any]]
    ) -> None:
        await self._request(
            "POST",
            f"{API_URLS['logging']}/entries:write",
            json={
                "logName": f"projects/{project_id}/logs/{_segment(log_name)}",
                "resource": {"type": "global"},
                "entries": entries,
            },
        )

    async def list_logs(self, project_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"{API_URLS['logging']}/projects/{project_id}/logs")
