# tests/conftest.py

from unittest.mock import AsyncMock, MagicMock

import pytest
from kubernetes_asyncio import client

from infraresize.models.machine_pool import MachinePool


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Autouse fixture keeping the configuration predictable and isolated from
    the operator's environment.
    """
    monkeypatch.setenv("OCM_TOKEN", "test-token")
    monkeypatch.delenv("INSTANCE_CATALOG_PATH", raising=False)


@pytest.fixture
def machine_pool_dict():
    """
    Factory for raw MachinePool objects as returned by the custom objects API,
    including the server-assigned fields.
    """

    def _make(
        name="mycluster-infra",
        namespace="uhc-production-abc123",
        pool_name="infra",
        replicas=3,
        provider="aws",
        instance_type="m5.xlarge",
    ):
        platform = {provider: {"type": instance_type}} if provider else {}
        if provider == "aws":
            platform["aws"]["zones"] = ["us-east-1a", "us-east-1b", "us-east-1c"]
            platform["aws"]["rootVolume"] = {"iops": 0, "size": 300, "type": "gp3"}
        pool = {
            "apiVersion": "hive.openshift.io/v1",
            "kind": "MachinePool",
            "metadata": {
                "name": name,
                "namespace": namespace,
                "creationTimestamp": "2024-01-02T03:04:05Z",
                "finalizers": ["hive.openshift.io/remotemachineset"],
                "resourceVersion": "123456",
                "generation": 4,
                "selfLink": f"/apis/hive.openshift.io/v1/namespaces/{namespace}/machinepools/{name}",
                "uid": "0f8e1b7a-1111-2222-3333-444455556666",
                "labels": {"api.openshift.com/managed": "true"},
            },
            "spec": {
                "clusterDeploymentRef": {"name": "mycluster"},
                "name": pool_name,
                "replicas": replicas,
                "platform": platform,
                "labels": {"node-role.kubernetes.io/infra": ""},
                "taints": [{"effect": "NoSchedule", "key": "node-role.kubernetes.io/infra"}],
            },
            "status": {"replicas": replicas or 0, "machineSets": [{"name": f"{name}-us-east-1a"}]},
        }
        if replicas is None:
            # Autoscaling pools carry min/max bounds instead of a replica count.
            del pool["spec"]["replicas"]
            pool["spec"]["autoscaling"] = {"minReplicas": 3, "maxReplicas": 6}
        return pool

    return _make


@pytest.fixture
def machine_pool(machine_pool_dict):
    """Factory for parsed MachinePool models."""

    def _make(**kwargs):
        return MachinePool.model_validate(machine_pool_dict(**kwargs))

    return _make


@pytest.fixture
def make_node():
    """Factory for V1Node objects with an optional Ready condition."""

    def _make(name, ready=True):
        conditions = [client.V1NodeCondition(type="MemoryPressure", status="False")]
        if ready is not None:
            conditions.append(client.V1NodeCondition(type="Ready", status="True" if ready else "False"))
        return client.V1Node(
            metadata=client.V1ObjectMeta(name=name, labels={"node-role.kubernetes.io/infra": ""}),
            status=client.V1NodeStatus(conditions=conditions),
        )

    return _make


@pytest.fixture
def core_api():
    """A CoreV1Api stand-in whose list calls are awaitable."""
    api = MagicMock(spec=client.CoreV1Api)
    api.list_node = AsyncMock()
    api.list_namespace = AsyncMock()
    return api


@pytest.fixture
def custom_api():
    """A CustomObjectsApi stand-in whose calls are awaitable."""
    api = MagicMock(spec=client.CustomObjectsApi)
    api.list_namespaced_custom_object = AsyncMock()
    api.get_namespaced_custom_object = AsyncMock()
    api.create_namespaced_custom_object = AsyncMock()
    api.delete_namespaced_custom_object = AsyncMock()
    return api
