import copy

import pytest
from kubernetes.client.rest import ApiException

from opencli.modules.dbcluster import PlaygroundDefaults


def _cluster(name="mycluster", namespace="default", instances=1, labels=None, **overrides):
    doc = {
        "apiVersion": "mysql.oracle.com/v2",
        "kind": "InnoDBCluster",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"version": "8.0.30", "instances": instances, "baseServerId": 1, "secretName": "s1"},
        "status": {"createTime": "t0", "cluster": {"status": "Running", "onlineInstances": instances}},
    }
    if labels is not None:
        doc["metadata"]["labels"] = labels
    doc.update(overrides)
    return doc


class FakeCustomObjectsApi:
    """In-memory stand-in for kubernetes.client.CustomObjectsApi."""

    def __init__(self, objects=None):
        self.objects = list(objects or [])
        self.calls = []
        self.errors = {}  # (namespace, name) or "list" -> exception

    def _find(self, namespace, name):
        for obj in self.objects:
            meta = obj["metadata"]
            if meta["name"] == name and meta.get("namespace") == namespace:
                return obj
        return None

    def get_namespaced_custom_object(self, group, version, namespace, plural, name):
        self.calls.append(("get", namespace, name))
        if (namespace, name) in self.errors:
            raise self.errors[(namespace, name)]
        obj = self._find(namespace, name)
        if obj is None:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(obj)

    def _page(self, items, limit=None, _continue=None, field_selector=None):
        if "list" in self.errors:
            raise self.errors["list"]
        if field_selector:
            wanted = field_selector.split("=", 1)[1]
            items = [o for o in items if o["metadata"]["name"] == wanted]
        start = int(_continue or 0)
        end = start + limit if limit else len(items)
        meta = {"continue": str(end)} if end < len(items) else {}
        return {"kind": "InnoDBClusterList", "items": copy.deepcopy(items[start:end]), "metadata": meta}

    def list_namespaced_custom_object(self, group, version, namespace, plural, **kwargs):
        self.calls.append(("list", namespace, kwargs))
        items = [o for o in self.objects if o["metadata"].get("namespace") == namespace]
        return self._page(items, **kwargs)

    def list_cluster_custom_object(self, group, version, plural, **kwargs):
        self.calls.append(("list", None, kwargs))
        return self._page(self.objects, **kwargs)


class FakeClusterClient:
    """Minimal client for the describer: serves documents by (namespace, name)."""

    def __init__(self, documents=None, failures=None):
        self.documents = documents or {}
        self.failures = failures or {}
        self.fetched = []

    def get_by_name(self, resource_type, namespace, name):
        self.fetched.append((namespace, name))
        if (namespace, name) in self.failures:
            raise self.failures[(namespace, name)]
        return copy.deepcopy(self.documents[(namespace, name)])


@pytest.fixture
def make_cluster():
    return _cluster


@pytest.fixture
def defaults():
    return PlaygroundDefaults(root_user="root", port=3306, engine="mysql")


@pytest.fixture
def fake_api():
    return FakeCustomObjectsApi


@pytest.fixture
def fake_client():
    return FakeClusterClient
