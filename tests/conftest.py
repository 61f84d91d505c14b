from __future__ import annotations

import copy
from typing import Dict, List, Optional, Tuple

import pytest
from kubernetes.client.rest import ApiException
from kubernetes.dynamic.exceptions import NotFoundError

CLUSTER_SCOPED = {"ClusterRole", "ClusterRoleBinding", "CustomResourceDefinition", "Namespace"}

Call = Tuple[str, str, str]  # (verb, kind, name)


class FakeInstance:
    def __init__(self, obj: dict):
        self._obj = obj

    def to_dict(self) -> dict:
        return copy.deepcopy(self._obj)


class FakeResourceApi:
    """Mimics a kubernetes.dynamic Resource for one kind, storing objects in memory."""

    def __init__(self, kind: str, store: Dict[Tuple[str, Optional[str], str], dict], calls: List[Call]):
        self.kind = kind
        self.namespaced = kind not in CLUSTER_SCOPED
        self.store = store
        self.calls = calls
        self._version = 0

    def _key(self, name: str, namespace: Optional[str]):
        return (self.kind, namespace, name)

    def get(self, name: str, namespace: Optional[str] = None, **kwargs):
        self.calls.append(("get", self.kind, name))
        obj = self.store.get(self._key(name, namespace))
        if obj is None:
            raise NotFoundError(ApiException(status=404, reason="Not Found"))
        return FakeInstance(obj)

    def _stamp(self, body: dict) -> dict:
        self._version += 1
        stored = copy.deepcopy(body)
        stored.setdefault("metadata", {})["resourceVersion"] = str(self._version)
        return stored

    def create(self, body: dict, namespace: Optional[str] = None, **kwargs):
        name = body["metadata"]["name"]
        self.calls.append(("create", self.kind, name))
        self.store[self._key(name, namespace)] = self._stamp(body)

    def replace(self, body: dict, name: str, namespace: Optional[str] = None, **kwargs):
        self.calls.append(("replace", self.kind, name))
        self.last_replace = copy.deepcopy(body)
        self.store[self._key(name, namespace)] = self._stamp(body)


class FakeResources:
    def __init__(self, store, calls):
        self.store = store
        self.calls = calls
        self.apis: Dict[str, FakeResourceApi] = {}

    def get(self, api_version: str = None, kind: str = None, **kwargs) -> FakeResourceApi:
        if kind not in self.apis:
            self.apis[kind] = FakeResourceApi(kind, self.store, self.calls)
        return self.apis[kind]


class FakeDynamic:
    def __init__(self):
        self.store: Dict[Tuple[str, Optional[str], str], dict] = {}
        self.calls: List[Call] = []
        self.resources = FakeResources(self.store, self.calls)

    def mutations(self) -> List[Call]:
        return [c for c in self.calls if c[0] in {"create", "replace"}]


class FakeApps:
    def __init__(self):
        self.daemon_sets: Dict[Tuple[str, str], dict] = {}
        self.error: Optional[ApiException] = None

    def read_namespaced_daemon_set(self, name: str, namespace: str, **kwargs):
        if self.error is not None:
            raise self.error
        obj = self.daemon_sets.get((namespace, name))
        if obj is None:
            raise ApiException(status=404, reason="Not Found")
        return obj


class FakeKube:
    """Same surface as k8s.KubeClients without talking to a cluster."""

    def __init__(self):
        self.apps = FakeApps()
        self.dynamic = FakeDynamic()
        self.request_timeout = None

    def request_opts(self) -> dict:
        return {}

    def install(self, kind: str, name: str, namespace: str = "kube-system") -> None:
        if kind == "DaemonSet":
            self.apps.daemon_sets[(namespace, name)] = {"metadata": {"name": name, "namespace": namespace}}


@pytest.fixture
def kube() -> FakeKube:
    return FakeKube()
