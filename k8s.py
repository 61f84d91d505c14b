# k8s.py
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional

from kubernetes import client, config
from kubernetes.dynamic import DynamicClient

NAMESPACE_SYSTEM = "kube-system"


def load_kube() -> None:
    try:
        config.load_incluster_config()
        print("[kube] using in-cluster config")
    except config.ConfigException:
        config.load_kube_config()
        print("[kube] using kubeconfig (local)")


class KubeClients:
    """Typed and dynamic API access sharing one ApiClient and one request timeout."""

    def __init__(self, api_client: Optional[client.ApiClient] = None, request_timeout: Optional[float] = None):
        self.api_client = api_client or client.ApiClient()
        self.apps = client.AppsV1Api(self.api_client)
        self.dynamic = DynamicClient(self.api_client)
        self.request_timeout = request_timeout

    def request_opts(self) -> Dict[str, Any]:
        if self.request_timeout is None:
            return {}
        return {"_request_timeout": self.request_timeout}


@dataclass(frozen=True)
class KindTraits:
    """What the add-on reconciler does with a kind beyond plain create-or-replace."""

    needs_image_transform: bool = False
    skippable_in_plan: bool = False


PASSTHROUGH = KindTraits()


@dataclass
class RawResource:
    obj: dict
    api: Any
    traits: KindTraits = PASSTHROUGH
    timeout: Optional[float] = None
    namespaced: bool = True

    @property
    def kind(self) -> str:
        return self.obj.get("kind", "")

    @property
    def name(self) -> str:
        return ((self.obj.get("metadata", {}) or {}).get("name")) or ""

    @property
    def namespace(self) -> Optional[str]:
        if not self.namespaced:
            return None
        return ((self.obj.get("metadata", {}) or {}).get("namespace")) or "default"

    def request_opts(self) -> Dict[str, Any]:
        if self.timeout is None:
            return {}
        return {"_request_timeout": self.timeout}

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}:{self.kind}/{self.name}"
        return f"{self.kind}/{self.name}"


def new_raw_resource(kube, raw_obj: dict, traits: Optional[Dict[str, KindTraits]] = None) -> RawResource:
    """Build a resource handle for one manifest item.

    The item is copied so transforms never touch the loaded manifest. Kind traits
    are looked up once here; kinds without an entry pass through unchanged.
    """
    obj = copy.deepcopy(raw_obj)
    api = kube.dynamic.resources.get(api_version=obj.get("apiVersion"), kind=obj.get("kind"))
    return RawResource(
        obj=obj,
        api=api,
        traits=(traits or {}).get(obj.get("kind", ""), PASSTHROUGH),
        timeout=kube.request_timeout,
        namespaced=bool(getattr(api, "namespaced", True)),
    )
