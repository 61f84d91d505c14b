# reconcile.py
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List, Optional

from kubernetes.dynamic.exceptions import NotFoundError

from mode import log_action


@dataclass
class ReconcileOutcome:
    """changed=True in plan mode means "would change", nothing was mutated."""

    changed: bool
    warnings: List[Warning] = field(default_factory=list)


def _resource_version(existing) -> Optional[str]:
    live = existing.to_dict()
    return ((live or {}).get("metadata", {}) or {}).get("resourceVersion")


def create_or_replace(resource, plan: bool) -> str:
    """Create `resource` if it is absent, otherwise replace the live object with it.

    The manifest is authoritative: a present object is replaced even when nothing
    differs, which the API server treats as a no-op. In plan mode the lookup still
    runs so the returned status says truthfully whether it would create or replace.
    """
    api = resource.api
    opts = resource.request_opts()

    try:
        existing = api.get(name=resource.name, namespace=resource.namespace, **opts)
    except NotFoundError:
        existing = None

    if existing is None:
        if not plan:
            api.create(body=resource.obj, namespace=resource.namespace, **opts)
        return log_action(plan, "create", str(resource))

    if not plan:
        body = copy.deepcopy(resource.obj)
        version = _resource_version(existing)
        if version:
            body.setdefault("metadata", {})["resourceVersion"] = version
        api.replace(body=body, name=resource.name, namespace=resource.namespace, **opts)
    return log_action(plan, "replace", str(resource))
