# addons/default.py
from __future__ import annotations

from typing import Dict

from kubernetes.client.rest import ApiException

from addons import aws_node
from addons.assets import load_asset
from addons.types import Addon
from errors import AddonNotFoundError
from k8s import new_raw_resource
from mode import log_action, plan_prefix
from reconcile import ReconcileOutcome, create_or_replace

TAG = "addon"

DEFAULT_ADDONS: Dict[str, Addon] = {
    aws_node.AWS_NODE: aws_node.ADDON,
}

# typed readers used to probe for an add-on's primary workload
_PROBES = {
    "DaemonSet": "read_namespaced_daemon_set",
    "Deployment": "read_namespaced_deployment",
}


def get_addon(name: str) -> Addon:
    addon = DEFAULT_ADDONS.get(name)
    if addon is None:
        known = ", ".join(sorted(DEFAULT_ADDONS))
        raise AddonNotFoundError(f"unknown add-on {name!r} (known: {known})")
    return addon


def _is_installed(kube, addon: Addon) -> bool:
    read = getattr(kube.apps, _PROBES[addon.workload_kind])
    try:
        read(addon.name, addon.namespace, **kube.request_opts())
    except ApiException as e:
        if e.status == 404:
            return False
        raise
    return True


def update_addon(kube, name: str, region: str, plan: bool) -> ReconcileOutcome:
    """Re-apply the shipped manifest of a default add-on, item by item, in order.

    An add-on whose primary workload is missing is treated as not installed and
    left alone. In plan mode nothing is created or replaced and the add-on is
    always reported as changed (out of date).
    """
    addon = get_addon(name)

    if not _is_installed(kube, addon):
        print(f'[{TAG}] warning: "{addon.name}" was not found')
        return ReconcileOutcome(changed=False)

    manifest = load_asset(addon.name)

    for raw_obj in manifest.items:
        resource = new_raw_resource(kube, raw_obj, addon.traits)

        if resource.traits.needs_image_transform and addon.transform is not None:
            addon.transform(resource.obj, region)

        if resource.traits.skippable_in_plan and plan:
            print(f"[{TAG}] {log_action(plan, 'replace', str(resource))}")
            continue

        status = create_or_replace(resource, plan)
        print(f"[{TAG}] {status}")

    if plan:
        print(f'[{TAG}] {plan_prefix(plan)}"{addon.name}" is not up-to-date')
        return ReconcileOutcome(changed=True)

    print(f'[{TAG}] "{addon.name}" is now up-to-date')
    return ReconcileOutcome(changed=False)
