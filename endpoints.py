# endpoints.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gate import validate_endpoint_access
from mode import log_completed_action, log_intended_action, log_plan_mode_warning
from reconcile import ReconcileOutcome

TAG = "endpoints"


@dataclass(frozen=True)
class EndpointAccessState:
    private_access: bool
    public_access: bool

    def describe(self) -> str:
        return f"privateAccess={_b(self.private_access)}, publicAccess={_b(self.public_access)}"


@dataclass(frozen=True)
class AccessOverrides:
    """Caller-supplied access flags. None means the caller did not set the flag."""

    private_access: Optional[bool] = None
    public_access: Optional[bool] = None


def _b(v: bool) -> str:
    return "true" if v else "false"


def resolve_desired(current: EndpointAccessState, overrides: AccessOverrides) -> EndpointAccessState:
    private = current.private_access if overrides.private_access is None else overrides.private_access
    public = current.public_access if overrides.public_access is None else overrides.public_access
    return EndpointAccessState(private_access=bool(private), public_access=bool(public))


def reconcile_endpoint_access(
    api,
    cluster: str,
    region: str,
    current: EndpointAccessState,
    overrides: AccessOverrides,
    plan: bool,
) -> ReconcileOutcome:
    """Bring the cluster's endpoint access to `current` merged with `overrides`.

    Raises NoAccessError (before any mutation, in plan and apply mode alike) if the
    resolved state disables both access paths. API errors from `api` propagate.
    """
    desired = resolve_desired(current, overrides)

    if desired == current:
        print(f'[{TAG}] Kubernetes API endpoint access for cluster "{cluster}" in "{region}" is already up to date')
        return ReconcileOutcome(changed=False)

    log_intended_action(
        plan,
        TAG,
        f'update Kubernetes API endpoint access for cluster "{cluster}" in "{region}" to: {desired.describe()}',
    )

    gate = validate_endpoint_access(desired)
    if not gate.ok:
        raise gate.errors[0]
    for w in gate.warnings:
        print(f"[{TAG}] warning: {w}")

    if not plan:
        api.update_endpoint_access(cluster, desired)
        log_completed_action(
            plan,
            TAG,
            f'the Kubernetes API endpoint access for cluster "{cluster}" in "{region}" '
            f"has been updated to: {desired.describe()}",
        )

    return ReconcileOutcome(changed=True, warnings=list(gate.warnings))


def update_cluster_endpoints(
    api,
    cluster: str,
    region: str,
    overrides: AccessOverrides,
    plan: bool,
) -> ReconcileOutcome:
    """Load the live endpoint access for `cluster` and reconcile it against `overrides`."""
    print(f"[{TAG}] using region {region}")

    current = api.describe_endpoint_access(cluster)
    print(f"[{TAG}] current Kubernetes API endpoint access: {current.describe()}")

    outcome = reconcile_endpoint_access(api, cluster, region, current, overrides, plan)
    if outcome.changed:
        log_plan_mode_warning(plan, TAG)
    return outcome
