# eks.py
"""
EKS control-plane access for endpoint reconciliation.

Only two calls matter here: read the cluster's current endpoint access and
update it. Reading refuses a cluster that is not ACTIVE, since EKS rejects
config updates while the cluster is still being created or updated. The update
is asynchronous on the AWS side, so update_endpoint_access blocks on a
DescribeUpdate waiter until the update succeeds, fails, or the
caller's timeout runs out. botocore errors (ClientError, WaiterError) are not
caught here; the caller decides what a failed call means.
"""

from __future__ import annotations

import math
from typing import Optional

import boto3
from botocore.config import Config
from botocore.waiter import WaiterModel, create_waiter_with_client

from endpoints import EndpointAccessState
from errors import ClusterNotReadyError

DEFAULT_TIMEOUT_SECONDS = 25 * 60
UPDATE_POLL_SECONDS = 15

# ECR accounts serving EKS images; regions not listed use the default account
_RESOURCE_ACCOUNTS = {
    "ap-east-1": "800184023465",
    "me-south-1": "558608220178",
    "cn-north-1": "918309763551",
    "cn-northwest-1": "961992271922",
    "us-gov-west-1": "013241004608",
    "us-gov-east-1": "151742754352",
}
_DEFAULT_RESOURCE_ACCOUNT = "602401143452"

_UPDATE_WAITER = WaiterModel(
    {
        "version": 2,
        "waiters": {
            "UpdateSuccessful": {
                "operation": "DescribeUpdate",
                "delay": UPDATE_POLL_SECONDS,
                "maxAttempts": 100,
                "acceptors": [
                    {"matcher": "path", "argument": "update.status", "expected": "Successful", "state": "success"},
                    {"matcher": "path", "argument": "update.status", "expected": "Failed", "state": "failure"},
                    {"matcher": "path", "argument": "update.status", "expected": "Cancelled", "state": "failure"},
                ],
            }
        },
    }
)


def resource_account_id(region: str) -> str:
    return _RESOURCE_ACCOUNTS.get(region, _DEFAULT_RESOURCE_ACCOUNT)


class EKSClient:
    def __init__(self, region: str, timeout: Optional[float] = None, client=None):
        self.region = region
        self.timeout = DEFAULT_TIMEOUT_SECONDS if timeout is None else timeout
        if client is None:
            client = boto3.client(
                "eks",
                region_name=region,
                config=Config(
                    retries={"max_attempts": 3, "mode": "standard"},
                    connect_timeout=10,
                    read_timeout=60,
                ),
            )
        self.client = client

    def describe_endpoint_access(self, name: str) -> EndpointAccessState:
        cluster = self.client.describe_cluster(name=name)["cluster"]
        status = cluster.get("status")
        if status != "ACTIVE":
            raise ClusterNotReadyError(f'cluster "{name}" is not ready for an update (status: {status})')
        vpc = cluster.get("resourcesVpcConfig", {}) or {}
        return EndpointAccessState(
            private_access=bool(vpc.get("endpointPrivateAccess", False)),
            public_access=bool(vpc.get("endpointPublicAccess", False)),
        )

    def update_endpoint_access(self, name: str, state: EndpointAccessState) -> str:
        """Submit the full access state in one call and wait for it to take effect."""
        resp = self.client.update_cluster_config(
            name=name,
            resourcesVpcConfig={
                "endpointPrivateAccess": state.private_access,
                "endpointPublicAccess": state.public_access,
            },
        )
        update_id = resp["update"]["id"]
        print(f'[eks] waiting for update "{update_id}" on cluster "{name}" to complete')

        waiter = create_waiter_with_client("UpdateSuccessful", _UPDATE_WAITER, self.client)
        waiter.wait(
            name=name,
            updateId=update_id,
            WaiterConfig={
                "Delay": UPDATE_POLL_SECONDS,
                "MaxAttempts": max(1, math.ceil(self.timeout / UPDATE_POLL_SECONDS)),
            },
        )
        return update_id
