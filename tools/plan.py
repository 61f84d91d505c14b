#!/usr/bin/env python3
"""Plan-only runner: prints what update-cluster-endpoints and update-addon would do.

Usage:
  CLUSTER_NAME=dev AWS_REGION=us-west-2 PUBLIC_ACCESS=false PRIVATE_ACCESS=true python3 tools/plan.py
  CLUSTER_NAME=dev AWS_REGION=us-west-2 ADDONS=aws-node python3 tools/plan.py

Notes:
- Uses your local AWS credentials and kubeconfig (same behavior as app.py).
- Always runs in plan mode; APPROVE is ignored. Nothing is created/replaced/updated.
- PRIVATE_ACCESS / PUBLIC_ACCESS left unset keep the cluster's current value.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from addons.default import update_addon  # noqa: E402
from config import resolve_target  # noqa: E402
from eks import EKSClient  # noqa: E402
from endpoints import update_cluster_endpoints  # noqa: E402
from k8s import KubeClients, load_kube  # noqa: E402


def _env_bool(key: str) -> Optional[bool]:
    val = os.environ.get(key)
    if val is None or val == "":
        return None
    return val.strip().lower() in {"1", "true", "yes"}


def main() -> int:
    target = resolve_target(
        name=os.environ.get("CLUSTER_NAME"),
        region=os.environ.get("AWS_REGION"),
        config_file=os.environ.get("CONFIG_FILE"),
        private_access=_env_bool("PRIVATE_ACCESS"),
        public_access=_env_bool("PUBLIC_ACCESS"),
    )

    print(f"[plan] cluster={target.name} region={target.region}")
    update_cluster_endpoints(EKSClient(target.region), target.name, target.region, target.overrides, plan=True)

    addons = [a for a in os.environ.get("ADDONS", "").split(",") if a.strip()]
    if addons:
        load_kube()
        kube = KubeClients()
        for name in addons:
            update_addon(kube, name.strip(), target.region, plan=True)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
