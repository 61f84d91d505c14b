# app.py
from __future__ import annotations

import argparse
import os
import re
import sys
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from kubernetes.client.rest import ApiException
from kubernetes.config import ConfigException
from kubernetes.dynamic.exceptions import ResourceNotFoundError
from urllib3.exceptions import HTTPError

from config import resolve_target
from errors import ConfigError, ReconcileError
from mode import compute_plan_mode

# ─────────────────────────────────────────────
# Config
# ─────────────────────────────────────────────
TIMEOUT_SECONDS = float(os.environ.get("TIMEOUT_SECONDS", str(25 * 60)))
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "30"))

_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)(ms|s|m|h)?$")
_DURATION_UNITS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600, None: 1}


# ─────────────────────────────────────────────
# Flag parsing helpers
# ─────────────────────────────────────────────
def parse_bool(val: str) -> bool:
    v = str(val).strip().lower()
    if v in {"true", "1", "yes"}:
        return True
    if v in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {val!r}")


def parse_duration(val: str) -> float:
    """Seconds from '90', '90s', '25m', '1h' or '500ms'."""
    m = _DURATION_RE.match(str(val).strip())
    if not m:
        raise argparse.ArgumentTypeError(f"invalid duration {val!r}")
    return float(m.group(1)) * _DURATION_UNITS[m.group(2)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eks-reconcile",
        description="Reconcile EKS API endpoint access and default add-ons (plan by default).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ep = sub.add_parser("update-cluster-endpoints", help="Update Kubernetes API endpoint access configuration")
    ep.add_argument("-n", "--name", "--cluster", dest="name", help="EKS cluster name")
    ep.add_argument("-r", "--region", help="AWS region")
    ep.add_argument("-f", "--config-file", help="load cluster name, region and endpoint access from a ClusterConfig file")
    ep.add_argument("--private-access", type=parse_bool, nargs="?", const=True, default=None,
                    help="access for private (VPC) clients")
    ep.add_argument("--public-access", type=parse_bool, nargs="?", const=True, default=None,
                    help="access for public clients")
    ep.add_argument("--approve", action="store_true", help="apply the changes (default: plan only)")
    ep.add_argument("--timeout", type=parse_duration, default=TIMEOUT_SECONDS,
                    help="max wait time for the update, e.g. 25m")

    ad = sub.add_parser("update-addon", help="Re-apply a default add-on's manifest")
    ad.add_argument("addon", help="add-on name, e.g. aws-node")
    ad.add_argument("-r", "--region", help="AWS region the add-on images are pulled from")
    ad.add_argument("--approve", action="store_true", help="apply the changes (default: plan only)")
    ad.add_argument("--timeout", type=parse_duration, default=REQUEST_TIMEOUT_SECONDS,
                    help="per-request timeout against the Kubernetes API")
    return parser


# ─────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────
def cmd_update_cluster_endpoints(args: argparse.Namespace) -> None:
    from eks import EKSClient
    from endpoints import update_cluster_endpoints

    target = resolve_target(
        name=args.name,
        region=args.region,
        config_file=args.config_file,
        private_access=args.private_access,
        public_access=args.public_access,
    )
    plan = compute_plan_mode(args.approve)
    api = EKSClient(target.region, timeout=args.timeout)
    update_cluster_endpoints(api, target.name, target.region, target.overrides, plan)


def cmd_update_addon(args: argparse.Namespace) -> None:
    from addons.default import update_addon
    from k8s import KubeClients, load_kube

    region = args.region or os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
    if not region:
        raise ConfigError("--region must be set (or AWS_REGION)")

    plan = compute_plan_mode(args.approve)
    load_kube()
    kube = KubeClients(request_timeout=args.timeout)
    update_addon(kube, args.addon, region, plan)


COMMANDS = {
    "update-cluster-endpoints": cmd_update_cluster_endpoints,
    "update-addon": cmd_update_addon,
}


# ─────────────────────────────────────────────
# Main
# ─────────────────────────────────────────────
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        COMMANDS[args.command](args)
    except (
        ReconcileError,
        ApiException,
        ResourceNotFoundError,
        ConfigException,
        HTTPError,
        ClientError,
        BotoCoreError,
    ) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
