# config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from endpoints import AccessOverrides
from errors import ConfigError

CLUSTER_CONFIG_KIND = "ClusterConfig"


@dataclass(frozen=True)
class ClusterTarget:
    name: str
    region: str
    overrides: AccessOverrides


def load_cluster_config(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"config file {path} does not exist")
    try:
        doc = yaml.safe_load(p.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"loading config file {path}: {e}") from e
    if not isinstance(doc, dict):
        raise ConfigError(f"config file {path} must contain a {CLUSTER_CONFIG_KIND} document")
    kind = doc.get("kind")
    if kind is not None and kind != CLUSTER_CONFIG_KIND:
        raise ConfigError(f"config file {path} has kind {kind!r}, expected {CLUSTER_CONFIG_KIND!r}")
    return doc


def _nullable_bool(endpoints: dict, key: str) -> Optional[bool]:
    val = endpoints.get(key)
    if val is None or isinstance(val, bool):
        return val
    raise ConfigError(f"vpc.clusterEndpoints.{key} must be true, false or null, got {val!r}")


def _env_region() -> Optional[str]:
    return os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")


def resolve_target(
    name: Optional[str] = None,
    region: Optional[str] = None,
    config_file: Optional[str] = None,
    private_access: Optional[bool] = None,
    public_access: Optional[bool] = None,
) -> ClusterTarget:
    """
    Merge flags and the optional cluster config document.
    Priority for the access flags:
      1) flag given on the command line
      2) vpc.clusterEndpoints.* in the config document (null = not set)
      3) not set: the reconciler keeps the cluster's current value
    """
    doc: Dict[str, Any] = {}
    if config_file:
        if name:
            raise ConfigError("cannot use --name when --config-file/-f is set")
        doc = load_cluster_config(config_file)

    meta = doc.get("metadata", {}) or {}
    endpoints = ((doc.get("vpc", {}) or {}).get("clusterEndpoints", {})) or {}

    name = name or meta.get("name")
    if not name:
        if config_file:
            raise ConfigError("metadata.name must be set in the config file")
        raise ConfigError("--name must be set")

    doc_region = meta.get("region")
    if region and doc_region and region != doc_region:
        raise ConfigError(f"--region={region} and metadata.region={doc_region} do not match")
    region = region or doc_region or _env_region()
    if not region:
        raise ConfigError("--region must be set (or metadata.region, AWS_REGION)")

    overrides = AccessOverrides(
        private_access=private_access if private_access is not None else _nullable_bool(endpoints, "privateAccess"),
        public_access=public_access if public_access is not None else _nullable_bool(endpoints, "publicAccess"),
    )
    return ClusterTarget(name=name, region=region, overrides=overrides)
