from __future__ import annotations

import pytest

from config import resolve_target
from errors import ConfigError


def _write(tmp_path, text: str) -> str:
    p = tmp_path / "cluster.yaml"
    p.write_text(text)
    return str(p)


CLUSTER_YAML = """
apiVersion: eksctl.io/v1alpha5
kind: ClusterConfig
metadata:
  name: dev
  region: us-west-2
vpc:
  clusterEndpoints:
    privateAccess: true
    publicAccess: null
"""


def test_config_document_supplies_name_region_and_nullable_flags(tmp_path) -> None:
    target = resolve_target(config_file=_write(tmp_path, CLUSTER_YAML))

    assert target.name == "dev"
    assert target.region == "us-west-2"
    assert target.overrides.private_access is True
    assert target.overrides.public_access is None


def test_flags_take_priority_over_config_document(tmp_path) -> None:
    target = resolve_target(config_file=_write(tmp_path, CLUSTER_YAML), private_access=False, public_access=True)

    assert target.overrides.private_access is False
    assert target.overrides.public_access is True


def test_flags_only(monkeypatch) -> None:
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    target = resolve_target(name="prod", public_access=False)

    assert target.name == "prod"
    assert target.region == "eu-west-1"
    assert target.overrides.private_access is None
    assert target.overrides.public_access is False


def test_name_and_config_file_are_mutually_exclusive(tmp_path) -> None:
    with pytest.raises(ConfigError, match="cannot use --name"):
        resolve_target(name="dev", config_file=_write(tmp_path, CLUSTER_YAML))


def test_missing_name_is_an_error() -> None:
    with pytest.raises(ConfigError, match="--name must be set"):
        resolve_target(region="us-west-2")


def test_conflicting_region_is_an_error(tmp_path) -> None:
    with pytest.raises(ConfigError, match="do not match"):
        resolve_target(region="eu-west-1", config_file=_write(tmp_path, CLUSTER_YAML))


def test_non_boolean_endpoint_value_is_rejected(tmp_path) -> None:
    text = CLUSTER_YAML.replace("privateAccess: true", "privateAccess: sometimes")
    with pytest.raises(ConfigError, match="privateAccess"):
        resolve_target(config_file=_write(tmp_path, text))


def test_wrong_kind_is_rejected(tmp_path) -> None:
    text = CLUSTER_YAML.replace("kind: ClusterConfig", "kind: NodeGroup")
    with pytest.raises(ConfigError, match="expected 'ClusterConfig'"):
        resolve_target(config_file=_write(tmp_path, text))


def test_missing_config_file_is_an_error(tmp_path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        resolve_target(config_file=str(tmp_path / "nope.yaml"))
