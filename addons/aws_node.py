# addons/aws_node.py
from __future__ import annotations

from addons.types import Addon
from eks import resource_account_id
from errors import FormatError
from k8s import KindTraits

AWS_NODE = "aws-node"

IMAGE_PREFIX_PTN = "{account}.dkr.ecr."
IMAGE_SUFFIX = ".amazonaws.com/amazon-k8s-cni"


def rewrite_image(image: str, region: str) -> str:
    """
    Point an amazon-k8s-cni image at the ECR registry serving `region`, keeping the tag.
    Images from any other registry are returned unchanged (operator overrides).
    """
    parts = image.split(":")
    if len(parts) != 2:
        raise FormatError(f"unexpected image format {image!r} for {AWS_NODE!r}")

    repo, tag = parts
    if not repo.endswith(IMAGE_SUFFIX):
        return image
    prefix = IMAGE_PREFIX_PTN.format(account=resource_account_id(region))
    return f"{prefix}{region}{IMAGE_SUFFIX}:{tag}"


def transform_daemonset(obj: dict, region: str) -> None:
    containers = (((obj.get("spec", {}) or {}).get("template", {}) or {}).get("spec", {}) or {}).get("containers") or []
    if not containers or not containers[0].get("image"):
        raise FormatError(f"DaemonSet {AWS_NODE!r} has no container image to rewrite")
    containers[0]["image"] = rewrite_image(containers[0]["image"], region)


ADDON = Addon(
    name=AWS_NODE,
    workload_kind="DaemonSet",
    traits={
        "DaemonSet": KindTraits(needs_image_transform=True),
        # eniconfigs.crd.k8s.amazonaws.com is only partially defined in this
        # manifest and cannot be planned against the live object
        "CustomResourceDefinition": KindTraits(skippable_in_plan=True),
    },
    transform=transform_daemonset,
)
