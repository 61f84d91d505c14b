# addons/assets.py
from __future__ import annotations

from pathlib import Path

import yaml

from addons.types import AddonManifest
from errors import AddonNotFoundError

MANIFESTS_DIR = Path(__file__).resolve().parent / "manifests"


def load_asset(name: str, ext: str = "yaml") -> AddonManifest:
    """Load the static multi-document manifest shipped for add-on `name`."""
    path = MANIFESTS_DIR / f"{name}.{ext}"
    if not path.exists():
        raise AddonNotFoundError(f"no manifest for add-on {name!r} ({path.name})")

    items = []
    with path.open() as f:
        for doc in yaml.safe_load_all(f):
            if not doc:
                continue
            # "List" documents are flattened so item order is the order on disk
            if doc.get("kind") == "List":
                items.extend(i for i in doc.get("items", []) or [] if i)
            else:
                items.append(doc)
    return AddonManifest(name=name, items=items)
