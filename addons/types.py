# addons/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from k8s import NAMESPACE_SYSTEM, KindTraits


@dataclass(frozen=True)
class AddonManifest:
    """Items in declaration order; earlier items (CRDs, RBAC) may be needed by later ones."""

    name: str
    items: List[dict]


@dataclass(frozen=True)
class Addon:
    name: str
    workload_kind: str
    namespace: str = NAMESPACE_SYSTEM
    traits: Dict[str, KindTraits] = field(default_factory=dict)
    # mutates the primary workload object in place for the target region
    transform: Optional[Callable[[dict, str], None]] = None
