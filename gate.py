# gate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from errors import NoAccessError, PrivateOnlyWarning

if TYPE_CHECKING:
    from endpoints import EndpointAccessState


NO_ACCESS_MSG = "Either public access or private access must be enabled."

PRIVATE_ONLY_MSG = (
    "having public access disallowed will subsequently interfere with some features; "
    "subsequent commands and Kubernetes API calls will have to run from within the VPC. "
    "See https://docs.aws.amazon.com/eks/latest/userguide/cluster-endpoint.html for details"
)


@dataclass
class GateResult:
    ok: bool
    errors: List[Exception] = field(default_factory=list)
    warnings: List[Warning] = field(default_factory=list)


def validate_endpoint_access(state: "EndpointAccessState") -> GateResult:
    """Block any endpoint access change that would make the API server unreachable.

    - no private and no public access: hard error, nothing may be applied
    - private only: allowed, but reported as a warning
    """

    errors: List[Exception] = []
    warnings: List[Warning] = []

    if not state.private_access and not state.public_access:
        errors.append(NoAccessError(NO_ACCESS_MSG))
    elif state.private_access and not state.public_access:
        warnings.append(PrivateOnlyWarning(PRIVATE_ONLY_MSG))

    ok = len(errors) == 0
    return GateResult(ok=ok, errors=errors, warnings=warnings)
