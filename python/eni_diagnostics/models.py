"""
Value types shared by the ENI diagnostic engine and its collectors.
"""

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, List, Tuple


def _id_set(ids: Iterable[str]) -> FrozenSet[str]:
    if ids is None:
        return frozenset()
    if isinstance(ids, str):
        return frozenset([ids])
    return frozenset(ids)


@dataclass(frozen=True)
class NetworkInterfaceInfo:
    """Snapshot of the interface under diagnosis."""

    id: str
    subnet_id: str
    security_group_ids: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "security_group_ids", _id_set(self.security_group_ids))

    def sorted_security_group_ids(self) -> List[str]:
        return sorted(self.security_group_ids)


@dataclass(frozen=True)
class FunctionNetworkConfig:
    """Network placement of a single Lambda function version."""

    arn: str
    subnet_ids: FrozenSet[str] = field(default_factory=frozenset)
    security_group_ids: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "subnet_ids", _id_set(self.subnet_ids))
        object.__setattr__(self, "security_group_ids", _id_set(self.security_group_ids))

    def sorted_security_group_ids(self) -> List[str]:
        return sorted(self.security_group_ids)


@dataclass(frozen=True)
class AuditEvent:
    """
    One recorded API call against the interface.

    raw_payload is the event body as returned by the audit trail, either the
    JSON text or an already parsed mapping.
    """

    event_name: str
    raw_payload: Any
    has_error: bool = False


class DiagnosticOutcome:
    """Base class for the terminal results of a diagnostic run."""

    kind = "Unknown"

    @property
    def function_arns(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class NoCandidateFunctions(DiagnosticOutcome):
    """No function version references the interface's subnet."""

    kind = "NoCandidateFunctions"


@dataclass(frozen=True)
class ExactMatchFound(DiagnosticOutcome):
    """Function versions whose configuration mirrors the interface exactly."""

    kind = "ExactMatchFound"

    arns: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "arns", tuple(self.arns))

    @property
    def function_arns(self) -> Tuple[str, ...]:
        return self.arns


@dataclass(frozen=True)
class ExternalModificationSuspected(DiagnosticOutcome):
    """The interface's security groups were changed outside Lambda."""

    kind = "ExternalModificationSuspected"

    candidate_arns: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "candidate_arns", tuple(self.candidate_arns))

    @property
    def function_arns(self) -> Tuple[str, ...]:
        return self.candidate_arns


@dataclass(frozen=True)
class NoExactMatchNoModification(DiagnosticOutcome):
    """Subnet candidates exist but nothing explains the mismatch."""

    kind = "NoExactMatchNoModification"
