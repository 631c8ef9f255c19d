"""
Module for rendering diagnostic runs as text and stack outputs.
"""

from typing import Any, Dict, List
from .models import (
    DiagnosticOutcome,
    ExactMatchFound,
    ExternalModificationSuspected,
    NoCandidateFunctions,
    NoExactMatchNoModification,
)
from .runner import DiagnosticRun

def outcome_to_dict(outcome: DiagnosticOutcome) -> Dict[str, Any]:
    """Converts an outcome into a plain dict suitable for pulumi.export."""
    return {
        "outcome": outcome.kind,
        "functionArns": list(outcome.function_arns),
    }

def render_report(run: DiagnosticRun) -> str:
    """
    Renders a diagnostic run as human-readable text.

    Args:
        run: The completed diagnostic run

    Returns:
        The report, one line per entry
    """
    interface = run.interface
    security_groups = ", ".join(interface.sorted_security_group_ids()) or "(none)"
    lines = [
        f"ENI: {interface.id} ({run.region})",
        f"Subnet: {interface.subnet_id}",
        f"Security groups: {security_groups}",
        "",
    ]
    lines.extend(_explain(run.outcome, interface.subnet_id))
    return "\n".join(lines)

def _explain(outcome: DiagnosticOutcome, subnet_id: str) -> List[str]:
    if isinstance(outcome, NoCandidateFunctions):
        return [
            f"No Lambda function version references subnet {subnet_id}.",
            "The ENI is most likely waiting for Lambda's asynchronous cleanup.",
        ]

    if isinstance(outcome, ExactMatchFound):
        return [
            "These function versions use exactly the ENI's subnet and security groups:",
            *[f"  - {arn}" for arn in outcome.arns],
            "Lambda keeps the ENI while any of them exists. Delete the versions or "
            "move them off this subnet/security group combination to release it.",
        ]

    if isinstance(outcome, ExternalModificationSuspected):
        return [
            "No function version matches the ENI's security groups, but CloudTrail shows "
            "they were changed with ModifyNetworkInterfaceAttribute outside Lambda.",
            "Any of these function versions in the subnet may be the original owner:",
            *[f"  - {arn}" for arn in outcome.candidate_arns],
            "Restore the original security groups or update the owning function "
            "so Lambda can reclaim the ENI.",
        ]

    if isinstance(outcome, NoExactMatchNoModification):
        return [
            "Function versions use the subnet, but none match the ENI's security groups "
            "and no external security group change was found.",
            "Wait for Lambda's normal reclamation window before escalating.",
        ]

    return [f"Unrecognized outcome: {outcome.kind}"]
