"""
Module for diagnosing why a Lambda ENI has not been reclaimed.
"""

import logging
from typing import Callable, Iterable, List, Sequence
from .audit_filter import find_relevant_changes
from .errors import MalformedInputError
from .matcher import find_exact_matches
from .models import (
    AuditEvent,
    DiagnosticOutcome,
    ExactMatchFound,
    ExternalModificationSuspected,
    FunctionNetworkConfig,
    NetworkInterfaceInfo,
    NoCandidateFunctions,
    NoExactMatchNoModification,
)

logger = logging.getLogger(__name__)

AuditEventFetcher = Callable[[], Sequence[AuditEvent]]

def diagnose(eni: NetworkInterfaceInfo,
             subnet_filtered_functions: Iterable[FunctionNetworkConfig],
             fetch_audit_events: AuditEventFetcher) -> DiagnosticOutcome:
    """
    Correlates an ENI with the Lambda function versions that share its subnet.

    The outcome is decided as follows:
      - no function version uses the subnet: NoCandidateFunctions
      - some versions use exactly the ENI's security groups: ExactMatchFound
      - none match, but the audit trail shows the ENI's security groups were
        modified: ExternalModificationSuspected with every subnet candidate
      - otherwise: NoExactMatchNoModification

    fetch_audit_events is only called when no exact match exists, since the
    audit lookup is the most expensive query. Errors raised by it propagate,
    except MalformedInputError which counts as "no modification found".

    Args:
        eni: The interface under diagnosis
        subnet_filtered_functions: Function versions whose VPC config includes the ENI's subnet
        fetch_audit_events: Zero-argument callable returning the candidate audit events

    Returns:
        The diagnostic outcome for this run
    """
    functions = tuple(subnet_filtered_functions)
    if not functions:
        logger.info(f"No Lambda function versions reference subnet {eni.subnet_id}")
        return NoCandidateFunctions()

    matches = find_exact_matches(eni.security_group_ids, functions)
    if matches:
        logger.info(f"{len(matches)} function version(s) match ENI {eni.id} exactly")
        return ExactMatchFound(tuple(matches))

    logger.info(f"No exact security group match for ENI {eni.id}, checking audit trail")
    relevant = _relevant_audit_changes(eni, fetch_audit_events)
    if relevant:
        logger.info(f"Found {len(relevant)} external security group change(s) on ENI {eni.id}")
        return ExternalModificationSuspected(
            tuple(function.arn for function in functions))

    return NoExactMatchNoModification()

def _relevant_audit_changes(eni: NetworkInterfaceInfo,
                            fetch_audit_events: AuditEventFetcher) -> List[AuditEvent]:
    try:
        events = fetch_audit_events()
    except MalformedInputError as e:
        logger.warning(f"Ignoring unparseable audit events for ENI {eni.id}: {e}")
        return []

    return find_relevant_changes(eni.id, events)
