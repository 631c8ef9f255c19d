"""
Module for picking out security group changes from audit trail events.
"""

import json
import re
from typing import Any, List, Mapping, Optional, Sequence
from .models import AuditEvent

# Field name CloudTrail uses for each entry of a ModifyNetworkInterfaceAttribute groupSet
SECURITY_GROUP_FIELD = "groupId"

# Resource ids are made of word characters and hyphens
_ID_BOUNDARY = r"[\w-]"

def payload_text(payload: Any) -> Optional[str]:
    """
    Returns the searchable text of an audit payload, or None if it has none.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, bytes):
        try:
            return payload.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(payload, (Mapping, list)):
        try:
            return json.dumps(payload, sort_keys=True, default=str)
        except (TypeError, ValueError):
            return None
    return None

def references_id(text: str, resource_id: str) -> bool:
    """
    Checks whether text mentions resource_id as a whole id, so eni-0abc123
    does not match inside eni-0abc1234. An empty id never matches.
    """
    if not resource_id:
        return False
    pattern = rf"(?<!{_ID_BOUNDARY}){re.escape(resource_id)}(?!{_ID_BOUNDARY})"
    return re.search(pattern, text) is not None

def is_relevant_change(eni_id: str, event: AuditEvent) -> bool:
    """
    Checks whether a single event records a successful security group change on the ENI.

    Failed API calls changed nothing, so an event carrying an error never
    counts even when its text matches.
    """
    if event.has_error:
        return False

    text = payload_text(event.raw_payload)
    if text is None:
        return False

    return references_id(text, eni_id) and SECURITY_GROUP_FIELD in text

def find_relevant_changes(eni_id: str, events: Sequence[AuditEvent]) -> List[AuditEvent]:
    """
    Selects the events that changed the security groups of the given ENI.

    Args:
        eni_id: ID of the network interface under diagnosis
        events: Candidate audit events, in the order they were fetched

    Returns:
        The qualifying events in input order; empty if nothing was modified
    """
    return [event for event in events if is_relevant_change(eni_id, event)]
