"""
Module wiring the collectors to the diagnostic engine for a single run.
"""

import logging
from functools import partial
from typing import Callable, List, Optional, Sequence
import pulumi_aws as aws
from . import collectors
from .diagnosis import diagnose
from .models import AuditEvent, DiagnosticOutcome, FunctionNetworkConfig, NetworkInterfaceInfo
from .regions import RegionConfig

logger = logging.getLogger(__name__)

class DiagnosticCollaborators:
    """The read-only lookups a diagnostic run depends on."""

    def __init__(self,
                 fetch_interface_info: Callable[[str, str], NetworkInterfaceInfo],
                 fetch_functions_in_subnet: Callable[[str, str], Sequence[FunctionNetworkConfig]],
                 fetch_audit_events: Callable[[str, str], Sequence[AuditEvent]]):
        self.fetch_interface_info = fetch_interface_info
        self.fetch_functions_in_subnet = fetch_functions_in_subnet
        self.fetch_audit_events = fetch_audit_events

    @classmethod
    def for_aws(cls,
                provider: Optional[aws.Provider] = None,
                audit_lookback_days: int = collectors.DEFAULT_AUDIT_LOOKBACK_DAYS,
                profile: Optional[str] = None) -> "DiagnosticCollaborators":
        """
        Builds collaborators backed by the AWS provider and the AWS CLI.

        Args:
            provider: Optional AWS provider scoped to the diagnosed region
            audit_lookback_days: How far back to search CloudTrail
            profile: Optional AWS CLI profile; use the one the provider was built with

        Returns:
            Collaborators for a live run
        """
        return cls(
            fetch_interface_info=partial(collectors.fetch_interface_info, provider=provider),
            fetch_functions_in_subnet=partial(collectors.fetch_functions_in_subnet, profile=profile),
            fetch_audit_events=partial(collectors.fetch_audit_events,
                                       lookback_days=audit_lookback_days,
                                       profile=profile),
        )

    @classmethod
    def for_region(cls,
                   region_config: RegionConfig,
                   audit_lookback_days: int = collectors.DEFAULT_AUDIT_LOOKBACK_DAYS) -> "DiagnosticCollaborators":
        """Builds live collaborators sharing the provider and profile of a region config."""
        return cls.for_aws(region_config.provider, audit_lookback_days, region_config.profile)

class DiagnosticRun:
    """Inputs and outcome of one diagnostic run."""

    def __init__(self,
                 region: str,
                 interface: NetworkInterfaceInfo,
                 candidates: List[FunctionNetworkConfig],
                 outcome: DiagnosticOutcome):
        self.region = region
        self.interface = interface
        self.candidates = candidates
        self.outcome = outcome

def run_diagnosis(interface_id: str,
                  region: str,
                  collaborators: DiagnosticCollaborators) -> DiagnosticRun:
    """
    Fetches the ENI and the functions in its subnet, then diagnoses the ENI.

    The audit trail is only queried if the engine asks for it. Lookup errors
    propagate to the caller.

    Args:
        interface_id: ID of the ENI to diagnose
        region: AWS region the ENI lives in
        collaborators: The lookups to use

    Returns:
        The completed diagnostic run
    """
    logger.info(f"Diagnosing ENI {interface_id} in {region}")
    interface = collaborators.fetch_interface_info(interface_id, region)
    candidates = list(collaborators.fetch_functions_in_subnet(interface.subnet_id, region))

    outcome = diagnose(interface, candidates,
                       lambda: collaborators.fetch_audit_events(interface.id, region))

    return DiagnosticRun(region=region,
                         interface=interface,
                         candidates=candidates,
                         outcome=outcome)
