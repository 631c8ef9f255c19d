"""
Pulumi component that diagnoses a leftover Lambda ENI and exposes the result.
"""

from typing import Optional
import pulumi
from .collectors import DEFAULT_AUDIT_LOOKBACK_DAYS
from .regions import configure_region
from .report import outcome_to_dict, render_report
from .runner import DiagnosticCollaborators, run_diagnosis

DEFAULT_REGION = "us-east-1"

class ENIDiagnosticOptions:
    """Options for an ENI diagnostic run."""

    def __init__(self,
                 interface_id: str,
                 region: str = DEFAULT_REGION,
                 profile: Optional[str] = None,
                 audit_lookback_days: int = DEFAULT_AUDIT_LOOKBACK_DAYS):
        self.interface_id = interface_id
        self.region = region
        self.profile = profile
        self.audit_lookback_days = audit_lookback_days

def load_options(config: Optional[pulumi.Config] = None,
                 aws_config: Optional[pulumi.Config] = None) -> ENIDiagnosticOptions:
    """
    Reads the diagnostic options from stack configuration.

    Keys: interfaceId (required), region (falls back to aws:region),
    profile, auditLookbackDays.
    """
    config = config or pulumi.Config()
    aws_config = aws_config or pulumi.Config("aws")

    region = config.get("region") or aws_config.get("region") or DEFAULT_REGION
    lookback_days = config.get_int("auditLookbackDays")
    if lookback_days is None:
        lookback_days = DEFAULT_AUDIT_LOOKBACK_DAYS
    if lookback_days <= 0:
        raise ValueError(f"auditLookbackDays must be positive, got {lookback_days}")

    return ENIDiagnosticOptions(
        interface_id=config.require("interfaceId"),
        region=region,
        profile=config.get("profile"),
        audit_lookback_days=lookback_days,
    )

class ENIDiagnosticComponent(pulumi.ComponentResource):
    """
    ENI Diagnostic Component
    Runs one diagnosis of a Lambda ENI that was not reclaimed and exposes the
    outcome and a readable report as outputs. Nothing in the account is changed.
    """

    def __init__(self,
                 name: str,
                 args: ENIDiagnosticOptions,
                 collaborators: Optional[DiagnosticCollaborators] = None,
                 opts: Optional[pulumi.ResourceOptions] = None):
        super().__init__('awsutil:diagnostics:ENIDiagnosticComponent', name, None, opts)

        region = args.region
        if collaborators is None:
            region_config = configure_region(args.region, args.profile,
                                             opts=pulumi.ResourceOptions(parent=self))
            collaborators = DiagnosticCollaborators.for_region(region_config,
                                                               args.audit_lookback_days)
            region = region_config.region

        self.run = run_diagnosis(args.interface_id, region, collaborators)
        pulumi.log.info(f"ENI {args.interface_id}: {self.run.outcome.kind}")
        self.outcome = pulumi.Output.from_input(outcome_to_dict(self.run.outcome))
        self.report = pulumi.Output.from_input(render_report(self.run))

        self.register_outputs({
            "outcome": self.outcome,
            "report": self.report,
        })
