"""
Examples for using the ENI diagnostic engine and component.
"""

import pulumi
from eni_diagnostics.component import ENIDiagnosticComponent, ENIDiagnosticOptions
from eni_diagnostics.diagnosis import diagnose
from eni_diagnostics.models import AuditEvent, FunctionNetworkConfig, NetworkInterfaceInfo
from eni_diagnostics.report import render_report
from eni_diagnostics.runner import DiagnosticCollaborators, run_diagnosis

def offline_diagnosis_example():
    """Example diagnosing an ENI from already collected data."""

    eni = NetworkInterfaceInfo(
        id='eni-0a1b2c3d4e5f60718',
        subnet_id='subnet-11111111',
        security_group_ids=['sg-1'],
    )

    functions = [
        FunctionNetworkConfig(
            arn='arn:aws:lambda:us-east-1:123456789012:function:orders:3',
            subnet_ids=['subnet-11111111', 'subnet-22222222'],
            security_group_ids=['sg-1', 'sg-9'],
        ),
    ]

    # Only consulted because no version matches the ENI's security groups exactly
    def fetch_audit_events():
        return [AuditEvent(
            event_name='ModifyNetworkInterfaceAttribute',
            raw_payload={
                'eventName': 'ModifyNetworkInterfaceAttribute',
                'requestParameters': {
                    'networkInterfaceId': eni.id,
                    'groupSet': {'items': [{'groupId': 'sg-1'}]},
                },
            },
        )]

    return diagnose(eni, functions, fetch_audit_events)

def live_diagnosis_example(interface_id, region='us-east-1'):
    """Example running a live diagnosis and printing the report."""

    run = run_diagnosis(interface_id, region, DiagnosticCollaborators.for_aws())
    print(render_report(run))
    return run.outcome

def component_example():
    """Example using the ENIDiagnosticComponent inside a Pulumi program."""

    diagnostic = ENIDiagnosticComponent('leftover-eni', ENIDiagnosticOptions(
        interface_id='eni-0a1b2c3d4e5f60718',
        region='us-west-2',
        audit_lookback_days=14,
    ))

    pulumi.export('leftover-eni-report', diagnostic.report)
    return diagnostic
