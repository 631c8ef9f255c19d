"""
Main entry point for the Pulumi program that diagnoses a leftover Lambda ENI.

Example:
    pulumi config set interfaceId eni-0123456789abcdef0
    pulumi config set region us-west-2
    pulumi up
"""

import pulumi
from eni_diagnostics.component import ENIDiagnosticComponent, load_options

# Get config values
options = load_options()

diagnostic = ENIDiagnosticComponent(options.interface_id, options)

pulumi.export("diagnosis", diagnostic.outcome)
pulumi.export("report", diagnostic.report)
