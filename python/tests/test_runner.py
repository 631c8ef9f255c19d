"""
Tests for run wiring and report rendering.
"""

import unittest
from unittest import mock
from eni_diagnostics import collectors
from eni_diagnostics.errors import NotFoundError
from eni_diagnostics.models import (
    AuditEvent,
    ExactMatchFound,
    ExternalModificationSuspected,
    FunctionNetworkConfig,
    NetworkInterfaceInfo,
    NoCandidateFunctions,
    NoExactMatchNoModification,
)
from eni_diagnostics.regions import RegionConfig
from eni_diagnostics.report import outcome_to_dict, render_report
from eni_diagnostics.runner import DiagnosticCollaborators, DiagnosticRun, run_diagnosis

ENI_ID = "eni-0a1b2c3d4e5f60718"
F1 = "arn:aws:lambda:us-east-1:123456789012:function:f1"

def _collaborators(functions, events=(), interface_error=None):
    calls = {"audit": 0, "subnet": None}

    def fetch_interface_info(interface_id, region):
        if interface_error is not None:
            raise interface_error
        return NetworkInterfaceInfo(id=interface_id, subnet_id="subnet-1",
                                    security_group_ids=["sg-1"])

    def fetch_functions_in_subnet(subnet_id, region):
        calls["subnet"] = subnet_id
        return functions

    def fetch_audit_events(interface_id, region):
        calls["audit"] += 1
        return list(events)

    return DiagnosticCollaborators(fetch_interface_info, fetch_functions_in_subnet,
                                   fetch_audit_events), calls

class TestRunDiagnosis(unittest.TestCase):
    def test_functions_are_fetched_for_the_interface_subnet(self):
        functions = [FunctionNetworkConfig(F1, ["subnet-1"], ["sg-1"])]
        collaborators, calls = _collaborators(functions)

        run = run_diagnosis(ENI_ID, "us-east-1", collaborators)

        self.assertEqual(calls["subnet"], "subnet-1")
        self.assertEqual(run.outcome, ExactMatchFound((F1,)))
        self.assertEqual(calls["audit"], 0)

    def test_audit_lookup_is_bound_to_the_interface(self):
        functions = [FunctionNetworkConfig(F1, ["subnet-1"], ["sg-1", "sg-9"])]
        event = AuditEvent("ModifyNetworkInterfaceAttribute",
                           {"networkInterfaceId": ENI_ID, "groupSet": [{"groupId": "sg-1"}]})
        collaborators, calls = _collaborators(functions, events=[event])

        run = run_diagnosis(ENI_ID, "us-east-1", collaborators)

        self.assertEqual(run.outcome, ExternalModificationSuspected((F1,)))
        self.assertEqual(calls["audit"], 1)

    def test_lookup_errors_propagate(self):
        collaborators, _ = _collaborators([], interface_error=NotFoundError("missing", ENI_ID))

        with self.assertRaises(NotFoundError):
            run_diagnosis(ENI_ID, "us-east-1", collaborators)

    @mock.patch.object(collectors, "fetch_audit_events")
    @mock.patch.object(collectors, "fetch_interface_info")
    def test_for_aws_binds_provider_and_lookback(self, fetch_interface_info, fetch_audit_events):
        provider = object()
        collaborators = DiagnosticCollaborators.for_aws(provider, audit_lookback_days=30)

        collaborators.fetch_interface_info(ENI_ID, "us-east-1")
        collaborators.fetch_audit_events(ENI_ID, "us-east-1")

        fetch_interface_info.assert_called_once_with(ENI_ID, "us-east-1", provider=provider)
        fetch_audit_events.assert_called_once_with(ENI_ID, "us-east-1", lookback_days=30, profile=None)

    @mock.patch.object(collectors.command.local, "run")
    def test_for_aws_sends_profile_to_cli_lookups(self, run):
        run.return_value = mock.Mock(stdout="{}", stderr="")
        collaborators = DiagnosticCollaborators.for_aws(provider=None, profile="prod-readonly")

        collaborators.fetch_functions_in_subnet("subnet-1", "us-east-1")
        collaborators.fetch_audit_events(ENI_ID, "us-east-1")

        for call in run.call_args_list:
            self.assertIn("--profile prod-readonly", call.kwargs["command"])
        self.assertEqual(run.call_count, 2)

    @mock.patch.object(collectors, "fetch_functions_in_subnet")
    @mock.patch.object(collectors, "fetch_interface_info")
    def test_for_region_shares_provider_and_profile(self, fetch_interface_info, fetch_functions_in_subnet):
        provider = object()
        region_config = RegionConfig(region="eu-west-1", profile="audit", provider=provider)
        collaborators = DiagnosticCollaborators.for_region(region_config)

        collaborators.fetch_interface_info(ENI_ID, "eu-west-1")
        collaborators.fetch_functions_in_subnet("subnet-1", "eu-west-1")

        fetch_interface_info.assert_called_once_with(ENI_ID, "eu-west-1", provider=provider)
        fetch_functions_in_subnet.assert_called_once_with("subnet-1", "eu-west-1", profile="audit")

class TestReport(unittest.TestCase):
    def _run(self, outcome):
        interface = NetworkInterfaceInfo(ENI_ID, "subnet-1", ["sg-2", "sg-1"])
        return DiagnosticRun("us-east-1", interface, [], outcome)

    def test_header(self):
        report = render_report(self._run(NoCandidateFunctions()))

        self.assertIn(f"ENI: {ENI_ID} (us-east-1)", report)
        self.assertIn("Subnet: subnet-1", report)
        self.assertIn("Security groups: sg-1, sg-2", report)
        self.assertIn("asynchronous cleanup", report)

    def test_lists_function_arns(self):
        self.assertIn(f"  - {F1}", render_report(self._run(ExactMatchFound((F1,)))))
        self.assertIn(f"  - {F1}", render_report(self._run(ExternalModificationSuspected((F1,)))))

    def test_inconclusive_recommends_waiting(self):
        report = render_report(self._run(NoExactMatchNoModification()))

        self.assertIn("reclamation window", report)

    def test_outcome_to_dict(self):
        self.assertEqual(outcome_to_dict(ExternalModificationSuspected((F1,))),
                         {"outcome": "ExternalModificationSuspected", "functionArns": [F1]})
        self.assertEqual(outcome_to_dict(NoCandidateFunctions()),
                         {"outcome": "NoCandidateFunctions", "functionArns": []})

if __name__ == '__main__':
    unittest.main()
