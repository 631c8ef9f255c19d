"""
Module for fetching ENI, Lambda and CloudTrail data for a diagnostic run.

Interface metadata comes from the pulumi-aws provider. Lambda versions and
CloudTrail events have no provider data source, so they are read through the
AWS CLI using the pulumi-command local.run invoke.
"""

import json
import logging
import shlex
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import pulumi
import pulumi_aws as aws
import pulumi_command as command
from .errors import MalformedInputError, classify_error
from .models import AuditEvent, FunctionNetworkConfig, NetworkInterfaceInfo

logger = logging.getLogger(__name__)

MODIFY_INTERFACE_EVENT = "ModifyNetworkInterfaceAttribute"
DEFAULT_AUDIT_LOOKBACK_DAYS = 7

def fetch_interface_info(interface_id: str,
                         region: str,
                         provider: Optional[aws.Provider] = None) -> NetworkInterfaceInfo:
    """
    Looks up the subnet and security groups of a network interface.

    Args:
        interface_id: ID of the ENI, e.g. eni-0123456789abcdef0
        region: AWS region the ENI lives in
        provider: Optional AWS provider scoped to the region

    Returns:
        Snapshot of the interface

    Raises:
        NotFoundError, UnauthorizedError or TransientError if the lookup fails
    """
    logger.debug(f"Describing network interface {interface_id} in {region}")
    opts = pulumi.InvokeOptions(provider=provider) if provider is not None else None
    try:
        result = aws.ec2.get_network_interface(id=interface_id, region=region, opts=opts)
    except Exception as e:
        raise classify_error(e, interface_id) from e

    return NetworkInterfaceInfo(
        id=result.id or interface_id,
        subnet_id=result.subnet_id,
        security_group_ids=result.security_groups or [],
    )

def fetch_functions_in_subnet(subnet_id: str,
                              region: str,
                              profile: Optional[str] = None) -> List[FunctionNetworkConfig]:
    """
    Lists every Lambda function version whose VPC configuration uses the subnet.

    Args:
        subnet_id: Subnet of the ENI under diagnosis
        region: AWS region to scan
        profile: Optional AWS CLI profile, matching the one used for the ENI lookup

    Returns:
        Matching function versions in the order Lambda returned them
    """
    response = run_aws_cli(["lambda", "list-functions", "--function-version", "ALL"],
                           region, profile)

    functions = []
    for function in response.get("Functions") or []:
        vpc_config = function.get("VpcConfig") or {}
        subnet_ids = vpc_config.get("SubnetIds") or []
        if subnet_id not in subnet_ids:
            continue
        functions.append(FunctionNetworkConfig(
            arn=function["FunctionArn"],
            subnet_ids=subnet_ids,
            security_group_ids=vpc_config.get("SecurityGroupIds") or [],
        ))

    logger.debug(f"{len(functions)} function version(s) use subnet {subnet_id}")
    return functions

def fetch_audit_events(interface_id: str,
                       region: str,
                       lookback_days: int = DEFAULT_AUDIT_LOOKBACK_DAYS,
                       now: Optional[datetime] = None,
                       profile: Optional[str] = None) -> List[AuditEvent]:
    """
    Fetches the ModifyNetworkInterfaceAttribute calls recorded against an ENI.

    Args:
        interface_id: ID of the ENI
        region: AWS region of the trail lookup
        lookback_days: How far back to search the event history
        now: Reference time for the lookback window, defaults to the current UTC time
        profile: Optional AWS CLI profile

    Returns:
        Audit events in the order CloudTrail returned them
    """
    now = now or datetime.now(timezone.utc)
    start_time = (now - timedelta(days=lookback_days)).strftime("%Y-%m-%dT%H:%M:%SZ")

    response = run_aws_cli([
        "cloudtrail", "lookup-events",
        "--lookup-attributes", f"AttributeKey=ResourceName,AttributeValue={interface_id}",
        "--start-time", start_time,
    ], region, profile)

    events = []
    for event in response.get("Events") or []:
        if event.get("EventName") != MODIFY_INTERFACE_EVENT:
            continue
        raw_payload = event.get("CloudTrailEvent")
        events.append(AuditEvent(
            event_name=event["EventName"],
            raw_payload=raw_payload,
            has_error=_has_error(raw_payload),
        ))

    logger.debug(f"{len(events)} {MODIFY_INTERFACE_EVENT} event(s) found for {interface_id}")
    return events

def run_aws_cli(args: List[str], region: str, profile: Optional[str] = None) -> Dict[str, Any]:
    """
    Runs a read-only AWS CLI command and returns its parsed JSON output.

    Args:
        args: CLI arguments after "aws"
        region: Region passed with --region
        profile: Named profile passed with --profile, if any

    Returns:
        The decoded JSON document, or an empty dict for empty output
    """
    cli_args = ["aws", *args, "--region", region, "--output", "json"]
    if profile:
        cli_args += ["--profile", profile]
    cli_command = " ".join(shlex.quote(arg) for arg in cli_args)
    logger.debug(f"Running: {cli_command}")

    try:
        result = command.local.run(command=cli_command)
    except Exception as e:
        raise classify_error(e) from e

    stdout = (result.stdout or "").strip()
    if not stdout:
        return {}
    try:
        document = json.loads(stdout)
    except ValueError as e:
        raise MalformedInputError(f"Unparseable output from '{cli_command}': {e}") from e
    if not isinstance(document, dict):
        raise MalformedInputError(f"Expected a JSON object from '{cli_command}'")
    return document

def _has_error(raw_payload: Any) -> bool:
    # An event we cannot read is never evidence of a change
    if not isinstance(raw_payload, str):
        return True
    try:
        payload = json.loads(raw_payload)
    except ValueError:
        return True
    if not isinstance(payload, dict):
        return True
    return bool(payload.get("errorCode"))
