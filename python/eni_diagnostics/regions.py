"""
Module for configuring region-scoped AWS providers.
"""

from dataclasses import dataclass
from typing import Optional
import pulumi
import pulumi_aws as aws

@dataclass(frozen=True)
class RegionConfig:
    """
    AWS access settings for the diagnosed region.

    The provider serves the ENI lookup; region and profile are handed to the
    AWS CLI calls so every lookup in a run reads the same account and region.
    """

    region: str
    profile: Optional[str] = None
    provider: Optional[aws.Provider] = None

def configure_region(region: str,
                     profile: Optional[str] = None,
                     opts: Optional[pulumi.ResourceOptions] = None) -> RegionConfig:
    """
    Creates an explicit AWS provider for the region being diagnosed.

    Args:
        region: AWS region the ENI lives in
        profile: Optional AWS profile to use
        opts: Optional resource options for the provider, e.g. a parent

    Returns:
        The region configuration holding the provider
    """
    provider = aws.Provider(f"aws-{region}",
                           region=region,
                           profile=profile,
                           opts=opts)

    return RegionConfig(
        region=region,
        profile=profile,
        provider=provider
    )
