"""
Module for matching Lambda function versions against an ENI's security groups.
"""

from typing import Iterable, List, Sequence
from .models import FunctionNetworkConfig
from .set_compare import equal_sets

def find_exact_matches(target: Iterable[str],
                       candidates: Sequence[FunctionNetworkConfig]) -> List[str]:
    """
    Finds the function versions whose security group set is exactly the target set.

    Lambda binds a function version to one security group set at a time, so a
    subset or superset is never a match.

    Args:
        target: Security group ids attached to the ENI
        candidates: Function versions already filtered to the ENI's subnet

    Returns:
        ARNs of the matching versions, in candidate order
    """
    target_ids = frozenset(target)
    return [candidate.arn for candidate in candidates
            if equal_sets(target_ids, candidate.security_group_ids)]
