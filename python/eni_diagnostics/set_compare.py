"""
Order-independent comparison of security group id collections.
"""

from typing import Iterable


def equal_sets(a: Iterable[str], b: Iterable[str]) -> bool:
    """
    Checks whether two collections hold exactly the same identifiers.

    Duplicates and ordering are ignored, so ["sg-2", "sg-1"] equals
    {"sg-1", "sg-2"}. Two empty collections are equal.

    Args:
        a: First collection of identifiers
        b: Second collection of identifiers

    Returns:
        True if both collections contain the same distinct elements
    """
    return frozenset(a) == frozenset(b)
