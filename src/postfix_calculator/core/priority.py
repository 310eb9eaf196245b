"""Operator priority bands."""

# Highest priority first. Operators within a band are applied left to right.
PRIORITY_BANDS: tuple[str, ...] = ("^", "*/%", "+-")

# Mapping of operator symbols to band index (0 is the highest priority)
OPERATOR_BANDS: dict[str, int] = {
    op: band for band, ops in enumerate(PRIORITY_BANDS) for op in ops
}


def priority_band(op: str) -> int:
    """
    Return the priority band of an operator.

    :param str op: Operator character

    :return: 0 for ``^``, 1 for ``* / %``, 2 for ``+ -``
    :rtype: int
    :raises KeyError: If ``op`` is not an operator
    """
    return OPERATOR_BANDS[op]


def is_higher_priority(current: str, other: str) -> bool:
    """Return True if ``current`` binds strictly tighter than ``other``."""
    return priority_band(current) < priority_band(other)
