"""
Display helpers for coverage figures.
"""


def percentage_string(total: float, part: float, digits: int = 2) -> str:
    """
    Format part / total as a percentage string without the % sign.

    Values below 1% keep `digits` decimals so that small gaps stay visible,
    everything else is rounded to a whole number.

    Args:
        total: Denominator
        part: Numerator
        digits: Decimals used for values below 1%

    Returns:
        Formatted percentage, "0" when total is 0
    """
    if total == 0:
        return "0"

    percent = part / total * 100
    if percent < 1:
        return f"{percent:.{digits}f}"
    return f"{percent:.0f}"
