def round_half_up(numerator: int, denominator: int) -> int:
    """Integer nearest to numerator/denominator, halves rounded up.

    Both arguments are non-negative integers; a zero denominator gives 0.
    """
    if denominator <= 0:
        return 0
    return (2 * numerator + denominator) // (2 * denominator)


def percentage(part: int, total: int) -> int:
    """``part`` of ``total`` as a whole percent (0 when total is 0)."""
    return round_half_up(100 * part, total)


def average(values) -> int:
    values = list(values)
    if not values:
        return 0
    return round_half_up(sum(values), len(values))
