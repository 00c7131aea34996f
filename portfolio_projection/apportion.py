"""Proportional split of an amount over bounded capacities."""


def apportion(amount: float, capacities: list[float]) -> list[float]:
    """Split amount across capacities in proportion to their size.

    If amount covers the total capacity every capacity is drained in full.
    Otherwise each take is amount × capacity / total, so the takes sum to amount.
    Negative capacities count as empty; a non-positive total yields all zeros.
    """
    caps = [max(0.0, c) for c in capacities]
    total = sum(caps)
    if total <= 0 or amount <= 0:
        return [0.0 for _ in caps]
    if amount >= total:
        return caps
    takes = [amount * c / total for c in caps]
    # Absorb floating-point residue in the largest take so the sum is exact.
    residue = amount - sum(takes)
    if residue:
        largest = max(range(len(takes)), key=lambda i: takes[i])
        takes[largest] += residue
    return takes


def take_up_to(amount: float, capacity: float) -> float:
    """Amount drawn from a single capacity-bounded source."""
    return apportion(amount, [capacity])[0]
