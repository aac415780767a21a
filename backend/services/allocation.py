import math


def allocate(requested_count: int, chunk_count: int, delivered: int, chunk_index: int) -> int:
    """
    How many items to ask for from chunk `chunk_index`, given how many have been
    delivered so far. The last chunk absorbs whatever is still missing; earlier
    chunks take an even (rounded up) share of the remainder. Returns 0 once the
    requested total is met.
    """
    remaining_needed = requested_count - delivered
    if remaining_needed <= 0:
        return 0
    if chunk_index >= chunk_count - 1:
        return remaining_needed
    return math.ceil(remaining_needed / (chunk_count - chunk_index))


def plan_targets(requested_count: int, chunk_count: int) -> list[int]:
    """Targets for every chunk, assuming each one delivers its target in full."""
    targets = []
    delivered = 0
    for i in range(chunk_count):
        target = allocate(requested_count, chunk_count, delivered, i)
        targets.append(target)
        delivered += target
    return targets
