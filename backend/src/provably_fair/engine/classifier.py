from __future__ import annotations


def classify(value: int, outcome_count: int) -> int:
    # Plain modulo, no rejection sampling.
    if outcome_count < 1:
        raise ValueError(f"outcome_count must be >= 1, got {outcome_count}")
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    return value % outcome_count
