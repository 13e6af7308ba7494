"""Bor difficulty: in-turn and out-of-turn proposer priority."""

from __future__ import annotations

from collections.abc import Sequence


def diff_inturn(validator_count: int) -> int:
    """Difficulty of the in-turn proposer: the size of the validator set."""
    if validator_count < 0:
        raise ValueError(f"validator count must not be negative: {validator_count}")
    return int(validator_count)


def diff_noturn(validator_count: int, distance: int) -> int:
    """Difficulty of a backup proposer: set size minus distance, at least 1."""
    if distance >= validator_count:
        return 1
    return max(validator_count - distance, 1)


def is_inturn(signer: bytes, validators: Sequence[bytes], block_number: int) -> bool:
    """Whether the signer is the in-turn proposer for the block."""
    if not validators:
        return False
    return validators[block_number % len(validators)] == signer


def calculate_difficulty(
    signer: bytes, validators: Sequence[bytes], block_number: int
) -> int:
    """Expected difficulty of a block sealed by the signer.

    In-turn signers get the validator count; others get the count minus their
    circular distance from the in-turn position, at least 1. A signer outside
    the set, or an empty set, gives 1.
    """
    if not validators:
        return 1
    count = len(validators)
    inturn_idx = block_number % count
    try:
        signer_idx = list(validators).index(signer)
    except ValueError:
        return 1
    if signer_idx == inturn_idx:
        return diff_inturn(count)
    if signer_idx > inturn_idx:
        distance = signer_idx - inturn_idx
    else:
        distance = count - inturn_idx + signer_idx
    return diff_noturn(count, distance)