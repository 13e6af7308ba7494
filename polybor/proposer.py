"""Weighted round-robin proposer selection over a validator set."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


@dataclass
class Validator:
    """A validator with its voting power and proposer priority."""

    id: int
    address: bytes
    voting_power: int
    signer: bytes
    proposer_priority: int = 0


@dataclass
class ValidatorSet:
    """An ordered set of validators and the last selected proposer."""

    validators: list[Validator] = field(default_factory=list)
    proposer: Validator | None = None


def select_proposer(validator_set: ValidatorSet) -> bytes:
    """Advance the set by one round and return the selected proposer's signer.

    Every priority grows by its voting power; the highest priority wins (the
    last one on a tie) and has the total voting power taken off.
    """
    validators = validator_set.validators
    if not validators:
        raise ValueError("validator set must not be empty")

    total_voting_power = sum(v.voting_power for v in validators)
    for validator in validators:
        validator.proposer_priority += validator.voting_power

    selected = validators[0]
    for validator in validators:
        if validator.proposer_priority >= selected.proposer_priority:
            selected = validator

    selected.proposer_priority -= total_voting_power
    validator_set.proposer = dataclasses.replace(selected)
    return selected.signer


def get_sprint_producer(validator_set: ValidatorSet, sprint_number: int) -> bytes:
    """The block producer for a sprint; advances the validator set by one round."""
    del sprint_number
    return select_proposer(validator_set)