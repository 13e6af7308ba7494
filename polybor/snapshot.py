"""Bor consensus snapshot: validator set and recent signers at a block."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from polybor.proposer import Validator, ValidatorSet


def _hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def _unhex(text: str) -> bytes:
    return bytes.fromhex(text[2:] if text.startswith(("0x", "0X")) else text)


def _validator_to_json(validator: Validator) -> dict[str, Any]:
    return {
        "id": validator.id,
        "address": _hex(validator.address),
        "voting_power": validator.voting_power,
        "signer": _hex(validator.signer),
        "proposer_priority": validator.proposer_priority,
    }


def _validator_from_json(data: dict[str, Any]) -> Validator:
    return Validator(
        id=int(data["id"]),
        address=_unhex(data["address"]),
        voting_power=int(data["voting_power"]),
        signer=_unhex(data["signer"]),
        proposer_priority=int(data["proposer_priority"]),
    )


@dataclass
class BorSnapshot:
    """Consensus state at a block."""

    number: int
    hash: bytes
    validator_set: ValidatorSet
    recents: dict[int, bytes] = field(default_factory=dict)

    def apply(self, block_number: int, signer: bytes) -> None:
        """Move to a new block, recording its signer and pruning old ones."""
        self.number = block_number
        self.recents[block_number] = signer
        count = len(self.validator_set.validators)
        if count > 0:
            cutoff = max(0, block_number - (count // 2 + 1))
            self.recents = {
                block: recent
                for block, recent in sorted(self.recents.items())
                if block >= cutoff
            }

    def is_authorized(self, addr: bytes) -> bool:
        """Whether the address is a signer in the validator set."""
        return any(v.signer == addr for v in self.validator_set.validators)

    def encode(self) -> bytes:
        """Serialise to JSON bytes."""
        proposer = self.validator_set.proposer
        document = {
            "number": self.number,
            "hash": _hex(self.hash),
            "validator_set": {
                "validators": [
                    _validator_to_json(v) for v in self.validator_set.validators
                ],
                "proposer": None if proposer is None else _validator_to_json(proposer),
            },
            "recents": {
                str(block): _hex(signer) for block, signer in sorted(self.recents.items())
            },
        }
        return json.dumps(document, separators=(",", ":")).encode()

    @classmethod
    def decode(cls, data: bytes) -> BorSnapshot:
        """Deserialise from JSON bytes; raise ValueError if malformed."""
        try:
            document = json.loads(data)
            vs = document["validator_set"]
            proposer = vs.get("proposer")
            validator_set = ValidatorSet(
                validators=[_validator_from_json(v) for v in vs["validators"]],
                proposer=None if proposer is None else _validator_from_json(proposer),
            )
            return cls(
                number=int(document["number"]),
                hash=_unhex(document["hash"]),
                validator_set=validator_set,
                recents={
                    int(block): _unhex(signer)
                    for block, signer in document["recents"].items()
                },
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid snapshot: {exc}") from exc