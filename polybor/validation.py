"""Bor consensus header validation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from polybor.difficulty import calculate_difficulty
from polybor.extra_data import ExtraData, ExtraDataError
from polybor.seal import SealError, ecrecover_seal

MAX_FUTURE_BLOCK_TIME = 15
"""Maximum allowed clock drift for block timestamps, in seconds."""

_ZERO_HASH = bytes(32)


def _hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


class ValidationError(Exception):
    """A header or block broke a Bor consensus rule."""


class NonZeroNonce(ValidationError):
    def __init__(self) -> None:
        super().__init__("non-zero nonce: expected 0x0000000000000000")


class NonZeroMixHash(ValidationError):
    def __init__(self) -> None:
        super().__init__("non-zero mix hash")


class NonEmptyOmmers(ValidationError):
    def __init__(self) -> None:
        super().__init__("non-empty ommers list")


class InvalidExtraData(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid extra data: {reason}")
        self.reason = reason


class WrongDifficulty(ValidationError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"wrong difficulty: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class FutureBlock(ValidationError):
    def __init__(self, block_time: int, now: int) -> None:
        super().__init__(
            f"block timestamp {block_time} is too far in the future (now={now})"
        )
        self.block_time = block_time
        self.now = now


class UnauthorizedSigner(ValidationError):
    def __init__(self, signer: bytes) -> None:
        super().__init__(f"unauthorized signer: {_hex(signer)}")
        self.signer = signer


class RecentlySigned(ValidationError):
    def __init__(self, signer: bytes) -> None:
        super().__init__(f"signer {_hex(signer)} signed recently")
        self.signer = signer


class SealVerificationError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"seal recovery failed: {reason}")
        self.reason = reason


class InvalidGasLimit(ValidationError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"invalid gas limit: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class InvalidBaseFee(ValidationError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"invalid base fee: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class TimestampNotIncreasing(ValidationError):
    def __init__(self, block_time: int, parent_time: int) -> None:
        super().__init__(
            "block timestamp must be greater than parent: "
            f"block={block_time}, parent={parent_time}"
        )
        self.block_time = block_time
        self.parent_time = parent_time


class NonEmptyWithdrawals(ValidationError):
    def __init__(self) -> None:
        super().__init__("non-empty withdrawals")


class MissingValidatorsAtSpanStart(ValidationError):
    def __init__(self, block: int) -> None:
        super().__init__(f"missing validators at span start block {block}")
        self.block = block


class StateRootMismatch(ValidationError):
    def __init__(self, expected: bytes, got: bytes) -> None:
        super().__init__(
            f"state root mismatch: expected {_hex(expected)}, got {_hex(got)}"
        )
        self.expected = expected
        self.got = got


class ReceiptRootMismatch(ValidationError):
    def __init__(self, expected: bytes, got: bytes) -> None:
        super().__init__(
            f"receipt root mismatch: expected {_hex(expected)}, got {_hex(got)}"
        )
        self.expected = expected
        self.got = got


class GasUsedMismatch(ValidationError):
    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"gas used mismatch: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


@dataclass(frozen=True)
class HeaderValidationParams:
    """The header fields that standalone validation looks at."""

    number: int
    timestamp: int
    nonce: int
    mix_hash: bytes
    difficulty: int
    extra_data: bytes
    gas_limit: int
    seal_hash: bytes
    has_ommers: bool


@dataclass(frozen=True)
class ParentValidationParams:
    """The parent header fields that parent validation looks at."""

    parent_timestamp: int


def validate_header(
    params: HeaderValidationParams,
    authorized_signers: Sequence[bytes],
    recent_signers: Mapping[int, bytes],
    current_time: int,
) -> bytes:
    """Validate a header on its own and return the recovered signer address."""
    if params.nonce != 0:
        raise NonZeroNonce()
    if params.mix_hash != _ZERO_HASH:
        raise NonZeroMixHash()
    if params.has_ommers:
        raise NonEmptyOmmers()

    try:
        extra = ExtraData.parse(params.extra_data)
    except ExtraDataError as exc:
        raise InvalidExtraData(str(exc)) from exc

    if params.timestamp > current_time + MAX_FUTURE_BLOCK_TIME:
        raise FutureBlock(params.timestamp, current_time)

    try:
        signer = ecrecover_seal(params.seal_hash, extra.seal)
    except SealError as exc:
        raise SealVerificationError(str(exc)) from exc

    if signer not in authorized_signers:
        raise UnauthorizedSigner(signer)

    limit = len(authorized_signers) // 2 + 1
    cutoff = max(0, params.number - limit)
    if any(
        recent == signer
        for block, recent in recent_signers.items()
        if cutoff <= block < params.number
    ):
        raise RecentlySigned(signer)

    expected = calculate_difficulty(signer, authorized_signers, params.number)
    if params.difficulty != expected:
        raise WrongDifficulty(expected, params.difficulty)

    return signer


def validate_header_against_parent(
    params: HeaderValidationParams, parent: ParentValidationParams
) -> None:
    """Check that the header's timestamp is strictly after its parent's."""
    if params.timestamp <= parent.parent_timestamp:
        raise TimestampNotIncreasing(params.timestamp, parent.parent_timestamp)