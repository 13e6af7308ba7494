"""Block-level Bor validation before and after execution."""

from __future__ import annotations

from collections.abc import Sequence

from polybor.extra_data import ExtraData, ExtraDataError
from polybor.validation import (
    GasUsedMismatch,
    InvalidExtraData,
    MissingValidatorsAtSpanStart,
    NonEmptyOmmers,
    NonEmptyWithdrawals,
    ReceiptRootMismatch,
    StateRootMismatch,
)


def _hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def validate_block_pre_execution(
    block_number: int,
    extra_data: bytes,
    has_ommers: bool,
    has_withdrawals: bool,
    span_size: int,
    expected_validators: Sequence[bytes] | None = None,
) -> None:
    """Check body constraints and, at span starts, the validator list in extra data."""
    if has_ommers:
        raise NonEmptyOmmers()
    if has_withdrawals:
        raise NonEmptyWithdrawals()

    if block_number <= 0 or block_number % span_size != 0:
        return

    try:
        parsed = ExtraData.parse(extra_data)
    except ExtraDataError as exc:
        raise InvalidExtraData(str(exc)) from exc

    validators = parsed.validators()
    if not validators:
        raise MissingValidatorsAtSpanStart(block_number)

    if expected_validators is None:
        return
    if len(validators) != len(expected_validators):
        raise InvalidExtraData(
            f"expected {len(expected_validators)} validators at span start, "
            f"got {len(validators)}"
        )
    for index, (got, want) in enumerate(zip(validators, expected_validators)):
        if got != want:
            raise InvalidExtraData(
                f"validator mismatch at index {index}: got {_hex(got)}, "
                f"expected {_hex(want)}"
            )


def validate_block_post_execution(
    expected_state_root: bytes,
    actual_state_root: bytes,
    expected_receipt_root: bytes,
    actual_receipt_root: bytes,
    expected_gas_used: int,
    actual_gas_used: int,
) -> None:
    """Check state root, receipt root and gas used against the executed result."""
    if expected_state_root != actual_state_root:
        raise StateRootMismatch(expected_state_root, actual_state_root)
    if expected_receipt_root != actual_receipt_root:
        raise ReceiptRootMismatch(expected_receipt_root, actual_receipt_root)
    if expected_gas_used != actual_gas_used:
        raise GasUsedMismatch(expected_gas_used, actual_gas_used)