"""Bor header seal hashing and signer recovery."""

from __future__ import annotations

from dataclasses import dataclass

from polybor.constants import EXTRADATA_SEAL_LEN
from polybor.ecdsa import keccak256, recover_address

EMPTY_OMMER_ROOT_HASH = bytes.fromhex(
    "1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347"
)
EMPTY_ROOT_HASH = bytes.fromhex(
    "56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421"
)


class SealError(Exception):
    """The seal of a header could not be verified."""


def _length_prefix(length: int, offset: int) -> bytes:
    if length < 56:
        return bytes([offset + length])
    encoded = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([offset + 55 + len(encoded)]) + encoded


def _rlp_bytes(data: bytes) -> bytes:
    if len(data) == 1 and data[0] < 0x80:
        return bytes(data)
    return _length_prefix(len(data), 0x80) + bytes(data)


def _rlp_int(value: int) -> bytes:
    if value < 0:
        raise ValueError("cannot encode a negative integer")
    return _rlp_bytes(value.to_bytes((value.bit_length() + 7) // 8, "big"))


def _rlp_list(payload: bytes) -> bytes:
    return _length_prefix(len(payload), 0xC0) + payload


@dataclass(frozen=True)
class Header:
    """An Ethereum-style block header as used by Bor."""

    parent_hash: bytes = bytes(32)
    ommers_hash: bytes = EMPTY_OMMER_ROOT_HASH
    beneficiary: bytes = bytes(20)
    state_root: bytes = EMPTY_ROOT_HASH
    transactions_root: bytes = EMPTY_ROOT_HASH
    receipts_root: bytes = EMPTY_ROOT_HASH
    logs_bloom: bytes = bytes(256)
    difficulty: int = 0
    number: int = 0
    gas_limit: int = 0
    gas_used: int = 0
    timestamp: int = 0
    extra_data: bytes = b""
    mix_hash: bytes = bytes(32)
    nonce: bytes = bytes(8)
    base_fee_per_gas: int | None = None
    withdrawals_root: bytes | None = None
    blob_gas_used: int | None = None
    excess_blob_gas: int | None = None
    parent_beacon_block_root: bytes | None = None
    requests_hash: bytes | None = None

    def _encode(self, extra_data: bytes) -> bytes:
        parts = [
            _rlp_bytes(self.parent_hash),
            _rlp_bytes(self.ommers_hash),
            _rlp_bytes(self.beneficiary),
            _rlp_bytes(self.state_root),
            _rlp_bytes(self.transactions_root),
            _rlp_bytes(self.receipts_root),
            _rlp_bytes(self.logs_bloom),
            _rlp_int(self.difficulty),
            _rlp_int(self.number),
            _rlp_int(self.gas_limit),
            _rlp_int(self.gas_used),
            _rlp_int(self.timestamp),
            _rlp_bytes(extra_data),
            _rlp_bytes(self.mix_hash),
            _rlp_bytes(self.nonce),
        ]
        if self.base_fee_per_gas is not None:
            parts.append(_rlp_int(self.base_fee_per_gas))
        if self.withdrawals_root is not None:
            parts.append(_rlp_bytes(self.withdrawals_root))
        if self.blob_gas_used is not None:
            parts.append(_rlp_int(self.blob_gas_used))
        if self.excess_blob_gas is not None:
            parts.append(_rlp_int(self.excess_blob_gas))
        if self.parent_beacon_block_root is not None:
            parts.append(_rlp_bytes(self.parent_beacon_block_root))
        if self.requests_hash is not None:
            parts.append(_rlp_bytes(self.requests_hash))
        return _rlp_list(b"".join(parts))

    def hash(self) -> bytes:
        """The block hash: keccak256 of the RLP-encoded header."""
        return keccak256(self._encode(self.extra_data))


def compute_seal_hash(header: Header) -> bytes:
    """Keccak256 of the RLP header with the 65-byte seal stripped from extra data."""
    extra = header.extra_data
    trimmed = extra[: max(0, len(extra) - EXTRADATA_SEAL_LEN)]
    return keccak256(header._encode(trimmed))


def ecrecover_seal(seal_hash: bytes, signature: bytes) -> bytes:
    """Recover the signer address from a seal hash and 65-byte r|s|v signature."""
    if len(signature) != 65:
        raise SealError(f"invalid signature length: expected 65, got {len(signature)}")
    try:
        return recover_address(seal_hash, signature)
    except ValueError as exc:
        raise SealError(f"recovery failed: {exc}") from exc