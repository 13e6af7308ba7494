"""Parsing of Bor header extra data: vanity, validator bytes and seal."""

from __future__ import annotations

from dataclasses import dataclass

from polybor.constants import EXTRADATA_SEAL_LEN, EXTRADATA_VANITY_LEN

MIN_EXTRA_DATA_LEN = EXTRADATA_VANITY_LEN + EXTRADATA_SEAL_LEN
ADDRESS_LEN = 20


class ExtraDataError(ValueError):
    """Header extra data is malformed."""


class ExtraDataTooShort(ExtraDataError):
    """Extra data is shorter than vanity plus seal."""

    def __init__(self, length: int) -> None:
        super().__init__(
            f"extra data too short: {length} bytes, minimum is {MIN_EXTRA_DATA_LEN}"
        )
        self.length = length


class InvalidValidatorBytes(ExtraDataError):
    """Validator bytes are not a whole number of addresses."""

    def __init__(self, length: int) -> None:
        super().__init__(
            f"validator bytes length {length} is not a multiple of {ADDRESS_LEN}"
        )
        self.length = length


@dataclass(frozen=True)
class ExtraData:
    """Extra data laid out as vanity (32) | validators (N * 20) | seal (65)."""

    vanity: bytes
    validator_bytes: bytes
    seal: bytes

    @classmethod
    def parse(cls, extra: bytes) -> ExtraData:
        """Split raw extra data into its parts."""
        if len(extra) < MIN_EXTRA_DATA_LEN:
            raise ExtraDataTooShort(len(extra))
        validator_len = len(extra) - MIN_EXTRA_DATA_LEN
        if validator_len % ADDRESS_LEN:
            raise InvalidValidatorBytes(validator_len)
        end = EXTRADATA_VANITY_LEN + validator_len
        return cls(
            vanity=bytes(extra[:EXTRADATA_VANITY_LEN]),
            validator_bytes=bytes(extra[EXTRADATA_VANITY_LEN:end]),
            seal=bytes(extra[end:]),
        )

    def validators(self) -> list[bytes]:
        """The validator addresses held in the validator bytes."""
        data = self.validator_bytes
        return [data[start : start + ADDRESS_LEN] for start in range(0, len(data), ADDRESS_LEN)]