import pytest

from polybor.extra_data import (
    ExtraData,
    ExtraDataError,
    ExtraDataTooShort,
    InvalidValidatorBytes,
)


def test_parse_minimal_extradata():
    data = b"\x01" * 32 + b"\xff" * 65
    extra = ExtraData.parse(data)
    assert extra.vanity == b"\x01" * 32
    assert extra.validator_bytes == b""
    assert len(extra.seal) == 65
    assert all(byte == 0xFF for byte in extra.seal)
    assert extra.validators() == []


def test_parse_with_validators():
    data = bytes(32) + b"\xaa" * 20 + b"\xbb" * 20 + b"\xcc" * 65
    extra = ExtraData.parse(data)
    assert len(extra.validator_bytes) == 40
    assert len(extra.seal) == 65
    assert extra.validators() == [b"\xaa" * 20, b"\xbb" * 20]


def test_reject_short_extradata():
    with pytest.raises(ExtraDataTooShort) as info:
        ExtraData.parse(bytes(96))
    assert info.value.length == 96
    assert "minimum is 97" in str(info.value)


def test_validator_extraction():
    validators = b"".join(bytes([i + 1]) * 20 for i in range(3))
    extra = ExtraData.parse(bytes(32) + validators + b"\xff" * 65)
    assert extra.validators() == [b"\x01" * 20, b"\x02" * 20, b"\x03" * 20]


def test_reject_partial_validator_bytes():
    with pytest.raises(InvalidValidatorBytes) as info:
        ExtraData.parse(bytes(97 + 21))
    assert info.value.length == 21
    assert isinstance(info.value, ExtraDataError)


def test_parse_accepts_bytearray():
    extra = ExtraData.parse(bytearray(97))
    assert extra.seal == bytes(65)
    assert extra.vanity == bytes(32)