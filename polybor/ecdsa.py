"""Keccak-256 hashing and secp256k1 recoverable signatures."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Iterator
from typing import Optional, Tuple

from Crypto.Hash import keccak

_P = 2**256 - 2**32 - 977
_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)

_Point = Optional[Tuple[int, int]]


def keccak256(data: bytes) -> bytes:
    """The 32-byte Keccak-256 digest of the data."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def _add(a: _Point, b: _Point) -> _Point:
    if a is None:
        return b
    if b is None:
        return a
    x1, y1 = a
    x2, y2 = b
    if x1 == x2:
        if (y1 + y2) % _P == 0:
            return None
        slope = 3 * x1 * x1 * pow(2 * y1, -1, _P) % _P
    else:
        slope = (y2 - y1) * pow(x2 - x1, -1, _P) % _P
    x3 = (slope * slope - x1 - x2) % _P
    y3 = (slope * (x1 - x3) - y1) % _P
    return (x3, y3)


def _mul(scalar: int, point: _Point) -> _Point:
    result: _Point = None
    addend = point
    while scalar:
        if scalar & 1:
            result = _add(result, addend)
        addend = _add(addend, addend)
        scalar >>= 1
    return result


def _scalar(secret: bytes) -> int:
    if len(secret) != 32:
        raise ValueError(f"private key must be 32 bytes, got {len(secret)}")
    value = int.from_bytes(secret, "big")
    if not 1 <= value < _N:
        raise ValueError("private key is out of range")
    return value


def _check_hash(message_hash: bytes) -> int:
    if len(message_hash) != 32:
        raise ValueError(f"message hash must be 32 bytes, got {len(message_hash)}")
    return int.from_bytes(message_hash, "big")


def _point_address(point: Tuple[int, int]) -> bytes:
    x, y = point
    return keccak256(x.to_bytes(32, "big") + y.to_bytes(32, "big"))[12:]


def private_key_to_address(secret: bytes) -> bytes:
    """The 20-byte address of the public key belonging to a private key."""
    point = _mul(_scalar(secret), _G)
    assert point is not None
    return _point_address(point)


def _nonces(d: int, message_hash: bytes) -> Iterator[int]:
    """Deterministic nonces as in RFC 6979 with HMAC-SHA256."""

    def mac(key: bytes, data: bytes) -> bytes:
        return hmac.new(key, data, hashlib.sha256).digest()

    x = d.to_bytes(32, "big")
    h = (int.from_bytes(message_hash, "big") % _N).to_bytes(32, "big")
    v = b"\x01" * 32
    k = b"\x00" * 32
    k = mac(k, v + b"\x00" + x + h)
    v = mac(k, v)
    k = mac(k, v + b"\x01" + x + h)
    v = mac(k, v)
    while True:
        v = mac(k, v)
        candidate = int.from_bytes(v, "big")
        if 1 <= candidate < _N:
            yield candidate
        k = mac(k, v + b"\x00")
        v = mac(k, v)


def sign_recoverable(secret: bytes, message_hash: bytes) -> bytes:
    """Sign a 32-byte hash; returns r (32) | s (32) | recovery id (1), low-s form."""
    d = _scalar(secret)
    z = _check_hash(message_hash)
    for k in _nonces(d, message_hash):
        point = _mul(k, _G)
        assert point is not None
        r = point[0] % _N
        if r == 0:
            continue
        s = pow(k, -1, _N) * (z + r * d) % _N
        if s == 0:
            continue
        if point[0] >= _N:
            continue
        recovery_id = point[1] & 1
        if s > _N // 2:
            s = _N - s
            recovery_id ^= 1
        return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([recovery_id])
    raise AssertionError("nonce generator is infinite")


def _parity(v: int) -> int:
    if v in (0, 1):
        return v
    if v in (27, 28):
        return v - 27
    if v >= 35:
        return (v - 35) % 2
    raise ValueError(f"invalid signature recovery value: {v}")


def recover_address(message_hash: bytes, signature: bytes) -> bytes:
    """Recover the signer's 20-byte address from a 65-byte r|s|v signature."""
    if len(signature) != 65:
        raise ValueError(f"signature must be 65 bytes, got {len(signature)}")
    z = _check_hash(message_hash) % _N
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    parity = _parity(signature[64])
    if not (1 <= r < _N and 1 <= s < _N):
        raise ValueError("signature scalar out of range")
    alpha = (pow(r, 3, _P) + 7) % _P
    y = pow(alpha, (_P + 1) // 4, _P)
    if y * y % _P != alpha:
        raise ValueError("signature r is not a curve point")
    if y & 1 != parity:
        y = _P - y
    r_inv = pow(r, -1, _N)
    public = _add(_mul(s * r_inv % _N, (r, y)), _mul(-z * r_inv % _N, _G))
    if public is None:
        raise ValueError("recovered point is at infinity")
    return _point_address(public)