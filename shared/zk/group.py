"""
Group Arithmetic
================

Prime-order subgroup of edwards25519 on top of libsodium (PyNaCl).

Points are handled as 32-byte compressed encodings, scalars as Python ints
reduced modulo the group order. Anything decoded from the wire must be a
canonical encoding of a main-subgroup point; small-order and off-subgroup
points are rejected before they reach libsodium.

Version: 1.0.0
"""

import hashlib
import secrets
from collections.abc import Iterable, Sequence

from nacl import bindings

from shared.zk.exceptions import ProofDecodeError


# Order of the edwards25519 prime subgroup (cofactor 8 is never exposed)
GROUP_ORDER = 2**252 + 27742317777372353535851937790883648493

POINT_BYTES = 32
SCALAR_BYTES = 32

BASEPOINT = bytes.fromhex(
    "5866666666666666666666666666666666666666666666666666666666666666"
)
IDENTITY = b"\x01" + bytes(31)


# ============================================================================
# Scalars
# ============================================================================


def scalar_to_bytes(value: int) -> bytes:
    """Encode a scalar as 32 little-endian bytes, reduced mod the group order."""
    return (value % GROUP_ORDER).to_bytes(SCALAR_BYTES, "little")


def scalar_from_bytes(data: bytes) -> int:
    """
    Decode a canonical 32-byte scalar.

    Raises:
        ProofDecodeError: If the length is wrong or the value is not reduced
    """
    if len(data) != SCALAR_BYTES:
        raise ProofDecodeError(f"Scalar must be {SCALAR_BYTES} bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    if value >= GROUP_ORDER:
        raise ProofDecodeError("Scalar is not canonically reduced")
    return value


def scalar_from_wide(data: bytes) -> int:
    """Reduce a wide (64-byte) digest to a scalar with negligible bias."""
    return int.from_bytes(data, "little") % GROUP_ORDER


def random_scalar() -> int:
    """Draw a uniformly random scalar from the OS CSPRNG."""
    return scalar_from_wide(secrets.token_bytes(64))


def invert(value: int) -> int:
    """Multiplicative inverse mod the group order."""
    value %= GROUP_ORDER
    if value == 0:
        raise ZeroDivisionError("Zero scalar has no inverse")
    return pow(value, -1, GROUP_ORDER)


def inner_product(a: Sequence[int], b: Sequence[int]) -> int:
    """<a, b> mod the group order."""
    if len(a) != len(b):
        raise ValueError("Inner product of vectors with different lengths")
    return sum(x * y for x, y in zip(a, b)) % GROUP_ORDER


def powers(base: int, count: int) -> list[int]:
    """[1, base, base^2, ..., base^(count-1)] mod the group order."""
    result = []
    current = 1
    for _ in range(count):
        result.append(current)
        current = current * base % GROUP_ORDER
    return result


# ============================================================================
# Points
# ============================================================================


def is_valid_point(data: bytes) -> bool:
    """Check for a canonical main-subgroup encoding (identity included)."""
    if not isinstance(data, bytes) or len(data) != POINT_BYTES:
        return False
    if data == IDENTITY:
        return True
    return bindings.crypto_core_ed25519_is_valid_point(data)


def decode_point(data: bytes) -> bytes:
    """
    Validate a point read from the wire.

    Raises:
        ProofDecodeError: If the bytes are not a valid subgroup element
    """
    if not is_valid_point(data):
        raise ProofDecodeError("Invalid group element encoding")
    return bytes(data)


def add(p: bytes, q: bytes) -> bytes:
    """Point addition."""
    if p == IDENTITY:
        return q
    if q == IDENTITY:
        return p
    return bindings.crypto_core_ed25519_add(p, q)


def mul(scalar: int, point: bytes) -> bytes:
    """Scalar multiplication without clamping."""
    scalar %= GROUP_ORDER
    if scalar == 0 or point == IDENTITY:
        return IDENTITY
    return bindings.crypto_scalarmult_ed25519_noclamp(scalar_to_bytes(scalar), point)


def multiscalar_mul(scalars: Iterable[int], points: Iterable[bytes]) -> bytes:
    """Sum of scalar_i * point_i."""
    acc = IDENTITY
    for scalar, point in zip(scalars, points, strict=True):
        acc = add(acc, mul(scalar, point))
    return acc


def hash_to_point(*parts: bytes) -> bytes:
    """
    Derive a point with no known discrete log relation to any other.

    Parts are length-prefixed before hashing so distinct inputs never
    collide, then mapped with Elligator 2 and cofactor clearing.
    """
    h = hashlib.sha3_512()
    for part in parts:
        h.update(len(part).to_bytes(4, "big"))
        h.update(part)
    return bindings.crypto_core_ed25519_from_uniform(h.digest()[:POINT_BYTES])
