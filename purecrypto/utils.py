# Cryptographic Utilities
# Allowed imports only: hashlib, secrets

import secrets
import hashlib

from .errors import NoModularInverse


def bytes_to_int(b: bytes) -> int:
    """Convert bytes to integer (big-endian)."""
    return int.from_bytes(b, 'big')


def int_to_bytes(n: int, length: int = 32) -> bytes:
    """Convert integer to bytes (big-endian)."""
    return n.to_bytes(length, 'big')


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    return bytes(x ^ y for x, y in zip(a, b))


def sha256(data: bytes) -> bytes:
    """Single SHA-256 digest."""
    return hashlib.sha256(data).digest()


# =============================================================================
# MODULAR ARITHMETIC
# =============================================================================

def mod(a: int, m: int) -> int:
    """Mathematical modulo: result is always in [0, m-1]."""
    return ((a % m) + m) % m


def extended_gcd(a: int, b: int) -> tuple:
    """
    Extended Euclidean Algorithm.
    Returns (gcd, x, y) such that a*x + b*y = gcd.
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t
    return old_r, old_s, old_t


def mod_inverse(a: int, m: int) -> int:
    """
    Compute modular multiplicative inverse of a modulo m.
    Uses Extended Euclidean Algorithm.

    Raises:
        NoModularInverse: if gcd(a, m) != 1 (e.g. a == 0)
    """
    g, x, _ = extended_gcd(mod(a, m), m)
    if g != 1:
        raise NoModularInverse(g)
    return mod(x, m)


def mod_pow(base: int, exp: int, m: int) -> int:
    """
    Modular exponentiation by square-and-multiply.

    Processes the exponent from the least significant bit.
    """
    result = 1
    base = mod(base, m)
    while exp > 0:
        if exp & 1:
            result = (result * base) % m
        exp >>= 1
        base = (base * base) % m
    return result


# =============================================================================
# RANDOMNESS
# =============================================================================

def secure_random_bytes(n: int) -> bytes:
    """Generate n cryptographically secure random bytes."""
    return secrets.token_bytes(n)
