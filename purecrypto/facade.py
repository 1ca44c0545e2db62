"""
High-level API

Thin boundary over the engines: accepts raw bytes or hex strings,
enforces exact buffer lengths, and converts scalars for the core.
"""

import string
from typing import Union

from . import aes
from .ecc import ECC
from .errors import InvalidHexString, InvalidPrivateKey
from .log import CryptoLogger
from .schnorr import Schnorr
from .utils import bytes_to_int
from .utils import sha256 as _sha256

logger = CryptoLogger.get_logger(__name__)

BytesLike = Union[bytes, bytearray, str]

PRIVATE_KEY_SIZE = 32

_ecc = ECC()
_schnorr = Schnorr()


# =============================================================================
# UTILS
# =============================================================================

def bytes_to_hex(data: bytes) -> str:
    """Lowercase hex encoding."""
    return bytes(data).hex()


def hex_to_bytes(value: str) -> bytes:
    """
    Decode an even-length hex string.

    Raises:
        InvalidHexString: odd length or non-hex characters
    """
    if len(value) % 2 != 0:
        raise InvalidHexString(len(value), "odd length")
    # bytes.fromhex skips whitespace
    if not all(c in string.hexdigits for c in value):
        raise InvalidHexString(len(value), "non-hex characters")
    return bytes.fromhex(value)


def ensure_bytes(value: BytesLike) -> bytes:
    """Accept bytes/bytearray as-is; decode str as hex."""
    if isinstance(value, str):
        return hex_to_bytes(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def sha256(data: BytesLike) -> bytes:
    return _sha256(ensure_bytes(data))


def random_private_key() -> bytes:
    """32 random bytes k with 0 < k < n."""
    return _ecc.random_private_key()


def _private_scalar(private_key: BytesLike) -> int:
    key = ensure_bytes(private_key)
    if len(key) != PRIVATE_KEY_SIZE:
        raise InvalidPrivateKey(f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(key)}")
    return _ecc.validate_private_key(bytes_to_int(key))


# =============================================================================
# KEYS / ECDH
# =============================================================================

def get_public_key(private_key: BytesLike, compressed: bool = True) -> bytes:
    """33-byte compressed (default) or 65-byte uncompressed public key."""
    return _ecc.derive_public_key(_private_scalar(private_key), compressed)


def x_only_public_key(private_key: BytesLike) -> bytes:
    """32-byte BIP340 public key."""
    return _ecc.public_point(_private_scalar(private_key)).x_only()


def get_shared_secret(private_key: BytesLike, public_key: BytesLike) -> bytes:
    """32-byte ECDH secret: x-coordinate of k * P."""
    return _ecc.compute_shared_secret(_private_scalar(private_key), ensure_bytes(public_key))


# =============================================================================
# SCHNORR
# =============================================================================

def schnorr_sign(message_hash: BytesLike, private_key: BytesLike, aux_rand: BytesLike = None) -> bytes:
    """64-byte BIP340 signature over a message digest."""
    aux = None if aux_rand is None else ensure_bytes(aux_rand)
    return _schnorr.sign(ensure_bytes(message_hash), _private_scalar(private_key), aux)


def schnorr_verify(signature: BytesLike, message_hash: BytesLike, public_key: BytesLike) -> bool:
    """True iff the signature is valid. Never raises."""
    try:
        sig = ensure_bytes(signature)
        msg = ensure_bytes(message_hash)
        pub = ensure_bytes(public_key)
    except (ValueError, TypeError) as exc:
        logger.debug("Schnorr verification input not decodable: %s", exc)
        return False
    return _schnorr.verify(sig, msg, pub)


# =============================================================================
# AES-256-CBC
# =============================================================================

def aes_encrypt(plaintext: Union[bytes, bytearray, str], key: BytesLike, iv: BytesLike) -> bytes:
    """
    AES-256-CBC encrypt.

    A str plaintext is encoded as UTF-8 (not hex); key and IV accept hex.
    """
    if isinstance(plaintext, str):
        data = plaintext.encode('utf-8')
    else:
        data = bytes(plaintext)
    return aes.encrypt(data, ensure_bytes(key), ensure_bytes(iv))


def aes_decrypt(ciphertext: BytesLike, key: BytesLike, iv: BytesLike) -> bytes:
    """AES-256-CBC decrypt; every argument accepts hex."""
    return aes.decrypt(ensure_bytes(ciphertext), ensure_bytes(key), ensure_bytes(iv))
