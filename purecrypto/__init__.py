"""
purecrypto - Pure-Python secp256k1 / Schnorr / AES-256 primitives

This package provides low-level cryptographic primitives:
- secp256k1 point arithmetic and ECDH (x-only shared secret)
- BIP340 Schnorr Digital Signatures
- AES-256 symmetric cipher (CBC mode, PKCS#7 padding)

NO HIGH-LEVEL CRYPTO LIBRARIES USED.
Only hashlib and secrets are imported.
"""

from .aes import AES256
from .ecc import ECC, ECPoint, AffinePoint, PointAtInfinity, INFINITY, G, SECP256K1, lift_x
from .schnorr import Schnorr, tagged_hash
from .errors import (
    CryptoError,
    ErrorCode,
    InvalidPrivateKey,
    InvalidPublicKeyEncoding,
    PointNotOnCurve,
    NoModularInverse,
    InvalidSharedSecret,
    NonceGenerationFailure,
    KeyLengthError,
    IVLengthError,
    CiphertextLengthError,
    PaddingError,
    InvalidHexString,
    InvalidMessageFormat,
)
from .facade import (
    random_private_key,
    sha256,
    bytes_to_hex,
    hex_to_bytes,
    get_public_key,
    x_only_public_key,
    get_shared_secret,
    schnorr_sign,
    schnorr_verify,
    aes_encrypt,
    aes_decrypt,
)

__version__ = '1.0.0'

__all__ = [
    'AES256', 'ECC', 'ECPoint', 'AffinePoint', 'PointAtInfinity', 'INFINITY', 'G',
    'SECP256K1', 'lift_x', 'Schnorr', 'tagged_hash',
    'CryptoError', 'ErrorCode', 'InvalidPrivateKey', 'InvalidPublicKeyEncoding',
    'PointNotOnCurve', 'NoModularInverse', 'InvalidSharedSecret',
    'NonceGenerationFailure', 'KeyLengthError', 'IVLengthError',
    'CiphertextLengthError', 'PaddingError', 'InvalidHexString', 'InvalidMessageFormat',
    'random_private_key', 'sha256', 'bytes_to_hex', 'hex_to_bytes',
    'get_public_key', 'x_only_public_key', 'get_shared_secret',
    'schnorr_sign', 'schnorr_verify', 'aes_encrypt', 'aes_decrypt',
]
