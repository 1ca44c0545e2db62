"""
purecrypto Error Handling

Error codes and exception classes raised by the key, signature and
cipher engines. Every error is a ValueError so callers that already
guard cryptographic input with ``except ValueError`` keep working.
"""

from enum import IntEnum
from typing import Any, Optional


class ErrorCode(IntEnum):
    """Library error codes."""

    # 1xxx - Encoding / facade errors
    INVALID_HEX_STRING = 1001
    INVALID_MESSAGE_FORMAT = 1002

    # 2xxx - Field and curve errors
    NO_MODULAR_INVERSE = 2001
    POINT_NOT_ON_CURVE = 2002
    INVALID_PUBLIC_KEY_ENCODING = 2003

    # 3xxx - Key and ECDH errors
    INVALID_PRIVATE_KEY = 3001
    INVALID_SHARED_SECRET = 3002

    # 4xxx - Signature errors
    NONCE_GENERATION_FAILURE = 4001

    # 5xxx - Cipher errors
    KEY_LENGTH = 5001
    IV_LENGTH = 5002
    CIPHERTEXT_LENGTH = 5003
    PADDING = 5004


class CryptoError(ValueError):
    """Base class for all purecrypto errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict:
        """Convert error to a plain dict (e.g. for JSON responses)."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# =============================================================================
# ENCODING
# =============================================================================

class InvalidHexString(CryptoError):
    def __init__(self, value_length: int, reason: str = "not a valid hex string"):
        super().__init__(
            ErrorCode.INVALID_HEX_STRING,
            f"Invalid hex input ({reason})",
            {"length": value_length}
        )


class InvalidMessageFormat(CryptoError):
    def __init__(self, message: str = "Malformed encrypted message"):
        super().__init__(ErrorCode.INVALID_MESSAGE_FORMAT, message)


# =============================================================================
# FIELD / CURVE
# =============================================================================

class NoModularInverse(CryptoError):
    def __init__(self, gcd: int):
        super().__init__(
            ErrorCode.NO_MODULAR_INVERSE,
            "No modular inverse exists",
            {"gcd": gcd}
        )


class PointNotOnCurve(CryptoError):
    def __init__(self, message: str = "Public key point not on curve"):
        super().__init__(ErrorCode.POINT_NOT_ON_CURVE, message)


class InvalidPublicKeyEncoding(CryptoError):
    def __init__(self, length: int, reason: str = "invalid public key format"):
        super().__init__(
            ErrorCode.INVALID_PUBLIC_KEY_ENCODING,
            f"Invalid public key: {reason}",
            {"length": length}
        )


# =============================================================================
# KEYS / ECDH
# =============================================================================

class InvalidPrivateKey(CryptoError):
    def __init__(self, message: str = "Private key must be in range [1, n-1]"):
        super().__init__(ErrorCode.INVALID_PRIVATE_KEY, message)


class InvalidSharedSecret(CryptoError):
    def __init__(self):
        super().__init__(
            ErrorCode.INVALID_SHARED_SECRET,
            "Shared secret computation resulted in point at infinity"
        )


# =============================================================================
# SIGNATURES
# =============================================================================

class NonceGenerationFailure(CryptoError):
    def __init__(self):
        super().__init__(
            ErrorCode.NONCE_GENERATION_FAILURE,
            "Failure to generate nonce"
        )


# =============================================================================
# CIPHER
# =============================================================================

class KeyLengthError(CryptoError):
    def __init__(self, got: int, expected: int = 32):
        super().__init__(
            ErrorCode.KEY_LENGTH,
            f"Key must be {expected} bytes for AES-256, got {got}",
            {"expected": expected, "got": got}
        )


class IVLengthError(CryptoError):
    def __init__(self, got: int, expected: int = 16):
        super().__init__(
            ErrorCode.IV_LENGTH,
            f"IV must be {expected} bytes, got {got}",
            {"expected": expected, "got": got}
        )


class CiphertextLengthError(CryptoError):
    def __init__(self, got: int, block_size: int = 16):
        super().__init__(
            ErrorCode.CIPHERTEXT_LENGTH,
            f"Ciphertext must be a multiple of {block_size} bytes, got {got}",
            {"block_size": block_size, "got": got}
        )


class PaddingError(CryptoError):
    def __init__(self, message: str = "Invalid PKCS#7 padding"):
        super().__init__(ErrorCode.PADDING, message)
