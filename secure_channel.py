"""
Secure Shared-Secret Messaging

Integrates all cryptographic components:
- ECDH over secp256k1 for key agreement
- AES-256-CBC for symmetric encryption
- BIP340 Schnorr signatures for authenticity

This is the main high-level API for exchanging encrypted messages
between two key holders.
"""

import base64
import binascii

from purecrypto import AES256, facade
from purecrypto.errors import InvalidMessageFormat
from purecrypto.log import CryptoLogger

logger = CryptoLogger.get_logger("secure_channel")

IV_SEPARATOR = "?iv="


class SecureChannel:
    """
    Shared-secret message exchange.

    Provides a complete workflow for:
    1. ECDH key agreement between two parties
    2. Use of the 32-byte shared x-coordinate as the AES-256 key
    3. Encryption/decryption of UTF-8 text using CBC mode
    4. Schnorr signatures over the SHA-256 of a message

    Usage (Sender - Alice):
        channel = SecureChannel()
        payload = channel.encrypt_to_string(alice_priv_hex, bob_pub_hex, "hello")
        # Send payload to Bob

    Usage (Receiver - Bob):
        channel = SecureChannel()
        text = channel.decrypt_from_string(bob_priv_hex, alice_pub_hex, payload)
    """

    # =========================================================================
    # KEY GENERATION
    # =========================================================================

    def generate_keypair(self) -> tuple:
        """
        Generate a key pair for messaging.

        Returns:
            (private_key_hex, x_only_public_key_hex)
        """
        private_key = facade.random_private_key()
        return facade.bytes_to_hex(private_key), facade.bytes_to_hex(facade.x_only_public_key(private_key))

    def derive_shared_key(self, my_private: str, their_public: str) -> bytes:
        """
        Derive AES-256 key from ECDH shared secret.

        A 32-byte (x-only) peer key is treated as compressed with even y.

        Args:
            my_private: My private key (hex)
            their_public: Other party's public key (hex, x-only or encoded)

        Returns:
            32-byte AES key
        """
        if not my_private or not their_public:
            raise ValueError("Missing keys for shared secret derivation")

        their_bytes = facade.ensure_bytes(their_public)
        if len(their_bytes) == 32:
            their_bytes = b'\x02' + their_bytes

        return facade.get_shared_secret(my_private, their_bytes)

    # =========================================================================
    # ENCRYPTION WORKFLOW
    # =========================================================================

    def encrypt(self, my_private: str, their_public: str, plaintext: str) -> dict:
        """
        Encrypt a text message for the other party.

        Workflow:
        1. Derive AES key from ECDH
        2. Generate random IV
        3. Encrypt UTF-8 text with AES-256-CBC

        Returns:
            {'ciphertext': base64, 'iv': base64}
        """
        key = self.derive_shared_key(my_private, their_public)
        iv = AES256.generate_iv()
        payload = ("" if plaintext is None else str(plaintext)).encode('utf-8')
        ciphertext = AES256(key).encrypt_cbc(payload, iv)

        return {
            'ciphertext': base64.b64encode(ciphertext).decode('ascii'),
            'iv': base64.b64encode(iv).decode('ascii'),
        }

    def decrypt(self, my_private: str, their_public: str, ciphertext_b64: str, iv_b64: str) -> str:
        """
        Decrypt a text message from the other party.

        Raises:
            InvalidMessageFormat: ciphertext or IV is not valid base64
            CryptoError: wrong lengths or key problems
        """
        key = self.derive_shared_key(my_private, their_public)
        try:
            ciphertext = base64.b64decode(ciphertext_b64, validate=True)
            iv = base64.b64decode(iv_b64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidMessageFormat(f"Invalid base64 payload: {exc}") from exc

        plaintext = AES256(key).decrypt_cbc(ciphertext, iv)
        return plaintext.decode('utf-8')

    def encrypt_to_string(self, my_private: str, their_public: str, plaintext: str) -> str:
        """Encrypt into the single-string form '<ciphertext>?iv=<iv>'."""
        result = self.encrypt(my_private, their_public, plaintext)
        return f"{result['ciphertext']}{IV_SEPARATOR}{result['iv']}"

    def decrypt_from_string(self, my_private: str, their_public: str, payload: str) -> str:
        """
        Decrypt a '<ciphertext>?iv=<iv>' string.

        Raises:
            InvalidMessageFormat: payload is not a str or lacks either part
        """
        if not isinstance(payload, str):
            raise InvalidMessageFormat("Ciphertext payload must be a string")

        ciphertext_b64, sep, iv_b64 = payload.partition(IV_SEPARATOR)
        if not sep or not ciphertext_b64 or not iv_b64:
            raise InvalidMessageFormat("Ciphertext payload missing iv component")

        return self.decrypt(my_private, their_public, ciphertext_b64, iv_b64)

    # =========================================================================
    # SIGNATURES
    # =========================================================================

    def sign_message(self, my_private: str, message: str) -> str:
        """Schnorr-sign SHA-256(message) and return the signature as hex."""
        digest = facade.sha256(message.encode('utf-8'))
        return facade.bytes_to_hex(facade.schnorr_sign(digest, my_private))

    def verify_message(self, signature: str, message: str, their_public: str) -> bool:
        """Check a hex signature produced by sign_message."""
        digest = facade.sha256(message.encode('utf-8'))
        valid = facade.schnorr_verify(signature, digest, their_public)
        if not valid:
            logger.debug("Message signature rejected")
        return valid
