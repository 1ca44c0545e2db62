"""
Schnorr Digital Signature Scheme Implementation (BIP340)

Implements BIP340-style Schnorr signatures over secp256k1:
- Tagged hashes for domain separation
- Signing with auxiliary randomness: s = k + e*d (mod n)
- Verification against x-only public keys: R = sG - eP

Security based on the Discrete Logarithm Problem.
NO external crypto libraries used. Only hashlib.
"""

import hashlib

from .ecc import ECC, G, N, P, lift_x
from .errors import InvalidPublicKeyEncoding, NonceGenerationFailure
from .log import CryptoLogger
from .utils import bytes_to_int, int_to_bytes, secure_random_bytes

logger = CryptoLogger.get_logger(__name__)


TAG_AUX = "BIP0340/aux"
TAG_NONCE = "BIP0340/nonce"
TAG_CHALLENGE = "BIP0340/challenge"

SIGNATURE_SIZE = 64
AUX_SIZE = 32


def tagged_hash(tag: str, *data: bytes) -> bytes:
    """
    Domain-separated hash.

        tagged_hash(tag, x) = SHA256(SHA256(tag) || SHA256(tag) || x)

    Args:
        tag: ASCII tag, e.g. "BIP0340/challenge"
        *data: Byte strings concatenated as the payload

    Returns:
        32-byte digest
    """
    tag_hash = hashlib.sha256(tag.encode()).digest()
    h = hashlib.sha256()
    h.update(tag_hash)
    h.update(tag_hash)
    for chunk in data:
        h.update(chunk)
    return h.digest()


class Schnorr:
    """
    BIP340 Schnorr Digital Signature Scheme over secp256k1.

    Provides:
    - Key generation
    - Message-hash signing (64-byte signatures)
    - Signature verification (never raises)

    Usage:
        schnorr = Schnorr()
        private_key, public_key = schnorr.generate_keypair()
        signature = schnorr.sign(message_hash, private_key)
        valid = schnorr.verify(signature, message_hash, public_key.x_only())
    """

    def __init__(self):
        self.ecc = ECC()

    def generate_keypair(self) -> tuple:
        """
        Generate a Schnorr key pair.

        Returns:
            (private_key, public_key) tuple where:
                - private_key is an integer
                - public_key is an AffinePoint
        """
        return self.ecc.generate_keypair()

    def _challenge(self, r_bytes: bytes, p_bytes: bytes, message: bytes) -> int:
        """
        Compute the challenge e = H_challenge(R.x || P.x || m) mod n.

        This is the Fiat-Shamir heuristic that makes the signature
        non-interactive.
        """
        return bytes_to_int(tagged_hash(TAG_CHALLENGE, r_bytes, p_bytes, message)) % N

    def sign(self, message_hash: bytes, private_key: int, aux_rand: bytes = None) -> bytes:
        """
        Create a BIP340 Schnorr signature.

        Algorithm:
        1. P = dG; d' = d if P.y is even, else n - d
        2. t = d' XOR H_aux(a)            (a = 32 random bytes)
        3. k' = H_nonce(t || P.x || m) mod n
        4. R = k'G; k = k' if R.y is even, else n - k'
        5. e = H_challenge(R.x || P.x || m) mod n
        6. s = (k + e * d') mod n
        7. Return R.x || s

        Args:
            message_hash: Message digest to sign (normally 32 bytes)
            private_key: Signer's private key (integer)
            aux_rand: 32 bytes of auxiliary randomness (random if None)

        Returns:
            64-byte signature

        Raises:
            InvalidPrivateKey: private key out of range
            NonceGenerationFailure: derived nonce is zero
        """
        pub = self.ecc.public_point(private_key)
        d = private_key if pub.has_even_y else N - private_key

        if aux_rand is None:
            aux_rand = secure_random_bytes(AUX_SIZE)
        elif len(aux_rand) != AUX_SIZE:
            raise ValueError(f"aux_rand must be exactly {AUX_SIZE} bytes")

        p_bytes = pub.x_only()
        t = d ^ bytes_to_int(tagged_hash(TAG_AUX, aux_rand))
        rand = tagged_hash(TAG_NONCE, int_to_bytes(t), p_bytes, message_hash)
        k0 = bytes_to_int(rand) % N
        if k0 == 0:
            raise NonceGenerationFailure()

        R = G.multiply(k0)
        k = k0 if R.has_even_y else N - k0

        r_bytes = R.x_only()
        e = self._challenge(r_bytes, p_bytes, message_hash)
        s = (k + e * d) % N

        return r_bytes + int_to_bytes(s)

    def verify(self, signature: bytes, message_hash: bytes, public_key: bytes) -> bool:
        """
        Verify a BIP340 Schnorr signature.

        Algorithm:
        1. Parse r, s; reject if r >= p or s >= n
        2. P = lift_x(public key x)
        3. e = H_challenge(r || P.x || m) mod n
        4. R = sG - eP
        5. Accept iff R != O, R.y is even and R.x == r

        Never raises: malformed input of any kind yields False.

        Args:
            signature: 64-byte signature
            message_hash: Message digest that was signed
            public_key: 32-byte x-only key (a 33-byte compressed key is
                also accepted; only its x-coordinate is used)

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            return self._verify(signature, message_hash, public_key)
        except Exception as exc:
            logger.debug("Schnorr verification rejected input: %s", exc)
            return False

    def _verify(self, signature: bytes, message_hash: bytes, public_key: bytes) -> bool:
        if len(signature) != SIGNATURE_SIZE:
            return False

        r = bytes_to_int(signature[:32])
        s = bytes_to_int(signature[32:])
        if r >= P or s >= N:
            return False

        pub_point = lift_x(self._public_key_x(public_key))
        if pub_point is None:
            return False

        e = self._challenge(signature[:32], pub_point.x_only(), message_hash)

        R = G.multiply(s).add(pub_point.multiply(e).negate())

        if R.infinity or not R.has_even_y or R.x != r:
            return False
        return True

    @staticmethod
    def _public_key_x(public_key: bytes) -> int:
        """Extract the x-coordinate from an x-only or compressed key."""
        if len(public_key) == 32:
            return bytes_to_int(public_key)
        if len(public_key) == 33 and public_key[0] in (0x02, 0x03):
            return bytes_to_int(public_key[1:])
        raise InvalidPublicKeyEncoding(len(public_key))
