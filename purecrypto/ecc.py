"""
Elliptic Curve Cryptography Implementation

Implements:
- secp256k1 curve parameters
- ECPoint variants (point at infinity / affine point) with the group law
- Point addition, doubling, negation and scalar multiplication
- Compressed, uncompressed and x-only point encodings
- Public key derivation and ECDH shared secrets

NO external crypto libraries used. Only standard library.
"""

from .errors import (
    InvalidPrivateKey,
    InvalidPublicKeyEncoding,
    InvalidSharedSecret,
    PointNotOnCurve,
)
from .log import CryptoLogger
from .utils import (
    bytes_to_int,
    int_to_bytes,
    mod,
    mod_inverse,
    mod_pow,
    secure_random_bytes,
)

logger = CryptoLogger.get_logger(__name__)


# =============================================================================
# SECP256K1 CURVE PARAMETERS
# =============================================================================

# Parameters from SEC 2: Recommended Elliptic Curve Domain Parameters
SECP256K1 = {
    # Prime field modulus
    'p': 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,

    # Curve coefficients: y² = x³ + ax + b
    'a': 0,
    'b': 7,

    # Base point (generator) G coordinates
    'Gx': 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    'Gy': 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,

    # Order of the base point (number of points in subgroup)
    'n': 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,

    # Cofactor
    'h': 1,

    'name': 'secp256k1'
}

P = SECP256K1['p']
N = SECP256K1['n']
B = SECP256K1['b']

COMPRESSED_SIZE = 33
UNCOMPRESSED_SIZE = 65
X_ONLY_SIZE = 32


class ECPoint:
    """
    A point on secp256k1.

    Either the point at infinity (``PointAtInfinity``, the group identity)
    or a finite ``AffinePoint``. Points are immutable: every operation
    returns a new point.
    """

    infinity = False

    def is_on_curve(self) -> bool:
        raise NotImplementedError

    def double(self) -> 'ECPoint':
        raise NotImplementedError

    def add(self, other: 'ECPoint') -> 'ECPoint':
        raise NotImplementedError

    def negate(self) -> 'ECPoint':
        raise NotImplementedError

    def multiply(self, k: int) -> 'ECPoint':
        """
        Scalar multiplication using the Double-and-Add algorithm.

        Computes Q = kP, scanning k from the least significant bit:
        1. Initialize R = O, base = P
        2. While k > 0:
           a. If lowest bit is 1: R = R + base
           b. base = 2 * base
           c. k >>= 1
        3. Return R

        Args:
            k: Non-negative scalar multiplier

        Returns:
            Result point Q = kP
        """
        if k < 0:
            raise ValueError("Scalar must be non-negative")
        if k == 0:
            return INFINITY
        if k == 1:
            return self

        result = INFINITY
        base = self
        while k > 0:
            if k & 1:
                result = result.add(base)
            base = base.double()
            k >>= 1

        return result

    def __add__(self, other: 'ECPoint') -> 'ECPoint':
        return self.add(other)

    def __neg__(self) -> 'ECPoint':
        return self.negate()

    def __mul__(self, k: int) -> 'ECPoint':
        return self.multiply(k)

    __rmul__ = __mul__


class PointAtInfinity(ECPoint):
    """The identity element O."""

    infinity = True

    def is_on_curve(self) -> bool:
        return True

    def double(self) -> ECPoint:
        return self

    def add(self, other: ECPoint) -> ECPoint:
        return other

    def negate(self) -> ECPoint:
        return self

    def to_bytes(self, compressed: bool = True) -> bytes:
        raise InvalidPublicKeyEncoding(0, "point at infinity has no encoding")

    def __eq__(self, other) -> bool:
        if not isinstance(other, ECPoint):
            return NotImplemented
        return other.infinity

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return "ECPoint(infinity)"


INFINITY = PointAtInfinity()


class AffinePoint(ECPoint):
    """A finite point (x, y) with coordinates in [0, p)."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def is_on_curve(self) -> bool:
        """
        Verify that this point lies on the curve.

        Checks: y² ≡ x³ + 7 (mod p)
        """
        if not (0 <= self.x < P and 0 <= self.y < P):
            return False
        return mod(self.y * self.y, P) == mod(self.x * self.x * self.x + B, P)

    @property
    def has_even_y(self) -> bool:
        return self.y % 2 == 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, ECPoint):
            return NotImplemented
        if other.infinity:
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"ECPoint(x={hex(self.x)}, y={hex(self.y)})"

    # =========================================================================
    # GROUP LAW
    # =========================================================================

    def negate(self) -> ECPoint:
        """Return the negation of this point: -P = (x, p - y)."""
        return AffinePoint(self.x, mod(-self.y, P))

    def double(self) -> ECPoint:
        """
        Double a point on the curve (a = 0).

        R = 2P using the doubling formula:
            λ = 3x₁² / (2y₁) mod p
            x₃ = λ² - 2x₁ mod p
            y₃ = λ(x₁ - x₃) - y₁ mod p
        """
        x, y = self.x, self.y
        lam = mod(3 * x * x * mod_inverse(2 * y, P), P)
        x3 = mod(lam * lam - 2 * x, P)
        y3 = mod(lam * (x - x3) - y, P)
        return AffinePoint(x3, y3)

    def add(self, other: ECPoint) -> ECPoint:
        """
        Add two points on the curve.

        - If Q = O: return P
        - If P = Q: use doubling
        - If P = -Q (same x, different y): return O
        - Otherwise:
            λ = (y₂ - y₁) / (x₂ - x₁) mod p
            x₃ = λ² - x₁ - x₂ mod p
            y₃ = λ(x₁ - x₃) - y₁ mod p
        """
        if other.infinity:
            return self
        if self == other:
            return self.double()
        if self.x == other.x:
            return INFINITY

        dx = mod(other.x - self.x, P)
        dy = mod(other.y - self.y, P)
        lam = mod(dy * mod_inverse(dx, P), P)
        x3 = mod(lam * lam - self.x - other.x, P)
        y3 = mod(lam * (self.x - x3) - self.y, P)
        return AffinePoint(x3, y3)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_bytes(self, compressed: bool = True) -> bytes:
        """
        Serialize point.

        Compressed:   0x02/0x03 (y parity) || x (32 bytes)
        Uncompressed: 0x04 || x (32 bytes) || y (32 bytes)
        """
        if compressed:
            prefix = b'\x02' if self.has_even_y else b'\x03'
            return prefix + int_to_bytes(self.x)
        return b'\x04' + int_to_bytes(self.x) + int_to_bytes(self.y)

    def x_only(self) -> bytes:
        """32-byte x-coordinate (BIP340 public key form)."""
        return int_to_bytes(self.x)


G = AffinePoint(SECP256K1['Gx'], SECP256K1['Gy'])


def lift_x(x: int):
    """
    Find the curve point with x-coordinate x and even y.

    Since p ≡ 3 (mod 4), a square root of c is c^((p+1)/4) when one exists.

    Returns:
        AffinePoint with even y, or None if x >= p or x³ + 7 is not a
        quadratic residue mod p
    """
    if x < 0 or x >= P:
        return None

    y2 = mod(x * x * x + B, P)
    y = mod_pow(y2, (P + 1) // 4, P)
    if mod(y * y, P) != y2:
        return None

    return AffinePoint(x, y if y % 2 == 0 else P - y)


class ECC:
    """
    secp256k1 key operations.

    Provides:
    - Private key validation and generation
    - Public key derivation and encoding
    - Public key decoding (compressed / uncompressed / x-only)
    - ECDH shared secret computation

    Usage:
        ecc = ECC()
        private_key, public_key = ecc.generate_keypair()
        shared_secret = ecc.compute_shared_secret(my_private, their_public_bytes)
    """

    def __init__(self):
        self.curve = SECP256K1
        self.G = G

        # Verify generator is on curve
        if not self.G.is_on_curve():
            raise PointNotOnCurve("Generator point not on curve")

    # =========================================================================
    # PRIVATE KEYS
    # =========================================================================

    def validate_private_key(self, private_key: int) -> int:
        """
        Check that 0 < k < n.

        Raises:
            InvalidPrivateKey: if the scalar is out of range
        """
        if isinstance(private_key, bool) or not isinstance(private_key, int) or not (0 < private_key < N):
            raise InvalidPrivateKey()
        return private_key

    def random_private_key(self) -> bytes:
        """
        Draw a 32-byte private key by rejection sampling until 0 < k < n.
        """
        while True:
            candidate = secure_random_bytes(32)
            k = bytes_to_int(candidate)
            if 0 < k < N:
                return candidate

    def generate_keypair(self) -> tuple:
        """
        Generate a key pair.

        Returns:
            (private_key, public_key) tuple where:
                - private_key is an integer in [1, n-1]
                - public_key is an AffinePoint
        """
        private_key = bytes_to_int(self.random_private_key())
        return private_key, self.public_point(private_key)

    # =========================================================================
    # PUBLIC KEYS
    # =========================================================================

    def public_point(self, private_key: int) -> AffinePoint:
        """Compute Q = kG after validating k."""
        k = self.validate_private_key(private_key)
        return self.G.multiply(k)

    def derive_public_key(self, private_key: int, compressed: bool = True) -> bytes:
        """
        Derive the encoded public key for a private scalar.

        Args:
            private_key: Scalar in [1, n-1]
            compressed: 33-byte compressed form (default) or 65-byte
                uncompressed form

        Returns:
            Encoded public key bytes
        """
        return self.public_point(private_key).to_bytes(compressed)

    def decode_point(self, data: bytes) -> AffinePoint:
        """
        Deserialize a public key.

        Accepted forms:
            33 bytes, 0x02/0x03 prefix  compressed (prefix gives y parity)
            65 bytes, 0x04 prefix       uncompressed
            32 bytes                    x-only, even y

        Raises:
            InvalidPublicKeyEncoding: unknown length/prefix or x not on curve
            PointNotOnCurve: decoded point fails the curve equation
        """
        length = len(data)

        if length == COMPRESSED_SIZE and data[0] in (0x02, 0x03):
            lifted = lift_x(bytes_to_int(data[1:]))
            if lifted is None:
                raise InvalidPublicKeyEncoding(length, "x-coordinate is not on the curve")
            want_odd = data[0] == 0x03
            point = lifted.negate() if want_odd else lifted
        elif length == UNCOMPRESSED_SIZE and data[0] == 0x04:
            point = AffinePoint(bytes_to_int(data[1:33]), bytes_to_int(data[33:65]))
        elif length == X_ONLY_SIZE:
            point = lift_x(bytes_to_int(data))
            if point is None:
                raise InvalidPublicKeyEncoding(length, "x-coordinate is not on the curve")
        else:
            raise InvalidPublicKeyEncoding(length)

        if not point.is_on_curve():
            raise PointNotOnCurve()

        return point

    # =========================================================================
    # ECDH KEY EXCHANGE
    # =========================================================================

    def compute_shared_secret(self, private_key: int, other_public_key: bytes) -> bytes:
        """
        Compute ECDH shared secret.

        The shared secret is the x-coordinate of:
            S = d_A * Q_B = d_A * d_B * G

        Both parties arrive at the same point S because:
            d_A * Q_B = d_A * (d_B * G) = d_B * (d_A * G) = d_B * Q_A

        Args:
            private_key: Your private key (integer)
            other_public_key: Other party's encoded public key

        Returns:
            32-byte big-endian x-coordinate of S (not hashed)
        """
        k = self.validate_private_key(private_key)
        point = self.decode_point(other_public_key)

        # Re-check after decoding; uncompressed input carries an explicit y
        if not point.is_on_curve():
            raise PointNotOnCurve()

        shared_point = point.multiply(k)
        if shared_point.infinity:
            raise InvalidSharedSecret()

        logger.debug("ECDH shared secret computed from %d-byte public key", len(other_public_key))
        return int_to_bytes(shared_point.x)
