"""
AES-256 Cipher Implementation (CBC mode, PKCS#7 padding)

FIPS 197: Advanced Encryption Standard (AES)
NIST SP 800-38A: Recommendation for Block Cipher Modes of Operation

NO external crypto libraries used. Only standard library.
"""

from .config import CONFIG
from .errors import CiphertextLengthError, IVLengthError, KeyLengthError, PaddingError
from .log import CryptoLogger
from .utils import secure_random_bytes, xor_bytes

logger = CryptoLogger.get_logger(__name__)


# =============================================================================
# AES S-BOXES
# =============================================================================

# Forward S-box - 256 entries
SBOX = [
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16
]

# Inverse S-box, built by inverting the forward table
INV_SBOX = [0] * 256
for _i, _v in enumerate(SBOX):
    INV_SBOX[_v] = _i
del _i, _v


# =============================================================================
# ROUND CONSTANTS (Key Schedule)
# =============================================================================

RCON = [0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1B, 0x36]

NK = 8    # Key length in 32-bit words
NB = 4    # Block size in 32-bit words
NR = 14   # Rounds for a 256-bit key

MASK32 = 0xFFFFFFFF


def gmul(a: int, b: int) -> int:
    """
    Multiply two bytes in GF(2^8) modulo x^8 + x^4 + x^3 + x + 1.

    Shift-and-add, reducing with 0x1b whenever the high bit falls out.
    """
    p = 0
    for _ in range(8):
        if b & 1:
            p ^= a
        hi_bit = a & 0x80
        a = (a << 1) & 0xFF
        if hi_bit:
            a ^= 0x1B
        b >>= 1
    return p


def _sub_word(word: int) -> int:
    return (
        (SBOX[(word >> 24) & 0xFF] << 24) |
        (SBOX[(word >> 16) & 0xFF] << 16) |
        (SBOX[(word >> 8) & 0xFF] << 8) |
        SBOX[word & 0xFF]
    )


def _rot_word(word: int) -> int:
    return ((word << 8) | (word >> 24)) & MASK32


def expand_key(key: bytes) -> list:
    """
    AES-256 key expansion.

    Produces NB * (NR + 1) = 60 words:
    - w[0..7] are the key itself
    - every 8th word: SubWord(RotWord(temp)) XOR Rcon
    - every word at offset 4 within a group of 8: SubWord(temp)
    - w[i] = w[i - 8] XOR temp

    Args:
        key: 32-byte key

    Returns:
        list of 60 32-bit integers
    """
    if len(key) != 4 * NK:
        raise KeyLengthError(len(key), 4 * NK)

    w = [0] * (NB * (NR + 1))
    for i in range(NK):
        w[i] = int.from_bytes(key[4 * i:4 * i + 4], 'big')

    for i in range(NK, NB * (NR + 1)):
        temp = w[i - 1]
        if i % NK == 0:
            temp = _sub_word(_rot_word(temp)) ^ (RCON[i // NK - 1] << 24)
        elif i % NK == 4:
            temp = _sub_word(temp)
        w[i] = w[i - NK] ^ temp

    return w


class AES256:
    """
    AES-256 block cipher with CBC mode support.

    The state is a 16-byte column-major 4x4 matrix: byte (row r, column c)
    lives at index r + 4c. Each block operation works on its own bytearray.

    Usage:
        cipher = AES256(key_bytes)          # 32-byte key
        ciphertext = cipher.encrypt_cbc(plaintext, iv)
        plaintext = cipher.decrypt_cbc(ciphertext, iv)
    """

    BLOCK_SIZE = 16  # 128 bits
    KEY_SIZE = 32    # 256 bits
    NUM_ROUNDS = NR

    def __init__(self, key: bytes, strict_padding: bool = None):
        """
        Initialize AES-256 with a 256-bit key.

        Args:
            key: 32-byte key material
            strict_padding: Validate every PKCS#7 pad byte on decrypt
                (defaults to CONFIG.strict_padding)
        """
        if len(key) != self.KEY_SIZE:
            raise KeyLengthError(len(key), self.KEY_SIZE)

        self._words = expand_key(key)
        self._round_keys = [self._round_key(r) for r in range(NR + 1)]
        self.strict_padding = CONFIG.strict_padding if strict_padding is None else strict_padding

    # =========================================================================
    # KEY SCHEDULE
    # =========================================================================

    def _round_key(self, round_index: int) -> bytes:
        """16 bytes of key material for one round (words 4r..4r+3)."""
        return b''.join(
            self._words[round_index * NB + i].to_bytes(4, 'big') for i in range(NB)
        )

    # =========================================================================
    # ROUND TRANSFORMS
    # =========================================================================

    @staticmethod
    def sub_bytes(state: bytearray) -> bytearray:
        return bytearray(SBOX[b] for b in state)

    @staticmethod
    def inv_sub_bytes(state: bytearray) -> bytearray:
        return bytearray(INV_SBOX[b] for b in state)

    @staticmethod
    def shift_rows(state: bytearray) -> bytearray:
        """Row r is rotated left by r positions."""
        out = bytearray(16)
        for r in range(4):
            for c in range(4):
                out[r + 4 * c] = state[r + 4 * ((c + r) % 4)]
        return out

    @staticmethod
    def inv_shift_rows(state: bytearray) -> bytearray:
        """Row r is rotated right by r positions."""
        out = bytearray(16)
        for r in range(4):
            for c in range(4):
                out[r + 4 * ((c + r) % 4)] = state[r + 4 * c]
        return out

    @staticmethod
    def mix_columns(state: bytearray) -> bytearray:
        """
        Each column is multiplied by the fixed polynomial
        {03}x^3 + {01}x^2 + {01}x + {02}.
        """
        out = bytearray(16)
        for c in range(4):
            s0, s1, s2, s3 = state[4 * c:4 * c + 4]
            out[4 * c] = gmul(s0, 2) ^ gmul(s1, 3) ^ s2 ^ s3
            out[4 * c + 1] = s0 ^ gmul(s1, 2) ^ gmul(s2, 3) ^ s3
            out[4 * c + 2] = s0 ^ s1 ^ gmul(s2, 2) ^ gmul(s3, 3)
            out[4 * c + 3] = gmul(s0, 3) ^ s1 ^ s2 ^ gmul(s3, 2)
        return out

    @staticmethod
    def inv_mix_columns(state: bytearray) -> bytearray:
        """Inverse polynomial {0b}x^3 + {0d}x^2 + {09}x + {0e}."""
        out = bytearray(16)
        for c in range(4):
            s0, s1, s2, s3 = state[4 * c:4 * c + 4]
            out[4 * c] = gmul(s0, 14) ^ gmul(s1, 11) ^ gmul(s2, 13) ^ gmul(s3, 9)
            out[4 * c + 1] = gmul(s0, 9) ^ gmul(s1, 14) ^ gmul(s2, 11) ^ gmul(s3, 13)
            out[4 * c + 2] = gmul(s0, 13) ^ gmul(s1, 9) ^ gmul(s2, 14) ^ gmul(s3, 11)
            out[4 * c + 3] = gmul(s0, 11) ^ gmul(s1, 13) ^ gmul(s2, 9) ^ gmul(s3, 14)
        return out

    @staticmethod
    def add_round_key(state: bytearray, round_key: bytes) -> bytearray:
        return bytearray(xor_bytes(state, round_key))

    # =========================================================================
    # BLOCK ENCRYPTION/DECRYPTION
    # =========================================================================

    def encrypt_block(self, block: bytes) -> bytes:
        """
        Encrypt a single 128-bit block.

        Structure for a 256-bit key (14 rounds):
        - AddRoundKey(0)
        - Rounds 1-13: SubBytes, ShiftRows, MixColumns, AddRoundKey
        - Round 14: SubBytes, ShiftRows, AddRoundKey (no MixColumns)

        Args:
            block: 16-byte plaintext block

        Returns:
            16-byte ciphertext block
        """
        if len(block) != self.BLOCK_SIZE:
            raise ValueError(f"Block must be exactly {self.BLOCK_SIZE} bytes")

        state = self.add_round_key(bytearray(block), self._round_keys[0])

        for round_index in range(1, NR):
            state = self.sub_bytes(state)
            state = self.shift_rows(state)
            state = self.mix_columns(state)
            state = self.add_round_key(state, self._round_keys[round_index])

        state = self.sub_bytes(state)
        state = self.shift_rows(state)
        state = self.add_round_key(state, self._round_keys[NR])

        return bytes(state)

    def decrypt_block(self, block: bytes) -> bytes:
        """
        Decrypt a single 128-bit block.
        Mirrors encryption with the inverse transforms, starting from
        round key 14 and ending with round key 0.

        Args:
            block: 16-byte ciphertext block

        Returns:
            16-byte plaintext block
        """
        if len(block) != self.BLOCK_SIZE:
            raise ValueError(f"Block must be exactly {self.BLOCK_SIZE} bytes")

        state = self.add_round_key(bytearray(block), self._round_keys[NR])

        for round_index in range(NR - 1, 0, -1):
            state = self.inv_shift_rows(state)
            state = self.inv_sub_bytes(state)
            state = self.add_round_key(state, self._round_keys[round_index])
            state = self.inv_mix_columns(state)

        state = self.inv_shift_rows(state)
        state = self.inv_sub_bytes(state)
        state = self.add_round_key(state, self._round_keys[0])

        return bytes(state)

    # =========================================================================
    # PKCS#7 PADDING
    # =========================================================================

    @classmethod
    def pkcs7_pad(cls, data: bytes) -> bytes:
        """
        Pad to a multiple of BLOCK_SIZE.

        Always pads: block-aligned input gets a full block of 0x10 bytes.
        """
        pad_len = cls.BLOCK_SIZE - (len(data) % cls.BLOCK_SIZE)
        return data + bytes([pad_len]) * pad_len

    def pkcs7_unpad(self, data: bytes) -> bytes:
        """
        Strip PKCS#7 padding.

        Lenient mode trusts the final byte as the pad length and truncates.
        Strict mode also checks the length range and every pad byte.
        """
        if not data:
            return data

        pad_len = data[-1]

        if self.strict_padding:
            if pad_len < 1 or pad_len > self.BLOCK_SIZE or pad_len > len(data):
                raise PaddingError(f"Invalid padding length {pad_len}")
            if data[-pad_len:] != bytes([pad_len]) * pad_len:
                raise PaddingError()

        return data[:len(data) - pad_len]

    # =========================================================================
    # CBC MODE
    # =========================================================================

    def encrypt_cbc(self, plaintext: bytes, iv: bytes) -> bytes:
        """
        Encrypt data using CBC (Cipher Block Chaining) mode.

        - C_0 = IV
        - C_i = E_K(P_i XOR C_{i-1})

        Args:
            plaintext: Data to encrypt (any length, PKCS#7 padded)
            iv: 16-byte initialization vector

        Returns:
            Ciphertext (multiple of 16 bytes, always at least one block)
        """
        if len(iv) != self.BLOCK_SIZE:
            raise IVLengthError(len(iv), self.BLOCK_SIZE)

        padded = self.pkcs7_pad(bytes(plaintext))
        ciphertext = bytearray()
        previous_block = bytes(iv)

        for i in range(0, len(padded), self.BLOCK_SIZE):
            block = xor_bytes(padded[i:i + self.BLOCK_SIZE], previous_block)
            previous_block = self.encrypt_block(block)
            ciphertext.extend(previous_block)

        logger.debug("CBC encrypt: %d blocks", len(padded) // self.BLOCK_SIZE)
        return bytes(ciphertext)

    def decrypt_cbc(self, ciphertext: bytes, iv: bytes) -> bytes:
        """
        Decrypt data using CBC mode.

        - P_i = D_K(C_i) XOR C_{i-1}, C_0 = IV

        Args:
            ciphertext: Encrypted data (multiple of 16 bytes)
            iv: 16-byte initialization vector (same as encryption)

        Returns:
            Decrypted plaintext with padding removed
        """
        if len(iv) != self.BLOCK_SIZE:
            raise IVLengthError(len(iv), self.BLOCK_SIZE)
        if len(ciphertext) % self.BLOCK_SIZE != 0:
            raise CiphertextLengthError(len(ciphertext), self.BLOCK_SIZE)

        plaintext = bytearray()
        previous_block = bytes(iv)

        for i in range(0, len(ciphertext), self.BLOCK_SIZE):
            block = bytes(ciphertext[i:i + self.BLOCK_SIZE])
            plaintext.extend(xor_bytes(self.decrypt_block(block), previous_block))
            previous_block = block

        logger.debug("CBC decrypt: %d blocks", len(ciphertext) // self.BLOCK_SIZE)
        return self.pkcs7_unpad(bytes(plaintext))

    @staticmethod
    def generate_iv() -> bytes:
        """Generate a random 128-bit IV for CBC mode."""
        return secure_random_bytes(AES256.BLOCK_SIZE)


def encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-256-CBC encrypt with PKCS#7 padding."""
    return AES256(key).encrypt_cbc(plaintext, iv)


def decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-256-CBC decrypt and strip PKCS#7 padding."""
    return AES256(key).decrypt_cbc(ciphertext, iv)
