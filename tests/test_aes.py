import pytest

from purecrypto.aes import AES256, INV_SBOX, RCON, SBOX, decrypt, encrypt, expand_key, gmul
from purecrypto.errors import (
    CiphertextLengthError,
    IVLengthError,
    KeyLengthError,
    PaddingError,
)
from purecrypto.utils import secure_random_bytes

# FIPS 197 Appendix C.3
FIPS_KEY = bytes.fromhex("000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f")
FIPS_PLAINTEXT = bytes.fromhex("00112233445566778899aabbccddeeff")
FIPS_CIPHERTEXT = bytes.fromhex("8ea2b7ca516745bfeafc49904b496089")

# NIST SP 800-38A F.2.5 CBC-AES256.Encrypt
SP800_KEY = bytes.fromhex("603deb1015ca71be2b73aef0857d77811f352c073b6108d72d9810a30914dff4")
SP800_IV = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
SP800_PLAINTEXT = bytes.fromhex(
    "6bc1bee22e409f96e93d7e117393172a"
    "ae2d8a571e03ac9c9eb76fac45af8e51"
    "30c81c46a35ce411e5fbc1191a0a52ef"
    "f69f2445df4f9b17ad2b417be66c3710"
)
SP800_CIPHERTEXT = bytes.fromhex(
    "f58c4c04d6e5f1ba779eabfb5f7bfbd6"
    "9cfc4e967edb808d679f777bc6702c7d"
    "39f23369a9d9bacfa530e26304231461"
    "b2eb05e2c39be9fcda6c19078c6a9d1b"
)


class TestTables:
    def test_sbox_known_entries(self):
        assert SBOX[0x00] == 0x63
        assert SBOX[0x53] == 0xED
        assert SBOX[0xFF] == 0x16

    def test_inverse_sbox(self):
        assert sorted(SBOX) == list(range(256))
        for i in range(256):
            assert INV_SBOX[SBOX[i]] == i

    def test_round_constants(self):
        assert len(RCON) == 10
        assert RCON[:8] == [1 << i for i in range(8)]


class TestGaloisField:
    def test_fips_examples(self):
        assert gmul(0x57, 0x83) == 0xC1
        assert gmul(0x57, 0x13) == 0xFE

    def test_identity_and_zero(self):
        for a in (0x00, 0x01, 0x80, 0xFF):
            assert gmul(a, 1) == a
            assert gmul(a, 0) == 0

    def test_commutative(self):
        assert gmul(0x1B, 0xE4) == gmul(0xE4, 0x1B)


class TestKeySchedule:
    def test_word_count(self):
        assert len(expand_key(FIPS_KEY)) == 60

    def test_first_words_are_key(self):
        w = expand_key(SP800_KEY)
        assert w[0] == 0x603DEB10
        assert w[7] == 0x0914DFF4

    def test_first_derived_word(self):
        # RotWord, SubWord and Rcon applied to w[7]
        assert expand_key(SP800_KEY)[8] == 0x9BA35411

    def test_rejects_short_key(self):
        with pytest.raises(KeyLengthError):
            expand_key(b'\x00' * 16)


class TestRoundTransforms:
    def test_mix_columns_known_column(self):
        state = bytearray(bytes.fromhex("db135345") * 4)
        assert bytes(AES256.mix_columns(state)) == bytes.fromhex("8e4da1bc") * 4

    def test_mix_columns_inverse(self):
        state = bytearray(secure_random_bytes(16))
        assert AES256.inv_mix_columns(AES256.mix_columns(state)) == state

    def test_shift_rows_layout(self):
        state = bytearray(range(16))
        shifted = AES256.shift_rows(state)
        # Row 0 untouched, row 1 shifted by one column, etc.
        assert list(shifted) == [0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12, 1, 6, 11]
        assert AES256.inv_shift_rows(shifted) == state

    def test_sub_bytes_inverse(self):
        state = bytearray(range(16))
        assert AES256.inv_sub_bytes(AES256.sub_bytes(state)) == state

    def test_add_round_key_self_inverse(self):
        state = bytearray(range(16))
        key = bytes(range(100, 116))
        assert AES256.add_round_key(AES256.add_round_key(state, key), key) == state


class TestBlockCipher:
    def test_fips_197_known_answer(self):
        cipher = AES256(FIPS_KEY)
        assert cipher.encrypt_block(FIPS_PLAINTEXT) == FIPS_CIPHERTEXT
        assert cipher.decrypt_block(FIPS_CIPHERTEXT) == FIPS_PLAINTEXT

    def test_known_answer_through_cbc_zero_iv(self):
        ciphertext = encrypt(FIPS_PLAINTEXT, FIPS_KEY, b'\x00' * 16)
        assert ciphertext[:16] == FIPS_CIPHERTEXT

    def test_block_length_checked(self):
        with pytest.raises(ValueError):
            AES256(FIPS_KEY).encrypt_block(b'\x00' * 15)


class TestCBC:
    def test_sp800_38a_vector(self):
        ciphertext = encrypt(SP800_PLAINTEXT, SP800_KEY, SP800_IV)
        assert ciphertext[:64] == SP800_CIPHERTEXT
        assert len(ciphertext) == 80
        assert decrypt(ciphertext, SP800_KEY, SP800_IV) == SP800_PLAINTEXT

    @pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 32, 100])
    def test_roundtrip(self, length):
        key = secure_random_bytes(32)
        iv = secure_random_bytes(16)
        message = secure_random_bytes(length)
        ciphertext = encrypt(message, key, iv)
        assert len(ciphertext) % 16 == 0
        assert decrypt(ciphertext, key, iv) == message

    @pytest.mark.parametrize("length,expected", [(0, 16), (1, 16), (15, 16), (16, 32), (17, 32), (32, 48)])
    def test_always_pads(self, aes_key, aes_iv, length, expected):
        assert len(encrypt(b'\xaa' * length, aes_key, aes_iv)) == expected

    def test_full_padding_block(self, aes_key, aes_iv):
        cipher = AES256(aes_key)
        ciphertext = cipher.encrypt_cbc(b'\x01' * 16, aes_iv)
        last = cipher.decrypt_block(ciphertext[16:])
        assert bytes(a ^ b for a, b in zip(last, ciphertext[:16])) == b'\x10' * 16

    def test_chaining_depends_on_iv(self, aes_key):
        message = b'same message'
        assert encrypt(message, aes_key, b'\x00' * 16) != encrypt(message, aes_key, b'\x01' * 16)

    def test_identical_blocks_differ(self, aes_key, aes_iv):
        ciphertext = encrypt(b'A' * 32, aes_key, aes_iv)
        assert ciphertext[:16] != ciphertext[16:32]

    @pytest.mark.parametrize("key_len", [0, 16, 24, 31, 33])
    def test_key_length(self, aes_iv, key_len):
        with pytest.raises(KeyLengthError):
            encrypt(b'data', b'\x00' * key_len, aes_iv)
        with pytest.raises(KeyLengthError):
            decrypt(b'\x00' * 16, b'\x00' * key_len, aes_iv)

    @pytest.mark.parametrize("iv_len", [0, 8, 15, 17, 32])
    def test_iv_length(self, aes_key, iv_len):
        with pytest.raises(IVLengthError):
            encrypt(b'data', aes_key, b'\x00' * iv_len)
        with pytest.raises(IVLengthError):
            decrypt(b'\x00' * 16, aes_key, b'\x00' * iv_len)

    @pytest.mark.parametrize("ct_len", [1, 15, 17, 31])
    def test_ciphertext_length(self, aes_key, aes_iv, ct_len):
        with pytest.raises(CiphertextLengthError):
            decrypt(b'\x00' * ct_len, aes_key, aes_iv)

    def test_empty_ciphertext(self, aes_key, aes_iv):
        assert decrypt(b'', aes_key, aes_iv) == b''

    def test_generate_iv(self):
        iv = AES256.generate_iv()
        assert len(iv) == 16
        assert iv != AES256.generate_iv()


class TestPadding:
    def _truncated_ciphertext(self, cipher, iv):
        # First block decrypts to 'A' * 15 + b'\x02': last byte claims 2 pad
        # bytes but the byte before it is 'A'.
        return cipher.encrypt_cbc(b'A' * 15 + b'\x02', iv)[:16]

    def test_lenient_unpad_trusts_last_byte(self, aes_key, aes_iv):
        cipher = AES256(aes_key, strict_padding=False)
        ciphertext = self._truncated_ciphertext(cipher, aes_iv)
        assert cipher.decrypt_cbc(ciphertext, aes_iv) == b'A' * 14

    def test_strict_unpad_rejects_mismatch(self, aes_key, aes_iv):
        cipher = AES256(aes_key, strict_padding=True)
        ciphertext = self._truncated_ciphertext(cipher, aes_iv)
        with pytest.raises(PaddingError):
            cipher.decrypt_cbc(ciphertext, aes_iv)

    def test_strict_unpad_rejects_zero(self, aes_key):
        cipher = AES256(aes_key, strict_padding=True)
        with pytest.raises(PaddingError):
            cipher.pkcs7_unpad(b'A' * 15 + b'\x00')

    def test_strict_accepts_valid(self, aes_key, aes_iv):
        cipher = AES256(aes_key, strict_padding=True)
        assert cipher.decrypt_cbc(cipher.encrypt_cbc(b'hello', aes_iv), aes_iv) == b'hello'

    def test_pad(self):
        assert AES256.pkcs7_pad(b'') == b'\x10' * 16
        assert AES256.pkcs7_pad(b'abc') == b'abc' + b'\x0d' * 13
