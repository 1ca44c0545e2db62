import pytest

from purecrypto.errors import CryptoError, InvalidMessageFormat
from secure_channel import SecureChannel


@pytest.fixture(scope="module")
def channel():
    return SecureChannel()


@pytest.fixture(scope="module")
def alice(channel):
    return channel.generate_keypair()


@pytest.fixture(scope="module")
def bob(channel):
    return channel.generate_keypair()


class TestKeyAgreement:
    def test_keypair_format(self, alice):
        private_hex, public_hex = alice
        assert len(private_hex) == 64
        assert len(public_hex) == 64

    def test_shared_key_symmetric(self, channel, alice, bob):
        key_ab = channel.derive_shared_key(alice[0], bob[1])
        key_ba = channel.derive_shared_key(bob[0], alice[1])
        assert key_ab == key_ba
        assert len(key_ab) == 32

    def test_missing_keys(self, channel, alice):
        with pytest.raises(ValueError):
            channel.derive_shared_key("", alice[1])
        with pytest.raises(ValueError):
            channel.derive_shared_key(alice[0], None)


class TestMessaging:
    def test_roundtrip(self, channel, alice, bob):
        result = channel.encrypt(alice[0], bob[1], "hello bob")
        assert set(result) == {'ciphertext', 'iv'}
        text = channel.decrypt(bob[0], alice[1], result['ciphertext'], result['iv'])
        assert text == "hello bob"

    def test_string_roundtrip(self, channel, alice, bob):
        payload = channel.encrypt_to_string(alice[0], bob[1], "héllo wörld")
        assert "?iv=" in payload
        assert channel.decrypt_from_string(bob[0], alice[1], payload) == "héllo wörld"

    def test_empty_message(self, channel, alice, bob):
        payload = channel.encrypt_to_string(alice[0], bob[1], None)
        assert channel.decrypt_from_string(bob[0], alice[1], payload) == ""

    def test_fresh_iv_per_message(self, channel, alice, bob):
        first = channel.encrypt_to_string(alice[0], bob[1], "same")
        second = channel.encrypt_to_string(alice[0], bob[1], "same")
        assert first != second

    @pytest.mark.parametrize("payload", ["no-separator", "?iv=abc", "abc?iv=", b"bytes?iv=x"])
    def test_malformed_payload(self, channel, alice, bob, payload):
        with pytest.raises(InvalidMessageFormat):
            channel.decrypt_from_string(bob[0], alice[1], payload)

    def test_bad_base64(self, channel, alice, bob):
        with pytest.raises(InvalidMessageFormat):
            channel.decrypt(bob[0], alice[1], "!!!", "AAAAAAAAAAAAAAAAAAAAAA==")

    def test_truncated_ciphertext(self, channel, alice, bob):
        result = channel.encrypt(alice[0], bob[1], "hello")
        with pytest.raises(CryptoError):
            channel.decrypt(bob[0], alice[1], "AAAA", result['iv'])


class TestSignatures:
    def test_sign_and_verify(self, channel, alice):
        signature = channel.sign_message(alice[0], "attested")
        assert len(signature) == 128
        assert channel.verify_message(signature, "attested", alice[1])

    def test_reject_other_message(self, channel, alice):
        signature = channel.sign_message(alice[0], "attested")
        assert not channel.verify_message(signature, "altered", alice[1])

    def test_reject_other_key(self, channel, alice, bob):
        signature = channel.sign_message(alice[0], "attested")
        assert not channel.verify_message(signature, "attested", bob[1])
