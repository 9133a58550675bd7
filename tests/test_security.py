"""Tests for password hashing and currency formatting helpers."""

from app.security import hash_password, verify_password
from app.utils import format_currency


class TestPasswords:
    """Tests for bcrypt hashing."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("123456")
        assert hashed != "123456"
        assert hashed.startswith("$2b$10$")

    def test_hash_is_salted(self):
        assert hash_password("123456") != hash_password("123456")

    def test_verify(self):
        hashed = hash_password("secret", rounds=4)
        assert verify_password("secret", hashed)
        assert not verify_password("Secret", hashed)

    def test_verify_rejects_non_bcrypt_value(self):
        assert not verify_password("plain", "plain")


class TestFormatCurrency:
    """Tests for cents-to-dollars formatting."""

    def test_small_amount(self):
        assert format_currency(666) == "$6.66"

    def test_thousands_separator(self):
        assert format_currency(142116) == "$1,421.16"
        assert format_currency(123456789) == "$1,234,567.89"

    def test_zero(self):
        assert format_currency(0) == "$0.00"
